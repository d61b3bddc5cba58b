"""
SchemaMold schema package.
Field definitions, schema loading and schema-driven validation.
"""

from .config_schema import CONFIG_SCHEMA
from .core import (
    ArrayField,
    BooleanField,
    EnumField,
    EnumOption,
    Field,
    FieldKind,
    NumberField,
    ObjectField,
    Schema,
    StringField,
)
from .loader import field_from_dict, field_to_dict, schema_from_dict
from .validation import ErrorsByPath, SchemaValidator, format_errors, is_valid, messages_for, validate_field

__all__ = [
    "CONFIG_SCHEMA",
    "ArrayField",
    "BooleanField",
    "EnumField",
    "EnumOption",
    "ErrorsByPath",
    "Field",
    "FieldKind",
    "NumberField",
    "ObjectField",
    "Schema",
    "SchemaValidator",
    "StringField",
    "field_from_dict",
    "field_to_dict",
    "format_errors",
    "is_valid",
    "messages_for",
    "schema_from_dict",
    "validate_field",
]
