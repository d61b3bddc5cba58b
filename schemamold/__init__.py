"""
SchemaMold: declarative form schemas for JSON documents.

Reads and writes values at paths inside nested JSON documents and validates
documents against a tree of typed fields, reporting messages keyed by path.

Main Features:
- Path-addressed get/set with structural sharing
- Schema-driven validation with path-keyed error messages
- Schema documents in JSON or YAML
- Command line interface for validating, editing and previewing forms

CLI Usage:
    $ schemamold validate person.schema.json person.json
    $ schemamold set person.json /age 31 --in-place
    $ python -m schemamold show person.schema.json person.json
"""

from .form import FormSession
from .paths import ABSENT, get_at_path, key_of, parse_key, set_at_path
from .schema import SchemaValidator, field_from_dict, is_valid, schema_from_dict, validate_field

# Version info
__version__ = "0.1.0"

__all__ = [
    "ABSENT",
    "FormSession",
    "SchemaValidator",
    "field_from_dict",
    "get_at_path",
    "is_valid",
    "key_of",
    "parse_key",
    "schema_from_dict",
    "set_at_path",
    "validate_field",
]
