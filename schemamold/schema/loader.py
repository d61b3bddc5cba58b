"""
Build field trees from declarative schema documents.

Schema documents use the camelCase attribute names of the form layer, for
example::

    {"kind": "object",
     "order": ["name", "age"],
     "properties": {
         "name": {"kind": "string", "required": True, "minLength": 1},
         "age": {"kind": "number", "min": 0, "max": 150}}}
"""

import logging
from collections.abc import Mapping
from typing import Any

from ..shared.errors import SchemaDefinitionError
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

logger = logging.getLogger(__name__)

_COMMON_KEYS = {"kind", "label", "note", "required"}

# document key -> dataclass attribute, per kind
_KIND_KEYS: dict[FieldKind, dict[str, str]] = {
    FieldKind.STRING: {
        "placeholder": "placeholder",
        "pattern": "pattern",
        "minLength": "min_length",
        "maxLength": "max_length",
    },
    FieldKind.NUMBER: {"min": "min", "max": "max", "step": "step"},
    FieldKind.BOOLEAN: {},
    FieldKind.ENUM: {"options": "options"},
    FieldKind.ARRAY: {"items": "items", "minItems": "min_items", "maxItems": "max_items"},
    FieldKind.OBJECT: {"properties": "properties", "order": "order"},
}

_TEXT_KEYS = {"label", "note", "placeholder", "pattern"}
_COUNT_KEYS = {"minLength", "maxLength", "minItems", "maxItems"}
_NUMBER_KEYS = {"min", "max", "step"}


def _join(where: str, name: str | int) -> str:
    return f"{where.rstrip('/')}/{name}"


def _check_scalar(where: str, key: str, value: Any) -> None:
    if key in _TEXT_KEYS and not isinstance(value, str):
        raise SchemaDefinitionError(where, f"'{key}' must be a string")
    if key in _COUNT_KEYS and (not isinstance(value, int) or isinstance(value, bool) or value < 0):
        raise SchemaDefinitionError(where, f"'{key}' must be a non-negative integer")
    if key in _NUMBER_KEYS and (not isinstance(value, int | float) or isinstance(value, bool)):
        raise SchemaDefinitionError(where, f"'{key}' must be a number")
    if key == "required" and not isinstance(value, bool):
        raise SchemaDefinitionError(where, "'required' must be true or false")


def _parse_options(where: str, raw: Any) -> list[EnumOption]:
    if not isinstance(raw, list):
        raise SchemaDefinitionError(where, "'options' must be a list")

    options = []
    for i, item in enumerate(raw):
        at = _join(_join(where, "options"), i)
        if not isinstance(item, Mapping) or "value" not in item:
            raise SchemaDefinitionError(at, "option needs a 'value'")
        if not isinstance(item["value"], str):
            raise SchemaDefinitionError(at, "option 'value' must be a string")
        label = item.get("label")
        if label is not None and not isinstance(label, str):
            raise SchemaDefinitionError(at, "option 'label' must be a string")
        options.append(EnumOption(value=item["value"], label=label))
    return options


def _parse_properties(where: str, raw: Any) -> dict[str, Field]:
    if not isinstance(raw, Mapping):
        raise SchemaDefinitionError(where, "'properties' must be a mapping")
    return {str(name): field_from_dict(child, _join(where, name)) for name, child in raw.items()}


def _parse_order(where: str, raw: Any) -> list[str]:
    if not isinstance(raw, list) or not all(isinstance(name, str) for name in raw):
        raise SchemaDefinitionError(where, "'order' must be a list of property names")
    return list(raw)


def field_from_dict(data: Any, where: str = "/") -> Field:
    """
    Build a field from its declarative description.

    ``where`` is the location inside the schema document, used only in error
    messages.

    Raises:
        SchemaDefinitionError: unknown kind, missing required attributes,
            attributes of the wrong type or attributes that do not belong to
            the kind.
    """
    if not isinstance(data, Mapping):
        raise SchemaDefinitionError(where, "field definition must be a mapping")

    raw_kind = data.get("kind")
    try:
        kind = FieldKind(raw_kind)
    except ValueError:
        valid = ", ".join(k.value for k in FieldKind)
        raise SchemaDefinitionError(where, f"unknown kind {raw_kind!r} (expected one of: {valid})") from None

    allowed = _KIND_KEYS[kind]
    unknown = [key for key in data if key not in _COMMON_KEYS and key not in allowed]
    if unknown:
        raise SchemaDefinitionError(where, f"unexpected attribute(s) for {kind.value}: {', '.join(map(str, unknown))}")

    kwargs: dict[str, Any] = {}
    for key, value in data.items():
        if key == "kind" or value is None:
            continue
        _check_scalar(where, key, value)
        if key in _COMMON_KEYS:
            kwargs[key] = value
        elif key == "options":
            kwargs["options"] = _parse_options(where, value)
        elif key == "properties":
            kwargs["properties"] = _parse_properties(where, value)
        elif key == "order":
            kwargs["order"] = _parse_order(where, value)
        elif key == "items":
            kwargs["items"] = field_from_dict(value, _join(where, "items"))
        else:
            kwargs[allowed[key]] = value

    if kind is FieldKind.STRING:
        return StringField(**kwargs)
    if kind is FieldKind.NUMBER:
        return NumberField(**kwargs)
    if kind is FieldKind.BOOLEAN:
        return BooleanField(**kwargs)
    if kind is FieldKind.ENUM:
        if "options" not in kwargs:
            raise SchemaDefinitionError(where, "enum field needs 'options'")
        return EnumField(**kwargs)
    if kind is FieldKind.ARRAY:
        if "items" not in kwargs:
            raise SchemaDefinitionError(where, "array field needs 'items'")
        return ArrayField(**kwargs)

    if "properties" not in kwargs:
        raise SchemaDefinitionError(where, "object field needs 'properties'")
    missing = [name for name in kwargs.get("order") or [] if name not in kwargs["properties"]]
    if missing:
        logger.warning("Schema %s: order lists unknown properties %s; they will be ignored", where, missing)
    return ObjectField(**kwargs)


def schema_from_dict(data: Any) -> Schema:
    """Build a schema; the root must be an object field."""
    root = field_from_dict(data)
    if not isinstance(root, ObjectField):
        raise SchemaDefinitionError("/", f"schema root must be an object field, got {root.kind.value}")
    return root


def field_to_dict(field: Field) -> dict[str, Any]:
    """Describe a field in the declarative format, leaving out unset attributes."""
    result: dict[str, Any] = {"kind": field.kind.value}
    for key in ("label", "note"):
        if getattr(field, key) is not None:
            result[key] = getattr(field, key)
    if field.required:
        result["required"] = True

    for key, attr in _KIND_KEYS[field.kind].items():
        value = getattr(field, attr)
        if value is None:
            continue
        if key == "options":
            value = [{"value": o.value} if o.label is None else {"value": o.value, "label": o.label} for o in value]
        elif key == "properties":
            value = {name: field_to_dict(child) for name, child in value.items()}
        elif key == "items":
            value = field_to_dict(value)
        elif key == "order":
            value = list(value)
        result[key] = value
    return result
