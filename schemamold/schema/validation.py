"""
Validation of JSON values against schema fields.

Validation walks the field tree and the value tree together and collects
human-readable messages keyed by path (see ``paths.key_of``). Problems with
the value are never raised; one bad child does not stop its siblings from
being checked.
"""

import logging
import math
import re
from functools import lru_cache
from typing import Any

from ..paths import ABSENT, JSON, Absent, Path, is_array, is_object, key_of
from .core import ArrayField, BooleanField, EnumField, Field, NumberField, ObjectField, StringField

logger = logging.getLogger(__name__)

ErrorsByPath = dict[str, list[str]]

REQUIRED_MESSAGE = "This field is required."


def _format_number(n: int | float) -> str:
    """Format a number the way JavaScript's ``String()`` does for common values."""
    if isinstance(n, float):
        if math.isnan(n):
            return "NaN"
        if math.isinf(n):
            return "Infinity" if n > 0 else "-Infinity"
        if n.is_integer() and abs(n) < 1e21:
            return str(int(n))
        return repr(n)
    return str(n)


def to_display_string(value: Any) -> str:
    """Coerce a JSON value to text the way the form layer does."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int | float):
        return _format_number(value)
    if isinstance(value, str):
        return value
    if is_array(value):
        # null entries become empty strings inside joined arrays
        return ",".join("" if item is None else to_display_string(item) for item in value)
    if is_object(value):
        return "[object Object]"
    return str(value)


def is_number(value: Any) -> bool:
    """Numeric JSON value; bools do not count."""
    return isinstance(value, int | float) and not isinstance(value, bool)


def is_empty(value: Any) -> bool:
    """Absent, null, ``""`` or an empty array. An empty object is not empty."""
    if value is ABSENT or value is None:
        return True
    if isinstance(value, str):
        return len(value) == 0
    if is_array(value):
        return len(value) == 0
    return False


@lru_cache(maxsize=256)
def _compile_pattern(pattern: str) -> re.Pattern[str] | None:
    try:
        return re.compile(pattern)
    except re.error as e:
        logger.warning("Pattern %r does not compile (%s); values will be reported as invalid format", pattern, e)
        return None


def push_error(errors: ErrorsByPath, path: Path, message: str) -> None:
    """Append ``message`` under the key for ``path``."""
    errors.setdefault(key_of(path), []).append(message)


def _merge(errors: ErrorsByPath, other: ErrorsByPath) -> None:
    for key, messages in other.items():
        errors.setdefault(key, []).extend(messages)


def _check_string(field: StringField, value: JSON, path: Path, errors: ErrorsByPath) -> None:
    s = to_display_string(value)
    if field.min_length is not None and len(s) < field.min_length:
        push_error(errors, path, f"Must be at least {_format_number(field.min_length)} characters.")
    if field.max_length is not None and len(s) > field.max_length:
        push_error(errors, path, f"Must be at most {_format_number(field.max_length)} characters.")
    if field.pattern:
        compiled = _compile_pattern(field.pattern)
        if compiled is None or compiled.search(s) is None:
            push_error(errors, path, "Invalid format.")


def _check_number(field: NumberField, value: JSON, path: Path, errors: ErrorsByPath) -> None:
    n = value if is_number(value) else math.nan
    if math.isnan(n):
        push_error(errors, path, "Must be a number.")
    # NaN compares false both ways, so a non-number never gets range messages
    if field.min is not None and n < field.min:
        push_error(errors, path, f"Must be at least {_format_number(field.min)}.")
    if field.max is not None and n > field.max:
        push_error(errors, path, f"Must be at most {_format_number(field.max)}.")


def _check_array(field: ArrayField, value: JSON, path: Path, errors: ErrorsByPath) -> None:
    if not is_array(value):
        push_error(errors, path, "Must be an array.")
        return
    if field.min_items is not None and len(value) < field.min_items:
        push_error(errors, path, f"At least {_format_number(field.min_items)} items.")
    if field.max_items is not None and len(value) > field.max_items:
        push_error(errors, path, f"At most {_format_number(field.max_items)} items.")
    for i, item in enumerate(value):
        _merge(errors, validate_field(field.items, item, [*path, i]))


def validate_field(field: Field, value: "JSON | Absent" = ABSENT, path: Path = ()) -> ErrorsByPath:
    """
    Validate ``value`` against ``field`` and return the errors found.

    ``path`` is the location of ``value`` in the whole document and is used
    as the prefix of every returned key. Kind-specific checks only run when
    the value is present and not null.

    Example:
        >>> field = StringField(required=True, min_length=3)
        >>> validate_field(field, "ab", ["user", "name"])
        {'/user/name': ['Must be at least 3 characters.']}
    """
    errors: ErrorsByPath = {}

    if field.required and is_empty(value):
        push_error(errors, path, REQUIRED_MESSAGE)

    if value is ABSENT or value is None:
        return errors

    match field:
        case StringField():
            _check_string(field, value, path, errors)
        case NumberField():
            _check_number(field, value, path, errors)
        case EnumField():
            if to_display_string(value) not in field.values():
                push_error(errors, path, "Invalid choice.")
        case BooleanField():
            pass
        case ObjectField():
            if is_object(value):
                for name in field.ordered_keys():
                    child_value = value.get(name, ABSENT)
                    _merge(errors, validate_field(field.properties[name], child_value, [*path, name]))
        case ArrayField():
            _check_array(field, value, path, errors)
        case _:
            raise TypeError(f"Unsupported field type: {type(field).__name__}")

    return errors


def is_valid(errors: ErrorsByPath) -> bool:
    """True when no path has any message."""
    return len(errors) == 0


def messages_for(errors: ErrorsByPath, path: Path) -> list[str]:
    """Messages recorded at exactly ``path`` (descendants are not included)."""
    return list(errors.get(key_of(path), []))


def format_errors(errors: ErrorsByPath) -> list[str]:
    """Flatten an error map into ``"<key>: <message>"`` lines."""
    return [f"{key}: {message}" for key, messages in errors.items() for message in messages]


class SchemaValidator:
    """Validates whole documents against one schema."""

    def __init__(self, schema: Field):
        self.schema = schema

    def validate(self, value: "JSON | Absent") -> ErrorsByPath:
        """Validate a document from its root."""
        errors = validate_field(self.schema, value)
        logger.debug("Validated document: %d path(s) with errors", len(errors))
        return errors

    def is_valid(self, value: "JSON | Absent") -> bool:
        return is_valid(self.validate(value))
