"""
Core field definitions for SchemaMold schemas.

A schema is a tree of fields. Each field kind is its own dataclass so that a
field can only carry the attributes that make sense for its kind: an
``ObjectField`` has ``properties`` and never ``items``, an ``ArrayField`` has
``items`` and never ``properties``.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, TypeAlias


class FieldKind(Enum):
    """Supported field kinds."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    ENUM = "enum"
    ARRAY = "array"
    OBJECT = "object"


@dataclass(kw_only=True)
class BaseField:
    """
    Attributes shared by every field kind.

    ``label`` and ``note`` are display text for the form layer; only
    ``required`` takes part in validation.
    """

    kind: ClassVar[FieldKind]

    label: str | None = None
    note: str | None = None
    required: bool = False


@dataclass(kw_only=True)
class StringField(BaseField):
    """Free text input."""

    kind: ClassVar[FieldKind] = FieldKind.STRING

    placeholder: str | None = None
    pattern: str | None = None
    min_length: int | None = None
    max_length: int | None = None


@dataclass(kw_only=True)
class NumberField(BaseField):
    """Numeric input. ``step`` is a rendering hint and is not validated."""

    kind: ClassVar[FieldKind] = FieldKind.NUMBER

    min: float | None = None
    max: float | None = None
    step: float | None = None


@dataclass(kw_only=True)
class BooleanField(BaseField):
    """Checkbox input."""

    kind: ClassVar[FieldKind] = FieldKind.BOOLEAN


@dataclass
class EnumOption:
    """One selectable choice; ``value`` is what gets stored."""

    value: str
    label: str | None = None

    @property
    def display(self) -> str:
        return self.label if self.label is not None else self.value


@dataclass(kw_only=True)
class EnumField(BaseField):
    """Choice among fixed string values."""

    kind: ClassVar[FieldKind] = FieldKind.ENUM

    options: list[EnumOption] = field(default_factory=list)

    def values(self) -> list[str]:
        """Option values in declaration order (duplicates kept)."""
        return [option.value for option in self.options]


@dataclass(kw_only=True)
class ArrayField(BaseField):
    """Homogeneous list; every element is described by ``items``."""

    kind: ClassVar[FieldKind] = FieldKind.ARRAY

    items: "Field"
    min_items: int | None = None
    max_items: int | None = None


@dataclass(kw_only=True)
class ObjectField(BaseField):
    """Group of named child fields."""

    kind: ClassVar[FieldKind] = FieldKind.OBJECT

    properties: dict[str, "Field"] = field(default_factory=dict)
    order: list[str] | None = None

    def get_property(self, name: str) -> "Field | None":
        """Get a child field by name."""
        return self.properties.get(name)

    def ordered_keys(self) -> list[str]:
        """
        Property names in traversal order.

        Names listed in ``order`` come first (unknown names are skipped), then
        any properties ``order`` leaves out, in mapping order.
        """
        if self.order is None:
            return list(self.properties)

        keys = [name for name in dict.fromkeys(self.order) if name in self.properties]
        keys.extend(name for name in self.properties if name not in keys)
        return keys


Field: TypeAlias = StringField | NumberField | BooleanField | EnumField | ArrayField | ObjectField
Schema: TypeAlias = ObjectField
