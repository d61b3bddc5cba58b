"""Read-only rendering of a schema-driven form as a rich tree."""

from typing import Any

from rich.markup import escape
from rich.text import Text
from rich.tree import Tree

from .paths import ABSENT, Path, is_array, is_object
from .schema.core import ArrayField, BooleanField, EnumField, Field, ObjectField
from .schema.validation import ErrorsByPath, messages_for, to_display_string


def _caption(field: Field, name: str | int | None) -> str:
    if field.label:
        text = field.label
    elif name is None:
        text = "(root)"
    else:
        text = str(name)
    marker = " [red]*[/red]" if field.required else ""
    return f"[bold]{escape(text)}[/bold]{marker}"


def _display_value(field: Field, value: Any) -> str:
    if value is ABSENT or value is None:
        return "[dim]-[/dim]"
    if isinstance(field, BooleanField):
        return escape("[x]") if value is True else escape("[ ]")
    if isinstance(field, EnumField):
        raw = to_display_string(value)
        for option in field.options:
            if option.value == raw:
                return escape(option.display)
    return escape(to_display_string(value))


def _annotate(tree: Tree, field: Field, errors: ErrorsByPath, path: Path) -> None:
    if field.note:
        tree.add(Text(field.note, style="dim italic"))
    messages = messages_for(errors, path)
    if messages:
        tree.add(Text(" ".join(messages), style="red"))


def _render_field(
    parent: Tree, field: Field, value: Any, errors: ErrorsByPath, path: Path, name: str | int | None
) -> None:
    if isinstance(field, ObjectField):
        branch = parent.add(_caption(field, name))
        children = value if is_object(value) else {}
        for key in field.ordered_keys():
            _render_field(branch, field.properties[key], children.get(key, ABSENT), errors, [*path, key], key)
        _annotate(branch, field, errors, path)
    elif isinstance(field, ArrayField):
        items = value if is_array(value) else []
        branch = parent.add(f"{_caption(field, name)} [dim]({len(items)} items)[/dim]")
        for i, item in enumerate(items):
            _render_field(branch, field.items, item, errors, [*path, i], i)
        _annotate(branch, field, errors, path)
    else:
        leaf = parent.add(f"{_caption(field, name)}: {_display_value(field, value)}")
        _annotate(leaf, field, errors, path)


def render_form(schema: Field, value: Any, errors: ErrorsByPath) -> Tree:
    """
    Build a tree mirroring the form layout for ``value``.

    Objects become branches in ``ordered_keys()`` order, arrays list their
    elements by index, and every node carries its note and the messages
    recorded at its exact path.
    """
    tree = Tree(_caption(schema, None))
    if isinstance(schema, ObjectField):
        children = value if is_object(value) else {}
        for key in schema.ordered_keys():
            _render_field(tree, schema.properties[key], children.get(key, ABSENT), errors, [key], key)
        _annotate(tree, schema, errors, [])
    else:
        _render_field(tree, schema, value, errors, [], None)
    return tree
