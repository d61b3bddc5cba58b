"""
Path-addressed reads and writes on JSON trees.

A path is a sequence of steps from the root: ``str`` steps name object
properties and ``int`` steps index into arrays. Reads are strict (a step of
the wrong kind yields ``ABSENT``); writes always succeed, replacing whatever
stands in the way with the container the step needs.

Neither function mutates its input. ``set_at_path`` copies only the
containers along the written path; untouched siblings are shared with the
original tree.
"""

from collections.abc import Mapping, Sequence
from enum import Enum
from typing import Any, Literal, TypeAlias

from .shared.errors import InvalidPathError

JSON: TypeAlias = "None | bool | int | float | str | list[JSON] | dict[str, JSON]"
PathStep: TypeAlias = str | int
Path: TypeAlias = Sequence[PathStep]


class _Absent(Enum):
    """Marker for a location that holds no value at all (not even null)."""

    ABSENT = "absent"

    def __repr__(self) -> str:
        return "ABSENT"

    def __bool__(self) -> bool:
        return False


ABSENT: Literal[_Absent.ABSENT] = _Absent.ABSENT
Absent: TypeAlias = Literal[_Absent.ABSENT]


def is_array(value: Any) -> bool:
    """Array-family JSON value (list or tuple, never a string)."""
    return isinstance(value, list | tuple)


def is_object(value: Any) -> bool:
    """Object-family JSON value (any mapping)."""
    return isinstance(value, Mapping)


def is_index(step: Any) -> bool:
    """True for integer steps; bools are not indexes."""
    return isinstance(step, int) and not isinstance(step, bool)


def get_at_path(root: JSON, path: Path) -> "JSON | Absent":
    """
    Read the value at ``path``.

    Returns ``ABSENT`` as soon as a step cannot be followed: the current node
    is null or missing, an index is applied to a non-array, a property name
    to a non-object, or the index/key does not exist.

    >>> get_at_path({"user": {"name": "John"}, "items": ["a", "b"]}, ["items", 0])
    'a'
    >>> get_at_path({"items": ["a"]}, ["items", "0"])
    ABSENT
    """
    cur: Any = root
    for step in path:
        if cur is ABSENT or cur is None:
            return ABSENT
        if is_array(cur) and is_index(step):
            if step < 0 or step >= len(cur):
                return ABSENT
            cur = cur[step]
        elif is_object(cur) and isinstance(step, str):
            cur = cur.get(step, ABSENT)
        else:
            return ABSENT
    return cur


def set_at_path(root: JSON, path: Path, value: JSON) -> JSON:
    """
    Return a copy of ``root`` with ``value`` stored at ``path``.

    Missing containers are created on the way down. Writing past the end of
    an array pads it with ``None``. If an existing node is the wrong kind of
    container for the next step (or not a container at all) it is discarded
    and replaced. An empty path returns ``value`` itself.

    >>> set_at_path(["a", "b"], [5], "f")
    ['a', 'b', None, None, None, 'f']

    Raises:
        InvalidPathError: for negative indexes or steps that are neither
            ``str`` nor ``int``.
    """
    if len(path) == 0:
        return value

    head, rest = path[0], path[1:]

    if is_index(head):
        if head < 0:
            raise InvalidPathError(key_of(path), f"negative array index {head}")
        arr = list(root) if is_array(root) else []
        if len(arr) <= head:
            arr.extend([None] * (head + 1 - len(arr)))
        arr[head] = set_at_path(arr[head], rest, value)
        return arr

    if not isinstance(head, str):
        raise InvalidPathError(key_of(path), f"unsupported step {head!r}")

    obj = dict(root) if is_object(root) else {}
    obj[head] = set_at_path(obj.get(head), rest, value)
    return obj


def key_of(path: Path) -> str:
    """
    Serialize a path into the key used by ``ErrorsByPath``.

    >>> key_of(["items", 0, "name"])
    '/items/0/name'
    >>> key_of([])
    '/'
    """
    return "/" + "/".join(str(step) for step in path)


def parse_key(key: str) -> list[PathStep]:
    """
    Turn a ``key_of`` style string back into path steps.

    Segments made only of digits become array indexes, so an object property
    literally named ``"0"`` cannot be addressed this way.
    """
    if key in ("", "/"):
        return []
    if not key.startswith("/"):
        raise InvalidPathError(key, "must start with '/'")

    steps: list[PathStep] = []
    for segment in key[1:].split("/"):
        if segment == "":
            raise InvalidPathError(key, "empty segment")
        steps.append(int(segment) if segment.isascii() and segment.isdigit() else segment)
    return steps
