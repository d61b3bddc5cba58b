"""
Reading and writing JSON documents and schemas from disk.

``.yaml``/``.yml`` files are parsed with PyYAML, everything else as JSON.
YAML is restricted to what JSON can hold: unquoted dates stay strings and
anything else without a JSON counterpart is rejected.
"""

import json
import logging
from pathlib import Path
from typing import Any

import yaml

from .shared.errors import DocumentLoadError

logger = logging.getLogger(__name__)

YAML_SUFFIXES = {".yaml", ".yml"}


class JSONSafeLoader(yaml.SafeLoader):
    """SafeLoader that leaves unquoted dates and times as strings."""


JSONSafeLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag != "tag:yaml.org,2002:timestamp"]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


def _check_json(value: Any, where: str = "/") -> None:
    """Reject values that have no JSON counterpart (sets, bytes, explicit timestamps, non-string keys)."""
    if value is None or isinstance(value, bool | int | float | str):
        return
    if isinstance(value, list):
        for i, item in enumerate(value):
            _check_json(item, f"{where.rstrip('/')}/{i}")
        return
    if isinstance(value, dict):
        for key, item in value.items():
            if not isinstance(key, str):
                raise ValueError(f"non-string key {key!r} at {where}")
            _check_json(item, f"{where.rstrip('/')}/{key}")
        return
    raise ValueError(f"{type(value).__name__} value at {where} is not JSON")


def load_document(path: Path | str) -> Any:
    """
    Load a JSON or YAML document.

    Raises:
        DocumentLoadError: if the file is missing, unreadable or malformed.
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise DocumentLoadError(str(path), "file not found") from None
    except OSError as e:
        raise DocumentLoadError(str(path), str(e)) from e

    if path.suffix.lower() in YAML_SUFFIXES:
        try:
            data = yaml.load(text, Loader=JSONSafeLoader)
        except yaml.YAMLError as e:
            raise DocumentLoadError(str(path), f"invalid YAML: {e}") from e
        try:
            _check_json(data)
        except ValueError as e:
            raise DocumentLoadError(str(path), str(e)) from e
    else:
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise DocumentLoadError(str(path), f"invalid JSON ({e.msg}) at line {e.lineno} column {e.colno}") from e

    logger.debug("Loaded %s (%s)", path, type(data).__name__)
    return data


def dump_document(value: Any, fmt: str = "json", indent: int = 2) -> str:
    """Serialize a document as ``json`` or ``yaml`` text."""
    if fmt == "yaml":
        return yaml.safe_dump(value, default_flow_style=False, indent=indent or 2, sort_keys=False, allow_unicode=True)
    return json.dumps(value, indent=indent, ensure_ascii=False) + "\n"


def write_document(path: Path | str, value: Any, indent: int = 2) -> Path:
    """Write ``value`` back to ``path`` in the format its suffix implies."""
    path = Path(path)
    fmt = "yaml" if path.suffix.lower() in YAML_SUFFIXES else "json"
    try:
        path.write_text(dump_document(value, fmt, indent), encoding="utf-8")
    except OSError as e:
        raise DocumentLoadError(str(path), f"cannot write: {e}") from e
    return path
