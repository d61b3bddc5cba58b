"""Shared types and errors for SchemaMold."""

from .errors import (
    ConfigError,
    DocumentLoadError,
    InvalidPathError,
    SchemaDefinitionError,
    SchemaMoldError,
)
from .types import ErrorCode

__all__ = [
    "ConfigError",
    "DocumentLoadError",
    "ErrorCode",
    "InvalidPathError",
    "SchemaDefinitionError",
    "SchemaMoldError",
]
