"""SchemaMold error handling.

Validation outcomes are never raised; they are returned as ``ErrorsByPath``.
The exceptions here cover broken inputs around validation: malformed schema
definitions, unreadable documents, bad path strings and configuration.
"""

from typing import Any

from .types import ErrorCode


class SchemaMoldError(Exception):
    """Base exception for SchemaMold errors."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        details: dict[str, Any] | None = None,
        recovery_hint: str | None = None,
    ) -> None:
        """Initialize error."""
        super().__init__(message)
        self.code = code.value
        self.message = message
        self.details = details or {}
        self.recovery_hint = recovery_hint


class SchemaDefinitionError(SchemaMoldError):
    """Schema document does not describe a valid field tree."""

    def __init__(self, where: str, problem: str) -> None:
        """Initialize error."""
        super().__init__(
            code=ErrorCode.SCHEMA_DEFINITION,
            message=f"Invalid schema at {where}: {problem}",
            details={"where": where, "problem": problem},
            recovery_hint="Fix the schema definition and try again",
        )
        self.where = where
        self.problem = problem


class DocumentLoadError(SchemaMoldError):
    """Document could not be read or parsed."""

    def __init__(self, path: str, reason: str) -> None:
        """Initialize error."""
        super().__init__(
            code=ErrorCode.DOCUMENT_LOAD,
            message=f"Cannot load {path}: {reason}",
            details={"path": path, "reason": reason},
            recovery_hint="Check the file exists and contains valid JSON or YAML",
        )


class InvalidPathError(SchemaMoldError):
    """Path string cannot be turned into path steps."""

    def __init__(self, key: str, reason: str) -> None:
        """Initialize error."""
        super().__init__(
            code=ErrorCode.INVALID_PATH,
            message=f"Invalid path '{key}': {reason}",
            details={"key": key},
            recovery_hint="Paths look like /items/0/name",
        )


class ConfigError(SchemaMoldError):
    """Configuration error."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """Initialize error."""
        super().__init__(
            code=ErrorCode.CONFIG_ERROR,
            message=f"Configuration error: {message}",
            details=details,
            recovery_hint="Check configuration file syntax and values",
        )
