"""Shared type definitions for SchemaMold."""

from enum import Enum


class ErrorCode(Enum):
    """Error codes carried by SchemaMold exceptions."""

    SCHEMA_DEFINITION = "SCHEMA_DEFINITION"
    DOCUMENT_LOAD = "DOCUMENT_LOAD"
    INVALID_PATH = "INVALID_PATH"
    CONFIG_ERROR = "CONFIG_ERROR"
