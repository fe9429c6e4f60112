"""
Module: exceptions

Purpose: Domain-specific exception hierarchy for the benchmark exporters.

All exceptions carry a context dict. Transport failures raised by the Google
client libraries are not wrapped and reach the caller unchanged.
"""

from typing import Any


class BenchExportError(Exception):
    """Base exception for all benchmark export errors."""

    def __init__(self, message: str, *, context: dict[str, Any] | None = None) -> None:
        self.message = message
        self.context = context or {}
        super().__init__(self.message)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message={self.message!r}, context={self.context!r})"


class ConfigurationError(BenchExportError):
    """Raised when exporter configuration is invalid."""

    def __init__(
        self,
        message: str,
        *,
        setting: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        ctx = context or {}
        if setting is not None:
            ctx["setting"] = setting
        super().__init__(message, context=ctx)
        self.setting = setting


class SchemaIncompatibilityError(BenchExportError):
    """Raised when a remote table schema cannot hold the canonical schema."""

    def __init__(
        self,
        message: str,
        *,
        schema_id: str,
        context: dict[str, Any] | None = None,
    ) -> None:
        ctx = context or {}
        ctx["schema_id"] = schema_id
        super().__init__(message, context=ctx)
        self.schema_id = schema_id


class TooFewFieldsError(SchemaIncompatibilityError):
    """Raised when a schema level has fewer fields than the canonical level."""

    def __init__(
        self,
        message: str,
        *,
        schema_id: str,
        expected_count: int,
        actual_count: int,
        context: dict[str, Any] | None = None,
    ) -> None:
        ctx = context or {}
        ctx["expected_count"] = expected_count
        ctx["actual_count"] = actual_count
        super().__init__(message, schema_id=schema_id, context=ctx)
        self.expected_count = expected_count
        self.actual_count = actual_count


class MissingFieldError(SchemaIncompatibilityError):
    """Raised when a canonical field has no same-named sibling in the remote schema."""


class AmbiguousFieldError(SchemaIncompatibilityError):
    """Raised when a canonical field name matches several remote siblings."""

    def __init__(
        self,
        message: str,
        *,
        schema_id: str,
        match_count: int,
        context: dict[str, Any] | None = None,
    ) -> None:
        ctx = context or {}
        ctx["match_count"] = match_count
        super().__init__(message, schema_id=schema_id, context=ctx)
        self.match_count = match_count


class FieldTypeMismatchError(SchemaIncompatibilityError):
    """Raised when a matched remote field has a different declared type."""

    def __init__(
        self,
        message: str,
        *,
        schema_id: str,
        expected_type: str,
        actual_type: str,
        context: dict[str, Any] | None = None,
    ) -> None:
        ctx = context or {}
        ctx["expected_type"] = expected_type
        ctx["actual_type"] = actual_type
        super().__init__(message, schema_id=schema_id, context=ctx)
        self.expected_type = expected_type
        self.actual_type = actual_type


class RowInsertError(BenchExportError):
    """Raised when BigQuery reports per-row errors for a streaming insert."""

    def __init__(
        self,
        message: str,
        *,
        table_id: str,
        errors: list[dict[str, Any]] | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        ctx = context or {}
        ctx["table_id"] = table_id
        if errors is not None:
            ctx["errors"] = errors[:10]  # Truncate for logging
        super().__init__(message, context=ctx)
        self.table_id = table_id
        self.errors = errors or []


class ExporterStateError(BenchExportError):
    """Raised when an exporter is used while its initialization is in progress."""

    def __init__(
        self,
        message: str,
        *,
        exporter: str,
        state: str,
        context: dict[str, Any] | None = None,
    ) -> None:
        ctx = context or {}
        ctx["exporter"] = exporter
        ctx["state"] = state
        super().__init__(message, context=ctx)
        self.exporter = exporter
        self.state = state
