"""Shared error taxonomy for fs-inventory."""

from __future__ import annotations

from typing import Any, Mapping


def _normalize_context_value(value: Any) -> Any:
    if isinstance(value, Mapping):
        return normalize_context(value)
    if isinstance(value, (list, tuple)):
        return [_normalize_context_value(item) for item in value]
    if isinstance(value, (str, int, float, bool)) or value is None:
        return value
    return str(value)


def normalize_context(context: Mapping[str, Any]) -> dict[str, Any]:
    """Return a JSON-friendly copy of an error context mapping."""
    return {key: _normalize_context_value(val) for key, val in context.items()}


class InventoryError(Exception):
    """Base error type for typed failure handling."""

    def __init__(
        self,
        message: str,
        *,
        context: Mapping[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.context = normalize_context(context or {})
        if cause is not None:
            self.__cause__ = cause

    @property
    def error_type(self) -> str:
        return self.__class__.__name__


class ConfigurationError(InventoryError):
    """Failure due to missing or invalid configuration."""


class FilesystemError(InventoryError):
    """Failure reading an entry during a walk or a checksum computation."""


class TransportError(InventoryError):
    """Failure reaching the collector (connection refused, DNS, socket errors)."""


class RunStateError(InventoryError):
    """Run lifecycle misuse, such as ending a run twice."""


def error_to_payload(error: InventoryError) -> dict[str, Any]:
    """Convert an InventoryError to a summary payload."""
    return {
        "error_type": error.error_type,
        "error": str(error),
        "error_context": error.context,
    }
