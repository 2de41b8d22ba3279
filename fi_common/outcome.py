"""Explicit success/failure values for fallible pipeline steps."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

from fi_common.errors import InventoryError

T = TypeVar("T")


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """Result of a fallible operation: either a value or an InventoryError."""

    value: Optional[T] = None
    error: Optional[InventoryError] = None

    @classmethod
    def success(cls, value: T) -> "Outcome[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: InventoryError) -> "Outcome[T]":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        """Return the value, raising the carried error on failure."""
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]
