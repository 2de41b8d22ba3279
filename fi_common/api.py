"""Public API surface for fi_common."""

from fi_common.errors import (
    ConfigurationError,
    FilesystemError,
    InventoryError,
    RunStateError,
    TransportError,
    error_to_payload,
)
from fi_common.logging import configure_logging
from fi_common.outcome import Outcome

__all__ = [
    "configure_logging",
    "ConfigurationError",
    "FilesystemError",
    "InventoryError",
    "Outcome",
    "RunStateError",
    "TransportError",
    "error_to_payload",
]
