"""Shared helpers for fs-inventory."""

from fi_common.api import InventoryError, Outcome, configure_logging

__all__ = ["configure_logging", "InventoryError", "Outcome"]
