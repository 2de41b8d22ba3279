"""Environment variable parsing utilities."""

from __future__ import annotations

_TRUE_VALUES = {"1", "true", "yes", "on"}


def parse_bool_env(value: str | None) -> bool | None:
    """Parse a boolean flag such as ``FI_LOG_JSON``.

    "1", "true", "yes" and "on" (any case) are true; None stays None.
    """
    if value is None:
        return None
    return value.strip().lower() in _TRUE_VALUES


def parse_int_env(value: str | None) -> int | None:
    """Parse an integer (e.g. ``FI_COLLECTOR_PORT``); None when unparsable."""
    if value is None or not value.strip():
        return None
    try:
        return int(value.strip())
    except (TypeError, ValueError):
        return None


def parse_float_env(value: str | None) -> float | None:
    """Parse a float (e.g. ``FI_HTTP_TIMEOUT``); None when unparsable."""
    if value is None or not value.strip():
        return None
    try:
        return float(value.strip())
    except (TypeError, ValueError):
        return None
