"""Recognized metadata properties and name resolution."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Iterable

logger = logging.getLogger(__name__)


class PropertyKind(str, Enum):
    """A toggleable field of a metadata record, in report order."""

    PATH = "path"
    FILESIZE = "filesize"
    LASTMODIFIED = "lastmodified"
    FILENAME = "filename"
    EXTENSION = "extension"
    CHECKSUM = "checksum"


# Properties that only apply to non-directory entries.
FILE_ONLY_PROPERTIES = frozenset(
    {PropertyKind.FILENAME, PropertyKind.EXTENSION, PropertyKind.CHECKSUM}
)


def resolve_properties(names: Iterable[str]) -> frozenset[PropertyKind]:
    """Map configured names to property kinds, dropping unknown names."""
    resolved: set[PropertyKind] = set()
    for name in names:
        key = str(name).strip().lower()
        try:
            resolved.add(PropertyKind(key))
        except ValueError:
            logger.debug("Ignoring unrecognized property %r", name)
    return frozenset(resolved)


def ordered(properties: Iterable[PropertyKind]) -> list[PropertyKind]:
    """Return properties in declaration order."""
    selected = set(properties)
    return [kind for kind in PropertyKind if kind in selected]
