"""Content digests for non-directory entries."""

from __future__ import annotations

import hashlib
from pathlib import Path
from typing import Any

from fi_common.errors import FilesystemError
from fi_common.outcome import Outcome

DEFAULT_ALGORITHM = "md5"
_CHUNK_SIZE = 1024 * 1024


def _new_digest(algorithm: str) -> Any:
    # md5 is used for change detection only.
    return hashlib.new(algorithm, usedforsecurity=False)


def compute_checksum(
    path: str | Path, algorithm: str = DEFAULT_ALGORITHM
) -> Outcome[str]:
    """Digest the full content of ``path`` as lowercase hex."""
    digest = _new_digest(algorithm)
    try:
        with open(path, "rb") as handle:
            for chunk in iter(lambda: handle.read(_CHUNK_SIZE), b""):
                digest.update(chunk)
    except OSError as exc:
        return Outcome.failure(
            FilesystemError(
                f"Cannot read {path} for checksum",
                context={"path": path, "errno": exc.errno},
                cause=exc,
            )
        )
    return Outcome.success(digest.hexdigest())


class ChecksumComputer:
    """Callable digest helper bound to one algorithm."""

    def __init__(self, algorithm: str = DEFAULT_ALGORITHM) -> None:
        self.algorithm = algorithm
        _new_digest(algorithm)

    def __call__(self, path: str | Path) -> Outcome[str]:
        return compute_checksum(path, self.algorithm)
