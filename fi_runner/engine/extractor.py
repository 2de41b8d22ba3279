"""Property-driven metadata extraction over a directory tree."""

from __future__ import annotations

import logging
import os
import stat
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Callable, Iterable, Iterator

from fi_common.errors import FilesystemError, InventoryError
from fi_common.outcome import Outcome
from fi_runner.engine.checksum import ChecksumComputer
from fi_runner.models.properties import PropertyKind, resolve_properties
from fi_runner.models.records import MetadataRecord

logger = logging.getLogger(__name__)

ChecksumFn = Callable[[str], Outcome[str]]


@dataclass
class ExtractionResult:
    """Records produced by one walk plus its non-directory entry count."""

    root: str
    records: list[MetadataRecord] = field(default_factory=list)
    file_count: int = 0


class _WalkAborted(Exception):
    def __init__(self, error: InventoryError) -> None:
        super().__init__(str(error))
        self.error = error


def split_extension(name: str) -> str:
    """Return the text after the last dot of ``name`` (empty if none)."""
    _, dot, suffix = name.rpartition(".")
    return suffix if dot else ""


class MetadataExtractor:
    """Walk a root and build one MetadataRecord per visited entry.

    Only the requested properties are populated. Filename, extension and
    checksum are never computed for directories. The first filesystem error
    aborts the walk.
    """

    def __init__(
        self,
        properties: Iterable[str | PropertyKind],
        run_id: str,
        checksum: ChecksumFn | None = None,
    ) -> None:
        self.properties = resolve_properties(
            p.value if isinstance(p, PropertyKind) else p for p in properties
        )
        self.run_id = run_id
        self._checksum: ChecksumFn = checksum or ChecksumComputer()

    def extract(self, root: str) -> Outcome[ExtractionResult]:
        result = ExtractionResult(root=root)
        try:
            for path, info in self._walk(root):
                is_dir = stat.S_ISDIR(info.st_mode)
                result.records.append(self._build_record(path, info, is_dir))
                if not is_dir:
                    result.file_count += 1
        except _WalkAborted as aborted:
            logger.error("Walk of %s aborted: %s", root, aborted.error)
            return Outcome.failure(aborted.error)
        logger.info(
            "Walked %s: %d entries, %d files",
            root,
            len(result.records),
            result.file_count,
        )
        return Outcome.success(result)

    def _walk(self, root: str) -> Iterator[tuple[str, os.stat_result]]:
        """Yield (path, lstat) pairs in pre-order, children sorted by name."""
        stack = [root]
        while stack:
            path = stack.pop()
            info = self._lstat(path)
            yield path, info
            if stat.S_ISDIR(info.st_mode):
                children = self._list_dir(path)
                stack.extend(os.path.join(path, name) for name in reversed(children))

    @staticmethod
    def _lstat(path: str) -> os.stat_result:
        try:
            return os.lstat(path)
        except OSError as exc:
            raise _WalkAborted(
                FilesystemError(
                    f"Cannot stat {path}",
                    context={"path": path, "errno": exc.errno},
                    cause=exc,
                )
            ) from exc

    @staticmethod
    def _list_dir(path: str) -> list[str]:
        try:
            return sorted(os.listdir(path))
        except OSError as exc:
            raise _WalkAborted(
                FilesystemError(
                    f"Cannot list directory {path}",
                    context={"path": path, "errno": exc.errno},
                    cause=exc,
                )
            ) from exc

    def _build_record(
        self, path: str, info: os.stat_result, is_dir: bool
    ) -> MetadataRecord:
        record = MetadataRecord(run_id=self.run_id)
        props = self.properties
        if PropertyKind.PATH in props:
            record.path = path
        if PropertyKind.FILESIZE in props:
            record.filesize = info.st_size
        if PropertyKind.LASTMODIFIED in props:
            record.last_modified = datetime.fromtimestamp(info.st_mtime, tz=UTC)
        if is_dir:
            return record
        name = os.path.basename(path)
        if PropertyKind.FILENAME in props:
            record.filename = name
        if PropertyKind.EXTENSION in props:
            record.extension = split_extension(name)
        if PropertyKind.CHECKSUM in props:
            outcome = self._checksum(path)
            if not outcome.ok:
                raise _WalkAborted(outcome.error)  # type: ignore[arg-type]
            record.checksum = outcome.value or ""
        return record
