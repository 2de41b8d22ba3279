"""Sequence run start, per-path extraction and upload, and run end."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Optional, Protocol, Sequence

from fi_common.errors import InventoryError, error_to_payload
from fi_common.outcome import Outcome
from fi_runner.engine.checksum import ChecksumComputer
from fi_runner.engine.extractor import ExtractionResult, MetadataExtractor
from fi_runner.engine.run_tracker import RunTracker
from fi_runner.models.config import InventoryConfig
from fi_runner.models.properties import PropertyKind
from fi_runner.models.records import MetadataRecord, Run
from fi_runner.services.collector_client import CollectorClient, CollectorResponse

logger = logging.getLogger(__name__)

ExtractorFactory = Callable[[InventoryConfig, str], MetadataExtractor]


class MetadataUploader(Protocol):
    def upload_metadata(
        self, records: Sequence[MetadataRecord]
    ) -> Outcome[CollectorResponse]: ...


class RecordReporter(Protocol):
    """Console sink for the records of one walked path."""

    def show(
        self, root: str, records: Sequence[MetadataRecord], properties: frozenset[PropertyKind]
    ) -> None: ...


def default_extractor_factory(config: InventoryConfig, run_id: str) -> MetadataExtractor:
    return MetadataExtractor(
        config.properties,
        run_id,
        checksum=ChecksumComputer(config.checksum_algorithm),
    )


@dataclass
class PathReport:
    """Outcome of walking and uploading one configured path."""

    root: str
    file_count: int
    record_count: int
    upload_status: int | None = None


@dataclass
class RunSummary:
    """Summary of a complete inventory run."""

    run: Optional[Run] = None
    paths: list[PathReport] = field(default_factory=list)
    files_count: int = 0
    completed: bool = False
    error: Optional[InventoryError] = None

    @property
    def success(self) -> bool:
        return self.completed and self.error is None


class InventoryOrchestrator:
    """Drive one run: start, then walk and upload each path, then end.

    The first failed step stops the run. In that case no end report is
    sent and the run stays open on the collector.
    """

    def __init__(
        self,
        config: InventoryConfig,
        tracker: RunTracker,
        uploader: MetadataUploader,
        extractor_factory: ExtractorFactory = default_extractor_factory,
        reporter: RecordReporter | None = None,
    ) -> None:
        self._config = config
        self._tracker = tracker
        self._uploader = uploader
        self._extractor_factory = extractor_factory
        self._reporter = reporter

    @classmethod
    def from_config(
        cls, config: InventoryConfig, reporter: RecordReporter | None = None
    ) -> "InventoryOrchestrator":
        client = CollectorClient(
            server=config.server,
            port=config.port,
            timeout_seconds=config.timeout_seconds,
        )
        return cls(config, RunTracker(client), client, reporter=reporter)

    def execute(self) -> RunSummary:
        summary = RunSummary()
        started = self._tracker.start_run()
        if not started.ok:
            return self._abort(summary, started.error)
        run = started.unwrap()
        summary.run = run

        extractor = self._extractor_factory(self._config, run.id)
        total = 0
        for root in self._config.paths:
            processed = self._process_path(extractor, root, total)
            if not processed.ok:
                return self._abort(summary, processed.error)
            report, total = processed.unwrap()
            summary.paths.append(report)
            summary.files_count = total

        ended = self._tracker.end_run(run, total)
        if not ended.ok:
            return self._abort(summary, ended.error)
        summary.run = ended.unwrap()
        summary.completed = True
        logger.info("Run %s completed: %d files", run.id, total)
        return summary

    def _process_path(
        self, extractor: MetadataExtractor, root: str, total: int
    ) -> Outcome[tuple[PathReport, int]]:
        extracted: Outcome[ExtractionResult] = extractor.extract(root)
        if not extracted.ok:
            return Outcome.failure(extracted.error)  # type: ignore[arg-type]
        result = extracted.unwrap()

        if self._reporter is not None and self._config.print_properties:
            self._reporter.show(root, result.records, extractor.properties)

        uploaded = self._uploader.upload_metadata(result.records)
        if not uploaded.ok:
            return Outcome.failure(uploaded.error)  # type: ignore[arg-type]
        report = PathReport(
            root=root,
            file_count=result.file_count,
            record_count=len(result.records),
            upload_status=uploaded.unwrap().status,
        )
        return Outcome.success((report, total + result.file_count))

    @staticmethod
    def _abort(summary: RunSummary, error: InventoryError | None) -> RunSummary:
        summary.error = error
        payload = error_to_payload(error) if error is not None else {}
        if summary.run is not None:
            logger.error(
                "Run %s aborted; it remains open on the collector: %s",
                summary.run.id,
                error,
                extra=payload,
            )
        else:
            logger.error("Run could not be started: %s", error, extra=payload)
        return summary
