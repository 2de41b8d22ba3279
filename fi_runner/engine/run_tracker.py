"""Run lifecycle tracking against the collector."""

from __future__ import annotations

import logging
import platform
import socket
import uuid
from datetime import UTC, datetime
from typing import Callable, Protocol

from fi_common.errors import RunStateError
from fi_common.outcome import Outcome
from fi_runner.models.records import Run

logger = logging.getLogger(__name__)


class RunReporter(Protocol):
    """Collector operations needed to report a run lifecycle."""

    def create_run(self, run: Run) -> Outcome: ...

    def update_run(self, run: Run) -> Outcome: ...


def generate_run_id() -> str:
    """Generate a process-unique run id."""
    return str(uuid.uuid4())


def local_machine_name() -> str:
    return platform.node() or socket.gethostname()


def _utc_now() -> datetime:
    return datetime.now(UTC)


class RunTracker:
    """Open a run before any walk and close it once after all uploads."""

    def __init__(
        self,
        reporter: RunReporter,
        machine_name: str | None = None,
        clock: Callable[[], datetime] = _utc_now,
        id_factory: Callable[[], str] = generate_run_id,
    ) -> None:
        self._reporter = reporter
        self._machine_name = machine_name
        self._clock = clock
        self._id_factory = id_factory
        self._ended: set[str] = set()

    def start_run(self) -> Outcome[Run]:
        run = Run(
            id=self._id_factory(),
            machine_name=self._machine_name or local_machine_name(),
            start=self._clock(),
        )
        logger.info("Starting run %s on %s", run.id, run.machine_name)
        sent = self._reporter.create_run(run)
        if not sent.ok:
            return Outcome.failure(sent.error)  # type: ignore[arg-type]
        return Outcome.success(run)

    def end_run(self, run: Run, files_count: int) -> Outcome[Run]:
        if run.id in self._ended:
            return Outcome.failure(
                RunStateError(
                    f"Run {run.id} has already been ended",
                    context={"run_id": run.id},
                )
            )
        closed = run.model_copy(update={"end": self._clock(), "files_count": files_count})
        logger.info("Ending run %s with %d files", closed.id, files_count)
        self._ended.add(run.id)
        sent = self._reporter.update_run(closed)
        if not sent.ok:
            return Outcome.failure(sent.error)  # type: ignore[arg-type]
        return Outcome.success(closed)
