"""HTTP client for the inventory collector."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from http import client as http_client
from typing import Any, Sequence
from urllib import error, parse, request

from fi_common.errors import TransportError
from fi_common.outcome import Outcome
from fi_runner.models.records import MetadataRecord, Run, records_payload

logger = logging.getLogger(__name__)

RUN_RESOURCE = "/run"
METADATA_RESOURCE = "/metadata"


def build_base_url(server: str, port: int | str) -> str:
    base = f"http://{server}:{port}"
    parsed = parse.urlparse(base)
    if not parsed.hostname:
        raise ValueError(f"Collector address is not a valid host: {server!r}")
    return base


@dataclass(frozen=True)
class CollectorResponse:
    """Status line returned by the collector for one request."""

    method: str
    url: str
    status: int
    reason: str = ""

    @property
    def success(self) -> bool:
        return 200 <= self.status < 300


@dataclass
class CollectorClient:
    """Deliver run lifecycle and metadata payloads as JSON.

    Non-2xx statuses are reported, never raised; only transport failures
    produce a failed outcome. No retries are attempted.
    """

    server: str
    port: int
    timeout_seconds: float | None = None
    base_url: str = field(init=False)

    def __post_init__(self) -> None:
        self.base_url = build_base_url(self.server, self.port)

    def create_run(self, run: Run) -> Outcome[CollectorResponse]:
        return self._send("POST", RUN_RESOURCE, run.start_payload().to_payload())

    def update_run(self, run: Run) -> Outcome[CollectorResponse]:
        return self._send("PUT", RUN_RESOURCE, run.end_payload().to_payload())

    def upload_metadata(
        self, records: Sequence[MetadataRecord]
    ) -> Outcome[CollectorResponse]:
        return self._send("POST", METADATA_RESOURCE, records_payload(records))

    def _send(self, method: str, path: str, payload: Any) -> Outcome[CollectorResponse]:
        url = f"{self.base_url}{path}"
        data = json.dumps(payload).encode("utf-8")
        headers = {"Content-Type": "application/json"}
        req = request.Request(url, data=data, headers=headers, method=method)
        try:
            with self._open(req) as resp:
                response = CollectorResponse(
                    method=method,
                    url=url,
                    status=resp.status,
                    reason=getattr(resp, "reason", "") or "",
                )
        except error.HTTPError as exc:
            # urllib raises for 4xx/5xx; the collector answered, so report it.
            response = CollectorResponse(
                method=method, url=url, status=exc.code, reason=str(exc.reason or "")
            )
            exc.close()
        except (error.URLError, OSError, http_client.HTTPException, ValueError) as exc:
            reason = getattr(exc, "reason", exc)
            logger.error("%s %s failed: %s", method, url, reason)
            return Outcome.failure(
                TransportError(
                    f"Collector request {method} {url} failed: {reason}",
                    context={"method": method, "url": url},
                    cause=exc,
                )
            )
        self._log_status(response)
        return Outcome.success(response)

    def _open(self, req: request.Request) -> Any:
        if self.timeout_seconds is None:
            return request.urlopen(req)  # nosec B310
        return request.urlopen(req, timeout=self.timeout_seconds)  # nosec B310

    @staticmethod
    def _log_status(response: CollectorResponse) -> None:
        level = logging.INFO if response.success else logging.WARNING
        logger.log(
            level,
            "Upload response status %s %s (%s %s)",
            response.status,
            response.reason,
            response.method,
            response.url,
        )
