"""Stable runner API surface."""

from fi_runner.engine.checksum import ChecksumComputer, compute_checksum
from fi_runner.engine.extractor import ExtractionResult, MetadataExtractor
from fi_runner.engine.orchestrator import (
    InventoryOrchestrator,
    PathReport,
    RecordReporter,
    RunSummary,
)
from fi_runner.engine.run_tracker import RunTracker, generate_run_id
from fi_runner.models.config import InventoryConfig
from fi_runner.models.properties import PropertyKind, resolve_properties
from fi_runner.models.records import MetadataRecord, Run
from fi_runner.services.collector_client import CollectorClient, CollectorResponse
from fi_runner.services.config_repository import ConfigRepository

__all__ = [
    "ChecksumComputer",
    "CollectorClient",
    "CollectorResponse",
    "ConfigRepository",
    "ExtractionResult",
    "InventoryConfig",
    "InventoryOrchestrator",
    "MetadataExtractor",
    "MetadataRecord",
    "PathReport",
    "PropertyKind",
    "RecordReporter",
    "Run",
    "RunSummary",
    "RunTracker",
    "compute_checksum",
    "generate_run_id",
    "resolve_properties",
]
