"""Walk-and-report pipeline for fs-inventory."""

from fi_runner.api import (
    InventoryConfig,
    InventoryOrchestrator,
    MetadataExtractor,
    MetadataRecord,
    Run,
    RunSummary,
)

__all__ = [
    "InventoryConfig",
    "InventoryOrchestrator",
    "MetadataExtractor",
    "MetadataRecord",
    "Run",
    "RunSummary",
]
