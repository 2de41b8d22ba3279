"""Metadata and run records exchanged with the collector."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# --- Pydantic models for the collector wire format (camelCase JSON keys) ---


class _WireModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_payload(self) -> dict[str, Any]:
        """Return a JSON-ready dict using the collector's key names."""
        return self.model_dump(mode="json", by_alias=True)


class MetadataRecord(_WireModel):
    """One filesystem entry observed during a walk.

    Fields not requested by the active property set keep their zero value.
    """

    path: str = Field(default="", description="Absolute path of the entry")
    filesize: int = Field(default=0, description="Size reported by lstat")
    last_modified: Optional[datetime] = Field(
        default=None, description="Timezone-aware modification time"
    )
    filename: str = Field(default="", description="Base name (files only)")
    extension: str = Field(default="", description="Suffix after the last dot (files only)")
    checksum: str = Field(default="", description="Hex content digest (files only)")
    run_id: str = Field(default="", description="Identifier of the owning run")


class Run(_WireModel):
    """One execution of the agent across all configured paths."""

    id: str
    machine_name: str = ""
    start: Optional[datetime] = None
    end: Optional[datetime] = None
    files_count: int = 0

    def start_payload(self) -> "Run":
        """Run creation view: id, machine name and start only."""
        return Run(id=self.id, machine_name=self.machine_name, start=self.start)

    def end_payload(self) -> "Run":
        """Run completion view: id, end and file count only."""
        return Run(id=self.id, end=self.end, files_count=self.files_count)


def records_payload(records: Sequence[MetadataRecord]) -> list[dict[str, Any]]:
    return [record.to_payload() for record in records]
