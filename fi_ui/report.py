"""Console report of the requested properties of walked entries."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from fi_runner.api import MetadataRecord, PropertyKind
from fi_runner.models.properties import ordered

_COLUMN_TITLES = {
    PropertyKind.PATH: "Path",
    PropertyKind.FILESIZE: "Size",
    PropertyKind.LASTMODIFIED: "Last modified",
    PropertyKind.FILENAME: "Filename",
    PropertyKind.EXTENSION: "Extension",
    PropertyKind.CHECKSUM: "Checksum",
}


@dataclass
class TableModel:
    title: str
    columns: list[str]
    rows: list[list[str]]


def format_property(record: MetadataRecord, kind: PropertyKind) -> str:
    if kind is PropertyKind.PATH:
        return record.path
    if kind is PropertyKind.FILESIZE:
        return str(record.filesize)
    if kind is PropertyKind.LASTMODIFIED:
        return record.last_modified.isoformat() if record.last_modified else ""
    if kind is PropertyKind.FILENAME:
        return record.filename
    if kind is PropertyKind.EXTENSION:
        return record.extension
    return record.checksum


def build_table_model(
    root: str,
    records: Sequence[MetadataRecord],
    properties: frozenset[PropertyKind],
) -> TableModel:
    kinds = ordered(properties)
    return TableModel(
        title=f"{root} ({len(records)} entries)",
        columns=[_COLUMN_TITLES[kind] for kind in kinds],
        rows=[[format_property(record, kind) for kind in kinds] for record in records],
    )


class PropertyReport:
    """Print one Rich table per walked path."""

    def __init__(self, console: Console) -> None:
        self._console = console

    def show(
        self,
        root: str,
        records: Sequence[MetadataRecord],
        properties: frozenset[PropertyKind],
    ) -> None:
        model = build_table_model(root, records, properties)
        if not model.columns:
            self._console.print(f"[dim]{escape(model.title)}: no recognized properties[/dim]")
            return
        table = Table(
            title=Text(model.title),
            box=box.ROUNDED,
            border_style="blue",
            header_style="bold blue",
        )
        for column in model.columns:
            table.add_column(column, overflow="fold")
        for row in model.rows:
            table.add_row(*(Text(cell) for cell in row))
        self._console.print(table)
