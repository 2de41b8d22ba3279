from __future__ import annotations

import io
from datetime import UTC, datetime

import pytest
from rich.console import Console

from fi_runner.api import MetadataRecord, PropertyKind
from fi_ui.presenter import HeadlessPresenter, RichPresenter
from fi_ui.report import PropertyReport, build_table_model

pytestmark = pytest.mark.unit_ui


def _records() -> list[MetadataRecord]:
    return [
        MetadataRecord(path="/a", filesize=4096, run_id="r"),
        MetadataRecord(
            path="/a/[x].txt",
            filesize=4,
            last_modified=datetime(2024, 2, 3, 4, 5, 6, tzinfo=UTC),
            filename="[x].txt",
            extension="txt",
            checksum="098f6bcd4621d373cade4e832627b4f6",
            run_id="r",
        ),
    ]


def test_table_model_orders_columns_like_property_declaration() -> None:
    model = build_table_model(
        "/a",
        _records(),
        frozenset({PropertyKind.CHECKSUM, PropertyKind.PATH, PropertyKind.LASTMODIFIED}),
    )
    assert model.title == "/a (2 entries)"
    assert model.columns == ["Path", "Last modified", "Checksum"]
    assert model.rows[0] == ["/a", "", ""]
    assert model.rows[1] == [
        "/a/[x].txt",
        "2024-02-03T04:05:06+00:00",
        "098f6bcd4621d373cade4e832627b4f6",
    ]


def test_property_report_prints_literal_paths() -> None:
    out = io.StringIO()
    report = PropertyReport(Console(file=out, width=200))

    report.show("/a", _records(), frozenset({PropertyKind.PATH, PropertyKind.FILENAME}))

    text = out.getvalue()
    assert "/a/[x].txt" in text
    assert "Filename" in text


def test_property_report_without_recognized_properties() -> None:
    out = io.StringIO()
    PropertyReport(Console(file=out, width=200)).show("/a", _records(), frozenset())
    assert "no recognized properties" in out.getvalue()


def test_presenters() -> None:
    headless = HeadlessPresenter()
    headless.info("hello")
    headless.error("bad")
    assert headless.messages == [("info", "hello"), ("error", "bad")]

    out = io.StringIO()
    RichPresenter(Console(file=out, width=120)).success("done")
    assert "done" in out.getvalue()
