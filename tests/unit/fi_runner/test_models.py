"""Tests for property resolution, records and configuration models."""

from __future__ import annotations

import json
from datetime import UTC, datetime
from pathlib import Path

import pytest

from fi_common.errors import ConfigurationError
from fi_runner.models.config import InventoryConfig
from fi_runner.models.properties import PropertyKind, ordered, resolve_properties
from fi_runner.models.records import MetadataRecord, Run


pytestmark = pytest.mark.unit_runner


def _config(**overrides) -> dict:
    data = {
        "paths": ["/tmp/a"],
        "properties": ["path", "checksum"],
        "server": "collector",
        "port": 8080,
    }
    data.update(overrides)
    return data


def test_resolve_properties_ignores_unknown_names() -> None:
    resolved = resolve_properties(["Path", " checksum ", "size", "lastModified", ""])
    assert resolved == {PropertyKind.PATH, PropertyKind.CHECKSUM, PropertyKind.LASTMODIFIED}


def test_ordered_follows_declaration_order() -> None:
    kinds = {PropertyKind.CHECKSUM, PropertyKind.PATH, PropertyKind.FILESIZE}
    assert ordered(kinds) == [PropertyKind.PATH, PropertyKind.FILESIZE, PropertyKind.CHECKSUM]


def test_metadata_record_payload_uses_collector_keys() -> None:
    stamp = datetime(2024, 5, 1, 12, 30, tzinfo=UTC)
    record = MetadataRecord(
        path="/tmp/a/f.txt", filesize=4, last_modified=stamp, run_id="run-1"
    )
    payload = record.to_payload()
    assert payload == {
        "path": "/tmp/a/f.txt",
        "filesize": 4,
        "lastModified": "2024-05-01T12:30:00Z",
        "filename": "",
        "extension": "",
        "checksum": "",
        "runId": "run-1",
    }


def test_run_payload_views_hold_only_lifecycle_fields() -> None:
    start = datetime(2024, 5, 1, tzinfo=UTC)
    end = datetime(2024, 5, 1, 0, 5, tzinfo=UTC)
    run = Run(id="abc", machine_name="host1", start=start, end=end, files_count=7)

    assert run.start_payload().to_payload() == {
        "id": "abc",
        "machineName": "host1",
        "start": "2024-05-01T00:00:00Z",
        "end": None,
        "filesCount": 0,
    }
    assert run.end_payload().to_payload() == {
        "id": "abc",
        "machineName": "",
        "start": None,
        "end": "2024-05-01T00:05:00Z",
        "filesCount": 7,
    }


def test_config_accepts_capitalized_keys_and_string_port() -> None:
    cfg = InventoryConfig.from_dict(
        {
            "Paths": ["/data"],
            "Properties": ["path", "bogus"],
            "Server": "localhost",
            "Port": "9000",
            "unrelated": True,
        }
    )
    assert cfg.paths == ["/data"]
    assert cfg.port == 9000
    assert cfg.collector_url == "http://localhost:9000"
    assert cfg.property_kinds() == {PropertyKind.PATH}
    assert cfg.print_properties is True
    assert cfg.timeout_seconds is None


@pytest.mark.parametrize(
    "overrides",
    [
        {"paths": []},
        {"properties": []},
        {"paths": ["relative/dir"]},
        {"server": "  "},
        {"server": "bad host"},
        {"server": "collector\tlocal"},
        {"server": "collector:9000"},
        {"server": "user@collector"},
        {"server": "collector/api"},
        {"port": 0},
        {"port": 70000},
        {"checksum_algorithm": "nope"},
        {"timeout_seconds": 0},
    ],
)
def test_config_rejects_invalid_values(overrides: dict) -> None:
    with pytest.raises(ConfigurationError) as exc_info:
        InventoryConfig.from_dict(_config(**overrides))
    assert exc_info.value.context["errors"]


@pytest.mark.parametrize("server", ["collector.local", "10.0.0.5", "[::1]", " Collector "])
def test_config_accepts_bare_hosts(server: str) -> None:
    cfg = InventoryConfig.from_dict(_config(server=server))
    assert cfg.server == server.strip()


def test_config_missing_required_field() -> None:
    data = _config()
    del data["server"]
    with pytest.raises(ConfigurationError):
        InventoryConfig.from_dict(data)


def test_config_load_errors(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError):
        InventoryConfig.load(tmp_path / "missing.json")

    broken = tmp_path / "broken.json"
    broken.write_text("{not json")
    with pytest.raises(ConfigurationError):
        InventoryConfig.load(broken)

    listing = tmp_path / "list.json"
    listing.write_text("[]")
    with pytest.raises(ConfigurationError):
        InventoryConfig.load(listing)


def test_config_load_normalizes_checksum_algorithm(tmp_path: Path) -> None:
    target = tmp_path / "config.json"
    target.write_text(json.dumps(_config(checksum_algorithm="SHA256")))

    loaded = InventoryConfig.load(target)
    assert loaded.checksum_algorithm == "sha256"
    assert loaded.server == "collector"
