"""Agent configuration (paths to walk, properties to extract, collector)."""

from __future__ import annotations

import hashlib
import json
import os
import re
from pathlib import Path
from typing import Any, Dict, List, Optional
from urllib.parse import urlsplit

from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from fi_common.errors import ConfigurationError
from fi_runner.models.properties import PropertyKind, resolve_properties

_FORBIDDEN_HOST_CHARS = re.compile(r"[\x00-\x20\x7f]")


class InventoryConfig(BaseModel):
    """Main configuration for an inventory run."""

    paths: List[str] = Field(min_length=1, description="Absolute roots to walk, in order")
    properties: List[str] = Field(min_length=1, description="Property names to extract")
    server: str = Field(description="Collector host name or address")
    port: int = Field(gt=0, le=65535, description="Collector TCP port")

    timeout_seconds: Optional[float] = Field(
        default=None, gt=0, description="HTTP timeout; None blocks indefinitely"
    )
    print_properties: bool = Field(
        default=True, description="Echo the requested properties of each record"
    )
    checksum_algorithm: str = Field(default="md5", description="hashlib digest name")

    @model_validator(mode="before")
    @classmethod
    def _fold_key_case(cls, data: Any) -> Any:
        # Accept capitalized keys ("Paths", "Server") used by older config files.
        if not isinstance(data, dict):
            return data
        folded: Dict[str, Any] = {}
        for key, value in data.items():
            name = key.lower() if isinstance(key, str) else key
            if name in cls.model_fields and name not in data:
                folded.setdefault(name, value)
            else:
                folded[key] = value
        return folded

    @field_validator("paths")
    @classmethod
    def _validate_absolute(cls, paths: List[str]) -> List[str]:
        relative = [p for p in paths if not os.path.isabs(p)]
        if relative:
            raise ValueError(f"paths must be absolute: {', '.join(relative)}")
        return paths

    @field_validator("server")
    @classmethod
    def _validate_server(cls, server: str) -> str:
        host = server.strip() if server else ""
        if not host:
            raise ValueError("server must be non-empty")
        if _FORBIDDEN_HOST_CHARS.search(host):
            raise ValueError(
                f"server must not contain whitespace or control characters: {host!r}"
            )
        parsed = urlsplit(f"http://{host}")
        if parsed.hostname != host.lower().strip("[]"):
            raise ValueError(f"server must be a bare host name or address: {host!r}")
        return host

    @field_validator("checksum_algorithm")
    @classmethod
    def _validate_algorithm(cls, name: str) -> str:
        normalized = name.strip().lower()
        if normalized not in hashlib.algorithms_available or normalized.startswith("shake_"):
            raise ValueError(f"unsupported checksum algorithm: {name}")
        return normalized

    def property_kinds(self) -> frozenset[PropertyKind]:
        return resolve_properties(self.properties)

    @property
    def collector_url(self) -> str:
        return f"http://{self.server}:{self.port}"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "InventoryConfig":
        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            raise ConfigurationError(
                f"Invalid configuration: {exc.error_count()} error(s)",
                context={"errors": [err["msg"] for err in exc.errors()]},
                cause=exc,
            ) from exc

    @classmethod
    def from_json(cls, json_str: str) -> "InventoryConfig":
        try:
            data = json.loads(json_str)
        except json.JSONDecodeError as exc:
            raise ConfigurationError(
                f"Configuration is not valid JSON: {exc.msg}",
                context={"line": exc.lineno, "column": exc.colno},
                cause=exc,
            ) from exc
        if not isinstance(data, dict):
            raise ConfigurationError("Configuration must be a JSON object")
        return cls.from_dict(data)

    @classmethod
    def load(cls, filepath: Path) -> "InventoryConfig":
        try:
            text = Path(filepath).read_text(encoding="utf-8")
        except OSError as exc:
            raise ConfigurationError(
                f"Cannot read configuration file {filepath}",
                context={"path": filepath},
                cause=exc,
            ) from exc
        return cls.from_json(text)
