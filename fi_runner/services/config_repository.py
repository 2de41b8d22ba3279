"""File-system repository for the agent configuration."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

from fi_common.config.env import parse_float_env, parse_int_env
from fi_common.errors import ConfigurationError
from fi_runner.models.config import InventoryConfig

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_NAME = "config.json"


class ConfigRepository:
    """Resolve, load and persist config files in the local filesystem.

    Resolution order: explicit path, ``FI_CONFIG_PATH``, ``./config.json``,
    then ``$XDG_CONFIG_HOME/fi/config.json``.
    """

    def __init__(
        self, config_home: Optional[Path] = None, cwd: Optional[Path] = None
    ) -> None:
        xdg = os.environ.get("XDG_CONFIG_HOME")
        base = Path(xdg) if xdg else Path.home() / ".config"
        self.config_home = (config_home or base) / "fi"
        self.default_target = self.config_home / DEFAULT_CONFIG_NAME
        self._cwd = cwd

    def resolve_config_path(self, config_path: Optional[Path]) -> Optional[Path]:
        if config_path is not None:
            return Path(config_path).expanduser()

        env_path = os.environ.get("FI_CONFIG_PATH")
        if env_path:
            return Path(env_path).expanduser()

        local = (self._cwd or Path.cwd()) / DEFAULT_CONFIG_NAME
        if local.exists():
            return local
        if self.default_target.exists():
            return self.default_target
        return None

    def load(self, config_path: Optional[Path] = None) -> tuple[InventoryConfig, Path]:
        resolved = self.resolve_config_path(config_path)
        if resolved is None:
            raise ConfigurationError(
                "No configuration file found",
                context={"searched": [DEFAULT_CONFIG_NAME, self.default_target]},
            )
        cfg = InventoryConfig.load(resolved)
        logger.debug("Loaded configuration from %s", resolved)
        return apply_env_overrides(cfg), resolved


def apply_env_overrides(cfg: InventoryConfig) -> InventoryConfig:
    """Apply ``FI_COLLECTOR_SERVER``/``FI_COLLECTOR_PORT``/``FI_HTTP_TIMEOUT``."""
    updates: Dict[str, Any] = {}
    server = os.environ.get("FI_COLLECTOR_SERVER")
    if server and server.strip():
        updates["server"] = server.strip()
    port = parse_int_env(os.environ.get("FI_COLLECTOR_PORT"))
    if port is not None:
        updates["port"] = port
    timeout = parse_float_env(os.environ.get("FI_HTTP_TIMEOUT"))
    if timeout is not None:
        updates["timeout_seconds"] = timeout
    if not updates:
        return cfg
    logger.debug("Applying environment overrides: %s", sorted(updates))
    return InventoryConfig.from_dict({**cfg.model_dump(), **updates})
