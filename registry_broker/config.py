"""Broker connection settings.

Settings are resolved from, lowest to highest precedence:

1. built-in defaults
2. a YAML file (``registry_broker.yaml`` in the working directory, or an
   explicit path)
3. ``REGISTRY_BROKER_BASE_URL`` / ``REGISTRY_BROKER_TIMEOUT`` environment
   variables
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://hol.org/registry/api/v1"
DEFAULT_CONFIG_FILE = "registry_broker.yaml"

ENV_BASE_URL = "REGISTRY_BROKER_BASE_URL"
ENV_TIMEOUT = "REGISTRY_BROKER_TIMEOUT"


@dataclass(frozen=True)
class BrokerConfig:
    """Where the broker lives and how long to wait for it.

    Attributes:
        base_url: API root, e.g. ``https://hol.org/registry/api/v1``.
        timeout: Request timeout in seconds. None waits indefinitely.
    """

    base_url: str = DEFAULT_BASE_URL
    timeout: float | None = None

    def __post_init__(self) -> None:
        # Frozen dataclass, so bypass __setattr__
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))

    @property
    def search_url(self) -> str:
        return f"{self.base_url}/search"

    @classmethod
    def load(cls, path: str | Path | None = None) -> BrokerConfig:
        """Build a config from the YAML file and environment."""
        config = cls()

        file_path = Path(path) if path is not None else Path(DEFAULT_CONFIG_FILE)
        if file_path.exists():
            config = replace(config, **_read_yaml(file_path))
        elif path is not None:
            raise FileNotFoundError(f"Config file not found: {file_path}")

        return config.with_env()

    def with_env(self) -> BrokerConfig:
        """Apply environment variable overrides."""
        overrides: dict[str, Any] = {}
        base_url = os.environ.get(ENV_BASE_URL)
        if base_url:
            overrides["base_url"] = base_url
        timeout = os.environ.get(ENV_TIMEOUT)
        if timeout:
            overrides["timeout"] = _parse_timeout(timeout)
        return replace(self, **overrides) if overrides else self


def _read_yaml(path: Path) -> dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a mapping, got {type(data).__name__}")

    values: dict[str, Any] = {}
    for key, value in data.items():
        if key == "base_url":
            values["base_url"] = str(value)
        elif key == "timeout":
            values["timeout"] = _parse_timeout(value)
        else:
            logger.warning("Ignoring unknown key '%s' in %s", key, path)
    return values


def _parse_timeout(value: Any) -> float | None:
    if value is None or str(value).strip().lower() in ("", "none", "null"):
        return None
    timeout = float(value)
    if timeout <= 0:
        raise ValueError(f"timeout must be positive, got {value!r}")
    return timeout
