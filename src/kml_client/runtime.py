"""Runtime context & bootstrap utilities."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from kml_client.errors import ConfigError
from kml_client.infrastructure.logging import setup_logging

DEFAULT_CONFIG_PATH = "src/configs/default.yaml"


@dataclass(slots=True)
class RuntimeConfig:
    """Settings from YAML, falling back to ``KML_CLIENT_*`` env vars, then defaults."""

    raw: dict[str, Any]
    path: Path

    def _get(self, key: str, default: Any = None) -> Any:
        value = self.raw.get(key)
        if value is None:
            value = os.getenv(f"KML_CLIENT_{key.upper()}") or default
        return value

    @property
    def base_url(self) -> str:
        return str(self._get("base_url", "http://localhost/cgi-bin/"))

    @property
    def cgi(self) -> str:
        return str(self._get("cgi", "google_earth.cgi"))

    @property
    def element_id(self) -> str:
        return str(self._get("element_id", "kml"))

    @property
    def timeout(self) -> float | None:
        value = self._get("timeout")
        if value in (None, ""):
            return None
        try:
            return float(value)
        except (TypeError, ValueError):
            raise ConfigError(f"timeout must be a number of seconds, got {value!r}") from None

    @property
    def request_log(self) -> Path | None:
        value = self._get("request_log")
        return Path(value) if value else None

    def as_dict(self) -> dict[str, Any]:
        return {
            "config_path": str(self.path),
            "base_url": self.base_url,
            "cgi": self.cgi,
            "element_id": self.element_id,
            "timeout": self.timeout,
            "request_log": str(self.request_log) if self.request_log else None,
        }


class AppContext:
    _instance: AppContext | None = None

    def __init__(self, config: RuntimeConfig):
        self.config = config

    @classmethod
    def init(cls, config: RuntimeConfig) -> AppContext:
        if cls._instance is None:
            cls._instance = cls(config)
        return cls._instance

    @classmethod
    def get(cls) -> AppContext:
        if cls._instance is None:
            raise RuntimeError("AppContext not initialized")
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        cls._instance = None


def load_config(path: Path) -> RuntimeConfig:
    if not path.exists():
        return RuntimeConfig(raw={}, path=path)
    data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ValueError("Config root must be a mapping")
    return RuntimeConfig(raw=data, path=path)


def bootstrap(config_path: Path | None = None, force: bool = False) -> AppContext:
    if not force:
        try:
            return AppContext.get()
        except RuntimeError:
            pass
    AppContext.reset()
    load_dotenv(override=False)
    setup_logging()
    cfg_path = config_path or Path(os.getenv("KML_CLIENT_CONFIG", DEFAULT_CONFIG_PATH))
    config = load_config(cfg_path)
    return AppContext.init(config)
