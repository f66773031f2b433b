"""Configuration file management for CLI."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import httpx
import yaml

from .validation import validate_url
from src.client import HubClient

DEFAULT_URL = "http://localhost:8084"


@dataclass
class ClientSettings:
    """Where and how the CLI talks to the hub."""

    url: str
    timeout: float = 30.0


class ConfigError(Exception):
    """Configuration file error."""

    pass


class ConfigManager:
    """Manages CLI configuration in ~/.hub/config.yaml.

    The hub URL is resolved from, in order: an explicit ``--url``, the
    ``HUB_URL`` environment variable, the config file, then
    ``DEFAULT_URL``.
    """

    DEFAULT_DIR = Path.home() / ".hub"
    CONFIG_FILE = "config.yaml"

    def __init__(self, config_dir: Optional[Path] = None) -> None:
        self._config_dir = config_dir or self.DEFAULT_DIR
        self._config_path = self._config_dir / self.CONFIG_FILE

    @property
    def config_dir(self) -> Path:
        return self._config_dir

    @property
    def config_path(self) -> Path:
        return self._config_path

    def exists(self) -> bool:
        return self._config_path.exists()

    def load_file(self) -> dict:
        """Read the config file. Returns {} when there is none."""
        if not self._config_path.exists():
            return {}
        with open(self._config_path) as f:
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ConfigError(f"Invalid config file {self._config_path}: {e}") from e
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigError(f"Invalid config file {self._config_path}: expected a mapping")
        return data

    def save(self, settings: ClientSettings, force: bool = False) -> None:
        """Write settings to the config file. Raises ConfigError if it exists."""
        if self.exists() and not force:
            raise ConfigError(
                f"Config already exists at {self._config_path}. Use --force to overwrite."
            )
        self._config_dir.mkdir(parents=True, exist_ok=True)
        with open(self._config_path, "w") as f:
            yaml.safe_dump({"url": settings.url, "timeout": settings.timeout}, f)

    def resolve(self, url: Optional[str] = None) -> ClientSettings:
        data = self.load_file()
        raw_url = url or os.environ.get("HUB_URL") or data.get("url") or DEFAULT_URL
        try:
            timeout = float(data.get("timeout", 30.0))
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Invalid timeout in config: {data.get('timeout')!r}") from e
        return ClientSettings(url=validate_url(str(raw_url)), timeout=timeout)

    def open_client(
        self,
        url: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> HubClient:
        """Build a client for the resolved hub URL.

        ``transport`` is passed through to httpx, e.g. an ASGI transport
        for an in-process hub.
        """
        settings = self.resolve(url)
        return HubClient(settings.url, timeout=settings.timeout, transport=transport)
