"""Server configuration: loaded from YAML, overridable from the CLI."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field, ValidationError

from agents_mcp import __version__


class ConfigError(Exception):
    """Raised when a configuration or rules file fails parsing or validation."""


class TelemetrySettings(BaseModel):
    """Optional telemetry configuration."""

    enabled: bool = False
    export_to_console: bool = False
    otlp_endpoint: str | None = None


class ServerSettings(BaseModel):
    """Top-level server settings."""

    host: str = "127.0.0.1"
    port: int = Field(default=4000, ge=1, le=65535)
    endpoint: str = "/sse"
    server_name: str = "agents-mcp-server"
    server_version: str = __version__
    protocol_version: str = "2024-11-05"
    remote_server_url: str = "http://localhost:3000/sse"
    registry: str | None = Field(
        default=None,
        description="Import path ('package.module:attribute') of the tool registry.",
    )
    rules_file: Path | None = Field(
        default=None,
        description="YAML file with parameter categorization rules.",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    telemetry: TelemetrySettings = Field(default_factory=TelemetrySettings)

    def with_overrides(self, **overrides: Any) -> ServerSettings:
        """Return a copy with every non-``None`` override applied and validated."""
        values = {k: v for k, v in overrides.items() if v is not None}
        if not values:
            return self
        try:
            return ServerSettings.model_validate({**self.model_dump(), **values})
        except ValidationError as exc:
            raise ConfigError(str(exc)) from exc


class SettingsLoader:
    """Load and validate a settings YAML file into :class:`ServerSettings`."""

    def __init__(self, path: Path) -> None:
        self._path = path

    def load(self) -> ServerSettings:
        """Read YAML, interpolate env vars, and validate.

        Environment variables in the form ``${VAR}`` or ``$VAR`` are expanded
        using :func:`os.path.expandvars` before YAML parsing. An empty file
        yields the defaults.

        Raises:
            ConfigError: On read errors, YAML parse errors or schema validation failures.
        """
        try:
            raw = self._path.read_text(encoding="utf-8")
        except OSError as exc:
            raise ConfigError(f"Cannot read {self._path}: {exc}") from exc

        expanded = os.path.expandvars(raw)

        try:
            data: Any = yaml.safe_load(expanded)
        except yaml.YAMLError as exc:
            raise ConfigError(f"YAML parse error: {exc}") from exc

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigError("Settings YAML must be a mapping")

        try:
            settings = ServerSettings.model_validate(data)
        except ValidationError as exc:
            raise ConfigError(str(exc)) from exc

        if settings.rules_file is not None and not settings.rules_file.is_absolute():
            settings = settings.model_copy(update={"rules_file": self._path.parent / settings.rules_file})
        return settings


def load_settings(path: Path | str | None = None) -> ServerSettings:
    """Load settings from *path*, or return the defaults when it is ``None``."""
    if path is None:
        return ServerSettings()
    return SettingsLoader(Path(path)).load()
