"""Configuration management using Pydantic Settings."""

from __future__ import annotations

from pathlib import Path
from typing import Literal

import yaml
from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from edge_prober.core.exceptions import ConfigError
from edge_prober.core.models import ProbeTarget


class ProberSettings(BaseSettings):
    """Prober module configuration."""

    tcp_timeout: float = Field(
        default=3.0,
        gt=0.0,
        le=120.0,
        description="TCP connect timeout in seconds",
    )

    udp_timeout: float = Field(
        default=5.0,
        gt=0.0,
        le=120.0,
        description="Timeout in seconds for the UDP connect/send path",
    )

    udp_payload: bytes = Field(
        default=b"\x00",
        description="Datagram sent by UDP probes",
    )

    @field_validator("udp_payload")
    @classmethod
    def _single_byte(cls, value: bytes) -> bytes:
        if len(value) != 1:
            raise ValueError("udp_payload must be exactly one byte")
        return value


class OutputSettings(BaseSettings):
    """Output configuration."""

    strict: bool = Field(
        default=False,
        description="Exit non-zero when any target fails",
    )

    clear_screen: bool = Field(
        default=False,
        description="Clear the terminal once before the run",
    )

    json_output: Path | None = Field(
        default=None,
        description="Also write the run report as JSON to this path",
    )


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="WARNING",
        description="Log level",
    )

    json_format: bool = Field(
        default=False,
        description="Output JSON logs for machine parsing",
    )

    log_file: Path | None = Field(
        default=None,
        description="Optional file path for logging",
    )

    @field_validator("level", mode="before")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        return value.upper() if isinstance(value, str) else value


class Settings(BaseSettings):
    """Main configuration container."""

    model_config = SettingsConfigDict(
        env_prefix="EDGE_PROBER_",
        env_nested_delimiter="__",
        case_sensitive=False,
    )

    # Sub-configurations
    prober: ProberSettings = Field(default_factory=ProberSettings)
    output: OutputSettings = Field(default_factory=OutputSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    # Empty means the built-in Cloudflare list
    targets: list[ProbeTarget] = Field(
        default_factory=list,
        description="Targets to probe, in report order",
    )

    # Global settings
    dry_run: bool = Field(
        default=False,
        description="Dry run mode - list targets without probing",
    )

    @classmethod
    def from_yaml(cls, path: Path) -> "Settings":
        """Load settings from a YAML configuration file."""
        if not path.exists():
            return cls()

        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Could not parse config file '{path}': {e}") from e
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigError(f"Could not read config file '{path}': {e}") from e

        if not isinstance(data, dict):
            raise ConfigError(f"Config file '{path}' must contain a mapping")

        try:
            return cls(**data)
        except ValidationError as e:
            raise ConfigError(f"Invalid config file '{path}': {e}") from e

    @classmethod
    def from_file_or_default(cls, path: Path | None = None) -> "Settings":
        """Load from file if exists, otherwise return defaults."""
        default_paths = [
            Path("edge-prober.yaml"),
            Path("edge-prober.yml"),
            Path(".edge-prober.yaml"),
            Path.home() / ".config" / "edge-prober" / "config.yaml",
        ]

        if path is not None:
            if not path.exists():
                raise ConfigError(f"Config file '{path}' does not exist")
            return cls.from_yaml(path)

        for default_path in default_paths:
            if default_path.exists():
                return cls.from_yaml(default_path)

        return cls()
