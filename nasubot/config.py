"""Run configuration: config file first, then environment / .env file."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsError


class ConfigError(Exception):
    """Raised when the config file is missing, unreadable or invalid."""


class Settings(BaseSettings):
    """Settings for one notifier run.

    Values passed explicitly (from the config file) win over NASUBOT_*
    environment variables, which win over .env.
    """

    model_config = {
        "env_prefix": "NASUBOT_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    # Mount points to report on (exact mount paths, e.g. "/" or "/mnt/data")
    mount_points: list[str] = Field(min_length=1)

    # Alert when remaining space drops to this percentage or below
    remaining_space_alert: int = Field(ge=0, le=100)

    # Slack incoming webhook
    slack_webhook_url: str = Field(min_length=1)

    # btrfs binary used for `scrub status`
    btrfs_command: str = "btrfs"

    # Logging
    log_level: str = "INFO"

    @field_validator("mount_points")
    @classmethod
    def _dedupe_mounts(cls, v: list[str]) -> list[str]:
        # first occurrence wins, configured order kept
        return list(dict.fromkeys(v))

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, v: str) -> str:
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log level: {v}")
        return level


def load_settings(path: str | Path) -> Settings:
    """Read a JSON or YAML config file and build Settings from it."""
    p = Path(path)
    try:
        with open(p, "r", encoding="utf-8") as f:
            if p.suffix.lower() == ".json":
                raw: Any = json.load(f)
            else:
                raw = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"cannot read {p}: {e}") from e
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ConfigError(f"cannot parse {p}: {e}") from e

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigError(f"{p} must contain a mapping, got {type(raw).__name__}")

    try:
        return Settings(**raw)
    except (ValidationError, SettingsError) as e:
        raise ConfigError(f"invalid config {p}: {e}") from e
