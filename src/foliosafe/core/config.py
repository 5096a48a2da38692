"""Configuration loader: YAML files + environment variables."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

import yaml
from dotenv import load_dotenv
from pydantic import ValidationError

from foliosafe.core.models import AppConfig, SanitizerConfig

logger = logging.getLogger(__name__)

_TRUE_VALUES = {"1", "true", "yes", "on"}


class ConfigError(Exception):
    """Raised when configuration cannot be read or does not validate."""


def _find_project_root() -> Path:
    """Walk up from cwd to find a directory containing pyproject.toml."""
    cwd = Path.cwd()
    for p in [cwd, *cwd.parents]:
        if (p / "pyproject.toml").exists():
            return p
    return cwd


def _read_yaml(path: Path) -> dict:
    try:
        with open(path) as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigError(f"Could not read config file {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")
    return data


def load_config(config_path: Optional[str] = None) -> AppConfig:
    """Load configuration from YAML + environment variables.

    Priority: env vars > .env file > YAML defaults.
    """
    root = _find_project_root()
    load_dotenv(root / ".env")

    if config_path:
        yaml_path = Path(config_path)
        if not yaml_path.exists():
            raise ConfigError(f"Config file not found: {yaml_path}")
    else:
        yaml_path = root / "config" / "default.yaml"

    yaml_data: dict = {}
    if yaml_path.exists():
        yaml_data = _read_yaml(yaml_path)
        logger.info("Loaded config from %s", yaml_path)
    else:
        logger.debug("No config file at %s, using defaults", yaml_path)

    # Sanitizer config with env overrides
    san_data = dict(yaml_data.get("sanitizer") or {})
    if os.getenv("FOLIOSAFE_MODE"):
        san_data["mode"] = os.environ["FOLIOSAFE_MODE"].strip().lower()
    if os.getenv("FOLIOSAFE_PARSER"):
        san_data["parser"] = os.environ["FOLIOSAFE_PARSER"].strip()
    if os.getenv("FOLIOSAFE_ALLOW_FTP"):
        san_data["allow_ftp"] = os.environ["FOLIOSAFE_ALLOW_FTP"].strip().lower() in _TRUE_VALUES

    log_level = os.getenv("FOLIOSAFE_LOG_LEVEL", yaml_data.get("log_level", "WARNING"))

    try:
        return AppConfig(
            sanitizer=SanitizerConfig(**san_data),
            log_level=str(log_level).upper(),
        )
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc
