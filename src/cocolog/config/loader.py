"""Load and merge configuration from .cocolog.toml and env vars."""

from __future__ import annotations

import dataclasses
import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from cocolog.config.schema import OUTPUT_FORMATS, CocoLogConfig, GitConfig, OutputConfig

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".cocolog.toml"


class ConfigError(Exception):
    """Raised when config is malformed or unreadable."""


def find_config_file(repo_root: Path, override: Optional[str] = None) -> Optional[Path]:
    """Locate the config file. *override* takes precedence."""
    if override:
        p = Path(override)
        if not p.is_file():
            raise ConfigError(f"Config file not found: {override}")
        return p
    candidate = repo_root / CONFIG_FILENAME
    return candidate if candidate.is_file() else None


def _parse_toml(path: Path) -> Dict[str, Any]:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"Failed to parse {path}: {exc}") from exc


def _merge_env_overrides(cfg: CocoLogConfig) -> None:
    """Apply COCOLOG_* environment variable overrides."""
    if val := os.environ.get("COCOLOG_FORMAT"):
        if val in OUTPUT_FORMATS:
            cfg.output.format = val  # type: ignore[assignment]
        else:
            logger.warning("Ignoring COCOLOG_FORMAT=%r", val)
    if val := os.environ.get("COCOLOG_MAX_COUNT"):
        try:
            cfg.git.max_count = int(val)
        except ValueError:
            logger.warning("Ignoring COCOLOG_MAX_COUNT=%r", val)
    if val := os.environ.get("COCOLOG_SINCE"):
        cfg.git.since = val


def _build_section(data: Dict[str, Any], cls: type, section: str):
    """Build a dataclass from a TOML section dict, ignoring unknown keys."""
    valid_fields = {f.name for f in dataclasses.fields(cls)}
    raw = data.get(section, {})
    if not isinstance(raw, dict):
        raise ConfigError(f"[{section}] must be a table")
    unknown = set(raw) - valid_fields
    if unknown:
        logger.debug("Unknown keys in [%s]: %s", section, ", ".join(sorted(unknown)))
    return cls(**{k: v for k, v in raw.items() if k in valid_fields})


def load_config(
    repo_root: Path,
    config_override: Optional[str] = None,
) -> CocoLogConfig:
    """Load, validate, and return a CocoLogConfig."""
    config_path = find_config_file(repo_root, config_override)

    if config_path is None:
        cfg = CocoLogConfig()
    else:
        raw = _parse_toml(config_path)
        cfg = CocoLogConfig(
            version=raw.get("version", "1.0"),
            git=_build_section(raw, GitConfig, "git"),
            output=_build_section(raw, OutputConfig, "output"),
        )
        if cfg.output.format not in OUTPUT_FORMATS:
            raise ConfigError(f"Unknown output format: {cfg.output.format!r}")

    _merge_env_overrides(cfg)
    return cfg
