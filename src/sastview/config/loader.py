"""Load and merge configuration from .sastview.toml and env vars."""

from __future__ import annotations

import dataclasses
import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from sastview.config.defaults import CONFIG_FILENAME
from sastview.config.schema import (
    OUTPUT_FORMATS,
    FiltersConfig,
    LinksConfig,
    OutputConfig,
    SastViewConfig,
)
from sastview.report.filtering import SEVERITY_CHOICES


class ConfigError(Exception):
    """Raised when config is malformed or unreadable."""


def find_config_file(base_dir: Path, override: Optional[str] = None) -> Optional[Path]:
    """Locate the config file. *override* takes precedence."""
    if override:
        p = Path(override)
        if not p.is_file():
            raise ConfigError(f"Config file not found: {override}")
        return p
    candidate = base_dir / CONFIG_FILENAME
    return candidate if candidate.is_file() else None


def _parse_toml(path: Path) -> Dict[str, Any]:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"Failed to parse {path}: {exc}") from exc


def _build_section(data: Dict[str, Any], cls: type, section: str):
    """Build a dataclass from a TOML section dict, ignoring unknown keys."""
    raw = data.get(section, {})
    if not isinstance(raw, dict):
        raise ConfigError(f"[{section}] must be a table")
    valid_fields = {f.name for f in dataclasses.fields(cls)}
    filtered = {k: v for k, v in raw.items() if k in valid_fields}
    return cls(**filtered)


def _validate(cfg: SastViewConfig) -> None:
    if cfg.output.format not in OUTPUT_FORMATS:
        raise ConfigError(
            f"Invalid output format {cfg.output.format!r} "
            f"(expected one of: {', '.join(OUTPUT_FORMATS)})"
        )
    if cfg.filters.severity not in SEVERITY_CHOICES:
        raise ConfigError(f"Invalid severity filter {cfg.filters.severity!r}")


def _merge_env_overrides(cfg: SastViewConfig) -> None:
    """Apply SASTVIEW_* environment variable overrides."""
    if val := os.environ.get("SASTVIEW_FORMAT"):
        if val in OUTPUT_FORMATS:
            cfg.output.format = val  # type: ignore[assignment]
    if val := os.environ.get("SASTVIEW_SEVERITY"):
        if val in SEVERITY_CHOICES:
            cfg.filters.severity = val
    if (val := os.environ.get("SASTVIEW_PATH_PREFIX")) is not None:
        cfg.filters.path = val
    if val := os.environ.get("SASTVIEW_REPO"):
        cfg.links.repo = val.strip()


def load_config(
    base_dir: Path,
    config_override: Optional[str] = None,
) -> SastViewConfig:
    """Load, validate, and return a SastViewConfig."""
    config_path = find_config_file(base_dir, config_override)

    if config_path is None:
        cfg = SastViewConfig()
    else:
        raw = _parse_toml(config_path)
        cfg = SastViewConfig(
            version=str(raw.get("version", "1.0")),
            output=_build_section(raw, OutputConfig, "output"),
            filters=_build_section(raw, FiltersConfig, "filters"),
            links=_build_section(raw, LinksConfig, "links"),
        )
        _validate(cfg)

    _merge_env_overrides(cfg)
    return cfg
