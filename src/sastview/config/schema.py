"""Configuration schema — dataclasses for every config section."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

OutputFormat = Literal["terminal", "json"]

OUTPUT_FORMATS = ("terminal", "json")


@dataclass
class OutputConfig:
    format: OutputFormat = "terminal"
    show_summary: bool = True
    show_identifiers: bool = True


@dataclass
class FiltersConfig:
    severity: str = ""  # one of SEVERITY_CHOICES; "" = all
    path: str = ""  # file path prefix; "" = all


@dataclass
class LinksConfig:
    repo: str = ""  # fallback when nothing is persisted


@dataclass
class SastViewConfig:
    version: str = "1.0"
    output: OutputConfig = field(default_factory=OutputConfig)
    filters: FiltersConfig = field(default_factory=FiltersConfig)
    links: LinksConfig = field(default_factory=LinksConfig)
