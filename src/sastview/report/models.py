"""SAST report data models.

These mirror the GitLab ``gl-sast-report.json`` layout closely enough for
display. Every scalar is optional: reports in the wild regularly omit
fields, and the viewer shows a placeholder instead of failing.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple

NOT_AVAILABLE = "N/A"


def display(value: Optional[object], fallback: str = NOT_AVAILABLE) -> str:
    """Return *value* as text, or *fallback* when it is missing or empty."""
    if value is None or value == "":
        return fallback
    return str(value)


@dataclass(frozen=True)
class Tool:
    """An analyzer or scanner entry from the ``scan`` section."""

    id: Optional[str] = None
    name: Optional[str] = None
    url: Optional[str] = None
    vendor: Optional[str] = None  # vendor.name
    version: Optional[str] = None


@dataclass(frozen=True)
class ScanInfo:
    analyzer: Tool = field(default_factory=Tool)
    scanner: Tool = field(default_factory=Tool)
    type: Optional[str] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    status: Optional[str] = None


@dataclass(frozen=True)
class Location:
    """File path plus line range of a finding."""

    file: str = ""
    start_line: Optional[int] = None
    end_line: Optional[int] = None

    @property
    def line_range(self) -> str:
        """``10`` or ``10-15``. A truthy ``end_line`` always adds the suffix."""
        if self.start_line is None:
            return ""
        if self.end_line:
            return f"{self.start_line}-{self.end_line}"
        return str(self.start_line)


@dataclass(frozen=True)
class Identifier:
    """Reference to an external vulnerability database entry (CWE, CVE, rule id...)."""

    type: str = ""
    name: str = ""
    value: Optional[str] = None
    url: Optional[str] = None

    @property
    def key(self) -> str:
        return f"{self.type}.{self.name}"


@dataclass(frozen=True)
class Finding:
    """One reported issue (a ``vulnerabilities`` entry)."""

    id: Optional[str] = None
    category: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None  # Markdown
    cve: Optional[str] = None
    severity: str = ""  # Critical | High | Medium | Low | anything else
    scanner: Tool = field(default_factory=Tool)
    location: Location = field(default_factory=Location)
    identifiers: Tuple[Identifier, ...] = ()


@dataclass(frozen=True)
class ScanReport:
    """A parsed report. Replaced wholesale whenever new input is loaded."""

    scan: ScanInfo = field(default_factory=ScanInfo)
    version: Optional[str] = None
    findings: Tuple[Finding, ...] = ()

    @property
    def total_findings(self) -> int:
        return len(self.findings)
