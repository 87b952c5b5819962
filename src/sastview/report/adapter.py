"""Best-effort adapter from parsed JSON to :class:`ScanReport`.

The adapter never raises on bad data. A value that does not look like a
report yields ``None``; missing or mistyped nested fields become ``None``
or their defaults and are shown as placeholders downstream.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, List, Mapping, Optional

from sastview.report.models import (
    Finding,
    Identifier,
    Location,
    ScanInfo,
    ScanReport,
    Tool,
)

LARGE_REPORT_CHARS = 200_000

INVALID_JSON_HINT = "Invalid JSON format. Please check your input."
NOT_A_REPORT_HINT = "Input is valid JSON but does not look like a SAST report."


@dataclass(frozen=True)
class LoadResult:
    """Outcome of loading raw report text.

    ``report`` is None both before any input and after a failed load;
    ``error`` is only set in the latter case.
    """

    report: Optional[ScanReport] = None
    error: Optional[str] = None
    size: int = 0  # characters of input

    @property
    def is_invalid(self) -> bool:
        return self.report is None and self.error is not None

    @property
    def is_large(self) -> bool:
        return self.size > LARGE_REPORT_CHARS

    @property
    def size_kb(self) -> int:
        return round(self.size / 1024)


# ── field coercion ────────────────────────────────────────────────────────────


def _mapping(value: Any) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else {}


def _text(value: Any) -> Optional[str]:
    if isinstance(value, str):
        return value
    # Versions are sometimes written as bare numbers
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return None


def _line(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().isdecimal():
        return int(value.strip())
    return None


def _tool(raw: Any) -> Tool:
    data = _mapping(raw)
    return Tool(
        id=_text(data.get("id")),
        name=_text(data.get("name")),
        url=_text(data.get("url")),
        vendor=_text(_mapping(data.get("vendor")).get("name")),
        version=_text(data.get("version")),
    )


def _scan(raw: Mapping[str, Any]) -> ScanInfo:
    return ScanInfo(
        analyzer=_tool(raw.get("analyzer")),
        scanner=_tool(raw.get("scanner")),
        type=_text(raw.get("type")),
        start_time=_text(raw.get("start_time")),
        end_time=_text(raw.get("end_time")),
        status=_text(raw.get("status")),
    )


def _location(raw: Any) -> Location:
    data = _mapping(raw)
    return Location(
        file=_text(data.get("file")) or "",
        start_line=_line(data.get("start_line")),
        end_line=_line(data.get("end_line")),
    )


def _identifier(raw: Any) -> Identifier:
    data = _mapping(raw)
    return Identifier(
        type=_text(data.get("type")) or "",
        name=_text(data.get("name")) or "",
        value=_text(data.get("value")),
        url=_text(data.get("url")) or None,
    )


def adapt_finding(raw: Any) -> Finding:
    """Build a Finding from one ``vulnerabilities`` entry.

    Non-mapping entries still produce a (placeholder) Finding so that
    positions stay aligned with the input list.
    """
    data = _mapping(raw)
    identifiers = data.get("identifiers")
    return Finding(
        id=_text(data.get("id")),
        category=_text(data.get("category")),
        name=_text(data.get("name")) or _text(data.get("message")),
        description=_text(data.get("description")),
        cve=_text(data.get("cve")),
        severity=_text(data.get("severity")) or "",
        scanner=_tool(data.get("scanner")),
        location=_location(data.get("location")),
        identifiers=tuple(
            _identifier(item) for item in identifiers
        ) if isinstance(identifiers, list) else (),
    )


def looks_like_report(value: Any) -> bool:
    """Shape check: a ``scan`` object and, if present, a ``vulnerabilities`` list."""
    if not isinstance(value, Mapping):
        return False
    if not isinstance(value.get("scan"), Mapping):
        return False
    vulns = value.get("vulnerabilities")
    return vulns is None or isinstance(vulns, list)


def adapt_report(value: Any) -> Optional[ScanReport]:
    """Expose *value* as a ScanReport, or return None if it is not one."""
    if not looks_like_report(value):
        return None
    vulns: List[Any] = value.get("vulnerabilities") or []
    return ScanReport(
        scan=_scan(value["scan"]),
        version=_text(value.get("version")),
        findings=tuple(adapt_finding(item) for item in vulns),
    )


def parse_report_text(text: str) -> LoadResult:
    """Parse raw report text. JSON errors are reported, never raised."""
    if not text or not text.strip():
        return LoadResult()
    size = len(text)
    # json.loads rejects a leading byte order mark
    text = text.lstrip("\ufeff")
    try:
        data = json.loads(text)
    except (ValueError, RecursionError):
        return LoadResult(error=INVALID_JSON_HINT, size=size)

    report = adapt_report(data)
    if report is None:
        return LoadResult(error=NOT_A_REPORT_HINT, size=size)
    return LoadResult(report=report, size=size)
