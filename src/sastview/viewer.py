"""Viewer state — current report, filters, page, and repository base.

The viewer is the only stateful piece. Every change goes through a
setter, and :meth:`ReportViewer.view` recomputes the visible page from
scratch with the pure functions in :mod:`sastview.report`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional, Tuple

from sastview.report.adapter import (
    NOT_A_REPORT_HINT,
    LoadResult,
    adapt_report,
    parse_report_text,
)
from sastview.report.filtering import (
    FilterState,
    IndexedFinding,
    PageInfo,
    filter_findings,
    index_findings,
    paginate,
)
from sastview.report.links import resolve_source_link, source_label
from sastview.report.models import Identifier, Location, ScanReport


class ViewStatus(str, Enum):
    EMPTY = "empty"  # nothing loaded yet
    INVALID = "invalid"  # input given, but not a report
    NO_MATCHES = "no_matches"  # report loaded, filters match nothing
    READY = "ready"


@dataclass(frozen=True)
class FindingRecord:
    """Display-ready finding with its resolved source link."""

    key: str
    index: int
    severity: str
    category: Optional[str]
    name: Optional[str]
    description: Optional[str]  # Markdown, rendered by the output layer
    identifiers: Tuple[Identifier, ...]
    location: Location
    link: str  # "" when the link cannot be resolved
    label: str

    @property
    def has_link(self) -> bool:
        return bool(self.link)


@dataclass(frozen=True)
class ReportView:
    status: ViewStatus
    page_info: PageInfo
    report: Optional[ScanReport] = None
    findings: List[FindingRecord] = field(default_factory=list)
    error: Optional[str] = None


def to_record(item: IndexedFinding, repo: str) -> FindingRecord:
    finding = item.finding
    return FindingRecord(
        key=item.key,
        index=item.index,
        severity=finding.severity,
        category=finding.category,
        name=finding.name,
        description=finding.description,
        identifiers=finding.identifiers,
        location=finding.location,
        link=resolve_source_link(repo, finding.location),
        label=source_label(finding.location),
    )


class ReportViewer:
    """Owns the ephemeral UI state and derives the visible findings."""

    def __init__(
        self,
        repo: str = "",
        filters: Optional[FilterState] = None,
        page: int = 1,
    ) -> None:
        self.repo = repo
        self.filters = filters or FilterState()
        self.page = page
        self.last_load: LoadResult = LoadResult()
        self._indexed: List[IndexedFinding] = []
        self._filtered: List[IndexedFinding] = []
        self._count: Optional[int] = None

    @property
    def report(self) -> Optional[ScanReport]:
        return self.last_load.report

    @property
    def filtered_count(self) -> int:
        return len(self._filtered)

    # ── state changes ─────────────────────────────────────────────────────

    def load_text(self, text: str) -> LoadResult:
        """Replace the current report with the one parsed from *text*."""
        return self._replace(parse_report_text(text))

    def load(self, value: Any) -> LoadResult:
        """Replace the current report with an already-parsed value."""
        report = adapt_report(value)
        if report is None:
            return self._replace(LoadResult(error=NOT_A_REPORT_HINT))
        return self._replace(LoadResult(report=report))

    def set_filters(
        self, severity: Optional[str] = None, path: Optional[str] = None
    ) -> None:
        self.filters = FilterState(
            severity=self.filters.severity if severity is None else severity,
            path=self.filters.path if path is None else path,
        )
        self._refilter()

    def set_page(self, page: int) -> None:
        self.page = page

    def set_repo(self, repo: str) -> None:
        self.repo = repo

    def _replace(self, result: LoadResult) -> LoadResult:
        self.last_load = result
        # Fresh indices for every load; nothing carries over from the old report
        self._indexed = index_findings(result.report.findings) if result.report else []
        self._refilter()
        return result

    def _refilter(self) -> None:
        self._filtered = filter_findings(self._indexed, self.filters)
        if self.report is None:
            # Without a report the page and last count stay as they were
            return
        count = len(self._filtered)
        if self._count is not None and count != self._count:
            self.page = 1
        self._count = count

    # ── derived view ──────────────────────────────────────────────────────

    def view(self) -> ReportView:
        visible, info = paginate(self._filtered, self.page)

        if self.report is None:
            status = ViewStatus.INVALID if self.last_load.is_invalid else ViewStatus.EMPTY
            return ReportView(status=status, page_info=info, error=self.last_load.error)

        status = ViewStatus.READY if self._filtered else ViewStatus.NO_MATCHES
        return ReportView(
            status=status,
            page_info=info,
            report=self.report,
            findings=[to_record(item, self.repo) for item in visible],
        )
