"""Finding filtering and pagination.

Pipeline: index the unfiltered findings, keep the ones matching both
prefix filters, then slice out the requested page. Every step is a pure
function of its inputs; nothing here mutates a report.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Sequence, Tuple, TypeVar

from sastview.report.models import Finding

PAGE_SIZE = 20

# Values offered by the severity selector; "" means no filter.
SEVERITY_CHOICES: Tuple[str, ...] = ("", "Critical", "High", "Medium", "Low")

T = TypeVar("T")


@dataclass(frozen=True)
class IndexedFinding:
    """A finding plus its position in the unfiltered list of the current report.

    The index is display-only: it disambiguates list keys when a report
    repeats identifiers and is not part of the source data.
    """

    index: int
    finding: Finding

    @property
    def key(self) -> str:
        return f"{self.finding.id}-{self.index}"


def index_findings(findings: Sequence[Finding]) -> List[IndexedFinding]:
    """Assign 0-based positions in input order."""
    return [IndexedFinding(index=i, finding=f) for i, f in enumerate(findings)]


@dataclass(frozen=True)
class FilterState:
    """Severity and file-path prefixes. Empty string = no filter."""

    severity: str = ""
    path: str = ""

    @property
    def is_active(self) -> bool:
        return bool(self.severity or self.path)

    def matches(self, finding: Finding) -> bool:
        """Case-sensitive prefix match on both the file path and the severity."""
        return (
            finding.location.file.startswith(self.path)
            and finding.severity.startswith(self.severity)
        )


def filter_findings(
    indexed: Sequence[IndexedFinding], state: FilterState
) -> List[IndexedFinding]:
    """Return the findings matching *state*, preserving order."""
    return [item for item in indexed if state.matches(item.finding)]


@dataclass(frozen=True)
class PageInfo:
    """Pagination metadata for one page of filtered findings."""

    page: int  # 1-based
    total_count: int
    page_size: int = PAGE_SIZE

    @property
    def total_pages(self) -> int:
        return max(1, math.ceil(self.total_count / self.page_size))

    @property
    def start(self) -> int:
        return self.page_size * (self.page - 1)

    @property
    def end(self) -> int:
        return self.start + self.page_size

    @property
    def show_pagination(self) -> bool:
        return self.total_count > self.page_size

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages


def paginate(
    items: Sequence[T], page: int, page_size: int = PAGE_SIZE
) -> Tuple[List[T], PageInfo]:
    """Slice out *page* (1-based) of *items*.

    Out-of-range pages are not clamped: callers reset to page 1 whenever
    the filtered count changes. A page below 1 yields an empty slice.
    """
    info = PageInfo(page=page, total_count=len(items), page_size=page_size)
    if info.start < 0:
        return [], info
    return list(items[info.start:info.end]), info


def select_findings(
    findings: Sequence[Finding], state: FilterState, page: int
) -> Tuple[List[IndexedFinding], PageInfo]:
    """Index, filter, and paginate *findings* in one call."""
    retained = filter_findings(index_findings(findings), state)
    return paginate(retained, page)
