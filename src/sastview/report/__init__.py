"""Report models, adapter, filtering, pagination, and deep links."""

from sastview.report.adapter import LoadResult, adapt_report, parse_report_text
from sastview.report.filtering import (
    PAGE_SIZE,
    SEVERITY_CHOICES,
    FilterState,
    IndexedFinding,
    PageInfo,
    filter_findings,
    index_findings,
    paginate,
    select_findings,
)
from sastview.report.links import normalize_repo_url, resolve_source_link
from sastview.report.models import (
    Finding,
    Identifier,
    Location,
    ScanInfo,
    ScanReport,
    Tool,
)

__all__ = [
    "PAGE_SIZE",
    "SEVERITY_CHOICES",
    "FilterState",
    "Finding",
    "Identifier",
    "IndexedFinding",
    "LoadResult",
    "Location",
    "PageInfo",
    "ScanInfo",
    "ScanReport",
    "Tool",
    "adapt_report",
    "filter_findings",
    "index_findings",
    "normalize_repo_url",
    "paginate",
    "parse_report_text",
    "resolve_source_link",
    "select_findings",
]
