"""JSON reporter for scripting."""

from __future__ import annotations

import json
from typing import Any, Dict, List

from sastview.report.models import Tool
from sastview.viewer import ReportView


def _tool(tool: Tool) -> Dict[str, Any]:
    return {
        "id": tool.id,
        "name": tool.name,
        "vendor": tool.vendor,
        "version": tool.version,
    }


def to_dict(view: ReportView) -> Dict[str, Any]:
    """Convert a ReportView to a JSON-serialisable dict."""
    info = view.page_info
    findings_list: List[Dict[str, Any]] = []
    for r in view.findings:
        findings_list.append({
            "key": r.key,
            "index": r.index,
            "severity": r.severity,
            "category": r.category,
            "name": r.name,
            "description": r.description,
            "file": r.location.file,
            "start_line": r.location.start_line,
            **({"end_line": r.location.end_line} if r.location.end_line else {}),
            "link": r.link,
            "identifiers": [
                {
                    "type": i.type,
                    "name": i.name,
                    **({"value": i.value} if i.value else {}),
                    **({"url": i.url} if i.url else {}),
                }
                for i in r.identifiers
            ],
        })

    data: Dict[str, Any] = {
        "status": view.status.value,
        "page": info.page,
        "page_size": info.page_size,
        "total_pages": info.total_pages,
        "matching_findings": info.total_count,
        "findings": findings_list,
    }
    if view.error:
        data["error"] = view.error
    if view.report is not None:
        scan = view.report.scan
        data["report"] = {
            "version": view.report.version,
            "total_findings": view.report.total_findings,
            "status": scan.status,
            "start_time": scan.start_time,
            "end_time": scan.end_time,
            "analyzer": _tool(scan.analyzer),
            "scanner": _tool(scan.scanner),
        }
    return data


def render(view: ReportView) -> str:
    """Return formatted JSON string."""
    return json.dumps(to_dict(view), indent=2)
