"""Shared test fixtures — sample reports and an isolated state file."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

import pytest


def make_vuln(
    n: int,
    severity: str = "Medium",
    file: Optional[str] = None,
    start_line: int = 1,
    end_line: Optional[int] = None,
    vuln_id: Optional[str] = None,
) -> Dict[str, Any]:
    """Build one ``vulnerabilities`` entry in GitLab SAST format."""
    location: Dict[str, Any] = {
        "file": file if file is not None else f"src/module_{n}.py",
        "start_line": start_line,
    }
    if end_line is not None:
        location["end_line"] = end_line
    return {
        "id": vuln_id or f"vuln-{n:03d}",
        "category": "sast",
        "name": f"Finding {n}",
        "description": f"Issue **{n}** found. See [docs](https://example.com/{n}).",
        "cve": f"cve-{n}",
        "severity": severity,
        "scanner": {"id": "semgrep", "name": "Semgrep"},
        "location": location,
        "identifiers": [
            {
                "type": "cwe",
                "name": "CWE-79",
                "value": "79",
                "url": "https://cwe.mitre.org/data/definitions/79.html",
            },
            {"type": "semgrep_id", "name": f"rules.python.issue-{n}", "value": f"issue-{n}"},
        ],
    }


def make_report(vulns: Optional[List[Dict[str, Any]]] = None) -> Dict[str, Any]:
    """Wrap *vulns* in a complete report document."""
    report: Dict[str, Any] = {
        "version": "15.0.7",
        "scan": {
            "analyzer": {
                "id": "semgrep",
                "name": "Semgrep",
                "url": "https://gitlab.com/gitlab-org/security-products/analyzers/semgrep",
                "vendor": {"name": "GitLab"},
                "version": "4.12.0",
            },
            "scanner": {
                "id": "semgrep",
                "name": "Semgrep",
                "url": "https://github.com/returntocorp/semgrep",
                "vendor": {"name": "GitLab"},
                "version": "1.50.0",
            },
            "type": "sast",
            "start_time": "2024-03-01T10:00:00",
            "end_time": "2024-03-01T10:02:13",
            "status": "success",
        },
    }
    if vulns is not None:
        report["vulnerabilities"] = vulns
    return report


@pytest.fixture
def small_report() -> Dict[str, Any]:
    """Three findings of different severities and files."""
    return make_report([
        make_vuln(0, severity="High", file="src/app/views.py", start_line=10, end_line=15),
        make_vuln(1, severity="Low", file="tests/test_views.py", start_line=3),
        make_vuln(2, severity="Critical", file="src/app/db.py", start_line=42, end_line=42),
    ])


@pytest.fixture
def large_report() -> Dict[str, Any]:
    """45 findings; exactly 5 of them are High (every ninth)."""
    vulns = [
        make_vuln(i, severity="High" if i % 9 == 0 else "Medium")
        for i in range(45)
    ]
    return make_report(vulns)


@pytest.fixture
def report_file(tmp_path: Path, small_report: Dict[str, Any]) -> Path:
    path = tmp_path / "gl-sast-report.json"
    path.write_text(json.dumps(small_report), encoding="utf-8")
    return path


@pytest.fixture
def large_report_file(tmp_path: Path, large_report: Dict[str, Any]) -> Path:
    path = tmp_path / "gl-sast-report-large.json"
    path.write_text(json.dumps(large_report), encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path, monkeypatch) -> Path:
    """Point the state store at a temp file and clear SASTVIEW_* overrides."""
    state = tmp_path / "state" / "state.json"
    monkeypatch.setenv("SASTVIEW_STATE_FILE", str(state))
    for var in ("SASTVIEW_FORMAT", "SASTVIEW_SEVERITY", "SASTVIEW_PATH_PREFIX", "SASTVIEW_REPO"):
        monkeypatch.delenv(var, raising=False)
    return state
