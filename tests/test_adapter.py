"""Tests for the report adapter and model helpers."""

import json

from conftest import make_report, make_vuln

from sastview.report.adapter import (
    INVALID_JSON_HINT,
    LARGE_REPORT_CHARS,
    NOT_A_REPORT_HINT,
    adapt_report,
    looks_like_report,
    parse_report_text,
)
from sastview.report.models import Location, display


class TestShapeCheck:
    def test_full_report(self, small_report):
        assert looks_like_report(small_report) is True

    def test_missing_vulnerabilities_is_fine(self):
        assert looks_like_report(make_report()) is True

    def test_null_vulnerabilities_is_fine(self):
        data = make_report()
        data["vulnerabilities"] = None
        assert looks_like_report(data) is True

    def test_vulnerabilities_must_be_list(self):
        data = make_report()
        data["vulnerabilities"] = {"id": "x"}
        assert looks_like_report(data) is False

    def test_scan_required(self):
        assert looks_like_report({"vulnerabilities": []}) is False
        assert looks_like_report({"scan": "yes", "vulnerabilities": []}) is False

    def test_non_mapping_values(self):
        assert looks_like_report(None) is False
        assert looks_like_report([]) is False
        assert looks_like_report("report") is False
        assert looks_like_report(42) is False


class TestAdaptReport:
    def test_metadata(self, small_report):
        report = adapt_report(small_report)
        assert report is not None
        assert report.version == "15.0.7"
        assert report.scan.analyzer.name == "Semgrep"
        assert report.scan.analyzer.vendor == "GitLab"
        assert report.scan.scanner.version == "1.50.0"
        assert report.scan.status == "success"

    def test_findings_in_order(self, small_report):
        report = adapt_report(small_report)
        assert [f.id for f in report.findings] == ["vuln-000", "vuln-001", "vuln-002"]
        first = report.findings[0]
        assert first.severity == "High"
        assert first.location == Location(file="src/app/views.py", start_line=10, end_line=15)
        assert first.identifiers[0].name == "CWE-79"
        assert first.identifiers[0].url.startswith("https://cwe.mitre.org/")
        assert first.identifiers[1].url is None

    def test_absent_vulnerabilities(self):
        report = adapt_report(make_report())
        assert report is not None
        assert report.findings == ()

    def test_not_a_report(self):
        assert adapt_report({"hello": "world"}) is None

    def test_missing_fields_become_none(self):
        report = adapt_report({"scan": {}, "vulnerabilities": [{}]})
        finding = report.findings[0]
        assert report.version is None
        assert report.scan.analyzer.name is None
        assert finding.name is None
        assert finding.severity == ""
        assert finding.location.file == ""
        assert finding.location.start_line is None
        assert finding.identifiers == ()

    def test_non_mapping_entries_keep_positions(self):
        report = adapt_report(make_report([make_vuln(0), "garbage", make_vuln(2)]))
        assert len(report.findings) == 3
        assert report.findings[1].id is None
        assert report.findings[2].id == "vuln-002"

    def test_mistyped_fields(self):
        vuln = make_vuln(0)
        vuln["severity"] = ["High"]
        vuln["location"] = {"file": ["a.py"], "start_line": True, "end_line": "20"}
        vuln["identifiers"] = "CWE-79"
        report = adapt_report(make_report([vuln]))
        finding = report.findings[0]
        assert finding.severity == ""
        assert finding.location.file == ""
        assert finding.location.start_line is None
        assert finding.location.end_line == 20
        assert finding.identifiers == ()

    def test_numeric_version(self):
        data = make_report()
        data["version"] = 15
        assert adapt_report(data).version == "15"

    def test_legacy_message_used_as_name(self):
        vuln = make_vuln(0)
        del vuln["name"]
        vuln["message"] = "SQL injection"
        assert adapt_report(make_report([vuln])).findings[0].name == "SQL injection"

    def test_input_not_mutated(self, small_report):
        before = json.dumps(small_report, sort_keys=True)
        adapt_report(small_report)
        assert json.dumps(small_report, sort_keys=True) == before


class TestParseReportText:
    def test_empty_input_is_not_an_error(self):
        result = parse_report_text("   \n")
        assert result.report is None
        assert result.error is None
        assert result.is_invalid is False

    def test_invalid_json(self):
        result = parse_report_text("{not json")
        assert result.report is None
        assert result.error == INVALID_JSON_HINT
        assert result.is_invalid is True

    def test_json_but_not_report(self):
        result = parse_report_text('{"results": []}')
        assert result.error == NOT_A_REPORT_HINT
        assert result.is_invalid is True

    def test_valid_report(self, small_report):
        result = parse_report_text(json.dumps(small_report))
        assert result.report is not None
        assert result.error is None
        assert result.report.total_findings == 3

    def test_leading_byte_order_mark(self, small_report):
        result = parse_report_text("\ufeff" + json.dumps(small_report))
        assert result.error is None
        assert result.report is not None
        assert result.report.total_findings == 3

    def test_large_report_flag(self, small_report):
        text = json.dumps(small_report)
        text += " " * (LARGE_REPORT_CHARS + 1 - len(text))
        result = parse_report_text(text)
        assert result.is_large is True
        assert result.size_kb == round(len(text) / 1024)

    def test_small_report_not_large(self, small_report):
        assert parse_report_text(json.dumps(small_report)).is_large is False


class TestDisplay:
    def test_placeholder(self):
        assert display(None) == "N/A"
        assert display("") == "N/A"

    def test_value(self):
        assert display("success") == "success"
        assert display(3) == "3"

    def test_line_range(self):
        assert Location(file="a.py", start_line=10).line_range == "10"
        assert Location(file="a.py", start_line=10, end_line=15).line_range == "10-15"
        assert Location(file="a.py", start_line=3, end_line=3).line_range == "3-3"
        assert Location(file="a.py").line_range == ""
