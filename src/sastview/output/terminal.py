"""Rich terminal reporter — severity pills, Markdown descriptions, source links."""

from __future__ import annotations

from typing import Optional

from rich.console import Console
from rich.markdown import Markdown
from rich.padding import Padding
from rich.rule import Rule
from rich.style import Style
from rich.text import Text

from sastview.report.models import NOT_AVAILABLE, ScanReport, display
from sastview.viewer import FindingRecord, ReportView, ViewStatus

_SEVERITY_STYLE = {
    "Critical": "bold white on red",
    "High": "bold white on dark_orange",
    "Medium": "bold black on yellow",
    "Low": "bold black on bright_cyan",
}

_DEFAULT_STYLE = "bold black on orange1"

_LINK_STYLE = "underline blue"


def _severity_pill(severity: str) -> Text:
    style = _SEVERITY_STYLE.get(severity, _DEFAULT_STYLE)
    return Text(f" {display(severity)} ", style=style)


def _link(label: str, url: Optional[str]) -> Text:
    if not url:
        return Text(label)
    return Text(label, style=Style.parse(_LINK_STYLE) + Style(link=url))


def render(
    view: ReportView,
    *,
    console: Optional[Console] = None,
    show_summary: bool = True,
    show_identifiers: bool = True,
) -> None:
    """Print *view* to the terminal using Rich."""
    console = console or Console()

    report = view.report
    if view.status is ViewStatus.INVALID:
        console.print(f"[bold red]{view.error}[/bold red]")
        return
    if report is None:
        console.print("[dim]No report loaded.[/dim]")
        return

    console.print()
    _print_header(console, report)

    if view.status is ViewStatus.NO_MATCHES:
        console.print()
        console.print("[bold yellow]No findings match the current filters.[/bold yellow]")
    else:
        for record in view.findings:
            _print_finding(console, record, show_identifiers=show_identifiers)

    info = view.page_info
    if info.show_pagination:
        console.print()
        console.print(
            f"[bold]Page {info.page} of {info.total_pages}[/bold] "
            f"[dim]({info.total_count} matching findings)[/dim]"
        )

    if show_summary:
        _print_summary(console, view, report)


def _print_header(console: Console, report: ScanReport) -> None:
    scan = report.scan
    console.print(Text("Results", style="bold"))
    console.print(
        Text(
            f"Versions: Report {display(report.version)}"
            f" / Analyzer {display(scan.analyzer.name)} {display(scan.analyzer.version)}"
            f" / Scanner {display(scan.scanner.name)} {display(scan.scanner.version)}",
            style="dim",
        )
    )
    console.print(Text(f"Status: {display(scan.status)}", style="dim"))


def _print_finding(console: Console, record: FindingRecord, *, show_identifiers: bool) -> None:
    console.print(Rule(style="dim"))
    title = Text.assemble(
        _severity_pill(record.severity),
        " ",
        (display(record.name), "bold"),
    )
    console.print(title)
    console.print(Text(f"Category: {display(record.category)}", style="dim"))

    if record.description:
        console.print(Padding(Markdown(record.description), (0, 0, 0, 2)))
    else:
        console.print(Text(f"  {NOT_AVAILABLE}", style="dim"))

    if show_identifiers and record.identifiers:
        console.print(Text("Identifiers", style="bold"))
        for ident in record.identifiers:
            console.print(Text.assemble("  • ", _link(ident.name or ident.key, ident.url)))

    source = Text("Source: ")
    if record.has_link:
        source.append_text(_link(f"Open {record.label}", record.link))
    else:
        source.append(f"{record.label or NOT_AVAILABLE} ", style="bold")
        source.append("(no repository link)", style="dim")
    console.print(source)


def _print_summary(console: Console, view: ReportView, report: ScanReport) -> None:
    info = view.page_info
    shown_from = info.start + 1 if view.findings else 0
    console.print()
    console.print(f"[dim]Findings:[/dim]  {report.total_findings}")
    console.print(f"[dim]Matching:[/dim]  {info.total_count}")
    console.print(
        f"[dim]Showing:[/dim]   {shown_from}-{info.start + len(view.findings)}"
    )
