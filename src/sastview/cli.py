"""sastview CLI — Typer application with show, repo, link, and init commands."""

from __future__ import annotations

import os
import sys
import time
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from sastview import __version__

app = typer.Typer(
    name="sastview",
    help="Browse GitLab SAST reports with filters, pages, and source links.",
    add_completion=False,
    no_args_is_help=True,
)

console = Console(stderr=True)


def _load_config(config: Optional[str]):
    """Load config from the working directory, exit 2 on failure."""
    from sastview.config.loader import ConfigError, load_config

    try:
        return load_config(Path.cwd(), config)
    except ConfigError as exc:
        console.print(f"[bold red]Config error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc


def _stored_repo(store, fallback: str) -> str:
    """SASTVIEW_REPO, then the remembered URL, then *fallback* from config."""
    from sastview.config.store import REPO_KEY

    env_repo = os.environ.get("SASTVIEW_REPO", "").strip()
    return env_repo or store.get(REPO_KEY) or fallback


def _persist_repo(store, repo: str) -> None:
    """Save the repo URL; a failed write only costs persistence."""
    from sastview.config.store import REPO_KEY, StoreError

    try:
        store.set(REPO_KEY, repo)
    except StoreError as exc:
        console.print(f"[yellow]⚠[/yellow]  {exc}")


def _read_report(source: str) -> str:
    try:
        if source == "-":
            return sys.stdin.read()
        return Path(source).read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as exc:
        name = "stdin" if source == "-" else source
        console.print(f"[bold red]Error:[/bold red] cannot read {name}: {exc}")
        raise typer.Exit(code=2) from exc


# ── show ──────────────────────────────────────────────────────────────────────


@app.command()
def show(
    report: str = typer.Argument(..., help="Path to the SAST report JSON, or - for stdin"),
    repo: Optional[str] = typer.Option(None, "--repo", "-r", help="Repository URL used for source links (remembered)"),
    severity: Optional[str] = typer.Option(None, "--severity", "-s", help="Severity filter: Critical | High | Medium | Low"),
    path: Optional[str] = typer.Option(None, "--path", "-p", help="Only show findings whose file starts with this prefix"),
    page: int = typer.Option(1, "--page", min=1, help="Page number (1-based)"),
    format: Optional[str] = typer.Option(None, "--format", "-f", help="Output format: terminal | json"),
    output: Optional[str] = typer.Option(None, "--output", "-o", help="Write the JSON view to file"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .sastview.toml"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
    debug: bool = typer.Option(False, "--debug", help="Debug output with timing"),
) -> None:
    """Show one page of findings from a SAST report."""
    from sastview.config.schema import OUTPUT_FORMATS
    from sastview.config.store import StateStore
    from sastview.output import json_report, terminal
    from sastview.report.filtering import SEVERITY_CHOICES, FilterState
    from sastview.viewer import ReportViewer, ViewStatus

    cfg = _load_config(config)

    # --- CLI overrides ---
    if format:
        if format not in OUTPUT_FORMATS:
            console.print(f"[bold red]Invalid format:[/bold red] {format}")
            raise typer.Exit(code=2)
        cfg.output.format = format  # type: ignore[assignment]
    if severity is not None:
        if severity not in SEVERITY_CHOICES:
            console.print(f"[bold red]Invalid severity:[/bold red] {severity}")
            raise typer.Exit(code=2)
        cfg.filters.severity = severity
    if path is not None:
        cfg.filters.path = path

    # --- Repository base URL ---
    store = StateStore()
    if repo is not None:
        repo = repo.strip()
        _persist_repo(store, repo)
    else:
        repo = _stored_repo(store, cfg.links.repo)

    if verbose or debug:
        console.print(f"[dim]Repository: {repo or '-'}[/dim]")
        console.print(f"[dim]Filters: severity={cfg.filters.severity!r} path={cfg.filters.path!r}[/dim]")

    # --- Load ---
    start = time.perf_counter()
    text = _read_report(report)
    viewer = ReportViewer(
        repo=repo,
        filters=FilterState(severity=cfg.filters.severity, path=cfg.filters.path),
        page=page,
    )
    result = viewer.load_text(text)
    view = viewer.view()

    if debug:
        console.print(f"[dim]Load + filter: {(time.perf_counter() - start) * 1000:.0f}ms[/dim]")
    if result.is_large:
        console.print(f"[dim]Large report loaded ({result.size_kb} KB)[/dim]")
    if view.report is not None and page > view.page_info.total_pages:
        console.print(
            f"[yellow]⚠[/yellow]  Page {page} is past the last page "
            f"({view.page_info.total_pages})."
        )

    # --- Output ---
    report_text: Optional[str] = None
    if cfg.output.format == "terminal":
        terminal.render(
            view,
            show_summary=cfg.output.show_summary,
            show_identifiers=cfg.output.show_identifiers,
        )
    else:
        report_text = json_report.render(view)
        print(report_text)

    if output:
        report_text = report_text or json_report.render(view)
        Path(output).write_text(report_text, encoding="utf-8")
        if verbose:
            console.print(f"[dim]View written to {output}[/dim]")

    if view.status is ViewStatus.INVALID:
        raise typer.Exit(code=2)


# ── repo ──────────────────────────────────────────────────────────────────────


@app.command()
def repo(
    url: Optional[str] = typer.Argument(None, help="Repository URL to remember, e.g. https://gitlab.com/group/project/-/blob/main/"),
    clear: bool = typer.Option(False, "--clear", help="Forget the stored repository URL"),
) -> None:
    """Show, set, or clear the remembered repository URL."""
    from sastview.config.store import REPO_KEY, StateStore, StoreError
    from sastview.report.links import normalize_repo_url

    store = StateStore()

    if clear:
        try:
            removed = store.delete(REPO_KEY)
        except StoreError as exc:
            console.print(f"[bold red]Error:[/bold red] {exc}")
            raise typer.Exit(code=2) from exc
        console.print("[green]✓[/green] Repository URL cleared" if removed else "[dim]Nothing stored.[/dim]")
        return

    if url is None:
        stored = store.get(REPO_KEY)
        if stored:
            print(stored)
        else:
            console.print("[dim]No repository URL stored.[/dim]")
        return

    url = url.strip()
    try:
        store.set(REPO_KEY, url)
    except StoreError as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc

    console.print(f"[green]✓[/green] Stored {url}")
    if normalize_repo_url(url) is None:
        console.print("[yellow]⚠[/yellow]  Not a repository URL; source links will be disabled.")


# ── link ──────────────────────────────────────────────────────────────────────


@app.command()
def link(
    file: str = typer.Argument(..., help="File path relative to the repository root"),
    start: int = typer.Option(..., "--start", min=1, help="First line"),
    end: Optional[int] = typer.Option(None, "--end", min=1, help="Last line"),
    repo: Optional[str] = typer.Option(None, "--repo", "-r", help="Repository URL (defaults to the stored one)"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .sastview.toml"),
) -> None:
    """Print the deep link for a file and line range."""
    from sastview.config.store import StateStore
    from sastview.report.links import resolve_source_link
    from sastview.report.models import Location

    if repo is None:
        cfg = _load_config(config)
        repo = _stored_repo(StateStore(), cfg.links.repo)

    if end is not None and end < start:
        console.print(f"[bold red]Invalid range:[/bold red] --end {end} is before --start {start}")
        raise typer.Exit(code=2)

    url = resolve_source_link(repo, Location(file=file, start_line=start, end_line=end))
    if not url:
        console.print("[bold red]Error:[/bold red] cannot build a link; set a repository URL with 'sastview repo URL'")
        raise typer.Exit(code=1)
    print(url)


# ── init ──────────────────────────────────────────────────────────────────────


@app.command()
def init() -> None:
    """Generate a starter .sastview.toml in the working directory."""
    from sastview.config.defaults import CONFIG_FILENAME, DEFAULT_TOML

    config_path = Path.cwd() / CONFIG_FILENAME
    if config_path.exists():
        console.print(f"[yellow]⚠[/yellow]  {CONFIG_FILENAME} already exists at {config_path}")
        raise typer.Exit(code=1)

    config_path.write_text(DEFAULT_TOML, encoding="utf-8")
    console.print(f"[green]✓[/green] Created {config_path}")


# ── version ───────────────────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        print(f"sastview {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", "-V", callback=_version_callback,
        is_eager=True, help="Show version and exit",
    ),
) -> None:
    """sastview — browse SAST report findings from the terminal."""
