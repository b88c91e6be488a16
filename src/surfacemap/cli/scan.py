"""CLI command: surfacemap scan <directory> — endpoint and attack surface inventory."""

from __future__ import annotations

import asyncio
import json
import signal
import sys
import threading
from collections.abc import Iterator
from contextlib import contextmanager

import click
from rich.console import Console
from rich.table import Table

from surfacemap.config import SurfaceMapConfig
from surfacemap.scanner.engine import ScanEngine
from surfacemap.scanner.errors import WorkspaceNotFoundError
from surfacemap.scanner.models import ENDPOINT_DETECTED, ScanResult, Severity

console = Console(stderr=True)

_SEVERITY_COLORS = {
    Severity.INFO: "blue",
    Severity.LOW: "cyan",
    Severity.MEDIUM: "yellow",
    Severity.HIGH: "red",
}

_FAIL_ON_CHOICES = [s.value for s in Severity] + ["never"]


@click.command()
@click.argument("directory", type=click.Path())
@click.option(
    "--exclude",
    "-e",
    multiple=True,
    help="Glob patterns for file or directory names to exclude.",
)
@click.option(
    "--workers",
    "-w",
    type=click.IntRange(min=1),
    default=None,
    help="Number of files analyzed in parallel.",
)
@click.option(
    "--max-file-size",
    type=click.IntRange(min=1),
    default=None,
    help="Skip source files larger than this many bytes (default: no limit).",
)
@click.option("--json", "as_json", is_flag=True, help="Print findings as JSON.")
@click.option("--save", is_flag=True, help="Store the result in the local database.")
@click.option(
    "--fail-on",
    type=click.Choice(_FAIL_ON_CHOICES),
    default="never",
    show_default=True,
    help="Exit with status 1 if any finding is at or above this severity.",
)
@click.pass_context
def scan(
    ctx: click.Context,
    directory: str,
    exclude: tuple[str, ...],
    workers: int | None,
    max_file_size: int | None,
    as_json: bool,
    save: bool,
    fail_on: str,
) -> None:
    """Scan source code for HTTP endpoints and attack surface signals."""
    config: SurfaceMapConfig = ctx.obj["config"]

    engine = ScanEngine(
        skip_dirs=config.skip_dirs,
        exclude_patterns=[*config.exclude_patterns, *exclude],
        max_file_size=max_file_size or config.max_file_size,
        workers=workers or config.workers,
    )

    if not as_json:
        console.print(f"[bold]surfacemap[/bold] scanning [cyan]{directory}[/cyan]\n")

    cancel = threading.Event()
    try:
        with _cancel_on_signal(cancel):
            result = engine.scan(directory, cancel=cancel)
    except WorkspaceNotFoundError as e:
        console.print(f"[red]Error:[/red] {e}")
        sys.exit(2)

    if save:
        scan_id = asyncio.run(_save(config, result))
        console.print(f"Saved scan [cyan]{scan_id}[/cyan]")

    if as_json:
        click.echo(json.dumps(_as_json(result), indent=2))
    else:
        _print_table(result)
        _print_summary(result)

    if fail_on != "never":
        threshold = Severity(fail_on).rank
        failing = sum(1 for f in result.findings if f.severity.rank >= threshold)
        if failing:
            console.print(f"\n[red]{failing} finding(s) at or above {fail_on}[/red]")
            sys.exit(1)


@contextmanager
def _cancel_on_signal(cancel: threading.Event) -> Iterator[threading.Event]:
    """Set ``cancel`` on SIGINT/SIGTERM while the block runs."""
    if threading.current_thread() is not threading.main_thread():
        yield cancel
        return

    def _signal_handler(signum: int, frame: object) -> None:
        console.print("\n[dim]Stopping after the current file...[/dim]")
        cancel.set()

    previous = {
        signum: signal.signal(signum, _signal_handler)
        for signum in (signal.SIGINT, signal.SIGTERM)
    }
    try:
        yield cancel
    finally:
        for signum, handler in previous.items():
            signal.signal(signum, handler)


async def _save(config: SurfaceMapConfig, result: ScanResult) -> str:
    from surfacemap.storage.db import get_db
    from surfacemap.storage.repos import ScanRepo

    db = await get_db(config.db_path)
    try:
        return await ScanRepo(db).save_result(result)
    finally:
        await db.close()


def _as_json(result: ScanResult) -> dict:
    return {
        "directory": result.directory,
        "files_scanned": result.files_scanned,
        "files_skipped": result.files_skipped,
        "files_failed": result.files_failed,
        "cancelled": result.cancelled,
        "duration": result.duration,
        "findings": [f.to_dict() for f in result.findings],
    }


def _print_table(result: ScanResult) -> None:
    if not result.findings:
        console.print("[green]No findings.[/green]")
        return

    # Highest severity first, then file, then line
    findings = sorted(
        result.findings,
        key=lambda f: (-f.severity.rank, f.file_path, f.start_line),
    )

    table = Table(title="Findings", show_lines=False)
    table.add_column("Severity", style="bold", width=8)
    table.add_column("Rule")
    table.add_column("File", style="cyan")
    table.add_column("Line", justify="right")
    table.add_column("Message", max_width=70)

    for finding in findings:
        color = _SEVERITY_COLORS.get(finding.severity, "white")
        table.add_row(
            f"[{color}]{finding.severity.value}[/{color}]",
            finding.rule_id,
            _shorten_path(finding.file_path, result.directory),
            str(finding.start_line),
            finding.message,
        )

    console.print(table)


def _print_summary(result: ScanResult) -> None:
    console.print(
        f"\nScanned {result.files_scanned} files "
        f"({result.files_skipped} skipped, {result.files_failed} failed) "
        f"in {result.duration:.2f}s"
    )
    endpoints = sum(1 for f in result.findings if f.rule_id == ENDPOINT_DETECTED.id)
    console.print(f"Endpoints: {endpoints}, total findings: {len(result.findings)}")
    if result.cancelled:
        console.print("[yellow]Scan cancelled; results are partial.[/yellow]")


def _shorten_path(file_path: str, base_dir: str) -> str:
    """Shorten file path relative to scan directory."""
    if file_path.startswith(base_dir):
        return file_path[len(base_dir) :].lstrip("/")
    return file_path
