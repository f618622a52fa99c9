# src/bcchecker/cli.py
"""
bc-checker Command Line Interface (CLI).

This module implements the user-facing terminal interface using `typer` and `rich`.

Features
--------
- **check**: Compare the current schema with the committed snapshot, print breaking
  and dangerous changes, and update the snapshot when needed.
- **verify**: Tell whether a snapshot file is machine-generated and untouched.
- **log**: Show the history of breaking changes recorded in a snapshot.

Exit codes
----------
`check` exits 0 only when the snapshot is up to date. A first run, a regenerated
snapshot, blocked breaking changes and a hand-edited snapshot all exit 1: each of
them needs a human to look at the result and commit it.

Usage
-----
    # Check an SDL file against the default snapshot location
    $ bc-checker check --schema schema.graphql

    # Check a schema object exported by the application
    $ bc-checker check --schema myapp.graphql.schema:schema --allow-breaking-changes
"""

from __future__ import annotations

import traceback
from pathlib import Path
from typing import Annotated

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from bcchecker.core import signing
from bcchecker.core.changelog import parse_block
from bcchecker.core.contracts.change import ChangeEntry
from bcchecker.core.contracts.outcome import CheckReport, Outcome
from bcchecker.core.errors import BreakingChangesBlockedError, SnapshotError
from bcchecker.core.settings import load_settings
from bcchecker.core.snapshot import split_snapshot
from bcchecker.pipelines.check import check_backward_compatibility
from bcchecker.schema.loader import load_schema

# Make .env values visible to imported schema modules as well as to settings
load_dotenv()

app = typer.Typer(
    help="bc-checker: keep your GraphQL schema backward compatible.",
    rich_markup_mode="markdown",
)
console = Console()


# --------------------------------------------------------------------------- #
# Helpers: Rendering
# --------------------------------------------------------------------------- #


def _changes_table(title: str, changes: list[ChangeEntry], style: str) -> Table:
    """Helper: Build a table of changes (kind, description)."""
    table = Table(title=title, title_style=f"bold {style}", border_style=style)
    table.add_column("Kind", style=style, no_wrap=True)
    table.add_column("Description")
    for change in changes:
        table.add_row(escape(change.kind), escape(change.description))
    return table


def _print_breaking_changes(changes: list[ChangeEntry]) -> None:
    console.print(_changes_table("BREAKING CHANGES", changes, "red"))


def _print_dangerous_changes(changes: list[ChangeEntry]) -> None:
    console.print(_changes_table("Dangerous changes", changes, "yellow"))


def _render_report(report: CheckReport) -> None:
    """Helper: Print the changes and the outcome message of a finished run."""
    if report.breaking_changes:
        _print_breaking_changes(report.breaking_changes)
    if report.dangerous_changes:
        _print_dangerous_changes(report.dangerous_changes)

    if report.outcome is Outcome.FIRST_RUN:
        location = escape(str(report.snapshot_location))
        console.print(f"[bold green]✅ New schema snapshot saved to:[/] {location}")
        console.print(
            "[dim]The snapshot did not exist yet. "
            "Commit it so future runs can compare against it.[/]"
        )
    elif report.outcome is Outcome.SNAPSHOT_REGENERATED:
        console.print(
            "[bold yellow]⚠️ Schema snapshot IS OUTDATED! (updated automatically)[/]"
        )
        console.print(
            "[cyan]Snapshot of the schema successfully created! In case you see this message "
            "in CI you have to run `bc-checker check` locally and commit the changes.[/]"
        )
    else:
        console.print(
            "[bold green]✅ Congratulations! NO BREAKING CHANGES or OUTDATED SCHEMA. Good job![/]"
        )


def _read_trusted_snapshot(snapshot: Path) -> str:
    """Helper: Read a snapshot and exit 1 unless its signature is valid."""
    text = snapshot.read_text(encoding="utf-8")
    if not signing.verify(text):
        console.print(f"[bold red]❌ Not a valid signed snapshot:[/] {escape(str(snapshot))}")
        raise typer.Exit(code=1)
    return text


# --------------------------------------------------------------------------- #
# Commands
# --------------------------------------------------------------------------- #


@app.command()  # type: ignore[misc]
def check(
    schema: Annotated[
        str | None,
        typer.Option(
            "--schema",
            "-s",
            help="SDL file or `package.module:attribute` of the current schema "
            "(defaults to `BC_SCHEMA`).",
        ),
    ] = None,
    snapshot: Annotated[
        Path | None,
        typer.Option(
            "--snapshot",
            "-o",
            dir_okay=False,
            help="Snapshot file (defaults to `BC_SNAPSHOT_LOCATION`).",
        ),
    ] = None,
    allow_breaking_changes: Annotated[
        bool | None,
        typer.Option(
            "--allow-breaking-changes/--no-allow-breaking-changes",
            help="Record breaking changes in the log instead of failing "
            "(defaults to `BC_ALLOW_BREAKING_CHANGES`).",
            show_default=False,
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show full error tracebacks for debugging."),
    ] = False,
) -> None:
    """
    Compare the current schema with its snapshot and update the snapshot.

    Fails when breaking changes are not allowed, when the snapshot was edited by
    hand, and whenever the snapshot had to be (re)written.
    """
    settings = load_settings()
    source = schema or settings.schema_source
    if not source:
        console.print("[bold red]❌ No schema given.[/] Use --schema or set BC_SCHEMA.")
        raise typer.Exit(code=2)
    location = snapshot or settings.snapshot_location
    allow = (
        settings.allow_breaking_changes
        if allow_breaking_changes is None
        else allow_breaking_changes
    )

    try:
        report = check_backward_compatibility(
            allow_breaking_changes=allow,
            snapshot_location=location,
            schema=load_schema(source),
        )
    except BreakingChangesBlockedError as e:
        _print_breaking_changes(e.changes)
        console.print(
            "[bold red]❌ Breaking changes are not allowed.[/] "
            "Rerun with --allow-breaking-changes to record them in the snapshot."
        )
        raise typer.Exit(code=e.outcome.exit_code) from e
    except SnapshotError as e:
        console.print(f"[bold red]❌ {escape(str(e))}[/]")
        raise typer.Exit(code=e.outcome.exit_code) from e
    except Exception as e:
        console.print(f"\n[bold red]❌ Error:[/bold red] {escape(str(e))}")
        if verbose:
            traceback.print_exc()
        raise typer.Exit(code=1) from e

    _render_report(report)
    raise typer.Exit(code=report.exit_code)


@app.command()  # type: ignore[misc]
def verify(
    snapshot: Annotated[
        Path,
        typer.Argument(
            exists=True,
            file_okay=True,
            dir_okay=False,
            readable=True,
            help="Snapshot file to verify.",
        ),
    ],
) -> None:
    """Check that a snapshot file is signed and was not edited by hand."""
    text = snapshot.read_text(encoding="utf-8")
    shown = escape(str(snapshot))
    if signing.verify(text):
        console.print(f"[bold green]✅ Signed and untouched:[/] {shown}")
        return
    if signing.is_signed(text):
        console.print(f"[bold red]❌ Modified after it was generated:[/] {shown}")
    else:
        console.print(f"[bold red]❌ Not signed:[/] {shown}")
    raise typer.Exit(code=1)


@app.command()  # type: ignore[misc]
def log(
    snapshot: Annotated[
        Path,
        typer.Argument(
            exists=True,
            file_okay=True,
            dir_okay=False,
            readable=True,
            help="Snapshot file whose breaking-change history to show.",
        ),
    ],
) -> None:
    """Show the breaking changes recorded in a snapshot, oldest first."""
    text = _read_trusted_snapshot(snapshot)
    entries = parse_block(split_snapshot(text).change_log_block)
    if not entries:
        console.print("[dim]No breaking changes recorded.[/dim]")
        return

    table = Table(title="Breaking changes log", border_style="cyan")
    table.add_column("Detected", style="cyan", no_wrap=True)
    table.add_column("Kind", style="magenta", no_wrap=True)
    table.add_column("Description")
    for entry in entries:
        detected = entry.detected_on.isoformat() if entry.detected_on else "-"
        table.add_row(detected, escape(entry.kind), escape(entry.description))
    console.print(table)


if __name__ == "__main__":
    app()
