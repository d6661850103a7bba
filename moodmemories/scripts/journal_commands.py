"""CLI commands for the mood journal.

Usage:
    flask export-entries                       # Print entries as JSON
    flask export-entries --output entries.json
    flask set-api-key                          # Prompt for a Gemini API key
"""

from __future__ import annotations

from pathlib import Path

import click
from flask.cli import with_appcontext


@click.command("export-entries")
@click.option("--output", "-o", type=click.Path(dir_okay=False, writable=True), help="File to write instead of stdout")
@with_appcontext
def export_entries_command(output: str | None):
    """Export all journal entries as formatted JSON."""
    from moodmemories.domains.journal.services.export_service import export_entries
    from moodmemories.domains.journal.state import get_state

    try:
        body = export_entries(get_state().entries.entries)
    except ValueError:
        click.echo("No entries to export.", err=True)
        raise SystemExit(1)

    if output:
        Path(output).write_text(body, encoding="utf-8")
        click.echo(f"Exported {len(get_state().entries)} entries to {output}")
    else:
        click.echo(body)


@click.command("set-api-key")
@click.option("--api-key", prompt="Gemini API key", hide_input=True, help="Key stored locally for AI features")
@with_appcontext
def set_api_key_command(api_key: str):
    """Store a Gemini API key in the local slot store."""
    from moodmemories.core.text_service import store_api_key

    try:
        store_api_key(api_key)
    except ValueError:
        click.echo("An empty key was not saved.", err=True)
        raise SystemExit(1)
    click.echo("API key saved.")


def register_commands(app):
    """Register CLI commands with the app."""
    app.cli.add_command(export_entries_command)
    app.cli.add_command(set_api_key_command)
