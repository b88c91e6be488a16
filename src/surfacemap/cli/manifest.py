"""CLI command: surfacemap manifest — print the host tool manifest."""

from __future__ import annotations

import json

import click

from surfacemap.plugin import MANIFEST


@click.command()
def manifest() -> None:
    """Print the tool manifest as JSON."""
    click.echo(json.dumps(MANIFEST, indent=2))
