"""CLI entry point — Click group with global options."""

from __future__ import annotations

import logging

import click

from surfacemap import __version__
from surfacemap.config import SurfaceMapConfig


@click.group()
@click.version_option(version=__version__, prog_name="surfacemap")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    help="Path to a YAML config file.",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.pass_context
def main(ctx: click.Context, config_path: str | None, verbose: bool) -> None:
    """surfacemap — inventory HTTP endpoints and attack surface in source code."""
    ctx.ensure_object(dict)

    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    try:
        config = SurfaceMapConfig.load(config_path)
    except ValueError as e:
        raise click.UsageError(str(e)) from e
    config.verbose = verbose
    ctx.obj["config"] = config


def _register_commands() -> None:
    from surfacemap.cli.manifest import manifest  # noqa: F811
    from surfacemap.cli.rules import rules  # noqa: F811
    from surfacemap.cli.scan import scan  # noqa: F811
    from surfacemap.cli.server import server  # noqa: F811

    main.add_command(scan)
    main.add_command(rules)
    main.add_command(manifest)
    main.add_command(server)


_register_commands()
