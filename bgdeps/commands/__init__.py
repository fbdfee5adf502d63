"""CLI command definitions for bgdeps."""

import click

from bgdeps.commands.detect import detect
from bgdeps.commands.install import install
from bgdeps.commands.run import run


@click.group()
@click.option("--debug", is_flag=True, help="Enable debug output for troubleshooting")
@click.pass_context
def cli(ctx, debug):
    """Install a scaffolded project's dependencies in the background."""
    ctx.ensure_object(dict)
    ctx.obj["debug"] = debug


cli.add_command(install)
cli.add_command(run)
cli.add_command(detect)

__all__ = ["cli"]


if __name__ == "__main__":
    cli()
