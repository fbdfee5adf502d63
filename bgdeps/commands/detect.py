"""Detect command implementation."""

import click

from bgdeps.commands.utils import load_settings_or_exit, resolve_package_manager


@click.command()
def detect():
    """Print the package manager bgdeps would use here."""
    settings = load_settings_or_exit()
    click.echo(resolve_package_manager(None, settings).value)
