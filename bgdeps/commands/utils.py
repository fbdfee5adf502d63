"""Shared helpers for commands."""

import sys

import click

from bgdeps import (
    ConfigError,
    PackageManager,
    Settings,
    detect_package_manager,
    get_config_path,
    load_settings,
)
from bgdeps.errors import format_suggestion

PM_CHOICE = click.Choice([pm.value for pm in PackageManager], case_sensitive=False)


def load_settings_or_exit() -> Settings:
    try:
        return load_settings()
    except ConfigError as e:
        hint = f"check {get_config_path()} and the BGDEPS_* environment variables"
        click.echo(format_suggestion(str(e), hint), err=True)
        sys.exit(1)


def resolve_package_manager(option: str | None, settings: Settings) -> PackageManager:
    """Pick the package manager: CLI option, then config, then user agent."""
    if option:
        return PackageManager.parse(option)
    if settings.package_manager is not None:
        return settings.package_manager
    return detect_package_manager()
