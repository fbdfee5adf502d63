"""Install a scaffolded project's dependencies in the background."""

import logging

from .config import ConfigError, Settings, load_settings
from .execution import InstallHandle, install_deps, run_command, run_in_pkg
from .orchestrator import BackgroundInstall, InstallOutcome, background_install_deps
from .package_managers import LOCK_FILES, PackageManager, detect_package_manager
from .paths import get_config_dir, get_config_path
from .spinner import start_spinner
from .staging import STAGING_PREFIX, make_staging_id, setup_staging

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def setup_logging(debug: bool = False) -> None:
    """Configure root logging: DEBUG with --debug, WARNING otherwise."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format=LOG_FORMAT,
        force=True,
    )


__all__ = [
    "setup_logging",
    "ConfigError",
    "Settings",
    "load_settings",
    "InstallHandle",
    "run_command",
    "install_deps",
    "run_in_pkg",
    "BackgroundInstall",
    "InstallOutcome",
    "background_install_deps",
    "PackageManager",
    "LOCK_FILES",
    "detect_package_manager",
    "get_config_dir",
    "get_config_path",
    "start_spinner",
    "STAGING_PREFIX",
    "make_staging_id",
    "setup_staging",
]
