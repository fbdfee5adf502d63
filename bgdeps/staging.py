"""Staging directories used to install dependencies in isolation."""

import logging
import os
import random
import shutil
import string
import tempfile
import time
from pathlib import Path
from typing import Iterable

import click

_logging = logging.getLogger(__name__)

STAGING_PREFIX = "create-qwik-"
MANIFEST_FILE = "package.json"
DEPENDENCY_DIR = "node_modules"

_BASE36_DIGITS = string.digits + string.ascii_lowercase
# Largest integer a JavaScript number holds exactly; keeps ids short.
_MAX_SAFE_INTEGER = 2**53 - 1


def _to_base36(value: int) -> str:
    if value == 0:
        return "0"
    digits = []
    while value:
        value, remainder = divmod(value, 36)
        digits.append(_BASE36_DIGITS[remainder])
    return "".join(reversed(digits))


def make_staging_id() -> str:
    """Return a collision-resistant staging directory name (not a secret)."""
    bits = random.getrandbits(53) ^ (time.time_ns() // 1_000_000)
    return STAGING_PREFIX + _to_base36(bits & _MAX_SAFE_INTEGER)


def _report_setup_error(error: Exception) -> None:
    _logging.error(f"Staging setup failed: {error}")
    click.echo(f"\n❌ {click.style(str(error), fg='red')}\n", err=True)


def setup_staging(
    source_dir: str | os.PathLike, staging_root: str | os.PathLike | None = None
) -> Path:
    """Create a staging directory holding a copy of ``source_dir``'s manifest.

    Setup errors are reported and swallowed; the install that follows will
    then fail and report through its own path.
    """
    root = Path(staging_root) if staging_root else Path(tempfile.gettempdir())
    staging_dir = root / make_staging_id()

    try:
        staging_dir.mkdir()
    except OSError as e:
        _report_setup_error(e)

    try:
        shutil.copyfile(Path(source_dir) / MANIFEST_FILE, staging_dir / MANIFEST_FILE)
    except OSError as e:
        _report_setup_error(e)

    _logging.debug(f"Staging directory: {staging_dir}")
    return staging_dir


def replace_directory(src: Path, dest: Path) -> None:
    """Move ``src`` to ``dest``, replacing whatever ``dest`` held."""
    if not src.is_dir():
        raise FileNotFoundError(f"No directory to move: {src}")
    if dest.is_dir() and not dest.is_symlink():
        shutil.rmtree(dest)
    elif dest.exists() or dest.is_symlink():
        dest.unlink()
    shutil.move(str(src), str(dest))


def move_best_effort(
    src_dir: Path, dest_dir: Path, names: Iterable[str]
) -> list[str]:
    """Move each named file from ``src_dir`` to ``dest_dir``, ignoring failures.

    A missing file is the normal case (only one lock file exists per
    package manager). Returns the names that were moved.
    """
    moved = []
    for name in names:
        try:
            os.replace(src_dir / name, dest_dir / name)
        except OSError:
            continue
        moved.append(name)
    return moved


def cleanup_staging(staging_dir: Path) -> None:
    shutil.rmtree(staging_dir, ignore_errors=True)


__all__ = [
    "STAGING_PREFIX",
    "MANIFEST_FILE",
    "DEPENDENCY_DIR",
    "make_staging_id",
    "setup_staging",
    "replace_directory",
    "move_best_effort",
    "cleanup_staging",
]
