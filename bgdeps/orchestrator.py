"""Background dependency install into a staging directory, then relocation."""

import asyncio
import logging
import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

import click

from .errors import format_install_failure
from .execution import InstallHandle, install_deps
from .package_managers import LOCK_FILES, PackageManager
from .spinner import start_spinner
from .staging import DEPENDENCY_DIR, move_best_effort, replace_directory, setup_staging

_logging = logging.getLogger(__name__)


class InstallOutcome(Enum):
    ABORTED = "aborted"
    SUCCEEDED = "succeeded"
    INSTALL_FAILED = "install_failed"
    RELOCATION_FAILED = "relocation_failed"


@dataclass(frozen=True)
class _OutcomeAction:
    result: bool
    spinner: str | None
    show_failure_message: bool = False


# INSTALL_FAILED finishes the spinner as a success so the manual-install
# message is the only thing that reads as an error.
_OUTCOME_ACTIONS = {
    InstallOutcome.ABORTED: _OutcomeAction(result=False, spinner=None),
    InstallOutcome.SUCCEEDED: _OutcomeAction(result=True, spinner="succeed"),
    InstallOutcome.INSTALL_FAILED: _OutcomeAction(
        result=False, spinner="succeed", show_failure_message=True
    ),
    InstallOutcome.RELOCATION_FAILED: _OutcomeAction(result=False, spinner="fail"),
}


def _source_dir(source: Any) -> Path:
    """Accept a path or an integration object exposing ``dir``."""
    if isinstance(source, (str, os.PathLike)):
        return Path(source)
    return Path(getattr(source, "dir"))


class BackgroundInstall:
    """An install running in a staging directory, awaiting ``complete``."""

    def __init__(
        self,
        package_manager: PackageManager,
        staging_dir: Path,
        handle: InstallHandle,
        hide_spinner: bool = False,
    ):
        self.package_manager = package_manager
        self.staging_dir = staging_dir
        self.handle = handle
        self.hide_spinner = hide_spinner
        self.outcome: InstallOutcome | None = None
        self._result: "asyncio.Future[bool] | None" = None

    def abort(self) -> None:
        self.handle.abort()

    async def complete(self, run_install: bool, out_dir: str | os.PathLike) -> bool:
        """Finish the background install.

        With ``run_install`` False the install is aborted and nothing is
        written. Otherwise waits for the install and moves ``node_modules``
        and any lock file into ``out_dir``. Never raises; the return value
        is True only when the dependency directory was relocated.

        Only the first call does any work; later or overlapping calls wait
        for it and return its result.
        """
        if self._result is None:
            self._result = asyncio.ensure_future(self._complete(run_install, Path(out_dir)))
        else:
            _logging.debug("complete() already started, waiting for its result")
        return await self._result

    async def _complete(self, run_install: bool, out_dir: Path) -> bool:
        if not run_install:
            self.abort()
            self.outcome = InstallOutcome.ABORTED
            return False

        spinner = start_spinner(
            f"Installing {self.package_manager} dependencies...", self.hide_spinner
        )
        try:
            installed = await self.handle.completion
            if installed:
                self._relocate(out_dir)
                outcome = InstallOutcome.SUCCEEDED
            else:
                outcome = InstallOutcome.INSTALL_FAILED
        except asyncio.CancelledError:
            spinner.fail()
            raise
        except Exception as e:
            _logging.debug(f"Relocation failed: {type(e).__name__}: {e}")
            outcome = InstallOutcome.RELOCATION_FAILED

        self.outcome = outcome
        action = _OUTCOME_ACTIONS[outcome]
        if action.spinner == "succeed":
            spinner.succeed()
        elif action.spinner == "fail":
            spinner.fail()
        if action.show_failure_message:
            click.echo(format_install_failure(self.package_manager), err=True)
        return action.result

    def _relocate(self, out_dir: Path) -> None:
        replace_directory(self.staging_dir / DEPENDENCY_DIR, out_dir / DEPENDENCY_DIR)
        moved = move_best_effort(self.staging_dir, out_dir, LOCK_FILES)
        _logging.debug(f"Moved {DEPENDENCY_DIR} and {moved or 'no lock file'} to {out_dir}")


def background_install_deps(
    package_manager: "PackageManager | str",
    source: Any,
    hide_spinner: bool = False,
    *,
    timeout: float | None = None,
    staging_root: str | os.PathLike | None = None,
) -> BackgroundInstall:
    """Start installing ``source``'s dependencies in a fresh staging directory.

    Must be called from a running event loop. Staging setup happens before
    this returns; the install itself runs in the background until
    ``complete`` is awaited.
    """
    pm = PackageManager.parse(package_manager)
    staging_dir = setup_staging(_source_dir(source), staging_root)
    handle = install_deps(pm, staging_dir, timeout=timeout)
    return BackgroundInstall(pm, staging_dir, handle, hide_spinner)


__all__ = [
    "InstallOutcome",
    "BackgroundInstall",
    "background_install_deps",
]
