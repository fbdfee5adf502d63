"""Async child-process execution for package-manager commands."""

import asyncio
import logging
import os
import shutil
import signal
from pathlib import Path
from typing import Sequence

from .package_managers import PackageManager

_logging = logging.getLogger(__name__)

# Windows cannot deliver SIGINT to a child process.
ABORT_SIGNAL = signal.SIGTERM if os.name == "nt" else signal.SIGINT


class InstallHandle:
    """Completion and cancellation handle for one child process.

    ``completion`` resolves to True iff the process exited with code 0. It
    never raises: spawn errors, non-zero exits, timeouts and aborts all
    resolve to False.
    """

    def __init__(self) -> None:
        self.process: asyncio.subprocess.Process | None = None
        self.completion: "asyncio.Task[bool]"
        self._aborted = False

    @property
    def aborted(self) -> bool:
        return self._aborted

    def abort(self) -> None:
        """Interrupt the child process without waiting for it to exit."""
        self._aborted = True
        process = self.process
        if process is None or process.returncode is not None:
            return
        try:
            process.send_signal(ABORT_SIGNAL)
        except ProcessLookupError:
            pass

    def __await__(self):
        return self.completion.__await__()

    async def _run(
        self,
        command: str,
        args: Sequence[str],
        cwd: str | os.PathLike,
        timeout: float | None,
    ) -> bool:
        if self._aborted:
            _logging.debug(f"Aborted before start: {command}")
            return False

        executable = shutil.which(command) or command
        process = None
        try:
            _logging.debug(f"Running command: {command} {' '.join(args)} (cwd={cwd})")
            process = await asyncio.create_subprocess_exec(
                executable,
                *args,
                cwd=cwd,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.DEVNULL,
                stderr=asyncio.subprocess.DEVNULL,
            )
            self.process = process
            if self._aborted:
                self.abort()

            try:
                returncode = await asyncio.wait_for(process.wait(), timeout=timeout)
            except asyncio.TimeoutError:
                process.kill()
                _ = await process.wait()
                _logging.error(f"Command timed out after {timeout} seconds: {command}")
                return False

            _logging.debug(f"Command exited with {returncode}: {command}")
            return returncode == 0
        except asyncio.CancelledError:
            self.abort()
            raise
        except Exception as e:
            _logging.debug(
                f"Command execution failed: {type(e).__name__}: {e} | Command: {command}"
            )
            return False
        finally:
            if process:
                transport = getattr(process, "_transport", None)
                if transport:
                    transport.close()


def run_command(
    command: str,
    args: Sequence[str],
    cwd: str | os.PathLike,
    timeout: float | None = None,
) -> InstallHandle:
    """Start ``command`` with ``args`` in ``cwd`` with all stdio detached.

    Must be called from a running event loop. The process is spawned by a
    task scheduled on that loop; await ``handle.completion`` (or the handle
    itself) for the result.
    """
    loop = asyncio.get_running_loop()
    handle = InstallHandle()
    handle.completion = loop.create_task(
        handle._run(command, list(args), Path(cwd), timeout)
    )
    return handle


def install_deps(
    package_manager: "PackageManager | str",
    cwd: str | os.PathLike,
    timeout: float | None = None,
) -> InstallHandle:
    pm = PackageManager.parse(package_manager)
    return run_command(pm.value, ["install"], cwd, timeout=timeout)


def run_in_pkg(
    package_manager: "PackageManager | str",
    args: Sequence[str],
    cwd: str | os.PathLike,
    timeout: float | None = None,
) -> InstallHandle:
    """Run ``args`` through the package manager's ad-hoc exec proxy (npx for npm)."""
    pm = PackageManager.parse(package_manager)
    return run_command(pm.exec_command, args, cwd, timeout=timeout)


__all__ = [
    "InstallHandle",
    "run_command",
    "install_deps",
    "run_in_pkg",
]
