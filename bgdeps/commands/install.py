"""Install command implementation."""

import asyncio
import logging
import sys
from pathlib import Path

import click

from bgdeps import background_install_deps, setup_logging
from bgdeps.commands.utils import PM_CHOICE, load_settings_or_exit, resolve_package_manager
from bgdeps.staging import cleanup_staging

_logging = logging.getLogger(__name__)


@click.command()
@click.argument(
    "source", type=click.Path(exists=True, file_okay=False, path_type=Path)
)
@click.argument("out_dir", type=click.Path(file_okay=False, path_type=Path))
@click.option("--pm", "pm_name", type=PM_CHOICE, help="Package manager to install with")
@click.option(
    "--timeout",
    "-t",
    type=float,
    default=None,
    help="Give up on the install after this many seconds (default: no limit)",
)
@click.option("--no-spinner", is_flag=True, help="Do not show the progress spinner")
@click.option(
    "--yes/--no-install",
    "answer",
    default=None,
    help="Answer the install prompt up front",
)
@click.option("--keep-staging", is_flag=True, help="Keep the staging directory afterwards")
@click.pass_context
def install(
    ctx,
    source: Path,
    out_dir: Path,
    pm_name: str | None,
    timeout: float | None,
    no_spinner: bool,
    answer: bool | None,
    keep_staging: bool,
):
    """Install SOURCE's package.json dependencies into OUT_DIR.

    The install starts in a staging directory immediately and keeps running
    while you answer the prompt.
    """
    debug = ctx.obj.get("debug", False)
    ok = asyncio.run(
        run_install(source, out_dir, pm_name, timeout, no_spinner, answer, keep_staging, debug)
    )
    if not ok:
        sys.exit(1)


async def run_install(
    source: Path,
    out_dir: Path,
    pm_name: str | None,
    timeout: float | None,
    no_spinner: bool,
    answer: bool | None,
    keep_staging: bool,
    debug: bool,
) -> bool:
    setup_logging(debug)
    settings = load_settings_or_exit()
    pm = resolve_package_manager(pm_name, settings)

    bg_install = background_install_deps(
        pm,
        source,
        no_spinner or settings.hide_spinner,
        timeout=timeout if timeout is not None else settings.timeout,
        staging_root=settings.staging_root,
    )
    _logging.debug(f"Started {pm} install in {bg_install.staging_dir}")

    try:
        run = answer
        if run is None:
            # The prompt blocks, so keep it off the loop running the install.
            run = await asyncio.to_thread(
                click.confirm, f"Install {pm} dependencies?", default=True
            )

        if run:
            out_dir.mkdir(parents=True, exist_ok=True)
        installed = await bg_install.complete(run, out_dir)
        if not run:
            click.echo(f"Skipped install. Run \"{pm.install_command}\" in {out_dir} later.")
            return True
        if installed:
            click.echo(f"✅ Dependencies installed into {out_dir}")
        return installed
    finally:
        if bg_install.outcome is None:
            bg_install.abort()
        if not keep_staging:
            await bg_install.handle.completion
            cleanup_staging(bg_install.staging_dir)
