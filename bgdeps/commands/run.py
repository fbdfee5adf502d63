"""Run command implementation."""

import asyncio
import sys
from pathlib import Path

import click

from bgdeps import run_in_pkg, setup_logging
from bgdeps.commands.utils import PM_CHOICE, load_settings_or_exit, resolve_package_manager


@click.command(context_settings={"ignore_unknown_options": True})
@click.argument("args", nargs=-1, required=True, type=click.UNPROCESSED)
@click.option("--pm", "pm_name", type=PM_CHOICE, help="Package manager to run through")
@click.option(
    "--cwd",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=".",
    help="Directory to run in",
)
@click.option("--timeout", "-t", type=float, default=None, help="Timeout in seconds")
@click.pass_context
def run(ctx, args: tuple[str, ...], pm_name: str | None, cwd: Path, timeout: float | None):
    """Run ARGS through the package manager (npx for npm)."""
    debug = ctx.obj.get("debug", False)
    if not asyncio.run(run_pkg(list(args), pm_name, cwd, timeout, debug)):
        sys.exit(1)


async def run_pkg(
    args: list[str], pm_name: str | None, cwd: Path, timeout: float | None, debug: bool
) -> bool:
    setup_logging(debug)
    settings = load_settings_or_exit()
    pm = resolve_package_manager(pm_name, settings)

    handle = run_in_pkg(pm, args, cwd, timeout=timeout if timeout is not None else settings.timeout)
    ok = await handle.completion
    if ok:
        click.echo(f"✅ {pm.exec_command} {' '.join(args)} finished")
    else:
        click.echo(f"❌ {pm.exec_command} {' '.join(args)} failed", err=True)
    return ok
