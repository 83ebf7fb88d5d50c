"""Typer entry point.

Commands stay thin: they build the runtime, call a core service and turn its
outcome (or a `DominosCliError`) into output and an exit code.
"""

from __future__ import annotations

import asyncio
from importlib.metadata import PackageNotFoundError, version
from typing import Optional

import typer

from cli import config_commands
from cli.runtime import Runtime, build_runtime, configure_logging, reporting_errors
from cli.ui_components import build_tracking_panel
from core.config import AppSettings
from core.services.order_pipeline import OrderPipeline
from core.services.tracking import lookup_active_order, resolve_phone

app = typer.Typer(
    name="dominos",
    no_args_is_help=True,
    add_completion=False,
    help="CLI tool for ordering Dominos pizza",
)
app.add_typer(config_commands.app, name="config", help="Manage configuration")


def _package_version() -> str:
    try:
        return version("dominos-cli")
    except PackageNotFoundError:
        return "unknown"


def _print_version(value: bool) -> None:
    if value:
        typer.echo(_package_version())
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging to stderr."),
    show_version: bool = typer.Option(
        False,
        "--version",
        callback=_print_version,
        is_eager=True,
        help="Show the version and exit.",
    ),
) -> None:
    settings = AppSettings()
    configure_logging("DEBUG" if verbose else settings.log_level)
    if ctx.obj is None:
        ctx.obj = build_runtime(settings)


@app.command()
def order(
    ctx: typer.Context,
    preset: str = typer.Argument(..., help="Preset name from your config."),
) -> None:
    """Order pizza from a preset."""

    runtime: Runtime = ctx.obj
    pipeline = OrderPipeline(store=runtime.store, provider=runtime.provider, prompter=runtime.prompter)
    with reporting_errors(runtime.console):
        outcome = asyncio.run(pipeline.run(preset))
    if outcome.exit_code:
        raise typer.Exit(int(outcome.exit_code))


@app.command()
def track(
    ctx: typer.Context,
    phone: Optional[str] = typer.Argument(None, help="Phone number (defaults to the one in your config)."),
) -> None:
    """Track order status."""

    runtime: Runtime = ctx.obj
    io = runtime.prompter
    with reporting_errors(runtime.console):
        number = resolve_phone(phone, runtime.store)
        with io.progress("Tracking order..."):
            status = asyncio.run(lookup_active_order(runtime.provider, number))

    if status is None:
        io.warn("No active orders found for this phone number")
        return
    runtime.console.print(build_tracking_panel(status))


def run() -> None:
    app()
