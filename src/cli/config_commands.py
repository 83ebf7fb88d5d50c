"""`dominos config ...` commands."""

from __future__ import annotations

import asyncio
import os
import sys

import typer

from adapters.editor import open_in_editor, resolve_editor
from cli.runtime import Runtime, reporting_errors
from cli.ui_components import print_banner, print_config
from core.domain.errors import ConfigMissingError
from core.services.config_validator import validate_stored
from core.services.setup_wizard import SetupWizard, setup_and_save

app = typer.Typer(no_args_is_help=True, help="Manage configuration")


@app.command()
def show(ctx: typer.Context) -> None:
    """Display configuration (card number masked)."""

    runtime: Runtime = ctx.obj
    with reporting_errors(runtime.console):
        doc = runtime.store.load()
        if doc is None:
            raise ConfigMissingError()
        print_config(runtime.console, doc, runtime.store.location())


@app.command()
def edit(ctx: typer.Context) -> None:
    """Edit configuration in your editor ($EDITOR / $VISUAL)."""

    runtime: Runtime = ctx.obj
    io = runtime.prompter
    with reporting_errors(runtime.console):
        # A file with broken JSON still opens, so it can be fixed.
        if not runtime.store.path.is_file():
            raise ConfigMissingError()

        editor = resolve_editor(os.environ, sys.platform)
        io.info(f"Opening config in {editor}...")
        open_in_editor(editor, runtime.store.path)
        io.success("Config file closed")

        # The file may have changed under us; re-check it right away.
        defects = validate_stored(runtime.store)
        if defects:
            io.warn("The edited configuration has errors:")
            for defect in defects:
                io.warn(f"  • {defect}")
            io.hint("Run: dominos config validate")


@app.command()
def validate(ctx: typer.Context) -> None:
    """Validate configuration."""

    runtime: Runtime = ctx.obj
    io = runtime.prompter
    with reporting_errors(runtime.console):
        defects = validate_stored(runtime.store)

    if not defects:
        io.success("Configuration is valid")
        return

    io.error("Configuration has errors:")
    for defect in defects:
        io.info(f"  • {defect}")
    raise typer.Exit(1)


@app.command()
def setup(ctx: typer.Context) -> None:
    """Run setup wizard."""

    runtime: Runtime = ctx.obj
    print_banner(runtime.console)
    wizard = SetupWizard(provider=runtime.provider, prompter=runtime.prompter)
    with reporting_errors(runtime.console):
        asyncio.run(setup_and_save(store=runtime.store, wizard=wizard, prompter=runtime.prompter))
