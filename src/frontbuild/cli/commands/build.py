"""CLI commands for the one-shot build and single-category runs."""

from __future__ import annotations

from typing import Annotated

import typer

from ...paths import CATEGORY_NAMES
from ...pipeline.assets import run_category
from ...pipeline.build import run_build
from ..base import BaseCLI


def build_command(
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Show what would be written without writing files."),
    ] = False,
    log: Annotated[
        bool,
        typer.Option("--log", help="Also write the run output to a file under logs/."),
    ] = False,
) -> None:
    """Clean dist/, then run every pipeline once in the fixed order."""
    cli = BaseCLI("build")

    def _run() -> dict:
        return run_build(dry_run=dry_run)

    cli.handle_cli_operation(
        operation="build",
        op_callable=_run,
        pre_message="Building (dry-run; no files will be written)..." if dry_run else "Building...",
        log_module="build",
        log_dry_run=dry_run,
        enable_log=log,
        exit_on_failure=True,
    )


def _validate_category(value: str) -> str:
    if value not in CATEGORY_NAMES:
        raise typer.BadParameter(f"Use one of: {', '.join(CATEGORY_NAMES)}")
    return value


def run_command(
    category: Annotated[
        str,
        typer.Argument(
            help=f"Asset category: {', '.join(CATEGORY_NAMES)}.",
            callback=_validate_category,
        ),
    ],
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Show what would be written without writing files."),
    ] = False,
) -> None:
    """Run a single category's pipeline once (no clean)."""
    cli = BaseCLI("run")

    def _run() -> dict:
        return run_category(category, dry_run=dry_run)

    cli.handle_cli_operation(
        operation=f"run {category}",
        op_callable=_run,
        exit_on_failure=True,
    )
