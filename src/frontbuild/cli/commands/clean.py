"""CLI command for cleaning operations."""

from __future__ import annotations

import typer

from ...global_config import DIST_DIR
from ...pipeline.clean import clean_dist
from ..base import BaseCLI


def clean_command(
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="Show what would be deleted without actually deleting files",
    ),
) -> None:
    """Remove the dist/ output directory."""
    cli = BaseCLI("clean")

    def _clean() -> dict:
        return clean_dist(DIST_DIR, dry_run=dry_run)

    pre_message = (
        "Checking what would be cleaned (dry-run)..." if dry_run
        else f"Removing {DIST_DIR}..."
    )
    cli.handle_cli_operation(
        operation="clean",
        op_callable=_clean,
        pre_message=pre_message,
        exit_on_failure=True,
    )
