"""CLI command for the develop loop: initial pass, then watch and serve."""

from __future__ import annotations

from ...global_config import SERVER_HOST, SERVER_PORT
from ...pipeline.build import run_start
from ...server import serve
from ..base import BaseCLI, handle_errors


def develop_command() -> None:
    """Run every pipeline once, then watch src/ and serve dist/ with live reload."""
    cli = BaseCLI("develop")

    cli.handle_cli_operation(
        operation="initial pass",
        op_callable=run_start,
        pre_message="Running every pipeline once...",
    )

    cli.logger.info("Dev server on http://%s:%d", SERVER_HOST, SERVER_PORT)
    with handle_errors("dev server", logger=cli.logger):
        serve()
