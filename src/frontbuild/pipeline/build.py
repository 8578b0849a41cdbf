"""The fixed build and start sequences.

Both sequences are static. `html` deliberately appears twice and the start
sequence has no clean step; both are kept as they are.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from ..errors import CleanError
from ..global_config import DIST_DIR
from .assets import run_category
from .clean import clean_dist

logger = logging.getLogger(__name__)

CLEAN_STEP = "clean"

START_SEQUENCE: tuple[str, ...] = (
    "html",
    "styles",
    "js",
    "html",
    "images",
    "fonts",
    "css-libs",
    "js-libs",
)

BUILD_SEQUENCE: tuple[str, ...] = (CLEAN_STEP, *START_SEQUENCE)


def _step_item(step: str, result: dict[str, Any]) -> dict[str, Any]:
    item: dict[str, Any] = {
        "item": step,
        "status": "success" if result.get("success", True) else "failed",
    }
    if result.get("message"):
        item["detail"] = result["message"]
    return item


def run_sequence(
    steps: Sequence[str],
    *,
    root: Path | str = ".",
    dry_run: bool = False,
) -> dict[str, Any]:
    """Run steps strictly in order and aggregate their results.

    A failing category does not stop later steps. A failing clean step
    raises before anything else runs. In a dry run the clean step removes
    nothing, so later steps are told to treat dist/ as already empty.

    Raises:
        CleanError: If the clean step cannot remove the output directory.
    """
    started = time.monotonic()
    items: list[dict[str, Any]] = []
    failures: list[dict[str, str]] = []
    results: list[dict[str, Any]] = []
    cleaned = False

    for step in steps:
        if step == CLEAN_STEP:
            result = clean_dist(DIST_DIR, root=root, dry_run=dry_run)
            if not result["success"]:
                reason = result["failures"][0]["reason"]
                logger.error("Clean step failed: %s", reason)
                raise CleanError(reason)
            cleaned = True
        else:
            result = run_category(
                step, root=root, dry_run=dry_run, incremental=not (dry_run and cleaned)
            )
            for failure in result.get("failures", []):
                failures.append({"item": f"{step}: {failure['item']}", "reason": failure["reason"]})
        results.append(result)
        items.append(_step_item(step, result))

    failed = sum(1 for i in items if i["status"] == "failed")
    succeeded = len(items) - failed
    return {
        "success": failed == 0,
        "total": len(items),
        "succeeded": succeeded,
        "failed": failed,
        "elapsed_s": time.monotonic() - started,
        "message": f"Ran {len(items)} step(s). Succeeded: {succeeded}, failed: {failed}."
        + (" [DRY RUN]" if dry_run else ""),
        "items": items,
        "failures": failures,
        "results": results,
    }


def run_build(*, root: Path | str = ".", dry_run: bool = False) -> dict[str, Any]:
    """Clean the output directory, then run every pipeline once.

    Raises:
        CleanError: If the output directory cannot be removed.
    """
    logger.info("Starting build")
    return run_sequence(BUILD_SEQUENCE, root=root, dry_run=dry_run)


def run_start(*, root: Path | str = ".", dry_run: bool = False) -> dict[str, Any]:
    """Run every pipeline once without cleaning (initial pass of develop)."""
    logger.info("Starting initial pass")
    return run_sequence(START_SEQUENCE, root=root, dry_run=dry_run)
