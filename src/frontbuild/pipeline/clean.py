"""Cleaning operations for the pipeline.

Removes the generated output tree before a full build.
"""

from __future__ import annotations

import shutil
from pathlib import Path
from typing import Any

from ..global_config import DIST_DIR


def clean_dist(
    dist_dir: Path | str = DIST_DIR,
    *,
    root: Path | str = ".",
    dry_run: bool = False,
) -> dict[str, Any]:
    """Remove the whole output directory.

    A missing output directory is a successful no-op.

    Args:
        dist_dir: Output directory, relative to root unless absolute.
        root: Project directory.
        dry_run: If True, only report what would be deleted.

    Returns:
        Result dictionary with:
        - success: bool (False if the directory could not be removed)
        - total: int (number of files deleted or that would be deleted)
        - files_deleted: int
        - failures: list[dict] (only present on failure)
        - message: str
        - dry_run: bool
        - items_to_delete: list[str] (only in dry_run mode)
    """
    target = Path(root) / dist_dir

    if not target.exists():
        return {
            "success": True,
            "total": 0,
            "files_deleted": 0,
            "dry_run": dry_run,
            "message": f"Output directory does not exist: {target}",
        }

    files = sorted(p for p in target.rglob("*") if p.is_file() or p.is_symlink())
    result: dict[str, Any] = {
        "success": True,
        "total": len(files),
        "files_deleted": len(files),
        "dry_run": dry_run,
    }

    if dry_run:
        result["items_to_delete"] = [f"FILE: {p.relative_to(target)}" for p in files]
        result["message"] = f"Would remove {target} ({len(files)} files)"
        return result

    try:
        shutil.rmtree(target)
    except OSError as exc:
        result["success"] = False
        result["files_deleted"] = 0
        result["failures"] = [
            {"item": str(target), "reason": f"Failed to delete directory: {exc}"}
        ]
        result["message"] = f"Could not remove {target}"
        return result

    result["message"] = f"Removed {target} ({len(files)} files)"
    return result
