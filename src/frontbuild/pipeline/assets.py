"""Per-category asset pipelines.

One generic runner (`run_category`) drives every category. Each category
maps to a chain: a generator that processes the matched sources, writes
outputs and yields one item dict per source. A `TransformError` or I/O
error raised by a chain aborts that category only; it is logged and
reported in the result.
"""

from __future__ import annotations

import logging
import shutil
import time
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Any

from ..errors import TransformError
from ..global_config import STYLES_BUNDLE_NAME
from ..paths import AssetCategory, dest_dir, dest_path_for, get_category, glob_base, match_sources
from ..transforms import (
    autoprefix,
    compile_scss,
    minify_css,
    minify_js,
    optimize_image,
    transpile_js,
)

logger = logging.getLogger(__name__)

Chain = Callable[[AssetCategory, list[Path], Path, bool, bool], Iterator[dict[str, Any]]]


def _rel(path: Path, root: Path) -> str:
    """Render path relative to root for result items."""
    try:
        return Path(path).relative_to(root).as_posix()
    except ValueError:
        return Path(path).as_posix()


def _item(source: Path, output: Path | None, root: Path, status: str = "success", detail: str = "") -> dict[str, Any]:
    item: dict[str, Any] = {"file": _rel(source, root), "status": status}
    if output is not None:
        item["output"] = _rel(output, root)
    if detail:
        item["detail"] = detail
    return item


def _read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise TransformError(f"not valid UTF-8: {exc}", source=str(path)) from exc


def _write_text(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


def _copy_chain(
    category: AssetCategory, sources: list[Path], root: Path, dry_run: bool, incremental: bool
) -> Iterator[dict[str, Any]]:
    """Pass-through copy preserving the layout under the glob base."""
    for src in sources:
        out = dest_path_for(category, src, root)
        if not dry_run:
            out.parent.mkdir(parents=True, exist_ok=True)
            shutil.copyfile(src, out)
        yield _item(src, out, root)


def _styles_chain(
    category: AssetCategory, sources: list[Path], root: Path, dry_run: bool, incremental: bool
) -> Iterator[dict[str, Any]]:
    """Compile every entry stylesheet, concatenate, autoprefix, write one bundle.

    Partials (leading underscore) are not compiled on their own; they are
    pulled in through @import/@use. Nothing is written if any entry fails.
    """
    out = dest_dir(category, root) / STYLES_BUNDLE_NAME
    include_paths = [root / glob_base(category.source)]

    compiled: list[str] = []
    items: list[dict[str, Any]] = []
    for src in sources:
        if src.name.startswith("_"):
            items.append(_item(src, None, root, status="skipped", detail="partial"))
            continue
        compiled.append(compile_scss(src, include_paths=include_paths))
        items.append(_item(src, out, root))

    if compiled and not dry_run:
        bundle = autoprefix("".join(compiled))
        _write_text(out, bundle)

    yield from items


def _scripts_chain(
    category: AssetCategory, sources: list[Path], root: Path, dry_run: bool, incremental: bool
) -> Iterator[dict[str, Any]]:
    """Transpile to ES5 then minify, one output per source."""
    for src in sources:
        out = dest_path_for(category, src, root)
        code = transpile_js(_read_text(src), filename=str(src))
        code = minify_js(code)
        if not dry_run:
            _write_text(out, code)
        yield _item(src, out, root)


def _images_chain(
    category: AssetCategory, sources: list[Path], root: Path, dry_run: bool, incremental: bool
) -> Iterator[dict[str, Any]]:
    """Optimize images, skipping sources whose output is already up to date.

    With incremental=False every source is processed regardless of dist/.
    """
    for src in sources:
        out = dest_path_for(category, src, root)
        if incremental and out.exists() and out.stat().st_mtime >= src.stat().st_mtime:
            logger.debug("Skipping unchanged image %s", src)
            yield _item(src, out, root, status="skipped", detail="up to date")
            continue
        if dry_run:
            yield _item(src, out, root)
            continue
        mode = optimize_image(src, out)
        yield _item(src, out, root, detail=mode)


def _css_libs_chain(
    category: AssetCategory, sources: list[Path], root: Path, dry_run: bool, incremental: bool
) -> Iterator[dict[str, Any]]:
    """Minify vendor stylesheets individually."""
    for src in sources:
        out = dest_path_for(category, src, root)
        css = minify_css(_read_text(src))
        if not dry_run:
            _write_text(out, css)
        yield _item(src, out, root)


def _js_libs_chain(
    category: AssetCategory, sources: list[Path], root: Path, dry_run: bool, incremental: bool
) -> Iterator[dict[str, Any]]:
    """Minify vendor scripts individually (no transpilation)."""
    for src in sources:
        out = dest_path_for(category, src, root)
        code = minify_js(_read_text(src))
        if not dry_run:
            _write_text(out, code)
        yield _item(src, out, root)


CHAINS: dict[str, Chain] = {
    "html": _copy_chain,
    "styles": _styles_chain,
    "js": _scripts_chain,
    "images": _images_chain,
    "fonts": _copy_chain,
    "css-libs": _css_libs_chain,
    "js-libs": _js_libs_chain,
}


def run_category(
    category: AssetCategory | str,
    *,
    root: Path | str = ".",
    dry_run: bool = False,
    incremental: bool = True,
) -> dict[str, Any]:
    """Run one category's pipeline over the files currently matching its glob.

    Transform errors and file I/O errors are logged and reported
    (`success=False`); they never propagate, so callers can keep running
    other categories.

    Args:
        category: Category or its name.
        root: Project directory holding `src/` and `dist/`.
        dry_run: If True, report outputs without writing anything.
        incremental: If False, ignore existing outputs when deciding what to
            skip (used when dist/ has just been cleaned).

    Returns:
        Result dictionary with success, total, succeeded, failed, skipped,
        elapsed_s, message, items and failures.
    """
    if isinstance(category, str):
        category = get_category(category)
    root = Path(root)
    chain = CHAINS[category.name]

    started = time.monotonic()
    sources = match_sources(category, root)
    items: list[dict[str, Any]] = []
    failures: list[dict[str, str]] = []

    try:
        for item in chain(category, sources, root, dry_run, incremental):
            items.append(item)
    except TransformError as exc:
        item_name = _rel(Path(exc.source), root) if exc.source else category.name
        logger.error("%s pipeline aborted on %s: %s", category.name, item_name, exc)
        failures.append({"item": item_name, "reason": str(exc)})
    except (OSError, UnicodeError) as exc:
        filename = getattr(exc, "filename", None)
        item_name = _rel(Path(filename), root) if filename else category.name
        logger.exception("%s pipeline aborted on %s", category.name, item_name)
        failures.append({"item": item_name, "reason": str(exc)})

    succeeded = sum(1 for i in items if i["status"] == "success")
    skipped = sum(1 for i in items if i["status"] == "skipped")
    failed = len(failures)

    if failed:
        message = f"{category.name}: aborted after {succeeded} file(s)."
    elif not sources:
        message = f"{category.name}: no source files match {category.source}."
    else:
        message = f"{category.name}: processed {len(sources)} file(s)."
    if dry_run:
        message += " [DRY RUN]"

    logger.info(message)
    return {
        "success": failed == 0,
        "category": category.name,
        "total": len(sources),
        "succeeded": succeeded,
        "failed": failed,
        "skipped": skipped,
        "elapsed_s": time.monotonic() - started,
        "message": message,
        "items": items,
        "failures": failures,
    }
