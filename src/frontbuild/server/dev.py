"""Live-reload dev server and per-category file watcher.

livereload runs everything on one tornado event loop. Each category's watch
glob gets its own callback, which runs only that category's pipeline;
livereload then pushes a reload to every connected browser.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any

from livereload import Server

from ..global_config import DIST_DIR, LIVERELOAD_PORT, SERVER_HOST, SERVER_PORT
from ..paths import CATEGORIES, AssetCategory
from ..pipeline.assets import run_category

logger = logging.getLogger(__name__)


def make_rebuild(category: AssetCategory, root: Path) -> Callable[[], dict[str, Any]]:
    """Return a watch callback that re-runs one category's pipeline."""

    def rebuild() -> dict[str, Any]:
        logger.info("Change detected under %s; running %s", category.watch, category.name)
        return run_category(category, root=root)

    rebuild.__name__ = f"rebuild_{category.name.replace('-', '_')}"
    return rebuild


def register_watchers(server: Server, *, root: Path | str = ".") -> dict[str, str]:
    """Register one watch per category on the server.

    Returns:
        Mapping of category name to the watched glob.
    """
    root = Path(root)
    watched: dict[str, str] = {}
    for category in CATEGORIES:
        pattern = str(root / category.watch)
        server.watch(pattern, make_rebuild(category, root))
        watched[category.name] = pattern
    return watched


def serve(
    *,
    root: Path | str = ".",
    host: str = SERVER_HOST,
    port: int = SERVER_PORT,
    liveport: int = LIVERELOAD_PORT,
    server: Server | None = None,
) -> None:
    """Watch the source tree and serve the output tree until interrupted."""
    root = Path(root)
    server = server or Server()
    register_watchers(server, root=root)

    dist = root / DIST_DIR
    dist.mkdir(parents=True, exist_ok=True)

    logger.info("Serving %s at http://%s:%d (live reload on %d)", dist, host, port, liveport)
    server.serve(root=str(dist), host=host, port=port, liveport=liveport)

