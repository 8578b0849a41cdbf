"""Dev server and file watcher built on livereload."""

from .dev import register_watchers, serve

__all__ = ["register_watchers", "serve"]
