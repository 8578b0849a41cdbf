"""Adapters around the external tools that do the actual asset work."""

from .images import optimize_image
from .scripts import minify_js, transpile_js
from .styles import autoprefix, compile_scss, minify_css

__all__ = [
    "autoprefix",
    "compile_scss",
    "minify_css",
    "minify_js",
    "optimize_image",
    "transpile_js",
]
