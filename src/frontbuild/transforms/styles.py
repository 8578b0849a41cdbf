"""Stylesheet transforms: Sass compilation, autoprefixing and CSS minification."""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
from pathlib import Path

import rcssmin
import sass

from ..errors import TransformError
from ..global_config import AUTOPREFIXER_BROWSERS, AUTOPREFIXER_GRID

logger = logging.getLogger(__name__)

POSTCSS_EXECUTABLE = "postcss"

_POSTCSS_WARNED = False


def compile_scss(path: Path, include_paths: list[Path] | None = None) -> str:
    """Compile one .scss file to compressed CSS with libsass.

    Raises:
        TransformError: If libsass rejects the stylesheet.
    """
    paths = [str(p) for p in (include_paths or [Path(path).parent])]
    try:
        return sass.compile(
            filename=str(path),
            output_style="compressed",
            include_paths=paths,
        )
    except sass.CompileError as exc:
        raise TransformError(str(exc), source=str(path)) from exc


def autoprefix(css: str) -> str:
    """Add vendor prefixes using the postcss CLI with the autoprefixer plugin.

    Browser targets and grid support come from global_config and are passed
    through the environment variables autoprefixer reads. When postcss is not
    installed the CSS is returned unchanged and a warning is logged once.

    Raises:
        TransformError: If postcss exits with a non-zero status.
    """
    global _POSTCSS_WARNED
    executable = shutil.which(POSTCSS_EXECUTABLE)
    if executable is None:
        if not _POSTCSS_WARNED:
            logger.warning(
                "%s not found on PATH; skipping autoprefixer", POSTCSS_EXECUTABLE
            )
            _POSTCSS_WARNED = True
        return css

    env = {
        **os.environ,
        "BROWSERSLIST": AUTOPREFIXER_BROWSERS,
        "AUTOPREFIXER_GRID": AUTOPREFIXER_GRID,
    }
    try:
        result = subprocess.run(
            [executable, "--use", "autoprefixer", "--no-map"],
            input=css,
            capture_output=True,
            text=True,
            env=env,
            check=True,
        )
    except subprocess.CalledProcessError as exc:
        raise TransformError(f"autoprefixer failed: {exc.stderr.strip()}") from exc
    return result.stdout


def minify_css(css: str) -> str:
    """Minify CSS text with rcssmin."""
    return rcssmin.cssmin(css)
