"""Script transforms: Babel transpilation and minification."""

from __future__ import annotations

import shutil
import subprocess

import rjsmin

from ..errors import TransformError
from ..global_config import BABEL_PRESET

BABEL_EXECUTABLE = "babel"


def _run_babel(source: str, filename: str | None) -> str:
    """Pipe source through the babel CLI and return its stdout."""
    executable = shutil.which(BABEL_EXECUTABLE)
    if executable is None:
        raise TransformError(
            f"{BABEL_EXECUTABLE} not found on PATH (install @babel/cli and {BABEL_PRESET})",
            source=filename,
        )

    cmd = [executable, "--presets", BABEL_PRESET]
    if filename:
        cmd += ["--filename", filename]
    result = subprocess.run(
        cmd,
        input=source,
        capture_output=True,
        text=True,
        check=True,
    )
    return result.stdout


def transpile_js(source: str, filename: str | None = None) -> str:
    """Transpile modern JS down to ES5 with Babel and @babel/preset-env.

    Without a browserslist config in the project, preset-env targets ES5.

    Raises:
        TransformError: If babel is missing, cannot start, or rejects the source.
    """
    try:
        return _run_babel(source, filename)
    except subprocess.CalledProcessError as exc:
        raise TransformError(f"babel failed: {exc.stderr.strip()}", source=filename) from exc
    except OSError as exc:
        raise TransformError(f"cannot run babel: {exc}", source=filename) from exc


def minify_js(source: str) -> str:
    """Minify JS with rjsmin. Bang comments (license headers) are dropped."""
    return rjsmin.jsmin(source)
