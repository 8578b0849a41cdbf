from __future__ import annotations

import subprocess
from pathlib import Path

import pytest

from frontbuild.transforms import scripts, styles


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """
    A dedicated temp root directory for each test.
    All filesystem writes in tests should be under this root (or tmp_path directly).
    """
    root = tmp_path / "proj"
    (root / "src").mkdir(parents=True)
    return root


@pytest.fixture(autouse=True)
def chdir_to_project_root(project_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """
    Automatically change working directory to project_root for all tests.
    This ensures relative-path operations go into the temp directory by default.
    """
    monkeypatch.chdir(project_root)


@pytest.fixture(autouse=True)
def no_postcss(monkeypatch: pytest.MonkeyPatch) -> None:
    """
    Autoprefixing shells out to postcss; tests never depend on it being installed.
    """
    monkeypatch.setattr(styles, "POSTCSS_EXECUTABLE", "frontbuild-test-missing-postcss")


@pytest.fixture
def fake_babel(monkeypatch: pytest.MonkeyPatch) -> list[str]:
    """
    Replace the babel CLI call with a pass-through that records its inputs.
    Sources containing the word SYNTAX_ERROR make it exit non-zero.
    """
    calls: list[str] = []

    def _run_babel(source: str, filename: str | None) -> str:
        calls.append(source)
        if "SYNTAX_ERROR" in source:
            raise subprocess.CalledProcessError(1, ["babel"], output="", stderr="SyntaxError: unexpected token")
        return source.replace("const ", "var ").replace("let ", "var ")

    monkeypatch.setattr(scripts, "_run_babel", _run_babel)
    return calls


def _write(path: Path, content: str | bytes) -> Path:
    """Create parent directories and write content."""
    path.parent.mkdir(parents=True, exist_ok=True)
    if isinstance(content, bytes):
        path.write_bytes(content)
    else:
        path.write_text(content, encoding="utf-8")
    return path


@pytest.fixture
def write():
    """
    Helper that creates parent directories and writes text or bytes.
    """
    return _write


@pytest.fixture
def site(project_root: Path) -> Path:
    """
    A small source tree covering every category (images excluded).
    """
    _write(project_root / "src" / "index.html", "<html><body>home</body></html>\n")
    _write(project_root / "src" / "pages" / "about.html", "<html><body>about</body></html>\n")
    _write(project_root / "src" / "scss" / "_vars.scss", "$brand: #ff0000;\n")
    _write(
        project_root / "src" / "scss" / "main.scss",
        '@import "vars";\n.title {\n  color: $brand;\n}\n',
    )
    _write(project_root / "src" / "js" / "app.js", "const greet = (name) => 'hi ' + name;\n")
    _write(project_root / "src" / "fonts" / "brand.woff2", b"wOF2\x00\x01fake")
    _write(
        project_root / "src" / "libs" / "css" / "vendor.css",
        "/* vendor */\n.a {\n  margin: 0 ;\n}\n",
    )
    _write(
        project_root / "src" / "libs" / "js" / "vendor.js",
        "// vendor\nfunction add(a, b) {\n  return a + b;\n}\n",
    )
    return project_root
