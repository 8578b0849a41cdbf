"""Asset categories: source globs mapped to destination directories.

The table is defined once at import and never mutated. Every pipeline,
the watcher and the CLI read from it.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .global_config import DIST_DIR, SRC_DIR

GLOB_CHARS = frozenset("*?[{")


@dataclass(frozen=True)
class AssetCategory:
    """One asset category: where its sources live and where outputs go."""

    name: str
    source: str
    dest: str
    watch: str


def _category(name: str, source: str, dest: str) -> AssetCategory:
    return AssetCategory(name=name, source=source, dest=dest, watch=source)


CATEGORIES: tuple[AssetCategory, ...] = (
    _category("html", SRC_DIR + "**/*.html", DIST_DIR),
    _category("styles", SRC_DIR + "scss/**/*.scss", DIST_DIR + "css/"),
    _category("js", SRC_DIR + "js/**/*.js", DIST_DIR + "js/"),
    _category("images", SRC_DIR + "images/**/*.*", DIST_DIR + "images/"),
    _category("fonts", SRC_DIR + "fonts/**/*.*", DIST_DIR + "fonts/"),
    _category("css-libs", SRC_DIR + "libs/css/*.css", DIST_DIR + "css/"),
    _category("js-libs", SRC_DIR + "libs/js/*.js", DIST_DIR + "js/"),
)

CATEGORY_NAMES: tuple[str, ...] = tuple(c.name for c in CATEGORIES)

_BY_NAME: dict[str, AssetCategory] = {c.name: c for c in CATEGORIES}


def get_category(name: str) -> AssetCategory:
    """Look up a category by name.

    Raises:
        KeyError: If no category has that name.
    """
    try:
        return _BY_NAME[name]
    except KeyError:
        raise KeyError(
            f"Unknown asset category: {name!r}. Use one of: {list(CATEGORY_NAMES)}"
        ) from None


def glob_base(pattern: str) -> Path:
    """Return the literal directory prefix of a glob pattern.

    E.g. ``src/scss/**/*.scss`` -> ``src/scss``. Output paths keep the layout
    of each source relative to this base.
    """
    parts: list[str] = []
    for part in pattern.split("/"):
        if not part or any(ch in GLOB_CHARS for ch in part):
            break
        parts.append(part)
    return Path(*parts) if parts else Path(".")


def match_sources(category: AssetCategory, root: Path | str = ".") -> list[Path]:
    """Return existing files matching the category glob, sorted.

    Dotfiles and files in dot-directories are ignored. A missing source
    directory yields an empty list.
    """
    root = Path(root)
    base = root / glob_base(category.source)
    if not base.is_dir():
        return []

    matches: list[Path] = []
    for path in root.glob(category.source):
        if not path.is_file():
            continue
        rel_parts = path.relative_to(root).parts
        if any(part.startswith(".") for part in rel_parts):
            continue
        matches.append(path)
    return sorted(set(matches))


def dest_path_for(category: AssetCategory, source: Path, root: Path | str = ".") -> Path:
    """Map a source file to its destination, preserving relative layout."""
    root = Path(root)
    rel = Path(source).relative_to(root / glob_base(category.source))
    return root / category.dest / rel


def dest_dir(category: AssetCategory, root: Path | str = ".") -> Path:
    """Return the category destination directory under root."""
    return Path(root) / category.dest
