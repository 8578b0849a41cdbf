"""Tests for the asset category table and glob helpers."""

from __future__ import annotations

import dataclasses
from pathlib import Path

import pytest

from frontbuild.paths import (
    CATEGORIES,
    CATEGORY_NAMES,
    dest_path_for,
    get_category,
    glob_base,
    match_sources,
)


class TestCategoryTable:
    """The fixed category table."""

    @pytest.mark.unit
    def test_names_and_destinations(self) -> None:
        assert CATEGORY_NAMES == ("html", "styles", "js", "images", "fonts", "css-libs", "js-libs")
        dests = {c.name: c.dest for c in CATEGORIES}
        assert dests == {
            "html": "dist/",
            "styles": "dist/css/",
            "js": "dist/js/",
            "images": "dist/images/",
            "fonts": "dist/fonts/",
            "css-libs": "dist/css/",
            "js-libs": "dist/js/",
        }

    @pytest.mark.unit
    def test_watch_globs_match_sources(self) -> None:
        for category in CATEGORIES:
            assert category.watch == category.source

    @pytest.mark.unit
    def test_categories_are_immutable(self) -> None:
        with pytest.raises(dataclasses.FrozenInstanceError):
            get_category("styles").dest = "elsewhere/"  # type: ignore[misc]

    @pytest.mark.unit
    def test_unknown_category(self) -> None:
        with pytest.raises(KeyError, match="Unknown asset category"):
            get_category("sprites")


class TestGlobHelpers:
    """glob_base, match_sources and dest_path_for."""

    @pytest.mark.unit
    def test_glob_base(self) -> None:
        assert glob_base("src/**/*.html") == Path("src")
        assert glob_base("src/scss/**/*.scss") == Path("src/scss")
        assert glob_base("src/libs/css/*.css") == Path("src/libs/css")

    @pytest.mark.integration
    def test_missing_source_dir_yields_nothing(self, project_root: Path) -> None:
        assert match_sources(get_category("fonts"), project_root) == []

    @pytest.mark.integration
    def test_match_sources_recursive_and_sorted(self, project_root: Path, write) -> None:
        write(project_root / "src" / "js" / "b.js", "")
        write(project_root / "src" / "js" / "a.js", "")
        write(project_root / "src" / "js" / "nested" / "c.js", "")
        write(project_root / "src" / "js" / "notes.txt", "")

        got = match_sources(get_category("js"), project_root)
        rel = [p.relative_to(project_root).as_posix() for p in got]
        assert rel == ["src/js/a.js", "src/js/b.js", "src/js/nested/c.js"]

    @pytest.mark.integration
    def test_match_sources_ignores_dotfiles(self, project_root: Path, write) -> None:
        write(project_root / "src" / "index.html", "")
        write(project_root / "src" / ".cache" / "stale.html", "")
        write(project_root / "src" / ".draft.html", "")

        got = match_sources(get_category("html"), project_root)
        assert [p.name for p in got] == ["index.html"]

    @pytest.mark.integration
    def test_html_glob_includes_root_and_nested(self, project_root: Path, write) -> None:
        write(project_root / "src" / "index.html", "")
        write(project_root / "src" / "pages" / "about.html", "")

        got = match_sources(get_category("html"), project_root)
        assert {p.name for p in got} == {"index.html", "about.html"}

    @pytest.mark.unit
    def test_dest_path_preserves_layout(self, project_root: Path) -> None:
        html = get_category("html")
        source = project_root / "src" / "pages" / "about.html"
        assert dest_path_for(html, source, project_root) == project_root / "dist" / "pages" / "about.html"

        css_libs = get_category("css-libs")
        source = project_root / "src" / "libs" / "css" / "vendor.css"
        assert dest_path_for(css_libs, source, project_root) == project_root / "dist" / "css" / "vendor.css"

    @pytest.mark.unit
    def test_relative_root(self) -> None:
        js = get_category("js")
        assert dest_path_for(js, Path("src/js/app.js")) == Path("dist/js/app.js")
