"""Tests for the clean step and the build/start sequences."""

from __future__ import annotations

from pathlib import Path

import pytest
from PIL import Image

from frontbuild.errors import CleanError
from frontbuild.pipeline import build, clean
from frontbuild.pipeline.build import BUILD_SEQUENCE, START_SEQUENCE, run_build, run_start
from frontbuild.pipeline.clean import clean_dist


def _snapshot(directory: Path) -> dict[str, bytes]:
    return {
        p.relative_to(directory).as_posix(): p.read_bytes()
        for p in sorted(directory.rglob("*"))
        if p.is_file()
    }


@pytest.fixture
def recorded_steps(monkeypatch: pytest.MonkeyPatch) -> list[str]:
    """Replace run_category with a recorder."""
    steps: list[str] = []

    def fake_run_category(name, *, root=".", dry_run=False, incremental=True):
        steps.append(name)
        return {"success": True, "message": f"{name}: ok", "failures": []}

    monkeypatch.setattr(build, "run_category", fake_run_category)
    return steps


class TestSequences:
    """The fixed step order."""

    @pytest.mark.unit
    def test_build_sequence_is_fixed(self) -> None:
        assert BUILD_SEQUENCE == (
            "clean",
            "html",
            "styles",
            "js",
            "html",
            "images",
            "fonts",
            "css-libs",
            "js-libs",
        )
        assert START_SEQUENCE == BUILD_SEQUENCE[1:]

    @pytest.mark.integration
    def test_build_runs_steps_in_order(self, project_root: Path, recorded_steps: list[str]) -> None:
        result = run_build(root=project_root)

        assert recorded_steps == list(START_SEQUENCE)
        assert [i["item"] for i in result["items"]] == list(BUILD_SEQUENCE)
        assert result["success"] is True

    @pytest.mark.integration
    def test_start_does_not_clean(self, project_root: Path, recorded_steps: list[str]) -> None:
        stale = project_root / "dist" / "old.txt"
        stale.parent.mkdir()
        stale.write_text("keep")

        run_start(root=project_root)

        assert stale.exists()
        assert recorded_steps == list(START_SEQUENCE)


class TestClean:
    """The clean step."""

    @pytest.mark.integration
    def test_clean_missing_dir_is_noop(self, project_root: Path) -> None:
        result = clean_dist(root=project_root)
        assert result["success"] is True
        assert result["total"] == 0

    @pytest.mark.integration
    def test_clean_dry_run_lists_files(self, project_root: Path, write) -> None:
        write(project_root / "dist" / "css" / "old.css", "")
        result = clean_dist(root=project_root, dry_run=True)

        assert result["items_to_delete"] == ["FILE: css/old.css"]
        assert (project_root / "dist" / "css" / "old.css").exists()

    @pytest.mark.integration
    def test_build_leaves_no_prior_files(self, site: Path, write, fake_babel: list[str]) -> None:
        write(site / "dist" / "stale.html", "old")
        write(site / "dist" / "css" / "gone.css", "old")

        result = run_build(root=site)

        assert result["success"] is True
        assert not (site / "dist" / "stale.html").exists()
        assert not (site / "dist" / "css" / "gone.css").exists()

    @pytest.mark.integration
    def test_clean_failure_is_fatal(
        self,
        project_root: Path,
        write,
        monkeypatch: pytest.MonkeyPatch,
        recorded_steps: list[str],
    ) -> None:
        write(project_root / "dist" / "index.html", "old")

        def deny(path):
            raise PermissionError(13, "Permission denied", str(path))

        monkeypatch.setattr(clean.shutil, "rmtree", deny)

        with pytest.raises(CleanError, match="Permission denied"):
            run_build(root=project_root)
        assert recorded_steps == []


class TestFullBuild:
    """End-to-end over a real source tree."""

    @pytest.mark.integration
    def test_every_category_produces_output(self, site: Path, fake_babel: list[str]) -> None:
        result = run_build(root=site)

        assert result["success"] is True
        dist = site / "dist"
        assert sorted(_snapshot(dist)) == [
            "css/main.min.css",
            "css/vendor.css",
            "fonts/brand.woff2",
            "index.html",
            "js/app.js",
            "js/vendor.js",
            "pages/about.html",
        ]

    @pytest.mark.integration
    def test_rebuild_is_byte_identical(self, site: Path, fake_babel: list[str]) -> None:
        run_build(root=site)
        first = _snapshot(site / "dist")
        run_build(root=site)
        assert _snapshot(site / "dist") == first

    @pytest.mark.integration
    def test_one_failing_category_does_not_stop_others(
        self, site: Path, write, fake_babel: list[str]
    ) -> None:
        write(site / "src" / "scss" / "main.scss", ".title { color: $undefined; }\n")

        result = run_build(root=site)

        assert result["success"] is False
        failed = [i["item"] for i in result["items"] if i["status"] == "failed"]
        assert failed == ["styles"]
        assert (site / "dist" / "js" / "vendor.js").exists()
        assert not (site / "dist" / "css" / "main.min.css").exists()

    @pytest.mark.integration
    def test_dry_run_build_does_not_skip_images_against_old_output(self, project_root: Path) -> None:
        src = project_root / "src" / "images" / "a.png"
        src.parent.mkdir(parents=True)
        Image.new("RGB", (32, 32), (255, 0, 0)).save(src, format="PNG", compress_level=0)
        run_start(root=project_root)
        out = project_root / "dist" / "images" / "a.png"
        assert out.exists()

        result = run_build(root=project_root, dry_run=True)

        images = result["results"][BUILD_SEQUENCE.index("images")]
        assert images["skipped"] == 0
        assert images["items"][0]["status"] == "success"
        assert out.exists()

    @pytest.mark.integration
    def test_non_utf8_vendor_file_fails_only_its_category(
        self, site: Path, write, fake_babel: list[str]
    ) -> None:
        write(site / "src" / "libs" / "css" / "vendor.css", "/* café */ .a{margin:0}".encode("latin-1"))

        result = run_build(root=site)

        assert result["success"] is False
        failed = [i["item"] for i in result["items"] if i["status"] == "failed"]
        assert failed == ["css-libs"]
        assert result["failures"][0]["item"] == "css-libs: src/libs/css/vendor.css"
        assert "UTF-8" in result["failures"][0]["reason"]
        assert (site / "dist" / "js" / "vendor.js").exists()
