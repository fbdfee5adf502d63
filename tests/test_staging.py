"""Tests for staging directory setup and file relocation."""

import logging
from pathlib import Path

import pytest

from bgdeps.staging import (
    STAGING_PREFIX,
    _to_base36,
    cleanup_staging,
    make_staging_id,
    move_best_effort,
    replace_directory,
    setup_staging,
)


class TestStagingId:
    def test_prefix_and_base36(self):
        staging_id = make_staging_id()
        assert staging_id.startswith(STAGING_PREFIX)
        suffix = staging_id[len(STAGING_PREFIX):]
        assert suffix
        assert all(c in "0123456789abcdefghijklmnopqrstuvwxyz" for c in suffix)

    def test_ids_do_not_collide(self):
        ids = {make_staging_id() for _ in range(1000)}
        assert len(ids) == 1000

    @pytest.mark.parametrize(
        "value, expected", [(0, "0"), (35, "z"), (36, "10"), (2**53 - 1, "2gosa7pa2gv")]
    )
    def test_to_base36(self, value, expected):
        assert _to_base36(value) == expected


class TestSetupStaging:
    def test_copies_manifest(self, source_dir: Path, staging_root: Path):
        staging = setup_staging(source_dir, staging_root)
        assert staging.parent == staging_root
        assert staging.name.startswith(STAGING_PREFIX)
        assert (staging / "package.json").read_text() == (
            source_dir / "package.json"
        ).read_text()
        assert [p.name for p in staging.iterdir()] == ["package.json"]

    def test_defaults_to_system_temp(self, source_dir: Path, monkeypatch, temp_dir: Path):
        monkeypatch.setattr("tempfile.gettempdir", lambda: str(temp_dir))
        staging = setup_staging(source_dir)
        assert staging.parent == temp_dir
        assert staging.is_dir()

    def test_two_setups_get_distinct_directories(self, source_dir: Path, staging_root: Path):
        first = setup_staging(source_dir, staging_root)
        second = setup_staging(source_dir, staging_root)
        assert first != second
        assert first.is_dir() and second.is_dir()

    def test_mkdir_failure_is_logged_and_swallowed(
        self, source_dir: Path, temp_dir: Path, caplog, capsys
    ):
        missing_root = temp_dir / "does" / "not" / "exist"
        with caplog.at_level(logging.ERROR, logger="bgdeps.staging"):
            staging = setup_staging(source_dir, missing_root)
        assert staging.parent == missing_root
        assert not staging.exists()
        assert "Staging setup failed" in caplog.text
        assert "❌" in capsys.readouterr().err

    def test_missing_manifest_is_logged_and_swallowed(
        self, temp_dir: Path, staging_root: Path, caplog
    ):
        empty_source = temp_dir / "empty"
        empty_source.mkdir()
        with caplog.at_level(logging.ERROR, logger="bgdeps.staging"):
            staging = setup_staging(empty_source, staging_root)
        assert staging.is_dir()
        assert not (staging / "package.json").exists()
        assert "package.json" in caplog.text


class TestReplaceDirectory:
    def test_moves_into_missing_destination(self, temp_dir: Path):
        src = temp_dir / "src_modules"
        (src / "pkg").mkdir(parents=True)
        (src / "pkg" / "index.js").write_text("1")
        dest = temp_dir / "out" / "node_modules"
        dest.parent.mkdir()

        replace_directory(src, dest)

        assert not src.exists()
        assert (dest / "pkg" / "index.js").read_text() == "1"

    def test_replaces_existing_destination(self, temp_dir: Path):
        src = temp_dir / "src_modules"
        (src / "fresh").mkdir(parents=True)
        dest = temp_dir / "node_modules"
        (dest / "stale").mkdir(parents=True)

        replace_directory(src, dest)

        assert (dest / "fresh").is_dir()
        assert not (dest / "stale").exists()

    def test_missing_source_raises(self, temp_dir: Path):
        with pytest.raises(FileNotFoundError):
            replace_directory(temp_dir / "nope", temp_dir / "node_modules")
        assert not (temp_dir / "node_modules").exists()


class TestMoveBestEffort:
    def test_moves_present_and_ignores_missing(self, temp_dir: Path):
        src = temp_dir / "src"
        dest = temp_dir / "dest"
        src.mkdir()
        dest.mkdir()
        (src / "yarn.lock").write_text("# yarn lockfile v1")

        moved = move_best_effort(src, dest, ["package-lock.json", "yarn.lock", "pnpm-lock.yaml"])

        assert moved == ["yarn.lock"]
        assert (dest / "yarn.lock").read_text() == "# yarn lockfile v1"
        assert not (src / "yarn.lock").exists()
        assert sorted(p.name for p in dest.iterdir()) == ["yarn.lock"]

    def test_missing_source_directory(self, temp_dir: Path):
        assert move_best_effort(temp_dir / "gone", temp_dir, ["yarn.lock"]) == []


def test_cleanup_staging(source_dir: Path, staging_root: Path):
    staging = setup_staging(source_dir, staging_root)
    cleanup_staging(staging)
    assert not staging.exists()
    cleanup_staging(staging)
