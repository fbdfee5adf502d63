"""Pytest fixtures and utilities for bgdeps tests."""

import os
import stat
import sys
import tempfile
from pathlib import Path
from typing import Callable, Generator

import pytest

posix_only = pytest.mark.skipif(
    sys.platform == "win32", reason="fake package managers are shell scripts"
)

NPM_SUCCESS = """\
mkdir -p node_modules/left-pad
echo 'module.exports = 1' > node_modules/left-pad/index.js
echo '{"lockfileVersion": 3}' > package-lock.json
"""


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture(autouse=True)
def isolated_env(temp_dir: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep user config and launcher environment out of tests."""
    monkeypatch.setenv("BGDEPS_CONFIG", str(temp_dir / "no-such-config.json"))
    monkeypatch.delenv("BGDEPS_PACKAGE_MANAGER", raising=False)
    monkeypatch.delenv("BGDEPS_TIMEOUT", raising=False)
    monkeypatch.delenv("npm_config_user_agent", raising=False)


@pytest.fixture
def source_dir(temp_dir: Path) -> Path:
    """A scaffolded integration with a package.json manifest."""
    src = temp_dir / "integration"
    src.mkdir()
    (src / "package.json").write_text('{"name": "my-app", "dependencies": {"left-pad": "*"}}')
    return src


@pytest.fixture
def out_dir(temp_dir: Path) -> Path:
    out = temp_dir / "my-app"
    out.mkdir()
    (out / "package.json").write_text('{"name": "my-app"}')
    return out


@pytest.fixture
def staging_root(temp_dir: Path) -> Path:
    root = temp_dir / "staging"
    root.mkdir()
    return root


@pytest.fixture
def fake_pm(temp_dir: Path, monkeypatch: pytest.MonkeyPatch) -> Callable[[str, str], Path]:
    """Factory placing a fake package-manager shell script first on PATH."""
    bin_dir = temp_dir / "bin"
    bin_dir.mkdir()
    monkeypatch.setenv("PATH", f"{bin_dir}{os.pathsep}{os.environ.get('PATH', '')}")

    def _create(name: str, body: str) -> Path:
        script = bin_dir / name
        script.write_text(f"#!/bin/sh\n{body}")
        script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return script

    return _create
