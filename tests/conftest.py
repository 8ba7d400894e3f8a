"""Shared fixtures and helpers for tests."""

import stat
from pathlib import Path

import pytest

_REPO_ROOT = Path(__file__).parent.parent

PNG_HEADER = b"\x89PNG\r\n\x1a\n" + b"\x00" * 8


# ---------------------------------------------------------------------------
# Auto-marker: tag tests as "unit" or "integration" based on directory
# ---------------------------------------------------------------------------


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        test_path = Path(str(item.fspath))
        rel = test_path.relative_to(_REPO_ROOT / "tests")
        parts = rel.parts
        if parts and parts[0] == "integration":
            item.add_marker(pytest.mark.integration)
        else:
            item.add_marker(pytest.mark.unit)


# ---------------------------------------------------------------------------
# Shared unit-test fixtures
# ---------------------------------------------------------------------------


def write_script(path: Path, body: str) -> Path:
    """Write an executable shell script standing in for the resource compiler."""
    path.write_text(f"#!/bin/sh\n{body}\n", encoding="utf-8")
    path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return path


@pytest.fixture
def fake_compiler(tmp_path: Path) -> Path:
    """A compiler stub that records its working directory and arguments, then exits 0."""
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()
    return write_script(
        bin_dir / "fake-compile-resources",
        'pwd > "$(dirname "$0")/cwd.txt"\necho "$@" > "$(dirname "$0")/args.txt"\nexit 0',
    )


@pytest.fixture
def failing_compiler(tmp_path: Path) -> Path:
    bin_dir = tmp_path / "bin-fail"
    bin_dir.mkdir()
    return write_script(bin_dir / "failing-compile-resources", "exit 3")


@pytest.fixture
def drop_tree(tmp_path: Path) -> Path:
    """A drop folder with images and text files two levels deep."""
    root = tmp_path / "drop" / "assets"
    (root / "icons" / "scalable").mkdir(parents=True)
    (root / "ui").mkdir()
    (root / "logo.png").write_bytes(PNG_HEADER)
    (root / "icons" / "scalable" / "app.svg").write_text("<svg/>", encoding="utf-8")
    (root / "icons" / "app-16.png").write_bytes(PNG_HEADER)
    (root / "ui" / "window.ui").write_text("<interface/>", encoding="utf-8")
    (root / "README.txt").write_text("hello\n", encoding="utf-8")
    return root
