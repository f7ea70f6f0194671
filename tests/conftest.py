"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

import shutil
from pathlib import Path

import pytest


class FakeStorage:
    """In-memory RecoverableStorage that removes paths directly.

    Paths listed in ``failures`` raise the given error instead of being
    removed; every successfully moved path is recorded in ``moved``.
    """

    def __init__(self, failures: dict[Path, OSError] | None = None) -> None:
        self.failures = failures or {}
        self.moved: list[Path] = []

    def move_to_recoverable_storage(self, path: Path) -> None:
        if path in self.failures:
            raise self.failures[path]
        if path.is_dir() and not path.is_symlink():
            shutil.rmtree(path)
        else:
            path.unlink()
        self.moved.append(path)


def write_bytes(path: Path, size: int) -> Path:
    """Create a file of exactly ``size`` bytes, creating parents as needed."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b"x" * size)
    return path


@pytest.fixture
def fake_storage() -> FakeStorage:
    """A storage backend that never touches the real trash."""
    return FakeStorage()


@pytest.fixture
def artifact_tree(tmp_path: Path) -> Path:
    """Project root with node_modules/ (3 files, 120 B), target/ (2 files, 80 B) and keep.txt."""
    root = tmp_path / "project"
    for name in ("a.js", "b.js", "c.js"):
        write_bytes(root / "node_modules" / name, 40)
    for name in ("app.o", "app.bin"):
        write_bytes(root / "target" / name, 40)
    (root / "keep.txt").write_text("keep")
    return root


@pytest.fixture
def python_tree(tmp_path: Path) -> Path:
    """Python project with nested __pycache__ directories and .pyc files."""
    root = tmp_path / "pyproj"
    root.mkdir(parents=True)
    (root / "pyproject.toml").write_text("[project]\nname = 'demo'\n")
    write_bytes(root / "pkg" / "__init__.py", 10)
    write_bytes(root / "pkg" / "__pycache__" / "__init__.cpython-312.pyc", 50)
    write_bytes(root / "pkg" / "sub" / "__pycache__" / "mod.cpython-312.pyc", 30)
    write_bytes(root / "pkg" / "stray.pyc", 20)
    return root


@pytest.fixture
def make_file():
    """Factory creating a file of a given size."""
    return write_bytes


@pytest.fixture
def storage_factory():
    """Factory for FakeStorage instances with configured failures."""
    return FakeStorage
