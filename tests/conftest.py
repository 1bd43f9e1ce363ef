"""Shared fixtures for dirtree tests."""

import logging
import sys
from pathlib import Path

import pytest

PROJECT_ROOT = str(Path(__file__).resolve().parent.parent)
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)


@pytest.fixture
def sample_tree(tmp_path):
    """Create a small directory tree.

    Structure:
    root/
    ├── a.txt        (10 bytes)
    └── sub/
        └── b.txt    (5 bytes)
    """
    root = tmp_path / "root"
    (root / "sub").mkdir(parents=True)
    (root / "a.txt").write_bytes(b"x" * 10)
    (root / "sub" / "b.txt").write_bytes(b"y" * 5)
    return root


@pytest.fixture
def nested_tree(tmp_path):
    """Create a tree with mixed names and nesting.

    Structure:
    nested/
    ├── B.txt
    ├── a.txt
    ├── zeta/
    │   └── deep/
    │       └── leaf.txt
    ├── Alpha/
    │   └── x.bin
    └── empty/
    """
    root = tmp_path / "nested"
    (root / "zeta" / "deep").mkdir(parents=True)
    (root / "Alpha").mkdir()
    (root / "empty").mkdir()
    (root / "B.txt").write_text("B")
    (root / "a.txt").write_text("a")
    (root / "zeta" / "deep" / "leaf.txt").write_text("leaf")
    (root / "Alpha" / "x.bin").write_bytes(b"\0" * 100)
    return root


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Undo handler changes made by the CLI's setup_logging."""
    root_logger = logging.getLogger()
    level = root_logger.level
    yield
    for handler in root_logger.handlers[:]:
        if type(handler) in (logging.StreamHandler, logging.FileHandler):
            root_logger.removeHandler(handler)
            handler.close()
    root_logger.setLevel(level)
