"""
Shared pytest fixtures and configuration for duckview tests.
"""

from pathlib import Path

import pytest

from duckview import DirectoryIndexer, QueryRenderer


@pytest.fixture
def renderer():
    """QueryRenderer with default settings."""
    return QueryRenderer()


@pytest.fixture
def indexer():
    """DirectoryIndexer with default settings (sorted output)."""
    return DirectoryIndexer()


def make_files(root: Path, names: list[str]) -> None:
    """Create files (and parent directories) below root."""
    for name in names:
        path = root / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(f"-- {name}\n")


@pytest.fixture
def project_dir(tmp_path):
    """
    Directory with query files, data files, ignored files and
    directories that must be pruned.
    """
    root = tmp_path / "project"
    make_files(
        root,
        [
            "a.sql",
            "b.csv",
            "notes.txt",
            "README",
            "empty/ignore.log",
            "reports/Monthly.SQL",
            "reports/raw/sales.parquet",
            "reports/raw/old/archive.zip",
            "data/Prices.XLSX",
        ],
    )
    (root / "nothing").mkdir()
    (root / "nested_empty" / "inner" / "deeper").mkdir(parents=True)
    return root


@pytest.fixture
def make_tree():
    """Factory that creates files below a directory."""
    return make_files
