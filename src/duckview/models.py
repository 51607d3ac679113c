"""
Data models for query results and directory trees.
"""

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

import pandas as pd


class LogicalType(Enum):
    """Display-level type of a result column."""

    INT = "int"
    FLOAT = "float"
    TEXT = "text"
    BOOL = "bool"
    DATE = "date"
    TIMESTAMP = "timestamp"
    NULL = "null"
    OTHER = "other"


@dataclass
class ColumnInfo:
    """Information about a result column."""

    name: str
    type: LogicalType
    engine_type: str = ""


@dataclass
class QueryResult:
    """Columns and display values collected from one query execution."""

    columns: list[ColumnInfo]
    rows: list[list[str]] = field(default_factory=list)
    batch_count: int = 1

    @property
    def column_names(self) -> list[str]:
        return [col.name for col in self.columns]

    @property
    def row_count(self) -> int:
        return len(self.rows)


@dataclass
class RenderedTable:
    """Header and body of a rendered result, all cells as strings."""

    header: list[str]
    body: list[list[str]] = field(default_factory=list)

    def to_frame(self) -> pd.DataFrame:
        """
        Convert the table to a pandas DataFrame of strings.

        Returns:
            DataFrame with the header as columns. Duplicate column names
            are kept as-is.
        """
        return pd.DataFrame(self.body, columns=self.header, dtype=str)


class EntryKind(Enum):
    """Role of a directory entry in the file explorer."""

    DIRECTORY = "directory"
    QUERY_FILE = "query"
    DATA_FILE = "data"
    IGNORED = "ignored"


@dataclass(frozen=True)
class FileEntry:
    """A classified directory entry."""

    path: Path
    name: str
    kind: EntryKind


@dataclass(frozen=True)
class FileNode:
    """Leaf of a directory tree: a query or data file."""

    path: Path
    name: str
    kind: EntryKind


@dataclass(frozen=True)
class DirectoryNode:
    """Directory with its relevant descendants."""

    path: Path
    name: str
    children: tuple["TreeNode", ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.children

    def iter_files(self) -> Iterator[FileNode]:
        """Yield every file leaf below this directory, depth-first."""
        for child in self.children:
            if isinstance(child, DirectoryNode):
                yield from child.iter_files()
            else:
                yield child


TreeNode = DirectoryNode | FileNode
