"""
duckview - query rendering and file indexing for a DuckDB data explorer

This library runs ad-hoc SQL against an in-memory DuckDB session, renders the
typed result as a table of display strings, and indexes directories for
query (.sql) and data (.csv, .xlsx, .parquet) files.
"""

from .core import QueryRenderer
from .exceptions import (
    CompileError,
    DuckViewError,
    ExecutionError,
    FileAccessError,
    FormatError,
    NoResultsError,
    PathNotFoundError,
    RenderError,
    SessionError,
)
from .indexer import DirectoryIndexer, classify_extension, classify_path
from .models import (
    ColumnInfo,
    DirectoryNode,
    EntryKind,
    FileEntry,
    FileNode,
    LogicalType,
    QueryResult,
    RenderedTable,
    TreeNode,
)

__version__ = "0.1.0"
__all__ = [
    "QueryRenderer",
    "DirectoryIndexer",
    "classify_extension",
    "classify_path",
    "DuckViewError",
    "RenderError",
    "SessionError",
    "CompileError",
    "ExecutionError",
    "NoResultsError",
    "FormatError",
    "FileAccessError",
    "PathNotFoundError",
    "ColumnInfo",
    "LogicalType",
    "QueryResult",
    "RenderedTable",
    "EntryKind",
    "FileEntry",
    "FileNode",
    "DirectoryNode",
    "TreeNode",
]
