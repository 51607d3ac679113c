"""
Exception classes for duckview query rendering and directory indexing.
"""

from pathlib import Path


class DuckViewError(Exception):
    """Base exception for duckview operations."""

    pass


class RenderError(DuckViewError):
    """Base exception for query execution and result rendering."""

    pass


class SessionError(RenderError):
    """Exception raised when an engine session cannot be created."""

    pass


class CompileError(RenderError):
    """Exception raised when a query cannot be parsed or bound."""

    pass


class ExecutionError(RenderError):
    """Exception raised when a query fails while running."""

    pass


class NoResultsError(RenderError):
    """Exception raised when a statement produces no result schema."""

    def __init__(self, message: str = "No results returned"):
        super().__init__(message)


class FormatError(RenderError):
    """Exception raised when a result value cannot be converted for display."""

    pass


class FileAccessError(DuckViewError):
    """Exception raised when a filesystem entry cannot be read."""

    def __init__(self, message: str, path: str | Path | None = None):
        super().__init__(message)
        self.path = Path(path) if path is not None else None


class PathNotFoundError(FileAccessError):
    """Exception raised when a requested path does not exist."""

    pass
