"""
Operations exposed to the presentation layer.

Each operation runs synchronously and either returns its artifact or
raises a DuckViewError whose message is meant for the user.
"""

import logging
from pathlib import Path

from .core import QueryRenderer
from .exceptions import DuckViewError, FileAccessError, PathNotFoundError
from .indexer import DirectoryIndexer
from .models import DirectoryNode, RenderedTable
from .presentation import table_to_html, tree_to_html

logger = logging.getLogger(__name__)


def render_query(query: str) -> RenderedTable:
    """Execute a query in a fresh session and render the result."""
    logger.info("Running query: %r", query)
    return QueryRenderer().render(query)


def render_query_html(query: str) -> str:
    return table_to_html(render_query(query))


def index_directory(root: str | Path | None = None) -> DirectoryNode:
    """Index query and data files below root (default: current directory)."""
    return DirectoryIndexer().index(root)


def index_directory_html(root: str | Path | None = None) -> str:
    return tree_to_html(index_directory(root))


def read_text_file(path: str | Path) -> str:
    """
    Read a whole UTF-8 text file.

    Args:
        path: File to read

    Returns:
        File contents

    Raises:
        PathNotFoundError: If the file does not exist
        FileAccessError: If the file cannot be read or is not valid UTF-8
    """
    path = Path(path)
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise PathNotFoundError(f"File not found: {path}", path) from e
    except UnicodeDecodeError as e:
        raise FileAccessError(f"File is not valid UTF-8: {path}", path) from e
    except OSError as e:
        raise FileAccessError(f"Cannot read file {path}: {e}", path) from e


def error_message(error: DuckViewError) -> str:
    """Return the caller-facing message for an error."""
    return str(error) or type(error).__name__
