"""
Directory indexing for the file explorer.

Walks a directory depth-first and keeps only query files (.sql) and data
files (.csv, .xlsx, .parquet). Directories without any such descendant are
left out of the tree at every level.
"""

import logging
import os
from pathlib import Path

from .exceptions import FileAccessError, PathNotFoundError
from .models import DirectoryNode, EntryKind, FileEntry, FileNode, TreeNode

logger = logging.getLogger(__name__)

QUERY_EXTENSIONS = frozenset({".sql"})
DATA_EXTENSIONS = frozenset({".csv", ".xlsx", ".parquet"})
DEFAULT_MAX_DEPTH = 64


def classify_extension(name: str) -> EntryKind:
    """
    Classify a file name by its extension (case-insensitive).

    Args:
        name: File name or path

    Returns:
        QUERY_FILE, DATA_FILE or IGNORED
    """
    suffix = Path(name).suffix.lower()
    if suffix in QUERY_EXTENSIONS:
        return EntryKind.QUERY_FILE
    if suffix in DATA_EXTENSIONS:
        return EntryKind.DATA_FILE
    return EntryKind.IGNORED


def classify_path(path: str | Path) -> FileEntry:
    """Classify a filesystem path as a directory, query, data or ignored file."""
    path = Path(path)
    kind = EntryKind.DIRECTORY if path.is_dir() else classify_extension(path.name)
    return FileEntry(path=path, name=path.name, kind=kind)


def _display_name(path: Path) -> str:
    return path.name or path.resolve().name or str(path)


class DirectoryIndexer:
    """
    Builds a pruned tree of query and data files below a directory.

    The tree is rebuilt from the filesystem on every call.
    """

    def __init__(
        self,
        max_depth: int = DEFAULT_MAX_DEPTH,
        follow_symlinks: bool = True,
        sort_entries: bool = True,
    ):
        """
        Initialize the indexer.

        Args:
            max_depth: Deepest subdirectory level to descend into (root is 0)
            follow_symlinks: Whether symlinked files and directories are indexed
            sort_entries: Sort entries by name at each level. Without sorting
                          the order is whatever the filesystem returns.
        """
        self.max_depth = max_depth
        self.follow_symlinks = follow_symlinks
        self.sort_entries = sort_entries

    def index(self, root: str | Path | None = None) -> DirectoryNode:
        """
        Index a directory tree.

        Args:
            root: Directory to index; defaults to the current working directory

        Returns:
            DirectoryNode for the root. The root is always returned, even
            when it has no relevant descendants.

        Raises:
            PathNotFoundError: If the root does not exist
            FileAccessError: If the root is not a directory or cannot be read
        """
        root_path = Path(root) if root is not None else Path.cwd()
        if not root_path.exists():
            raise PathNotFoundError(f"Directory not found: {root_path}", root_path)
        if not root_path.is_dir():
            raise FileAccessError(f"Not a directory: {root_path}", root_path)

        try:
            entries = self._scan(root_path)
        except OSError as e:
            raise FileAccessError(f"Cannot read directory {root_path}: {e}", root_path) from e

        ancestors = frozenset({os.path.realpath(root_path)})
        children = self._build_children(entries, depth=1, ancestors=ancestors)
        logger.debug("Indexed %s: %d top-level entries", root_path, len(children))
        return DirectoryNode(path=root_path, name=_display_name(root_path), children=tuple(children))

    def _scan(self, path: Path) -> list[os.DirEntry]:
        with os.scandir(path) as it:
            entries = list(it)
        if self.sort_entries:
            entries.sort(key=lambda e: (e.name.casefold(), e.name))
        return entries

    def _classify(self, entry: os.DirEntry) -> FileEntry | None:
        """Classify a scanned entry, or return None if it must be skipped."""
        path = Path(entry.path)
        try:
            if entry.is_symlink():
                if not self.follow_symlinks:
                    return None
                if not path.exists():
                    logger.warning("Skipping broken symlink: %s", path)
                    return None
            is_dir = entry.is_dir(follow_symlinks=self.follow_symlinks)
        except OSError as e:
            logger.warning("Skipping unreadable entry %s: %s", path, e)
            return None

        if is_dir:
            return FileEntry(path=path, name=entry.name, kind=EntryKind.DIRECTORY)
        return FileEntry(path=path, name=entry.name, kind=classify_extension(entry.name))

    def _build_children(self, entries: list[os.DirEntry], depth: int, ancestors: frozenset[str]) -> list[TreeNode]:
        children: list[TreeNode] = []
        for entry in entries:
            classified = self._classify(entry)
            if classified is None or classified.kind is EntryKind.IGNORED:
                continue
            if classified.kind is EntryKind.DIRECTORY:
                node = self._index_subdirectory(classified, depth, ancestors)
                if node is not None:
                    children.append(node)
            else:
                children.append(FileNode(path=classified.path, name=classified.name, kind=classified.kind))
        return children

    def _index_subdirectory(
        self, entry: FileEntry, depth: int, ancestors: frozenset[str]
    ) -> DirectoryNode | None:
        """Index a subdirectory; None means it is pruned."""
        if depth > self.max_depth:
            logger.warning("Skipping %s: deeper than max_depth=%d", entry.path, self.max_depth)
            return None

        real_path = os.path.realpath(entry.path)
        if real_path in ancestors:
            logger.warning("Skipping %s: symlink cycle back to %s", entry.path, real_path)
            return None

        try:
            entries = self._scan(entry.path)
        except OSError as e:
            # An unreadable subdirectory counts as empty
            logger.warning("Cannot read directory %s: %s", entry.path, e)
            return None

        children = self._build_children(entries, depth + 1, ancestors | {real_path})
        if not children:
            return None
        return DirectoryNode(path=entry.path, name=entry.name, children=tuple(children))
