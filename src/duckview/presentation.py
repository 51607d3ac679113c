"""
HTML and JSON output for rendered tables and directory trees.

These functions only read finished values; traversal and query execution
live in indexer and core.
"""

import json
from html import escape
from typing import Any

from .models import DirectoryNode, EntryKind, FileNode, RenderedTable, TreeNode

_SVG_OPEN = '<svg xmlns="http://www.w3.org/2000/svg" class="h-4 w-4" fill="none" viewBox="0 0 24 24" stroke="currentColor">'
_PATH = '<path stroke-linecap="round" stroke-linejoin="round" stroke-width="2" d="{}" />'

FOLDER_ICON = (
    _SVG_OPEN
    + _PATH.format("M3 7v10a2 2 0 002 2h14a2 2 0 002-2V9a2 2 0 00-2-2h-6l-2-2H5a2 2 0 00-2 2z")
    + "</svg>"
)
QUERY_FILE_ICON = (
    _SVG_OPEN
    + _PATH.format(
        "M9 12h6m-6 4h6m2 5H7a2 2 0 01-2-2V5a2 2 0 012-2h5.586a1 1 0 01.707.293l5.414 5.414"
        "a1 1 0 01.293.707V19a2 2 0 01-2 2z"
    )
    + "</svg>"
)
DATA_FILE_ICON = (
    _SVG_OPEN
    + _PATH.format("M4 7v10c0 2 1 3 3 3h10c2 0 3-1 3-3V7c0-2-1-3-3-3H7c-2 0-3 1-3 3z")
    + _PATH.format("M9 17v-6")
    + _PATH.format("M12 17v-3")
    + _PATH.format("M15 17v-5")
    + "</svg>"
)


def table_to_html(table: RenderedTable) -> str:
    """
    Render a table as the HTML fragment shown in the results pane.

    Args:
        table: Rendered query result

    Returns:
        A <table> element; header and cells are HTML-escaped
    """
    header = "".join(f"<th>{escape(name)}</th>" for name in table.header)
    body = "".join(
        "<tr>" + "".join(f"<td>{escape(cell)}</td>" for cell in row) + "</tr>" for row in table.body
    )
    return (
        '<table id="table" class="table table-md table-pin-rows">'
        f"<thead><tr>{header}</tr></thead><tbody>{body}</tbody></table>"
    )


def _node_to_html(node: TreeNode) -> str:
    if isinstance(node, DirectoryNode):
        children = "".join(_node_to_html(child) for child in node.children)
        return (
            f"<li><details><summary>{FOLDER_ICON}{escape(node.name)}</summary>"
            f'<ul class="menu ml-4">{children}</ul></details></li>'
        )
    path = escape(str(node.path))
    if node.kind is EntryKind.QUERY_FILE:
        return f'<li><a class="sql-file" data-path="{path}">{QUERY_FILE_ICON}{escape(node.name)}</a></li>'
    return f'<li><a class="data-file" data-path="{path}">{DATA_FILE_ICON}{escape(node.name)}</a></li>'


def tree_to_html(root: DirectoryNode) -> str:
    """
    Render a directory tree as the file explorer's menu markup.

    The root is rendered expanded; subdirectories are collapsed. Query
    files carry their path in data-path so the front end can load them.
    """
    children = "".join(_node_to_html(child) for child in root.children)
    return (
        f"<li><details open><summary>{FOLDER_ICON}{escape(root.name)}</summary>"
        f'<ul class="menu">{children}</ul></details></li>'
    )


def table_to_dict(table: RenderedTable) -> dict[str, Any]:
    return {"header": list(table.header), "rows": [list(row) for row in table.body]}


def tree_to_dict(node: TreeNode) -> dict[str, Any]:
    """Convert a tree node (and its descendants) to JSON-ready dicts."""
    if isinstance(node, FileNode):
        return {"type": node.kind.value, "name": node.name, "path": str(node.path)}
    return {
        "type": EntryKind.DIRECTORY.value,
        "name": node.name,
        "path": str(node.path),
        "children": [tree_to_dict(child) for child in node.children],
    }


def to_json(data: dict[str, Any]) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False)
