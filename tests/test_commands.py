"""
Tests for the operations called by the front end.
"""

import pytest

from duckview import CompileError, FileAccessError, NoResultsError, PathNotFoundError, RenderedTable
from duckview.commands import (
    error_message,
    index_directory,
    index_directory_html,
    read_text_file,
    render_query,
    render_query_html,
)


class TestQueryCommands:
    """Test query operations."""

    def test_render_query(self):
        """Test the default renderer."""
        table = render_query("SELECT 1 AS x, 'hi' AS y")
        assert table == RenderedTable(header=["x", "y"], body=[["1", "hi"]])

    def test_render_query_html(self):
        """Test the HTML fragment for a result."""
        html = render_query_html("SELECT '<tag>' AS v")
        assert "<th>v</th>" in html
        assert "<td>&lt;tag&gt;</td>" in html

    def test_query_from_data_file(self, tmp_path):
        """Test querying a CSV file found by the indexer."""
        data_file = tmp_path / "etfs.csv"
        data_file.write_text("ticker,price\nVTI,250.5\nBND,72\n")
        table = render_query(f"SELECT ticker, price FROM '{data_file}' ORDER BY ticker")
        assert table.header == ["ticker", "price"]
        assert table.body == [["BND", "72.0"], ["VTI", "250.5"]]

    def test_error_messages(self):
        """Test the caller-facing messages."""
        with pytest.raises(NoResultsError) as exc_info:
            render_query("CREATE TABLE t(x INT)")
        assert error_message(exc_info.value) == "No results returned"

        with pytest.raises(CompileError) as exc_info:
            render_query("SELEC 1")
        assert "syntax error" in error_message(exc_info.value).lower()


class TestFileCommands:
    """Test directory and file operations."""

    def test_index_directory(self, make_tree, tmp_path):
        """Test indexing through the command boundary."""
        make_tree(tmp_path, ["a.sql", "notes.txt"])
        tree = index_directory(tmp_path)
        assert [child.name for child in tree.children] == ["a.sql"]

    def test_index_directory_html(self, make_tree, tmp_path):
        """Test the explorer markup for a directory."""
        make_tree(tmp_path, ["q/a.sql"])
        html = index_directory_html(tmp_path)
        assert f'data-path="{tmp_path / "q" / "a.sql"}"' in html

    def test_index_missing_directory(self, tmp_path):
        """Test that a missing root is reported."""
        with pytest.raises(PathNotFoundError):
            index_directory(tmp_path / "nope")

    def test_read_text_file(self, tmp_path):
        """Test reading a UTF-8 query file."""
        path = tmp_path / "q.sql"
        path.write_text("SELECT 'café' AS v;\n", encoding="utf-8")
        assert read_text_file(path) == "SELECT 'café' AS v;\n"

    def test_read_missing_file(self, tmp_path):
        """Test reading a file that does not exist."""
        with pytest.raises(PathNotFoundError) as exc_info:
            read_text_file(tmp_path / "missing.sql")
        assert exc_info.value.path == tmp_path / "missing.sql"

    def test_read_invalid_utf8(self, tmp_path):
        """Test rejection of non-UTF-8 content."""
        path = tmp_path / "latin1.sql"
        path.write_bytes(b"SELECT '\xe9'")
        with pytest.raises(FileAccessError, match="UTF-8"):
            read_text_file(path)

    def test_read_directory(self, tmp_path):
        """Test reading a directory as a file."""
        with pytest.raises(FileAccessError):
            read_text_file(tmp_path)
