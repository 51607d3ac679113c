"""
Tests for the duckview command line interface.
"""

import json

from click.testing import CliRunner

from duckview.cli import cli


class TestQueryCommand:
    """Test the query command."""

    def test_json_output(self):
        """Test query output as JSON."""
        result = CliRunner().invoke(cli, ["query", "SELECT 1 AS x, 'hi' AS y", "--format", "json"])
        assert result.exit_code == 0
        assert json.loads(result.output) == {"header": ["x", "y"], "rows": [["1", "hi"]]}

    def test_table_output(self):
        """Test the default rich table output."""
        result = CliRunner().invoke(cli, ["query", "SELECT 42 AS answer"])
        assert result.exit_code == 0
        assert "answer" in result.output
        assert "42" in result.output
        assert "1 row(s)" in result.output

    def test_csv_output(self):
        """Test CSV on stdout with a NULL sentinel."""
        result = CliRunner().invoke(cli, ["query", "SELECT 1 AS a, NULL AS b", "--format", "csv", "--null", "NULL"])
        assert result.exit_code == 0
        assert result.output.splitlines() == ["a,b", "1,NULL"]

    def test_query_from_file(self, tmp_path):
        """Test running a saved query."""
        query_file = tmp_path / "q.sql"
        query_file.write_text("SELECT 'from file' AS src")
        result = CliRunner().invoke(cli, ["query", "--file", str(query_file), "--format", "html"])
        assert result.exit_code == 0
        assert "<td>from file</td>" in result.output

    def test_export(self, tmp_path):
        """Test writing CSV to a file."""
        output_file = tmp_path / "out.csv"
        result = CliRunner().invoke(cli, ["query", "SELECT 7 AS n", "--output", str(output_file)])
        assert result.exit_code == 0
        assert output_file.read_text().splitlines() == ["n", "7"]

    def test_no_results_error(self):
        """Test the error message and exit status."""
        result = CliRunner().invoke(cli, ["query", "CREATE TABLE t(x INT)"])
        assert result.exit_code == 1
        assert "No results returned" in result.output

    def test_missing_query(self):
        """Test the usage error without SQL or --file."""
        result = CliRunner().invoke(cli, ["query"])
        assert result.exit_code == 2


class TestTreeCommand:
    """Test the tree and cat commands."""

    def test_tree_json(self, project_dir):
        """Test the JSON tree."""
        result = CliRunner().invoke(cli, ["tree", str(project_dir), "--format", "json"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert [child["name"] for child in data["children"]] == ["a.sql", "b.csv", "data", "reports"]

    def test_tree_rich(self, project_dir):
        """Test the rich tree output."""
        result = CliRunner().invoke(cli, ["tree", str(project_dir)])
        assert result.exit_code == 0
        assert "sales.parquet" in result.output
        assert "notes.txt" not in result.output

    def test_tree_missing_root(self, tmp_path):
        """Test a missing root directory."""
        result = CliRunner().invoke(cli, ["tree", str(tmp_path / "missing")])
        assert result.exit_code == 1
        assert "Directory not found" in result.output

    def test_cat(self, tmp_path):
        """Test printing a query file."""
        query_file = tmp_path / "q.sql"
        query_file.write_text("SELECT 1;\n")
        result = CliRunner().invoke(cli, ["cat", str(query_file)])
        assert result.exit_code == 0
        assert result.output == "SELECT 1;\n"
