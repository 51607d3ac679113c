"""
Core QueryRenderer class for executing queries against DuckDB.
"""

import logging
from pathlib import Path

import duckdb

from .exceptions import CompileError, ExecutionError, FormatError, NoResultsError, RenderError, SessionError
from .formatting import DEFAULT_NULL_TEXT, column_formatter, to_logical_type
from .models import ColumnInfo, QueryResult, RenderedTable

logger = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE = 2048

# Raised while a statement is parsed or bound, before anything runs
_COMPILE_ERRORS = (duckdb.ParserException, duckdb.BinderException, duckdb.CatalogException)


def _translate_error(error: duckdb.Error) -> RenderError:
    if isinstance(error, _COMPILE_ERRORS):
        return CompileError(str(error))
    return ExecutionError(str(error))


def _has_result_schema(statement: duckdb.Statement) -> bool:
    """
    Whether a statement yields a result table.

    Queries return rows and INSERT/UPDATE/DELETE return a Count column.
    DDL, SET and transaction statements return nothing.
    """
    expected = statement.expected_result_type
    return (
        duckdb.ExpectedResultType.QUERY_RESULT in expected
        or duckdb.ExpectedResultType.CHANGED_ROWS in expected
    )


class QueryRenderer:
    """
    Executes ad-hoc SQL and renders the result as a table of strings.

    Every call runs in its own in-memory DuckDB connection, which is closed
    before the call returns. Nothing created by one query is visible to
    another.
    """

    def __init__(self, batch_size: int = DEFAULT_BATCH_SIZE, null_text: str = DEFAULT_NULL_TEXT):
        """
        Initialize the renderer.

        Args:
            batch_size: Number of rows pulled from the engine per fetch
            null_text: Display text for NULL values
        """
        if batch_size < 1:
            raise ValueError(f"batch_size must be positive, got {batch_size}")
        self.batch_size = batch_size
        self.null_text = null_text

    def _open_session(self) -> duckdb.DuckDBPyConnection:
        """
        Open a fresh in-memory engine session.

        Raises:
            SessionError: If the connection cannot be created
        """
        try:
            connection = duckdb.connect(":memory:")
        except duckdb.Error as e:
            raise SessionError(f"Cannot open DuckDB session: {e}") from e
        logger.debug("Opened in-memory DuckDB session")
        return connection

    def execute(self, query: str) -> QueryResult:
        """
        Execute a query and collect every result batch.

        Args:
            query: SQL text, passed to the engine unmodified

        Returns:
            QueryResult with typed columns and display rows

        Raises:
            SessionError: If the engine session cannot be created
            CompileError: If the query cannot be parsed or bound
            ExecutionError: If the query fails while running
            NoResultsError: If the statement has no result schema
            FormatError: If a value cannot be converted for display
        """
        connection = self._open_session()
        try:
            try:
                statements = connection.extract_statements(query)
                # Every statement but the last only runs for its side effects
                for statement in statements:
                    connection.execute(statement)
            except duckdb.Error as e:
                raise _translate_error(e) from e

            if not statements or not _has_result_schema(statements[-1]):
                raise NoResultsError()

            try:
                columns = [
                    ColumnInfo(name=desc[0], type=to_logical_type(str(desc[1])), engine_type=str(desc[1]))
                    for desc in connection.description
                ]
                batches = []
                while True:
                    batch = connection.fetchmany(self.batch_size)
                    if not batch:
                        break
                    batches.append(batch)
            except duckdb.Error as e:
                raise _translate_error(e) from e
        finally:
            connection.close()
            logger.debug("Closed DuckDB session")

        rows = self._format_batches(columns, batches)
        logger.debug("Fetched %d rows in %d batches", len(rows), len(batches))
        # A result schema with no rows still counts as one (empty) batch
        return QueryResult(columns=columns, rows=rows, batch_count=max(len(batches), 1))

    def _format_batches(self, columns: list[ColumnInfo], batches: list[list[tuple]]) -> list[list[str]]:
        formatters = [column_formatter(col, self.null_text) for col in columns]
        width = len(columns)
        rows = []
        for batch in batches:
            for row in batch:
                if len(row) != width:
                    raise FormatError(f"Row has {len(row)} values, expected {width}")
                cells = []
                for col, fmt, value in zip(columns, formatters, row):
                    try:
                        cells.append(fmt(value))
                    except (TypeError, ValueError, OverflowError) as e:
                        raise FormatError(
                            f"Cannot format value {value!r} in column '{col.name}' ({col.engine_type}): {e}"
                        ) from e
                rows.append(cells)
        return rows

    def render(self, query: str) -> RenderedTable:
        """
        Execute a query and return its header and body as strings.

        Args:
            query: SQL text

        Returns:
            RenderedTable with one header entry per column

        Raises:
            RenderError: If the query cannot be executed or rendered
        """
        result = self.execute(query)
        return RenderedTable(header=result.column_names, body=result.rows)

    def export_csv(self, query: str, output_path: str | Path) -> None:
        """
        Render a query and write the table to a CSV file.

        Args:
            query: SQL text
            output_path: Path to output CSV file

        Raises:
            RenderError: If the query cannot be executed or rendered
        """
        table = self.render(query)
        table.to_frame().to_csv(output_path, index=False)
        logger.info("Exported %d rows to %s", len(table.body), output_path)
