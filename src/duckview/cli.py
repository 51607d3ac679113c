"""
Command line interface for duckview.

Runs queries and indexes directories from a terminal, using the same
operations the desktop front end calls.
"""

import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.tree import Tree

from .commands import error_message, read_text_file
from .core import DEFAULT_BATCH_SIZE, QueryRenderer
from .exceptions import DuckViewError
from .indexer import DEFAULT_MAX_DEPTH, DirectoryIndexer
from .models import DirectoryNode, EntryKind, RenderedTable
from .presentation import table_to_dict, table_to_html, to_json, tree_to_dict, tree_to_html

console = Console()
err_console = Console(stderr=True)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _fail(error: DuckViewError) -> None:
    err_console.print(f"[red]Error:[/red] {escape(error_message(error))}")
    sys.exit(1)


def _rich_table(table: RenderedTable) -> Table:
    rich_table = Table(show_header=True, header_style="bold")
    for name in table.header:
        rich_table.add_column(escape(name))
    for row in table.body:
        rich_table.add_row(*(escape(cell) for cell in row))
    return rich_table


def _add_children(branch: Tree, node: DirectoryNode) -> None:
    for child in node.children:
        if isinstance(child, DirectoryNode):
            _add_children(branch.add(f"[bold blue]{escape(child.name)}/[/bold blue]"), child)
        elif child.kind is EntryKind.QUERY_FILE:
            branch.add(f"[green]{escape(child.name)}[/green]")
        else:
            branch.add(f"[cyan]{escape(child.name)}[/cyan]")


def _rich_tree(root: DirectoryNode) -> Tree:
    tree = Tree(f"[bold blue]{escape(root.name)}/[/bold blue]")
    _add_children(tree, root)
    return tree


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="duckview")
@click.option("-v", "--verbose", count=True, help="Increase log verbosity (-v info, -vv debug)")
def cli(verbose: int):
    """Query data files with DuckDB and browse query/data directories.

    \b
    Examples:
      duckview query "SELECT * FROM 'data/etfs.csv'"
      duckview query --file report.sql --format json
      duckview tree ~/projects/analysis
      duckview cat report.sql
    """
    level = logging.WARNING
    if verbose == 1:
        level = logging.INFO
    elif verbose > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format=LOG_FORMAT)


@cli.command("query")
@click.argument("sql", required=False)
@click.option(
    "-f", "--file", "sql_file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Read the query from a .sql file",
)
@click.option(
    "--format", "output_format",
    type=click.Choice(["table", "html", "json", "csv"]),
    default="table",
    show_default=True,
    help="Output format",
)
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write CSV to this file instead of stdout (implies --format csv)",
)
@click.option("--null", "null_text", default="", help="Text shown for NULL values")
@click.option("--batch-size", type=click.IntRange(min=1), default=DEFAULT_BATCH_SIZE, show_default=True)
def query_cmd(
    sql: str | None,
    sql_file: Path | None,
    output_format: str,
    output: Path | None,
    null_text: str,
    batch_size: int,
):
    """Run SQL in a fresh in-memory DuckDB session and print the result."""
    if sql is None and sql_file is None:
        raise click.UsageError("Provide SQL text or --file")
    if sql is not None and sql_file is not None:
        raise click.UsageError("Provide either SQL text or --file, not both")

    renderer = QueryRenderer(batch_size=batch_size, null_text=null_text)
    try:
        if sql_file is not None:
            sql = read_text_file(sql_file)
        if output is not None:
            renderer.export_csv(sql, output)
            console.print(f"Wrote [bold]{escape(str(output))}[/bold]")
            return
        table = renderer.render(sql)
    except DuckViewError as e:
        _fail(e)
        return

    if output_format == "html":
        click.echo(table_to_html(table))
    elif output_format == "json":
        click.echo(to_json(table_to_dict(table)))
    elif output_format == "csv":
        click.echo(table.to_frame().to_csv(index=False), nl=False)
    else:
        console.print(_rich_table(table))
        console.print(f"[dim]{len(table.body)} row(s)[/dim]")


@cli.command("tree")
@click.argument("root", required=False, type=click.Path(path_type=Path))
@click.option(
    "--format", "output_format",
    type=click.Choice(["tree", "html", "json"]),
    default="tree",
    show_default=True,
    help="Output format",
)
@click.option("--max-depth", type=click.IntRange(min=0), default=DEFAULT_MAX_DEPTH, show_default=True)
@click.option("--follow-symlinks/--no-follow-symlinks", default=True, show_default=True)
def tree_cmd(root: Path | None, output_format: str, max_depth: int, follow_symlinks: bool):
    """Show query and data files below ROOT (default: current directory)."""
    indexer = DirectoryIndexer(max_depth=max_depth, follow_symlinks=follow_symlinks)
    try:
        tree = indexer.index(root)
    except DuckViewError as e:
        _fail(e)
        return

    if output_format == "html":
        click.echo(tree_to_html(tree))
    elif output_format == "json":
        click.echo(to_json(tree_to_dict(tree)))
    else:
        console.print(_rich_tree(tree))


@cli.command("cat")
@click.argument("path", type=click.Path(path_type=Path))
def cat_cmd(path: Path):
    """Print a text file, e.g. a saved query."""
    try:
        content = read_text_file(path)
    except DuckViewError as e:
        _fail(e)
        return
    click.echo(content, nl=False)


if __name__ == "__main__":
    cli()
