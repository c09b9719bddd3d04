"""Main CLI entry point for duckdb_polars."""

import click

from duckdb_polars import __version__
from duckdb_polars.cli.commands.query import query


@click.group()
@click.version_option(version=__version__)
def main():
    """DuckDB to Polars - run queries into Polars DataFrames."""
    pass


# Register commands
main.add_command(query)


if __name__ == "__main__":
    main()
