"""CLI command for running a query into a Polars DataFrame."""

import logging
import sys

import click

from duckdb_polars.api import query_to_df_polars
from duckdb_polars.connectors.duckdb import DuckDBConnector, DuckDBConnectorConfig
from duckdb_polars.core.exceptions import (
    DuckDBPolarsError,
    DuckDBQueryError,
    PolarsConversionError,
)
from duckdb_polars.core.logging import configure_logging
from duckdb_polars.models.runtime_config import RuntimeConfig

logger = logging.getLogger(__name__)


@click.command()
@click.option("--sql", "-s", required=True, help="SQL query to run")
@click.option(
    "--database",
    default=":memory:",
    help="Database file path (default: in-memory database)",
)
@click.option(
    "--parallelism",
    default=4,
    type=click.IntRange(min=1),
    help="Worker threads for batch and column conversion (default: 4)",
)
@click.option(
    "--validate-schema",
    is_flag=True,
    help="Check that every converted batch has the schema of the first",
)
@click.option(
    "--log-level",
    default="INFO",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]),
    help="Log level (default: INFO)",
)
@click.option(
    "--json-logs",
    is_flag=True,
    help="Use JSON format for logs",
)
def query(
    sql: str,
    database: str,
    parallelism: int,
    validate_schema: bool,
    log_level: str,
    json_logs: bool,
):
    """Run a SQL query with DuckDB and show the result as a Polars DataFrame.

    Examples:

        duckdb-polars query --sql "SELECT 1 AS a, 2 AS b"
        duckdb-polars query -s "SELECT * FROM events" --database events.duckdb
        duckdb-polars query -s "SELECT * FROM range(10)" --log-level DEBUG --json-logs
    """
    configure_logging(level=log_level, json_format=json_logs)

    try:
        config = RuntimeConfig(parallelism=parallelism, validate_schema=validate_schema)

        with DuckDBConnector(DuckDBConnectorConfig(database=database)) as connector:
            logger.info(f"Running query: {sql}")
            df = query_to_df_polars(connector.connection, sql, config=config)

        logger.info(f"Output df: {df}")
        logger.info(f"df schema: {dict(df.schema)}")
        click.echo(str(df))

    except DuckDBQueryError as e:
        click.echo(f"Query error: {e}", err=True)
        sys.exit(1)
    except PolarsConversionError as e:
        click.echo(f"Conversion error: {e}", err=True)
        sys.exit(1)
    except DuckDBPolarsError as e:
        click.echo(f"Internal error: {e}", err=True)
        sys.exit(1)
