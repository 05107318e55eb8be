"""DuckDB IO helpers for schema and table operations."""

from pathlib import Path

import duckdb
import polars as pl

from popstats.common.sql import qualified_table, quote_ident, select_all


def connect_db(path: Path | str) -> duckdb.DuckDBPyConnection:
    """Connect to DuckDB database file (":memory:" for an in-memory database)."""
    return duckdb.connect(str(path))


def ensure_schema(con: duckdb.DuckDBPyConnection, schema: str) -> None:
    """Ensure schema exists."""
    con.execute(f"CREATE SCHEMA IF NOT EXISTS {quote_ident(schema)}")


def write_dataframe(
    con: duckdb.DuckDBPyConnection,
    schema: str,
    table: str,
    df: pl.DataFrame,
) -> None:
    """Write DataFrame to DuckDB table in given schema, replacing any existing one."""
    ensure_schema(con, schema)
    temp_name = f"{schema}_{table}_temp"
    con.register(temp_name, df.to_arrow())
    try:
        con.execute(
            f"CREATE OR REPLACE TABLE {qualified_table(schema, table)} "
            f"AS SELECT * FROM {quote_ident(temp_name)}"
        )
    finally:
        con.unregister(temp_name)


def write_dataframes(
    con: duckdb.DuckDBPyConnection,
    schema: str,
    frames: dict[str, pl.DataFrame],
) -> None:
    """Write multiple DataFrames to DuckDB tables in given schema."""
    for table, df in frames.items():
        write_dataframe(con, schema, table, df)


def read_table(con: duckdb.DuckDBPyConnection, schema: str, table: str) -> pl.DataFrame:
    """Read a whole table into a polars DataFrame."""
    return con.execute(select_all(schema, table)).pl()


def get_table_summary(con: duckdb.DuckDBPyConnection, schema: str) -> dict[str, int]:
    """Get row counts for all tables in a schema."""
    table_names = con.execute(
        """
        SELECT table_name
        FROM information_schema.tables
        WHERE table_schema = ?
          AND table_type = 'BASE TABLE'
        ORDER BY table_name
        """,
        [schema],
    ).fetchall()
    summary: dict[str, int] = {}
    for (table_name,) in table_names:
        count = con.execute(
            f"SELECT COUNT(*) FROM {qualified_table(schema, table_name)}"
        ).fetchone()[0]
        summary[f"{schema}.{table_name}"] = count
    return summary
