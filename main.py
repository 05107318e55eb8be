"""Load a patient health indicators CSV into DuckDB and compute summary reports."""

from __future__ import annotations

import argparse
from pathlib import Path

from popstats.db import connect_db
from popstats.etl import run_bronze, run_gold, run_silver
from popstats.reporting import (
    print_bronze_summary,
    print_gold_summary,
    print_silver_summary,
)
from popstats.reports import REPORT_NAMES
from tabkit.logger.logger import LOG_LEVEL, configure

DEFAULT_INPUT = Path(__file__).resolve().parent / "data" / "heart_2020_cleaned.csv"
DEFAULT_DB_PATH = Path(__file__).resolve().parent / "popstats.duckdb"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Load a patient health indicators CSV into DuckDB and compute summary reports."
    )
    parser.add_argument(
        "input",
        nargs="?",
        default=DEFAULT_INPUT,
        type=Path,
        help=f"CSV file with one row per patient. Default: {DEFAULT_INPUT}",
    )
    parser.add_argument(
        "--db",
        type=Path,
        default=DEFAULT_DB_PATH,
        help=f"Path to DuckDB database file. Default: {DEFAULT_DB_PATH}",
    )
    parser.add_argument(
        "--report",
        action="append",
        choices=REPORT_NAMES,
        dest="reports",
        help="Report to compute (repeatable). Default: all reports",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Write the silver table to DB and log at DEBUG level",
    )
    return parser


def main() -> None:
    args = build_parser().parse_args()

    if not args.input.exists():
        raise SystemExit(f"Input file does not exist: {args.input}")
    if args.debug:
        configure(LOG_LEVEL.DEBUG)

    con = connect_db(args.db)
    try:
        print_bronze_summary(run_bronze(args.input, con))

        silver_lf = run_silver(con, persist=args.debug)
        print_silver_summary(silver_lf)

        tables = run_gold(con, silver_lf, args.reports)
        print_gold_summary(tables)
    finally:
        con.close()

    print()
    print(f"Database saved to: {args.db}")


if __name__ == "__main__":
    main()
