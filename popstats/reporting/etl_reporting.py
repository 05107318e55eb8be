"""ETL reporting helpers for CLI output."""

from typing import Any

import polars as pl

from popstats.reporting.records_summary import get_record_summary
from popstats.reporting.validation_reports import get_validation_report


def print_bronze_summary(summary: dict[str, int]) -> None:
    """Print bronze table counts."""
    print("Bronze tables:")
    for table_name, count in summary.items():
        print(f"  {table_name}: {count}")


def _print_quality(summary: dict[str, int], total_key: str) -> None:
    total = summary.get(total_key, 0)
    print()
    print("Patient record data quality:")
    for field, count in summary.items():
        if field == total_key:
            continue
        pct = (count / total * 100) if total else 0
        print(f"  {field}: {count} ({pct:.0f}%)")


def _print_validation(report: dict[str, Any]) -> None:
    print()
    print("Patient record validation results:")
    print(f"  Valid: {report['valid_records']}")
    print(f"  Invalid: {report['invalid_records']}")
    print(f"  Validity rate: {report['validity_rate']:.1%}")
    if report["errors_by_rule"]:
        print("  Errors by rule:")
        for err in report["errors_by_rule"]:
            print(f"    {err['error']}: {err['count']}")


def print_silver_summary(records_lf: pl.LazyFrame) -> None:
    """Print silver record count, field completeness, and validation results."""
    summary = get_record_summary(records_lf)

    print()
    print("Silver layer (in-memory):")
    print(f"  patient_record: {summary['total_records']}")

    _print_quality(summary, "total_records")
    _print_validation(get_validation_report(records_lf))


def _format_value(value: Any) -> str:
    if value is None:
        return "-"
    return str(value)


def print_report_table(name: str, table: pl.DataFrame) -> None:
    """Print one report as an aligned text table."""
    print()
    print(f"{name}:")
    if table.is_empty():
        print("  (no rows)")
        return
    header = table.columns
    body = [[_format_value(v) for v in row] for row in table.iter_rows()]
    widths = [max(len(h), *(len(r[i]) for r in body)) for i, h in enumerate(header)]
    print("  " + "  ".join(h.ljust(w) for h, w in zip(header, widths)))
    for row in body:
        print("  " + "  ".join(v.ljust(w) for v, w in zip(row, widths)))


def print_gold_summary(tables: dict[str, pl.DataFrame]) -> None:
    """Print gold table row counts followed by each report."""
    print()
    print("Gold tables:")
    for name, table in tables.items():
        print(f"  {name}: {table.height}")
    for name, table in tables.items():
        print_report_table(name, table)
