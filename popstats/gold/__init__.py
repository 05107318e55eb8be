"""Gold layer - report tables built from silver records."""

from popstats.gold.reports import build_report_tables, save_report_tables

__all__ = [
    "build_report_tables",
    "save_report_tables",
]
