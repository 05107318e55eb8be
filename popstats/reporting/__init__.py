"""Reporting helpers (summaries, validation results, and report tables)."""

from .etl_reporting import (
    print_bronze_summary,
    print_gold_summary,
    print_report_table,
    print_silver_summary,
)
from .records_summary import get_record_summary
from .validation_reports import get_validation_report, get_validation_summary

__all__ = [
    "get_record_summary",
    "get_validation_report",
    "get_validation_summary",
    "print_bronze_summary",
    "print_gold_summary",
    "print_report_table",
    "print_silver_summary",
]
