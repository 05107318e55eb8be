"""Bronze layer - raw patient CSV loading."""

from popstats.bronze.loader import (
    get_bronze_table_summary,
    load_bronze_csv,
    read_patient_csv,
)

__all__ = [
    "get_bronze_table_summary",
    "load_bronze_csv",
    "read_patient_csv",
]
