"""ETL pipeline orchestration helpers."""

from .pipeline import run_bronze, run_gold, run_silver

__all__ = ["run_bronze", "run_gold", "run_silver"]
