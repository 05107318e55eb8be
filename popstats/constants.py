"""Shared constants for the population-health statistics pipeline."""

from enum import StrEnum


class Schema(StrEnum):
    BRONZE = "bronze"
    SILVER = "silver"
    GOLD = "gold"


PATIENT_RECORD_TABLE = "patient_record"

UNKNOWN = "Unknown"

RATE_DECIMALS = 2
MEAN_DECIMALS = 1
