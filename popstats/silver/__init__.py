"""Silver layer - typed and validated patient records."""

from popstats.silver.patient_records import get_patient_record
from popstats.silver.validations import (
    PATIENT_RECORD_VALIDATION_RULES,
    get_invalid_records,
    get_valid_records,
    validate_patient_record,
)

__all__ = [
    "PATIENT_RECORD_VALIDATION_RULES",
    "get_invalid_records",
    "get_patient_record",
    "get_valid_records",
    "validate_patient_record",
]
