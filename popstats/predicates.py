"""Record predicates used by rate metrics."""

from collections.abc import Callable
from typing import Any

from popstats.aggregation import Record
from popstats.common.values import as_flag


def is_diabetic_value(value: Any) -> bool:
    # "No, borderline diabetes" and "Yes (during pregnancy)" do not count
    return as_flag(value) is True


def has_flag(field_name: str) -> Callable[[Record], bool]:
    """Predicate: the boolean field is set. Null or unparseable never matches."""

    def predicate(record: Record) -> bool:
        return as_flag(record.get(field_name)) is True

    predicate.__name__ = f"has_{field_name}"
    return predicate


def is_diabetic(record: Record) -> bool:
    return is_diabetic_value(record.get("diabetic_status"))
