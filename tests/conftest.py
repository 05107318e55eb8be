import os
from typing import Any

import pytest

from tests.factories import build_record

os.environ.setdefault("LOG_LEVEL", "WARN")


@pytest.fixture
def scenario_records() -> list[dict[str, Any]]:
    return [
        build_record("p1", heart_disease=True, bmi=32),
        build_record("p2", heart_disease=False, bmi=22),
        build_record("p3", heart_disease=True, bmi=41),
        build_record("p4", heart_disease=False, bmi=19),
    ]
