from __future__ import annotations

from datetime import datetime

import pytest


@pytest.fixture
def fixed_now() -> datetime:
    # 10:00 on a Tuesday: before the default noon pivot.
    return datetime(2026, 3, 10, 10, 0, 0)
