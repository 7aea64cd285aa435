"""
Pytest configuration for the cabinet statistics core.

Provides fixtures for:
- a record factory with sensible defaults
- the two-cabinet starting set used by the dashboard
"""

from __future__ import annotations

from datetime import date
from itertools import count

import matplotlib
import pytest

from cabinet_stats.models import CabinetRecord

# charts are rendered headless under test
matplotlib.use("Agg")

TODAY = date(2024, 5, 20)


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def make_record():
    """Build a CabinetRecord, overriding only the fields a test cares about."""
    ids = count(1)

    def _make(**overrides) -> CabinetRecord:
        values = {
            "id": f"rec-{next(ids)}",
            "last_name": "Ivanov",
            "first_name": "Petr",
            "cabinet_label": "A",
            "total_revenue": 100.0,
            "daily_revenue": 0.0,
            "balance": 0.0,
            "deals_before_midnight": 0,
            "deals_after_midnight": 0,
            "date": TODAY,
        }
        values.update(overrides)
        return CabinetRecord(**values)

    return _make


@pytest.fixture
def two_cabinets(make_record):
    return [
        make_record(
            cabinet_label="Cabinet A", total_revenue=150_000.0, daily_revenue=5_000.0,
            balance=45_000.0, deals_before_midnight=12, deals_after_midnight=8,
        ),
        make_record(
            last_name="Smirnova", first_name="Anna",
            cabinet_label="Cabinet B", total_revenue=220_000.0, daily_revenue=7_500.0,
            balance=68_000.0, deals_before_midnight=18, deals_after_midnight=5,
        ),
    ]
