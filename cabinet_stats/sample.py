from __future__ import annotations

from datetime import date, timedelta
from typing import List, Optional

import numpy as np

from cabinet_stats.models import CabinetRecord
from cabinet_stats.store import build_record

OPERATORS = [
    ("Ivanov", "Petr", "Cabinet A"),
    ("Smirnova", "Anna", "Cabinet B"),
    ("Kuznetsov", "Oleg", "Cabinet C"),
]


def generate_sample_records(
    days: int = 7,
    seed: int = 7,
    today: Optional[date] = None,
    baseline: str = "first",
) -> List[CabinetRecord]:
    """
    Daily snapshots for every operator over the last ``days`` days, oldest first.

    Each snapshot is reconciled against what was generated before it, exactly
    like a manual entry would be.
    """
    today = today or date.today()
    rng = np.random.default_rng(seed)
    records: List[CabinetRecord] = []
    totals = {label: float(rng.integers(50, 200) * 1000) for _, _, label in OPERATORS}
    balances = {label: float(rng.integers(20, 80) * 1000) for _, _, label in OPERATORS}
    for offset in range(days - 1, -1, -1):
        day = today - timedelta(days=offset)
        for last, first, label in OPERATORS:
            totals[label] += float(rng.choice([2500, 5000, 7500, 10000], p=[0.3, 0.35, 0.25, 0.1]))
            balances[label] += float(rng.integers(-5, 10) * 500)
            fields = {
                "last_name": last,
                "first_name": first,
                "cabinet_label": label,
                "total_revenue": totals[label],
                "balance": max(balances[label], 0.0),
                "deals_before_midnight": int(rng.integers(3, 20)),
                "deals_after_midnight": int(rng.integers(0, 10)),
            }
            records.append(build_record(fields, records, today=day, baseline=baseline))
    return records


__all__ = ["OPERATORS", "generate_sample_records"]
