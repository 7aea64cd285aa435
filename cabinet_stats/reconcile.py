"""
Daily revenue reconciliation.

A new snapshot reports the cabinet's cumulative revenue; its daily revenue is
the difference to the previous total recorded under the same cabinet label.
"""
from __future__ import annotations

from typing import Iterable, Optional

from cabinet_stats.models import CabinetRecord

BASELINES = ("first", "latest")


def find_previous(
    cabinet_label: str,
    records: Iterable[CabinetRecord],
    baseline: str = "first",
) -> Optional[CabinetRecord]:
    if baseline not in BASELINES:
        raise ValueError(f"Unknown reconcile baseline: {baseline!r} (expected one of {BASELINES})")
    matches = [r for r in records if r.cabinet_label == cabinet_label]
    if not matches:
        return None
    # TODO: decide with the operators whether "latest" should become the default;
    # "first" takes the oldest row in store order once a label repeats.
    if baseline == "first":
        return matches[0]
    # max() keeps the first maximum, so walk backwards to prefer the newest insert on ties
    return max(reversed(matches), key=lambda r: r.date)


def previous_total(
    cabinet_label: str,
    records: Iterable[CabinetRecord],
    baseline: str = "first",
) -> float:
    prev = find_previous(cabinet_label, records, baseline)
    return prev.total_revenue if prev is not None else 0.0


def compute_daily_revenue(
    cabinet_label: str,
    new_total_revenue: float,
    existing_records: Iterable[CabinetRecord],
    baseline: str = "first",
) -> float:
    """
    Revenue earned since the previous snapshot of ``cabinet_label``.

    Labels match exactly (case-sensitive). With no earlier snapshot the baseline
    is zero, so the whole total counts as the day's revenue. A drop in total
    revenue yields a negative result; it is recorded, not rejected.
    """
    return new_total_revenue - previous_total(cabinet_label, existing_records, baseline)


__all__ = ["BASELINES", "find_previous", "previous_total", "compute_daily_revenue"]
