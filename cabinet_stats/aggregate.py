"""Summary cards and chart data over the current record set."""
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Dict, Sequence

import pandas as pd

from cabinet_stats.models import CabinetRecord


@dataclass(frozen=True)
class Summary:
    total_revenue: float = 0.0
    total_balance: float = 0.0
    total_deals: int = 0
    average_daily_revenue: float = 0.0
    record_count: int = 0

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)


def _frame(records: Sequence[CabinetRecord]) -> pd.DataFrame:
    return pd.DataFrame([r.to_dict() for r in records])


def summarize(records: Sequence[CabinetRecord]) -> Summary:
    """
    Totals for the dashboard cards, recomputed on every call.

    The average daily revenue of an empty set is 0 rather than NaN.
    """
    df = _frame(records)
    if df.empty:
        return Summary()
    deals = df["deals_before_midnight"] + df["deals_after_midnight"]
    return Summary(
        total_revenue=float(df["total_revenue"].sum()),
        total_balance=float(df["balance"].sum()),
        total_deals=int(deals.sum()),
        average_daily_revenue=float(df["daily_revenue"].sum()) / len(df),
        record_count=len(df),
    )


def financial_chart_frame(records: Sequence[CabinetRecord]) -> pd.DataFrame:
    cols = ["Revenue", "Balance", "Daily revenue"]
    if not records:
        return pd.DataFrame(columns=cols)
    return pd.DataFrame(
        {
            "Revenue": [r.total_revenue for r in records],
            "Balance": [r.balance for r in records],
            "Daily revenue": [r.daily_revenue for r in records],
        },
        index=pd.Index([r.cabinet_label for r in records], name="cabinet"),
    )[cols]


def deals_chart_frame(records: Sequence[CabinetRecord]) -> pd.DataFrame:
    cols = ["Before 00:00", "After 00:00"]
    if not records:
        return pd.DataFrame(columns=cols)
    return pd.DataFrame(
        {
            "Before 00:00": [r.deals_before_midnight for r in records],
            "After 00:00": [r.deals_after_midnight for r in records],
        },
        index=pd.Index([r.cabinet_label for r in records], name="cabinet"),
    )[cols]


__all__ = ["Summary", "summarize", "financial_chart_frame", "deals_chart_frame"]
