"""
Cabinet record model.

One ``CabinetRecord`` is one day's snapshot of a single operator's cabinet.
``daily_revenue`` is a snapshot taken when the record is created, not a live
projection of ``total_revenue``.
"""
from __future__ import annotations

import uuid
from dataclasses import asdict, dataclass, field, fields
from datetime import date
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class CabinetRecord:
    id: str
    last_name: str
    first_name: str
    cabinet_label: str
    total_revenue: float
    daily_revenue: float
    balance: float
    deals_before_midnight: int
    deals_after_midnight: int
    date: date = field(default_factory=date.today)

    @property
    def total_deals(self) -> int:
        return self.deals_before_midnight + self.deals_after_midnight

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


RECORD_FIELDS = [f.name for f in fields(CabinetRecord)]
MONEY_FIELDS = ["total_revenue", "daily_revenue", "balance"]
COUNT_FIELDS = ["deals_before_midnight", "deals_after_midnight"]
TEXT_FIELDS = ["last_name", "first_name", "cabinet_label"]


def new_record_id() -> str:
    return str(uuid.uuid4())


def seed_records(today: Optional[date] = None) -> List[CabinetRecord]:
    """The two cabinets a fresh session starts with."""
    today = today or date.today()
    return [
        CabinetRecord(
            id=new_record_id(),
            last_name="Ivanov",
            first_name="Petr",
            cabinet_label="Cabinet A",
            total_revenue=150_000.0,
            daily_revenue=5_000.0,
            balance=45_000.0,
            deals_before_midnight=12,
            deals_after_midnight=8,
            date=today,
        ),
        CabinetRecord(
            id=new_record_id(),
            last_name="Smirnova",
            first_name="Anna",
            cabinet_label="Cabinet B",
            total_revenue=220_000.0,
            daily_revenue=7_500.0,
            balance=68_000.0,
            deals_before_midnight=18,
            deals_after_midnight=5,
            date=today,
        ),
    ]


__all__ = [
    "CabinetRecord",
    "RECORD_FIELDS",
    "MONEY_FIELDS",
    "COUNT_FIELDS",
    "TEXT_FIELDS",
    "new_record_id",
    "seed_records",
]
