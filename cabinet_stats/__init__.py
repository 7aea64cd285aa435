"""Cabinet statistics: record model, revenue reconciliation, aggregation and export."""

from cabinet_stats.aggregate import Summary, summarize
from cabinet_stats.models import CabinetRecord, new_record_id
from cabinet_stats.reconcile import compute_daily_revenue
from cabinet_stats.store import CabinetStore
from cabinet_stats.validation import ValidationError

__version__ = "0.1.0"

__all__ = [
    "CabinetRecord",
    "CabinetStore",
    "Summary",
    "ValidationError",
    "compute_daily_revenue",
    "new_record_id",
    "summarize",
]
