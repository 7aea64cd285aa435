from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Sequence

from cabinet_stats.models import CabinetRecord

if TYPE_CHECKING:
    from matplotlib.figure import Figure

PALETTE = ["#9b87f5", "#D6BCFA"]


def deals_split_figure(records: Sequence[CabinetRecord], cutoff_label: str = "00:00") -> Optional[Figure]:
    """Pie of all deals before vs. after the cutoff; None when nothing was closed."""
    before = sum(r.deals_before_midnight for r in records)
    after = sum(r.deals_after_midnight for r in records)
    if before + after == 0:
        return None
    import matplotlib.pyplot as plt
    fig, ax = plt.subplots()
    ax.pie(
        [before, after],
        labels=[f"Before {cutoff_label}", f"After {cutoff_label}"],
        colors=PALETTE,
        autopct="%1.1f%%",
        startangle=90,
    )
    ax.axis("equal")
    return fig


__all__ = ["deals_split_figure"]
