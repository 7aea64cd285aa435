from __future__ import annotations

import matplotlib.pyplot as plt

from cabinet_stats.charts import deals_split_figure


def test_deals_split_figure(two_cabinets):
    fig = deals_split_figure(two_cabinets, "00:00 MSK")
    try:
        texts = [t.get_text() for t in fig.axes[0].texts]
        assert "Before 00:00 MSK" in texts
        assert "After 00:00 MSK" in texts
    finally:
        plt.close(fig)


def test_no_deals_no_figure(make_record):
    assert deals_split_figure([make_record()]) is None
    assert deals_split_figure([]) is None
