from __future__ import annotations

import math

from cabinet_stats.aggregate import Summary, deals_chart_frame, financial_chart_frame, summarize

EXPECTED_TOTAL_REVENUE = 370_000
EXPECTED_TOTAL_BALANCE = 113_000
EXPECTED_TOTAL_DEALS = 43
EXPECTED_AVERAGE_DAILY = 6_250


def test_summarize_totals(two_cabinets):
    s = summarize(two_cabinets)

    assert s.total_revenue == EXPECTED_TOTAL_REVENUE
    assert s.total_balance == EXPECTED_TOTAL_BALANCE
    assert s.total_deals == EXPECTED_TOTAL_DEALS
    assert s.average_daily_revenue == EXPECTED_AVERAGE_DAILY
    assert s.record_count == 2


def test_summarize_returns_plain_python_numbers(two_cabinets):
    s = summarize(two_cabinets)

    assert type(s.total_revenue) is float
    assert type(s.total_deals) is int


def test_empty_set_average_is_zero_not_nan():
    s = summarize([])

    assert s.average_daily_revenue == 0
    assert not math.isnan(s.average_daily_revenue)
    assert s == Summary()


def test_negative_daily_revenue_pulls_average_down(make_record):
    records = [make_record(daily_revenue=100.0), make_record(daily_revenue=-40.0)]
    assert summarize(records).average_daily_revenue == 30.0


def test_summary_to_dict(two_cabinets):
    d = summarize(two_cabinets).to_dict()
    assert set(d) == {"total_revenue", "total_balance", "total_deals", "average_daily_revenue", "record_count"}


def test_financial_chart_frame(two_cabinets):
    df = financial_chart_frame(two_cabinets)

    assert list(df.columns) == ["Revenue", "Balance", "Daily revenue"]
    assert list(df.index) == ["Cabinet A", "Cabinet B"]
    assert df.loc["Cabinet B", "Revenue"] == 220_000.0


def test_deals_chart_frame(two_cabinets):
    df = deals_chart_frame(two_cabinets)

    assert list(df.columns) == ["Before 00:00", "After 00:00"]
    assert df["Before 00:00"].tolist() == [12, 18]
    assert df["After 00:00"].tolist() == [8, 5]


def test_chart_frames_empty():
    assert financial_chart_frame([]).empty
    assert deals_chart_frame([]).empty
