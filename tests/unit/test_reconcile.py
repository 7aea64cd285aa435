from __future__ import annotations

from datetime import timedelta

import pytest

from cabinet_stats.reconcile import compute_daily_revenue, find_previous, previous_total


def test_no_prior_record_uses_zero_baseline():
    assert compute_daily_revenue("A", 1234.5, []) == 1234.5


def test_delta_against_prior_total(make_record):
    prior = [make_record(cabinet_label="A", total_revenue=100.0)]

    assert compute_daily_revenue("A", 150.0, prior) == 50.0
    assert compute_daily_revenue("A", 80.0, prior) == -20.0


def test_label_match_is_exact_and_case_sensitive(make_record):
    prior = [make_record(cabinet_label="A", total_revenue=100.0)]

    assert compute_daily_revenue("a", 150.0, prior) == 150.0
    assert compute_daily_revenue("A ", 150.0, prior) == 150.0


def test_other_cabinets_do_not_count(make_record):
    prior = [make_record(cabinet_label="B", total_revenue=999.0)]
    assert compute_daily_revenue("A", 10.0, prior) == 10.0


def test_repeated_label_uses_first_record_in_store_order(make_record, today):
    # Known ambiguity: with several snapshots of one cabinet the baseline is the
    # oldest row in the store, not the newest, so the "daily" figure grows
    # cumulatively. "latest" is the alternative baseline.
    records = [
        make_record(cabinet_label="A", total_revenue=100.0, date=today - timedelta(days=2)),
        make_record(cabinet_label="A", total_revenue=130.0, date=today - timedelta(days=1)),
    ]

    assert compute_daily_revenue("A", 150.0, records) == 50.0
    assert compute_daily_revenue("A", 150.0, records, baseline="latest") == 20.0


def test_first_baseline_ignores_dates(make_record, today):
    records = [
        make_record(cabinet_label="A", total_revenue=130.0, date=today),
        make_record(cabinet_label="A", total_revenue=100.0, date=today - timedelta(days=5)),
    ]

    assert previous_total("A", records) == 130.0
    assert previous_total("A", records, baseline="latest") == 130.0


def test_latest_baseline_breaks_date_ties_by_insertion(make_record, today):
    records = [
        make_record(id="older", cabinet_label="A", total_revenue=100.0, date=today),
        make_record(id="newer", cabinet_label="A", total_revenue=120.0, date=today),
    ]

    assert find_previous("A", records, baseline="latest").id == "newer"
    assert find_previous("A", records, baseline="first").id == "older"


def test_unknown_baseline_rejected(make_record):
    with pytest.raises(ValueError):
        compute_daily_revenue("A", 1.0, [make_record()], baseline="median")


def test_does_not_mutate_inputs(make_record):
    records = [make_record(cabinet_label="A", total_revenue=100.0)]
    snapshot = list(records)

    compute_daily_revenue("A", 500.0, records)

    assert records == snapshot
