"""Tests for dashboard highlights and breakdown rows."""

from __future__ import annotations

import pytest
from cost_analyser import aggregate, highlights, ingest


def _payload(rows: list[dict]) -> aggregate.CostPayload:
    return aggregate.aggregate(ingest.ingest(rows))


def test_derive_highlights_picks_largest_frequent_and_peak() -> None:
    payload = _payload(
        [
            {"id": 1, "type": "Compute", "amount": 40, "date": "2024-04-01"},
            {"id": 2, "type": "Storage", "amount": 5, "date": "2024-04-01"},
            {"id": 3, "type": "Storage", "amount": 5, "date": "2024-04-02"},
            {"id": 4, "type": "Storage", "amount": 50, "date": "2024-04-03"},
            {"id": 5, "type": "Network", "amount": 10},
        ]
    )
    found = highlights.derive_highlights(payload)

    assert found["largest_category"]["category"] == "Storage"
    assert found["largest_share_pct"] == pytest.approx(60 / 110 * 100)
    assert found["most_frequent_category"]["category"] == "Storage"
    assert found["peak_day"]["date_key"] == "2024-04-03"


def test_ties_go_to_first_occurrence() -> None:
    payload = _payload(
        [
            {"id": 1, "type": "Alpha", "amount": 30, "date": "2024-01-02"},
            {"id": 2, "type": "Beta", "amount": 20, "date": "2024-01-05"},
            {"id": 3, "type": "Beta", "amount": 10, "date": "2024-01-02"},
            {"id": 4, "type": "Alpha", "amount": 10, "date": "2024-01-09"},
        ]
    )

    assert highlights.most_frequent_category(payload["category_totals"])["category"] == "Alpha"
    daily = [
        {"date_key": "2024-01-01", "display_date": "01 Jan 2024", "total_cost": 5.0, "count": 1},
        {"date_key": "2024-01-02", "display_date": "02 Jan 2024", "total_cost": 9.0, "count": 1},
        {"date_key": "2024-01-03", "display_date": "03 Jan 2024", "total_cost": 9.0, "count": 2},
    ]
    assert highlights.peak_day(daily)["date_key"] == "2024-01-02"


def test_highlights_tolerate_empty_payload() -> None:
    found = highlights.derive_highlights(aggregate.aggregate([]))

    assert found == {
        "largest_category": None,
        "largest_share_pct": 0.0,
        "most_frequent_category": None,
        "peak_day": None,
    }
    assert highlights.category_breakdown(aggregate.aggregate([])) == []


def test_category_breakdown_rows() -> None:
    payload = _payload(
        [
            {"id": 1, "type": "Compute", "amount": 30},
            {"id": 2, "type": "Compute", "amount": 45},
            {"id": 3, "type": "Storage", "amount": 25},
        ]
    )
    rows = highlights.category_breakdown(payload)

    assert [row["category"] for row in rows] == ["Compute", "Storage"]
    assert rows[0]["average_cost"] == pytest.approx(37.5)
    assert rows[0]["share_pct"] == pytest.approx(75.0)
    assert rows[1]["share_pct"] == pytest.approx(25.0)


def test_top_categories_and_recent_days_slices() -> None:
    rows = [
        {"id": day, "type": f"Service {day}", "amount": day, "date": f"2024-02-{day:02d}"}
        for day in range(1, 13)
    ]
    payload = _payload(rows)

    top = highlights.top_categories(payload, 8)
    assert len(top) == 8
    assert top[0]["category"] == "Service 12"

    recent = highlights.recent_days(payload, 8)
    assert [entry["date_key"] for entry in recent] == [f"2024-02-{day:02d}" for day in range(5, 13)]
    assert highlights.recent_days(payload, 0) == []
    assert highlights.top_categories(payload, 0) == []
