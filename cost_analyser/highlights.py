"""Dashboard callouts derived from an aggregated cost payload."""

from __future__ import annotations

from typing import Sequence, TypedDict

from .aggregate import CategoryTotal, CostPayload, DailyTotal


class Highlights(TypedDict):
    largest_category: CategoryTotal | None
    largest_share_pct: float
    most_frequent_category: CategoryTotal | None
    peak_day: DailyTotal | None


class BreakdownRow(TypedDict):
    category: str
    display_label: str
    total_cost: float
    count: int
    average_cost: float
    share_pct: float


def _share_pct(value: float, total: float) -> float:
    return value / total * 100.0 if total else 0.0


def largest_category(category_totals: Sequence[CategoryTotal]) -> CategoryTotal | None:
    """Return the highest-cost category; totals are already sorted descending."""

    return category_totals[0] if category_totals else None


def most_frequent_category(category_totals: Sequence[CategoryTotal]) -> CategoryTotal | None:
    """Return the category with the most records; the first one wins a tie."""

    best: CategoryTotal | None = None
    for entry in category_totals:
        if best is None or entry["count"] > best["count"]:
            best = entry
    return best


def peak_day(daily_totals: Sequence[DailyTotal]) -> DailyTotal | None:
    """Return the day with the highest total cost; the earliest one wins a tie."""

    best: DailyTotal | None = None
    for entry in daily_totals:
        if best is None or entry["total_cost"] > best["total_cost"]:
            best = entry
    return best


def derive_highlights(payload: CostPayload) -> Highlights:
    largest = largest_category(payload["category_totals"])
    return {
        "largest_category": largest,
        "largest_share_pct": (
            _share_pct(largest["total_cost"], payload["summary"]["total_cost"]) if largest else 0.0
        ),
        "most_frequent_category": most_frequent_category(payload["category_totals"]),
        "peak_day": peak_day(payload["daily_totals"]),
    }


def category_breakdown(payload: CostPayload) -> list[BreakdownRow]:
    """Rows for the cost breakdown table, in category-total order."""

    grand_total = payload["summary"]["total_cost"]
    return [
        {
            "category": entry["category"],
            "display_label": entry["display_label"],
            "total_cost": entry["total_cost"],
            "count": entry["count"],
            "average_cost": entry["total_cost"] / entry["count"] if entry["count"] else 0.0,
            "share_pct": _share_pct(entry["total_cost"], grand_total),
        }
        for entry in payload["category_totals"]
    ]


def top_categories(payload: CostPayload, limit: int = 8) -> list[CategoryTotal]:
    return list(payload["category_totals"][: max(limit, 0)])


def recent_days(payload: CostPayload, limit: int = 8) -> list[DailyTotal]:
    if limit <= 0:
        return []
    return list(payload["daily_totals"][-limit:])
