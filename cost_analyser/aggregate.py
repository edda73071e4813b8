"""Aggregation helpers: category totals, daily totals and the grand summary."""

from __future__ import annotations

from datetime import date
from typing import Any, Iterable, Mapping, TypedDict

import pandas as pd

from . import config, utils
from .logging_setup import get_logger

logger = get_logger("cost_analyser.aggregate")


class CategoryTotal(TypedDict):
    category: str
    display_label: str
    total_cost: float
    count: int


class DailyTotal(TypedDict):
    date_key: str
    display_date: str
    total_cost: float
    count: int


class Summary(TypedDict):
    total_cost: float
    record_count: int
    average_cost: float


class CostPayload(TypedDict):
    category_totals: list[CategoryTotal]
    daily_totals: list[DailyTotal]
    summary: Summary


def _category_of(record: Mapping[str, Any]) -> str:
    value = record.get("type")
    if utils.is_missing(value):
        return config.UNKNOWN_CATEGORY
    return str(value)


def _records_frame(records: Iterable[Mapping[str, Any]]) -> pd.DataFrame:
    rows = list(records)
    return pd.DataFrame(
        {
            "category": [_category_of(row) for row in rows],
            "date_key": [row.get("date_key") for row in rows],
            "amount": [float(row.get("amount", 0.0)) for row in rows],
        },
        columns=["category", "date_key", "amount"],
    )


def _format_day(date_key: str) -> str:
    return date.fromisoformat(date_key).strftime(config.DISPLAY_DATE_FORMAT)


def _category_totals(frame: pd.DataFrame) -> list[CategoryTotal]:
    if frame.empty:
        return []

    grouped = frame.groupby("category", sort=False)["amount"].agg(["sum", "size"])
    totals: list[CategoryTotal] = [
        {
            "category": str(category),
            "display_label": utils.truncate_label(str(category)),
            "total_cost": utils.round_half_up(float(row["sum"])),
            "count": int(row["size"]),
        }
        for category, row in grouped.iterrows()
    ]
    # list.sort is stable, so equal totals keep first-seen order.
    totals.sort(key=lambda entry: entry["total_cost"], reverse=True)
    return totals


def _daily_totals(frame: pd.DataFrame, window: int) -> list[DailyTotal]:
    dated = frame.dropna(subset=["date_key"])
    if dated.empty or window <= 0:
        return []

    grouped = (
        dated.groupby("date_key", sort=True)["amount"]
        .agg(["sum", "size"])
        .tail(window)
    )
    return [
        {
            "date_key": str(date_key),
            "display_date": _format_day(str(date_key)),
            "total_cost": utils.round_half_up(float(row["sum"])),
            "count": int(row["size"]),
        }
        for date_key, row in grouped.iterrows()
    ]


def _summary(frame: pd.DataFrame) -> Summary:
    record_count = int(len(frame))
    total_cost = utils.round_half_up(float(frame["amount"].sum())) if record_count else 0.0
    return {
        "total_cost": total_cost,
        "record_count": record_count,
        "average_cost": total_cost / record_count if record_count else 0.0,
    }


def category_totals(records: Iterable[Mapping[str, Any]]) -> list[CategoryTotal]:
    """Group records by ``type`` and return totals sorted by cost, highest first."""

    return _category_totals(_records_frame(records))


def daily_totals(
    records: Iterable[Mapping[str, Any]],
    window: int = config.DAILY_WINDOW,
) -> list[DailyTotal]:
    """Return per-day totals for the ``window`` most recent days present in the data.

    Records without a ``date_key`` are left out of this view only.
    """

    return _daily_totals(_records_frame(records), window)


def summarize(records: Iterable[Mapping[str, Any]]) -> Summary:
    """Compute the grand total, record count and average cost."""

    return _summary(_records_frame(records))


def aggregate(records: Iterable[Mapping[str, Any]]) -> CostPayload:
    """Compute every view the dashboard renders from a set of clean records."""

    frame = _records_frame(records)
    payload: CostPayload = {
        "category_totals": _category_totals(frame),
        "daily_totals": _daily_totals(frame, config.DAILY_WINDOW),
        "summary": _summary(frame),
    }
    logger.debug(
        "Aggregated %d records into %d categories and %d days",
        payload["summary"]["record_count"],
        len(payload["category_totals"]),
        len(payload["daily_totals"]),
    )
    return payload
