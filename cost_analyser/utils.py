"""Shared utilities for the Cost Analyser project."""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Iterable, Mapping

import pandas as pd

from . import config

_CENT = Decimal("0.01")


def ensure_records(rows: Iterable[Mapping] | pd.DataFrame) -> list[dict[str, Any]]:
    """Normalise the input payload to a list of plain dictionaries."""

    if isinstance(rows, pd.DataFrame):
        return rows.to_dict(orient="records")

    return [dict(row) for row in rows]


def is_missing(value: Any) -> bool:
    """Return ``True`` for ``None``, NaN/NaT and blank strings."""

    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def round_half_up(value: float, places: int = 2) -> float:
    """Round ``value`` half away from zero at ``places`` decimals.

    The float is first collapsed to 9 decimals so that binary noise such as
    ``15.004999999999999`` rounds like the decimal ``15.005`` it stands for.
    """

    if not math.isfinite(value):
        return 0.0
    quantum = _CENT if places == 2 else Decimal(1).scaleb(-places)
    collapsed = Decimal(repr(round(value, 9)))
    return float(collapsed.quantize(quantum, rounding=ROUND_HALF_UP))


def truncate_label(label: str, max_chars: int = config.LABEL_MAX_CHARS) -> str:
    """Shorten ``label`` to ``max_chars`` characters plus an ellipsis marker."""

    if len(label) <= max_chars:
        return label
    return label[:max_chars] + config.LABEL_ELLIPSIS


def format_currency(value: float, currency: str = config.CURRENCY) -> str:
    """Return a human-readable currency string."""

    return f"{currency}{value:,.2f}"
