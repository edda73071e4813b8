"""Record ingestion: raw CSV rows to clean, typed cost records.

Rows come from the CSV loader (or any caller) as loosely typed mappings. Only
``id``, ``amount``, ``type`` and ``date`` carry meaning; every other column is
passed through untouched. Per-row problems never raise: a row without an id
or without an amount column is dropped, an unreadable field falls back to a
safe default.
"""

from __future__ import annotations

import math
import re
from datetime import date, datetime
from functools import lru_cache
from typing import Any, Iterable, Mapping, TypedDict

import numpy as np
import pandas as pd

from . import utils
from .logging_setup import get_logger

logger = get_logger("cost_analyser.ingest")

_ORDINAL_SUFFIX = re.compile(r"(\d+)(st|nd|rd|th)\b", re.IGNORECASE)
# ISO input must name a full calendar day; "2024-05" and "2024" are not dates.
_ISO_DAY = re.compile(r"\d{4}-\d{1,2}-\d{1,2}([T ].*)?")
# Leading number of a cell such as "12.5 USD".
_LEADING_NUMBER = re.compile(r"[-+]?(\d+\.?\d*|\.\d+)([eE][-+]?\d+)?")

# Tried in order after ISO-8601. Slash dates are month-first.
DATE_FORMATS: tuple[str, ...] = (
    "%Y/%m/%d",
    "%m/%d/%Y",
    "%m/%d/%Y %H:%M",
    "%m/%d/%Y %H:%M:%S",
    "%m-%d-%Y",
    "%B %d, %Y",
    "%b %d, %Y",
    "%B %d %Y",
    "%b %d %Y",
    "%d %B %Y",
    "%d %b %Y",
    "%d %B, %Y",
    "%d %b, %Y",
    "%d-%b-%Y",
    "%A, %B %d, %Y",
    "%a, %b %d, %Y",
)


class _CleanRecordBase(TypedDict):
    id: Any
    amount: float
    parsed_date: date | None
    date_key: str | None


class CleanRecord(_CleanRecordBase, total=False):
    type: Any
    date: Any


def clean_columns(row: Mapping[Any, Any]) -> dict[str, Any]:
    """Return a copy of ``row`` with surrounding whitespace removed from keys."""

    return {str(key).strip(): value for key, value in row.items()}


@lru_cache(maxsize=8192)
def _parse_date_text(text: str) -> date | None:
    cleaned = _ORDINAL_SUFFIX.sub(r"\1", text.strip())
    if not cleaned:
        return None

    formats = ("ISO8601", *DATE_FORMATS) if _ISO_DAY.fullmatch(cleaned) else DATE_FORMATS
    for fmt in formats:
        try:
            parsed = pd.to_datetime(cleaned, format=fmt)
        except (ValueError, OverflowError):
            continue
        if not pd.isna(parsed):
            return parsed.date()
    return None


def parse_date(value: Any) -> date | None:
    """Parse a ``date`` cell into a calendar date, or ``None``.

    Strings have ordinal suffixes removed (``"June 1st, 2024"`` reads as
    ``"June 1, 2024"``) and are matched against ISO-8601 and then
    :data:`DATE_FORMATS`. Timestamps carrying an offset keep the calendar day
    as written. Numbers are never treated as dates.
    """

    if utils.is_missing(value):
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return _parse_date_text(value)
    return None


def parse_amount(value: Any) -> float:
    """Coerce an ``amount`` cell to a finite float, falling back to ``0.0``.

    Text with trailing units reads its leading number, so ``"12.5 USD"`` is
    ``12.5``; text that does not start with a number (``"$5"``) is ``0.0``.
    """

    if isinstance(value, (bool, np.bool_)) or utils.is_missing(value):
        return 0.0
    if isinstance(value, str):
        value = value.strip()

    try:
        number = float(pd.to_numeric(value, errors="coerce"))
    except (TypeError, ValueError, OverflowError):
        return 0.0

    if math.isnan(number) and isinstance(value, str):
        leading = _LEADING_NUMBER.match(value)
        if leading:
            number = float(leading.group(0))

    if not math.isfinite(number):
        return 0.0
    return number


def _is_accepted(row: Mapping[str, Any]) -> bool:
    return not utils.is_missing(row.get("id")) and "amount" in row


def normalize_row(row: Mapping[str, Any]) -> CleanRecord:
    """Attach the parsed amount, date and ISO date key to an accepted row."""

    record: dict[str, Any] = dict(row)
    parsed = parse_date(row.get("date"))
    record["amount"] = parse_amount(row.get("amount"))
    record["parsed_date"] = parsed
    record["date_key"] = parsed.isoformat() if parsed is not None else None
    return record  # type: ignore[return-value]


def _has_signal(record: Mapping[str, Any]) -> bool:
    return record["parsed_date"] is not None or not math.isnan(record["amount"])


def ingest(raw_rows: Iterable[Mapping] | pd.DataFrame) -> list[CleanRecord]:
    """Clean raw rows into records ready for aggregation.

    An empty result means no row was usable; callers use it to show a
    "no valid data" message.
    """

    rows = [clean_columns(row) for row in utils.ensure_records(raw_rows)]
    accepted = [row for row in rows if _is_accepted(row)]
    records = [record for record in map(normalize_row, accepted) if _has_signal(record)]

    logger.info(
        "Ingested %d of %d rows (%d missing id or amount)",
        len(records),
        len(rows),
        len(rows) - len(accepted),
    )
    if rows and not records:
        logger.warning("No usable rows after ingestion")

    return records
