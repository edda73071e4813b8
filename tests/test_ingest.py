"""Tests for row cleaning, field coercion and row rejection."""

from __future__ import annotations

from datetime import date

import numpy as np
import pandas as pd
import pytest
from cost_analyser import ingest


def test_ingest_trims_column_names_and_keeps_extra_columns() -> None:
    records = ingest.ingest([{" id ": 1, "amount ": "2.5", " Note": "keep me"}])

    assert len(records) == 1
    record = records[0]
    assert record["id"] == 1
    assert record["amount"] == 2.5
    assert record["Note"] == "keep me"
    assert " id " not in record


def test_ingest_rejects_rows_without_id() -> None:
    rows = [
        {"amount": "10"},
        {"id": None, "amount": "10"},
        {"id": "   ", "amount": "10"},
        {"id": float("nan"), "amount": "10"},
    ]
    assert ingest.ingest(rows) == []


def test_ingest_rejects_rows_without_amount_key() -> None:
    records = ingest.ingest([{"id": "1", "date": "2024-01-01"}, {"id": "2", "amount": "4"}])
    assert [record["id"] for record in records] == ["2"]


def test_ingest_keeps_unparsable_amount_as_zero() -> None:
    records = ingest.ingest([{"id": "1", "amount": "abc"}])

    assert len(records) == 1
    assert records[0]["amount"] == 0.0
    assert records[0]["parsed_date"] is None
    assert records[0]["date_key"] is None


def test_ingest_keeps_null_amount_as_zero() -> None:
    records = ingest.ingest([{"id": "1", "amount": None, "date": "2024-02-03"}])

    assert records[0]["amount"] == 0.0
    assert records[0]["date_key"] == "2024-02-03"


def test_ingest_keeps_zero_id() -> None:
    assert len(ingest.ingest([{"id": 0, "amount": 1}])) == 1


def test_ingest_parses_dates_and_builds_iso_keys() -> None:
    records = ingest.ingest(
        [
            {"id": 1, "amount": 1, "date": "June 1st, 2024"},
            {"id": 2, "amount": 1, "date": "not a date"},
            {"id": 3, "amount": 1},
        ]
    )

    assert records[0]["parsed_date"] == date(2024, 6, 1)
    assert records[0]["date_key"] == "2024-06-01"
    assert records[1]["parsed_date"] is None
    assert records[2]["date_key"] is None


def test_ingest_accepts_dataframe_input() -> None:
    frame = pd.DataFrame(
        {
            "id": ["a", "b", None],
            "amount": [1.5, np.nan, 3.0],
            "type": ["X", "Y", "Z"],
        }
    )
    records = ingest.ingest(frame)

    assert [record["id"] for record in records] == ["a", "b"]
    assert [record["amount"] for record in records] == [1.5, 0.0]


def test_ingest_does_not_mutate_input_rows() -> None:
    row = {"id": "1", "amount": "7"}
    ingest.ingest([row])
    assert row == {"id": "1", "amount": "7"}


def test_ingest_empty_input_returns_empty_list() -> None:
    assert ingest.ingest([]) == []


def test_parse_date_strips_ordinals() -> None:
    assert ingest.parse_date("June 1st, 2024") == ingest.parse_date("June 1, 2024")
    assert ingest.parse_date("2nd March 2023") == date(2023, 3, 2)
    assert ingest.parse_date("Aug 23rd 2022") == date(2022, 8, 23)
    assert ingest.parse_date("4th Jul 2021") == date(2021, 7, 4)


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("2024-01-05", date(2024, 1, 5)),
        ("2024-01-05T13:45:00", date(2024, 1, 5)),
        ("2024-03-01T23:30:00-05:00", date(2024, 3, 1)),
        ("2024/01/05", date(2024, 1, 5)),
        ("01/05/2024", date(2024, 1, 5)),
        ("1/5/2024", date(2024, 1, 5)),
        ("January 5, 2024", date(2024, 1, 5)),
        ("5 Jan 2024", date(2024, 1, 5)),
        ("05-Jan-2024", date(2024, 1, 5)),
        ("  2024-01-05  ", date(2024, 1, 5)),
    ],
)
def test_parse_date_accepts_known_formats(value: str, expected: date) -> None:
    assert ingest.parse_date(value) == expected


@pytest.mark.parametrize(
    "value",
    ["", "   ", None, float("nan"), 20240105, "13/45/2024", "soon", "2024-05", "2024"],
)
def test_parse_date_returns_none_for_unusable_values(value: object) -> None:
    assert ingest.parse_date(value) is None


def test_parse_date_passes_through_date_objects() -> None:
    assert ingest.parse_date(date(2024, 2, 29)) == date(2024, 2, 29)
    assert ingest.parse_date(pd.Timestamp("2024-02-29 10:00")) == date(2024, 2, 29)
    assert ingest.parse_date(pd.NaT) is None


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("10.005", 10.005),
        (" 3 ", 3.0),
        (7, 7.0),
        (-2.5, -2.5),
        ("1e3", 1000.0),
        ("abc", 0.0),
        ("12.5 USD", 12.5),
        ("-3kg", -3.0),
        ("$5", 0.0),
        ("", 0.0),
        (None, 0.0),
        (True, 0.0),
        ("inf", 0.0),
        (float("nan"), 0.0),
    ],
)
def test_parse_amount(value: object, expected: float) -> None:
    assert ingest.parse_amount(value) == expected


def test_ingest_leaves_month_only_dates_undated() -> None:
    records = ingest.ingest([{"id": 1, "amount": 5, "date": "2024-05"}])

    assert records[0]["parsed_date"] is None
    assert records[0]["date_key"] is None
