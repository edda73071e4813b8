"""CSV upload handling: file checks, parsing and ingestion.

This is the only layer that raises. It reads the whole file with pandas,
treating the first row as the header, typing numeric-looking cells and
skipping blank lines, then hands the rows to :func:`cost_analyser.ingest.ingest`.
"""

from __future__ import annotations

import io
import os
import re
import warnings
from os import PathLike
from pathlib import Path
from typing import IO, Any, Union

import pandas as pd

from . import config, ingest
from .errors import CsvParseError, InvalidFileTypeError, NoValidDataError
from .logging_setup import get_logger

logger = get_logger("cost_analyser.loader")

CsvSource = Union[str, PathLike, bytes, bytearray, IO[bytes], IO[str]]

_INT = re.compile(r"^\s*-?\d+\s*$")
_FLOAT = re.compile(r"^\s*-?(\d+\.?|\.\d+|\d+\.\d+)([eE][-+]?\d+)?\s*$")

NO_VALID_DATA_MESSAGE = "No valid data found in the file. Please check your CSV format."
INVALID_TYPE_MESSAGE = "Please upload a CSV file (.csv)"


def validate_filename(filename: str) -> None:
    """Raise :class:`InvalidFileTypeError` unless ``filename`` ends in ``.csv``."""

    suffix = Path(filename).suffix.lower()
    if suffix not in config.ACCEPTED_EXTENSIONS:
        raise InvalidFileTypeError(INVALID_TYPE_MESSAGE)


def _source_name(source: CsvSource) -> str | None:
    if isinstance(source, (str, PathLike)):
        return os.fspath(source)
    name = getattr(source, "name", None)
    return name if isinstance(name, str) else None


def _source_size(source: CsvSource) -> int | None:
    if isinstance(source, (bytes, bytearray)):
        return len(source)
    if isinstance(source, (str, PathLike)):
        try:
            return os.path.getsize(source)
        except OSError:
            return None
    size = getattr(source, "size", None)
    return size if isinstance(size, int) else None


def _warn_if_large(source: CsvSource) -> None:
    size = _source_size(source)
    if size is not None and size > config.MAX_UPLOAD_MB * 1024 * 1024:
        logger.warning(
            "CSV is %.1fMB, above the advised %.0fMB limit",
            size / (1024 * 1024),
            config.MAX_UPLOAD_MB,
        )


def infer_scalar(text: str) -> Any:
    """Type a raw cell: blank to ``None``, booleans, then ints and floats."""

    if not text.strip():
        return None
    lowered = text.strip().lower()
    if lowered in ("true", "false"):
        return lowered == "true"
    if _INT.match(text):
        return int(text)
    if _FLOAT.match(text):
        return float(text)
    return text


def read_rows(source: CsvSource) -> list[dict[str, Any]]:
    """Parse a CSV source into raw row mappings keyed by header name."""

    if isinstance(source, (bytes, bytearray)):
        source = io.BytesIO(source)

    long_rows: list[int] = []

    def _keep_long_row(fields: list[str]) -> list[str]:
        long_rows.append(len(fields))
        return fields

    try:
        with warnings.catch_warnings(record=True) as caught:
            # Extra fields on a long row are dropped; the row itself is kept.
            warnings.simplefilter("always", pd.errors.ParserWarning)
            frame = pd.read_csv(
                source,
                dtype=str,
                keep_default_na=False,
                skip_blank_lines=True,
                encoding="utf-8-sig",
                engine="python",
                index_col=False,
                on_bad_lines=_keep_long_row,
            )
    except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as exc:
        raise CsvParseError(f"Error parsing CSV: {exc}") from exc

    truncated = long_rows or any(issubclass(w.category, pd.errors.ParserWarning) for w in caught)
    if truncated:
        logger.warning("Dropped extra fields from rows longer than the %d-column header", len(frame.columns))

    return [
        {column: infer_scalar(value) for column, value in record.items()}
        for record in frame.to_dict(orient="records")
    ]


def load_records(source: CsvSource, filename: str | None = None) -> list[ingest.CleanRecord]:
    """Validate, parse and ingest a CSV upload.

    Raises
    ------
    InvalidFileTypeError
        When the file name does not end in ``.csv``.
    CsvParseError
        When pandas cannot parse the payload.
    NoValidDataError
        When no row survives ingestion.
    """

    name = filename or _source_name(source)
    if name:
        validate_filename(name)
    _warn_if_large(source)

    rows = read_rows(source)
    records = ingest.ingest(rows)
    if not records:
        raise NoValidDataError(NO_VALID_DATA_MESSAGE)

    logger.info("Loaded %d records from %s", len(records), name or "upload")
    return records
