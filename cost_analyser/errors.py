"""Exception hierarchy for the CSV loading boundary.

The ingest and aggregation steps never raise for malformed rows; these errors
only describe failures of the file as a whole.
"""

from __future__ import annotations


class CostAnalyserError(Exception):
    """Base exception for all Cost Analyser failures."""


class InvalidFileTypeError(CostAnalyserError):
    """Raised when an upload does not carry an accepted extension."""


class CsvParseError(CostAnalyserError):
    """Raised when the CSV payload cannot be split into rows."""


class NoValidDataError(CostAnalyserError):
    """Raised when every row of a file was rejected during ingestion."""
