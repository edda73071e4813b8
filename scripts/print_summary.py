"""Print the aggregated cost payload and highlights for a CSV file as JSON."""

from __future__ import annotations

import argparse
import json
import sys
from datetime import date
from typing import Any

from cost_analyser import aggregate, errors, highlights, loader
from cost_analyser.logging_setup import configure_logging


def _default_serializer(obj: Any) -> Any:
    if isinstance(obj, date):
        return obj.isoformat()
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serialisable")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("csv_path", help="Path to a .csv file with id and amount columns")
    parser.add_argument("--log-level", default=None, help="Logging level, e.g. DEBUG")
    args = parser.parse_args(argv)

    configure_logging(args.log_level)
    try:
        records = loader.load_records(args.csv_path)
    except errors.CostAnalyserError as exc:
        print(str(exc), file=sys.stderr)
        return 1

    payload = aggregate.aggregate(records)
    output = {**payload, "highlights": highlights.derive_highlights(payload)}
    print(json.dumps(output, indent=2, default=_default_serializer))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
