"""Runtime settings for Cost Analyser, read from the environment."""

from __future__ import annotations

import os

LABEL_MAX_CHARS = int(os.getenv("COST_ANALYSER_LABEL_MAX_CHARS", "25"))
LABEL_ELLIPSIS = "..."
DAILY_WINDOW = int(os.getenv("COST_ANALYSER_DAILY_WINDOW", "30"))
UNKNOWN_CATEGORY = os.getenv("COST_ANALYSER_UNKNOWN_CATEGORY", "Unknown")

DISPLAY_DATE_FORMAT = os.getenv("COST_ANALYSER_DISPLAY_DATE_FORMAT", "%d %b %Y")
CURRENCY = os.getenv("COST_ANALYSER_CURRENCY", "$")

# Advisory only; larger uploads are logged, not rejected.
MAX_UPLOAD_MB = float(os.getenv("COST_ANALYSER_MAX_UPLOAD_MB", "50"))
ACCEPTED_EXTENSIONS = (".csv",)

LOG_LEVEL = os.getenv("COST_ANALYSER_LOG_LEVEL")
