"""Core modules for the Cost Analyser application."""

from . import aggregate, config, errors, highlights, ingest, loader, logging_setup, utils, viz

__all__ = [
	"aggregate",
	"config",
	"errors",
	"highlights",
	"ingest",
	"loader",
	"logging_setup",
	"utils",
	"viz",
]
