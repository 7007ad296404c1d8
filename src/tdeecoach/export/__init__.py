"""Terminal and JSON output."""

from tdeecoach.export.formatters import (
    JSONFormatter,
    TableFormatter,
    format_calculation,
    format_suite,
    format_validation,
)

__all__ = [
    "JSONFormatter",
    "TableFormatter",
    "format_calculation",
    "format_suite",
    "format_validation",
]
