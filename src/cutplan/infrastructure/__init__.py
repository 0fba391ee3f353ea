"""Infrastructure layer - output formatting and export."""

from cutplan.infrastructure.formatters import JsonExporter, PackingSummaryFormatter

__all__ = [
    "JsonExporter",
    "PackingSummaryFormatter",
]
