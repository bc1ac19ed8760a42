"""Output rendering for best rates and engine statistics."""

from .report import format_best_rates, format_no_path, graph_summary_table

__all__ = [
    "format_best_rates",
    "format_no_path",
    "graph_summary_table",
]
