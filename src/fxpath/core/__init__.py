"""Core graph engine components."""

from .registry import Index, Fetched, Inserted, IndexRegistry
from .exchange_graph import ExchangeGraph
from .update_handler import UpdateHandler
from .rate_solver import RateTable, NO_PATH, best_rates, path, path_rate
from .engine import ExchangeRateEngine

__all__ = [
    "Index",
    "Fetched",
    "Inserted",
    "IndexRegistry",
    "ExchangeGraph",
    "UpdateHandler",
    "RateTable",
    "NO_PATH",
    "best_rates",
    "path",
    "path_rate",
    "ExchangeRateEngine",
]
