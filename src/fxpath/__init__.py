"""
fxpath - Best conversion rates and paths across exchanges from streamed quotes.
"""

from .config import config
from .models import ExchangeNode, PriceUpdate, ExchangeRequest, BestRate
from .core import ExchangeRateEngine, ExchangeGraph, IndexRegistry, best_rates, path
from .parsing import parse_line

__version__ = "1.0.0"
__all__ = [
    "config",
    "ExchangeNode",
    "PriceUpdate",
    "ExchangeRequest",
    "BestRate",
    "ExchangeRateEngine",
    "ExchangeGraph",
    "IndexRegistry",
    "best_rates",
    "path",
    "parse_line",
]
