"""Freshness filter between incoming quotes and the exchange graph."""
from typing import Dict, Optional
from loguru import logger

from fxpath.models import PriceUpdate, QuoteKey
from fxpath.core.exchange_graph import ExchangeGraph


class UpdateHandler:
    """Keeps the latest quote per (exchange, source, destination).

    A quote is applied when nothing is known for its key yet or when it is
    not older than the retained one. Equal timestamps count as fresh, so on
    a tie the later call wins. Older quotes are dropped without touching
    the graph, which makes replays and out-of-order delivery harmless.
    """

    def __init__(self, exchange_graph: Optional[ExchangeGraph] = None):
        self.exchange_graph = exchange_graph if exchange_graph is not None else ExchangeGraph()
        self.price_updates: Dict[QuoteKey, PriceUpdate] = {}

    def handle_update(self, price_update: PriceUpdate) -> bool:
        """Apply ``price_update`` if it is fresh. Returns whether it was applied."""
        current = self.price_updates.get(price_update.key)

        if current is not None and not price_update.is_newer_or_equal(current):
            logger.debug(
                f"Dropping stale quote {price_update.key} at {price_update.timestamp.isoformat()} "
                f"(have {current.timestamp.isoformat()})"
            )
            return False

        self.exchange_graph.add(price_update)
        self.price_updates[price_update.key] = price_update
        return True

    def latest(self, key: QuoteKey) -> Optional[PriceUpdate]:
        return self.price_updates.get(key)

    def __len__(self) -> int:
        return len(self.price_updates)
