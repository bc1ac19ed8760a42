"""Directed multi-exchange conversion graph."""
from typing import Dict, Iterator, List, Optional, Tuple
from loguru import logger

from fxpath.models import ExchangeNode, PriceUpdate
from fxpath.core.registry import Fetched, Index, IndexRegistry, Inserted

Edge = Tuple[int, int, float]

# moving a currency between exchanges is free
SAME_CURRENCY_RATE = 1.0


class ExchangeGraph:
    """Conversion graph over (exchange, currency) nodes.

    Every quote contributes a pair of directed edges between two currencies
    of one exchange. Whenever a node is created, it is also linked with
    weight 1.0 in both directions to every node holding the same currency
    on another exchange, which joins the per-exchange books into one graph.
    """

    def __init__(self):
        self.registry: IndexRegistry[ExchangeNode] = IndexRegistry()
        self._edges: Dict[Tuple[int, int], float] = {}
        self._nodes_by_currency: Dict[str, List[int]] = {}

    def add(self, price_update: PriceUpdate) -> Tuple[Index, Index]:
        """Insert or refresh the nodes and edges for a quote."""
        source_index = self.registry.entry(price_update.source_node)
        dest_index = self.registry.entry(price_update.destination_node)

        source, dest = source_index.value, dest_index.value
        forward = price_update.forward_factor
        backward = price_update.backward_factor

        if isinstance(source_index, Fetched) and isinstance(dest_index, Fetched):
            self._set_pair(source, dest, forward, backward)
        elif isinstance(source_index, Fetched):
            self._insert_node(dest, price_update.destination_currency)
            self._set_pair(dest, source, backward, forward)
        elif isinstance(dest_index, Fetched):
            self._insert_node(source, price_update.source_currency)
            self._set_pair(source, dest, forward, backward)
        else:
            # source first, it has no counterpart yet
            self._insert_node(source, price_update.source_currency)
            self._insert_node(dest, price_update.destination_currency)
            self._set_pair(dest, source, backward, forward)

        return source_index, dest_index

    def _insert_node(self, node: int, currency: str):
        """Link a new node to the same currency on every other exchange."""
        same_currency = self._nodes_by_currency.setdefault(currency, [])

        for other in same_currency:
            self._edges[(node, other)] = SAME_CURRENCY_RATE
            self._edges[(other, node)] = SAME_CURRENCY_RATE

        same_currency.append(node)
        logger.debug(
            f"Inserted node {node} {self.registry.get_by_id(node)} "
            f"linked to {len(same_currency) - 1} other exchange(s)"
        )

    def _set_pair(self, node: int, origin: int, to_origin: float, from_origin: float):
        """Set node -> origin and origin -> node, overwriting existing weights."""
        if node == origin:
            logger.warning(
                f"Ignoring quote between {self.registry.get_by_id(node)} and itself"
            )
            return

        self._edges[(node, origin)] = to_origin
        self._edges[(origin, node)] = from_origin

    def get_edges(self) -> Iterator[Edge]:
        """Enumerate (tail, head, weight) triples, in no particular order."""
        return ((tail, head, weight) for (tail, head), weight in self._edges.items())

    def edge_weight(self, tail: int, head: int) -> Optional[float]:
        return self._edges.get((tail, head))

    def edge_count(self) -> int:
        return len(self._edges)

    def node_count(self) -> int:
        return len(self.registry)

    def node(self, index: int) -> Optional[ExchangeNode]:
        return self.registry.get_by_id(index)
