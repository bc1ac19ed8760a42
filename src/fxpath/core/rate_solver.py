"""All-pairs best conversion rates over the exchange graph.

Rates compose by multiplication, so this is Floyd-Warshall with ``*`` in
place of ``+`` and ``max`` in place of ``min``. Nodes are relaxed in
ascending id order (k, then i, then j) and only a strictly better product
replaces the current best, so among equally good paths the first one found
in that order is kept.
"""
from dataclasses import dataclass
from typing import List, Optional
import numpy as np
from loguru import logger

from fxpath.core.exchange_graph import ExchangeGraph
from fxpath.infrastructure.error_handling import PathReconstructionError, UnknownNodeError

NO_PATH = -1


@dataclass
class RateTable:
    """Best rates and next hops for every ordered pair of node ids."""
    rates: np.ndarray
    next_hops: np.ndarray

    @property
    def size(self) -> int:
        return self.rates.shape[0]

    def contains(self, node: int) -> bool:
        return 0 <= node < self.size

    def _check(self, node: int):
        if not self.contains(node):
            raise UnknownNodeError(node)

    def rate(self, source: int, destination: int) -> float:
        """Best rate from ``source`` to ``destination``, 0.0 when unreachable."""
        self._check(source)
        self._check(destination)
        return float(self.rates[source, destination])

    def next_hop(self, source: int, destination: int) -> Optional[int]:
        self._check(source)
        self._check(destination)
        hop = int(self.next_hops[source, destination])
        return None if hop == NO_PATH else hop

    def amplifying_nodes(self) -> List[int]:
        """Nodes where a round trip returns more than it started with."""
        return [int(node) for node in np.flatnonzero(np.diag(self.rates) > 1.0)]


def best_rates(exchange_graph: ExchangeGraph) -> RateTable:
    """Solve best rates and next hops for every pair of known nodes."""
    size = exchange_graph.node_count()

    rates = np.zeros((size, size), dtype=np.float64)
    next_hops = np.full((size, size), NO_PATH, dtype=np.int64)

    # staying put is the trivial path with rate 1
    nodes = np.arange(size)
    rates[nodes, nodes] = 1.0
    next_hops[nodes, nodes] = nodes

    for tail, head, weight in exchange_graph.get_edges():
        rates[tail, head] = weight
        next_hops[tail, head] = head

    for k in range(size):
        for i in range(size):
            rate_ik = rates[i, k]
            if rate_ik == 0.0:
                continue

            candidates = rate_ik * rates[k]
            improved = candidates > rates[i]
            if improved.any():
                rates[i, improved] = candidates[improved]
                next_hops[i, improved] = next_hops[i, k]

        # row k only moves when a cycle through k amplifies
        if rates[k, k] > 1.0:
            logger.debug(f"Node {k} sits on an amplifying cycle ({rates[k, k]})")

    return RateTable(rates=rates, next_hops=next_hops)


def path(source: int, destination: int, table: RateTable) -> Optional[List[int]]:
    """Rebuild the best path from ``source`` to ``destination``.

    Returns None when the two nodes are not connected. A node's path to
    itself is ``[source]`` unless an amplifying cycle beat the trivial rate,
    in which case the cycle is returned. The walk is bounded by the node
    count, since a longer walk can only come from a table built over an
    amplifying cycle.
    """
    hop = table.next_hop(source, destination)
    if hop is None:
        return None
    if hop == source == destination:
        return [source]

    nodes = [source]
    current = source
    while True:
        if len(nodes) > table.size:
            raise PathReconstructionError(source, destination, len(nodes) - 1)
        current = int(table.next_hops[current, destination])
        if current == NO_PATH:
            raise PathReconstructionError(source, destination, len(nodes) - 1)
        nodes.append(current)
        if current == destination:
            return nodes


def path_rate(nodes: List[int], exchange_graph: ExchangeGraph) -> float:
    """Product of the edge weights along ``nodes``."""
    rate = 1.0
    for tail, head in zip(nodes, nodes[1:]):
        weight = exchange_graph.edge_weight(tail, head)
        if weight is None:
            raise ValueError(f"No edge from {tail} to {head}")
        rate *= weight
    return rate
