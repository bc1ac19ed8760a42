"""Exchange rate engine: owns the graph, the latest quotes and the solution."""
from typing import Optional
from loguru import logger

from fxpath.config import EngineConfig
from fxpath.models import BestRate, ExchangeNode, ExchangeRequest, PriceUpdate
from fxpath.core.exchange_graph import ExchangeGraph
from fxpath.core.update_handler import UpdateHandler
from fxpath.core.rate_solver import RateTable, best_rates, path, path_rate
from fxpath.infrastructure.error_handling import UnknownNodeError
from fxpath.infrastructure.performance import PerformanceMonitor


class ExchangeRateEngine:
    """Answers best-rate requests over the quotes received so far.

    The solved table is kept until the next accepted quote, so a batch of
    requests between two updates pays for a single solve.
    """

    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        performance: Optional[PerformanceMonitor] = None,
    ):
        """Initialise the engine with empty state."""
        self.config = config if config is not None else EngineConfig()
        self.performance = performance if performance is not None else PerformanceMonitor()
        self.exchange_graph = ExchangeGraph()
        self.update_handler = UpdateHandler(self.exchange_graph)
        self._table: Optional[RateTable] = None

    def handle_update(self, price_update: PriceUpdate) -> bool:
        """Feed a quote to the engine. Returns whether it was applied."""
        with self.performance.measure("handle_update"):
            accepted = self.update_handler.handle_update(price_update)

        if accepted:
            self._table = None
        return accepted

    def solve(self) -> RateTable:
        """Return the rate table for the current graph, solving if needed."""
        if self._table is not None and self.config.cache_solutions:
            return self._table

        node_count = self.exchange_graph.node_count()
        if node_count > self.config.large_graph_nodes:
            logger.warning(
                f"Solving over {node_count} nodes "
                f"(more than {self.config.large_graph_nodes}), this may be slow"
            )

        with self.performance.measure("solve") as timer:
            table = best_rates(self.exchange_graph)

        logger.info(
            f"Solved best rates for {node_count} nodes and "
            f"{self.exchange_graph.edge_count()} edges in {timer.duration * 1000:.2f}ms"
        )
        self._table = table
        return table

    def node_id(self, node: ExchangeNode) -> int:
        """Registry id for ``node``, raising if it has never been quoted."""
        index = self.exchange_graph.registry.get(node)
        if index is None:
            raise UnknownNodeError(node)
        return index

    def best_rate(self, request: ExchangeRequest) -> Optional[BestRate]:
        """Best rate and path for ``request``, or None when unreachable."""
        source = self.node_id(request.source_node)
        destination = self.node_id(request.destination_node)

        table = self.solve()
        node_ids = path(source, destination, table)
        if node_ids is None:
            logger.debug(f"No path from {request.source_node} to {request.destination_node}")
            return None

        rate = table.rate(source, destination)
        if table.amplifying_nodes():
            # amplified table entries depend on relaxation order, report what the path yields
            rate = path_rate(node_ids, self.exchange_graph)

        best_rate = BestRate(
            source=request.source_node,
            destination=request.destination_node,
            rate=rate,
            path=[self.exchange_graph.node(node_id) for node_id in node_ids],
        )
        logger.debug(f"Best rate: {best_rate}")
        return best_rate

    def stats(self) -> dict:
        """Current size of the engine state."""
        return {
            'nodes': self.exchange_graph.node_count(),
            'edges': self.exchange_graph.edge_count(),
            'quotes': len(self.update_handler),
        }
