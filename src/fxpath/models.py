"""Data models for exchange rate paths."""
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Tuple


@dataclass(frozen=True)
class ExchangeNode:
    """A currency held at a specific exchange."""
    exchange: str
    currency: str

    def __str__(self) -> str:
        return f"{self.exchange} {self.currency}"


QuoteKey = Tuple[str, str, str]


@dataclass(frozen=True)
class PriceUpdate:
    """A timestamped pair of conversion factors quoted by one exchange.

    The forward factor converts one unit of the source currency into the
    destination currency, the backward factor goes the other way. The two
    are supplied independently and need not be exact inverses.
    """
    timestamp: datetime
    exchange: str
    source_currency: str
    destination_currency: str
    forward_factor: float
    backward_factor: float

    @property
    def key(self) -> QuoteKey:
        """Identity used for deduplication; timestamp and factors are payload."""
        return (self.exchange, self.source_currency, self.destination_currency)

    @property
    def source_node(self) -> ExchangeNode:
        return ExchangeNode(self.exchange, self.source_currency)

    @property
    def destination_node(self) -> ExchangeNode:
        return ExchangeNode(self.exchange, self.destination_currency)

    def is_newer_or_equal(self, other: "PriceUpdate") -> bool:
        """Check whether this quote may replace ``other`` (ties are accepted)."""
        return self.timestamp >= other.timestamp


@dataclass(frozen=True)
class ExchangeRequest:
    """Request for the best rate between two exchange/currency pairs."""
    source_exchange: str
    source_currency: str
    destination_exchange: str
    destination_currency: str

    @property
    def source_node(self) -> ExchangeNode:
        return ExchangeNode(self.source_exchange, self.source_currency)

    @property
    def destination_node(self) -> ExchangeNode:
        return ExchangeNode(self.destination_exchange, self.destination_currency)


@dataclass
class BestRate:
    """Best achievable conversion between two nodes and the path taken."""
    source: ExchangeNode
    destination: ExchangeNode
    rate: float
    path: List[ExchangeNode] = field(default_factory=list)

    @property
    def hops(self) -> int:
        """Number of conversions along the path."""
        return max(len(self.path) - 1, 0)

    def __str__(self) -> str:
        path_str = " → ".join(str(node) for node in self.path)
        return f"{path_str} | Rate: {self.rate}"
