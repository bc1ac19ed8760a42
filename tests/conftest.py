"""Shared fixtures for fxpath tests."""
from datetime import datetime, timezone
import pytest
from fxpath.models import PriceUpdate


def at(seconds: int) -> datetime:
    """Timestamp ``seconds`` after a fixed reference point."""
    return datetime.fromtimestamp(1_500_000_000 + seconds, tz=timezone.utc)


@pytest.fixture
def make_update():
    """Factory for price updates with readable defaults."""
    def _make(exchange, source, destination, forward, backward, seconds=0):
        return PriceUpdate(
            timestamp=at(seconds),
            exchange=exchange,
            source_currency=source,
            destination_currency=destination,
            forward_factor=forward,
            backward_factor=backward,
        )
    return _make
