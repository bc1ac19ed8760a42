"""Parse input lines into price updates and exchange rate requests."""
import math
from datetime import datetime, timezone
from typing import List, Union

from fxpath.models import ExchangeRequest, PriceUpdate
from fxpath.infrastructure.error_handling import ParseCommandError, ParseErrorKind

EXCHANGE_RATE_REQUEST = "EXCHANGE_RATE_REQUEST"

PRICE_UPDATE_FIELDS = 6
EXCHANGE_REQUEST_FIELDS = 5

ParsedLine = Union[PriceUpdate, ExchangeRequest]


def parse_line(input_str: str) -> ParsedLine:
    """Parse the first line of ``input_str``.

    Lines starting with ``EXCHANGE_RATE_REQUEST`` are requests, anything
    else is read as a price update.
    """
    lines = input_str.splitlines()
    fields = lines[0].split() if lines else []
    if not fields:
        raise ParseCommandError(ParseErrorKind.NO_INPUT)

    if fields[0] == EXCHANGE_RATE_REQUEST:
        return parse_exchange_request(fields)
    return parse_price_update(fields)


def parse_price_update(fields: List[str]) -> PriceUpdate:
    """Build a price update from ``timestamp exchange source dest forward backward``."""
    if len(fields) != PRICE_UPDATE_FIELDS:
        raise ParseCommandError(ParseErrorKind.REQUIRED_ARGUMENTS_COUNT)

    timestamp_str, exchange, source_currency, destination_currency, forward_str, backward_str = fields

    timestamp = parse_timestamp(timestamp_str)
    forward_factor = parse_factor(forward_str)
    backward_factor = parse_factor(backward_str)

    if source_currency == destination_currency:
        raise ParseCommandError(ParseErrorKind.SAME_CURRENCY)

    return PriceUpdate(
        timestamp=timestamp,
        exchange=exchange,
        source_currency=source_currency,
        destination_currency=destination_currency,
        forward_factor=forward_factor,
        backward_factor=backward_factor,
    )


def parse_exchange_request(fields: List[str]) -> ExchangeRequest:
    """Build a request from ``EXCHANGE_RATE_REQUEST src_ex src_cur dst_ex dst_cur``."""
    if len(fields) != EXCHANGE_REQUEST_FIELDS:
        raise ParseCommandError(ParseErrorKind.REQUIRED_ARGUMENTS_COUNT)

    _, source_exchange, source_currency, destination_exchange, destination_currency = fields
    return ExchangeRequest(
        source_exchange=source_exchange,
        source_currency=source_currency,
        destination_exchange=destination_exchange,
        destination_currency=destination_currency,
    )


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 timestamp; naive values are taken as UTC."""
    # fromisoformat only accepts the RFC 3339 "Z" suffix from Python 3.11
    if value[-1:] in ("Z", "z"):
        value = value[:-1] + "+00:00"

    try:
        timestamp = datetime.fromisoformat(value)
    except ValueError:
        raise ParseCommandError(ParseErrorKind.TIMESTAMP_PARSING) from None

    if timestamp.tzinfo is None:
        timestamp = timestamp.replace(tzinfo=timezone.utc)
    return timestamp


def parse_factor(value: str) -> float:
    try:
        factor = float(value)
    except ValueError:
        raise ParseCommandError(ParseErrorKind.FLOAT_PARSING) from None

    if math.isnan(factor) or math.isinf(factor):
        raise ParseCommandError(ParseErrorKind.FLOAT_PARSING)
    if factor <= 0:
        raise ParseCommandError(ParseErrorKind.NON_POSITIVE_FACTOR)
    return factor
