"""Rendering of best-rate answers and engine summaries."""
from typing import Dict
from rich.table import Table

from fxpath.models import BestRate, ExchangeRequest

BEST_RATES_BEGIN = "BEST_RATES_BEGIN"
BEST_RATES_END = "BEST_RATES_END"
NO_PATH = "NO_PATH"


def format_best_rates(best_rate: BestRate) -> str:
    """Render a best rate as a BEST_RATES_BEGIN ... BEST_RATES_END block."""
    lines = [
        f"{BEST_RATES_BEGIN} {best_rate.source.exchange} {best_rate.source.currency} "
        f"{best_rate.destination.exchange} {best_rate.destination.currency} {best_rate.rate!r}"
    ]
    lines.extend(f"{node.exchange} {node.currency}" for node in best_rate.path)
    lines.append(BEST_RATES_END)
    return "\n".join(lines)


def format_no_path(request: ExchangeRequest) -> str:
    return (
        f"{NO_PATH} {request.source_exchange} {request.source_currency} "
        f"{request.destination_exchange} {request.destination_currency}"
    )


def graph_summary_table(engine_stats: Dict[str, int], loop_stats: Dict[str, int]) -> Table:
    """Create a table of engine size and command loop counters."""
    table = Table(title="fxpath", show_header=True, header_style="bold magenta")

    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right", style="yellow")

    table.add_row("Nodes", str(engine_stats.get('nodes', 0)))
    table.add_row("Edges", str(engine_stats.get('edges', 0)))
    table.add_row("Quotes", str(engine_stats.get('quotes', 0)))

    for name, value in loop_stats.items():
        table.add_row(name.replace('_', ' ').capitalize(), str(value))

    return table
