#!/usr/bin/env python3
"""Command loop for fxpath: reads quotes and requests, prints best rates."""
import argparse
import sys
from pathlib import Path
from typing import Iterable, Optional, TextIO
from loguru import logger
from rich.console import Console

from fxpath.config import Config, config as default_config
from fxpath.core.engine import ExchangeRateEngine
from fxpath.infrastructure.error_handling import ErrorHandler, FXPathError
from fxpath.models import ExchangeRequest, PriceUpdate
from fxpath.monitoring.report import format_best_rates, format_no_path, graph_summary_table
from fxpath.parsing import parse_line


class FXPathApp:
    """Routes input lines to the engine and writes the answers."""

    def __init__(
        self,
        config: Optional[Config] = None,
        output: Optional[TextIO] = None,
        console: Optional[Console] = None,
    ):
        """Initialise the app."""
        self.config = config if config is not None else default_config
        self.engine = ExchangeRateEngine(self.config.engine)
        self.error_handler = ErrorHandler()
        self.output = output if output is not None else sys.stdout
        self.console = console if console is not None else Console(stderr=True)
        self.counters = {
            'lines': 0,
            'updates_accepted': 0,
            'updates_dropped': 0,
            'requests': 0,
            'no_path': 0,
        }

    def process_line(self, line: str, line_number: int = 0):
        """Handle a single input line. Blank lines are skipped."""
        if not line.strip():
            return

        self.counters['lines'] += 1
        try:
            command = parse_line(line)

            if isinstance(command, PriceUpdate):
                self._handle_price_update(command)
            else:
                self._handle_request(command)

        except FXPathError as e:
            self.error_handler.record_error(e)
            self.console.print(f"[red]Line {line_number}: {e}[/]")
            logger.debug(f"Rejected line {line_number}: {line.strip()!r}")

    def _handle_price_update(self, price_update: PriceUpdate):
        if self.engine.handle_update(price_update):
            self.counters['updates_accepted'] += 1
        else:
            self.counters['updates_dropped'] += 1

    def _handle_request(self, request: ExchangeRequest):
        self.counters['requests'] += 1
        best_rate = self.engine.best_rate(request)

        if best_rate is None:
            self.counters['no_path'] += 1
            print(format_no_path(request), file=self.output)
        else:
            print(format_best_rates(best_rate), file=self.output)

    def run(self, lines: Iterable[str]):
        """Process every line from ``lines``."""
        for line_number, line in enumerate(lines, start=1):
            self.process_line(line, line_number)

    def get_statistics(self) -> dict:
        stats = dict(self.counters)
        stats['errors'] = self.error_handler.get_error_stats()['total_errors']
        return stats

    def print_statistics(self):
        """Print engine and loop counters, and log timing metrics."""
        self.console.print(graph_summary_table(self.engine.stats(), self.get_statistics()))

        error_types = self.error_handler.get_error_stats()['error_types']
        for error_type, count in error_types.items():
            self.console.print(f"[yellow]{error_type}[/]: {count}")

        self.engine.performance.log_summary()


def configure_logging(config: Config, level: Optional[str] = None):
    """Send logs to stderr and, when configured, to a rotating file."""
    level = level or config.log_level
    logger.remove()
    logger.add(sys.stderr, level=level)

    if config.logging.file:
        logger.add(
            config.logging.file,
            rotation=config.logging.rotation,
            retention=config.logging.retention,
            level=level,
        )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Best exchange rate paths from streamed price updates."
    )
    parser.add_argument("--input", type=Path, help="Read commands from a file instead of stdin")
    parser.add_argument("--log-level", help="Override LOG_LEVEL")
    parser.add_argument("--stats", action="store_true", help="Print statistics at the end")
    return parser


def main(argv: Optional[list] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    configure_logging(default_config, args.log_level)

    app = FXPathApp(default_config)

    try:
        if args.input:
            # undecodable bytes are replaced so one bad line cannot end the loop
            with args.input.open(encoding="utf-8", errors="replace") as handle:
                app.run(handle)
        else:
            app.run(sys.stdin)
    except KeyboardInterrupt:
        logger.info("Received shutdown signal")

    if args.stats:
        app.print_statistics()

    return 0


if __name__ == "__main__":
    sys.exit(main())
