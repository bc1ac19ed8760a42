"""Tests for the command loop."""
import io
import pytest
from rich.console import Console
from fxpath.config import Config, EngineConfig, LoggingConfig
from fxpath.main import FXPathApp, build_parser, configure_logging, main


@pytest.fixture
def app():
    """Create an app writing to in-memory streams."""
    config = Config(engine=EngineConfig(), logging=LoggingConfig(level="INFO"))
    return FXPathApp(
        config,
        output=io.StringIO(),
        console=Console(file=io.StringIO(), width=120),
    )


class TestFXPathApp:
    """Test suite for line routing."""

    def test_updates_and_request(self, app):
        """Test a full session prints a best-rates block."""
        app.run([
            "2017-11-01T09:42:23+00:00 KRAKEN USD LIT 0.001 1000.0\n",
            "2017-11-01T09:43:23+00:00 EXCI LIT EUR 1000.0 0.001\n",
            "EXCHANGE_RATE_REQUEST KRAKEN USD EXCI EUR\n",
        ])

        output = app.output.getvalue().splitlines()
        assert output[0] == "BEST_RATES_BEGIN KRAKEN USD EXCI EUR 1.0"
        assert output[1:5] == ["KRAKEN USD", "KRAKEN LIT", "EXCI LIT", "EXCI EUR"]
        assert output[5] == "BEST_RATES_END"

        stats = app.get_statistics()
        assert stats['updates_accepted'] == 2
        assert stats['requests'] == 1
        assert stats['errors'] == 0

    def test_stale_update_is_counted(self, app):
        """Test dropped updates are counted."""
        app.run([
            "2017-11-01T09:42:23+00:00 KRAKEN BTC USD 1000.0 0.0009",
            "2017-11-01T09:40:00+00:00 KRAKEN BTC USD 900.0 0.001",
        ])

        assert app.get_statistics()['updates_dropped'] == 1
        assert app.engine.update_handler.latest(("KRAKEN", "BTC", "USD")).forward_factor == 1000.0

    def test_errors_are_reported_and_loop_continues(self, app):
        """Test bad lines and unknown nodes do not stop processing."""
        app.run([
            "garbage",
            "2017-11-01T09:42:23+00:00 KRAKEN BTC USD 1000.0 0.0009",
            "EXCHANGE_RATE_REQUEST KRAKEN BTC GDAX USD",
            "EXCHANGE_RATE_REQUEST KRAKEN BTC KRAKEN USD",
        ])

        errors = app.error_handler.get_error_stats()
        assert errors['total_errors'] == 2
        assert errors['error_types'] == {'REQUIRED_ARGUMENTS_COUNT': 1, 'UnknownNodeError': 1}

        console_text = app.console.file.getvalue()
        assert "Line 1" in console_text
        assert "Line 3" in console_text
        assert app.output.getvalue().startswith("BEST_RATES_BEGIN KRAKEN BTC KRAKEN USD 1000.0")

    def test_no_path_line(self, app):
        """Test disconnected pairs print NO_PATH."""
        app.run([
            "2017-11-01T09:42:23+00:00 KRAKEN BTC USD 1000.0 0.0009",
            "2017-11-01T09:42:23+00:00 GDAX ETH EUR 300.0 0.003",
            "EXCHANGE_RATE_REQUEST KRAKEN BTC GDAX EUR",
        ])

        assert app.output.getvalue().strip() == "NO_PATH KRAKEN BTC GDAX EUR"
        assert app.get_statistics()['no_path'] == 1

    def test_blank_lines_are_skipped(self, app):
        """Test blank lines neither count nor error."""
        app.run(["", "   ", "\n"])

        assert app.get_statistics()['lines'] == 0
        assert app.get_statistics()['errors'] == 0

    def test_print_statistics(self, app):
        """Test the statistics table is written to the console."""
        app.run(["bad line", "2017-11-01T09:42:23+00:00 KRAKEN BTC USD 1000.0 0.0009"])
        app.print_statistics()

        console_text = app.console.file.getvalue()
        assert "Nodes" in console_text
        assert "REQUIRED_ARGUMENTS_COUNT" in console_text


class TestMain:
    """Test suite for the CLI entry point."""

    def test_parser_defaults(self):
        """Test argument defaults."""
        args = build_parser().parse_args([])

        assert args.input is None
        assert args.log_level is None
        assert not args.stats

    def test_main_reads_input_file(self, tmp_path, capsys):
        """Test running over a file prints the answers."""
        commands = tmp_path / "commands.txt"
        commands.write_text(
            "2017-11-01T09:42:23+00:00 KRAKEN USD LIT 2.0 0.5\n"
            "EXCHANGE_RATE_REQUEST KRAKEN USD KRAKEN LIT\n"
        )

        assert main(["--input", str(commands), "--log-level", "ERROR"]) == 0

        out = capsys.readouterr().out
        assert "BEST_RATES_BEGIN KRAKEN USD KRAKEN LIT 2.0" in out
        assert "BEST_RATES_END" in out

    def test_main_survives_undecodable_bytes(self, tmp_path, capsys):
        """Test a line with invalid UTF-8 is reported and later lines still run."""
        commands = tmp_path / "commands.txt"
        commands.write_bytes(
            b"\xff\xfe broken\n"
            b"2017-11-01T09:42:23+00:00 KRAKEN USD LIT 2.0 0.5\n"
            b"EXCHANGE_RATE_REQUEST KRAKEN USD KRAKEN LIT\n"
        )

        assert main(["--input", str(commands), "--log-level", "ERROR"]) == 0

        captured = capsys.readouterr()
        assert "BEST_RATES_BEGIN KRAKEN USD KRAKEN LIT 2.0" in captured.out
        assert "Line 1" in captured.err

    def test_configure_logging_uses_config_level(self, monkeypatch):
        """Test the configured level applies when no override is given."""
        config = Config(logging=LoggingConfig(level="WARNING", file=""))
        added = []

        class RecordingLogger:
            def remove(self):
                pass

            def add(self, sink, **kwargs):
                added.append(kwargs)

        monkeypatch.setattr("fxpath.main.logger", RecordingLogger())

        configure_logging(config)
        configure_logging(config, "DEBUG")

        assert [kwargs['level'] for kwargs in added] == ["WARNING", "DEBUG"]
