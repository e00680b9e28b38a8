"""
Unit tests for the logging setup and formatters.
"""

import logging
import sys
from pathlib import Path

import orjson

from deltahound.telemetry.logger import AsyncLogger, JsonFormatter, TextFormatter


def make_record(message: str, fields: dict | None = None) -> logging.LogRecord:
    record = logging.LogRecord(
        name="deltahound.test",
        level=logging.WARNING,
        pathname=__file__,
        lineno=1,
        msg=message,
        args=(),
        exc_info=None,
    )
    if fields is not None:
        record.fields = fields
    return record


class TestTextFormatter:
    def test_appends_fields(self) -> None:
        formatter = TextFormatter("%(levelname)s %(message)s")

        line = formatter.format(make_record("Opportunity", {"type": "STABLECOIN_ARBITRAGE", "pair": "USDC/USDT"}))

        assert line == "WARNING Opportunity | type=STABLECOIN_ARBITRAGE pair=USDC/USDT"

    def test_plain_message_without_fields(self) -> None:
        formatter = TextFormatter("%(message)s")
        assert formatter.format(make_record("Scanner stopped")) == "Scanner stopped"


class TestJsonFormatter:
    def test_one_object_per_record(self) -> None:
        line = JsonFormatter().format(make_record("Opportunity", {"pair": "USDC/USDT", "buy_price": "0.999700"}))

        payload = orjson.loads(line)

        assert payload["level"] == "WARNING"
        assert payload["logger"] == "deltahound.test"
        assert payload["message"] == "Opportunity"
        assert payload["pair"] == "USDC/USDT"
        assert payload["buy_price"] == "0.999700"
        assert "\n" not in line

    def test_exception_included(self) -> None:
        record = make_record("Failed")
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            record.exc_info = sys.exc_info()

        payload = orjson.loads(JsonFormatter().format(record))

        assert "RuntimeError: boom" in payload["exc_info"]


class TestAsyncLogger:
    """Tests for the queue-backed logger."""

    def test_writes_to_file(self, tmp_path: Path) -> None:
        log_file = tmp_path / "logs" / "scan.log"

        with AsyncLogger("deltahound.test.file", log_file=log_file) as async_logger:
            async_logger.logger.info("Scanner started")

        assert "Scanner started" in log_file.read_text()

    def test_json_file_output(self, tmp_path: Path) -> None:
        log_file = tmp_path / "scan.jsonl"

        with AsyncLogger("deltahound.test.json", log_file=log_file, json=True) as async_logger:
            async_logger.logger.warning("Depeg", extra={"fields": {"type": "STABLECOIN_ARBITRAGE"}})

        payload = orjson.loads(log_file.read_text().splitlines()[0])
        assert payload["type"] == "STABLECOIN_ARBITRAGE"

    def test_stop_removes_handler(self) -> None:
        async_logger = AsyncLogger("deltahound.test.stop")
        async_logger.start()
        async_logger.stop()

        assert async_logger.logger.handlers == []
