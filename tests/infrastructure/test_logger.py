#!/usr/bin/env python3
"""Tests for the structured Logger."""

import io
import logging
import threading

import pytest

from actioncheck.infrastructure.logger import (
    Logger,
    LogLevel,
    get_logger,
    set_global_logger,
)


@pytest.fixture
def stream():
    """In-memory stream for captured output."""
    return io.StringIO()


@pytest.fixture
def logger(stream):
    """Logger writing bare messages to the stream."""
    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter("%(levelname)s %(message)s"))
    return Logger("actioncheck.test.logger", level=LogLevel.DEBUG, handlers=[handler])


class TestLogLevel:
    """Tests for LogLevel enum."""

    def test_log_levels(self):
        """Log level values match Python logging."""
        assert LogLevel.DEBUG == logging.DEBUG
        assert LogLevel.INFO == logging.INFO
        assert LogLevel.WARNING == logging.WARNING
        assert LogLevel.ERROR == logging.ERROR
        assert LogLevel.CRITICAL == logging.CRITICAL


class TestLogger:
    """Tests for Logger."""

    def test_plain_message(self, logger, stream):
        """Messages without context are unchanged."""
        logger.info("Loaded")
        assert stream.getvalue() == "INFO Loaded\n"

    def test_key_value_context(self, logger, stream):
        """Keyword context is appended as key=value pairs."""
        logger.warning("Skipped", path="a.yml", count=2)
        assert stream.getvalue() == "WARNING Skipped | path=a.yml count=2\n"

    def test_level_filtering(self, logger, stream):
        """Records below the level are dropped."""
        logger.set_level("warning")
        logger.info("hidden")
        logger.warning("shown")
        assert stream.getvalue() == "WARNING shown\n"
        assert logger.logger.level == LogLevel.WARNING
        assert not logger.is_enabled_for("info")
        assert logger.is_enabled_for(LogLevel.ERROR)

    def test_add_context(self, logger, stream):
        """Scoped context is merged and removed on exit."""
        with logger.add_context(event="push"):
            with logger.add_context(workflow="ci.yml"):
                logger.debug("inner", files=1)
            logger.debug("outer")
        logger.debug("after")

        assert stream.getvalue().splitlines() == [
            "DEBUG inner | event=push workflow=ci.yml files=1",
            "DEBUG outer | event=push",
            "DEBUG after",
        ]

    def test_context_record_attribute(self, stream):
        """Handlers receive the context mapping on the record."""
        records = []

        class Collect(logging.Handler):
            def emit(self, record):
                records.append(record)

        logger = Logger("actioncheck.test.records", handlers=[Collect()])
        logger.info("hello", key="value")
        assert records[0].context == {"key": "value"}

    def test_context_is_thread_local(self, logger, stream):
        """Context from one thread is not visible in another."""

        def worker():
            logger.info("thread")

        with logger.add_context(event="push"):
            thread = threading.Thread(target=worker)
            thread.start()
            thread.join()

        assert "INFO thread\n" in stream.getvalue()

    def test_file_handler(self, tmp_path):
        """Logs can be written to a rotating file."""
        logger = Logger("actioncheck.test.file", handlers=[])
        log_file = tmp_path / "actioncheck.log"
        handler = logger.create_file_handler(log_file)
        logger.add_handler(handler)

        logger.info("to file", n=1)
        handler.flush()
        logger.logger.removeHandler(handler)
        handler.close()

        assert "to file | n=1" in log_file.read_text()

    def test_does_not_propagate(self, logger):
        """Records stay off the root logger."""
        assert logger.logger.propagate is False


class TestGlobalLogger:
    """Tests for the global logger helpers."""

    def test_get_logger_reuses_instance(self):
        """The same name returns the same logger."""
        assert get_logger() is get_logger()

    def test_set_global_logger(self):
        """An installed logger is returned by get_logger."""
        custom = Logger("actioncheck", handlers=[])
        set_global_logger(custom)
        assert get_logger() is custom
