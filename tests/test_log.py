"""Unit tests for logging configuration and utilities."""

import io
import json
import logging
import sys
import time
from unittest.mock import patch

import pytest
import structlog

from card_grader.utils.log import LoggerMixin, configure_logging, get_logger


@pytest.fixture(autouse=True)
def restore_logging():
    yield
    structlog.reset_defaults()
    configure_logging()


class TestConfigureLogging:
    """Test logging configuration function."""

    def test_configure_logging_sets_up_structlog(self):
        structlog.reset_defaults()

        configure_logging()

        assert structlog.is_configured()
        processor_names = [getattr(p, "__name__", str(p)) for p in structlog.get_config()["processors"]]
        assert any("filter_by_level" in name for name in processor_names)
        assert any("add_log_level" in name for name in processor_names)
        assert any("JSONRenderer" in name for name in processor_names)

    def test_default_stream_is_stdout(self):
        configure_logging()

        handler = logging.getLogger().handlers[0]
        assert handler.stream is sys.stdout

    def test_stream_can_be_redirected(self):
        stream = io.StringIO()

        configure_logging(stream=stream)

        assert logging.getLogger().handlers[0].stream is stream

    def test_respects_log_level_setting(self):
        with patch("card_grader.utils.config.settings") as mock_settings:
            mock_settings.LOG_LEVEL = "warning"
            configure_logging()

        assert logging.getLogger().level == logging.WARNING

    def test_invalid_log_level_falls_back_to_info(self):
        with patch("card_grader.utils.config.settings") as mock_settings:
            mock_settings.LOG_LEVEL = "INVALID_LEVEL"
            configure_logging()

        assert logging.getLogger().level == logging.INFO

    def test_output_is_json(self):
        stream = io.StringIO()
        structlog.reset_defaults()
        configure_logging(stream=stream)

        get_logger("test_json").info("grade computed", grade=7.5)

        log_data = json.loads(stream.getvalue().strip().splitlines()[-1])
        assert log_data["event"] == "grade computed"
        assert log_data["grade"] == 7.5
        assert log_data["logger"] == "test_json"
        assert log_data["level"] == "info"
        assert "timestamp" in log_data


class TestGetLogger:
    """Test get_logger function."""

    def test_auto_configures_if_needed(self):
        structlog.reset_defaults()
        assert not structlog.is_configured()

        logger = get_logger("test_logger")

        assert structlog.is_configured()
        assert logger is not None


class TestLoggerMixin:
    """Test LoggerMixin class."""

    def test_logger_is_cached_per_instance(self):
        class Worker(LoggerMixin):
            pass

        worker = Worker()
        assert worker.logger is worker.logger

    def test_log_start_creates_context(self):
        class Worker(LoggerMixin):
            pass

        worker = Worker()
        with patch.object(worker.logger, "debug") as mock_debug:
            context = worker.log_start("Card analysis", has_back=True)

        assert context["event"] == "Card analysis"
        assert context["has_back"] is True
        assert "start_time" in context
        mock_debug.assert_called_once()
        assert mock_debug.call_args.args[0] == "Card analysis started"

    def test_log_success_includes_duration(self):
        class Worker(LoggerMixin):
            pass

        worker = Worker()
        context = {"event": "Card analysis", "start_time": time.time() - 1.5}

        with patch.object(worker.logger, "info") as mock_info:
            worker.log_success(context, grade=8.0)

        kwargs = mock_info.call_args.kwargs
        assert mock_info.call_args.args[0] == "Card analysis completed"
        assert kwargs["grade"] == 8.0
        assert kwargs["duration_ms"] >= 1400

    def test_log_success_without_start_time(self):
        class Worker(LoggerMixin):
            pass

        worker = Worker()
        with patch.object(worker.logger, "info") as mock_info:
            worker.log_success({"event": "Card analysis"})

        assert "duration_ms" not in mock_info.call_args.kwargs

    def test_log_error_includes_error_details(self):
        class Worker(LoggerMixin):
            pass

        worker = Worker()
        context = {"event": "Card analysis", "start_time": time.time()}

        with patch.object(worker.logger, "error") as mock_error:
            worker.log_error(context, ValueError("bad image"), side="back")

        kwargs = mock_error.call_args.kwargs
        assert mock_error.call_args.args[0] == "Card analysis failed"
        assert kwargs["error"] == "bad image"
        assert kwargs["error_type"] == "ValueError"
        assert kwargs["side"] == "back"
        assert "duration_ms" in kwargs
