"""structlog setup tests."""

from __future__ import annotations

import json
import logging

import structlog

from cspbuilder.logging_config import LOGGER_NAMESPACE, setup_logging


class TestSetupLogging:
    def test_json_fields(self, capfd):
        setup_logging(log_level="debug", json_format=True)
        structlog.get_logger("cspbuilder.test").info("test_event")
        log = json.loads(capfd.readouterr().out.strip())
        assert log["event"] == "test_event"
        assert log["level"] == "info"
        assert log["module"] == "cspbuilder.test"
        assert "logger" not in log
        assert "timestamp" in log

    def test_level_filters(self, capfd):
        setup_logging(log_level="error", json_format=True)
        structlog.get_logger("cspbuilder.test").info("hidden")
        assert capfd.readouterr().out == ""

    def test_defaults_from_settings(self, capfd, monkeypatch):
        monkeypatch.setenv("CSP_LOG_JSON", "true")
        monkeypatch.setenv("CSP_LOG_LEVEL", "warning")
        setup_logging()
        capfd.readouterr()
        logger = structlog.get_logger("cspbuilder.test")
        logger.info("hidden")
        logger.warning("shown")
        log = json.loads(capfd.readouterr().out.strip())
        assert log["event"] == "shown"

    def test_root_logger_untouched(self):
        root = logging.getLogger()
        handlers_before = list(root.handlers)
        level_before = root.level
        setup_logging(log_level="debug", json_format=True)
        assert root.handlers == handlers_before
        assert root.level == level_before
        assert logging.getLogger(LOGGER_NAMESPACE).propagate is False

    def test_repeat_setup_keeps_one_handler(self):
        setup_logging(json_format=True)
        setup_logging(json_format=False)
        assert len(logging.getLogger(LOGGER_NAMESPACE).handlers) == 1
