"""
Tests for the structured logging setup (src/core/logging.py).
"""

import json
import logging
import os
import sys

import pytest
import structlog

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..', 'src'))

from core.logging import (
    LoggerMixin,
    bind_context,
    bound_context,
    clear_context,
    configure_from_settings,
    configure_logging,
    get_logger,
    unbind_context,
)


@pytest.fixture(autouse=True)
def _reset_structlog():
    yield
    clear_context()
    structlog.reset_defaults()


class TestConfigureLogging:
    @pytest.mark.parametrize("json_logs", [True, False])
    def test_both_renderers(self, json_logs):
        configure_logging(json_logs=json_logs, log_level="DEBUG")
        get_logger("scoring.test").debug("dimension_scored", dimension="color_harmony", value=0.8)

    def test_level_applied_to_root(self):
        configure_logging(log_level="warning")
        assert logging.getLogger().level == logging.WARNING

    def test_http_clients_quieted(self):
        configure_logging(log_level="DEBUG")
        assert logging.getLogger("urllib3").level == logging.WARNING
        assert logging.getLogger("httpx").level == logging.WARNING

    def test_unknown_level_rejected(self):
        with pytest.raises(AttributeError):
            configure_logging(log_level="chatty")

    def test_from_settings(self):
        from config.settings import get_settings_for_testing

        configure_from_settings(get_settings_for_testing(log_level="error", json_logs=False, debug=False))
        assert logging.getLogger().level == logging.ERROR

    def test_debug_flag_forces_debug_level(self):
        from config.settings import get_settings_for_testing

        configure_from_settings(get_settings_for_testing(log_level="error", debug=True))
        assert logging.getLogger().level == logging.DEBUG

    def test_production_forces_json(self, caplog):
        from config.settings import get_settings_for_testing

        configure_from_settings(get_settings_for_testing(environment="production", json_logs=False))
        get_logger("test").info("probe")
        assert json.loads(caplog.records[-1].getMessage())["event"] == "probe"


class TestJSONOutput:
    def test_event_and_fields(self, caplog):
        configure_logging(json_logs=True, log_level="INFO")
        get_logger("recs.generator").info("outfits_generated", requested=5, count=3, status="partial")

        data = json.loads(caplog.records[-1].getMessage())
        assert data["event"] == "outfits_generated"
        assert data["count"] == 3
        assert data["status"] == "partial"
        assert data["level"] == "info"
        assert "timestamp" in data

    def test_bound_context_included(self, caplog):
        configure_logging(json_logs=True, log_level="INFO")
        bind_context(user_id="user-42")
        get_logger("services.outfit_store").info("wardrobe_loaded", count=12)

        assert json.loads(caplog.records[-1].getMessage())["user_id"] == "user-42"


class TestContextBinding:
    def test_bind_and_unbind(self):
        clear_context()
        bind_context(user_id="123", request_id="abc", city="Paris")
        unbind_context("city")

        ctx = structlog.contextvars.get_contextvars()
        assert ctx == {"user_id": "123", "request_id": "abc"}

    def test_bound_context_is_scoped(self):
        clear_context()
        with bound_context(user_id="u1"):
            assert structlog.contextvars.get_contextvars() == {"user_id": "u1"}
        assert structlog.contextvars.get_contextvars() == {}

    def test_clear(self):
        bind_context(user_id="123")
        clear_context()
        assert structlog.contextvars.get_contextvars() == {}


class TestLoggerMixin:
    def test_logger_per_class(self, caplog):
        configure_logging(json_logs=True, log_level="INFO")

        class WardrobeService(LoggerMixin):
            def sync(self):
                self.logger.info("wardrobe_synced")

        WardrobeService().sync()
        assert json.loads(caplog.records[-1].getMessage())["event"] == "wardrobe_synced"
