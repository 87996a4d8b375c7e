import json
import logging

import pytest
import structlog

from monetary.shared.logging import (
    configure_logging,
    configure_logging_from_settings,
    get_logger,
)


@pytest.fixture(autouse=True)
def reset_structlog():
    yield
    structlog.reset_defaults()


def test_json_logs_render_events_with_fields(caplog):
    # Given
    caplog.set_level(logging.INFO)
    configure_logging(log_level="INFO", json_logs=True)
    logger = get_logger("monetary.tests")

    # When
    logger.info("rate_cache_hit", pair="USD/EUR")

    # Then
    record = json.loads(caplog.records[-1].getMessage())
    assert record["event"] == "rate_cache_hit"
    assert record["pair"] == "USD/EUR"
    assert record["level"] == "info"
    assert record["logger"] == "monetary.tests"
    assert "timestamp" in record


def test_configure_logging_from_settings(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "WARNING")

    from monetary.shared.config import get_settings

    get_settings.cache_clear()

    configure_logging_from_settings()

    assert structlog.is_configured()
