import pytest


@pytest.fixture(autouse=True)
def test_settings(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("JSON_LOGS", "false")
    monkeypatch.setenv("ENABLE_METRICS", "false")
    monkeypatch.setenv("DEFAULT_PRECISION", "19")
    monkeypatch.setenv("DEFAULT_MAX_SCALE", "6")
    monkeypatch.setenv("DEFAULT_ROUNDING_MODE", "HALF_EVEN")
    monkeypatch.setenv("RATE_CACHE_TTL_SECONDS", "300")
    monkeypatch.setenv("RATE_CACHE_CLEANUP_INTERVAL", "100")

    from monetary.shared.config import get_settings

    get_settings.cache_clear()
