import pytest

from backend.sensor_api.core.config import get_settings

_ENV_VARS = (
    "PORT",
    "LOG_LEVEL",
    "OTEL_ENABLED",
    "OTEL_SERVICE_NAME",
    "OTEL_EXPORTER_OTLP_ENDPOINT",
    "SENSOR_API_APP_NAME",
    "SENSOR_API_APP_ENV",
    "SENSOR_API_APP_HOST",
    "SENSOR_API_LOG_LEVEL",
    "SENSOR_API_METRICS_PORT",
    "SENSOR_API_OTEL_ENABLED",
    "SENSOR_API_OTEL_SERVICE_NAME",
    "SENSOR_API_OTEL_EXPORTER_OTLP_ENDPOINT",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    # keep a developer's .env out of the settings under test
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
