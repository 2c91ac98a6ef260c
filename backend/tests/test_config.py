import pytest

from backend.sensor_api.core.config import (
    DEFAULT_PORT,
    AppEnv,
    Settings,
    get_settings,
)


def test_port_defaults_to_8080_when_unset():
    assert Settings().app.port == DEFAULT_PORT == 8080


@pytest.mark.parametrize("raw", ["", "   "])
def test_blank_port_falls_back_to_default(monkeypatch, raw):
    monkeypatch.setenv("PORT", raw)

    assert Settings().app.port == 8080


def test_port_from_environment(monkeypatch):
    monkeypatch.setenv("PORT", "9090")

    assert Settings().app.port == 9090


def test_port_zero_is_allowed_for_ephemeral_binding(monkeypatch):
    monkeypatch.setenv("PORT", "0")

    assert Settings().app.port == 0


def test_non_integer_port_is_rejected(monkeypatch):
    monkeypatch.setenv("PORT", "http")

    with pytest.raises(ValueError, match="PORT must be an integer"):
        Settings().app


def test_out_of_range_port_is_rejected(monkeypatch):
    monkeypatch.setenv("PORT", "70000")

    with pytest.raises(ValueError):
        Settings().app


def test_port_is_read_once_at_construction(monkeypatch):
    monkeypatch.setenv("PORT", "9090")
    settings = Settings()
    monkeypatch.setenv("PORT", "9191")

    assert settings.app.port == 9090


def test_get_settings_is_cached(monkeypatch):
    monkeypatch.setenv("PORT", "9090")
    first = get_settings()
    monkeypatch.setenv("PORT", "9191")

    assert get_settings() is first
    assert get_settings().app.port == 9090


def test_app_defaults():
    app = Settings().app

    assert app.host == "0.0.0.0"
    assert app.env is AppEnv.DEV
    assert app.log_level == "INFO"
    assert app.name == "Sensor Data API"


def test_namespaced_variables_override_legacy(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "warning")
    monkeypatch.setenv("SENSOR_API_LOG_LEVEL", "debug")
    monkeypatch.setenv("SENSOR_API_APP_ENV", "prod")

    app = Settings().app

    assert app.log_level == "DEBUG"
    assert app.env is AppEnv.PROD


def test_legacy_log_level_is_used_when_namespaced_missing(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "error")

    assert Settings().app.log_level == "ERROR"


def test_dotenv_file_is_read(tmp_path):
    (tmp_path / ".env").write_text("PORT=7070\nSENSOR_API_APP_NAME=From Dotenv\n")

    app = Settings().app

    assert app.port == 7070
    assert app.name == "From Dotenv"


@pytest.mark.parametrize(
    "raw,expected",
    [("true", True), ("1", True), ("ON", True), ("false", False), ("no", False)],
)
def test_otel_enabled_flag(monkeypatch, raw, expected):
    monkeypatch.setenv("SENSOR_API_OTEL_ENABLED", raw)

    assert Settings().otel.enabled is expected


def test_otel_disabled_by_default_with_legacy_endpoint(monkeypatch):
    monkeypatch.setenv("OTEL_EXPORTER_OTLP_ENDPOINT", "http://collector:4317")

    otel = Settings().otel

    assert otel.enabled is False
    assert otel.exporter_otlp_endpoint == "http://collector:4317"
    assert otel.service_name == "sensor-data-api"


def test_metrics_port(monkeypatch):
    assert Settings().metrics.port is None

    monkeypatch.setenv("SENSOR_API_METRICS_PORT", "9464")

    assert Settings().metrics.port == 9464


def test_legacy_variables_are_read_from_dotenv(tmp_path):
    (tmp_path / ".env").write_text(
        "LOG_LEVEL=DEBUG\n"
        "OTEL_ENABLED=true\n"
        "OTEL_SERVICE_NAME=sensor-edge\n"
        "OTEL_EXPORTER_OTLP_ENDPOINT=http://collector:4317\n"
    )

    settings = Settings()

    assert settings.app.log_level == "DEBUG"
    assert settings.otel.enabled is True
    assert settings.otel.service_name == "sensor-edge"
    assert settings.otel.exporter_otlp_endpoint == "http://collector:4317"


def test_legacy_variables_are_read_once_at_construction(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "warning")
    settings = Settings()
    monkeypatch.setenv("LOG_LEVEL", "error")
    monkeypatch.setenv("OTEL_ENABLED", "true")

    assert settings.app.log_level == "WARNING"
    assert settings.otel.enabled is False


def test_raw_port_keeps_configured_text(monkeypatch):
    assert Settings().raw_port == "8080"

    monkeypatch.setenv("PORT", " 08080 ")
    settings = Settings()

    assert settings.raw_port == "08080"
    assert settings.app.port == 8080


@pytest.mark.parametrize("raw", ["70000", "-1"])
def test_out_of_range_metrics_port_is_rejected(monkeypatch, raw):
    monkeypatch.setenv("SENSOR_API_METRICS_PORT", raw)

    with pytest.raises(ValueError, match="SENSOR_API_METRICS_PORT"):
        Settings()
