from __future__ import annotations

from enum import Enum
from functools import lru_cache
from typing import Literal, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_PORT = 8080


def _check_port(value: int, name: str) -> int:
    # 0 asks the OS for an ephemeral port
    if not (0 <= value <= 65535):
        raise ValueError(f"{name} must be between 0 and 65535")
    return value


class AppEnv(str, Enum):
    LOCAL = "local"
    DEV = "dev"
    PROD = "prod"


class AppSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = Field(default="Sensor Data API")
    env: AppEnv = Field(default=AppEnv.DEV)
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=DEFAULT_PORT)
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO"
    )

    @field_validator("port")
    @classmethod
    def validate_port(cls, value: int) -> int:
        return _check_port(value, "PORT")


class OTELSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    enabled: bool = False
    service_name: str = Field(default="sensor-data-api")
    exporter_otlp_endpoint: str = Field(default="http://localhost:4317")


class MetricsSettings(BaseModel):
    """
    Prometheus exporter listener.

    Metrics are served on their own port, never as an API route.
    When port is None the exporter is not started.
    """

    model_config = ConfigDict(frozen=True)

    port: Optional[int] = None

    @field_validator("port")
    @classmethod
    def validate_port(cls, value: Optional[int]) -> Optional[int]:
        if value is None:
            return value
        return _check_port(value, "SENSOR_API_METRICS_PORT")


class Settings(BaseSettings):
    """
    Top-level application settings loaded from environment.

    Priority:
      1. SENSOR_API_* variables (namespaced)
      2. Unprefixed PORT / LOG_LEVEL / OTEL_* where appropriate
      3. Defaults
    """

    model_config = SettingsConfigDict(
        env_prefix="SENSOR_API_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    # Unprefixed: this is the variable container platforms inject
    port: Optional[str] = Field(default=None, validation_alias="PORT")

    # App
    app_name: Optional[str] = None
    app_env: Optional[str] = None
    app_host: Optional[str] = None
    log_level: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("SENSOR_API_LOG_LEVEL", "LOG_LEVEL"),
    )

    # Metrics
    metrics_port: Optional[int] = None

    @field_validator("metrics_port")
    @classmethod
    def validate_metrics_port(cls, value: Optional[int]) -> Optional[int]:
        if value is None:
            return value
        return _check_port(value, "SENSOR_API_METRICS_PORT")

    # OTEL
    otel_enabled: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("SENSOR_API_OTEL_ENABLED", "OTEL_ENABLED"),
    )
    otel_service_name: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices(
            "SENSOR_API_OTEL_SERVICE_NAME", "OTEL_SERVICE_NAME"
        ),
    )
    otel_exporter_otlp_endpoint: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices(
            "SENSOR_API_OTEL_EXPORTER_OTLP_ENDPOINT", "OTEL_EXPORTER_OTLP_ENDPOINT"
        ),
    )

    @property
    def app(self) -> AppSettings:
        name = self.app_name or AppSettings().name
        env_str = self.app_env or AppSettings().env
        host = self.app_host or AppSettings().host
        log_level = self.log_level or AppSettings().log_level

        return AppSettings(
            name=name,
            env=AppEnv(env_str),
            host=host,
            port=self._resolve_port(),
            log_level=str(log_level).upper(),  # validated by AppSettings
        )

    @property
    def raw_port(self) -> str:
        """PORT exactly as configured (trimmed), or the default as text."""
        return (self.port or "").strip() or str(DEFAULT_PORT)

    @property
    def otel(self) -> OTELSettings:
        enabled_raw = self.otel_enabled or "false"
        enabled = enabled_raw.strip().lower() in ("1", "true", "yes", "on")

        return OTELSettings(
            enabled=enabled,
            service_name=self.otel_service_name or OTELSettings().service_name,
            exporter_otlp_endpoint=self.otel_exporter_otlp_endpoint
            or OTELSettings().exporter_otlp_endpoint,
        )

    @property
    def metrics(self) -> MetricsSettings:
        return MetricsSettings(port=self.metrics_port)

    # Helpers

    def _resolve_port(self) -> int:
        """PORT wins; unset or blank falls back to the default."""
        raw = self.raw_port
        try:
            return int(raw)
        except ValueError:
            raise ValueError(f"PORT must be an integer, got {raw!r}") from None


@lru_cache()
def get_settings() -> Settings:
    """
    Cached settings instance; the environment is read once per process.

    Usage:
        from backend.sensor_api.core.config import get_settings
        settings = get_settings()
        settings.app.port, settings.otel.enabled, ...
    """
    return Settings()
