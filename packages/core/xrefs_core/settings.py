"""Application settings using pydantic-settings."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # API settings
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    debug: bool = False

    # Database (only used by the SQL graph store)
    database_url: str | None = None

    # Cross-reference serving
    xrefs_store: str = Field(
        default="memory",
        description="Graph store engine: 'memory' or 'sql'",
    )
    xrefs_batch_size: int = Field(
        default=64,
        description="Number of entries per write batch when bulk loading a graph store",
    )
    xrefs_request_timeout_seconds: float = Field(
        default=30.0,
        description="Deadline for a single xrefs request (seconds)",
    )

    # OpenTelemetry
    otel_enabled: bool = Field(
        default=False,
        description="Enable OpenTelemetry traces and metrics export",
    )
    otel_service_name: str = Field(
        default="xrefs",
        description="Service name reported to the OTLP collector",
    )
    otel_exporter_otlp_endpoint: str = Field(
        default="http://localhost:4317",
        description="OTLP gRPC endpoint",
    )
    otel_traces_sampler: str = Field(
        default="parentbased_traceidratio",
        description="Sampler: always_on, always_off, traceidratio, parentbased_traceidratio",
    )
    otel_traces_sampler_arg: float = Field(
        default=1.0,
        description="Sampling ratio for ratio-based samplers (0.0-1.0)",
    )


# Singleton instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get cached settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
