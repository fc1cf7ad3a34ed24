from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # App
    app_env: str = "development"
    app_debug: bool = True
    app_host: str = "0.0.0.0"
    app_port: int = 8000

    # CORS
    allowed_origins: str = "*"  # comma-separated, e.g. "https://app.example.com,https://admin.example.com"

    # Local persistence (API key, model preference, budgeting dataset)
    data_dir: str = ".spendwise"

    # AI gateway
    provider_timeout_seconds: float = 15.0  # Hard deadline per outbound provider call
    insight_timeout_seconds: float = 10.0  # Caller-side deadline around get_insight
    max_attempts: int = 3
    throttle_min_gap_seconds: float = 2.0
    openai_temperature: float = 0.4

    # Exchange rates
    exchange_rates_url: str = "https://api.exchangerate-api.com/v4/latest/{base}"
    exchange_timeout_seconds: float = 10.0
    default_currency: str = "USD"

    # Logging
    log_level: str = "INFO"
    log_json: bool = False  # set True in production for structured JSON logs


settings = Settings()


def validate_settings_for_production() -> None:
    """Validate critical settings. Called on startup in non-test environments."""
    errors: list[str] = []

    if settings.provider_timeout_seconds <= 0:
        errors.append("PROVIDER_TIMEOUT_SECONDS must be positive")

    if settings.insight_timeout_seconds <= 0:
        errors.append("INSIGHT_TIMEOUT_SECONDS must be positive")

    if settings.max_attempts < 1:
        errors.append("MAX_ATTEMPTS must be at least 1")

    if settings.throttle_min_gap_seconds < 0:
        errors.append("THROTTLE_MIN_GAP_SECONDS must not be negative")

    if settings.app_env == "production":
        if settings.allowed_origins == "*":
            errors.append("ALLOWED_ORIGINS must not be '*' in production")
        if settings.app_debug:
            errors.append("APP_DEBUG must be false in production")

    if errors:
        raise SystemExit("Configuration errors:\n  - " + "\n  - ".join(errors))
