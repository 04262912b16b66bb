"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # External Services
    pricing_service_base: str = "http://localhost:3000"
    pricing_current_path: str = "/api/v1/pricing/current"

    # Service
    service_name: str = "tidy-pricing-gateway"
    log_level: str = "INFO"

    # HTTP Client
    http_timeout_seconds: float = 5.0

    # Pricing behaviour
    legacy_falsy_fee_fallback: bool = False  # Treat an explicit 0% fee as missing (old client numbers)


settings = Settings()
