"""Configuration management using Pydantic Settings"""

from decimal import Decimal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Database
    database_url: str = "sqlite:///./credit_tracker.db"

    # Credit card
    credit_limit: Decimal = Decimal("25000")
    currency: str = "RON"
    paid_off_epsilon: Decimal = Decimal("0.05")  # Amount left below this counts as paid off

    # Service
    service_name: str = "credit-tracker"
    log_level: str = "INFO"


settings = Settings()
