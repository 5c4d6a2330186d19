"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Storage (empty URL disables the backend; reads fall back to defaults)
    storage_url: str = "sqlite:///./account_dashboard.db"
    storage_namespace: str = "accountDash"
    seed_sample_data: bool = True

    # Service
    service_name: str = "account-dashboard"
    log_level: str = "INFO"

    # Review workflow
    reviewer_name: str = "Team Lead"

    # Views
    trend_threshold: float = 5.0  # Health score delta treated as a real move


settings = Settings()
