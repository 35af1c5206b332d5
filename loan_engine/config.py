"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Database
    database_url: str = "sqlite:///./loan_engine.db"
    auto_create_tables: bool = True

    # Service
    service_name: str = "loan-engine"
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8080

    # Workflows
    workflow_timeout_seconds: float = 30.0
    delinquency_threshold: int = 2
    strict_installment_match: bool = False  # require payment ids == current due set


settings = Settings()
