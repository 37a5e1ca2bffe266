"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Database
    database_url: str = "sqlite:///./lms.db"

    # Auth
    jwt_secret: str = "dev-secret-change-me-before-deploying"

    # Service
    service_name: str = "lms-gateway"
    environment: str = "development"
    log_level: str = "INFO"


settings = Settings()
