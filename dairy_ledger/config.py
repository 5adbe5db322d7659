"""
Configuration management.
Simple .env based config for a single-device install.
"""

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Server
    host: str = "127.0.0.1"
    port: int = 8080

    # Database
    database_path: str = "./data/dairy.db"
    seed_initial_data: bool = True

    # Offline sync
    max_retries: int = 3
    start_online: bool = True
    remote_mode: str = "simulated"  # "simulated" or "http"
    remote_base_url: str = "http://localhost:9000/api"
    remote_timeout: float = 10.0
    simulated_latency: float = 0.1

    # Connectivity probe (disabled when unset)
    connectivity_probe_url: Optional[str] = None
    connectivity_probe_interval: float = 15.0

    # Logging
    log_level: str = "INFO"


# Global settings instance
settings = Settings()
