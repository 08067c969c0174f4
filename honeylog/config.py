"""
Application configuration using Pydantic Settings.
Loads from environment variables and .env file.
"""

from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


MIB = 1024 * 1024


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""
    
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )
    
    # Azure Blob Storage
    azure_storage_connection_string: str = ""
    azure_sas_url: str = ""
    azure_container_name: str = "cowrie-logs"
    azure_log_prefix: str = ""
    
    # Segment naming (empty live name means discover by listing)
    live_segment_name: str = ""
    archive_segment_format: str = "{live}.{date}"
    
    # Retrieval budgets
    list_timeout_seconds: float = 30.0
    download_timeout_seconds: float = 60.0
    list_max_results: int = 500
    max_total_bytes: int = 50 * MIB
    max_file_bytes: int = 10 * MIB
    sample_lines_per_file: int = 50
    max_sample_chars: int = 1 * MIB
    download_concurrency: int = 4
    
    # Geo lookup
    geoip_database_path: str = ""
    
    # Analytics
    brute_force_threshold: int = 10
    brute_force_window_minutes: int = 60
    top_n: int = 20
    session_interval_hours: int = 1
    
    # Application Settings
    app_name: str = "Honeylog"
    debug: bool = False
    log_level: str = "INFO"
    debug_logs: bool = False


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
