"""
Configuration management for the Product Performance Analyzer
"""
from pydantic_settings import BaseSettings
from functools import lru_cache
from typing import List


class Settings(BaseSettings):
    """Application settings"""

    # Application
    app_name: str = "Product Performance Analyzer"
    environment: str = "development"
    debug: bool = True
    log_level: str = "INFO"
    log_to_file: bool = False
    log_dir: str = "logs"

    # API
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    cors_origins: List[str] = ["*"]
    max_upload_mb: int = 20

    # Analysis
    header_search_rows: int = 20  # Rows probed for the identifier column
    default_target_roas_pct: float = 1000.0  # 1000% = ROAS 10.0
    default_currency: str = "CZK"
    report_period_days: int = 30  # Period assumed by the export, used in summary text

    class Config:
        env_file = ".env"
        case_sensitive = False


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()
