"""
Application settings

All values can be overridden through environment variables or a .env file.
"""
from decimal import Decimal
from typing import List

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Runtime configuration"""

    # Database
    database_url: str = "sqlite:///./database.db"
    sql_echo: bool = False

    # Sales
    commission_rate: Decimal = Decimal("0.02")
    anonymous_client_prefix: str = "Patron"
    default_entry_fee: Decimal = Decimal("50.00")

    # Staff sessions
    session_ttl_hours: int = 12

    # Presentation
    display_timezone: str = "America/Sao_Paulo"
    cors_origins: List[str] = ["*"]
    log_level: str = "INFO"
    report_window_days: int = 30

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"


settings = Settings()
