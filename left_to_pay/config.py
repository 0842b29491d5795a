"""Configuration management using Pydantic Settings"""

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Starling API
    starling_api_base: str = "https://api.starlingbank.com/api/v2"
    starling_access_token: str = ""
    starling_account_uid: Optional[str] = None  # skips account discovery when set with category
    starling_category_uid: Optional[str] = None

    # Pay day detection
    pay_reference: str = ""
    employer_name: Optional[str] = None
    transaction_lookback_months: int = 1

    # Report delivery
    report_webhook_url: Optional[str] = None
    webhook_max_retries: int = 5
    webhook_backoff_base: float = 1.0  # Exponential backoff base in seconds

    # Service
    service_name: str = "left-to-pay"
    log_level: str = "INFO"

    # HTTP Client
    http_timeout_seconds: float = 5.0


settings = Settings()
