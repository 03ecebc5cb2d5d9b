"""
Application Settings
Load from environment variables
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    """Application settings from environment"""

    # ======================
    # Ledger RPC
    # ======================
    RPC_URL: str = "https://api.devnet.solana.com"
    COMMITMENT: str = "confirmed"
    RPC_TIMEOUT_SECONDS: float = Field(default=30.0, gt=0)
    CONFIRM_TIMEOUT_SECONDS: float = Field(default=60.0, gt=0)
    CONFIRM_POLL_INTERVAL_SECONDS: float = Field(default=0.5, gt=0)

    # ======================
    # Batch
    # ======================
    # 0 means one task per transfer with no cap
    MAX_CONCURRENCY: int = Field(default=0, ge=0)

    # ======================
    # Logging
    # ======================
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )
