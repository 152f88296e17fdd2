from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    # --- Service ---
    PROJECT_NAME: str = "Storefront"
    HOST: str = "0.0.0.0"
    PORT: int = 3000
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: List[str] = ["*"]

    # --- Discount rules ---
    # Every DISCOUNT_INTERVAL-th order may redeem a code worth DISCOUNT_PERCENT of its subtotal.
    DISCOUNT_INTERVAL: int = Field(default=3, gt=0)
    DISCOUNT_PERCENT: float = Field(default=0.10, gt=0, le=1)

    # Timestamps on orders and discount codes
    TIMEZONE: str = "UTC"

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore"
    )

settings = Settings()
