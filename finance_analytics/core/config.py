from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    # App settings
    PROJECT_NAME: str = "FinanceAnalytics"
    API_PREFIX: str = "/api"
    DEBUG: bool = Field(default=False)
    LOG_LEVEL: str = Field(default="INFO")
    CORS_ORIGINS: List[str] = Field(default=["*"])

    # Remote services
    AUTH_SERVICE_URL: str = Field(
        default="https://freeserverless.com/invok/cf749b32-a29a-4080-bbd0-87a66a9d1b00/auth-service"
    )
    TRANSACTION_API_URL: str = Field(
        default="https://freeserverless.com/invok/cf749b32-a29a-4080-bbd0-87a66a9d1b00/transaction-api"
    )
    AUTH_TIMEOUT_SECONDS: float = 10.0
    TRANSACTION_TIMEOUT_SECONDS: float = 30.0


settings = Settings()
