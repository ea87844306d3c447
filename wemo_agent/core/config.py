from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):

    HTTP_TIMEOUT: Optional[float] = Field(
        None, description="Deadline for a single device request, None = wait forever"
    )
    DISCOVERY_TIMEOUT: float = Field(2.0, description="SSDP listen window in seconds")
    SSDP_MX: int = Field(2, description="MX value sent in the M-SEARCH request")

    LOG_DIR: str = Field("logs")
    LOG_LEVEL: str = Field("INFO")
    LOG_TO_FILE: bool = Field(False)

    model_config = SettingsConfigDict(
        env_prefix="WEMO_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


settings = Settings()
