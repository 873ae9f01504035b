"""Runtime settings for the realip service."""
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_name: str = "realip"
    host: str = "0.0.0.0"
    http_port: int = Field(default=80, ge=0, le=65535)
    https_port: int = Field(default=443, ge=0, le=65535)
    cert_file: str | None = None
    key_file: str | None = None
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="REALIP_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def tls_enabled(self) -> bool:
        return bool(self.cert_file and self.key_file)


@lru_cache()
def get_settings() -> Settings:
    return Settings()
