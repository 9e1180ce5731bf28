from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Variables are usually exported in upper case from cron or a `.env`
    # file, so field matching ignores case.
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    wbsapi_url: str = "https://wbsapi.withings.net"
    account_url: str = "https://account.withings.com"
    http_timeout: float = 30.0

    credential_backend: Literal["file", "redis"] = "file"
    credentials_path: Path = Path("~/.credentials/withings.yaml")
    credentials_key: str = "withings_credentials"
    upstash_redis_rest_url: Optional[str] = None
    upstash_redis_rest_token: Optional[str] = None

    influxdb_host: str = "localhost"
    influxdb_port: int = 8086
    influxdb_username: str = "root"
    influxdb_password: str = "root"
    influxdb_database: str = "withings"
    influxdb_ssl: bool = False

    log_file: Path = Path("~/.log/withings.log")

    max_retries: int = 5
    window_days: int = 7
    strict_catalog: bool = False
    token_expiry_margin: int = 60


@lru_cache()
def get_settings() -> Settings:
    return Settings()
