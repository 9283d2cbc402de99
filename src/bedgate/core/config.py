from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="", env_file=".env", extra="ignore")

    # `local` is the preferred name for development environment.
    # Backward-compatibility: `dev` is accepted as an alias of `local`.
    bedgate_env: Literal["local", "dev", "test", "prod"] = "local"
    bedgate_log_level: str = "INFO"

    # Model selection
    api_model_id: str | None = None
    use_bedrock_runtime: bool = False

    # AWS credentials (optional: boto3 falls back to its own chain when unset)
    aws_access_key: str | None = None
    aws_secret_key: str | None = None
    aws_session_token: str | None = None

    # Region hint. Empty means "not configured"; the client then uses us-east-1.
    aws_region: str = ""
    aws_use_cross_region_inference: bool = False


@lru_cache
def get_settings() -> Settings:
    return Settings()
