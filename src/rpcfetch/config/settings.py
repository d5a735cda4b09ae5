"""Client settings."""

from __future__ import annotations

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class RpcSettings(BaseSettings):
    """Defaults for the CLI and ``RequestOptions``."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="RPCFETCH_",
        case_sensitive=False,
        extra="ignore",
        env_parse_none_str="null",
    )

    base_url: str = Field(default="http://localhost:8000/api")
    timeout_seconds: float | None = Field(default=None, gt=0)
    credentials: Literal["omit", "same-origin", "include"] = Field(default="same-origin")


def load_settings(**overrides: object) -> RpcSettings:
    """Load settings from env/.env, with explicit values taking precedence."""
    return RpcSettings(**{key: value for key, value in overrides.items() if value is not None})
