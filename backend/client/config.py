"""
Client configuration using Pydantic Settings.

The client refuses to start unless the Supabase URL and public key
are present and well formed.
"""

import re
from pathlib import Path
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

SUPABASE_URL_PATTERN = re.compile(r"^https://[a-z0-9-]+\.supabase\.co/?$")


class ClientSettings(BaseSettings):
    """Client configuration settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="TODO_CLIENT_",
        case_sensitive=False,
        extra="ignore",
    )

    # Supabase project (public values only)
    supabase_url: str
    supabase_anon_key: str

    # Which path todo operations take: straight to Supabase, or via the API server
    backend: Literal["direct", "api"] = "direct"
    api_url: str = "http://localhost:5001"

    # Session persistence
    session_file: Path = Path.home() / ".todo" / "session.json"
    # Expired sessions are refreshed when read; the timer-based refresher
    # is off because a CLI process is short-lived.
    auto_refresh_token: bool = False

    log_level: str = "WARNING"

    @field_validator("supabase_url")
    @classmethod
    def check_supabase_url(cls, value: str) -> str:
        if not SUPABASE_URL_PATTERN.match(value):
            raise ValueError("Invalid Supabase URL format")
        return value.rstrip("/")

    @field_validator("supabase_anon_key")
    @classmethod
    def check_anon_key(cls, value: str) -> str:
        # a signed JWT: base64url header starting with '{"' plus payload and signature
        if not value.startswith("eyJ") or value.count(".") != 2:
            raise ValueError("Invalid Supabase anon key format")
        return value

    @field_validator("api_url")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")
