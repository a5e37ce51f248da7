from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class ClientSettings(BaseSettings):
    """Client-side settings; independent of the server's database and Redis config."""

    api_base_url: str = "http://localhost:8000"
    poll_interval: float = 3.0
    request_timeout: float = 10.0
    log_level: str = "INFO"

    model_config = SettingsConfigDict(env_prefix="CHAT_", env_file=".env", extra="ignore")


client_settings = ClientSettings()
