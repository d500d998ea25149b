"""Configuración del cliente de terminal (variables SMARTNOTES_*)."""
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class ClientSettings(BaseSettings):
    api_base: str = "http://localhost:5000/api"
    session_file: Path = Path.home() / ".smartnotes" / "session.json"
    timeout_seconds: int = 60
    speech_lang: str = "en-US"

    model_config = SettingsConfigDict(env_prefix="SMARTNOTES_", case_sensitive=False, extra="ignore")
