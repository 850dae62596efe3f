# app/config/settings.py
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List, Optional


class Settings(BaseSettings):
    # App Info
    app_name: str = "eMonitor Admin Console"
    version: str = "1.0.0"
    debug: bool = False
    log_level: str = "INFO"

    # Backend - ambas variables son obligatorias, sin ellas la consola no arranca
    supabase_url: str
    supabase_anon_key: str
    # None = timeouts por defecto de httpx
    backend_timeout: Optional[float] = None

    # Server - consola de un solo operador (la sesión de admin es del proceso):
    # por defecto solo loopback y sin orígenes CORS
    host: str = "127.0.0.1"
    port: int = 8000
    cors_origins: List[str] = []

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("supabase_url", "supabase_anon_key")
    @classmethod
    def validate_required(cls, v: str) -> str:
        """Las credenciales del backend no pueden venir vacías"""
        if not v or not v.strip():
            raise ValueError("Missing backend environment variables")
        return v.strip()

    @field_validator("supabase_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @property
    def backend_host(self) -> str:
        """Host del backend para logs (sin esquema)"""
        return self.supabase_url.split("://", 1)[-1]


settings = Settings()
