from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import List, Optional

from dotenv import load_dotenv

from utility.exceptions import ConfigurationError

DEFAULT_MODEL = "gemini-2.0-flash"
DEFAULT_API_BASE = "https://generativelanguage.googleapis.com/v1beta"
DEFAULT_RELAY_URL = "http://localhost:3000"


def _as_bool(value: Optional[str], default: bool) -> bool:
    if value is None or not value.strip():
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _as_origins(value: Optional[str]) -> List[str]:
    if not value or not value.strip():
        return ["*"]
    return [origin.strip() for origin in value.split(",") if origin.strip()]


@dataclass(frozen=True)
class Settings:
    """Runtime configuration for the relay and the client"""
    gemini_api_key: Optional[str] = None
    gemini_model: str = DEFAULT_MODEL
    gemini_api_base: str = DEFAULT_API_BASE
    host: str = "0.0.0.0"
    port: int = 3000
    allowed_origins: List[str] = field(default_factory=lambda: ["*"])
    include_example: bool = True
    log_level: str = "INFO"
    log_dir: Optional[str] = None
    relay_url: str = DEFAULT_RELAY_URL

    def require_api_key(self) -> str:
        """Return the provider credential or fail; the relay cannot run without it."""
        if not self.gemini_api_key:
            raise ConfigurationError(
                "GEMINI_API_KEY is not set. Please create a .env file with your API key"
            )
        return self.gemini_api_key


def load_settings() -> Settings:
    # Load variables from .env into the environment
    load_dotenv()

    port = os.getenv("PORT", "3000")
    try:
        port_number = int(port)
    except ValueError:
        raise ConfigurationError(f"PORT must be an integer, got {port!r}")

    return Settings(
        gemini_api_key=os.getenv("GEMINI_API_KEY") or None,
        gemini_model=os.getenv("GEMINI_MODEL") or DEFAULT_MODEL,
        gemini_api_base=(os.getenv("GEMINI_API_BASE") or DEFAULT_API_BASE).rstrip("/"),
        host=os.getenv("HOST") or "0.0.0.0",
        port=port_number,
        allowed_origins=_as_origins(os.getenv("ALLOWED_ORIGINS")),
        include_example=_as_bool(os.getenv("PROMPT_INCLUDE_EXAMPLE"), True),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
        log_dir=os.getenv("LOG_DIR") or None,
        relay_url=(os.getenv("RELAY_URL") or DEFAULT_RELAY_URL).rstrip("/"),
    )
