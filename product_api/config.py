"""
Environment configuration for the product API.

- PORT: listening port (default 3000)
- HOST: bind address (default 0.0.0.0)
- API_KEY: shared secret expected in the x-api-key header (no default)
- CORS_ORIGINS: comma separated origins (default *)
Loads .env from the working directory when available.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import List, Optional

from dotenv import load_dotenv

DEFAULT_PORT = 3000
DEFAULT_HOST = "0.0.0.0"


@dataclass(frozen=True)
class Settings:
    api_key: Optional[str] = None
    port: int = DEFAULT_PORT
    host: str = DEFAULT_HOST
    cors_origins: List[str] = field(default_factory=lambda: ["*"])


def _parse_port(raw: Optional[str]) -> int:
    raw = (raw or "").strip()
    if not raw:
        return DEFAULT_PORT
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"PORT must be an integer, got {raw!r}")


def get_settings() -> Settings:
    """Read settings from the process environment (after loading .env)."""
    load_dotenv()
    api_key = (os.getenv("API_KEY") or "").strip() or None
    origins = [o.strip() for o in (os.getenv("CORS_ORIGINS") or "*").split(",") if o.strip()]
    return Settings(
        api_key=api_key,
        port=_parse_port(os.getenv("PORT")),
        host=(os.getenv("HOST") or "").strip() or DEFAULT_HOST,
        cors_origins=origins or ["*"],
    )
