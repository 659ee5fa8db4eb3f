"""
Configuration settings for the investment calculator API
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import List, Optional

from dotenv import load_dotenv

from investcalc.core.returns import BASELINE_INDEX

DEFAULT_CORS_ORIGINS = [
    "http://localhost:3000",
    "http://localhost:5173",
    "http://127.0.0.1:3000",
    "http://127.0.0.1:5173",
]


def _split_origins(raw: Optional[str]) -> List[str]:
    if not raw:
        return list(DEFAULT_CORS_ORIGINS)
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


@dataclass
class Settings:
    port: int = 5001
    log_level: str = "INFO"
    cache_ttl_seconds: float = 3600.0
    cache_max_entries: int = 256
    cors_origins: List[str] = field(default_factory=lambda: list(DEFAULT_CORS_ORIGINS))
    default_market_index: str = BASELINE_INDEX

    @classmethod
    def from_env(cls) -> "Settings":
        """Read settings from the environment, loading a local .env first if present."""
        load_dotenv()
        return cls(
            port=int(os.getenv("PORT", "5001")),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            cache_ttl_seconds=float(os.getenv("CACHE_TTL_SECONDS", "3600")),
            cache_max_entries=int(os.getenv("CACHE_MAX_ENTRIES", "256")),
            cors_origins=_split_origins(os.getenv("CORS_ORIGINS")),
            default_market_index=os.getenv("DEFAULT_MARKET_INDEX", BASELINE_INDEX),
        )


def configure_logging(level: str = "INFO") -> None:
    # basicConfig is a no-op once the root logger has handlers
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
