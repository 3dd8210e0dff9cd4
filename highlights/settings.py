# highlights/settings.py
# Purpose: one place for environment-driven configuration.
# Pitfalls: values are read once per process (get_settings is memoized);
#           build a Settings(...) explicitly when a test needs other values.

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

GEMINI_ENDPOINT = (
    "https://generativelanguage.googleapis.com/v1beta/models/gemini-2.0-flash:generateContent"
)
API_KEY_ENV = "GEMINI_API_KEY"

WEEK_SEC = 60 * 60 * 24 * 7


@dataclass(frozen=True)
class Settings:
    api_key: str | None = None
    endpoint: str = GEMINI_ENDPOINT
    cache_ttl_sec: float = WEEK_SEC
    cache_max_entries: int = 1024
    upstream_timeout_sec: float = 10.0

    @classmethod
    def from_env(cls) -> Settings:
        return cls(
            api_key=os.getenv(API_KEY_ENV) or None,
            endpoint=os.getenv("GEMINI_ENDPOINT", GEMINI_ENDPOINT),
            cache_ttl_sec=float(os.getenv("HL_CACHE_TTL_SEC", str(WEEK_SEC))),
            cache_max_entries=int(os.getenv("HL_CACHE_MAX_ENTRIES", "1024")),
            upstream_timeout_sec=float(os.getenv("HL_UPSTREAM_TIMEOUT_SEC", "10")),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.from_env()
