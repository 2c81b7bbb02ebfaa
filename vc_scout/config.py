"""Runtime configuration.

Everything comes from environment variables; a `.env` file is loaded first if
present (current dir, then home dir).
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

DEFAULT_MODEL = "gemini-2.0-flash"
DEFAULT_GEMINI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
DEFAULT_READER_URL = "https://r.jina.ai/"
DEFAULT_FETCH_TIMEOUT = 12
DEFAULT_FALLBACK_DELAY = 1.5

_ENV_LOADED = False


def load_env_files() -> Optional[Path]:
    """Load the first .env file found. Existing environment variables win."""
    global _ENV_LOADED
    if _ENV_LOADED:
        return None
    _ENV_LOADED = True

    for env_path in [Path(".env"), Path.home() / ".env", Path.home() / ".vcscout.env"]:
        if env_path.exists():
            load_dotenv(env_path)
            return env_path
    return None


def default_store_path() -> str:
    base = os.getenv("XDG_DATA_HOME") or os.path.expanduser("~/.local/share")
    return os.path.join(base, "vc-scout", "store.sqlite")


def _env_float(name: str, default: Optional[float]) -> Optional[float]:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError as e:
        raise ValueError(f"Invalid value for {name}: {raw!r}") from e


@dataclass(frozen=True)
class Settings:
    gemini_api_key: Optional[str] = None
    model: str = DEFAULT_MODEL
    gemini_base_url: str = DEFAULT_GEMINI_BASE_URL
    reader_url: str = DEFAULT_READER_URL
    fetch_timeout: float = DEFAULT_FETCH_TIMEOUT
    # None means the model call is not bounded by us.
    model_timeout: Optional[float] = None
    fallback_delay_seconds: float = DEFAULT_FALLBACK_DELAY
    log_level: str = "INFO"
    store_path: str = ""

    @property
    def has_model_credential(self) -> bool:
        return bool(self.gemini_api_key)

    @classmethod
    def from_env(cls) -> Settings:
        load_env_files()
        return cls(
            gemini_api_key=os.getenv("GEMINI_API_KEY") or None,
            model=os.getenv("VC_SCOUT_MODEL") or DEFAULT_MODEL,
            gemini_base_url=os.getenv("VC_SCOUT_GEMINI_BASE_URL") or DEFAULT_GEMINI_BASE_URL,
            reader_url=os.getenv("VC_SCOUT_READER_URL") or DEFAULT_READER_URL,
            fetch_timeout=_env_float("VC_SCOUT_FETCH_TIMEOUT", DEFAULT_FETCH_TIMEOUT) or DEFAULT_FETCH_TIMEOUT,
            model_timeout=_env_float("VC_SCOUT_MODEL_TIMEOUT", None),
            fallback_delay_seconds=_env_float("VC_SCOUT_FALLBACK_DELAY", DEFAULT_FALLBACK_DELAY) or 0.0,
            log_level=(os.getenv("VC_SCOUT_LOG_LEVEL") or "INFO").upper(),
            store_path=os.getenv("VC_SCOUT_STORE") or default_store_path(),
        )
