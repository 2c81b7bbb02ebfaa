"""Built-in providers and configuration-driven selection."""

from __future__ import annotations

from ..config import Settings
from .base import EnrichmentProvider
from .fallback import FallbackProvider
from .gemini import GeminiProvider
from .registry import Registry


def builtin_providers(settings: Settings) -> dict[str, EnrichmentProvider]:
    return {
        "gemini": GeminiProvider(settings),
        "fallback": FallbackProvider(delay_seconds=settings.fallback_delay_seconds),
    }


def select_provider(settings: Settings) -> EnrichmentProvider:
    """Gemini when a credential is configured, otherwise the synthetic fallback."""
    return Registry(builtin_providers(settings)).first_available()
