from .base import EnrichmentProvider, ProviderContext
from .builtins import builtin_providers, select_provider
from .fallback import FallbackProvider
from .gemini import GeminiProvider
from .registry import Registry

__all__ = [
    "EnrichmentProvider",
    "FallbackProvider",
    "GeminiProvider",
    "ProviderContext",
    "Registry",
    "builtin_providers",
    "select_provider",
]
