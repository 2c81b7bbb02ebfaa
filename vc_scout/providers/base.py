"""Provider interface.

An EnrichmentProvider turns a domain into an EnrichmentResult. Whether the
result comes from live pages plus a model or from a canned record is the
provider's business; callers only see the shared contract.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from ..config import Settings
from ..models import EnrichmentResult


@dataclass(frozen=True)
class ProviderContext:
    settings: Settings = field(default_factory=Settings)


class EnrichmentProvider:
    """Base interface for providers."""

    # Stable provider name used in the API and logs.
    name: str

    def is_available(self) -> bool:
        """Whether this provider can run in the current environment.

        Example: requires an API key.
        """
        return True

    def enrich(self, domain: str, ctx: ProviderContext) -> EnrichmentResult:
        """Return a populated result or raise an EnrichmentError."""
        raise NotImplementedError
