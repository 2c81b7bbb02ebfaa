"""VC Scout - company website enrichment for deal flow."""

__version__ = "0.3.0"

from .errors import (  # noqa: E402
    ConfigurationError,
    EnrichmentError,
    InvalidRequestError,
    ModelCallError,
    ModelResponseError,
    PagesUnavailableError,
)
from .models import EnrichmentRequest, EnrichmentResult, FetchedPage, SourceRef  # noqa: E402
from .service import enrich_domain  # noqa: E402

__all__ = [
    "enrich_domain",
    "EnrichmentRequest",
    "EnrichmentResult",
    "FetchedPage",
    "SourceRef",
    "EnrichmentError",
    "ConfigurationError",
    "InvalidRequestError",
    "PagesUnavailableError",
    "ModelCallError",
    "ModelResponseError",
]
