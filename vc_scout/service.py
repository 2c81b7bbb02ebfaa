"""Enrichment entry point.

Each call runs the whole pipeline (or the whole fallback) from scratch. There
is no result cache and no de-duplication of concurrent calls; persisting the
result is the caller's job.
"""

from __future__ import annotations

from typing import Any, Optional

import structlog

from .config import Settings
from .errors import EnrichmentError, InvalidRequestError, ModelCallError
from .models import EnrichmentRequest, EnrichmentResult
from .providers import EnrichmentProvider, ProviderContext, select_provider

logger = structlog.get_logger(__name__)


def validate_domain(domain: Any) -> EnrichmentRequest:
    if not isinstance(domain, str) or not domain.strip():
        raise InvalidRequestError()
    return EnrichmentRequest(domain=domain.strip())


def enrich_domain(
    domain: Any,
    *,
    settings: Optional[Settings] = None,
    provider: Optional[EnrichmentProvider] = None,
) -> EnrichmentResult:
    domain = validate_domain(domain).domain
    settings = settings or Settings.from_env()
    provider = provider or select_provider(settings)

    log = logger.bind(domain=domain, provider=provider.name)
    log.info("enrich.start")
    try:
        result = provider.enrich(domain, ProviderContext(settings=settings))
    except EnrichmentError as e:
        log.warning("enrich.failed", status=e.status_code, error=e.message)
        raise
    except Exception as e:
        log.exception("enrich.error")
        raise ModelCallError(str(e) or None) from e

    log.info("enrich.done", sources=len(result.sources))
    return result
