"""Synthetic enrichment used when no model credential is configured.

Same schema as the live provider, canned content. The artificial delay keeps
the perceived latency of a real enrichment for UI work.
"""

from __future__ import annotations

import time

import structlog

from ..config import DEFAULT_FALLBACK_DELAY
from ..models import EnrichmentResult, SourceRef, utc_now_iso
from .base import EnrichmentProvider, ProviderContext

logger = structlog.get_logger(__name__)

SUMMARY_TEMPLATE = (
    "{domain} is an innovative technology company building next-generation solutions "
    "for the modern enterprise. They combine cutting-edge AI with intuitive user "
    "experiences to deliver measurable business outcomes."
)

WHAT_THEY_DO = [
    "Provides a cloud-native platform for enterprise workflow automation",
    "Offers AI-powered analytics and insights dashboards",
    "Integrates with major SaaS tools via a universal connector API",
    "Delivers real-time collaboration features for distributed teams",
]

KEYWORDS = [
    "SaaS",
    "AI/ML",
    "enterprise",
    "automation",
    "analytics",
    "cloud-native",
    "API-first",
    "workflow",
]

SIGNALS = [
    "Active hiring page with 12+ open engineering roles",
    "Recent blog posts suggest strong product velocity",
    "Pricing page indicates self-serve motion alongside enterprise sales",
    "Integration marketplace signals ecosystem strategy",
]


def mock_enrichment(domain: str) -> EnrichmentResult:
    now = utc_now_iso()
    return EnrichmentResult(
        summary=SUMMARY_TEMPLATE.format(domain=domain),
        what_they_do=list(WHAT_THEY_DO),
        keywords=list(KEYWORDS),
        signals=list(SIGNALS),
        sources=[
            SourceRef(url=f"https://{domain}", fetched_at=now),
            SourceRef(url=f"https://{domain}/about", fetched_at=now),
        ],
        cached_at=now,
    )


class FallbackProvider(EnrichmentProvider):
    name = "fallback"

    def __init__(self, *, delay_seconds: float = DEFAULT_FALLBACK_DELAY):
        self.delay_seconds = delay_seconds

    def enrich(self, domain: str, ctx: ProviderContext) -> EnrichmentResult:
        logger.info("enrich.fallback", domain=domain)
        if self.delay_seconds > 0:
            time.sleep(self.delay_seconds)
        return mock_enrichment(domain)
