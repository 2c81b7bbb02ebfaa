"""Live enrichment: read the site, prompt Gemini, normalize the reply."""

from __future__ import annotations

from functools import partial
from typing import Optional, Protocol

import structlog

from ..config import Settings
from ..errors import PagesUnavailableError
from ..llm import GeminiClient
from ..models import EnrichmentResult, SourceRef, utc_now_iso
from ..prompt import build_prompt, normalize_fields, parse_model_output
from ..reader import PageFetcher, candidate_urls, fetch_page, fetch_pages
from .base import EnrichmentProvider, ProviderContext

logger = structlog.get_logger(__name__)


class TextModel(Protocol):
    def generate(self, prompt: str) -> str: ...


class GeminiProvider(EnrichmentProvider):
    name = "gemini"

    def __init__(
        self,
        settings: Settings,
        *,
        client: Optional[TextModel] = None,
        fetcher: Optional[PageFetcher] = None,
    ):
        self.settings = settings
        self._client = client
        self._fetcher = fetcher

    def is_available(self) -> bool:
        return self._client is not None or self.settings.has_model_credential

    def _get_client(self, settings: Settings) -> TextModel:
        if self._client is not None:
            return self._client
        return GeminiClient(
            settings.gemini_api_key or "",
            model=settings.model,
            base_url=settings.gemini_base_url,
            timeout=settings.model_timeout,
        )

    def _get_fetcher(self, settings: Settings) -> PageFetcher:
        if self._fetcher is not None:
            return self._fetcher
        return partial(fetch_page, timeout=settings.fetch_timeout, reader_base=settings.reader_url)

    def enrich(self, domain: str, ctx: ProviderContext) -> EnrichmentResult:
        settings = ctx.settings

        pages = fetch_pages(candidate_urls(domain), fetcher=self._get_fetcher(settings))
        if not pages:
            logger.warning("enrich.no_pages", domain=domain)
            raise PagesUnavailableError(domain)
        logger.info("enrich.pages_fetched", domain=domain, pages=[p.url for p in pages])

        raw = self._get_client(settings).generate(build_prompt(pages))
        summary, what_they_do, keywords, signals = normalize_fields(parse_model_output(raw))

        return EnrichmentResult(
            summary=summary,
            what_they_do=what_they_do,
            keywords=keywords,
            signals=signals,
            sources=[SourceRef(url=p.url, fetched_at=utc_now_iso()) for p in pages],
            cached_at=utc_now_iso(),
        )
