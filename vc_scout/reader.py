"""Page selection and text extraction.

Pages are read through a "read this URL as plain text" proxy (r.jina.ai by
default). Extraction is best-effort: a failed or too-short page is simply
skipped, never raised.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Optional
from urllib.request import Request, urlopen

import structlog

from .config import DEFAULT_FETCH_TIMEOUT, DEFAULT_READER_URL
from .models import MAX_PAGE_CHARS, FetchedPage

logger = structlog.get_logger(__name__)

USER_AGENT = "VCScout/1.0"

# Pages with this many characters or fewer are treated as empty.
MIN_PAGE_CHARS = 100

MAX_PAGES = 2

PageFetcher = Callable[[str], Optional[FetchedPage]]


def candidate_urls(domain: str) -> list[str]:
    """The homepage and the about page. Nothing else is crawled."""
    base = domain if domain.startswith("http") else f"https://{domain}"
    return [base, f"{base}/about"]


def fetch_page(
    url: str,
    *,
    timeout: float = DEFAULT_FETCH_TIMEOUT,
    reader_base: str = DEFAULT_READER_URL,
) -> Optional[FetchedPage]:
    """Return the extracted text of `url`, or None when there is nothing usable."""
    req = Request(
        f"{reader_base}{url}",
        headers={"Accept": "text/plain", "User-Agent": USER_AGENT},
    )

    try:
        resp = urlopen(req, timeout=timeout)
        try:
            status = int(getattr(resp, "status", 200))
            body = resp.read()
        finally:
            close = getattr(resp, "close", None)
            if callable(close):
                close()
    except Exception as e:  # noqa: BLE001
        logger.info("reader.fetch_failed", url=url, error=str(e))
        return None

    if status < 200 or status >= 300:
        logger.info("reader.fetch_failed", url=url, status=status)
        return None

    text = body.decode("utf-8", errors="replace") if isinstance(body, bytes) else str(body)
    if len(text) <= MIN_PAGE_CHARS:
        logger.info("reader.page_too_short", url=url, chars=len(text))
        return None

    return FetchedPage(url=url, text=text[:MAX_PAGE_CHARS])


def fetch_pages(
    urls: Iterable[str],
    *,
    fetcher: PageFetcher,
    max_pages: int = MAX_PAGES,
) -> list[FetchedPage]:
    """Try candidates one after another; stop once `max_pages` succeeded."""
    pages: list[FetchedPage] = []
    for url in urls:
        page = fetcher(url)
        if page is not None:
            pages.append(page)
        if len(pages) >= max_pages:
            break
    return pages
