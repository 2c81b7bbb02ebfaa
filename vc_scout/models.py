"""Models for vc-scout.

These dataclasses define the *stable* wire contract of an enrichment.
`to_dict()` emits the camelCase shape consumed by the dashboard:

    {summary, whatTheyDo, keywords, signals, sources, cachedAt[, error]}
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Optional

# Extracted page text is cut to this many characters before prompting.
MAX_PAGE_CHARS = 8000


def utc_now_iso() -> str:
    """ISO-8601 UTC timestamp with millisecond precision, e.g. 2026-01-20T19:00:00.000Z."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass(frozen=True)
class EnrichmentRequest:
    domain: str


@dataclass(frozen=True)
class FetchedPage:
    """Extracted text of one candidate page (transient)."""

    url: str
    text: str


@dataclass(frozen=True)
class SourceRef:
    url: str
    fetched_at: str  # ISO-8601 UTC

    def to_dict(self) -> dict[str, Any]:
        return {"url": self.url, "fetchedAt": self.fetched_at}


@dataclass(frozen=True)
class EnrichmentResult:
    summary: str
    what_they_do: list[str] = field(default_factory=list)
    keywords: list[str] = field(default_factory=list)
    signals: list[str] = field(default_factory=list)
    sources: list[SourceRef] = field(default_factory=list)
    cached_at: str = ""
    error: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "summary": self.summary,
            "whatTheyDo": list(self.what_they_do),
            "keywords": list(self.keywords),
            "signals": list(self.signals),
            "sources": [s.to_dict() for s in self.sources],
            "cachedAt": self.cached_at,
        }
        if self.error is not None:
            out["error"] = self.error
        return out

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> EnrichmentResult:
        sources = []
        for s in data.get("sources") or []:
            if isinstance(s, dict) and s.get("url"):
                sources.append(SourceRef(url=str(s["url"]), fetched_at=str(s.get("fetchedAt") or "")))
        return cls(
            summary=str(data.get("summary") or ""),
            what_they_do=list(data.get("whatTheyDo") or []),
            keywords=list(data.get("keywords") or []),
            signals=list(data.get("signals") or []),
            sources=sources,
            cached_at=str(data.get("cachedAt") or ""),
            error=data.get("error"),
        )
