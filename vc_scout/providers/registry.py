"""Provider registry + selection helpers."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from .base import EnrichmentProvider

# Preference order: the first available provider wins.
DEFAULT_ORDER = ("gemini", "fallback")


@dataclass
class Registry:
    providers: dict[str, EnrichmentProvider]

    def get(self, name: str) -> EnrichmentProvider:
        return self.providers[name]

    def list_names(self) -> list[str]:
        return sorted(self.providers.keys())

    def select(
        self,
        names: Iterable[str] | None = None,
        *,
        only_available: bool = True,
    ) -> list[EnrichmentProvider]:
        if names is None:
            names = self.list_names()

        selected: list[EnrichmentProvider] = []
        for name in names:
            if name not in self.providers:
                continue
            p = self.providers[name]
            if only_available and not p.is_available():
                continue
            selected.append(p)
        return selected

    def first_available(self, order: Iterable[str] = DEFAULT_ORDER) -> EnrichmentProvider:
        selected = self.select(order)
        if not selected:
            raise LookupError("no enrichment provider available")
        return selected[0]
