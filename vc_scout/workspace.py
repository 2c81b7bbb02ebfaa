"""Lists, notes, saved searches and cached enrichments on a KeyValueStore."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any, Iterable, Optional

from .directory import SearchFilters
from .models import EnrichmentResult, utc_now_iso
from .store import KeyValueStore


@dataclass(frozen=True)
class CompanyList:
    id: str
    name: str
    companies: list[str] = field(default_factory=list)
    created_at: str = ""
    description: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "companies": list(self.companies),
            "createdAt": self.created_at,
        }
        if self.description is not None:
            out["description"] = self.description
        return out

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CompanyList:
        return cls(
            id=str(data["id"]),
            name=str(data.get("name", "")),
            companies=[str(c) for c in data.get("companies") or []],
            created_at=str(data.get("createdAt", "")),
            description=data.get("description"),
        )


@dataclass(frozen=True)
class SavedSearch:
    id: str
    name: str
    query: str
    filters: SearchFilters = field(default_factory=SearchFilters)
    created_at: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "query": self.query,
            "filters": self.filters.to_dict(),
            "createdAt": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SavedSearch:
        return cls(
            id=str(data["id"]),
            name=str(data.get("name", "")),
            query=str(data.get("query", "")),
            filters=SearchFilters.from_dict(data.get("filters")),
            created_at=str(data.get("createdAt", "")),
        )


class Workspace:
    def __init__(self, store: KeyValueStore):
        self.store = store

    def _new_id(self, prefix: str, collection: str) -> str:
        # Millisecond ids; bump on collision within the same millisecond.
        ms = int(time.time() * 1000)
        existing = set(self.store.keys(collection))
        while f"{prefix}{ms}" in existing:
            ms += 1
        return f"{prefix}{ms}"

    # Lists

    def create_list(
        self, name: str, companies: Iterable[str] = (), *, description: Optional[str] = None
    ) -> CompanyList:
        if not name.strip():
            raise ValueError("list name is required")
        lst = CompanyList(
            id=self._new_id("l", "lists"),
            name=name.strip(),
            companies=list(dict.fromkeys(companies)),
            created_at=utc_now_iso(),
            description=description,
        )
        self.store.set("lists", lst.id, lst.to_dict())
        return lst

    def get_list(self, list_id: str) -> Optional[CompanyList]:
        data = self.store.get("lists", list_id)
        return CompanyList.from_dict(data) if data else None

    def get_lists(self) -> list[CompanyList]:
        out = []
        for key in self.store.keys("lists"):
            lst = self.get_list(key)
            if lst is not None:
                out.append(lst)
        return out

    def find_list(self, name_or_id: str) -> Optional[CompanyList]:
        lst = self.get_list(name_or_id)
        if lst is not None:
            return lst
        for lst in self.get_lists():
            if lst.name == name_or_id:
                return lst
        return None

    def delete_list(self, list_id: str) -> None:
        self.store.delete("lists", list_id)

    def _require_list(self, list_id: str) -> CompanyList:
        lst = self.get_list(list_id)
        if lst is None:
            raise KeyError(f"Unknown list: {list_id}")
        return lst

    def _save_companies(self, lst: CompanyList, companies: list[str]) -> CompanyList:
        updated = CompanyList(
            id=lst.id,
            name=lst.name,
            companies=companies,
            created_at=lst.created_at,
            description=lst.description,
        )
        self.store.set("lists", updated.id, updated.to_dict())
        return updated

    def add_company(self, list_id: str, company_id: str) -> CompanyList:
        lst = self._require_list(list_id)
        if company_id in lst.companies:
            return lst
        return self._save_companies(lst, [*lst.companies, company_id])

    def remove_company(self, list_id: str, company_id: str) -> CompanyList:
        lst = self._require_list(list_id)
        return self._save_companies(lst, [c for c in lst.companies if c != company_id])

    def toggle_company(self, list_id: str, company_id: str) -> CompanyList:
        lst = self._require_list(list_id)
        if company_id in lst.companies:
            return self.remove_company(list_id, company_id)
        return self.add_company(list_id, company_id)

    def lists_containing(self, company_id: str) -> list[str]:
        return [lst.id for lst in self.get_lists() if company_id in lst.companies]

    # Notes

    def save_note(self, company_id: str, text: str) -> None:
        self.store.set("notes", company_id, text)

    def get_note(self, company_id: str) -> str:
        value = self.store.get("notes", company_id)
        return value if isinstance(value, str) else ""

    # Saved searches

    def create_saved_search(
        self, name: str, query: str, filters: Optional[SearchFilters] = None
    ) -> SavedSearch:
        if not name.strip() or not query.strip():
            raise ValueError("saved search needs a name and a query")
        search = SavedSearch(
            id=self._new_id("ss", "savedSearches"),
            name=name.strip(),
            query=query.strip(),
            filters=filters or SearchFilters(),
            created_at=utc_now_iso(),
        )
        self.store.set("savedSearches", search.id, search.to_dict())
        return search

    def get_saved_searches(self) -> list[SavedSearch]:
        out = []
        for key in self.store.keys("savedSearches"):
            data = self.store.get("savedSearches", key)
            if data:
                out.append(SavedSearch.from_dict(data))
        return out

    def delete_saved_search(self, search_id: str) -> None:
        self.store.delete("savedSearches", search_id)

    # Enrichment cache

    def cache_enrichment(self, company_id: str, result: EnrichmentResult) -> None:
        self.store.set("enrichmentCache", company_id, result.to_dict())

    def get_cached_enrichment(self, company_id: str) -> Optional[EnrichmentResult]:
        data = self.store.get("enrichmentCache", company_id)
        if not isinstance(data, dict):
            return None
        return EnrichmentResult.from_dict(data)
