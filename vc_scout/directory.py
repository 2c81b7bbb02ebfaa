"""Company directory: search, filters, sorting, pagination and list export.

Operates on an in-memory list of `Company` records; where they come from
(a JSON export, a fixture) is up to the caller.
"""

from __future__ import annotations

import json
import math
import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any, Generic, Optional, TypeVar

T = TypeVar("T")

STAGES = ["Pre-seed", "Seed", "Series A", "Series B", "Series C+"]
SORT_KEYS = ("name", "thesisScore", "foundedYear", "stage")
PAGE_SIZE = 10

EXPORT_COLUMNS = [
    "name",
    "domain",
    "stage",
    "sector",
    "location",
    "foundedYear",
    "thesisScore",
    "fundingTotal",
]


@dataclass(frozen=True)
class Company:
    id: str
    name: str
    domain: str
    stage: str
    sector: str
    tags: list[str] = field(default_factory=list)
    location: str = ""
    founded_year: int = 0
    employees: str = ""
    description: str = ""
    # Opaque, pre-computed upstream.
    thesis_score: int = 0
    thesis_reasons: list[str] = field(default_factory=list)
    signals: list[dict[str, Any]] = field(default_factory=list)
    last_activity: str = ""
    funding_total: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Company:
        return cls(
            id=str(data["id"]),
            name=str(data.get("name", "")),
            domain=str(data.get("domain", "")),
            stage=str(data.get("stage", "")),
            sector=str(data.get("sector", "")),
            tags=[str(t) for t in data.get("tags") or []],
            location=str(data.get("location", "")),
            founded_year=int(data.get("foundedYear") or 0),
            employees=str(data.get("employees", "")),
            description=str(data.get("description", "")),
            thesis_score=int(data.get("thesisScore") or 0),
            thesis_reasons=[str(r) for r in data.get("thesisReasons") or []],
            signals=list(data.get("signals") or []),
            last_activity=str(data.get("lastActivity", "")),
            funding_total=data.get("fundingTotal"),
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "domain": self.domain,
            "stage": self.stage,
            "sector": self.sector,
            "tags": list(self.tags),
            "location": self.location,
            "foundedYear": self.founded_year,
            "employees": self.employees,
            "description": self.description,
            "thesisScore": self.thesis_score,
            "thesisReasons": list(self.thesis_reasons),
            "signals": list(self.signals),
            "lastActivity": self.last_activity,
        }
        if self.funding_total is not None:
            out["fundingTotal"] = self.funding_total
        return out


@dataclass(frozen=True)
class SearchFilters:
    stage: list[str] = field(default_factory=list)
    sector: list[str] = field(default_factory=list)
    min_thesis_score: int = 0

    @property
    def active_count(self) -> int:
        return len(self.stage) + len(self.sector) + (1 if self.min_thesis_score > 0 else 0)

    def to_dict(self) -> dict[str, Any]:
        return {
            "stage": list(self.stage),
            "sector": list(self.sector),
            "minThesisScore": self.min_thesis_score,
        }

    @classmethod
    def from_dict(cls, data: Optional[dict[str, Any]]) -> SearchFilters:
        data = data or {}
        return cls(
            stage=list(data.get("stage") or []),
            sector=list(data.get("sector") or []),
            min_thesis_score=int(data.get("minThesisScore") or 0),
        )


@dataclass(frozen=True)
class Page(Generic[T]):
    items: list[T]
    page: int
    total_pages: int
    total: int


def _stage_rank(stage: str) -> int:
    # Unknown stages sort before Pre-seed.
    return STAGES.index(stage) if stage in STAGES else -1


def _matches_query(c: Company, q: str) -> bool:
    return (
        q in c.name.lower()
        or q in c.description.lower()
        or q in c.sector.lower()
        or any(q in t.lower() for t in c.tags)
        or q in c.location.lower()
    )


def search_companies(
    companies: Iterable[Company],
    query: str = "",
    filters: Optional[SearchFilters] = None,
    *,
    sort_key: str = "thesisScore",
    descending: bool = True,
) -> list[Company]:
    if sort_key not in SORT_KEYS:
        raise ValueError(f"Unknown sort key: {sort_key}")
    filters = filters or SearchFilters()

    data = list(companies)

    q = query.strip().lower()
    if q:
        data = [c for c in data if _matches_query(c, q)]
    if filters.stage:
        data = [c for c in data if c.stage in filters.stage]
    if filters.sector:
        data = [c for c in data if c.sector in filters.sector]
    if filters.min_thesis_score > 0:
        data = [c for c in data if c.thesis_score >= filters.min_thesis_score]

    if sort_key == "name":
        data.sort(key=lambda c: c.name.lower(), reverse=descending)
    elif sort_key == "thesisScore":
        data.sort(key=lambda c: c.thesis_score, reverse=descending)
    elif sort_key == "foundedYear":
        data.sort(key=lambda c: c.founded_year, reverse=descending)
    else:
        data.sort(key=lambda c: _stage_rank(c.stage), reverse=descending)
    return data


def paginate(items: Sequence[T], page: int = 1, page_size: int = PAGE_SIZE) -> Page[T]:
    """1-based pages; out-of-range page numbers are clamped."""
    if page_size <= 0:
        raise ValueError("page_size must be positive")
    total_pages = max(1, math.ceil(len(items) / page_size))
    page = min(max(1, page), total_pages)
    start = (page - 1) * page_size
    return Page(
        items=list(items[start : start + page_size]),
        page=page,
        total_pages=total_pages,
        total=len(items),
    )


def preview_count(companies: Iterable[Company], query: str) -> int:
    """How many companies a saved search would currently match."""
    q = query.lower()
    return sum(
        1
        for c in companies
        if q in c.name.lower()
        or q in c.sector.lower()
        or any(q in t.lower() for t in c.tags)
        or q in c.description.lower()
    )


def load_companies(path: str) -> list[Company]:
    with open(path, encoding="utf-8") as f:
        raw = json.load(f)
    if not isinstance(raw, list):
        raise ValueError(f"{path}: expected a JSON array of companies")
    return [Company.from_dict(item) for item in raw]


def resolve_companies(company_ids: Iterable[str], companies: Iterable[Company]) -> list[Company]:
    """Map ids to records, keeping id order and dropping unknown ids."""
    by_id = {c.id: c for c in companies}
    return [by_id[cid] for cid in company_ids if cid in by_id]


def export_list_json(companies: Iterable[Company]) -> str:
    return json.dumps([c.to_dict() for c in companies], indent=2, ensure_ascii=False)


def _csv_cell(value: Any) -> str:
    s = "" if value is None else str(value)
    return '"' + s.replace('"', '""') + '"'


def export_list_csv(companies: Iterable[Company]) -> str:
    lines = [",".join(EXPORT_COLUMNS)]
    for c in companies:
        row = c.to_dict()
        lines.append(",".join(_csv_cell(row.get(col)) for col in EXPORT_COLUMNS))
    return "\n".join(lines)


def export_filename(list_name: str, fmt: str) -> str:
    stem = re.sub(r"\s+", "-", list_name)
    return f"{stem}.{fmt}"
