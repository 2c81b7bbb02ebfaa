"""Markdown report formatter for enrichment results.

This is a presentation-only layer (derived from the wire dict).
"""

from __future__ import annotations

import re
from typing import Any, Optional


def _md_code(value: Any) -> str:
    """Render an inline code span, handling backticks safely."""
    if value is None:
        return "-"
    s = str(value)
    ticks = 0
    for m in re.finditer(r"`+", s):
        ticks = max(ticks, len(m.group(0)))
    delim = "`" * (ticks + 1)
    if s.startswith(" ") or s.endswith(" "):
        return f"{delim} {s} {delim}"
    return f"{delim}{s}{delim}"


def _cell(value: Any) -> str:
    """Escape text for use in a Markdown table cell."""
    if value is None:
        return "-"
    s = str(value).replace("\r", "").replace("\n", " ")
    return s.replace("|", "\\|")


def _bullets(items: Any) -> list[str]:
    if not items:
        return ["_none_"]
    return [f"- {item}" for item in items]


def to_markdown(result: dict[str, Any], domain: Optional[str] = None) -> str:
    """Render an EnrichmentResult wire dict to Markdown."""
    out: list[str] = []
    out.append(f"# Enrichment: {domain}" if domain else "# Enrichment")
    out.append("")
    out.append(result.get("summary") or "_No summary._")
    out.append("")

    out.append("## What they do")
    out.append("")
    out.extend(_bullets(result.get("whatTheyDo")))
    out.append("")

    out.append("## Keywords")
    out.append("")
    keywords = result.get("keywords") or []
    out.append(", ".join(_md_code(k) for k in keywords) if keywords else "_none_")
    out.append("")

    out.append("## Signals")
    out.append("")
    out.extend(_bullets(result.get("signals")))
    out.append("")

    out.append("## Sources")
    out.append("")
    sources = result.get("sources") or []
    if not sources:
        out.append("_none_")
    else:
        out.append("| URL | Fetched at |")
        out.append("|---|---|")
        for s in sources:
            if not isinstance(s, dict):
                continue
            out.append(f"| {_cell(s.get('url'))} | {_cell(s.get('fetchedAt'))} |")
    out.append("")
    out.append(f"- Cached at: {_md_code(result.get('cachedAt') or '-')}")

    return "\n".join(out).rstrip() + "\n"
