"""Prompt construction and model-output parsing.

Models are asked for bare JSON but sometimes wrap it in a Markdown code fence
anyway. The accepted leniency is exactly: strip fences, trim, parse. There is
no repair and no second attempt.
"""

from __future__ import annotations

import json
import re
from collections.abc import Iterable
from typing import Any

from .errors import ModelResponseError
from .models import FetchedPage

PROMPT_TEMPLATE = """You are a VC analyst assistant. Analyze this company website content and extract structured information.

Return ONLY valid JSON (no markdown, no explanation) with exactly this structure:
{{
  "summary": "1-2 sentence company summary",
  "whatTheyDo": ["bullet 1", "bullet 2", "bullet 3"],
  "keywords": ["keyword1", "keyword2", "keyword3", "keyword4", "keyword5"],
  "signals": ["signal 1", "signal 2", "signal 3"]
}}

Rules:
- summary: concise, informative, 1-2 sentences
- whatTheyDo: 3-6 concrete bullets describing the product/service
- keywords: 5-10 relevant technical/business keywords
- signals: 2-4 signals inferred from the site (e.g., "Active hiring page with 8 open roles", "Recent changelog suggests active product development", "Blog last updated within 30 days", "Pricing page present indicating self-serve motion")

WEBSITE CONTENT:
{content}"""

# Only a fence wrapping the whole reply; backticks inside values are kept.
_OPEN_FENCE_RE = re.compile(r"^```[\w+-]*[ \t]*\n?")
_CLOSE_FENCE_RE = re.compile(r"\n?```$")


def combine_pages(pages: Iterable[FetchedPage]) -> str:
    return "\n\n".join(f"=== PAGE: {p.url} ===\n{p.text}" for p in pages)


def build_prompt(pages: Iterable[FetchedPage]) -> str:
    return PROMPT_TEMPLATE.format(content=combine_pages(pages))


def strip_code_fences(text: str) -> str:
    text = _OPEN_FENCE_RE.sub("", text.strip())
    return _CLOSE_FENCE_RE.sub("", text).strip()


def parse_model_output(text: str) -> dict[str, Any]:
    """Parse the model reply into a JSON object or raise ModelResponseError."""
    try:
        parsed = json.loads(strip_code_fences(text))
    except (TypeError, ValueError) as e:
        raise ModelResponseError() from e

    if not isinstance(parsed, dict):
        raise ModelResponseError()
    return parsed


def _as_str_list(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [str(v) for v in value if v is not None]


def normalize_fields(parsed: dict[str, Any]) -> tuple[str, list[str], list[str], list[str]]:
    """Default missing fields to empty values. Unknown keys are ignored."""
    summary = parsed.get("summary")
    return (
        str(summary) if summary else "",
        _as_str_list(parsed.get("whatTheyDo")),
        _as_str_list(parsed.get("keywords")),
        _as_str_list(parsed.get("signals")),
    )
