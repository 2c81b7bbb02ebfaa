"""Gemini generateContent client (REST, urllib).

One request per call: no retries, and no timeout unless one is configured.
"""

from __future__ import annotations

import json
import urllib.error
from typing import Any, Optional
from urllib.request import Request, urlopen

import structlog

from .config import DEFAULT_GEMINI_BASE_URL, DEFAULT_MODEL
from .errors import ModelCallError

logger = structlog.get_logger(__name__)


def _upstream_message(err: urllib.error.HTTPError) -> str:
    """Best-effort extraction of `error.message` from a Google API error body."""
    try:
        body = json.loads(err.read().decode("utf-8"))
        message = (body.get("error") or {}).get("message")
        if message:
            return str(message)
    except Exception:  # noqa: BLE001
        pass
    return f"HTTP {err.code}: {err.reason}"


def extract_text(payload: dict[str, Any]) -> str:
    """Concatenate the text parts of the first candidate."""
    candidates = payload.get("candidates") or []
    if not candidates:
        return ""
    content = candidates[0].get("content") or {}
    parts = content.get("parts") or []
    return "".join(str(p.get("text", "")) for p in parts if isinstance(p, dict))


class GeminiClient:
    def __init__(
        self,
        api_key: str,
        *,
        model: str = DEFAULT_MODEL,
        base_url: str = DEFAULT_GEMINI_BASE_URL,
        timeout: Optional[float] = None,
    ):
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/models/{self.model}:generateContent"

    def generate(self, prompt: str) -> str:
        body = json.dumps({"contents": [{"parts": [{"text": prompt}]}]}).encode("utf-8")
        req = Request(
            self.endpoint,
            data=body,
            headers={"Content-Type": "application/json", "x-goog-api-key": self.api_key},
            method="POST",
        )

        kwargs: dict[str, Any] = {}
        if self.timeout is not None:
            kwargs["timeout"] = self.timeout

        try:
            with urlopen(req, **kwargs) as resp:
                payload = json.loads(resp.read().decode("utf-8"))
        except urllib.error.HTTPError as e:
            message = _upstream_message(e)
            logger.warning("llm.http_error", model=self.model, status=e.code, error=message)
            raise ModelCallError(message) from e
        except urllib.error.URLError as e:
            logger.warning("llm.transport_error", model=self.model, error=str(e.reason))
            raise ModelCallError(f"URL Error: {e.reason}") from e
        except ValueError as e:
            raise ModelCallError("Model returned a non-JSON envelope") from e

        text = extract_text(payload)
        if not text:
            raise ModelCallError("Model returned no content")
        return text
