"""Enrichment error taxonomy.

Every failure carries an HTTP-style status so the API and CLI can surface it
without knowing which stage raised it.
"""

from __future__ import annotations

from typing import Any


class EnrichmentError(Exception):
    """Base class: a terminal failure for the current enrichment call."""

    status_code: int = 500
    default_message: str = "Enrichment failed"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        return {"error": self.message}


class InvalidRequestError(EnrichmentError):
    status_code = 400
    default_message = "domain is required"


class PagesUnavailableError(EnrichmentError):
    status_code = 422

    def __init__(self, domain: str):
        self.domain = domain
        super().__init__(
            f"Could not fetch any pages from {domain}. "
            "The site may block scrapers or require authentication."
        )


class ModelCallError(EnrichmentError):
    status_code = 500


class ModelResponseError(EnrichmentError):
    status_code = 500
    default_message = "Failed to parse AI response. Try again."

    def __init__(self) -> None:
        super().__init__(self.default_message)


class ConfigurationError(EnrichmentError):
    """A malformed setting; raised before any enrichment work starts."""

    status_code = 500
