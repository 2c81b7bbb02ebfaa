from __future__ import annotations

import os
import unittest
from unittest.mock import MagicMock, patch

from fastapi.testclient import TestClient

from vc_scout.api import app, get_provider, get_settings
from vc_scout.config import Settings
from vc_scout.errors import ModelResponseError, PagesUnavailableError
from vc_scout.models import FetchedPage
from vc_scout.providers import FallbackProvider, GeminiProvider


class TestEnrichEndpoint(unittest.TestCase):
    def setUp(self):
        self.client = TestClient(app)
        app.dependency_overrides[get_settings] = lambda: Settings(fallback_delay_seconds=0)
        self.addCleanup(app.dependency_overrides.clear)

    def _use(self, provider):
        app.dependency_overrides[get_provider] = lambda: provider

    def test_fallback_success(self):
        self._use(FallbackProvider(delay_seconds=0))
        resp = self.client.post("/api/enrich", json={"domain": "acme.io", "companyId": "c1"})

        self.assertEqual(resp.status_code, 200)
        data = resp.json()
        self.assertEqual(
            [s["url"] for s in data["sources"]], ["https://acme.io", "https://acme.io/about"]
        )
        self.assertIn("acme.io", data["summary"])
        self.assertNotIn("error", data)

    def test_missing_domain_is_400(self):
        self._use(FallbackProvider(delay_seconds=0))
        for body in ({}, {"domain": ""}, {"domain": "  "}):
            with self.subTest(body=body):
                resp = self.client.post("/api/enrich", json=body)
                self.assertEqual(resp.status_code, 400)
                self.assertEqual(resp.json(), {"error": "domain is required"})

    def test_malformed_body_is_400(self):
        self._use(FallbackProvider(delay_seconds=0))
        resp = self.client.post(
            "/api/enrich", content=b"not json", headers={"Content-Type": "application/json"}
        )
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json(), {"error": "domain is required"})

    def test_no_pages_is_422(self):
        provider = MagicMock()
        provider.name = "stub"
        provider.enrich.side_effect = PagesUnavailableError("acme.io")
        self._use(provider)

        resp = self.client.post("/api/enrich", json={"domain": "acme.io"})

        self.assertEqual(resp.status_code, 422)
        self.assertIn("Could not fetch any pages from acme.io", resp.json()["error"])

    def test_parse_failure_is_500(self):
        client = MagicMock()
        client.generate.return_value = "definitely not json"
        self._use(
            GeminiProvider(
                Settings(gemini_api_key="k"),
                client=client,
                fetcher=lambda url: FetchedPage(url, "page text"),
            )
        )

        resp = self.client.post("/api/enrich", json={"domain": "acme.io"})

        self.assertEqual(resp.status_code, 500)
        self.assertEqual(resp.json(), {"error": ModelResponseError.default_message})

    def test_model_failure_is_500_with_message(self):
        provider = MagicMock()
        provider.name = "stub"
        provider.enrich.side_effect = RuntimeError("upstream exploded")
        self._use(provider)

        resp = self.client.post("/api/enrich", json={"domain": "acme.io"})

        self.assertEqual(resp.status_code, 500)
        self.assertEqual(resp.json(), {"error": "upstream exploded"})


class TestMetaEndpoints(unittest.TestCase):
    def setUp(self):
        self.client = TestClient(app)
        self.addCleanup(app.dependency_overrides.clear)

    def test_health(self):
        resp = self.client.get("/api/health")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["status"], "ok")

    def test_providers_without_key(self):
        app.dependency_overrides[get_settings] = lambda: Settings()
        data = self.client.get("/api/providers").json()
        self.assertEqual(data["active"], "fallback")
        self.assertIn({"id": "gemini", "available": False}, data["providers"])

    def test_providers_with_key(self):
        app.dependency_overrides[get_settings] = lambda: Settings(gemini_api_key="k")
        data = self.client.get("/api/providers").json()
        self.assertEqual(data["active"], "gemini")
        self.assertEqual(
            data["providers"],
            [{"id": "fallback", "available": True}, {"id": "gemini", "available": True}],
        )

    def test_malformed_setting_returns_json_error(self):
        with patch.dict(os.environ, {"VC_SCOUT_FETCH_TIMEOUT": "soon"}):
            resp = self.client.post("/api/enrich", json={"domain": "acme.io"})

        self.assertEqual(resp.status_code, 500)
        self.assertIn("VC_SCOUT_FETCH_TIMEOUT", resp.json()["error"])


if __name__ == "__main__":
    unittest.main()
