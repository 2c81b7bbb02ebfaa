from __future__ import annotations

import unittest
import urllib.error
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

from vc_scout.models import FetchedPage
from vc_scout.reader import candidate_urls, fetch_page, fetch_pages


def _resp(body: str, status: int = 200):
    return SimpleNamespace(status=status, read=lambda: body.encode("utf-8"), close=lambda: None)


class TestCandidateUrls(unittest.TestCase):
    def test_bare_domain_gets_https(self):
        self.assertEqual(
            candidate_urls("acme.io"), ["https://acme.io", "https://acme.io/about"]
        )

    def test_scheme_is_kept(self):
        self.assertEqual(
            candidate_urls("http://acme.io"), ["http://acme.io", "http://acme.io/about"]
        )


class TestFetchPage(unittest.TestCase):
    def test_request_goes_through_reader_with_headers(self):
        seen = {}

        def _fake_urlopen(req, timeout=0):
            seen["url"] = req.full_url
            seen["ua"] = req.get_header("User-agent")
            seen["accept"] = req.get_header("Accept")
            seen["timeout"] = timeout
            return _resp("x" * 500)

        with patch("vc_scout.reader.urlopen", _fake_urlopen):
            page = fetch_page("https://acme.io", timeout=12)

        self.assertIsNotNone(page)
        self.assertEqual(seen["url"], "https://r.jina.ai/https://acme.io")
        self.assertEqual(seen["ua"], "VCScout/1.0")
        self.assertEqual(seen["accept"], "text/plain")
        self.assertEqual(seen["timeout"], 12)

    def test_truncates_to_8000_chars(self):
        text = "a" * 7990 + "b" * 100
        with patch("vc_scout.reader.urlopen", return_value=_resp(text)):
            page = fetch_page("https://acme.io")

        self.assertEqual(len(page.text), 8000)
        self.assertEqual(page.text, text[:8000])

    def test_short_text_is_no_result(self):
        with patch("vc_scout.reader.urlopen", return_value=_resp("x" * 99)):
            self.assertIsNone(fetch_page("https://acme.io"))

    def test_exactly_100_chars_is_no_result(self):
        with patch("vc_scout.reader.urlopen", return_value=_resp("x" * 100)):
            self.assertIsNone(fetch_page("https://acme.io"))

    def test_http_error_is_no_result(self):
        err = urllib.error.HTTPError("https://r.jina.ai/x", 403, "Forbidden", {}, None)
        with patch("vc_scout.reader.urlopen", side_effect=err):
            self.assertIsNone(fetch_page("https://acme.io"))

    def test_timeout_is_no_result(self):
        with patch("vc_scout.reader.urlopen", side_effect=TimeoutError("timed out")):
            self.assertIsNone(fetch_page("https://acme.io"))

    def test_non_success_status_is_no_result(self):
        with patch("vc_scout.reader.urlopen", return_value=_resp("x" * 500, status=500)):
            self.assertIsNone(fetch_page("https://acme.io"))


class TestFetchPages(unittest.TestCase):
    def test_stops_after_two_successes(self):
        fetcher = MagicMock(side_effect=lambda url: FetchedPage(url=url, text="ok"))

        pages = fetch_pages(["https://a", "https://b", "https://c"], fetcher=fetcher)

        self.assertEqual([p.url for p in pages], ["https://a", "https://b"])
        self.assertEqual(fetcher.call_count, 2)

    def test_failures_do_not_stop_the_loop(self):
        results = {"https://a": None, "https://b": FetchedPage("https://b", "ok"), "https://c": None}
        fetcher = MagicMock(side_effect=lambda url: results[url])

        pages = fetch_pages(["https://a", "https://b", "https://c"], fetcher=fetcher)

        self.assertEqual([p.url for p in pages], ["https://b"])
        self.assertEqual(fetcher.call_count, 3)

    def test_sequential_order(self):
        calls = []

        def fetcher(url):
            calls.append(url)
            return None

        self.assertEqual(fetch_pages(candidate_urls("acme.io"), fetcher=fetcher), [])
        self.assertEqual(calls, ["https://acme.io", "https://acme.io/about"])


if __name__ == "__main__":
    unittest.main()
