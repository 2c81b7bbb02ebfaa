"""
Tests for the CLI module.
"""

import json
import os
import unittest
from io import StringIO
from unittest.mock import patch

import pytest

from vc_scout.cli import exit_code_for, main, print_enrichment
from vc_scout.errors import InvalidRequestError, ModelResponseError, PagesUnavailableError
from vc_scout.providers.fallback import mock_enrichment
from vc_scout.store import SqliteStore
from vc_scout.workspace import Workspace


def _run(argv):
    with patch("sys.stdout", new=StringIO()) as out, patch("sys.stderr", new=StringIO()) as err:
        with pytest.raises(SystemExit) as cm:
            main(argv)
    return cm.value.code, out.getvalue(), err.getvalue()


class TestEnrichCommand(unittest.TestCase):
    def test_json_output_in_fallback_mode(self):
        code, out, _ = _run(["enrich", "acme.io", "--format", "json"])

        self.assertEqual(code, 0)
        data = json.loads(out)
        self.assertEqual(data["sources"][0]["url"], "https://acme.io")

    def test_markdown_output(self):
        code, out, _ = _run(["enrich", "acme.io", "--format", "markdown"])
        self.assertEqual(code, 0)
        self.assertTrue(out.startswith("# Enrichment: acme.io"))

    def test_blank_domain_exit_code(self):
        code, out, _ = _run(["enrich", "  ", "--format", "json"])
        self.assertEqual(code, 2)
        self.assertEqual(json.loads(out), {"error": "domain is required"})

    @patch("vc_scout.cli.enrich_domain", side_effect=ModelResponseError())
    def test_fatal_error_exit_code(self, _mock):
        code, _, err = _run(["enrich", "acme.io"])
        self.assertEqual(code, 1)
        self.assertIn("Failed to parse AI response", err)

    def test_company_id_writes_enrichment_cache(self):
        code, _, _ = _run(["enrich", "acme.io", "--format", "json", "--company-id", "c1"])

        self.assertEqual(code, 0)
        ws = Workspace(SqliteStore(os.environ["VC_SCOUT_STORE"]))
        cached = ws.get_cached_enrichment("c1")
        self.assertIsNotNone(cached)
        self.assertIn("acme.io", cached.summary)


class TestExitCodes(unittest.TestCase):
    def test_mapping(self):
        self.assertEqual(exit_code_for(InvalidRequestError()), 2)
        self.assertEqual(exit_code_for(PagesUnavailableError("a.io")), 2)
        self.assertEqual(exit_code_for(ModelResponseError()), 1)


class TestPrintEnrichment(unittest.TestCase):
    def test_pretty_output(self):
        with patch("sys.stdout", new=StringIO()) as mock_stdout:
            print_enrichment(mock_enrichment("acme.io").to_dict(), "acme.io")
            output = mock_stdout.getvalue()

        self.assertIn("acme.io", output)
        self.assertIn("Keywords: SaaS, AI/ML", output)
        self.assertIn("https://acme.io/about", output)


COMPANIES = [
    {"id": "c1", "name": "Acme", "domain": "acme.io", "stage": "Seed", "sector": "AI", "thesisScore": 90},
    {"id": "c2", "name": "Birch", "domain": "birch.io", "stage": "Series A", "sector": "Climate", "thesisScore": 60},
]


@pytest.fixture
def companies_file(tmp_path):
    path = tmp_path / "companies.json"
    path.write_text(json.dumps(COMPANIES))
    return str(path)


def test_search_json(companies_file) -> None:
    code, out, _ = _run(["search", "-c", companies_file, "--sector", "Climate", "--json"])
    assert code == 0
    data = json.loads(out)
    assert data["total"] == 1
    assert data["results"][0]["id"] == "c2"


def test_search_pretty(companies_file) -> None:
    code, out, _ = _run(["search", "-c", companies_file, "--sort", "name", "--asc"])
    assert code == 0
    assert out.index("Acme") < out.index("Birch")
    assert "2 companies (page 1/1)" in out


def test_lists_lifecycle(companies_file, tmp_path) -> None:
    code, out, _ = _run(["lists", "create", "Top picks", "c2"])
    assert code == 0
    list_id = out.strip()

    assert _run(["lists", "add", "Top picks", "c1"])[0] == 0
    _, shown, _ = _run(["lists", "show"])
    assert "Top picks (2)" in shown

    target = tmp_path / "out.csv"
    code, _, _ = _run(["lists", "export", list_id, "-c", companies_file, "-o", str(target)])
    assert code == 0
    lines = target.read_text().split("\n")
    assert lines[1].startswith('"Birch"')
    assert lines[2].startswith('"Acme"')

    code, out, _ = _run(["lists", "export", list_id, "-c", companies_file, "--format", "json", "-o", "-"])
    assert [c["id"] for c in json.loads(out)] == ["c2", "c1"]

    assert _run(["lists", "remove", list_id, "c2"])[0] == 0
    assert _run(["lists", "delete", "Top picks"])[0] == 0
    assert _run(["lists", "add", "Top picks", "c1"])[0] == 2


def test_store_option_after_subcommand(tmp_path) -> None:
    store_path = str(tmp_path / "elsewhere.sqlite")

    code, _, _ = _run(["enrich", "acme.io", "--company-id", "c1", "--store", store_path])
    assert code == 0
    assert Workspace(SqliteStore(store_path)).get_cached_enrichment("c1") is not None
    assert Workspace(SqliteStore(os.environ["VC_SCOUT_STORE"])).get_cached_enrichment("c1") is None

    assert _run(["lists", "create", "Watch", "c1", "--store", store_path])[0] == 0
    _, shown, _ = _run(["lists", "show", "--store", store_path])
    assert "Watch (1)" in shown
    _, default_shown, _ = _run(["lists", "show"])
    assert "Watch" not in default_shown


def test_malformed_setting_exit_code(monkeypatch) -> None:
    monkeypatch.setenv("VC_SCOUT_MODEL_TIMEOUT", "never")
    code, _, err = _run(["enrich", "acme.io"])
    assert code == 2
    assert "VC_SCOUT_MODEL_TIMEOUT" in err
