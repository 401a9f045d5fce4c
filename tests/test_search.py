"""
Unit tests for the search collaborator and result ranking.
"""

import asyncio
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from tvmrealty.errors import ConfigurationError
from tvmrealty.listings import (
    GeminiSearchClient,
    NullSearchClient,
    get_search_client,
    rank_search_results,
)
from tvmrealty.models import SearchResult


def _r(url, title="t"):
    return SearchResult(title=title, url=url)


# =============================================================================
# rank_search_results
# =============================================================================

class TestRankSearchResults:

    def test_portals_first_in_priority_order(self):
        results = [
            _r("https://blog.example.com/a"),
            _r("https://www.housing.com/b"),
            _r("https://www.99acres.com/c"),
            _r("https://www.magicbricks.com/d"),
        ]
        ranked = rank_search_results(results, limit=10)
        assert [r.url for r in ranked] == [
            "https://www.99acres.com/c",
            "https://www.magicbricks.com/d",
            "https://www.housing.com/b",
            "https://blog.example.com/a",
        ]

    def test_stable_within_same_rank(self):
        results = [_r("https://a.example"), _r("https://b.example"), _r("https://c.example")]
        assert rank_search_results(results, limit=10) == results

    def test_truncates(self):
        results = [_r(f"https://site{i}.example") for i in range(15)]
        assert len(rank_search_results(results, limit=10)) == 10

    def test_default_limit_from_settings(self):
        results = [_r(f"https://site{i}.example") for i in range(15)]
        assert len(rank_search_results(results)) <= 10

    def test_duplicates_dropped(self):
        results = [_r("https://www.olx.in/x", "first"), _r("https://www.olx.in/x", "second")]
        ranked = rank_search_results(results, limit=10)
        assert [r.title for r in ranked] == ["first"]

    def test_custom_domains(self):
        results = [_r("https://www.99acres.com/c"), _r("https://local-broker.in/z")]
        ranked = rank_search_results(results, limit=10, domains=["local-broker.in"])
        assert ranked[0].url == "https://local-broker.in/z"


# =============================================================================
# Clients
# =============================================================================

class TestSearchClients:

    def test_null_client(self):
        assert asyncio.run(NullSearchClient().search("Pattom")) == []

    def test_groq_has_no_search(self):
        assert isinstance(get_search_client("groq"), NullSearchClient)

    def test_gemini_needs_key(self, settings):
        with patch("tvmrealty.listings.search.get_settings", return_value=settings):
            with pytest.raises(ConfigurationError):
                GeminiSearchClient()

    def _client_with_response(self, settings, response=None, error=None):
        keyed = settings.model_copy(update={"gemini_api_key": "test-key"})
        with patch("tvmrealty.listings.search.get_settings", return_value=keyed), \
                patch("google.genai.Client") as client_cls:
            generate = AsyncMock(return_value=response, side_effect=error)
            client_cls.return_value = MagicMock()
            client_cls.return_value.aio.models.generate_content = generate
            client = GeminiSearchClient()
        return client, generate

    def test_gemini_grounding_chunks(self, settings):
        chunks = [
            SimpleNamespace(web=SimpleNamespace(uri="https://www.99acres.com/x", title="Plots in Pattom")),
            SimpleNamespace(web=None),
            SimpleNamespace(web=SimpleNamespace(uri="https://magicbricks.com/y", title=None)),
        ]
        response = SimpleNamespace(
            candidates=[SimpleNamespace(grounding_metadata=SimpleNamespace(grounding_chunks=chunks))]
        )
        client, generate = self._client_with_response(settings, response=response)

        results = asyncio.run(client.search("Pattom"))

        assert results == [SearchResult(title="Plots in Pattom", url="https://www.99acres.com/x")]
        assert "Pattom" in generate.call_args.kwargs["contents"]

    def test_gemini_failure_returns_empty(self, settings):
        client, _ = self._client_with_response(settings, error=RuntimeError("quota"))
        assert asyncio.run(client.search("Pattom")) == []
