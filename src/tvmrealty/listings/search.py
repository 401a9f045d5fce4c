"""
Search collaborator.

Finds web listings for a locality and ranks them so that known property
portals come first. Search is best-effort: failures return no results.
"""

from abc import ABC, abstractmethod
from typing import Optional
from urllib.parse import urlparse

import structlog

from tvmrealty.config import CITY, PROPERTY_LISTING_DOMAINS, get_settings
from tvmrealty.errors import ConfigurationError
from tvmrealty.models import SearchResult

logger = structlog.get_logger()


def _domain_rank(url: str, domains: list[str]) -> int:
    host = (urlparse(url).netloc or url or "").lower()
    for rank, domain in enumerate(domains):
        if domain in host:
            return rank
    return len(domains)


def rank_search_results(
    results: list[SearchResult],
    limit: Optional[int] = None,
    domains: Optional[list[str]] = None,
) -> list[SearchResult]:
    """
    Order results by listing portal priority, then truncate.

    The sort is stable: results from the same portal (or from no portal)
    keep the order the search engine gave them. Duplicate URLs are dropped.
    """
    domains = domains or PROPERTY_LISTING_DOMAINS
    limit = limit or get_settings().search_max_results

    seen = set()
    unique = []
    for result in results:
        if result.url in seen:
            continue
        seen.add(result.url)
        unique.append(result)

    ranked = sorted(unique, key=lambda r: _domain_rank(r.url, domains))
    return ranked[:limit]


class BaseSearchClient(ABC):
    """Base class for search collaborators."""

    @abstractmethod
    async def search(self, locality: str) -> list[SearchResult]:
        """
        Search listings for a locality.

        Returns:
            Unranked {title, url} pairs in search engine order
        """
        pass


class NullSearchClient(BaseSearchClient):
    """Search collaborator for providers without web search."""

    async def search(self, locality: str) -> list[SearchResult]:
        return []


class GeminiSearchClient(BaseSearchClient):
    """Grounded search through Gemini's Google Search tool."""

    QUERY_TEMPLATE = (
        "Find current property listings and land prices per cent for plots "
        "and villas in {locality}, {city}. List the listing titles with their "
        "asking price and plot size."
    )

    def __init__(self, api_key: Optional[str] = None, model: Optional[str] = None):
        from google import genai

        settings = get_settings()
        self.api_key = api_key or settings.gemini_api_key
        self.model = model or settings.gemini_model

        if not self.api_key:
            raise ConfigurationError("GEMINI_API_KEY not configured")

        self.client = genai.Client(api_key=self.api_key)
        logger.info("GeminiSearchClient initialized", model=self.model)

    async def search(self, locality: str) -> list[SearchResult]:
        from google.genai import types

        try:
            response = await self.client.aio.models.generate_content(
                model=self.model,
                contents=self.QUERY_TEMPLATE.format(locality=locality, city=CITY),
                config=types.GenerateContentConfig(
                    tools=[types.Tool(google_search=types.GoogleSearch())],
                    temperature=0.0,
                ),
            )
        except Exception as e:
            logger.warning("Search failed", locality=locality, error=str(e))
            return []

        results = []
        candidates = response.candidates or []
        metadata = candidates[0].grounding_metadata if candidates else None
        for chunk in (metadata.grounding_chunks or []) if metadata else []:
            web = chunk.web
            if web and web.uri and web.title:
                results.append(SearchResult(title=web.title, url=web.uri))

        logger.info("Search completed", locality=locality, results=len(results))
        return results


def get_search_client(provider: Optional[str] = None) -> BaseSearchClient:
    """
    Search collaborator for the configured LLM provider.

    Only Gemini has a grounded web search; other providers search nothing.
    """
    provider = (provider or get_settings().llm_provider).lower()
    if provider == "gemini":
        return GeminiSearchClient()
    return NullSearchClient()
