"""Shared fixtures for the tvmrealty test suite.

Fakes for the LLM provider, the search collaborator and the persistence
port, so no test touches Supabase, Gemini or Groq.
"""

import json
from datetime import datetime, timezone
from typing import Optional

import pytest

from tvmrealty.analysis.llm_providers import BaseLLMProvider, LLMResponse
from tvmrealty.analysis.rate_oracle import RateOracle
from tvmrealty.config import Settings
from tvmrealty.database import (
    BASELINES_TABLE,
    CACHE_TABLE,
    BaselineStore,
    InMemoryPersistence,
    PersistencePort,
    RateCache,
)
from tvmrealty.errors import PersistenceError
from tvmrealty.listings.search import BaseSearchClient
from tvmrealty.models import SearchResult
from tvmrealty.valuation import ValuationEngine


def oracle_payload(rate: float = 12.0, **extra) -> str:
    """A well-formed oracle response with the given land rate."""
    data = {
        "landRatePerCent": rate,
        "explanation": "Median of recent listings.",
        "recommendation": "Good time to buy.",
        "investment": {
            "rentalYield": "3.2%",
            "appreciationForecast": "8% Annually",
            "demandTrend": "High",
            "marketSentiment": "Steady IT demand",
        },
    }
    data.update(extra)
    return json.dumps(data)


class FakeProvider(BaseLLMProvider):
    """Returns canned text, or raises, and counts calls."""

    provider_name = "fake"

    def __init__(self, text: str = "", error: Optional[Exception] = None):
        self.text = text
        self.error = error
        self.model = "fake-model"
        self.calls = 0
        self.prompts: list[str] = []

    async def generate(
        self,
        system_prompt: str,
        user_prompt: str,
        temperature: float = 0.1,
        max_tokens: int = 4096,
        json_output: bool = False,
    ) -> LLMResponse:
        self.calls += 1
        self.prompts.append(user_prompt)
        if self.error is not None:
            raise self.error
        return LLMResponse(text=self.text, model=self.model, provider=self.provider_name)


class FakeSearch(BaseSearchClient):
    def __init__(self, results: Optional[list[SearchResult]] = None):
        self.results = results or []
        self.calls = 0

    async def search(self, locality: str) -> list[SearchResult]:
        self.calls += 1
        return list(self.results)


class FailingPersistence(PersistencePort):
    """Reads succeed against an in-memory store; writes always fail."""

    def __init__(self, inner: Optional[InMemoryPersistence] = None, fail_reads: bool = False):
        self.inner = inner or InMemoryPersistence()
        self.fail_reads = fail_reads
        self.write_attempts = 0

    def get(self, table: str, key: str) -> Optional[dict]:
        if self.fail_reads:
            raise PersistenceError(f"Read from {table} failed: connection reset")
        return self.inner.get(table, key)

    def put(self, table: str, key: str, row: dict) -> None:
        self.write_attempts += 1
        raise PersistenceError(f"Upsert into {table} failed: connection reset")

    def append(self, table: str, row: dict) -> None:
        self.write_attempts += 1
        raise PersistenceError(f"Insert into {table} failed: connection reset")


def baseline_row(
    locality: str,
    median_rate: float,
    sample_size: int = 8,
    std_deviation: float = 1.0,
    confidence_score: Optional[float] = None,
) -> dict:
    return {
        "locality": locality,
        "median_rate": median_rate,
        "sample_size": sample_size,
        "std_deviation": std_deviation,
        "confidence_score": confidence_score,
        "last_updated": datetime(2026, 1, 10, tzinfo=timezone.utc).isoformat(),
    }


def cache_row(locality: str, rate: float, cached_at: datetime) -> dict:
    return {"locality": locality, "rate": rate, "cached_at": cached_at.isoformat()}


@pytest.fixture()
def settings() -> Settings:
    """Settings independent of the environment, with a single write attempt."""
    return Settings(
        _env_file=None,
        llm_provider="gemini",
        gemini_api_key=None,
        groq_api_key=None,
        persist_attempts=1,
    )


@pytest.fixture()
def memory() -> InMemoryPersistence:
    return InMemoryPersistence()


@pytest.fixture()
def baselines(memory, settings) -> BaselineStore:
    return BaselineStore(port=memory, settings=settings)


@pytest.fixture()
def rate_cache(memory, baselines, settings) -> RateCache:
    return RateCache(port=memory, baselines=baselines, settings=settings)


@pytest.fixture()
def make_engine(settings):
    """Build an engine over fakes. Returns (engine, provider, search)."""

    def _make(
        port: Optional[PersistencePort] = None,
        text: str = "",
        error: Optional[Exception] = None,
        results: Optional[list[SearchResult]] = None,
    ):
        port = port if port is not None else InMemoryPersistence()
        provider = FakeProvider(text=text, error=error)
        search = FakeSearch(results)
        engine = ValuationEngine(
            oracle=RateOracle(provider=provider, settings=settings),
            search_client=search,
            port=port,
            settings=settings,
        )
        return engine, provider, search

    return _make

