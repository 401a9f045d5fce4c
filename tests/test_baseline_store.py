"""
Unit tests for the baseline store and the persistence adapters.
"""

from unittest.mock import MagicMock

import pytest

from conftest import baseline_row
from tvmrealty.database import (
    BASELINES_TABLE,
    HISTORY_TABLE,
    BaselineStore,
    InMemoryPersistence,
    SupabasePersistence,
)
from tvmrealty.errors import PersistenceError
from tvmrealty.models import RateObservation


# =============================================================================
# BaselineStore
# =============================================================================

class TestBaselineStore:

    def test_never_observed(self, baselines):
        assert baselines.get_baseline("Pattom") is None

    def test_reads_row(self, settings):
        port = InMemoryPersistence({BASELINES_TABLE: [baseline_row("Pattom", 20.0, sample_size=9)]})
        baseline = BaselineStore(port=port, settings=settings).get_baseline("Pattom")
        assert baseline.median_rate == 20.0
        assert baseline.sample_size == 9
        assert baseline.variance_pct == pytest.approx(5.0)

    def test_rate_band(self, baselines):
        low, high = baselines.rate_band()
        assert low == pytest.approx(6.0 / 4.0)
        assert high == pytest.approx(28.0 * 4.0)

    @pytest.mark.parametrize("rate", [0.5, 500.0, 250000.0])
    def test_implausible_baseline_ignored(self, settings, rate):
        port = InMemoryPersistence({BASELINES_TABLE: [baseline_row("Pattom", rate)]})
        assert BaselineStore(port=port, settings=settings).get_baseline("Pattom") is None

    def test_malformed_row_ignored(self, settings):
        port = InMemoryPersistence({BASELINES_TABLE: [{"locality": "Pattom", "median_rate": "n/a"}]})
        assert BaselineStore(port=port, settings=settings).get_baseline("Pattom") is None

    def test_read_failure_propagates(self, settings):
        port = MagicMock()
        port.get.side_effect = PersistenceError("down")
        with pytest.raises(PersistenceError):
            BaselineStore(port=port, settings=settings).get_baseline("Pattom")

    def test_record_observation(self, baselines, memory):
        assert baselines.record_observation(RateObservation(locality="Pattom", rate=21.5))
        rows = memory.rows(HISTORY_TABLE)
        assert len(rows) == 1
        assert rows[0]["locality"] == "Pattom"
        assert rows[0]["rate"] == 21.5
        assert rows[0]["source"] == "oracle"
        assert isinstance(rows[0]["observed_at"], str)

    def test_history_is_append_only(self, baselines, memory):
        baselines.record_observation(RateObservation(locality="Pattom", rate=21.5))
        baselines.record_observation(RateObservation(locality="Pattom", rate=22.0, source="baseline_guard"))
        assert [r["rate"] for r in memory.rows(HISTORY_TABLE)] == [21.5, 22.0]

    def test_implausible_observation_not_written(self, baselines, memory):
        assert not baselines.record_observation(RateObservation(locality="Pattom", rate=950.0))
        assert memory.rows(HISTORY_TABLE) == []


# =============================================================================
# Persistence adapters
# =============================================================================

class TestInMemoryPersistence:

    def test_put_overwrites(self):
        port = InMemoryPersistence()
        port.put("search_cache", "Pattom", {"rate": 1.0})
        port.put("search_cache", "Pattom", {"rate": 2.0})
        assert port.get("search_cache", "Pattom") == {"rate": 2.0, "locality": "Pattom"}

    def test_returns_copies(self):
        port = InMemoryPersistence()
        port.put("search_cache", "Pattom", {"rate": 1.0})
        port.get("search_cache", "Pattom")["rate"] = 99.0
        assert port.get("search_cache", "Pattom")["rate"] == 1.0


class TestSupabasePersistence:

    def _client(self, data=None, error=None):
        client = MagicMock()
        query = client.table.return_value
        query.select.return_value.eq.return_value.limit.return_value.execute.return_value.data = data or []
        if error is not None:
            query.select.return_value.eq.return_value.limit.return_value.execute.side_effect = error
            query.upsert.return_value.execute.side_effect = error
            query.insert.return_value.execute.side_effect = error
        return client

    def test_get(self):
        client = self._client(data=[{"locality": "Pattom", "rate": 20.0}])
        port = SupabasePersistence(client=client)
        assert port.get("search_cache", "Pattom")["rate"] == 20.0
        client.table.assert_called_with("search_cache")

    def test_get_missing(self):
        port = SupabasePersistence(client=self._client())
        assert port.get("search_cache", "Pattom") is None

    def test_put_upserts_on_locality(self):
        client = self._client()
        SupabasePersistence(client=client).put("search_cache", "Pattom", {"rate": 20.0})
        client.table.return_value.upsert.assert_called_once_with(
            {"rate": 20.0, "locality": "Pattom"}, on_conflict="locality"
        )

    @pytest.mark.parametrize("call", [
        lambda p: p.get("search_cache", "Pattom"),
        lambda p: p.put("search_cache", "Pattom", {"rate": 1.0}),
        lambda p: p.append("locality_search_history", {"locality": "Pattom"}),
    ])
    def test_errors_wrapped(self, call):
        port = SupabasePersistence(client=self._client(error=RuntimeError("timeout")))
        with pytest.raises(PersistenceError):
            call(port)
