"""
Persistence port.

The stores only need three key-value operations against a table keyed
by locality: read one row, upsert one row, append one row. No
multi-row transactions are assumed.
"""

import copy
import threading
from abc import ABC, abstractmethod
from collections import defaultdict
from typing import Optional

import structlog

from tvmrealty.database.supabase_client import SupabaseClient, get_supabase_client
from tvmrealty.errors import PersistenceError

logger = structlog.get_logger()

BASELINES_TABLE = "locality_baselines"
CACHE_TABLE = "search_cache"
HISTORY_TABLE = "locality_search_history"

KEY_COLUMN = "locality"


class PersistencePort(ABC):
    """Key-value access to the persisted tables."""

    @abstractmethod
    def get(self, table: str, key: str) -> Optional[dict]:
        """Row of table whose locality is key, or None."""
        pass

    @abstractmethod
    def put(self, table: str, key: str, row: dict) -> None:
        """Insert or overwrite the row of table whose locality is key."""
        pass

    @abstractmethod
    def append(self, table: str, row: dict) -> None:
        """Append a row to an append-only table."""
        pass


class SupabasePersistence(PersistencePort):
    """Persistence port over Supabase tables."""

    def __init__(self, client: Optional[SupabaseClient] = None):
        self._client = client or get_supabase_client()

    @property
    def client(self) -> SupabaseClient:
        return self._client

    def get(self, table: str, key: str) -> Optional[dict]:
        try:
            response = (
                self.client.table(table)
                .select("*")
                .eq(KEY_COLUMN, key)
                .limit(1)
                .execute()
            )
        except Exception as e:
            raise PersistenceError(f"Read from {table} failed: {e}") from e
        return response.data[0] if response.data else None

    def put(self, table: str, key: str, row: dict) -> None:
        data = {**row, KEY_COLUMN: key}
        try:
            self.client.table(table).upsert(data, on_conflict=KEY_COLUMN).execute()
        except Exception as e:
            raise PersistenceError(f"Upsert into {table} failed: {e}") from e
        logger.debug("Row upserted", table=table, locality=key)

    def append(self, table: str, row: dict) -> None:
        try:
            self.client.table(table).insert(row).execute()
        except Exception as e:
            raise PersistenceError(f"Insert into {table} failed: {e}") from e
        logger.debug("Row appended", table=table, locality=row.get(KEY_COLUMN))


class InMemoryPersistence(PersistencePort):
    """Process-local persistence for tests and offline runs."""

    def __init__(self, seed: Optional[dict[str, list[dict]]] = None):
        self._lock = threading.Lock()
        self._keyed: dict[str, dict[str, dict]] = defaultdict(dict)
        self._appended: dict[str, list[dict]] = defaultdict(list)
        for table, rows in (seed or {}).items():
            for row in rows:
                self._keyed[table][row[KEY_COLUMN]] = dict(row)

    def get(self, table: str, key: str) -> Optional[dict]:
        with self._lock:
            row = self._keyed[table].get(key)
            return copy.deepcopy(row) if row is not None else None

    def put(self, table: str, key: str, row: dict) -> None:
        with self._lock:
            self._keyed[table][key] = {**copy.deepcopy(row), KEY_COLUMN: key}

    def append(self, table: str, row: dict) -> None:
        with self._lock:
            self._appended[table].append(copy.deepcopy(row))

    def rows(self, table: str) -> list[dict]:
        """All appended rows of table, oldest first."""
        with self._lock:
            return copy.deepcopy(self._appended[table])
