"""
Database module.

Persistence port (Supabase or in-memory) and the repositories
for baselines and the rate cache.
"""

from tvmrealty.database.supabase_client import get_supabase_client, SupabaseClient
from tvmrealty.database.ports import (
    BASELINES_TABLE,
    CACHE_TABLE,
    HISTORY_TABLE,
    InMemoryPersistence,
    PersistencePort,
    SupabasePersistence,
)
from tvmrealty.database.repositories import BaselineStore, RateCache

__all__ = [
    "get_supabase_client",
    "SupabaseClient",
    "BASELINES_TABLE",
    "CACHE_TABLE",
    "HISTORY_TABLE",
    "InMemoryPersistence",
    "PersistencePort",
    "SupabasePersistence",
    "BaselineStore",
    "RateCache",
]
