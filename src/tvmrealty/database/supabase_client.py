"""
Supabase client.

Singleton connection to the hosted database.
"""

from functools import lru_cache

import structlog
from supabase import create_client, Client

from tvmrealty.config import get_settings
from tvmrealty.errors import ConfigurationError

logger = structlog.get_logger()


class SupabaseClient:
    """Thin wrapper over the Supabase client."""

    def __init__(self, client: Client):
        self._client = client

    @property
    def client(self) -> Client:
        """Direct access to the Supabase client."""
        return self._client

    def table(self, name: str):
        """Access a specific table."""
        return self._client.table(name)


@lru_cache
def get_supabase_client() -> SupabaseClient:
    """
    Get the Supabase client (cached singleton).

    Returns:
        Configured SupabaseClient

    Raises:
        ConfigurationError: If the credentials are not configured
    """
    settings = get_settings()

    if not settings.supabase_url or not settings.supabase_key:
        raise ConfigurationError(
            "SUPABASE_URL and SUPABASE_KEY are required. "
            "Set the environment variables."
        )

    # Service key bypasses row level security for the upserts
    key = settings.supabase_service_key or settings.supabase_key

    client = create_client(settings.supabase_url, key)
    logger.info("Supabase client initialized", url=settings.supabase_url)

    return SupabaseClient(client)
