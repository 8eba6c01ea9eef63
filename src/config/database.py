"""
Supabase client for the wardrobe / saved-outfit store.

Scoring and generation never touch the backend; only
``services.outfit_store`` asks for a client, and only when a caller
wants to load or persist data.
"""

from functools import lru_cache
from typing import Optional

from supabase import Client, create_client

from config.settings import Settings, get_settings


class SupabaseClientError(Exception):
    """Supabase is not configured or the client could not be built."""
    pass


def create_supabase_client(settings: Settings) -> Client:
    """Build a fresh client from explicit settings (no caching)."""
    if not settings.supabase_configured:
        raise SupabaseClientError("SUPABASE_URL and SUPABASE_SERVICE_KEY must both be set")
    try:
        return create_client(settings.supabase_url, settings.supabase_service_key)
    except Exception as e:
        raise SupabaseClientError(f"Could not connect to Supabase at {settings.supabase_url}: {e}") from e


@lru_cache(maxsize=1)
def get_supabase_client() -> Client:
    """
    Process-wide client built from ``get_settings()``.

    Raises:
        SupabaseClientError: when credentials are missing or rejected
    """
    return create_supabase_client(get_settings())


def get_supabase_client_optional() -> Optional[Client]:
    """Like ``get_supabase_client`` but ``None`` instead of raising."""
    try:
        return get_supabase_client()
    except SupabaseClientError:
        return None
