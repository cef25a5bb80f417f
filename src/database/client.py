"""
Knucklebones - Supabase Client

Cached singleton factory for the Supabase client.
"""

from functools import lru_cache

from supabase import Client, create_client

from src.config.settings import get_settings


@lru_cache(maxsize=1)
def get_supabase_client() -> Client:
    """
    Create and cache a Supabase client instance.

    Raises:
        RuntimeError: If SUPABASE_URL or SUPABASE_ANON_KEY is not configured
    """
    settings = get_settings()
    if not settings.has_supabase:
        raise RuntimeError("SUPABASE_URL and SUPABASE_ANON_KEY must be set for online features.")
    return create_client(settings.supabase_url, settings.supabase_anon_key)
