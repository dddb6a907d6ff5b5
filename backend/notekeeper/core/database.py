"""
Database connections: Supabase client setup.
"""

from functools import lru_cache
from supabase import create_client, Client

from notekeeper.config import get_settings


@lru_cache
def get_supabase_client() -> Client:
    """Get the Supabase client (singleton).

    Holds the device's auth session; identity and profile calls share it.
    """
    settings = get_settings()
    return create_client(settings.SUPABASE_URL, settings.SUPABASE_KEY)
