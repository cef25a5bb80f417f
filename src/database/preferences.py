"""
Knucklebones - Preference Manager

Integer key-value storage in the `preferences` table. Satisfies the
engine's KeyValueStore protocol, so it can back the UnlockLedger.
"""

import logging

from supabase import Client

from src.config.settings import Settings, get_settings
from src.database.client import get_supabase_client
from src.database.models import Preference
from src.engine.unlocks import InMemoryStore, KeyValueStore, UnlockLedger

logger = logging.getLogger(__name__)


class PreferenceManager:
    """Reads and writes integer preferences in Supabase."""

    def __init__(self, client: Client, table: str = "preferences") -> None:
        self.client = client
        self.table = client.table(table)

    def get(self, key: str) -> Preference | None:
        """Fetch a preference row by key."""
        data = (
            self.table
            .select("*")
            .eq("key", key)
            .execute()
        )
        if data.data:
            return Preference.model_validate(data.data[0])
        return None

    def get_int(self, key: str, default: int = 0) -> int:
        """Value for key, or default when the row does not exist."""
        pref = self.get(key)
        return default if pref is None else pref.value

    def put_int(self, key: str, value: int) -> None:
        """Insert or overwrite the value for key."""
        (
            self.table
            .upsert({"key": key, "value": value})
            .execute()
        )
        logger.debug("Stored preference %s=%d", key, value)

    def delete(self, key: str) -> None:
        """Remove a preference row."""
        self.table.delete().eq("key", key).execute()


def build_unlock_ledger(settings: Settings | None = None) -> UnlockLedger:
    """
    UnlockLedger backed by Supabase when configured, else in memory.

    Args:
        settings: Application settings (cached settings if None)
    """
    settings = settings or get_settings()
    store: KeyValueStore
    if settings.has_supabase:
        store = PreferenceManager(get_supabase_client(), settings.preferences_table)
    else:
        logger.info("Supabase not configured; unlock progress kept in memory")
        store = InMemoryStore()
    return UnlockLedger(store, key=settings.unlock_key)
