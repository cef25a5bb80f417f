"""
Knucklebones Database Layer.

Supabase integration for persisted player preferences (the unlock ledger).
"""

from src.database.client import get_supabase_client
from src.database.models import Preference
from src.database.preferences import PreferenceManager, build_unlock_ledger

__all__ = [
    "get_supabase_client",
    "Preference",
    "PreferenceManager",
    "build_unlock_ledger",
]
