"""
Knucklebones - Difficulty Unlock Ledger

A monotonic ratchet over the Difficulty tiers, persisted as a single integer
in an injected key-value store.
"""

import logging
from typing import Protocol

from src.engine.base import Difficulty

logger = logging.getLogger(__name__)

DEFAULT_UNLOCK_KEY = "max_unlocked_difficulty"


class KeyValueStore(Protocol):
    """Minimal integer store backing the ledger."""

    def get_int(self, key: str, default: int = 0) -> int: ...

    def put_int(self, key: str, value: int) -> None: ...


class InMemoryStore:
    """Dictionary-backed store for tests and offline play."""

    def __init__(self, initial: dict[str, int] | None = None) -> None:
        self._values: dict[str, int] = dict(initial or {})

    def get_int(self, key: str, default: int = 0) -> int:
        return self._values.get(key, default)

    def put_int(self, key: str, value: int) -> None:
        self._values[key] = value


class UnlockLedger:
    """Tracks the highest AI difficulty the player may select."""

    def __init__(self, store: KeyValueStore, key: str = DEFAULT_UNLOCK_KEY) -> None:
        self._store = store
        self._key = key

    def _read(self) -> int:
        top = Difficulty.top().order
        return min(max(self._store.get_int(self._key, 0), 0), top)

    def max_unlocked(self) -> Difficulty:
        """Highest unlocked tier."""
        return Difficulty.from_order(self._read())

    def is_unlocked(self, difficulty: Difficulty) -> bool:
        return difficulty.order <= self._read()

    def unlocked(self) -> list[Difficulty]:
        """Selectable tiers, easiest first."""
        current = self._read()
        return sorted((d for d in Difficulty if d.order <= current), key=lambda d: d.order)

    def record_win(self, difficulty: Difficulty) -> bool:
        """
        Advance one tier after beating the AI at the highest unlocked tier.

        Wins at an already-passed tier never advance the ledger.

        Returns:
            True if a new tier was unlocked
        """
        current = self._read()
        if difficulty.order != current or current >= Difficulty.top().order:
            return False
        self._store.put_int(self._key, current + 1)
        logger.info("Unlocked difficulty %s", Difficulty.from_order(current + 1).name)
        return True
