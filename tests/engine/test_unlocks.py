"""
Tests for the difficulty unlock ledger.
"""

from src.engine.base import Difficulty
from src.engine.unlocks import DEFAULT_UNLOCK_KEY, InMemoryStore, UnlockLedger


class TestInMemoryStore:
    """Tests for InMemoryStore."""

    def test_default(self):
        assert InMemoryStore().get_int("missing", 7) == 7

    def test_put_get(self):
        store = InMemoryStore()
        store.put_int("k", 2)
        assert store.get_int("k") == 2


class TestUnlockLedger:
    """Tests for the unlock ratchet."""

    def test_starts_at_easy(self, ledger):
        assert ledger.max_unlocked() is Difficulty.EASY
        assert ledger.unlocked() == [Difficulty.EASY]

    def test_win_at_max_tier_advances(self, ledger, store):
        assert ledger.record_win(Difficulty.EASY)
        assert store.get_int(DEFAULT_UNLOCK_KEY) == 1
        assert ledger.max_unlocked() is Difficulty.MEDIUM

    def test_rewin_lower_tier_does_not_advance(self, ledger):
        ledger.record_win(Difficulty.EASY)
        assert not ledger.record_win(Difficulty.EASY)
        assert ledger.max_unlocked() is Difficulty.MEDIUM

    def test_cannot_skip_tiers(self, ledger):
        assert not ledger.record_win(Difficulty.HARD)
        assert ledger.max_unlocked() is Difficulty.EASY

    def test_climbs_one_tier_per_win(self, ledger, all_difficulties):
        for difficulty in all_difficulties[:-1]:
            assert ledger.record_win(difficulty)
        assert ledger.max_unlocked() is Difficulty.EXPERT
        assert ledger.unlocked() == all_difficulties

    def test_top_tier_does_not_overflow(self):
        store = InMemoryStore({DEFAULT_UNLOCK_KEY: 3})
        ledger = UnlockLedger(store)
        assert not ledger.record_win(Difficulty.EXPERT)
        assert store.get_int(DEFAULT_UNLOCK_KEY) == 3

    def test_is_unlocked(self):
        ledger = UnlockLedger(InMemoryStore({DEFAULT_UNLOCK_KEY: 2}))
        assert ledger.is_unlocked(Difficulty.HARD)
        assert not ledger.is_unlocked(Difficulty.EXPERT)

    def test_out_of_range_stored_value_clamped(self):
        ledger = UnlockLedger(InMemoryStore({DEFAULT_UNLOCK_KEY: 42}))
        assert ledger.max_unlocked() is Difficulty.EXPERT

    def test_custom_key(self):
        store = InMemoryStore()
        ledger = UnlockLedger(store, key="tier")
        ledger.record_win(Difficulty.EASY)
        assert store.get_int("tier") == 1
