"""
Knucklebones - Test Configuration and Fixtures

Common fixtures and test data for all test modules.
"""

import random

import pytest

from src.engine.base import Difficulty, MatchConfig, Role
from src.engine.board import Board
from src.engine.knucklebones import GameState
from src.engine.unlocks import InMemoryStore, UnlockLedger


class ScriptedRandom(random.Random):
    """Random source that replays scripted draws, then falls back to a seed."""

    def __init__(self, draws=(), choices=()):
        super().__init__(1234)
        self._draws = list(draws)
        self._choices = list(choices)

    def randrange(self, *args, **kwargs):
        if self._draws:
            return self._draws.pop(0)
        return super().randrange(*args, **kwargs)

    def choice(self, seq):
        if self._choices:
            return self._choices.pop(0)
        return super().choice(seq)


@pytest.fixture
def rng() -> random.Random:
    """Seeded random source for reproducible rolls."""
    return random.Random(42)


@pytest.fixture
def scripted_rng():
    """Factory for ScriptedRandom instances."""
    return ScriptedRandom


# =============================================================================
# BOARD FIXTURES
# =============================================================================

@pytest.fixture
def full_board() -> Board:
    """A completely filled board."""
    return Board(columns=((1, 2, 3), (4, 5, 6), (1, 2, 3)))


@pytest.fixture
def nearly_full_board() -> Board:
    """Eight dice; column 2 has one free slot."""
    return Board(columns=((1, 2, 3), (4, 5, 6), (1, 2)))


# =============================================================================
# GAME STATE FIXTURES
# =============================================================================

@pytest.fixture
def make_state():
    """Factory for GameState with a chosen pending roll and config."""

    def _make(
        roll: int = 4,
        player1_board: Board | None = None,
        player2_board: Board | None = None,
        **config_kwargs,
    ) -> GameState:
        return GameState(
            player1_board=player1_board or Board.empty(),
            player2_board=player2_board or Board.empty(),
            current_roll=roll,
            config=MatchConfig(**config_kwargs),
        )

    return _make


@pytest.fixture
def host_config() -> MatchConfig:
    return MatchConfig(networked=True, role=Role.HOST)


@pytest.fixture
def guest_config() -> MatchConfig:
    return MatchConfig(networked=True, role=Role.GUEST)


# =============================================================================
# LEDGER FIXTURES
# =============================================================================

@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def ledger(store) -> UnlockLedger:
    return UnlockLedger(store)


@pytest.fixture
def all_difficulties() -> list[Difficulty]:
    return [Difficulty.EASY, Difficulty.MEDIUM, Difficulty.HARD, Difficulty.EXPERT]
