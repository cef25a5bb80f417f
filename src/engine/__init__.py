"""
Knucklebones Game Engine.

Pure Python game logic with zero transport/database dependencies.
Handles boards, adaptive dice, turn sequencing, the AI opponent and the
difficulty unlock ledger.
"""

from src.engine.base import Difficulty, MatchConfig, Player, Role
from src.engine.board import Board
from src.engine.dice import DiceDistribution, DiceWeights
from src.engine.knucklebones import GameState, KnucklebonesEngine
from src.engine.opponent import choose_column
from src.engine.session import GameSession, MoveEvent
from src.engine.unlocks import InMemoryStore, KeyValueStore, UnlockLedger

__all__ = [
    # Data Classes
    "Board",
    "DiceWeights",
    "GameState",
    "MatchConfig",
    "MoveEvent",
    # Enums
    "Difficulty",
    "Player",
    "Role",
    # Engines
    "DiceDistribution",
    "KnucklebonesEngine",
    "GameSession",
    "choose_column",
    # Unlocks
    "InMemoryStore",
    "KeyValueStore",
    "UnlockLedger",
]
