"""
Knucklebones - Game Engine Base Classes

This module defines the enums and match configuration shared by the engine.
All classes are immutable (frozen dataclasses / enums) so a state snapshot
can be handed to the UI or another thread without copying.
"""

from dataclasses import dataclass
from enum import Enum


class Player(Enum):
    """The two seats at the table."""
    PLAYER1 = 1
    PLAYER2 = 2

    @property
    def opponent(self) -> "Player":
        """The other seat."""
        return Player.PLAYER2 if self is Player.PLAYER1 else Player.PLAYER1


class Difficulty(Enum):
    """
    AI difficulty tiers.

    Each member carries (order, reduction_factor). The order doubles as the
    unlock tier index; the reduction factor drives the adaptive dice decay
    (0 disables it).
    """
    EASY = (0, 0)
    MEDIUM = (1, 2)
    HARD = (2, 4)
    EXPERT = (3, 6)

    def __init__(self, order: int, reduction_factor: int) -> None:
        self.order = order
        self.reduction_factor = reduction_factor

    @classmethod
    def from_order(cls, order: int) -> "Difficulty":
        """Look up a tier by its order, falling back to EASY."""
        for difficulty in cls:
            if difficulty.order == order:
                return difficulty
        return cls.EASY

    @classmethod
    def top(cls) -> "Difficulty":
        """The highest tier."""
        return max(cls, key=lambda d: d.order)


class Role(Enum):
    """Which seat(s) this device controls."""
    LOCAL = "local"   # Hot-seat or vs-AI, both seats on one device
    HOST = "host"     # Networked, plays Player 1
    GUEST = "guest"   # Networked, plays Player 2

    @property
    def local_player(self) -> Player | None:
        """Seat driven by local input, or None when both are."""
        if self is Role.HOST:
            return Player.PLAYER1
        if self is Role.GUEST:
            return Player.PLAYER2
        return None

    def controls(self, player: Player) -> bool:
        """Whether local input may act for ``player``."""
        seat = self.local_player
        return seat is None or seat is player


@dataclass(frozen=True)
class MatchConfig:
    """
    Configuration for a match. Preserved across resets.

    Attributes:
        vs_ai: Player 2 is driven by the opponent strategy
        networked: Moves are mirrored to a peer device
        role: Seat ownership on this device
        difficulty: AI tier, also selects the dice decay factor
    """
    vs_ai: bool = False
    networked: bool = False
    role: Role = Role.LOCAL
    difficulty: Difficulty = Difficulty.EASY

    def __post_init__(self) -> None:
        """Validate configuration."""
        if self.vs_ai and self.networked:
            raise ValueError("A networked match cannot be played against the AI.")
        if self.networked and self.role is Role.LOCAL:
            raise ValueError("A networked match requires the HOST or GUEST role.")
        if not self.networked and self.role is not Role.LOCAL:
            raise ValueError(f"Role {self.role.name} is only valid for networked matches.")
