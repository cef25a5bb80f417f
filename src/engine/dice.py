"""
Knucklebones - Adaptive Dice

Weighted single-D6 generator. Each face carries an integer weight; on
non-Easy difficulties the weight of a face shrinks every time that face is
placed, so repeat values grow rarer over the course of a game.
"""

import random
from dataclasses import dataclass
from typing import ClassVar, Iterator, Mapping

from src.engine.validators import DIE_FACES, validate_die_value, validate_weights

UNIFORM_WEIGHT = 100


@dataclass(frozen=True)
class DiceWeights:
    """
    Immutable face → weight mapping.

    Attributes:
        weights: Weight per face, index 0 holding face 1. Every weight ≥ 1.
    """
    weights: tuple[int, int, int, int, int, int]

    def __post_init__(self) -> None:
        """Validate weights."""
        if len(self.weights) != DIE_FACES:
            raise ValueError(f"Weights must cover faces 1-{DIE_FACES} exactly, got {len(self.weights)} entries.")
        validate_weights(dict(enumerate(self.weights, start=1)))

    @classmethod
    def uniform(cls) -> "DiceWeights":
        """Fresh weights for a new game."""
        return cls(weights=(UNIFORM_WEIGHT,) * DIE_FACES)

    @classmethod
    def from_mapping(cls, mapping: Mapping[int, int]) -> "DiceWeights":
        """Build from a {face: weight} mapping."""
        validated = validate_weights(mapping)
        return cls(weights=tuple(validated[face] for face in range(1, DIE_FACES + 1)))

    def __getitem__(self, face: int) -> int:
        validate_die_value(face)
        return self.weights[face - 1]

    def items(self) -> Iterator[tuple[int, int]]:
        """(face, weight) pairs in ascending face order."""
        return iter(enumerate(self.weights, start=1))

    @property
    def total(self) -> int:
        return sum(self.weights)

    def as_dict(self) -> dict[int, int]:
        return dict(self.items())

    def with_weight(self, face: int, weight: int) -> "DiceWeights":
        """Copy with one face's weight replaced."""
        validate_die_value(face)
        updated = list(self.weights)
        updated[face - 1] = weight
        return DiceWeights(weights=tuple(updated))


class DiceDistribution:
    """Stateless weighted roll and decay helpers."""

    MIN_WEIGHT: ClassVar[int] = 1

    @classmethod
    def roll(cls, weights: DiceWeights, rng: random.Random | None = None) -> int:
        """
        Draw a face with probability weight / total.

        Walks the cumulative distribution in ascending face order.

        Args:
            weights: Current dice weights
            rng: Random source (module-level generator if None)

        Returns:
            Face value 1-6
        """
        rng = rng or random
        draw = rng.randrange(weights.total)

        for face, weight in weights.items():
            if draw < weight:
                return face
            draw -= weight

        # Unreachable while weights sum correctly; keeps roll total.
        return rng.randint(1, DIE_FACES)

    @classmethod
    def decay(cls, weights: DiceWeights, rolled_value: int, factor: int) -> DiceWeights:
        """
        Shrink the weight of the face just placed.

        Args:
            weights: Current dice weights
            rolled_value: Face that was placed
            factor: Difficulty reduction factor (0 disables decay)

        Returns:
            New weights; the same object when factor is 0
        """
        if factor == 0:
            return weights
        reduced = max(cls.MIN_WEIGHT, weights[rolled_value] // factor)
        return weights.with_weight(rolled_value, reduced)
