"""
Knucklebones - Input Validation Utilities

Provides validation functions for engine data. All validators either return
validated data or raise descriptive ValueError exceptions. They are for
corrupt data and programmer errors; an unavailable move is never an error
and is handled by the engine's guards instead.
"""

from typing import Mapping, Sequence

DIE_FACES = 6
GRID_COLUMNS = 3
GRID_ROWS = 3


def is_valid_die_value(value: object) -> bool:
    """True for an int face value 1-6 (bools excluded)."""
    return isinstance(value, int) and not isinstance(value, bool) and 1 <= value <= DIE_FACES


def is_valid_column(column: object) -> bool:
    """True for an int column index 0-2 (bools excluded)."""
    return isinstance(column, int) and not isinstance(column, bool) and 0 <= column < GRID_COLUMNS


def validate_die_value(value: int) -> int:
    """
    Validate a single die face.

    Raises:
        ValueError: If value is not an integer 1-6
    """
    if not is_valid_die_value(value):
        raise ValueError(f"Die value must be 1-{DIE_FACES}, got {value!r}.")
    return value


def validate_columns(columns: Sequence[Sequence[int]]) -> tuple[tuple[int, ...], ...]:
    """
    Validate and normalize a board's columns.

    Args:
        columns: Three sequences of 0-3 die values each

    Returns:
        Columns as a tuple of tuples

    Raises:
        ValueError: If the shape or any die value is invalid
    """
    normalized = tuple(tuple(col) for col in columns)
    if len(normalized) != GRID_COLUMNS:
        raise ValueError(f"Board must have exactly {GRID_COLUMNS} columns")

    for i, col in enumerate(normalized):
        if len(col) > GRID_ROWS:
            raise ValueError(f"Column {i} has {len(col)} dice (max {GRID_ROWS})")
        for die_value in col:
            if not is_valid_die_value(die_value):
                raise ValueError(f"Invalid die value {die_value} in column {i}")

    return normalized


def validate_weights(weights: Mapping[int, int]) -> dict[int, int]:
    """
    Validate a face-to-weight mapping.

    Every face 1-6 must be present with an integer weight of at least 1.

    Raises:
        ValueError: If a face is missing or unknown, or a weight is below 1
    """
    faces = set(range(1, DIE_FACES + 1))
    if set(weights) != faces:
        raise ValueError(f"Weights must cover faces 1-{DIE_FACES} exactly, got {sorted(weights)}.")

    for face, weight in weights.items():
        if not isinstance(weight, int) or isinstance(weight, bool):
            raise ValueError(f"Weight for face {face} must be an integer, got {type(weight).__name__}.")
        if weight < 1:
            raise ValueError(f"Weight for face {face} must be at least 1, got {weight}.")

    return {face: weights[face] for face in sorted(weights)}
