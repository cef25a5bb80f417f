"""
Knucklebones - AI Opponent

Beginner-to-intermediate heuristic, no look-ahead:
deny (clear a matching opponent die) > build (stack onto a match) > random.
"""

import random
from typing import Sequence

from src.engine.board import Board


def choose_column(
    ai_board: Board,
    human_board: Board,
    roll: int,
    available_columns: Sequence[int],
    rng: random.Random | None = None,
) -> int:
    """
    Pick a column for the AI's pending roll.

    Args:
        ai_board: The AI's own grid
        human_board: The opponent's grid
        roll: Face the AI must place
        available_columns: Non-full AI columns, ascending
        rng: Random source for the default pick

    Returns:
        Chosen column index

    Raises:
        ValueError: If no column is available
    """
    if not available_columns:
        raise ValueError("No available columns to choose from.")

    rng = rng or random
    best = rng.choice(list(available_columns))

    for col in available_columns:
        if roll in human_board.columns[col]:
            best = col
            break

    if roll not in human_board.columns[best]:
        for col in available_columns:
            if roll in ai_board.columns[col]:
                best = col
                break

    return best
