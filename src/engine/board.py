"""
Knucklebones - Board

Immutable representation of one player's 3×3 grid.

Scoring rules (per column):
- Every die scores face value × the number of dice sharing that face
- Single [4] = 4, pair [4, 4] = 16, triple [4, 4, 4] = 36
- Mixed values score independently: [4, 4, 6] = 16 + 6 = 22
"""

from collections import Counter
from dataclasses import dataclass

from src.engine.validators import GRID_COLUMNS, GRID_ROWS, is_valid_column, validate_columns

Column = tuple[int, ...]


@dataclass(frozen=True)
class Board:
    """
    Immutable 3-column grid of die values.

    Attributes:
        columns: Tuple of 3 columns, each containing 0-3 dice values in
                 placement order.
                 Example: ((4, 6), (1,), (4, 4, 2))
    """
    columns: tuple[Column, Column, Column] = ((), (), ())

    def __post_init__(self) -> None:
        """Validate and normalize board structure."""
        object.__setattr__(self, "columns", validate_columns(self.columns))

    @classmethod
    def empty(cls) -> "Board":
        """Create an empty board."""
        return cls()

    @classmethod
    def from_dict(cls, data: dict) -> "Board":
        """Create a Board from its snapshot dictionary."""
        cols = data.get("columns", [[], [], []])
        return cls(columns=tuple(tuple(col) for col in cols))

    def to_dict(self) -> dict:
        """Convert to snapshot dictionary format."""
        return {"columns": [list(col) for col in self.columns]}

    def is_full(self) -> bool:
        """Check if all columns hold 3 dice."""
        return all(len(col) == GRID_ROWS for col in self.columns)

    def is_column_full(self, column_index: int) -> bool:
        """
        Check if a column can take no more dice.

        An out-of-range index is reported as full: callers treat it as an
        unavailable move, not an error.
        """
        if not is_valid_column(column_index):
            return True
        return len(self.columns[column_index]) == GRID_ROWS

    def available_columns(self) -> list[int]:
        """Column indices that are not full, ascending."""
        return [i for i in range(GRID_COLUMNS) if not self.is_column_full(i)]

    def column_score(self, column_index: int) -> int:
        """Score a single column; 0 for an out-of-range index."""
        if not is_valid_column(column_index):
            return 0
        column = self.columns[column_index]
        counts = Counter(column)
        return sum(value * counts[value] for value in column)

    def total_score(self) -> int:
        """Sum of the three column scores."""
        return sum(self.column_score(i) for i in range(GRID_COLUMNS))

    def add_die(self, column_index: int, value: int) -> "Board":
        """
        Append a die to a column.

        Returns this same board when the column is full or out of range;
        placement beyond capacity is ignored, never an error.
        """
        if self.is_column_full(column_index):
            return self
        new_columns = list(self.columns)
        new_columns[column_index] = self.columns[column_index] + (value,)
        return Board(columns=tuple(new_columns))

    def remove_dice_with_value(self, column_index: int, value: int) -> "Board":
        """Drop every die showing ``value`` from a column, keeping the order of the rest."""
        if not is_valid_column(column_index):
            return self
        new_columns = list(self.columns)
        new_columns[column_index] = tuple(v for v in self.columns[column_index] if v != value)
        return Board(columns=tuple(new_columns))
