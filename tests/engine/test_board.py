"""
Tests for the Knucklebones Board.
"""

import pytest

from src.engine.board import Board


class TestBoardConstruction:
    """Tests for Board validation and conversion."""

    def test_empty_board(self):
        board = Board.empty()
        assert board.columns == ((), (), ())
        assert not board.is_full()

    def test_validation_columns_count(self):
        with pytest.raises(ValueError, match="must have exactly 3 columns"):
            Board(columns=((), ()))

    def test_validation_column_size(self):
        with pytest.raises(ValueError, match="has 4 dice"):
            Board(columns=((1, 2, 3, 4), (), ()))

    def test_validation_die_values(self):
        with pytest.raises(ValueError, match="Invalid die value 7"):
            Board(columns=((1, 7), (), ()))
        with pytest.raises(ValueError, match="Invalid die value 0"):
            Board(columns=((0,), (), ()))

    def test_lists_normalized_to_tuples(self):
        board = Board(columns=([1, 2], [3], []))
        assert board.columns == ((1, 2), (3,), ())

    def test_from_dict(self):
        board = Board.from_dict({"columns": [[1, 2], [3], []]})
        assert board.columns == ((1, 2), (3,), ())

    def test_from_dict_empty(self):
        assert Board.from_dict({}) == Board.empty()

    def test_to_dict(self):
        board = Board(columns=((1, 2), (3,), ()))
        assert board.to_dict() == {"columns": [[1, 2], [3], []]}


class TestBoardCapacity:
    """Tests for full / column-full queries."""

    def test_partial_board_not_full(self):
        board = Board(columns=((1, 2, 3), (4, 5), (6,)))
        assert not board.is_full()

    def test_full_board(self, full_board):
        assert full_board.is_full()

    def test_is_column_full(self):
        board = Board(columns=((1, 2, 3), (4,), ()))
        assert board.is_column_full(0)
        assert not board.is_column_full(1)
        assert not board.is_column_full(2)

    def test_out_of_range_column_reported_full(self):
        board = Board.empty()
        assert board.is_column_full(3)
        assert board.is_column_full(-1)

    def test_available_columns(self):
        board = Board(columns=((1, 2, 3), (4,), ()))
        assert board.available_columns() == [1, 2]

    def test_no_available_columns(self, full_board):
        assert full_board.available_columns() == []


class TestBoardScoring:
    """Tests for column and total scoring."""

    def test_empty_column(self):
        assert Board.empty().column_score(0) == 0

    @pytest.mark.parametrize("value", [1, 2, 3, 4, 5, 6])
    @pytest.mark.parametrize("copies", [1, 2, 3])
    def test_matching_dice_score_k_squared_times_value(self, value, copies):
        board = Board(columns=((value,) * copies, (), ()))
        assert board.column_score(0) == copies * copies * value

    def test_triple_of_fours(self):
        # Each 4 counts three times: 4×3 + 4×3 + 4×3 = 36
        board = Board(columns=((4, 4, 4), (), ()))
        assert board.column_score(0) == 36

    def test_mixed_values(self):
        board = Board(columns=((4, 6), (1, 2, 3), ()))
        assert board.column_score(0) == 10
        assert board.column_score(1) == 6

    def test_pair_plus_single(self):
        # [4, 4, 6] = 16 + 6
        board = Board(columns=((4, 4, 6), (), ()))
        assert board.column_score(0) == 22

    def test_placement_order_irrelevant(self):
        a = Board(columns=((4, 6, 4), (), ()))
        b = Board(columns=((4, 4, 6), (), ()))
        assert a.column_score(0) == b.column_score(0)

    def test_out_of_range_column_scores_zero(self, full_board):
        assert full_board.column_score(5) == 0

    def test_total_is_sum_of_columns(self):
        board = Board(columns=((4, 4, 4), (1, 2, 3), (6, 6)))
        assert board.total_score() == sum(board.column_score(i) for i in range(3))
        assert board.total_score() == 36 + 6 + 24


class TestBoardMutation:
    """Tests for add_die and remove_dice_with_value."""

    def test_add_die_appends(self):
        board = Board(columns=((4,), (), ()))
        new_board = board.add_die(0, 6)
        assert new_board.columns[0] == (4, 6)
        assert board.columns[0] == (4,)  # original untouched

    def test_add_die_full_column_returns_same_board(self, full_board):
        assert full_board.add_die(1, 3) is full_board

    def test_add_die_invalid_column_returns_same_board(self):
        board = Board.empty()
        assert board.add_die(3, 2) is board

    def test_remove_all_matching(self):
        board = Board(columns=((4, 2, 4), (4,), ()))
        new_board = board.remove_dice_with_value(0, 4)
        assert new_board.columns[0] == (2,)
        assert new_board.columns[1] == (4,)

    def test_remove_preserves_order(self):
        board = Board(columns=((1, 5, 2), (), ()))
        assert board.remove_dice_with_value(0, 5).columns[0] == (1, 2)

    def test_remove_no_match(self):
        board = Board(columns=((1, 2, 3), (), ()))
        new_board = board.remove_dice_with_value(0, 6)
        assert new_board == board
        assert len(new_board.columns[0]) == 3

    def test_remove_length_decreases_by_match_count(self):
        board = Board(columns=((3, 3, 1), (), ()))
        new_board = board.remove_dice_with_value(0, 3)
        assert len(board.columns[0]) - len(new_board.columns[0]) == 2
