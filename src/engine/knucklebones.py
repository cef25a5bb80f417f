"""
Knucklebones - Game Engine

A 2-player strategic dice placement game with grid-based mechanics.

Game Rules:
- 2 players, each with a 3x3 grid
- The die for the next placement is rolled before the move is chosen
- Placing a die clears every matching opponent die in the same column
- Column scoring: each die scores face value × copies of that face
- Game ends when either grid is full; highest score wins

The engine is stateless: every transition takes a GameState and returns a
new one. A call that fails a guard returns the very same state object.
"""

import logging
import random
from dataclasses import dataclass, field, replace

from src.engine.base import Difficulty, MatchConfig, Player
from src.engine.board import Board
from src.engine.dice import DiceDistribution, DiceWeights
from src.engine.validators import validate_die_value

logger = logging.getLogger(__name__)

NO_ROLL = 0


@dataclass(frozen=True)
class GameState:
    """
    Immutable snapshot of a match.

    Attributes:
        player1_board: Player 1's grid
        player2_board: Player 2's grid
        current_player: Seat that places the pending roll
        current_roll: Face to be placed next (0 once the game is over)
        game_over: Whether either grid has filled
        config: Match configuration, preserved across resets
        dice_weights: Adaptive dice weights for this game
    """
    player1_board: Board = field(default_factory=Board.empty)
    player2_board: Board = field(default_factory=Board.empty)
    current_player: Player = Player.PLAYER1
    current_roll: int = NO_ROLL
    game_over: bool = False
    config: MatchConfig = field(default_factory=MatchConfig)
    dice_weights: DiceWeights = field(default_factory=DiceWeights.uniform)

    @property
    def difficulty(self) -> Difficulty:
        return self.config.difficulty

    def board_for(self, player: Player) -> Board:
        """The grid owned by ``player``."""
        return self.player1_board if player is Player.PLAYER1 else self.player2_board

    def opponent_board_for(self, player: Player) -> Board:
        """The grid facing ``player``."""
        return self.board_for(player.opponent)

    def scores(self) -> tuple[int, int]:
        """(Player 1 total, Player 2 total)."""
        return self.player1_board.total_score(), self.player2_board.total_score()

    def winner(self) -> Player | None:
        """Winning seat, or None for a tie or an unfinished game."""
        if not self.game_over:
            return None
        p1_score, p2_score = self.scores()
        if p1_score > p2_score:
            return Player.PLAYER1
        if p2_score > p1_score:
            return Player.PLAYER2
        return None

    def to_dict(self) -> dict:
        """Snapshot for the rendering collaborator."""
        p1_score, p2_score = self.scores()
        return {
            "player1_grid": self.player1_board.to_dict(),
            "player2_grid": self.player2_board.to_dict(),
            "player1_score": p1_score,
            "player2_score": p2_score,
            "current_player": self.current_player.value,
            "current_roll": self.current_roll,
            "game_over": self.game_over,
            "vs_ai": self.config.vs_ai,
            "networked": self.config.networked,
            "role": self.config.role.value,
            "difficulty": self.config.difficulty.name.lower(),
            "dice_weights": self.dice_weights.as_dict(),
        }


class KnucklebonesEngine:
    """Stateless engine for Knucklebones game logic."""

    @classmethod
    def new_game(cls, config: MatchConfig | None = None, rng: random.Random | None = None) -> GameState:
        """
        Start a match: empty grids, uniform weights, first roll drawn.

        Args:
            config: Match configuration (local hot-seat on Easy if None)
            rng: Random source for the first roll
        """
        weights = DiceWeights.uniform()
        return GameState(
            config=config or MatchConfig(),
            dice_weights=weights,
            current_roll=DiceDistribution.roll(weights, rng),
        )

    @classmethod
    def reset(cls, state: GameState, rng: random.Random | None = None) -> GameState:
        """Rematch with the same configuration; weights return to uniform."""
        return cls.new_game(state.config, rng)

    @classmethod
    def is_local_turn(cls, state: GameState) -> bool:
        """Whether local input may act for the current player."""
        return state.config.role.controls(state.current_player)

    @classmethod
    def can_place(cls, state: GameState, column_index: int, is_remote: bool = False) -> bool:
        """
        Evaluate the placement guards, in order.

        1. The game is not over.
        2. In a networked match, a local call acts only on this device's turn.
           Remote calls skip this check; the sender already applied it.
        3. The acting player's column has room (and exists).
        """
        if state.game_over:
            return False
        if state.config.networked and not is_remote and not cls.is_local_turn(state):
            return False
        return not state.board_for(state.current_player).is_column_full(column_index)

    @classmethod
    def place_die(
        cls,
        state: GameState,
        column_index: int,
        is_remote: bool = False,
        rng: random.Random | None = None,
    ) -> GameState:
        """
        Place the pending roll for the current player.

        Steps:
        1. Add the die to the current player's column
        2. Clear matching opponent dice in the same column
        3. Decay the placed face's weight by the difficulty factor
        4. Flip the active player and draw the next roll (0 if game over)

        Args:
            state: Current state
            column_index: Column to place in (0-2)
            is_remote: Move originated on the peer device
            rng: Random source for the next roll

        Returns:
            The new state, or ``state`` itself if a guard failed
        """
        if not cls.can_place(state, column_index, is_remote):
            logger.debug(
                "Ignored placement in column %r by %s (remote=%s)",
                column_index, state.current_player.name, is_remote,
            )
            return state

        acting = state.current_player
        roll = state.current_roll

        own_board = state.board_for(acting).add_die(column_index, roll)
        opponent_board = state.opponent_board_for(acting).remove_dice_with_value(column_index, roll)

        if acting is Player.PLAYER1:
            player1_board, player2_board = own_board, opponent_board
        else:
            player1_board, player2_board = opponent_board, own_board

        weights = DiceDistribution.decay(
            state.dice_weights, roll, state.difficulty.reduction_factor
        )
        game_over = player1_board.is_full() or player2_board.is_full()

        return replace(
            state,
            player1_board=player1_board,
            player2_board=player2_board,
            current_player=acting.opponent,
            current_roll=NO_ROLL if game_over else DiceDistribution.roll(weights, rng),
            game_over=game_over,
            dice_weights=weights,
        )

    @classmethod
    def force_roll(cls, state: GameState, value: int) -> GameState:
        """
        Overwrite the pending roll with a value received from the peer.

        Raises:
            ValueError: If value is not a face 1-6
        """
        validate_die_value(value)
        return replace(state, current_roll=value)

    @classmethod
    def get_winner(cls, state: GameState) -> Player | None:
        """Winning seat once the game is over; None for a tie or in play."""
        return state.winner()
