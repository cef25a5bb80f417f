"""
Knucklebones - Game Session

Single owner of the current GameState on a device. Accepts player intents,
runs them through the stateless engine, and publishes:

- MoveEvent to move listeners, once per successful *local* move in a
  networked match, before the state changes
- the new GameState to state listeners after every transition

Local input, the AI timer and inbound network messages may arrive on
different threads; every transition runs under one lock.
"""

from __future__ import annotations

import logging
import random
import threading
from dataclasses import dataclass
from typing import Callable

from src.config.settings import get_settings
from src.engine.base import Difficulty, MatchConfig, Player, Role
from src.engine.knucklebones import GameState, KnucklebonesEngine
from src.engine.opponent import choose_column
from src.engine.unlocks import UnlockLedger

logger = logging.getLogger(__name__)

AI_PLAYER = Player.PLAYER2
HUMAN_PLAYER = Player.PLAYER1


@dataclass(frozen=True)
class MoveEvent:
    """A local placement about to be applied."""
    column: int
    roll: int
    player: Player


MoveListener = Callable[[MoveEvent], None]
StateListener = Callable[[GameState], None]


class GameSession:
    """Serializes intents against one match and fans out its events."""

    def __init__(
        self,
        ledger: UnlockLedger | None = None,
        *,
        rng: random.Random | None = None,
        ai_delay: float | None = None,
        auto_ai: bool = False,
    ) -> None:
        self._ledger = ledger
        self._rng = rng
        self._ai_delay = get_settings().ai_think_delay if ai_delay is None else ai_delay
        self._auto_ai = auto_ai
        self._lock = threading.RLock()
        self._move_listeners: list[MoveListener] = []
        self._state_listeners: list[StateListener] = []
        self._ai_timer: threading.Timer | None = None
        self._state = KnucklebonesEngine.new_game(MatchConfig(), rng)

    @property
    def state(self) -> GameState:
        return self._state

    # -- Listeners -------------------------------------------------------

    def add_move_listener(self, listener: MoveListener) -> None:
        with self._lock:
            self._move_listeners.append(listener)

    def remove_move_listener(self, listener: MoveListener) -> None:
        with self._lock:
            if listener in self._move_listeners:
                self._move_listeners.remove(listener)

    def add_state_listener(self, listener: StateListener) -> None:
        with self._lock:
            self._state_listeners.append(listener)

    def remove_state_listener(self, listener: StateListener) -> None:
        with self._lock:
            if listener in self._state_listeners:
                self._state_listeners.remove(listener)

    def _emit_move(self, event: MoveEvent) -> None:
        for listener in list(self._move_listeners):
            try:
                listener(event)
            except Exception:
                logger.exception("Move listener failed for %s", event)

    def _publish(self, state: GameState) -> None:
        for listener in list(self._state_listeners):
            try:
                listener(state)
            except Exception:
                logger.exception("State listener failed")

    # -- Intents ---------------------------------------------------------

    def start_game(
        self,
        vs_ai: bool,
        difficulty: Difficulty = Difficulty.EASY,
        networked: bool = False,
        role: Role | None = None,
    ) -> GameState:
        """
        Begin a new match, discarding any game in progress.

        Args:
            vs_ai: Player 2 is the AI
            difficulty: AI tier and dice decay factor
            networked: Moves are mirrored to a peer
            role: HOST or GUEST for networked matches (default HOST);
                LOCAL otherwise

        Raises:
            ValueError: If the combination is not a valid MatchConfig
        """
        if role is None:
            role = Role.HOST if networked else Role.LOCAL
        config = MatchConfig(
            vs_ai=vs_ai,
            networked=networked,
            role=role,
            difficulty=difficulty,
        )
        with self._lock:
            self._cancel_ai_timer()
            self._state = KnucklebonesEngine.new_game(config, self._rng)
            logger.info(
                "Started %s game (difficulty=%s, role=%s)",
                "networked" if networked else ("AI" if vs_ai else "local"),
                difficulty.name, config.role.name,
            )
            self._after_transition(self._state)
            return self._state

    def reset_game(self) -> GameState:
        """Rematch with the same configuration."""
        with self._lock:
            self._cancel_ai_timer()
            self._state = KnucklebonesEngine.reset(self._state, self._rng)
            logger.info("Game reset")
            self._after_transition(self._state)
            return self._state

    def place_die(self, column: int) -> GameState:
        """Local placement intent; a no-op when a guard fails.

        Player 2's seat belongs to the AI in a vs-AI match, so human input
        is ignored while the AI's roll is pending.
        """
        with self._lock:
            if self.is_ai_turn():
                logger.debug("Ignored placement in column %r during AI turn", column)
                return self._state
            return self._place(column, is_remote=False)

    def receive_remote_move(self, column: int, roll: int) -> GameState:
        """
        Apply a move made on the peer device.

        The pending roll is forced to the peer's value before placement.
        Ignored outside a live networked match.
        """
        with self._lock:
            state = self._state
            if not state.config.networked or state.game_over:
                logger.debug("Ignored remote move %d:%d", column, roll)
                return state
            forced = KnucklebonesEngine.force_roll(state, roll)
            self._state = forced
            after = self._place(column, is_remote=True)
            if after is forced:
                # Placement blocked; the peer's roll is still the pending one
                self._publish(forced)
            return after

    def _place(self, column: int, is_remote: bool) -> GameState:
        with self._lock:
            before = self._state
            if not KnucklebonesEngine.can_place(before, column, is_remote):
                logger.debug("Ignored placement in column %r (remote=%s)", column, is_remote)
                return before

            if before.config.networked and not is_remote:
                # Runs under the session lock: a blocking send stalls the AI timer and inbound moves
                self._emit_move(MoveEvent(column, before.current_roll, before.current_player))

            after = KnucklebonesEngine.place_die(before, column, is_remote, self._rng)
            self._state = after

            if after.game_over:
                p1_score, p2_score = after.scores()
                logger.info("Game over: %d - %d", p1_score, p2_score)
                if after.config.vs_ai and p1_score > p2_score:
                    self._record_unlock(after.difficulty)

            self._after_transition(after)
            return after

    def _after_transition(self, state: GameState) -> None:
        self._publish(state)
        if self._auto_ai:
            self.schedule_ai_turn()

    def _record_unlock(self, difficulty: Difficulty) -> None:
        if self._ledger is None:
            return
        try:
            self._ledger.record_win(difficulty)
        except Exception:
            logger.exception("Failed to persist unlock for %s", difficulty.name)

    # -- AI --------------------------------------------------------------

    def is_ai_turn(self) -> bool:
        state = self._state
        return state.config.vs_ai and not state.game_over and state.current_player is AI_PLAYER

    def ai_turn(self) -> GameState:
        """Let the AI place its pending roll; a no-op when it is not its turn."""
        with self._lock:
            if not self.is_ai_turn():
                return self._state
            state = self._state
            ai_board = state.board_for(AI_PLAYER)
            column = choose_column(
                ai_board,
                state.board_for(HUMAN_PLAYER),
                state.current_roll,
                ai_board.available_columns(),
                self._rng,
            )
            logger.debug("AI places %d in column %d", state.current_roll, column)
            return self._place(column, is_remote=False)

    def schedule_ai_turn(self, delay: float | None = None) -> threading.Timer | None:
        """
        Run ai_turn after a short "thinking" delay.

        Returns:
            The started timer, or None when it is not the AI's turn
        """
        with self._lock:
            if not self.is_ai_turn():
                return None
            self._cancel_ai_timer()
            timer = threading.Timer(self._ai_delay if delay is None else delay, self.ai_turn)
            timer.daemon = True
            self._ai_timer = timer
            timer.start()
            return timer

    def _cancel_ai_timer(self) -> None:
        if self._ai_timer is not None:
            self._ai_timer.cancel()
            self._ai_timer = None

    def close(self) -> None:
        """Abandon the session: stop timers and drop listeners."""
        with self._lock:
            self._cancel_ai_timer()
            self._move_listeners.clear()
            self._state_listeners.clear()
