"""
Knucklebones - Remote Sync Manager

Lockstep reconciliation between two devices. Each local move in a
networked session is encoded once and sent before it is applied; each
inbound token is decoded and replayed with its roll forced. The peers
never exchange full state.
"""

from __future__ import annotations

import logging
from typing import Callable

from src.config.settings import Settings, get_settings
from src.database.client import get_supabase_client
from src.engine.base import Difficulty, Role
from src.engine.session import GameSession, MoveEvent
from src.realtime.events import EventPayload, GameEvent
from src.realtime.protocol import decode_move, encode_move
from src.realtime.subscriptions import BroadcastTransport
from src.realtime.transport import MoveTransport

logger = logging.getLogger(__name__)


class RemoteSyncManager:
    """Bridges a GameSession's move events to a MoveTransport and back."""

    def __init__(
        self,
        session: GameSession,
        transport: MoveTransport,
        on_event: Callable[[EventPayload], None] | None = None,
        match_code: str = "",
    ) -> None:
        self._session = session
        self._transport = transport
        self._on_event = on_event
        self._match_code = match_code
        self._attached = False

    @property
    def is_attached(self) -> bool:
        return self._attached

    def attach(self) -> None:
        """Start mirroring moves in both directions."""
        if self._attached:
            return
        self._session.add_move_listener(self._on_local_move)
        self._transport.set_receiver(self._on_payload)
        self._attached = True
        logger.info("Remote sync attached")

    def detach(self) -> None:
        """Stop mirroring and close the transport."""
        if not self._attached:
            return
        self._session.remove_move_listener(self._on_local_move)
        self._transport.set_receiver(None)
        self._transport.close()
        self._attached = False
        logger.info("Remote sync detached")

    def _on_local_move(self, event: MoveEvent) -> None:
        token = encode_move(event.column, event.roll)
        logger.debug("Sending move %s for %s", token, event.player.name)
        self._transport.send(token)

    def _on_payload(self, payload: str) -> None:
        move = decode_move(payload)
        if move is None:
            self._emit(GameEvent.MESSAGE_DISCARDED, {"payload": payload})
            return
        logger.debug("Applying remote move %d:%d", move.column, move.roll)
        self._session.receive_remote_move(move.column, move.roll)

    def _emit(self, event: GameEvent, data: dict) -> None:
        if self._on_event is None:
            return
        try:
            self._on_event(EventPayload(event=event, match_code=self._match_code, data=data))
        except Exception:
            logger.exception("Event callback failed for %s", event.name)


# -- Module-level convenience functions ----------------------------------


def create_broadcast_transport(
    on_event: Callable[[EventPayload], None] | None = None,
    settings: Settings | None = None,
) -> BroadcastTransport:
    """Build a BroadcastTransport on the configured Supabase project.

    Raises:
        RuntimeError: If Supabase credentials are not configured
    """
    settings = settings or get_settings()
    return BroadcastTransport(get_supabase_client(), settings.realtime_channel_prefix, on_event)


def start_networked_match(
    session: GameSession,
    transport: BroadcastTransport,
    match_code: str,
    *,
    host: bool,
    difficulty: Difficulty = Difficulty.EASY,
    on_event: Callable[[EventPayload], None] | None = None,
) -> RemoteSyncManager:
    """Connect to a match channel, start the game and begin mirroring moves.

    Convenience function for use in the UI layer.

    Args:
        session: Local game session.
        transport: Unconnected broadcast transport.
        match_code: Code shared out-of-band by the two players.
        host: Open the match as Player 1 (else join as Player 2).
        difficulty: Dice decay tier; both peers must agree.
        on_event: Callback for sync events.

    Returns:
        The attached RemoteSyncManager (detach it to leave the match).
    """
    role = Role.HOST if host else Role.GUEST
    session.start_game(vs_ai=False, difficulty=difficulty, networked=True, role=role)
    manager = RemoteSyncManager(session, transport, on_event=on_event, match_code=match_code)
    manager.attach()

    # Listen before connecting so the peer's first move is not missed
    try:
        if host:
            transport.host(match_code)
        else:
            transport.join(match_code)
    except Exception:
        manager.detach()
        raise
    return manager
