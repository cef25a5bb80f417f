"""
Knucklebones - Broadcast Transport

Ships move tokens between two devices over a Supabase Realtime broadcast
channel. Uses a background thread with an asyncio event loop, since the
Realtime client is async-only.
"""

from __future__ import annotations

import asyncio
import logging
import threading
from concurrent.futures import Future
from typing import Any, Callable

from supabase import Client

from src.engine.base import Role
from src.realtime.events import EventPayload, GameEvent, classify_subscribe_state
from src.realtime.transport import Receiver

logger = logging.getLogger(__name__)

MOVE_EVENT = "move"
SUBSCRIBE_TIMEOUT = 10


class BroadcastTransport:
    """MoveTransport over one Supabase Realtime broadcast channel.

    Receiver and on_event callbacks are invoked from the background
    loop thread; callers should handle thread safety.
    """

    def __init__(
        self,
        client: Client,
        channel_prefix: str = "knucklebones",
        on_event: Callable[[EventPayload], None] | None = None,
    ) -> None:
        self._client = client
        self._prefix = channel_prefix
        self._on_event = on_event
        self._receiver: Receiver | None = None
        self._channel: Any = None
        self._match_code: str | None = None
        self._role: Role | None = None
        self._loop: asyncio.AbstractEventLoop | None = None
        self._thread: threading.Thread | None = None
        self._lock = threading.Lock()

    @property
    def role(self) -> Role | None:
        """HOST or GUEST once connected."""
        return self._role

    @property
    def match_code(self) -> str | None:
        return self._match_code

    @property
    def is_connected(self) -> bool:
        return self._channel is not None

    def channel_name(self, match_code: str) -> str:
        return f"{self._prefix}:{match_code}"

    # -- Event loop ------------------------------------------------------

    def _ensure_loop(self) -> asyncio.AbstractEventLoop:
        """Start the background event loop if not running."""
        with self._lock:
            if self._loop is None or not self._loop.is_running():
                self._loop = asyncio.new_event_loop()
                self._thread = threading.Thread(
                    target=self._run_loop, daemon=True, name="realtime-loop"
                )
                self._thread.start()
            return self._loop

    def _run_loop(self) -> None:
        """Run the asyncio event loop in the background thread."""
        asyncio.set_event_loop(self._loop)
        self._loop.run_forever()

    # -- Lifecycle -------------------------------------------------------

    def host(self, match_code: str) -> Role:
        """Open the match channel as Player 1."""
        self._connect(match_code, Role.HOST)
        return Role.HOST

    def join(self, match_code: str) -> Role:
        """Join the match channel as Player 2."""
        self._connect(match_code, Role.GUEST)
        return Role.GUEST

    def _connect(self, match_code: str, role: Role) -> None:
        if self._channel is not None:
            logger.warning("Already connected to match %s", self._match_code)
            return

        loop = self._ensure_loop()
        future = asyncio.run_coroutine_threadsafe(self._subscribe_async(match_code), loop)
        future.result(timeout=SUBSCRIBE_TIMEOUT)
        self._match_code = match_code
        self._role = role
        logger.info("Connected to match %s as %s", match_code, role.name)

    async def _subscribe_async(self, match_code: str) -> None:
        """Create and subscribe the broadcast channel."""
        channel = self._client.realtime.channel(self.channel_name(match_code))
        channel.on_broadcast(event=MOVE_EVENT, callback=self._handle_broadcast)
        await channel.subscribe(
            callback=lambda state, err=None: self._on_subscribe_state(state, err, match_code)
        )
        self._channel = channel

    def disconnect(self) -> None:
        """Leave the match channel and stop the background loop."""
        channel, self._channel = self._channel, None
        match_code = self._match_code
        if channel is not None and self._loop is not None and self._loop.is_running():
            future = asyncio.run_coroutine_threadsafe(self._unsubscribe_async(channel), self._loop)
            try:
                future.result(timeout=SUBSCRIBE_TIMEOUT)
            except Exception:
                logger.exception("Error leaving match %s", match_code)
            self._emit(GameEvent.PEER_DISCONNECTED, match_code)
            logger.info("Disconnected from match %s", match_code)

        self._match_code = None
        self._role = None
        self._shutdown_loop()

    async def _unsubscribe_async(self, channel: Any) -> None:
        """Unsubscribe and remove the channel."""
        try:
            await channel.unsubscribe()
            await self._client.realtime.remove_channel(channel)
        except Exception:
            logger.exception("Error removing channel")

    def _shutdown_loop(self) -> None:
        if self._loop and self._loop.is_running():
            self._loop.call_soon_threadsafe(self._loop.stop)
        if self._thread and self._thread.is_alive():
            self._thread.join(timeout=5)
        self._loop = None
        self._thread = None

    # -- MoveTransport ---------------------------------------------------

    def send(self, payload: str) -> None:
        """Broadcast a token to the peer without waiting for delivery."""
        channel = self._channel
        if channel is None or self._loop is None:
            logger.warning("Dropped payload %r: not connected", payload)
            return
        future = asyncio.run_coroutine_threadsafe(
            channel.send_broadcast(MOVE_EVENT, {"token": payload}), self._loop
        )
        future.add_done_callback(lambda f: self._on_sent(f, payload))

    def _on_sent(self, future: Future, payload: str) -> None:
        if future.cancelled():
            return
        error = future.exception()
        if error is not None:
            logger.error("Failed to send %r: %s", payload, error)
            self._emit(GameEvent.CONNECTION_ERROR, self._match_code, {"error": str(error)})
        else:
            self._emit(GameEvent.MOVE_SENT, self._match_code, {"token": payload})

    def set_receiver(self, receiver: Receiver | None) -> None:
        self._receiver = receiver

    def close(self) -> None:
        self.disconnect()
        self._receiver = None

    # -- Callbacks -------------------------------------------------------

    def _handle_broadcast(self, payload: dict[str, Any]) -> None:
        """Unwrap a broadcast message and hand its token to the receiver."""
        try:
            data = payload.get("payload", payload)
            token = data.get("token") if isinstance(data, dict) else None
            if token is None:
                logger.debug("Ignored broadcast without token: %r", payload)
                return
            self._emit(GameEvent.MOVE_RECEIVED, self._match_code, {"token": token})
            if self._receiver is not None:
                self._receiver(token)
        except Exception:
            logger.exception("Error handling broadcast on match %s", self._match_code)

    def _on_subscribe_state(self, state: Any, error: Exception | None, match_code: str) -> None:
        """Log subscription state changes and publish lifecycle events."""
        if error:
            logger.error("Subscription error for match %s: %s", match_code, error)
        else:
            logger.debug("Channel %s state: %s", match_code, state)

        event = classify_subscribe_state(state, error)
        if event is not None:
            self._emit(event, match_code, {"error": str(error)} if error else {})

    def _emit(self, event: GameEvent, match_code: str | None, data: dict[str, Any] | None = None) -> None:
        if self._on_event is None:
            return
        try:
            self._on_event(EventPayload(event=event, match_code=match_code or "", data=data or {}))
        except Exception:
            logger.exception("Event callback failed for %s", event.name)
