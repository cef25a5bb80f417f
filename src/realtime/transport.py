"""
Knucklebones - Move Transports

The sync layer only needs three things from a transport: send a text
payload, deliver inbound payloads to one receiver in FIFO order, and close.
"""

from __future__ import annotations

import logging
from typing import Callable, Protocol

logger = logging.getLogger(__name__)

Receiver = Callable[[str], None]


class MoveTransport(Protocol):
    """Opaque text pipe to the peer device."""

    def send(self, payload: str) -> None: ...

    def set_receiver(self, receiver: Receiver | None) -> None: ...

    def close(self) -> None: ...


class LoopbackTransport:
    """In-process transport; delivers synchronously to its linked peer."""

    def __init__(self) -> None:
        self._peer: LoopbackTransport | None = None
        self._receiver: Receiver | None = None
        self._closed = False
        self.sent: list[str] = []

    @classmethod
    def pair(cls) -> tuple[LoopbackTransport, LoopbackTransport]:
        """Two transports wired to each other."""
        a, b = cls(), cls()
        a._peer, b._peer = b, a
        return a, b

    def send(self, payload: str) -> None:
        if self._closed:
            logger.warning("Dropped payload %r on closed transport", payload)
            return
        self.sent.append(payload)
        if self._peer is not None:
            self._peer._deliver(payload)

    def _deliver(self, payload: str) -> None:
        if self._closed or self._receiver is None:
            return
        self._receiver(payload)

    def set_receiver(self, receiver: Receiver | None) -> None:
        self._receiver = receiver

    def close(self) -> None:
        self._closed = True
        self._receiver = None

    @property
    def is_closed(self) -> bool:
        return self._closed
