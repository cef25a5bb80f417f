"""
Knucklebones - Realtime Event Definitions

Event types and payloads for the peer link lifecycle and move traffic.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any


class GameEvent(Enum):
    """Events that can occur on a peer link."""

    PEER_CONNECTED = auto()
    PEER_DISCONNECTED = auto()
    CONNECTION_ERROR = auto()
    MOVE_SENT = auto()
    MOVE_RECEIVED = auto()
    MESSAGE_DISCARDED = auto()


@dataclass
class EventPayload:
    """Wrapper for realtime event data."""

    event: GameEvent
    match_code: str
    data: dict[str, Any] = field(default_factory=dict)


# Map realtime channel subscription states to link events
_SUBSCRIBE_STATE_MAP: dict[str, GameEvent] = {
    "SUBSCRIBED": GameEvent.PEER_CONNECTED,
    "CLOSED": GameEvent.PEER_DISCONNECTED,
    "CHANNEL_ERROR": GameEvent.CONNECTION_ERROR,
    "TIMED_OUT": GameEvent.CONNECTION_ERROR,
}


def classify_subscribe_state(state: Any, error: Exception | None = None) -> GameEvent | None:
    """Determine the link event from a channel subscription state change."""
    if error is not None:
        return GameEvent.CONNECTION_ERROR
    name = getattr(state, "value", state)
    if not isinstance(name, str):
        return None
    return _SUBSCRIBE_STATE_MAP.get(name.upper())
