"""
Knucklebones Real-time Sync.

Move wire protocol, peer transports and lockstep reconciliation for
two-device play.
"""

from src.realtime.events import EventPayload, GameEvent
from src.realtime.protocol import RemoteMove, decode_move, encode_move
from src.realtime.subscriptions import BroadcastTransport
from src.realtime.sync_manager import (
    RemoteSyncManager,
    create_broadcast_transport,
    start_networked_match,
)
from src.realtime.transport import LoopbackTransport, MoveTransport

__all__ = [
    "BroadcastTransport",
    "EventPayload",
    "GameEvent",
    "LoopbackTransport",
    "MoveTransport",
    "RemoteMove",
    "RemoteSyncManager",
    "create_broadcast_transport",
    "decode_move",
    "encode_move",
    "start_networked_match",
]
