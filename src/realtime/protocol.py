"""
Knucklebones - Move Wire Protocol

A move travels as the text token "<column>:<roll>", e.g. "1:5".

Decoding never raises: anything that is not exactly two plain integers in
range is discarded. There is no sequence number, so a duplicated token
would be applied as a second move.
"""

import logging
import re
from dataclasses import dataclass

from src.engine.validators import is_valid_column, is_valid_die_value

logger = logging.getLogger(__name__)

DELIMITER = ":"

_INT_TOKEN = re.compile(r"[+-]?[0-9]+")


@dataclass(frozen=True)
class RemoteMove:
    """A decoded move from the peer."""
    column: int
    roll: int


def encode_move(column: int, roll: int) -> str:
    """Serialize a placement for the peer."""
    return f"{column}{DELIMITER}{roll}"


def _parse_int(token: str) -> int | None:
    if not _INT_TOKEN.fullmatch(token):
        return None
    return int(token)


def decode_move(payload: str | bytes | None) -> RemoteMove | None:
    """
    Parse a peer token.

    Args:
        payload: Token as text or UTF-8 bytes

    Returns:
        RemoteMove, or None if the payload is malformed or out of range
    """
    if isinstance(payload, (bytes, bytearray)):
        try:
            payload = payload.decode("utf-8")
        except UnicodeDecodeError:
            logger.debug("Discarded undecodable payload")
            return None
    if not isinstance(payload, str):
        logger.debug("Discarded non-text payload %r", payload)
        return None

    parts = payload.split(DELIMITER)
    if len(parts) != 2:
        logger.debug("Discarded payload %r: expected 2 tokens, got %d", payload, len(parts))
        return None

    column, roll = _parse_int(parts[0]), _parse_int(parts[1])
    if column is None or roll is None:
        logger.debug("Discarded payload %r: non-integer token", payload)
        return None
    if not is_valid_column(column) or not is_valid_die_value(roll):
        logger.debug("Discarded payload %r: value out of range", payload)
        return None

    return RemoteMove(column=column, roll=roll)
