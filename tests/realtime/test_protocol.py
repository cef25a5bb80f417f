"""Tests for src/realtime/protocol.py: the move token codec."""

import pytest

from src.realtime.protocol import RemoteMove, decode_move, encode_move


class TestEncodeMove:
    def test_encode(self):
        assert encode_move(1, 5) == "1:5"

    def test_encode_edges(self):
        assert encode_move(0, 1) == "0:1"
        assert encode_move(2, 6) == "2:6"


class TestDecodeMove:
    def test_decode(self):
        assert decode_move("1:5") == RemoteMove(column=1, roll=5)

    def test_decode_bytes(self):
        assert decode_move(b"2:3") == RemoteMove(column=2, roll=3)

    def test_roundtrip(self):
        assert decode_move(encode_move(0, 6)) == RemoteMove(column=0, roll=6)

    @pytest.mark.parametrize(
        "payload",
        [
            "",
            "1",
            "1:2:3",
            "a:5",
            "1:b",
            "1.0:5",
            " 1:5",
            "1:5\n",
            ":",
            "hello world",
        ],
    )
    def test_malformed_discarded(self, payload):
        assert decode_move(payload) is None

    @pytest.mark.parametrize("payload", ["3:4", "-1:4", "0:0", "0:7"])
    def test_out_of_range_discarded(self, payload):
        assert decode_move(payload) is None

    def test_signed_in_range_accepted(self):
        assert decode_move("+1:+5") == RemoteMove(column=1, roll=5)

    def test_undecodable_bytes_discarded(self):
        assert decode_move(b"\xff\xfe") is None

    def test_non_text_discarded(self):
        assert decode_move(None) is None
        assert decode_move(15) is None
