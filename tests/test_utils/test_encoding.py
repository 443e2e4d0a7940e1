"""Tests for Base58 helpers — utils/encoding.py and utils/clock.py."""

from __future__ import annotations

import time

import pytest

from avm_ledger.utils.clock import unix_now
from avm_ledger.utils.encoding import base58_decode, base58_encode


class TestBase58:
    @pytest.mark.parametrize(
        ("raw", "text"),
        [
            (b"", ""),
            (b"\x00", "1"),
            (b"\x00\x00\x01", "112"),
            (b"hello world", "StV1DL6CwTryKyV"),
            (
                bytes.fromhex("00010966776006953d5567439e5e39f86a0d273beed61967f6"),
                "16UwLL9Risc3QfPqBUvKofHmBQ7wMtjvM",
            ),
        ],
    )
    def test_known_vectors(self, raw: bytes, text: str) -> None:
        assert base58_encode(raw) == text
        assert base58_decode(text) == raw

    def test_invalid_character(self) -> None:
        with pytest.raises(ValueError, match="Invalid Base58 character '0' at position 2"):
            base58_decode("110")


class TestClock:
    def test_unix_now_is_whole_seconds(self) -> None:
        before = int(time.time())
        now = unix_now()
        assert isinstance(now, int)
        assert before <= now <= int(time.time())
