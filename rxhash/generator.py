"""Deterministic byte stream driven by repeated BLAKE2b hashing of a seed."""

from __future__ import annotations

import struct

from .blake2 import OUT_BYTES, blake2b

__all__ = ["Blake2Generator", "MAX_SEED_SIZE"]

MAX_SEED_SIZE = 60


class Blake2Generator:
    """Pseudorandom generator over a 64-byte buffer that is rehashed when used up.

    The buffer starts as the seed (truncated to 60 bytes, zero padded) followed
    by the nonce as a little-endian 32-bit integer. It is hashed with BLAKE2b-512
    before the first value is handed out and every time it runs out.
    """

    def __init__(self, seed: bytes, nonce: int = 0) -> None:
        seed = bytes(seed)[:MAX_SEED_SIZE]
        self._data = seed.ljust(MAX_SEED_SIZE, b"\x00") + struct.pack("<I", nonce & 0xFFFFFFFF)
        self._index = OUT_BYTES

    def _ensure(self, needed: int) -> None:
        if self._index + needed > len(self._data):
            self._data = blake2b(self._data, OUT_BYTES)
            self._index = 0

    def get_byte(self) -> int:
        """Return the next byte of the stream."""
        self._ensure(1)
        value = self._data[self._index]
        self._index += 1
        return value

    def get_uint32(self) -> int:
        """Return the next little-endian 32-bit unsigned integer of the stream."""
        self._ensure(4)
        (value,) = struct.unpack_from("<I", self._data, self._index)
        self._index += 4
        return value