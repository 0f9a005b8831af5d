"""BLAKE2b hashing and the variable-length BLAKE2b construction used by Argon2."""

from __future__ import annotations

import struct

__all__ = ["blake2b", "blake2b_long", "rotr64", "BLOCK_BYTES", "OUT_BYTES", "KEY_BYTES"]

BLOCK_BYTES = 128
OUT_BYTES = 64
KEY_BYTES = 64

_MASK64 = 0xFFFFFFFFFFFFFFFF
_UINT32_MAX = 0xFFFFFFFF

_IV = (
    0x6A09E667F3BCC908,
    0xBB67AE8584CAA73B,
    0x3C6EF372FE94F82B,
    0xA54FF53A5F1D36F1,
    0x510E527FADE682D1,
    0x9B05688C2B3E6C1F,
    0x1F83D9ABFB41BD6B,
    0x5BE0CD19137E2179,
)

_SIGMA = (
    (0, 1, 2, 3, 4, 5, 6, 7, 8, 9, 10, 11, 12, 13, 14, 15),
    (14, 10, 4, 8, 9, 15, 13, 6, 1, 12, 0, 2, 11, 7, 5, 3),
    (11, 8, 12, 0, 5, 2, 15, 13, 10, 14, 3, 6, 7, 1, 9, 4),
    (7, 9, 3, 1, 13, 12, 11, 14, 2, 6, 5, 10, 4, 0, 15, 8),
    (9, 0, 5, 7, 2, 4, 10, 15, 14, 1, 11, 12, 6, 8, 3, 13),
    (2, 12, 6, 10, 0, 11, 8, 3, 4, 13, 7, 5, 15, 14, 1, 9),
    (12, 5, 1, 15, 14, 13, 4, 10, 0, 7, 6, 3, 9, 2, 8, 11),
    (13, 11, 7, 14, 12, 1, 3, 9, 5, 0, 15, 4, 8, 6, 2, 10),
    (6, 15, 14, 9, 11, 3, 0, 8, 12, 2, 13, 7, 1, 4, 10, 5),
    (10, 2, 8, 4, 7, 6, 1, 5, 15, 11, 9, 14, 3, 12, 13, 0),
    (0, 1, 2, 3, 4, 5, 6, 7, 8, 9, 10, 11, 12, 13, 14, 15),
    (14, 10, 4, 8, 9, 15, 13, 6, 1, 12, 0, 2, 11, 7, 5, 3),
)

# Column step followed by diagonal step of one round.
_G_LANES = (
    (0, 4, 8, 12),
    (1, 5, 9, 13),
    (2, 6, 10, 14),
    (3, 7, 11, 15),
    (0, 5, 10, 15),
    (1, 6, 11, 12),
    (2, 7, 8, 13),
    (3, 4, 9, 14),
)


def rotr64(w: int, c: int) -> int:
    """Rotate the 64-bit word ``w`` right by ``c`` bits."""
    w &= _MASK64
    return ((w >> c) | (w << (64 - c))) & _MASK64


def _compress(h: list[int], block: bytes, counter: int, last: bool) -> list[int]:
    m = struct.unpack("<16Q", block)
    v = list(h) + list(_IV)
    v[12] ^= counter & _MASK64
    v[13] ^= (counter >> 64) & _MASK64
    if last:
        v[14] ^= _MASK64

    for sigma in _SIGMA:
        for i, (a, b, c, d) in enumerate(_G_LANES):
            x = m[sigma[2 * i]]
            y = m[sigma[2 * i + 1]]
            va, vb, vc, vd = v[a], v[b], v[c], v[d]
            va = (va + vb + x) & _MASK64
            vd = rotr64(vd ^ va, 32)
            vc = (vc + vd) & _MASK64
            vb = rotr64(vb ^ vc, 24)
            va = (va + vb + y) & _MASK64
            vd = rotr64(vd ^ va, 16)
            vc = (vc + vd) & _MASK64
            vb = rotr64(vb ^ vc, 63)
            v[a], v[b], v[c], v[d] = va, vb, vc, vd

    return [hi ^ lo ^ hi8 for hi, lo, hi8 in zip(h, v[:8], v[8:])]


def blake2b(data: bytes = b"", digest_size: int = OUT_BYTES, key: bytes = b"") -> bytes:
    """Return the BLAKE2b digest of ``data``, optionally keyed.

    Raises ``ValueError`` if ``digest_size`` is not in 1..64 or the key is
    longer than 64 bytes.
    """
    if not 0 < digest_size <= OUT_BYTES:
        raise ValueError(f"digest_size must be between 1 and {OUT_BYTES}, got {digest_size}")
    key = bytes(key)
    if len(key) > KEY_BYTES:
        raise ValueError(f"key must be at most {KEY_BYTES} bytes, got {len(key)}")

    h = list(_IV)
    h[0] ^= 0x01010000 ^ (len(key) << 8) ^ digest_size

    message = bytes(data)
    if key:
        message = key.ljust(BLOCK_BYTES, b"\x00") + message

    counter = 0
    # Every block except the last one is compressed as a non-final block;
    # the last (possibly full, possibly empty) block is padded and finalised.
    last_start = max(0, (len(message) - 1) // BLOCK_BYTES * BLOCK_BYTES)
    for start in range(0, last_start, BLOCK_BYTES):
        counter += BLOCK_BYTES
        h = _compress(h, message[start:start + BLOCK_BYTES], counter, False)

    tail = message[last_start:]
    counter += len(tail)
    h = _compress(h, tail.ljust(BLOCK_BYTES, b"\x00"), counter, True)

    return struct.pack("<8Q", *h)[:digest_size]


def blake2b_long(data: bytes, outlen: int) -> bytes:
    """Return ``outlen`` bytes of BLAKE2b output of arbitrary length (Argon2's H').

    Raises ``ValueError`` if ``outlen`` is zero or does not fit in 32 bits.
    """
    if outlen > _UINT32_MAX:
        raise ValueError(f"outlen must fit in 32 bits, got {outlen}")
    if outlen <= 0:
        raise ValueError(f"outlen must be positive, got {outlen}")

    prefixed = struct.pack("<I", outlen) + bytes(data)
    if outlen <= OUT_BYTES:
        return blake2b(prefixed, outlen)

    half = OUT_BYTES // 2
    out_buffer = blake2b(prefixed, OUT_BYTES)
    pieces = [out_buffer[:half]]
    remaining = outlen - half

    while remaining > OUT_BYTES:
        out_buffer = blake2b(out_buffer, OUT_BYTES)
        pieces.append(out_buffer[:half])
        remaining -= half

    pieces.append(blake2b(out_buffer, remaining))
    return b"".join(pieces)