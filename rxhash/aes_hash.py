"""Four-lane single-round AES hashing and pseudorandom fill functions.

These constructions are fast but are not general-purpose cryptographic hashes
or generators. Vectors are 16-byte little-endian blocks that match the memory
layout of an x86 128-bit register.
"""

from __future__ import annotations

import struct

__all__ = [
    "aesenc",
    "aesdec",
    "hash_aes_1rx4",
    "fill_aes_1rx4",
    "fill_aes_4rx4",
    "hash_and_fill_aes_1rx4",
    "HASH_SIZE",
    "STATE_SIZE",
]

HASH_SIZE = 64
STATE_SIZE = 64
_CHUNK = 64

Vec = tuple[int, int, int, int]


def _gf_mul(a: int, b: int) -> int:
    result = 0
    while b:
        if b & 1:
            result ^= a
        a <<= 1
        if a & 0x100:
            a ^= 0x11B
        b >>= 1
    return result


def _build_sboxes() -> tuple[list[int], list[int]]:
    sbox = [0] * 256
    for x in range(256):
        inv = 0 if x == 0 else next(y for y in range(1, 256) if _gf_mul(x, y) == 1)
        s = inv
        for shift in range(1, 5):
            s ^= ((inv << shift) | (inv >> (8 - shift))) & 0xFF
        sbox[x] = s ^ 0x63
    inv_sbox = [0] * 256
    for x, s in enumerate(sbox):
        inv_sbox[s] = x
    return sbox, inv_sbox


def _build_tables(box: list[int], coefficients: tuple[int, int, int, int]) -> tuple[list[int], ...]:
    tables = []
    for rotation in range(4):
        coeffs = coefficients[-rotation:] + coefficients[:-rotation] if rotation else coefficients
        table = []
        for x in range(256):
            s = box[x]
            word = 0
            for row, c in enumerate(coeffs):
                word |= _gf_mul(s, c) << (8 * row)
            table.append(word)
        tables.append(table)
    return tuple(tables)


_SBOX, _INV_SBOX = _build_sboxes()
_TE0, _TE1, _TE2, _TE3 = _build_tables(_SBOX, (2, 1, 1, 3))
_TD0, _TD1, _TD2, _TD3 = _build_tables(_INV_SBOX, (14, 9, 13, 11))


def _enc(s: Vec, k: Vec) -> Vec:
    s0, s1, s2, s3 = s
    return (
        _TE0[s0 & 0xFF] ^ _TE1[(s1 >> 8) & 0xFF] ^ _TE2[(s2 >> 16) & 0xFF] ^ _TE3[s3 >> 24] ^ k[0],
        _TE0[s1 & 0xFF] ^ _TE1[(s2 >> 8) & 0xFF] ^ _TE2[(s3 >> 16) & 0xFF] ^ _TE3[s0 >> 24] ^ k[1],
        _TE0[s2 & 0xFF] ^ _TE1[(s3 >> 8) & 0xFF] ^ _TE2[(s0 >> 16) & 0xFF] ^ _TE3[s1 >> 24] ^ k[2],
        _TE0[s3 & 0xFF] ^ _TE1[(s0 >> 8) & 0xFF] ^ _TE2[(s1 >> 16) & 0xFF] ^ _TE3[s2 >> 24] ^ k[3],
    )


def _dec(s: Vec, k: Vec) -> Vec:
    s0, s1, s2, s3 = s
    return (
        _TD0[s0 & 0xFF] ^ _TD1[(s3 >> 8) & 0xFF] ^ _TD2[(s2 >> 16) & 0xFF] ^ _TD3[s1 >> 24] ^ k[0],
        _TD0[s1 & 0xFF] ^ _TD1[(s0 >> 8) & 0xFF] ^ _TD2[(s3 >> 16) & 0xFF] ^ _TD3[s2 >> 24] ^ k[1],
        _TD0[s2 & 0xFF] ^ _TD1[(s1 >> 8) & 0xFF] ^ _TD2[(s0 >> 16) & 0xFF] ^ _TD3[s3 >> 24] ^ k[2],
        _TD0[s3 & 0xFF] ^ _TD1[(s2 >> 8) & 0xFF] ^ _TD2[(s1 >> 16) & 0xFF] ^ _TD3[s0 >> 24] ^ k[3],
    )


def _vec(i3: int, i2: int, i1: int, i0: int) -> Vec:
    """Build a vector from 32-bit words given most significant first."""
    return (i0, i1, i2, i3)


def _to_vec(block: bytes, name: str) -> Vec:
    if len(block) != 16:
        raise ValueError(f"{name} must be 16 bytes, got {len(block)}")
    return struct.unpack("<4I", block)


def _split_state(state: bytes) -> tuple[Vec, Vec, Vec, Vec]:
    if len(state) != STATE_SIZE:
        raise ValueError(f"state must be {STATE_SIZE} bytes, got {len(state)}")
    words = struct.unpack("<16I", state)
    return words[0:4], words[4:8], words[8:12], words[12:16]


def _join(*vectors: Vec) -> bytes:
    return struct.pack("<16I", *(w for v in vectors for w in v))


def _check_size(size: int, name: str) -> None:
    if size < 0 or size % _CHUNK:
        raise ValueError(f"{name} must be a non-negative multiple of {_CHUNK}, got {size}")


# Blake2b-512("RandomX AesHash1R state"), Blake2b-256("RandomX AesHash1R xkeys")
_HASH_STATE0 = _vec(0xD7983AAD, 0xCC82DB47, 0x9FA856DE, 0x92B52C0D)
_HASH_STATE1 = _vec(0xACE78057, 0xF59E125A, 0x15C7B798, 0x338D996E)
_HASH_STATE2 = _vec(0xE8A07CE4, 0x5079506B, 0xAE62C7D0, 0x6A770017)
_HASH_STATE3 = _vec(0x7E994948, 0x79A10005, 0x07AD828D, 0x630A240C)
_HASH_XKEY0 = _vec(0x06890201, 0x90DC56BF, 0x8B24949F, 0xF6FA8389)
_HASH_XKEY1 = _vec(0xED18F99B, 0xEE1043C6, 0x51F4E03C, 0x61B263D1)

# Blake2b-512("RandomX AesGenerator1R keys")
_GEN1_KEYS = (
    _vec(0xB4F44917, 0xDBB5552B, 0x62716609, 0x6DACA553),
    _vec(0x0DA1DC4E, 0x1725D378, 0x846A710D, 0x6D7CAF07),
    _vec(0x3E20E345, 0xF4C0794F, 0x9F947EC6, 0x3F1262F1),
    _vec(0x49169154, 0x16314C88, 0xB1BA317C, 0x6AEF8135),
)

# Blake2b-512("RandomX AesGenerator4R keys 0-3") and ("... keys 4-7")
_GEN4_KEYS = (
    _vec(0x99E5D23F, 0x2F546D2B, 0xD1833DDB, 0x6421AADD),
    _vec(0xA5DFCDE5, 0x06F79D53, 0xB6913F55, 0xB20E3450),
    _vec(0x171C02BF, 0x0AA4679F, 0x515E7BAF, 0x5C3ED904),
    _vec(0xD8DED291, 0xCD673785, 0xE78F5D08, 0x85623763),
    _vec(0x229EFFB4, 0x3D518B6D, 0xE3D6A7A6, 0xB5826F73),
    _vec(0xB272B7D2, 0xE9024D4E, 0x9C10B3D9, 0xC7566BF3),
    _vec(0xF63BEFA7, 0x2BA9660A, 0xF765A38B, 0xF273C9E7),
    _vec(0xC0B0762D, 0x0C06D1FD, 0x915839DE, 0x7A7CD609),
)


def aesenc(state: bytes, key: bytes) -> bytes:
    """One AES encryption round (ShiftRows, SubBytes, MixColumns, AddRoundKey)."""
    return struct.pack("<4I", *_enc(_to_vec(state, "state"), _to_vec(key, "key")))


def aesdec(state: bytes, key: bytes) -> bytes:
    """One AES decryption round (InvShiftRows, InvSubBytes, InvMixColumns, AddRoundKey)."""
    return struct.pack("<4I", *_dec(_to_vec(state, "state"), _to_vec(key, "key")))


def _finish_hash(s0: Vec, s1: Vec, s2: Vec, s3: Vec) -> bytes:
    for xkey in (_HASH_XKEY0, _HASH_XKEY1):
        s0 = _enc(s0, xkey)
        s1 = _dec(s1, xkey)
        s2 = _enc(s2, xkey)
        s3 = _dec(s3, xkey)
    return _join(s0, s1, s2, s3)


def hash_aes_1rx4(data: bytes) -> bytes:
    """Return a 64-byte hash of ``data`` using each 64-byte chunk as four round keys.

    Raises ``ValueError`` if the length of ``data`` is not a multiple of 64.
    """
    data = bytes(data)
    _check_size(len(data), "input size")
    s0, s1, s2, s3 = _HASH_STATE0, _HASH_STATE1, _HASH_STATE2, _HASH_STATE3
    for offset in range(0, len(data), _CHUNK):
        words = struct.unpack_from("<16I", data, offset)
        s0 = _enc(s0, words[0:4])
        s1 = _dec(s1, words[4:8])
        s2 = _enc(s2, words[8:12])
        s3 = _dec(s3, words[12:16])
    return _finish_hash(s0, s1, s2, s3)


def fill_aes_1rx4(state: bytes, output_size: int) -> tuple[bytes, bytes]:
    """Generate ``output_size`` pseudorandom bytes from a 64-byte state.

    Returns the output and the updated state, which continues the stream.
    """
    _check_size(output_size, "output_size")
    s0, s1, s2, s3 = _split_state(bytes(state))
    k0, k1, k2, k3 = _GEN1_KEYS
    chunks = []
    for _ in range(output_size // _CHUNK):
        s0 = _dec(s0, k0)
        s1 = _enc(s1, k1)
        s2 = _dec(s2, k2)
        s3 = _enc(s3, k3)
        chunks.append(_join(s0, s1, s2, s3))
    return b"".join(chunks), _join(s0, s1, s2, s3)


def fill_aes_4rx4(state: bytes, output_size: int) -> bytes:
    """Generate ``output_size`` pseudorandom bytes with four AES rounds per 16 bytes."""
    _check_size(output_size, "output_size")
    s0, s1, s2, s3 = _split_state(bytes(state))
    keys_low = _GEN4_KEYS[:4]
    keys_high = _GEN4_KEYS[4:]
    chunks = []
    for _ in range(output_size // _CHUNK):
        for low, high in zip(keys_low, keys_high):
            s0 = _dec(s0, low)
            s1 = _enc(s1, low)
            s2 = _dec(s2, high)
            s3 = _enc(s3, high)
        chunks.append(_join(s0, s1, s2, s3))
    return b"".join(chunks)


def hash_and_fill_aes_1rx4(scratchpad: bytes, fill_state: bytes) -> tuple[bytes, bytes, bytes]:
    """Hash ``scratchpad`` while overwriting it with a fresh pseudorandom fill.

    Returns ``(hash, new_scratchpad, new_fill_state)``. The hash equals
    ``hash_aes_1rx4(scratchpad)`` and the new contents equal the output of
    ``fill_aes_1rx4(fill_state, len(scratchpad))``.
    """
    scratchpad = bytes(scratchpad)
    _check_size(len(scratchpad), "scratchpad size")
    h0, h1, h2, h3 = _HASH_STATE0, _HASH_STATE1, _HASH_STATE2, _HASH_STATE3
    f0, f1, f2, f3 = _split_state(bytes(fill_state))
    k0, k1, k2, k3 = _GEN1_KEYS
    chunks = []
    for offset in range(0, len(scratchpad), _CHUNK):
        words = struct.unpack_from("<16I", scratchpad, offset)
        h0 = _enc(h0, words[0:4])
        h1 = _dec(h1, words[4:8])
        h2 = _enc(h2, words[8:12])
        h3 = _dec(h3, words[12:16])

        f0 = _dec(f0, k0)
        f1 = _enc(f1, k1)
        f2 = _dec(f2, k2)
        f3 = _enc(f3, k3)
        chunks.append(_join(f0, f1, f2, f3))

    return _finish_hash(h0, h1, h2, h3), b"".join(chunks), _join(f0, f1, f2, f3)