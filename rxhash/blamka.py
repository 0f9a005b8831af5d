"""The BlaMka round function and the Argon2 block compression built on it."""

from __future__ import annotations

from collections.abc import Sequence

from .blake2 import rotr64

__all__ = ["fblamka", "blamka_round", "fill_block", "QWORDS_IN_BLOCK"]

QWORDS_IN_BLOCK = 128

_MASK64 = 0xFFFFFFFFFFFFFFFF
_MASK32 = 0xFFFFFFFF

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

_COLUMN_GROUPS = tuple(tuple(range(16 * i, 16 * i + 16)) for i in range(8))
_ROW_GROUPS = tuple(
    tuple(2 * i + offset + half for offset in range(0, 128, 16) for half in (0, 1))
    for i in range(8)
)


def fblamka(x: int, y: int) -> int:
    """Return ``x + y + 2 * lo32(x) * lo32(y)`` modulo 2**64."""
    return (x + y + 2 * ((x & _MASK32) * (y & _MASK32))) & _MASK64


def blamka_round(v: Sequence[int]) -> list[int]:
    """Apply one message-less BlaMka round to 16 words and return the result."""
    if len(v) != 16:
        raise ValueError(f"a BlaMka round takes 16 words, got {len(v)}")
    w = [x & _MASK64 for x in v]
    for a, b, c, d in _G_LANES:
        va, vb, vc, vd = w[a], w[b], w[c], w[d]
        va = fblamka(va, vb)
        vd = rotr64(vd ^ va, 32)
        vc = fblamka(vc, vd)
        vb = rotr64(vb ^ vc, 24)
        va = fblamka(va, vb)
        vd = rotr64(vd ^ va, 16)
        vc = fblamka(vc, vd)
        vb = rotr64(vb ^ vc, 63)
        w[a], w[b], w[c], w[d] = va, vb, vc, vd
    return w


def _check_block(name: str, block: Sequence[int]) -> None:
    if len(block) != QWORDS_IN_BLOCK:
        raise ValueError(f"{name} must hold {QWORDS_IN_BLOCK} words, got {len(block)}")


def fill_block(
    prev_block: Sequence[int],
    ref_block: Sequence[int],
    next_block: Sequence[int] | None,
    with_xor: bool,
) -> list[int]:
    """Compress ``prev_block`` and ``ref_block`` into a new 128-word block.

    With ``with_xor`` the old contents of ``next_block`` are XORed into the
    result; otherwise ``next_block`` is ignored. The new block is returned.
    """
    _check_block("prev_block", prev_block)
    _check_block("ref_block", ref_block)
    block_r = [(r ^ p) & _MASK64 for r, p in zip(ref_block, prev_block)]
    if with_xor:
        if next_block is None:
            raise ValueError("next_block is required when with_xor is set")
        _check_block("next_block", next_block)
        block_tmp = [r ^ (n & _MASK64) for r, n in zip(block_r, next_block)]
    else:
        block_tmp = list(block_r)

    for groups in (_COLUMN_GROUPS, _ROW_GROUPS):
        for indices in groups:
            mixed = blamka_round([block_r[k] for k in indices])
            for k, value in zip(indices, mixed):
                block_r[k] = value

    return [t ^ r for t, r in zip(block_tmp, block_r)]