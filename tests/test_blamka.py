import pytest
from hypothesis import given, strategies as st

from rxhash.blamka import blamka_round, fblamka, fill_block

MASK64 = 0xFFFFFFFFFFFFFFFF
words = st.integers(min_value=0, max_value=MASK64)
blocks = st.lists(words, min_size=128, max_size=128)


def test_fblamka_small_values():
    assert fblamka(0, 0) == 0
    assert fblamka(1, 1) == 4


def test_fblamka_ignores_high_halves_in_product():
    assert fblamka(1 << 32, 1 << 32) == 1 << 33


@given(words, words)
def test_fblamka_commutative_and_in_range(x, y):
    r = fblamka(x, y)
    assert r == fblamka(y, x)
    assert 0 <= r <= MASK64


@given(words)
def test_fblamka_zero_is_identity(x):
    assert fblamka(x, 0) == x


def test_blamka_round_zero_fixed_point():
    assert blamka_round([0] * 16) == [0] * 16


@given(st.lists(words, min_size=16, max_size=16))
def test_blamka_round_does_not_mutate_input(v):
    original = list(v)
    out = blamka_round(v)
    assert v == original
    assert len(out) == 16
    assert blamka_round(v) == out


def test_blamka_round_wrong_length():
    with pytest.raises(ValueError):
        blamka_round([0] * 15)


def test_fill_block_zero_blocks():
    zero = [0] * 128
    assert fill_block(zero, zero, None, False) == zero


@given(blocks, blocks)
def test_fill_block_symmetric_in_inputs(prev, ref):
    assert fill_block(prev, ref, None, False) == fill_block(ref, prev, None, False)


@given(blocks, blocks, blocks)
def test_fill_block_with_xor_adds_next_block(prev, ref, nxt):
    plain = fill_block(prev, ref, None, False)
    xored = fill_block(prev, ref, nxt, True)
    assert xored == [p ^ n for p, n in zip(plain, nxt)]


def test_fill_block_without_xor_ignores_next_block():
    prev = list(range(128))
    ref = [i * 7 for i in range(128)]
    assert fill_block(prev, ref, [5] * 128, False) == fill_block(prev, ref, None, False)


def test_fill_block_nonzero_input_changes_output():
    prev = [0] * 128
    prev[0] = 1
    out = fill_block(prev, [0] * 128, None, False)
    assert out != prev
    assert all(0 <= w <= MASK64 for w in out)


def test_fill_block_wrong_length():
    with pytest.raises(ValueError):
        fill_block([0] * 127, [0] * 128, None, False)


def test_fill_block_xor_requires_next():
    with pytest.raises(ValueError):
        fill_block([0] * 128, [0] * 128, None, True)