import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from rxhash.argon2 import (
    SYNC_POINTS,
    VERSION_10,
    VERSION_13,
    Argon2Context,
    Argon2Instance,
    Argon2Position,
    Argon2Type,
    fill_first_blocks,
    fill_memory_blocks,
    fill_segment,
    index_alpha,
    initial_hash,
    initialize,
)
from rxhash.blamka import QWORDS_IN_BLOCK, fill_block

ZERO_BLOCK = [0] * QWORDS_IN_BLOCK


def _context(memory=16, lanes=1, passes=1, version=VERSION_13):
    pwd = b"password"
    return Argon2Context(
        pwd=pwd,
        salt=b"somesalt",
        t_cost=passes,
        m_cost=memory,
        lanes=lanes,
        threads=lanes,
        version=version,
    )


def _filled(memory=16, lanes=1, passes=1, version=VERSION_13):
    ctx = _context(memory, lanes, passes, version)
    instance = Argon2Instance(memory, lanes, passes, version, Argon2Type.ARGON2_D)
    initialize(instance, ctx)
    fill_memory_blocks(instance)
    return instance


def test_instance_geometry():
    instance = Argon2Instance(18, 1, 1)
    assert instance.memory_blocks == 16
    assert instance.lane_length == instance.segment_length * SYNC_POINTS
    assert len(instance.memory) == instance.memory_blocks


def test_instance_rejects_too_little_memory():
    with pytest.raises(ValueError):
        Argon2Instance(15, 2, 1)


def test_context_rejects_zero_lanes():
    with pytest.raises(ValueError):
        Argon2Context(lanes=0, m_cost=8)


def test_context_rejects_small_memory():
    with pytest.raises(ValueError):
        Argon2Context(lanes=2, m_cost=15)


def test_context_rejects_zero_time_cost():
    with pytest.raises(ValueError):
        Argon2Context(t_cost=0)


def test_initial_hash_length_and_type_dependence():
    ctx = _context()
    d = initial_hash(ctx, Argon2Type.ARGON2_D)
    i = initial_hash(ctx, Argon2Type.ARGON2_I)
    assert len(d) == 64
    assert d != i
    assert initial_hash(ctx, Argon2Type.ARGON2_D) == d


def test_initial_hash_none_equals_empty():
    assert initial_hash(Argon2Context(pwd=None), Argon2Type.ARGON2_D) == initial_hash(
        Argon2Context(pwd=b""), Argon2Type.ARGON2_D
    )


def test_initial_hash_depends_on_salt():
    a = initial_hash(Argon2Context(salt=b"saltsalt"), Argon2Type.ARGON2_D)
    b = initial_hash(Argon2Context(salt=b"saltsalX"), Argon2Type.ARGON2_D)
    assert a != b


def test_fill_first_blocks_touches_only_first_two_per_lane():
    instance = Argon2Instance(16, 2, 1)
    fill_first_blocks(initial_hash(_context(16, 2), instance.type), instance)
    firsts = {0, 1, instance.lane_length, instance.lane_length + 1}
    for idx, block in enumerate(instance.memory):
        if idx in firsts:
            assert block != ZERO_BLOCK
        else:
            assert block == ZERO_BLOCK
    assert len({tuple(instance.memory[k]) for k in firsts}) == 4


def test_fill_first_blocks_rejects_short_hash():
    with pytest.raises(ValueError):
        fill_first_blocks(b"\x00" * 10, Argon2Instance(8, 1, 1))


def test_initialize_matches_fill_first_blocks():
    ctx = _context()
    a = Argon2Instance(16, 1, 1)
    initialize(a, ctx)
    b = Argon2Instance(16, 1, 1)
    fill_first_blocks(initial_hash(ctx, b.type), b)
    assert a.memory == b.memory
    assert a.context is ctx


def test_fill_segment_first_segment():
    instance = Argon2Instance(16, 1, 1)
    initialize(instance, _context())
    fill_segment(instance, Argon2Position(pass_=0, lane=0, slice=0))
    assert instance.memory[2] == fill_block(instance.memory[1], instance.memory[0], None, False)
    assert instance.memory[3] != ZERO_BLOCK
    assert all(block == ZERO_BLOCK for block in instance.memory[4:])


def test_fill_memory_blocks_deterministic_and_complete():
    a = _filled(16, 2, 1)
    b = _filled(16, 2, 1)
    assert a.memory == b.memory
    assert all(block != ZERO_BLOCK for block in a.memory)


def test_index_alpha_extremes_first_segment():
    instance = Argon2Instance(64, 1, 1)
    pos = Argon2Position(pass_=0, lane=0, slice=0, index=5)
    assert index_alpha(instance, pos, 0, True) == 3
    assert index_alpha(instance, pos, 0xFFFFFFFF, True) == 0


@settings(max_examples=200)
@given(index=st.integers(2, 15), pseudo=st.integers(0, 0xFFFFFFFF))
def test_index_alpha_first_segment_references_earlier_blocks(index, pseudo):
    instance = Argon2Instance(64, 1, 1)
    pos = Argon2Position(pass_=0, lane=0, slice=0, index=index)
    assert 0 <= index_alpha(instance, pos, pseudo, True) <= index - 2


@settings(max_examples=200)
@given(
    slice_=st.integers(0, SYNC_POINTS - 1),
    index=st.integers(0, 15),
    pseudo=st.integers(0, 0xFFFFFFFF),
    same_lane=st.booleans(),
)
def test_index_alpha_later_pass_stays_in_lane(slice_, index, pseudo, same_lane):
    instance = Argon2Instance(128, 2, 2)
    pos = Argon2Position(pass_=1, lane=0, slice=slice_, index=index)
    result = index_alpha(instance, pos, pseudo, same_lane)
    assert 0 <= result < instance.lane_length