"""Argon2 memory filling: initial hashing, first blocks and segment filling."""

from __future__ import annotations

import struct
from dataclasses import dataclass, replace
from enum import IntEnum

from .blake2 import OUT_BYTES, blake2b, blake2b_long
from .blamka import QWORDS_IN_BLOCK, fill_block

__all__ = [
    "Argon2Type",
    "Argon2Context",
    "Argon2Position",
    "Argon2Instance",
    "index_alpha",
    "initial_hash",
    "fill_first_blocks",
    "initialize",
    "fill_segment",
    "fill_memory_blocks",
    "BLOCK_SIZE",
    "SYNC_POINTS",
    "PREHASH_DIGEST_LENGTH",
    "VERSION_10",
    "VERSION_13",
]

BLOCK_SIZE = 1024
SYNC_POINTS = 4
PREHASH_DIGEST_LENGTH = 64
VERSION_10 = 0x10
VERSION_13 = 0x13

_MASK32 = 0xFFFFFFFF
_MASK64 = 0xFFFFFFFFFFFFFFFF


class Argon2Type(IntEnum):
    """The Argon2 variants; the value is hashed into the initial digest."""

    ARGON2_D = 0
    ARGON2_I = 1
    ARGON2_ID = 2


@dataclass
class Argon2Context:
    """Inputs and cost parameters of one Argon2 computation.

    Raises ``ValueError`` on construction if the parameters are out of range.
    """

    pwd: bytes | None = None
    salt: bytes | None = None
    secret: bytes | None = None
    ad: bytes | None = None
    t_cost: int = 1
    m_cost: int = 8
    lanes: int = 1
    threads: int = 1
    outlen: int = 32
    version: int = VERSION_13

    def __post_init__(self) -> None:
        for name in ("pwd", "salt", "secret", "ad"):
            value = getattr(self, name)
            if value is not None and len(value) > _MASK32:
                raise ValueError(f"{name} is too long")
        if self.lanes < 1:
            raise ValueError(f"lanes must be at least 1, got {self.lanes}")
        if self.threads < 1:
            raise ValueError(f"threads must be at least 1, got {self.threads}")
        if self.t_cost < 1:
            raise ValueError(f"t_cost must be at least 1, got {self.t_cost}")
        if self.m_cost < 2 * SYNC_POINTS * self.lanes:
            raise ValueError(
                f"m_cost must be at least {2 * SYNC_POINTS * self.lanes} for "
                f"{self.lanes} lane(s), got {self.m_cost}"
            )
        if not 0 <= self.outlen <= _MASK32:
            raise ValueError(f"outlen must fit in 32 bits, got {self.outlen}")


@dataclass
class Argon2Position:
    """Where a block is being constructed: pass, lane, slice and index."""

    pass_: int
    lane: int
    slice: int
    index: int = 0


class Argon2Instance:
    """Working memory of an Argon2 computation and the values derived from its size."""

    def __init__(
        self,
        memory_blocks: int,
        lanes: int = 1,
        passes: int = 1,
        version: int = VERSION_13,
        type: Argon2Type = Argon2Type.ARGON2_D,
    ) -> None:
        if lanes < 1:
            raise ValueError(f"lanes must be at least 1, got {lanes}")
        if passes < 1:
            raise ValueError(f"passes must be at least 1, got {passes}")
        if memory_blocks < 2 * SYNC_POINTS * lanes:
            raise ValueError(
                f"memory_blocks must be at least {2 * SYNC_POINTS * lanes}, got {memory_blocks}"
            )
        self.segment_length = memory_blocks // (lanes * SYNC_POINTS)
        self.lane_length = self.segment_length * SYNC_POINTS
        self.memory_blocks = self.lane_length * lanes
        self.lanes = lanes
        self.passes = passes
        self.version = version
        self.type = Argon2Type(type)
        self.context: Argon2Context | None = None
        self.memory: list[list[int]] = [
            [0] * QWORDS_IN_BLOCK for _ in range(self.memory_blocks)
        ]


def index_alpha(
    instance: Argon2Instance,
    position: Argon2Position,
    pseudo_rand: int,
    same_lane: bool,
) -> int:
    """Return the index within a lane of the reference block for ``position``."""
    segment_length = instance.segment_length
    lane_length = instance.lane_length
    missing = -1 if position.index == 0 else 0

    if position.pass_ == 0:
        if position.slice == 0:
            area = position.index - 1
        elif same_lane:
            area = position.slice * segment_length + position.index - 1
        else:
            area = position.slice * segment_length + missing
    elif same_lane:
        area = lane_length - segment_length + position.index - 1
    else:
        area = lane_length - segment_length + missing
    area &= _MASK32

    relative = pseudo_rand & _MASK32
    relative = (relative * relative) >> 32
    relative = (area - 1 - ((area * relative) >> 32)) & _MASK64

    start = 0
    if position.pass_ != 0 and position.slice != SYNC_POINTS - 1:
        start = (position.slice + 1) * segment_length

    return ((start + relative) % lane_length) & _MASK32


def _pack_bytes(value: bytes | None) -> bytes:
    data = b"" if value is None else bytes(value)
    return struct.pack("<I", len(data)) + data


def initial_hash(context: Argon2Context, type: Argon2Type) -> bytes:
    """Return the 64-byte digest H0 of all inputs and parameters of ``context``."""
    header = struct.pack(
        "<6I",
        context.lanes,
        context.outlen,
        context.m_cost,
        context.t_cost,
        context.version,
        int(type),
    )
    message = header + b"".join(
        _pack_bytes(part)
        for part in (context.pwd, context.salt, context.secret, context.ad)
    )
    return blake2b(message, PREHASH_DIGEST_LENGTH)


def _block_from_bytes(data: bytes) -> list[int]:
    return list(struct.unpack(f"<{QWORDS_IN_BLOCK}Q", data))


def fill_first_blocks(blockhash: bytes, instance: Argon2Instance) -> None:
    """Set the first two blocks of every lane to H'(H0 || j || lane) for j = 0, 1."""
    if len(blockhash) < PREHASH_DIGEST_LENGTH:
        raise ValueError(
            f"blockhash must hold at least {PREHASH_DIGEST_LENGTH} bytes, got {len(blockhash)}"
        )
    digest = bytes(blockhash[:PREHASH_DIGEST_LENGTH])
    for lane in range(instance.lanes):
        for j in (0, 1):
            seed = digest + struct.pack("<II", j, lane)
            instance.memory[lane * instance.lane_length + j] = _block_from_bytes(
                blake2b_long(seed, BLOCK_SIZE)
            )


def initialize(instance: Argon2Instance, context: Argon2Context) -> None:
    """Hash the inputs of ``context`` and create the first blocks of ``instance``."""
    instance.context = context
    fill_first_blocks(initial_hash(context, instance.type), instance)


def fill_segment(instance: Argon2Instance, position: Argon2Position) -> None:
    """Construct every block of the segment at ``position`` in place."""
    first_segment = position.pass_ == 0 and position.slice == 0
    starting_index = 2 if first_segment else 0
    lane_length = instance.lane_length
    memory = instance.memory

    curr_offset = (
        position.lane * lane_length + position.slice * instance.segment_length + starting_index
    )
    if curr_offset % lane_length == 0:
        prev_offset = curr_offset + lane_length - 1
    else:
        prev_offset = curr_offset - 1

    with_xor = instance.version != VERSION_10 and position.pass_ != 0

    for i in range(starting_index, instance.segment_length):
        if curr_offset % lane_length == 1:
            prev_offset = curr_offset - 1

        pseudo_rand = memory[prev_offset][0]
        ref_lane = position.lane if first_segment else (pseudo_rand >> 32) % instance.lanes

        ref_index = index_alpha(
            instance,
            replace(position, index=i),
            pseudo_rand & _MASK32,
            ref_lane == position.lane,
        )
        ref_block = memory[lane_length * ref_lane + ref_index]
        memory[curr_offset] = fill_block(
            memory[prev_offset], ref_block, memory[curr_offset], with_xor
        )

        curr_offset += 1
        prev_offset += 1


def fill_memory_blocks(instance: Argon2Instance) -> None:
    """Fill the whole memory of ``instance`` for all of its passes."""
    for pass_ in range(instance.passes):
        for slice_ in range(SYNC_POINTS):
            for lane in range(instance.lanes):
                fill_segment(instance, Argon2Position(pass_=pass_, lane=lane, slice=slice_))