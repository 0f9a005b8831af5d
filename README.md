# rxhash

Pure-Python building blocks of a memory-hard proof-of-work hash. There are no
dependencies outside the standard library.

## Modules

### `rxhash.blake2`

- `blake2b(data=b"", digest_size=64, key=b"")` — BLAKE2b digest, keyed or
  unkeyed. Raises `ValueError` if `digest_size` is not in 1..64 or the key is
  longer than 64 bytes.
- `blake2b_long(data, outlen)` — variable-length BLAKE2b output (the H'
  function of Argon2). Raises `ValueError` if `outlen` is not positive or does
  not fit in 32 bits.
- `rotr64(w, c)` — rotate a 64-bit word right by `c` bits.
- Constants `BLOCK_BYTES` (128), `OUT_BYTES` (64), `KEY_BYTES` (64).

### `rxhash.generator`

- `Blake2Generator(seed, nonce=0)` — a deterministic stream. Its 64-byte
  buffer is the seed (cut to `MAX_SEED_SIZE` = 60 bytes, zero padded) followed
  by the nonce as a little-endian 32-bit integer; the buffer is hashed with
  BLAKE2b-512 before the first value and whenever it runs out.
  - `get_byte()` — the next byte, as an `int`.
  - `get_uint32()` — the next little-endian 32-bit unsigned integer.

### `rxhash.blamka`

- `fblamka(x, y)` — `x + y + 2 * lo32(x) * lo32(y)` modulo 2**64.
- `blamka_round(v)` — one message-less BlaMka round over 16 words; returns a
  new list.
- `fill_block(prev_block, ref_block, next_block, with_xor)` — the Argon2 block
  compression over 128-word blocks (`QWORDS_IN_BLOCK`). Returns the new block;
  with `with_xor` the old contents of `next_block` are XORed in.

### `rxhash.argon2`

- `Argon2Type` — `ARGON2_D`, `ARGON2_I`, `ARGON2_ID`; the value is hashed into
  the initial digest.
- `Argon2Context` — dataclass with `pwd`, `salt`, `secret`, `ad`, `t_cost`,
  `m_cost`, `lanes`, `threads`, `outlen`, `version` (default `VERSION_13`).
  Raises `ValueError` when lanes, threads or `t_cost` are below 1, or when
  `m_cost` is below `8 * lanes`.
- `Argon2Position(pass_, lane, slice, index=0)`.
- `Argon2Instance(memory_blocks, lanes=1, passes=1, version=VERSION_13,
  type=Argon2Type.ARGON2_D)` — working memory as `memory`, a list of 128-word
  blocks. The block count is rounded down to a multiple of `4 * lanes`; it also
  exposes `segment_length`, `lane_length`, `memory_blocks` and `context`.
- `initial_hash(context, type)` — the 64-byte digest H0.
- `fill_first_blocks(blockhash, instance)` — set the first two blocks of every
  lane.
- `initialize(instance, context)` — `initial_hash` then `fill_first_blocks`.
- `index_alpha(instance, position, pseudo_rand, same_lane)` — index of the
  reference block within its lane.
- `fill_segment(instance, position)` — build one segment in place.
- `fill_memory_blocks(instance)` — fill all segments for every pass.
- Constants `BLOCK_SIZE`, `SYNC_POINTS`, `PREHASH_DIGEST_LENGTH`,
  `VERSION_10`, `VERSION_13`.

### `rxhash.aes_hash`

All vectors are 16-byte little-endian blocks; states and hashes are 64 bytes.

- `aesenc(state, key)` / `aesdec(state, key)` — one AES encryption or
  decryption round on 16-byte blocks.
- `hash_aes_1rx4(data)` — 64-byte hash; the length of `data` must be a multiple
  of 64.
- `fill_aes_1rx4(state, output_size)` — returns `(output, new_state)`; the new
  state continues the stream.
- `fill_aes_4rx4(state, output_size)` — returns the output only, four AES rounds
  per 16 bytes.
- `hash_and_fill_aes_1rx4(scratchpad, fill_state)` — returns
  `(hash, new_scratchpad, new_fill_state)`, where the hash equals
  `hash_aes_1rx4(scratchpad)` and the new scratchpad equals the output of
  `fill_aes_1rx4(fill_state, len(scratchpad))`.

Sizes that are not non-negative multiples of 64 raise `ValueError`.

These functions are tuned for this scheme and are not meant as general-purpose
hashes or random generators.

## Installation

```
pip install .
```

## Examples

```python
from rxhash.blake2 import blake2b, blake2b_long
from rxhash.generator import Blake2Generator
from rxhash.aes_hash import hash_aes_1rx4, fill_aes_1rx4

digest = blake2b(b"abc")                 # 64 bytes
block = blake2b_long(b"seed", 1024)

gen = Blake2Generator(b"seed", 0)
first = gen.get_byte()
word = gen.get_uint32()

h = hash_aes_1rx4(bytes(128))            # input length must be a multiple of 64
out, state = fill_aes_1rx4(bytes(64), 256)
```

Filling Argon2 memory:

```python
from rxhash.argon2 import (
    Argon2Context, Argon2Instance, Argon2Type, VERSION_13,
    initialize, fill_memory_blocks,
)

pwd = b"password"
context = Argon2Context(pwd=pwd, salt=b"somesalt", t_cost=1, m_cost=8, lanes=1)
instance = Argon2Instance(8, 1, 1, VERSION_13, Argon2Type.ARGON2_D)
initialize(instance, context)
fill_memory_blocks(instance)
blocks = instance.memory                 # list of 128-word blocks
```

## What this package does not do

- It has no command-line tool.
- It fills Argon2 memory but does not compute a final Argon2 tag from it.
- Reference blocks are always chosen from the previous block's contents
  (data-dependent addressing); `Argon2Type` only changes the initial digest.
- Memory is filled in a single thread, whatever `threads` is set to.

## Running the tests

```
pip install .[test]
pytest
```