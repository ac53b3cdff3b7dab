"""BLAKE3 hashing used to derive stable record identifiers."""

from __future__ import annotations

import struct
from typing import NamedTuple

_MASK = 0xFFFFFFFF
_BLOCK_LEN = 64
_CHUNK_LEN = 1024

_CHUNK_START = 1 << 0
_CHUNK_END = 1 << 1
_PARENT = 1 << 2
_ROOT = 1 << 3

_IV = (
    0x6A09E667,
    0xBB67AE85,
    0x3C6EF372,
    0xA54FF53A,
    0x510E527F,
    0x9B05688C,
    0x1F83D9AB,
    0x5BE0CD19,
)

_MSG_PERMUTATION = (2, 6, 3, 10, 7, 0, 4, 13, 1, 11, 12, 5, 9, 14, 15, 8)


def _rotr(x: int, n: int) -> int:
    return ((x >> n) | (x << (32 - n))) & _MASK


def _g(s: list[int], a: int, b: int, c: int, d: int, mx: int, my: int) -> None:
    s[a] = (s[a] + s[b] + mx) & _MASK
    s[d] = _rotr(s[d] ^ s[a], 16)
    s[c] = (s[c] + s[d]) & _MASK
    s[b] = _rotr(s[b] ^ s[c], 12)
    s[a] = (s[a] + s[b] + my) & _MASK
    s[d] = _rotr(s[d] ^ s[a], 8)
    s[c] = (s[c] + s[d]) & _MASK
    s[b] = _rotr(s[b] ^ s[c], 7)


def _round(s: list[int], m: list[int]) -> None:
    # Columns.
    _g(s, 0, 4, 8, 12, m[0], m[1])
    _g(s, 1, 5, 9, 13, m[2], m[3])
    _g(s, 2, 6, 10, 14, m[4], m[5])
    _g(s, 3, 7, 11, 15, m[6], m[7])
    # Diagonals.
    _g(s, 0, 5, 10, 15, m[8], m[9])
    _g(s, 1, 6, 11, 12, m[10], m[11])
    _g(s, 2, 7, 8, 13, m[12], m[13])
    _g(s, 3, 4, 9, 14, m[14], m[15])


def _compress(
    cv: tuple[int, ...] | list[int],
    block_words: tuple[int, ...],
    counter: int,
    block_len: int,
    flags: int,
) -> list[int]:
    state = [
        *cv,
        *_IV[:4],
        counter & _MASK,
        (counter >> 32) & _MASK,
        block_len,
        flags,
    ]
    message = list(block_words)
    for round_no in range(7):
        _round(state, message)
        if round_no < 6:
            message = [message[p] for p in _MSG_PERMUTATION]
    low, high = state[:8], state[8:]
    return [a ^ b for a, b in zip(low, high)] + [h ^ c for h, c in zip(high, cv)]


def _words(block: bytes) -> tuple[int, ...]:
    return struct.unpack("<16I", block.ljust(_BLOCK_LEN, b"\0"))


class _Output(NamedTuple):
    input_cv: tuple[int, ...]
    block_words: tuple[int, ...]
    counter: int
    block_len: int
    flags: int

    def chaining_value(self) -> tuple[int, ...]:
        words = _compress(
            self.input_cv, self.block_words, self.counter, self.block_len, self.flags
        )
        return tuple(words[:8])

    def root_words(self) -> list[int]:
        return _compress(
            self.input_cv, self.block_words, 0, self.block_len, self.flags | _ROOT
        )[:8]


def _chunk_output(chunk: bytes, counter: int) -> _Output:
    blocks = [chunk[i : i + _BLOCK_LEN] for i in range(0, len(chunk), _BLOCK_LEN)] or [b""]
    cv: tuple[int, ...] = _IV
    flags = _CHUNK_START
    for block in blocks[:-1]:
        cv = tuple(_compress(cv, _words(block), counter, _BLOCK_LEN, flags)[:8])
        flags = 0
    last = blocks[-1]
    return _Output(cv, _words(last), counter, len(last), flags | _CHUNK_END)


def _tree_output(chunks: list[bytes], first_index: int) -> _Output:
    if len(chunks) == 1:
        return _chunk_output(chunks[0], first_index)
    left_count = 1 << ((len(chunks) - 1).bit_length() - 1)
    left = _tree_output(chunks[:left_count], first_index)
    right = _tree_output(chunks[left_count:], first_index + left_count)
    block = left.chaining_value() + right.chaining_value()
    return _Output(_IV, block, 0, _BLOCK_LEN, _PARENT)


def blake3_hex(data: bytes | str) -> str:
    """Return the 32-byte BLAKE3 digest of ``data`` as lower-case hex.

    Text is encoded as UTF-8 before hashing.
    """
    if isinstance(data, str):
        data = data.encode("utf-8")
    data = bytes(data)
    chunks = [data[i : i + _CHUNK_LEN] for i in range(0, len(data), _CHUNK_LEN)] or [b""]
    return struct.pack("<8I", *_tree_output(chunks, 0).root_words()).hex()