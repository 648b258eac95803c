"""Salsa20 core permutation, used by scrypt as its mixing primitive."""

from __future__ import annotations

import struct
from typing import List, Sequence

MASK32 = 0xffffffff

_block = struct.Struct('<16I')


def R(a: int, b: int) -> int:
    return ((a << b) & MASK32) | (a >> (32 - b))


def quarterround(y0: int, y1: int, y2: int, y3: int):
    z1 = y1 ^ R((y0 + y3) & MASK32, 7)
    z2 = y2 ^ R((z1 + y0) & MASK32, 9)
    z3 = y3 ^ R((z2 + z1) & MASK32, 13)
    z0 = y0 ^ R((z3 + z2) & MASK32, 18)
    return z0, z1, z2, z3


def rowround(y: List[int]) -> List[int]:
    z = list(y)
    z[0], z[1], z[2], z[3] = quarterround(y[0], y[1], y[2], y[3])
    z[5], z[6], z[7], z[4] = quarterround(y[5], y[6], y[7], y[4])
    z[10], z[11], z[8], z[9] = quarterround(y[10], y[11], y[8], y[9])
    z[15], z[12], z[13], z[14] = quarterround(y[15], y[12], y[13], y[14])
    return z


def columnround(x: List[int]) -> List[int]:
    y = list(x)
    y[0], y[4], y[8], y[12] = quarterround(x[0], x[4], x[8], x[12])
    y[5], y[9], y[13], y[1] = quarterround(x[5], x[9], x[13], x[1])
    y[10], y[14], y[2], y[6] = quarterround(x[10], x[14], x[2], x[6])
    y[15], y[3], y[7], y[11] = quarterround(x[15], x[3], x[7], x[11])
    return y


def doubleround(x: List[int]) -> List[int]:
    return rowround(columnround(x))


def salsa20_core(words: Sequence[int], rounds: int = 8) -> List[int]:
    """Apply ``rounds`` Salsa20 rounds to 16 words and add the input back in.

    ``rounds`` counts single rounds, so it must be a positive even number
    (8 for scrypt, 20 for the full cipher core).
    """
    if len(words) != 16:
        raise ValueError('Salsa20 core requires 16 words')
    if rounds <= 0 or rounds % 2:
        raise ValueError('Salsa20 rounds must be a positive even number')
    original = list(words)
    x = original
    for _ in range(rounds // 2):
        x = doubleround(x)
    return [(x[i] + original[i]) & MASK32 for i in range(16)]


def salsa20_8(words: Sequence[int]) -> List[int]:
    """Salsa20/8 core over 16 32-bit words."""
    return salsa20_core(words, 8)


def salsa20_8_bytes(B: bytes) -> bytes:
    """Salsa20/8 core. B is 64 bytes, returns 64-byte transformed block."""
    if len(B) != 64:
        raise ValueError('Salsa20/8 requires 64-byte input')
    return _block.pack(*salsa20_8(_block.unpack(B)))
