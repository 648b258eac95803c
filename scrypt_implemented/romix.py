"""ROMix, scrypt's sequential memory-hard mixing stage."""

from __future__ import annotations

import struct
from typing import List

from .blockmix import blockmix_salsa8
from .errors import InvalidParameterError


def check_cost(N: int) -> None:
    """Reject any N that is not a power of two greater than 1."""
    if isinstance(N, bool) or not isinstance(N, int):
        raise InvalidParameterError.for_not_integer("N", N)
    if N <= 1 or N & (N - 1) != 0:
        raise InvalidParameterError.for_not_power_of_two(N)


def integerify(X: List[int], N: int) -> int:
    # little-endian integer from the last 64-byte sub-block, reduced mod N
    if N <= 1 << 32:
        return X[-16] & (N - 1)
    return (X[-16] | (X[-15] << 32)) & (N - 1)


def romix(X: List[int], N: int, r: int) -> None:
    """ROMix per RFC 7914, in place. X is one lane of 32 * r words."""
    check_cost(N)
    V = []
    for _ in range(N):
        V.append(tuple(X))
        blockmix_salsa8(X, r)
    for _ in range(N):
        j = integerify(X, N)
        X[:] = [x ^ v for x, v in zip(X, V[j])]
        blockmix_salsa8(X, r)


def smix(B: bytes, N: int, r: int) -> bytes:
    """ROMix over a 128 * r byte block. Returns the transformed block."""
    if len(B) != 128 * r:
        raise ValueError('Block size mismatch')
    fmt = '<%dI' % (32 * r)
    X = list(struct.unpack(fmt, B))
    romix(X, N, r)
    return struct.pack(fmt, *X)
