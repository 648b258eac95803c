"""BlockMix: Salsa20/8 applied across the 64-byte sub-blocks of one lane."""

from __future__ import annotations

from typing import List

from .salsa import salsa20_8


def blockmix_salsa8(B: List[int], r: int) -> None:
    """BlockMix using Salsa20/8, in place. B holds 32 * r words.

    Y[i] = salsa(Y[i-1] ^ B[i]) with Y[-1] = B[2r-1]; the lane is then
    rewritten as Y[0], Y[2], ..., Y[2r-2], Y[1], Y[3], ..., Y[2r-1].
    """
    if len(B) != 32 * r:
        raise ValueError('Block size mismatch')
    X = B[-16:]
    out = [0] * len(B)
    for i in range(2 * r):
        offset = i * 16
        X = salsa20_8([x ^ b for x, b in zip(X, B[offset:offset + 16])])
        dest_index = i // 2 + (0 if (i % 2 == 0) else r)
        out[dest_index * 16:(dest_index + 1) * 16] = X
    B[:] = out
