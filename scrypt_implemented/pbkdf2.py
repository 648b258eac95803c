"""PBKDF2 (RFC 8018) over a pluggable keyed PRF."""

from __future__ import annotations

import math
import struct

from .errors import InvalidLengthError, InvalidParameterError
from .prf import Prf, PrfLike, resolve_prf

MAX_BLOCK_COUNT = (1 << 32) - 1


def max_length(prf: Prf) -> int:
    """Largest output PBKDF2 can produce with ``prf``."""
    return MAX_BLOCK_COUNT * prf.digest_size


def pbkdf2(prf: PrfLike, password: bytes, salt: bytes, iterations: int, dklen: int) -> bytes:
    """Derive ``dklen`` bytes from ``password`` and ``salt``.

    ``prf`` is either a hashlib digest name (HMAC is built over it) or an
    already-resolved :class:`~scrypt_implemented.prf.Prf`.
    """
    prf = resolve_prf(prf)
    if isinstance(iterations, bool) or not isinstance(iterations, int):
        raise InvalidParameterError.for_not_integer("iterations", iterations)
    if iterations < 1:
        raise InvalidParameterError.for_too_small("iterations", iterations, 1)
    limit = max_length(prf)
    if isinstance(dklen, bool) or not isinstance(dklen, int) or not 1 <= dklen <= limit:
        raise InvalidLengthError.for_length(dklen, limit)

    hlen = prf.digest_size
    password = bytes(password)
    salt = bytes(salt)
    l = math.ceil(dklen / hlen)

    def F(block_index: int) -> bytes:
        int_block = struct.pack('>I', block_index)
        U = prf(password, salt + int_block)
        T = int.from_bytes(U, 'big')
        for _ in range(1, iterations):
            U = prf(password, U)
            T ^= int.from_bytes(U, 'big')
        return T.to_bytes(hlen, 'big')

    DK = b''.join(F(i + 1) for i in range(l))
    return DK[:dklen]
