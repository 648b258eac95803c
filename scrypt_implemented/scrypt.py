"""scrypt key derivation (RFC 7914) built from PBKDF2 and ROMix."""

from __future__ import annotations

import logging
import struct
from typing import Optional, Union

from .errors import InvalidParameterError
from .params import (
    SCRYPT_DKLEN,
    SCRYPT_MAXMEM,
    SCRYPT_N,
    SCRYPT_P,
    SCRYPT_PRF,
    SCRYPT_R,
    ScryptParams,
)
from .pbkdf2 import pbkdf2
from .prf import PrfLike
from .romix import romix

logger = logging.getLogger(__name__)

BytesLike = Union[str, bytes, bytearray, memoryview]


def _to_bytes(value: BytesLike, name: str) -> bytes:
    if isinstance(value, str):
        return value.encode('utf-8')
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    raise TypeError(f"{name} must be str or bytes-like, got {type(value).__name__}")


class Scrypt:
    """A fixed scrypt configuration that derives keys from passwords.

    The parameters are validated once, here; an invalid combination raises
    :class:`~scrypt_implemented.errors.InvalidParameterError` (or one of the
    PRF/length errors) before any memory-hard work can start.

        >>> kdf = Scrypt(n=16, r=1, p=1, dklen=64)
        >>> len(kdf.derive(b"password", b"NaCl"))
        64
    """

    __slots__ = ("_params",)

    def __init__(
        self,
        n: int = SCRYPT_N,
        r: int = SCRYPT_R,
        p: int = SCRYPT_P,
        dklen: int = SCRYPT_DKLEN,
        prf: PrfLike = SCRYPT_PRF,
        maxmem: int = SCRYPT_MAXMEM,
        *,
        params: Optional[ScryptParams] = None,
    ) -> None:
        if params is None:
            params = ScryptParams(n=n, r=r, p=p, dklen=dklen, prf=prf, maxmem=maxmem)
        self._params = params

    @property
    def params(self) -> ScryptParams:
        return self._params

    @property
    def n(self) -> int:
        return self._params.n

    @property
    def r(self) -> int:
        return self._params.r

    @property
    def p(self) -> int:
        return self._params.p

    @property
    def dklen(self) -> int:
        return self._params.dklen

    @property
    def block_size(self) -> int:
        return self._params.block_size

    def __repr__(self) -> str:
        params = self._params
        return (
            f"Scrypt(n={params.n}, r={params.r}, p={params.p}, "
            f"dklen={params.dklen}, prf={params.prf_name!r})"
        )

    def derive(self, password: BytesLike, salt: BytesLike) -> bytes:
        """Derive ``dklen`` bytes from ``password`` and ``salt``."""
        password = _to_bytes(password, "password")
        salt = _to_bytes(salt, "salt")
        params = self._params
        logger.debug(
            "Deriving scrypt key (N=%d, r=%d, p=%d, dklen=%d, prf=%s)",
            params.n, params.r, params.p, params.dklen, params.prf_name,
        )

        B = self.expand(password, salt)
        B = self.mix(B)
        key = self.compress(password, B)

        logger.debug("Derived %d-byte scrypt key", len(key))
        return key

    __call__ = derive

    def derive_nosalt(self, password: BytesLike, salt_length: Optional[int] = None) -> bytes:
        """Derive a key using the password itself (or its prefix) as salt.

        This gives up the independent random salt scrypt normally relies on;
        it exists for simple compatibility uses only. Use :meth:`derive` with
        a random salt whenever the key protects anything.
        """
        password = _to_bytes(password, "password")
        if salt_length is None:
            return self.derive(password, password)
        if isinstance(salt_length, bool) or not isinstance(salt_length, int):
            raise InvalidParameterError.for_not_integer("salt_length", salt_length)
        if salt_length < 0:
            raise InvalidParameterError.for_too_small("salt_length", salt_length, 0)
        return self.derive(password, password[:salt_length])

    def expand(self, password: bytes, salt: bytes) -> bytes:
        """Stretch password and salt into the ``128 * r * p`` byte working buffer."""
        params = self._params
        return pbkdf2(params.resolved_prf, password, salt, 1, params.buffer_size)

    def mix(self, B: bytes) -> bytes:
        """Run ROMix over each of the ``p`` lanes of the working buffer."""
        params = self._params
        if len(B) != params.buffer_size:
            raise ValueError('Block size mismatch')

        words = params.word_block_size
        fmt = '<%dI' % (words * params.p)
        X = list(struct.unpack(fmt, B))
        for offset in range(0, len(X), words):
            lane = X[offset:offset + words]
            romix(lane, params.n, params.r)
            X[offset:offset + words] = lane
        return struct.pack(fmt, *X)

    def compress(self, password: bytes, B: bytes) -> bytes:
        """Squeeze the mixed buffer, used as salt, into the final key."""
        params = self._params
        return pbkdf2(params.resolved_prf, password, B, 1, params.dklen)


def scrypt(
    password: BytesLike,
    salt: BytesLike,
    n: int = SCRYPT_N,
    r: int = SCRYPT_R,
    p: int = SCRYPT_P,
    dklen: int = SCRYPT_DKLEN,
    prf: PrfLike = SCRYPT_PRF,
    maxmem: int = SCRYPT_MAXMEM,
) -> bytes:
    """High-level scrypt KDF. Returns dklen bytes."""
    return Scrypt(n=n, r=r, p=p, dklen=dklen, prf=prf, maxmem=maxmem).derive(password, salt)
