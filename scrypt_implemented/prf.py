"""Keyed pseudorandom functions used by PBKDF2."""

from __future__ import annotations

import hashlib
from typing import Protocol, Union

from .errors import UnsupportedPrfError


class Prf(Protocol):
    """A keyed hash: ``prf(key, message) -> digest`` of ``digest_size`` bytes."""

    name: str
    digest_size: int

    def __call__(self, key: bytes, message: bytes) -> bytes: ...


PrfLike = Union[str, Prf]


class HmacPrf:
    """HMAC over a fixed-length hashlib digest, looked up by name."""

    __slots__ = ("name", "digest_size", "block_size")

    def __init__(self, name: str) -> None:
        try:
            probe = hashlib.new(name)
        except (ValueError, TypeError) as exc:
            raise UnsupportedPrfError.for_unknown_digest(name) from exc
        # shake_* report a zero digest size and need an explicit length
        if probe.digest_size <= 0:
            raise UnsupportedPrfError.for_variable_digest(name)

        self.name = probe.name
        self.digest_size = probe.digest_size
        self.block_size = probe.block_size

    def _hash(self, data: bytes) -> bytes:
        return hashlib.new(self.name, data).digest()

    def __call__(self, key: bytes, message: bytes) -> bytes:
        block_size = self.block_size
        if len(key) > block_size:
            key = self._hash(key)
        if len(key) < block_size:
            key = key + b"\x00" * (block_size - len(key))

        ipad = bytes((x ^ 0x36) for x in key)
        opad = bytes((x ^ 0x5c) for x in key)

        inner = self._hash(ipad + message)
        return self._hash(opad + inner)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HmacPrf):
            return NotImplemented
        return self.name == other.name

    def __hash__(self) -> int:
        return hash((HmacPrf, self.name))

    def __repr__(self) -> str:
        return f"HmacPrf({self.name!r})"


def resolve_prf(prf: PrfLike) -> Prf:
    """Turn a digest name into an :class:`HmacPrf`, or vet an injected PRF."""
    if isinstance(prf, str):
        return HmacPrf(prf)

    digest_size = getattr(prf, "digest_size", None)
    if (
        not callable(prf)
        or isinstance(digest_size, bool)
        or not isinstance(digest_size, int)
        or digest_size <= 0
    ):
        raise UnsupportedPrfError.for_object(prf)
    return prf
