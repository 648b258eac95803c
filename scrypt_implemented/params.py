"""Validated scrypt cost parameters and their environment-based loading."""

from __future__ import annotations

import dataclasses
import logging
import os
import sys
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .errors import InvalidLengthError, InvalidParameterError
from .pbkdf2 import max_length
from .prf import Prf, PrfLike, resolve_prf
from .romix import check_cost

if TYPE_CHECKING:
    from collections.abc import Mapping

logger = logging.getLogger(__name__)

# Config
SCRYPT_N = 1024
SCRYPT_R = 1
SCRYPT_P = 1
SCRYPT_DKLEN = 32
SCRYPT_PRF = "sha256"
SCRYPT_MAXMEM = 0

# r*p is bounded so the expansion PBKDF2 call stays within 2**30 * 128 bytes
MAX_RP = 1 << 30

ENV_N = "SCRYPT_N"
ENV_R = "SCRYPT_R"
ENV_P = "SCRYPT_P"
ENV_DKLEN = "SCRYPT_DKLEN"
ENV_PRF = "SCRYPT_PRF"
ENV_MAXMEM = "SCRYPT_MAXMEM"


@dataclass(frozen=True, slots=True)
class ScryptParams:
    """Cost parameters for one scrypt configuration.

    ``n`` is the CPU/memory cost (a power of two above 1), ``r`` the block
    size factor, ``p`` the number of independent lanes and ``dklen`` the
    length of the derived key. ``prf`` names the hashlib digest used for the
    HMAC inside PBKDF2, or is an injected PRF object. ``maxmem`` caps the
    memory estimate in bytes; 0 leaves only the platform limit.
    """

    n: int = SCRYPT_N
    r: int = SCRYPT_R
    p: int = SCRYPT_P
    dklen: int = SCRYPT_DKLEN
    prf: PrfLike = SCRYPT_PRF
    maxmem: int = SCRYPT_MAXMEM
    resolved_prf: Prf = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        try:
            self._validate()
            resolved = resolve_prf(self.prf)
            limit = max_length(resolved)
            if self.dklen > limit:
                raise InvalidLengthError.for_length(self.dklen, limit)
        except ValueError as exc:
            logger.debug("Rejected scrypt parameters: %s", exc)
            raise
        object.__setattr__(self, "resolved_prf", resolved)

    def _validate(self) -> None:
        for name in ("n", "r", "p", "dklen", "maxmem"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidParameterError.for_not_integer(name, value)

        check_cost(self.n)
        if self.r < 1:
            raise InvalidParameterError.for_too_small("r", self.r, 1)
        if self.p < 1:
            raise InvalidParameterError.for_too_small("p", self.p, 1)
        if self.dklen < 1:
            raise InvalidParameterError.for_too_small("dklen", self.dklen, 1)
        if self.maxmem < 0:
            raise InvalidParameterError.for_too_small("maxmem", self.maxmem, 0)
        if self.r * self.p >= MAX_RP:
            raise InvalidParameterError.for_rp_too_large(self.r, self.p)

        required = self.memory_estimate
        if required > sys.maxsize:
            raise InvalidParameterError.for_memory_limit(required, sys.maxsize)
        if self.maxmem and required > self.maxmem:
            raise InvalidParameterError.for_memory_limit(required, self.maxmem)

    @property
    def block_size(self) -> int:
        """Bytes in one lane."""
        return 128 * self.r

    @property
    def word_block_size(self) -> int:
        """32-bit words in one lane."""
        return self.block_size // 4

    @property
    def buffer_size(self) -> int:
        """Bytes in the working buffer holding all ``p`` lanes."""
        return self.block_size * self.p

    @property
    def memory_estimate(self) -> int:
        return 128 * self.r * (self.n + self.p)

    @property
    def prf_name(self) -> str:
        return getattr(self.resolved_prf, "name", type(self.resolved_prf).__name__)

    def replace(self, **changes: object) -> ScryptParams:
        """Return a copy with ``changes`` applied, validated again."""
        return dataclasses.replace(self, **changes)


def load_params(environ: Mapping[str, str] | None = None) -> ScryptParams:
    """Load scrypt parameters from the environment, falling back to defaults."""
    env = os.environ if environ is None else environ

    return ScryptParams(
        n=_read_int(env, ENV_N, SCRYPT_N),
        r=_read_int(env, ENV_R, SCRYPT_R),
        p=_read_int(env, ENV_P, SCRYPT_P),
        dklen=_read_int(env, ENV_DKLEN, SCRYPT_DKLEN),
        prf=_read_prf(env),
        maxmem=_read_int(env, ENV_MAXMEM, SCRYPT_MAXMEM),
    )


def _read_int(env: Mapping[str, str], env_var: str, default: int) -> int:
    raw_value = env.get(env_var)
    if raw_value is None:
        return default
    value = raw_value.strip()
    if not (value.isascii() and value.isdigit()):
        raise InvalidParameterError.for_env_value(env_var, raw_value)
    return int(value)


def _read_prf(env: Mapping[str, str]) -> str:
    raw_value = env.get(ENV_PRF)
    if raw_value is None:
        return SCRYPT_PRF
    value = raw_value.strip()
    if not value:
        raise InvalidParameterError.for_empty_value(ENV_PRF)
    return value
