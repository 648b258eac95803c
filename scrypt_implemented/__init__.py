"""Pure-python scrypt key derivation function."""

from .errors import (
    InvalidLengthError,
    InvalidParameterError,
    ScryptError,
    UnsupportedPrfError,
)
from .params import ScryptParams, load_params
from .pbkdf2 import pbkdf2
from .prf import HmacPrf, Prf, resolve_prf
from .salsa import salsa20_8
from .scrypt import Scrypt, scrypt

__all__ = [
    "HmacPrf",
    "InvalidLengthError",
    "InvalidParameterError",
    "Prf",
    "Scrypt",
    "ScryptError",
    "ScryptParams",
    "UnsupportedPrfError",
    "load_params",
    "pbkdf2",
    "resolve_prf",
    "salsa20_8",
    "scrypt",
]
