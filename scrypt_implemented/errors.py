"""Error types raised by the scrypt key-derivation pipeline."""

from __future__ import annotations


class ScryptError(ValueError):
    """Base class for every error raised while deriving a scrypt key."""


class InvalidParameterError(ScryptError):
    """Raised when a cost parameter or derived size is out of range."""

    @classmethod
    def for_not_integer(cls, name: str, value: object) -> InvalidParameterError:
        message = f"{name} must be an integer, got {type(value).__name__}."
        return cls(message)

    @classmethod
    def for_too_small(cls, name: str, value: int, minimum: int) -> InvalidParameterError:
        message = f"{name} must be >= {minimum}, got {value}."
        return cls(message)

    @classmethod
    def for_not_power_of_two(cls, value: int) -> InvalidParameterError:
        message = f"N must be a power of 2 greater than 1, got {value}."
        return cls(message)

    @classmethod
    def for_rp_too_large(cls, r: int, p: int) -> InvalidParameterError:
        message = f"r*p must be < 2**30, got r={r}, p={p}."
        return cls(message)

    @classmethod
    def for_memory_limit(cls, required: int, limit: int) -> InvalidParameterError:
        message = f"scrypt needs {required} bytes of memory, limit is {limit}."
        return cls(message)

    @classmethod
    def for_empty_value(cls, env_var: str) -> InvalidParameterError:
        message = f"Invalid {env_var}: value cannot be empty."
        return cls(message)

    @classmethod
    def for_env_value(cls, env_var: str, value: str) -> InvalidParameterError:
        message = f"Invalid {env_var}: {value!r}. Expected a decimal integer."
        return cls(message)


class UnsupportedPrfError(ScryptError):
    """Raised when the requested PBKDF2 pseudorandom function is unavailable."""

    @classmethod
    def for_unknown_digest(cls, name: str) -> UnsupportedPrfError:
        message = f"Digest {name!r} is not available in hashlib."
        return cls(message)

    @classmethod
    def for_variable_digest(cls, name: str) -> UnsupportedPrfError:
        message = f"Digest {name!r} has a variable output length."
        return cls(message)

    @classmethod
    def for_object(cls, prf: object) -> UnsupportedPrfError:
        message = (
            f"{type(prf).__name__} is not a PRF: expected a digest name or a "
            "callable with a positive integer digest_size."
        )
        return cls(message)


class InvalidLengthError(ScryptError):
    """Raised when a PBKDF2 output length cannot be represented."""

    @classmethod
    def for_length(cls, length: int, maximum: int) -> InvalidLengthError:
        message = f"Output length must be between 1 and {maximum}, got {length}."
        return cls(message)
