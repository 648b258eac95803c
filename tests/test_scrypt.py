"""End-to-end tests for scrypt key derivation."""

from __future__ import annotations

import hashlib
import logging
import re
from binascii import unhexlify
from unittest.mock import patch

import pytest

from scrypt_implemented import Scrypt, ScryptParams, scrypt
from scrypt_implemented.errors import InvalidParameterError, UnsupportedPrfError
from scrypt_implemented.romix import smix

requires_hashlib_scrypt = pytest.mark.skipif(
    not hasattr(hashlib, "scrypt"), reason="hashlib.scrypt needs OpenSSL 1.1+"
)


def uh(value: str) -> bytes:
    return unhexlify(re.sub(r"[\s:]", "", value))


RFC7914_EMPTY = uh("""
    77 d6 57 62 38 65 7b 20 3b 19 ca 42 c1 8a 04 97
    f1 6b 48 44 e3 07 4a e8 df df fa 3f ed e2 14 42
    fc d0 06 9d ed 09 48 f8 32 6a 75 3a 0f c8 1f 17
    e8 d3 e0 fb 2e 0d 36 28 cf 35 e2 0c 38 d1 89 06
    """)

RFC7914_NACL = uh("""
    fd ba be 1c 9d 34 72 00 78 56 e7 19 0d 01 e9 fe
    7c 6a d7 cb c8 23 78 30 e7 73 76 63 4b 37 31 62
    2e af 30 d9 2e 22 a3 88 6f f1 09 27 9d 98 30 da
    c7 27 af b9 4a 83 ee 6d 83 60 cb df a2 cc 06 40
    """)

RFC7914_SODIUM = uh("""
    70 23 bd cb 3a fd 73 48 46 1c 06 cd 81 fd 38 eb
    fd a8 fb ba 90 4f 8e 3e a9 b5 43 f6 54 5d a1 f2
    d5 43 29 55 61 3f 0f cf 62 d4 97 05 24 2a 9a f9
    e6 1e 85 dc 0d 65 1e 40 df cf 01 7b 45 57 58 87
    """)


# --- known answers ---


def test_rfc7914_empty_password_and_salt() -> None:
    kdf = Scrypt(n=16, r=1, p=1, dklen=64)
    assert kdf.derive(b"", b"") == RFC7914_EMPTY
    assert scrypt("", "", n=16, r=1, p=1, dklen=64) == RFC7914_EMPTY


@pytest.mark.slow
def test_rfc7914_password_nacl() -> None:
    assert scrypt(b"password", b"NaCl", n=1024, r=8, p=16, dklen=64) == RFC7914_NACL


@pytest.mark.slow
def test_rfc7914_pleaseletmein() -> None:
    kdf = Scrypt(n=16384, r=8, p=1, dklen=64)
    assert kdf.derive(b"pleaseletmein", b"SodiumChloride") == RFC7914_SODIUM


@requires_hashlib_scrypt
@pytest.mark.parametrize(
    ("n", "r", "p", "dklen"),
    [(2, 1, 1, 16), (16, 1, 1, 32), (32, 2, 3, 64), (8, 4, 2, 33)],
)
def test_matches_hashlib_scrypt(n: int, r: int, p: int, dklen: int) -> None:
    password = b"correct horse battery staple"
    salt = b"\x00\x01\x02\x03salty"
    expected = hashlib.scrypt(password, salt=salt, n=n, r=r, p=p, dklen=dklen)
    assert Scrypt(n=n, r=r, p=p, dklen=dklen).derive(password, salt) == expected


def test_other_prf_composes_the_same_pipeline() -> None:
    kdf = Scrypt(n=16, r=2, p=2, dklen=48, prf="sha512")
    password, salt = b"pw", b"salt"

    buffer = hashlib.pbkdf2_hmac("sha512", password, salt, 1, 2 * 256)
    mixed = smix(buffer[:256], 16, 2) + smix(buffer[256:], 16, 2)
    expected = hashlib.pbkdf2_hmac("sha512", password, mixed, 1, 48)

    assert kdf.derive(password, salt) == expected


# --- properties ---


def test_deterministic(small_params: dict[str, int]) -> None:
    kdf = Scrypt(**small_params)
    assert kdf.derive(b"secret", b"salt") == kdf.derive(b"secret", b"salt")
    assert Scrypt(**small_params).derive(b"secret", b"salt") == kdf(b"secret", b"salt")


@pytest.mark.parametrize("dklen", [1, 31, 32, 33, 64, 200])
def test_output_length(dklen: int) -> None:
    assert len(Scrypt(n=4, dklen=dklen).derive(b"pw", b"salt")) == dklen


def test_sensitive_to_every_input(small_params: dict[str, int]) -> None:
    base = Scrypt(**small_params).derive(b"password", b"salt")
    variants = [
        Scrypt(**small_params).derive(b"passwore", b"salt"),
        Scrypt(**small_params).derive(b"password", b"salu"),
        Scrypt(**{**small_params, "n": 32}).derive(b"password", b"salt"),
        Scrypt(**{**small_params, "r": 2}).derive(b"password", b"salt"),
        Scrypt(**{**small_params, "p": 2}).derive(b"password", b"salt"),
        Scrypt(**small_params, prf="sha512").derive(b"password", b"salt"),
    ]
    assert len({base, *variants}) == len(variants) + 1


def test_str_and_bytes_like_inputs_agree(small_params: dict[str, int]) -> None:
    kdf = Scrypt(**small_params)
    expected = kdf.derive("pässword".encode(), b"salt")
    assert kdf.derive("pässword", "salt") == expected
    assert kdf.derive(bytearray("pässword".encode()), memoryview(b"salt")) == expected


def test_rejects_non_bytes_input(small_params: dict[str, int]) -> None:
    with pytest.raises(TypeError, match="password must be str or bytes-like"):
        Scrypt(**small_params).derive(1234, b"salt")  # type: ignore[arg-type]


def test_lanes_are_independent() -> None:
    kdf = Scrypt(n=16, r=1, p=2, dklen=32)
    buffer = kdf.expand(b"password", b"salt")
    first, second = buffer[:128], buffer[128:]

    mixed = kdf.mix(buffer)
    swapped = kdf.mix(second + first)

    assert mixed[:128] == smix(first, 16, 1)
    assert mixed[128:] == smix(second, 16, 1)
    assert swapped == mixed[128:] + mixed[:128]
    assert kdf.compress(b"password", mixed) == kdf.derive(b"password", b"salt")


def test_mix_rejects_wrong_buffer_size() -> None:
    with pytest.raises(ValueError, match="Block size mismatch"):
        Scrypt(n=16, p=2).mix(b"\x00" * 128)


# --- derive_nosalt ---


def test_derive_nosalt_uses_password_as_salt(small_params: dict[str, int]) -> None:
    kdf = Scrypt(**small_params)
    assert kdf.derive_nosalt(b"hunter2") == kdf.derive(b"hunter2", b"hunter2")


@pytest.mark.parametrize("salt_length", [0, 3, 7, 100])
def test_derive_nosalt_uses_password_prefix(
    small_params: dict[str, int], salt_length: int
) -> None:
    kdf = Scrypt(**small_params)
    password = b"hunter2"
    assert kdf.derive_nosalt(password, salt_length) == kdf.derive(
        password, password[:salt_length]
    )


def test_derive_nosalt_rejects_negative_length(small_params: dict[str, int]) -> None:
    with pytest.raises(InvalidParameterError, match="salt_length"):
        Scrypt(**small_params).derive_nosalt(b"hunter2", -1)


# --- validation happens before any work ---


@pytest.mark.parametrize(
    "kwargs",
    [{"n": 0}, {"n": 3}, {"r": 0}, {"p": 0}, {"dklen": 0}],
)
def test_invalid_parameters_do_no_work(kwargs: dict[str, int]) -> None:
    with patch("scrypt_implemented.scrypt.pbkdf2") as mocked_pbkdf2, patch(
        "scrypt_implemented.scrypt.romix"
    ) as mocked_romix:
        with pytest.raises(InvalidParameterError):
            Scrypt(**kwargs)
        with pytest.raises(InvalidParameterError):
            scrypt(b"pw", b"salt", **kwargs)

    assert mocked_pbkdf2.call_count == 0
    assert mocked_romix.call_count == 0


def test_unsupported_prf_fails_at_construction() -> None:
    with pytest.raises(UnsupportedPrfError):
        Scrypt(prf="md42")


# --- configuration surface ---


def test_accepts_params_object() -> None:
    params = ScryptParams(n=16, r=2, p=1, dklen=24)
    kdf = Scrypt(params=params)
    assert kdf.params is params
    assert (kdf.n, kdf.r, kdf.p, kdf.dklen, kdf.block_size) == (16, 2, 1, 24, 256)
    assert kdf.derive(b"pw", b"s") == Scrypt(n=16, r=2, p=1, dklen=24).derive(b"pw", b"s")


def test_repr_names_parameters() -> None:
    assert repr(Scrypt()) == "Scrypt(n=1024, r=1, p=1, dklen=32, prf='sha256')"


def test_logs_parameters_but_not_secrets(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.DEBUG, logger="scrypt_implemented"):
        Scrypt(n=16).derive(b"top-secret-password", b"pepper")

    text = caplog.text
    assert "N=16, r=1, p=1, dklen=32, prf=sha256" in text
    assert "Derived 32-byte scrypt key" in text
    assert "top-secret-password" not in text
    assert "pepper" not in text
