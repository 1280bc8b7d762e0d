import os

import pytest

from otpkit import base32
from otpkit.errors import EncodingError


def test_encode_rfc4648_vectors():
    assert base32.encode(b"") == ""
    assert base32.encode(b"f") == "MY"
    assert base32.encode(b"fo") == "MZXQ"
    assert base32.encode(b"foo") == "MZXW6"
    assert base32.encode(b"foob") == "MZXW6YQ"
    assert base32.encode(b"fooba") == "MZXW6YTB"
    assert base32.encode(b"foobar") == "MZXW6YTBOI"


def test_encode_with_padding():
    assert base32.encode(b"f", padding=True) == "MY======"
    assert base32.encode(b"fo", padding=True) == "MZXQ===="
    assert base32.encode(b"foo", padding=True) == "MZXW6==="
    assert base32.encode(b"foob", padding=True) == "MZXW6YQ="
    assert base32.encode(b"fooba", padding=True) == "MZXW6YTB"
    assert base32.encode(b"foobar", padding=True) == "MZXW6YTBOI======"


def test_encode_rfc_test_secret():
    assert base32.encode(b"12345678901234567890") == "GEZDGNBVGY3TQOJQGEZDGNBVGY3TQOJQ"


def test_decode_is_case_insensitive_and_ignores_padding():
    assert base32.decode("mzxw6ytboi") == b"foobar"
    assert base32.decode("MZXW6YTBOI======") == b"foobar"
    assert base32.decode("MY======") == b"f"


def test_decode_discards_leftover_bits():
    # "MZ" carries 10 bits; the last two are not zero but are dropped
    assert base32.decode("MZ") == b"f"
    # 3 characters is not a length an encoder produces
    assert base32.decode("MZX") == b"f"


def test_decode_rejects_characters_outside_alphabet():
    with pytest.raises(EncodingError):
        base32.decode("OTP!1189")
    with pytest.raises(EncodingError):
        base32.decode("MZXW0YTB")
    with pytest.raises(EncodingError):
        base32.decode("MZ XW")


def test_strict_decode():
    assert base32.decode("MZXW6YTBOI", strict=True) == b"foobar"
    with pytest.raises(EncodingError):
        base32.decode("MZ", strict=True)
    with pytest.raises(EncodingError):
        base32.decode("MZX", strict=True)


def test_round_trip():
    for length in (0, 1, 5, 10, 20, 33, 64):
        data = os.urandom(length)
        assert base32.decode(base32.encode(data)) == data
        assert base32.decode(base32.encode(data, padding=True), strict=True) == data
