import pytest

from otpkit import OTPConfiguration, OTPType, build_uri, parse_image, parse_uri
from otpkit.algorithms import HashAlgorithm
from otpkit.errors import (
    EncodingError,
    ImageDecodeError,
    InvalidParameterError,
    InvalidTypeError,
    MissingLabelError,
    MissingSecretError,
    OTPError,
    UnsupportedAlgorithmError,
    URIFormatError,
)

SEED = "JBSWY3DPEHPK3PXP"


def totp(**kwargs):
    kwargs.setdefault("label", "alice")
    return OTPConfiguration(type=OTPType.TOTP, seed=SEED, **kwargs)


def test_defaults_are_omitted():
    assert build_uri(totp()) == "otpauth://totp/alice?secret=JBSWY3DPEHPK3PXP"


def test_each_non_default_adds_one_parameter():
    base = build_uri(totp())
    assert build_uri(totp(algorithm=HashAlgorithm.SHA256)) == base + "&algorithm=SHA256"
    assert build_uri(totp(digits=8)) == base + "&digits=8"
    assert build_uri(totp(period=60)) == base + "&period=60"


def test_parameter_order():
    config = totp(issuer="ACME", algorithm="SHA512", digits=7, period=45)
    assert build_uri(config) == (
        "otpauth://totp/ACME:alice?secret=JBSWY3DPEHPK3PXP&issuer=ACME&algorithm=SHA512&digits=7&period=45"
    )


def test_hotp_always_has_counter():
    config = OTPConfiguration(OTPType.HOTP, "alice", SEED, period=60)
    assert build_uri(config) == "otpauth://hotp/alice?secret=JBSWY3DPEHPK3PXP&counter=0"


def test_label_encoding():
    assert build_uri(totp(label="alice@example.com", issuer="ACME Co")).startswith(
        "otpauth://totp/ACME%20Co:alice%40example.com?secret=JBSWY3DPEHPK3PXP&issuer=ACME%20Co"
    )
    assert build_uri(totp(label="a/b")).startswith("otpauth://totp/a%2Fb?")


def test_label_with_colon_is_kept():
    uri = build_uri(totp(label="ACME:alice", issuer="Other"))
    assert uri == "otpauth://totp/ACME:alice?secret=JBSWY3DPEHPK3PXP&issuer=Other"


def test_round_trip_totp():
    config = totp(label="ACME:alice", issuer="ACME", algorithm="SHA512", digits=8, period=60)
    parsed = parse_uri(build_uri(config))
    assert parsed.type is OTPType.TOTP
    assert parsed.label == "ACME:alice"
    assert parsed.issuer == "ACME"
    assert parsed.seed == SEED
    assert parsed.algorithm is HashAlgorithm.SHA512
    assert parsed.digits == 8
    assert parsed.period == 60


def test_round_trip_hotp():
    config = OTPConfiguration(OTPType.HOTP, "bob@example.com", SEED, counter=42)
    parsed = parse_uri(build_uri(config))
    assert parsed.type is OTPType.HOTP
    assert parsed.label == "bob@example.com"
    assert parsed.counter == 42


def test_issuer_prefix_stays_in_label():
    config = totp(issuer="ACME")
    parsed = parse_uri(build_uri(config))
    assert parsed.label == "ACME:alice"
    assert parsed.account == "alice"
    assert build_uri(parsed) == build_uri(config)


def test_parse_defaults():
    config = parse_uri("otpauth://hotp/ACME%20Co:alice%40example.com?secret=jbswy3dpehpk3pxp")
    assert config.label == "ACME Co:alice@example.com"
    assert config.issuer is None
    assert config.seed == SEED
    assert config.algorithm is HashAlgorithm.SHA1
    assert config.digits == 6
    assert config.counter == 0


def test_issuer_parameter_wins():
    config = parse_uri("otpauth://totp/Foo:alice?secret=JBSWY3DPEHPK3PXP&issuer=Bar")
    assert config.issuer == "Bar"
    assert config.label == "Foo:alice"


@pytest.mark.parametrize(
    "uri, error",
    [
        ("http://totp/alice?secret=JBSWY3DPEHPK3PXP", URIFormatError),
        ("otpauth://motp/alice?secret=JBSWY3DPEHPK3PXP", InvalidTypeError),
        ("otpauth://TOTP/alice?secret=JBSWY3DPEHPK3PXP", InvalidTypeError),
        ("otpauth://totp/?secret=JBSWY3DPEHPK3PXP", MissingLabelError),
        ("otpauth://totp/alice?issuer=ACME", MissingSecretError),
        ("otpauth://totp/alice?secret=", MissingSecretError),
        ("otpauth://totp/alice?secret=OTP%211189", EncodingError),
        ("otpauth://totp/alice?secret=JBSWY3DPEHPK3PXP&algorithm=MD5", UnsupportedAlgorithmError),
        ("otpauth://totp/alice?secret=JBSWY3DPEHPK3PXP&digits=six", InvalidParameterError),
        ("otpauth://totp/alice?secret=JBSWY3DPEHPK3PXP&digits=9", InvalidParameterError),
        ("otpauth://totp/alice?secret=JBSWY3DPEHPK3PXP&period=5", InvalidParameterError),
        ("otpauth://hotp/alice?secret=JBSWY3DPEHPK3PXP&counter=-1", InvalidParameterError),
    ],
)
def test_parse_errors(uri, error):
    with pytest.raises(error) as excinfo:
        parse_uri(uri)
    assert isinstance(excinfo.value, OTPError)
    assert isinstance(excinfo.value, ValueError)


def test_parse_image():
    uri = "otpauth://totp/alice?secret=JBSWY3DPEHPK3PXP"
    assert parse_image(object(), lambda image: uri.encode("utf-8")).label == "alice"


def test_parse_image_failure_is_opaque():
    def decoder(image):
        raise RuntimeError("no QR code found")

    with pytest.raises(ImageDecodeError) as excinfo:
        parse_image(b"\x89PNG", decoder)
    assert isinstance(excinfo.value.__cause__, RuntimeError)
