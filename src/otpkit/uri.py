"""
otpauth:// URI serialization.

See also:
    https://github.com/google/google-authenticator/wiki/Key-Uri-Format
"""
import logging
from typing import Any, Callable, Dict, Union
from urllib.parse import parse_qsl, quote, unquote, urlencode, urlparse

from .algorithms import HashAlgorithm
from .config import DEFAULT_DIGITS, DEFAULT_PERIOD, OTPConfiguration, OTPType
from .errors import (
    ImageDecodeError,
    InvalidParameterError,
    InvalidTypeError,
    MissingLabelError,
    MissingSecretError,
    URIFormatError,
)

log = logging.getLogger(__name__)

#   otpauth://totp/ACME%20Co:alice%40example.com?secret=JBSWY3DPEHPK3PXP&issuer=ACME%20Co&digits=8
#             ^^^^ ^^^^^^^^^^^^^^^^^^^^^^^^^^^^^ ^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^
#             type label (issuer:account)        secret, then only non-default parameters


def build_uri(config: OTPConfiguration) -> str:
    """
    Returns the provisioning URI for a configuration; works for either TOTP or HOTP.

    This can then be encoded in a QR Code and used to provision an
    authenticator app.

    :param config: the configuration to serialize
    :returns: provisioning uri
    """
    base_uri = "otpauth://{0}/{1}?{2}"

    if ":" in config.label:
        # already "issuer:account"; keep it as given
        label = quote(config.label, safe=":")
    elif config.issuer is not None:
        label = quote(config.issuer, safe="") + ":" + quote(config.label, safe="")
    else:
        label = quote(config.label, safe="")

    # fixed order: secret, issuer, algorithm, digits, period, counter
    url_args: Dict[str, Union[int, str]] = {"secret": config.seed}
    if config.issuer is not None:
        url_args["issuer"] = config.issuer
    if config.algorithm is not HashAlgorithm.SHA1:
        url_args["algorithm"] = config.algorithm.value
    if config.digits != DEFAULT_DIGITS:
        url_args["digits"] = config.digits
    if config.type is OTPType.TOTP:
        if config.period != DEFAULT_PERIOD:
            url_args["period"] = config.period
    else:
        # counter may be 0 and is still required for HOTP
        url_args["counter"] = config.counter

    return base_uri.format(config.type.value, label, urlencode(url_args).replace("+", "%20"))


def _int_param(key: str, value: str) -> int:
    try:
        return int(value)
    except ValueError:
        raise InvalidParameterError("Invalid value for {}: {!r}".format(key, value)) from None


def parse_uri(uri: str) -> OTPConfiguration:
    """
    Parses the provisioning URI for the OTP; works for either TOTP or HOTP.

    The issuer is taken from the ``issuer`` query parameter only. An issuer
    prefix in the label stays part of the label and never overrides the
    parameter.

    :param uri: the hotp/totp URI to parse
    :returns: the configuration it describes
    :raises URIFormatError: or one of its subclasses when the URI is unusable
    """
    parsed_uri = urlparse(uri.strip())

    if parsed_uri.scheme != "otpauth":
        raise URIFormatError("Not an otpauth URI")

    if parsed_uri.netloc not in ("totp", "hotp"):
        raise InvalidTypeError("Not a supported OTP type: {!r}".format(parsed_uri.netloc))
    otp_type = OTPType(parsed_uri.netloc)

    path = parsed_uri.path
    if path.startswith("/"):
        path = path[1:]
    label = unquote(path)
    if not label:
        raise MissingLabelError("No label found in URI")

    otp_data: Dict[str, Any] = {}
    secret = None

    for key, value in parse_qsl(parsed_uri.query):
        if key == "secret":
            secret = value
        elif key == "issuer":
            otp_data["issuer"] = value
        elif key == "algorithm":
            otp_data["algorithm"] = HashAlgorithm.parse(value)
        elif key in ("digits", "period", "counter"):
            otp_data[key] = _int_param(key, value)

    if secret is None:
        raise MissingSecretError("No secret found in URI")

    label_issuer, sep, _ = label.partition(":")
    if sep and otp_data.get("issuer") not in (None, label_issuer):
        log.debug(
            "Label issuer %r differs from issuer parameter %r, using the parameter",
            label_issuer,
            otp_data["issuer"],
        )

    return OTPConfiguration(type=otp_type, label=label, seed=secret, **otp_data)


def parse_image(image: Any, decoder: Callable[[Any], Union[str, bytes]]) -> OTPConfiguration:
    """
    Parses the otpauth URI held in a QR code image.

    Reading the image is up to ``decoder`` (for example a pyzbar or OpenCV
    wrapper) which must return the URI text. Whatever goes wrong inside it
    is reported as :class:`ImageDecodeError`.

    :param image: anything ``decoder`` accepts
    :param decoder: callable turning the image into URI text
    """
    try:
        text = decoder(image)
        if isinstance(text, bytes):
            text = text.decode("utf-8")
    except Exception as e:
        raise ImageDecodeError("Could not read a QR code from the image") from e
    return parse_uri(text)
