import logging
from typing import Sequence

from . import base32 as base32
from . import seed as seed
from .algorithms import HashAlgorithm as HashAlgorithm
from .algorithms import HMACProvider as HMACProvider
from .batch import CodeResult as CodeResult
from .batch import ParseResult as ParseResult
from .batch import generate_codes as generate_codes
from .batch import parse_uris as parse_uris
from .cache import SecretCache as SecretCache
from .compat import random
from .config import GeneratedCode as GeneratedCode
from .config import OTPConfiguration as OTPConfiguration
from .config import OTPType as OTPType
from .errors import ComputationError as ComputationError
from .errors import EmptySeedError as EmptySeedError
from .errors import EncodingError as EncodingError
from .errors import ImageDecodeError as ImageDecodeError
from .errors import InvalidParameterError as InvalidParameterError
from .errors import InvalidTypeError as InvalidTypeError
from .errors import MissingLabelError as MissingLabelError
from .errors import MissingSecretError as MissingSecretError
from .errors import OTPError as OTPError
from .errors import SecurityAdvisory as SecurityAdvisory
from .errors import UnsupportedAlgorithmError as UnsupportedAlgorithmError
from .errors import URIFormatError as URIFormatError
from .hotp import HOTP as HOTP
from .otp import OTP as OTP
from .otp import compute_hotp as compute_hotp
from .seed import Secret as Secret
from .totp import TOTP as TOTP
from .totp import compute_totp as compute_totp
from .uri import build_uri as build_uri
from .uri import parse_image as parse_image
from .uri import parse_uri as parse_uri

logging.getLogger(__name__).addHandler(logging.NullHandler())


def random_base32(length: int = 32, chars: Sequence[str] = base32.ALPHABET) -> str:
    # Note: the otpauth scheme DOES NOT use base32 padding for secret lengths not divisible by 8.
    # Some third-party tools have bugs when dealing with such secrets.
    if length < 32:
        raise ValueError("Secrets should be at least 160 bits")

    return "".join(random.choice(chars) for _ in range(length))
