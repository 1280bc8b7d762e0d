from typing import TYPE_CHECKING, Iterable, Optional, Union

from . import base32, seed
from .algorithms import HashAlgorithm, provider_for
from .config import MAX_COUNTER, GeneratedCode, OTPConfiguration, OTPType
from .errors import InvalidParameterError

if TYPE_CHECKING:
    from .cache import SecretCache


def compute_hotp(
    secret: bytes,
    counter: int,
    algorithm: Union[str, HashAlgorithm] = HashAlgorithm.SHA1,
    digits: int = 6,
) -> str:
    """
    Computes one RFC 4226 code.

    :param secret: raw key bytes
    :param counter: the HMAC counter, 0 <= counter < 2**64
    :param algorithm: SHA1, SHA256 or SHA512
    :param digits: length of the code
    :returns: the code, zero-padded to ``digits`` characters
    """
    if not 0 <= counter <= MAX_COUNTER:
        raise InvalidParameterError("counter must be a non-negative 64-bit integer")
    if digits < 1 or digits > 10:
        raise InvalidParameterError("digits must be between 1 and 10")

    hmac_hash = bytearray(provider_for(algorithm).mac(secret, int_to_bytestring(counter)))
    # dynamic truncation: the low nibble of the last byte picks 4 bytes,
    # the sign bit of the first is cleared
    offset = hmac_hash[-1] & 0xF
    code = (
        (hmac_hash[offset] & 0x7F) << 24
        | (hmac_hash[offset + 1] & 0xFF) << 16
        | (hmac_hash[offset + 2] & 0xFF) << 8
        | (hmac_hash[offset + 3] & 0xFF)
    )
    str_code = str(10_000_000_000 + (code % 10**digits))
    return str_code[-digits:]


def int_to_bytestring(i: int, padding: int = 8) -> bytes:
    """
    Turns an integer to the OATH specified
    bytestring, which is fed to the HMAC
    along with the secret
    """
    return i.to_bytes(padding, "big")


class OTP(object):
    """
    Base class for OTP handlers.
    """

    otp_type = OTPType.TOTP

    def __init__(
        self,
        s: str,
        digits: int = 6,
        digest: Union[str, HashAlgorithm] = HashAlgorithm.SHA1,
        name: Optional[str] = None,
        issuer: Optional[str] = None,
        tags: Iterable[str] = (),
        cache: Optional["SecretCache"] = None,
    ) -> None:
        """
        :param s: secret in base32 format
        :param digits: number of integers in the OTP
        :param digest: hash algorithm used in the HMAC
        :param name: account name
        :param issuer: issuer
        :param tags: free-form labels carried into generated codes
        :param cache: decode cache to share between handlers
        """
        if digits > 10:
            raise InvalidParameterError("digits must be no greater than 10")
        self.digits = digits
        self.digest = HashAlgorithm.parse(digest)
        self.secret = seed.normalize(s)
        seed.validate(self.secret)
        self.name = name or "Secret"
        self.issuer = issuer
        self.tags = tuple(dict.fromkeys(tags))
        self.cache = cache

    def generate_otp(self, input: int) -> str:
        """
        :param input: the HMAC counter value to use as the OTP input.
            Usually either the counter, or the computed integer based on the Unix timestamp
        """
        return compute_hotp(self.byte_secret(), input, self.digest, self.digits)

    def code(self, counter: int) -> GeneratedCode:
        """
        Like :meth:`generate_otp`, but returns the code together with what produced it.

        :param counter: the HMAC counter value
        """
        return GeneratedCode(
            value=self.generate_otp(counter),
            type=self.otp_type,
            algorithm=self.digest,
            seed=self.secret,
            tags=self.tags,
            counter=counter,
        )

    def configuration(self) -> OTPConfiguration:
        raise NotImplementedError()

    def byte_secret(self) -> bytes:
        if self.cache is not None:
            return self.cache.get(self.secret, self.digest)
        return base32.decode(self.secret)

    def __repr__(self) -> str:
        return "{}(name={!r}, issuer={!r}, digits={}, digest={})".format(
            type(self).__name__, self.name, self.issuer, self.digits, self.digest.value
        )
