import datetime
import time
from dataclasses import replace
from typing import Any, Dict, Optional, Union

from . import utils
from .algorithms import HashAlgorithm
from .config import GeneratedCode, OTPConfiguration, OTPType
from .errors import InvalidParameterError
from .otp import OTP, compute_hotp
from .uri import build_uri

TimeLike = Union[int, float, datetime.datetime]


def _unix_seconds(for_time: TimeLike) -> float:
    if isinstance(for_time, datetime.datetime):
        # naive datetimes are taken as local time
        return for_time.timestamp()
    return for_time


def timecode(for_time: TimeLike, interval: int = 30) -> int:
    """
    Returns the RFC 6238 time step for a moment: ``floor(unix_seconds / interval)``.

    :param for_time: UTC epoch seconds or a datetime
    :param interval: step length in seconds, must be positive
    """
    if interval <= 0:
        raise InvalidParameterError("interval must be a positive number of seconds")
    return int(_unix_seconds(for_time) // interval)


def compute_totp(
    secret: bytes,
    for_time: TimeLike,
    period: int = 30,
    algorithm: Union[str, HashAlgorithm] = HashAlgorithm.SHA1,
    digits: int = 6,
) -> str:
    """
    Computes the RFC 6238 code for exactly one time step; no neighbouring
    steps are considered.

    :param secret: raw key bytes
    :param for_time: UTC epoch seconds or a datetime
    :param period: step length in seconds
    :param algorithm: SHA1, SHA256 or SHA512
    :param digits: length of the code
    """
    return compute_hotp(secret, timecode(for_time, period), algorithm, digits)


class TOTP(OTP):
    """
    Handler for time-based OTP counters.
    """

    otp_type = OTPType.TOTP

    def __init__(self, s: str, interval: int = 30, **kwargs: Any) -> None:
        """
        :param s: secret in base32 format
        :param interval: the time interval in seconds for OTP. This defaults to 30.
        :param kwargs: digits, digest, name, issuer, tags and cache, see :class:`OTP`
        """
        if interval <= 0:
            raise InvalidParameterError("interval must be a positive number of seconds")
        self.interval = interval
        super().__init__(s=s, **kwargs)

    def at(self, for_time: TimeLike) -> str:
        """
        Accepts either a Unix timestamp integer or a datetime object.

        :param for_time: the time to generate an OTP for
        :returns: OTP value
        """
        return self.generate_otp(self.timecode(for_time))

    def now(self) -> str:
        """
        Generate the current time OTP

        :returns: OTP value
        """
        return self.at(time.time())

    def verify(self, otp: str, for_time: Optional[TimeLike] = None) -> bool:
        """
        Verifies the OTP passed in against the current time OTP. Only the
        step containing ``for_time`` is checked.

        :param otp: the OTP to check against
        :param for_time: Time to check OTP at (defaults to now)
        :returns: True if verification succeeded, False otherwise
        """
        if for_time is None:
            for_time = time.time()
        return utils.strings_equal(str(otp), str(self.at(for_time)))

    def timecode(self, for_time: TimeLike) -> int:
        return timecode(for_time, self.interval)

    def remaining(self, for_time: Optional[TimeLike] = None) -> int:
        """
        Seconds left before the code for ``for_time`` (defaults to now) expires.
        """
        if for_time is None:
            for_time = time.time()
        return (self.timecode(for_time) + 1) * self.interval - int(_unix_seconds(for_time))

    def code(self, counter: int) -> GeneratedCode:
        return replace(super().code(counter), valid_until=(counter + 1) * self.interval)

    def configuration(self) -> OTPConfiguration:
        return OTPConfiguration(
            type=OTPType.TOTP,
            label=self.name,
            seed=self.secret,
            issuer=self.issuer,
            algorithm=self.digest,
            digits=self.digits,
            period=self.interval,
            tags=self.tags,
        )

    def provisioning_uri(self, name: Optional[str] = None, issuer_name: Optional[str] = None) -> str:
        """
        Returns the provisioning URI for the OTP.  This can then be
        encoded in a QR Code and used to provision an OTP app like
        Google Authenticator.

        See also:
            https://github.com/google/google-authenticator/wiki/Key-Uri-Format

        :param name: name of the user account
        :param issuer_name: the name of the OTP issuer; this will be the
            organization title of the OTP entry in Authenticator
        :returns: provisioning URI
        """
        changes: Dict[str, Any] = {}
        if name:
            changes["label"] = name
        if issuer_name:
            changes["issuer"] = issuer_name
        return build_uri(replace(self.configuration(), **changes))

