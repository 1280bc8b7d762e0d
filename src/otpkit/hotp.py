from dataclasses import replace
from typing import Any, Dict, Optional

from . import utils
from .config import OTPConfiguration, OTPType
from .otp import OTP
from .uri import build_uri


class HOTP(OTP):
    """
    Handler for HMAC-based OTP counters.
    """

    otp_type = OTPType.HOTP

    def __init__(self, s: str, initial_count: int = 0, **kwargs: Any) -> None:
        """
        :param s: secret in base32 format
        :param initial_count: starting HMAC counter value, defaults to 0
        :param kwargs: digits, digest, name, issuer, tags and cache, see :class:`OTP`
        """
        self.initial_count = initial_count
        super().__init__(s=s, **kwargs)

    def at(self, count: int) -> str:
        """
        Generates the OTP for the given count.

        :param count: the OTP HMAC counter, relative to ``initial_count``
        :returns: OTP
        """
        return self.generate_otp(self.initial_count + count)

    def verify(self, otp: str, counter: int) -> bool:
        """
        Verifies the OTP passed in against the OTP for exactly one counter.

        :param otp: the OTP to check against
        :param counter: the OTP HMAC counter, relative to ``initial_count``
        """
        return utils.strings_equal(str(otp), str(self.at(counter)))

    def configuration(self) -> OTPConfiguration:
        return OTPConfiguration(
            type=OTPType.HOTP,
            label=self.name,
            seed=self.secret,
            issuer=self.issuer,
            algorithm=self.digest,
            digits=self.digits,
            counter=self.initial_count,
            tags=self.tags,
        )

    def provisioning_uri(
        self,
        name: Optional[str] = None,
        initial_count: Optional[int] = None,
        issuer_name: Optional[str] = None,
    ) -> str:
        """
        Returns the provisioning URI for the OTP.  This can then be
        encoded in a QR Code and used to provision an OTP app like
        Google Authenticator.

        See also:
            https://github.com/google/google-authenticator/wiki/Key-Uri-Format

        :param name: name of the user account
        :param initial_count: starting HMAC counter value
        :param issuer_name: the name of the OTP issuer; this will be the
            organization title of the OTP entry in Authenticator
        :returns: provisioning URI
        """
        changes: Dict[str, Any] = {}
        if name:
            changes["label"] = name
        if initial_count is not None:
            changes["counter"] = initial_count
        if issuer_name:
            changes["issuer"] = issuer_name
        return build_uri(replace(self.configuration(), **changes))
