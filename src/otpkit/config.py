"""
Value objects describing one OTP provisioning and the codes it produces.
"""
import time
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, Optional, Tuple, Union

from . import base32, seed
from .algorithms import HashAlgorithm
from .compat import random
from .errors import InvalidParameterError, InvalidTypeError, MissingLabelError

if TYPE_CHECKING:
    from .cache import SecretCache
    from .otp import OTP

DEFAULT_DIGITS = 6
DEFAULT_PERIOD = 30
DEFAULT_ALGORITHM = HashAlgorithm.SHA1
DIGITS_RANGE = range(6, 9)
PERIOD_RANGE = range(15, 91)
MAX_COUNTER = 2**64 - 1


class OTPType(Enum):
    TOTP = "totp"
    HOTP = "hotp"

    @classmethod
    def parse(cls, value: Union[str, "OTPType"]) -> "OTPType":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise InvalidTypeError("Not a supported OTP type: {!r}".format(value)) from None


@dataclass
class OTPConfiguration:
    """
    Everything an authenticator needs to produce codes for one account.

    ``period`` only matters for TOTP and ``counter`` only for HOTP; the other
    one is kept but ignored.
    """

    type: OTPType
    label: str
    seed: str
    issuer: Optional[str] = None
    algorithm: HashAlgorithm = DEFAULT_ALGORITHM
    digits: int = DEFAULT_DIGITS
    period: int = DEFAULT_PERIOD
    counter: int = 0
    tags: Tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        self.type = OTPType.parse(self.type)
        self.algorithm = HashAlgorithm.parse(self.algorithm)
        self.seed = seed.normalize(self.seed)
        seed.validate(self.seed)
        # ordered set, first occurrence wins
        self.tags = tuple(dict.fromkeys(self.tags))

        if not self.label:
            raise MissingLabelError("Label must not be empty")
        if self.issuer == "":
            self.issuer = None
        if self.digits not in DIGITS_RANGE:
            raise InvalidParameterError("Digits may only be 6, 7, or 8")
        if self.type is OTPType.TOTP and self.period not in PERIOD_RANGE:
            raise InvalidParameterError("Period must be between 15 and 90 seconds")
        if self.type is OTPType.HOTP and not 0 <= self.counter <= MAX_COUNTER:
            raise InvalidParameterError("Counter must be a non-negative 64-bit integer")

    def __repr__(self) -> str:
        return "OTPConfiguration(type={}, label={!r}, issuer={!r}, algorithm={}, digits={})".format(
            self.type.value, self.label, self.issuer, self.algorithm.value, self.digits
        )

    @classmethod
    def generate(
        cls,
        label: str,
        type: Union[str, OTPType] = OTPType.TOTP,
        secret_bytes: int = 20,
        **kwargs,
    ) -> "OTPConfiguration":
        """
        Creates a configuration with a fresh random seed.

        :param label: account name, optionally prefixed with ``issuer:``
        :param type: TOTP or HOTP
        :param secret_bytes: key length in bytes, 20 (160 bits) by default
        :param kwargs: any other field
        """
        data = bytes(random.getrandbits(8) for _ in range(secret_bytes))
        return cls(type=type, label=label, seed=base32.encode(data), **kwargs)

    @property
    def account(self) -> str:
        """The label without an ``issuer:`` prefix."""
        return self.label.split(":", 1)[-1].strip()

    def secret(self, cache: Optional["SecretCache"] = None) -> bytes:
        if cache is not None:
            return cache.get(self.seed, self.algorithm)
        return base32.decode(self.seed)

    def otp(self, cache: Optional["SecretCache"] = None) -> "OTP":
        """
        Returns the HOTP or TOTP handler for this configuration.
        """
        from .hotp import HOTP
        from .totp import TOTP

        common = dict(
            digits=self.digits,
            digest=self.algorithm,
            name=self.label,
            issuer=self.issuer,
            tags=self.tags,
            cache=cache,
        )
        if self.type is OTPType.HOTP:
            return HOTP(self.seed, initial_count=self.counter, **common)
        return TOTP(self.seed, interval=self.period, **common)

    def generate_code(
        self,
        for_time: Union[None, int, float, datetime] = None,
        cache: Optional["SecretCache"] = None,
    ) -> "GeneratedCode":
        """
        Computes the current code: the one for ``for_time`` (default now) for
        TOTP, the one for ``counter`` for HOTP.

        The seed was validated when the configuration was built, so no
        advisory is repeated here.
        """
        from .otp import compute_hotp
        from .totp import timecode

        valid_until = None
        if self.type is OTPType.HOTP:
            counter = self.counter
        else:
            if for_time is None:
                for_time = time.time()
            counter = timecode(for_time, self.period)
            valid_until = (counter + 1) * self.period

        return GeneratedCode(
            value=compute_hotp(self.secret(cache), counter, self.algorithm, self.digits),
            type=self.type,
            algorithm=self.algorithm,
            seed=self.seed,
            tags=self.tags,
            counter=counter,
            valid_until=valid_until,
        )


@dataclass(frozen=True)
class GeneratedCode:
    """
    One computed code. Not meant to be stored.
    """

    value: str
    type: OTPType
    algorithm: HashAlgorithm
    seed: str
    tags: Tuple[str, ...] = ()
    counter: int = 0
    valid_until: Optional[int] = None

    def __str__(self) -> str:
        return self.value

    def __repr__(self) -> str:
        return "GeneratedCode(type={}, algorithm={}, counter={}, tags={!r})".format(
            self.type.value, self.algorithm.value, self.counter, self.tags
        )
