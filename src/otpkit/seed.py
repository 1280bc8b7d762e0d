import logging
import re
import warnings
from typing import NamedTuple

from . import base32
from .errors import EmptySeedError, EncodingError, SecurityAdvisory

log = logging.getLogger(__name__)

# RFC 4226 asks for at least 128 bits and recommends 160; 80 is the floor
# below which we warn.
MIN_SECRET_BYTES = 10

_SEED_RE = re.compile("[A-Z2-7]*")


def normalize(text: str) -> str:
    """
    Returns the canonical form of a Base32 seed: uppercase, without padding.

    Whitespace is dropped too, since authenticator apps display seeds in
    groups of four.

    :param text: seed as typed or transported
    :returns: canonical seed
    """
    return "".join(text.split()).upper().rstrip("=")


def validate(seed: str) -> int:
    """
    Checks a canonical seed and returns the number of key bytes it decodes to.

    A seed shorter than 80 bits only triggers a :class:`SecurityAdvisory`
    warning; it is still usable.

    :param seed: canonical seed, see :func:`normalize`
    :returns: key length in bytes
    :raises EmptySeedError: if the seed is blank
    :raises EncodingError: if the seed has characters outside ``A-Z2-7``
    """
    if not seed or seed.isspace():
        raise EmptySeedError("Seed must not be empty")
    if not _SEED_RE.fullmatch(seed):
        raise EncodingError("Seed contains characters outside the Base32 alphabet")

    byte_length = len(seed) * 5 // 8
    if byte_length < MIN_SECRET_BYTES:
        log.warning("Seed is only %d bits long", byte_length * 8)
        warnings.warn(
            "Seed decodes to {} bytes; at least {} bytes (80 bits) are recommended".format(
                byte_length, MIN_SECRET_BYTES
            ),
            SecurityAdvisory,
            stacklevel=2,
        )
    return byte_length


class Secret(NamedTuple):
    """
    A shared secret in both of its forms.
    """

    data: bytes
    text: str

    @classmethod
    def from_base32(cls, text: str) -> "Secret":
        seed = normalize(text)
        validate(seed)
        return cls(base32.decode(seed), seed)

    @classmethod
    def from_bytes(cls, data: bytes, padding: bool = False) -> "Secret":
        return cls(bytes(data), base32.encode(data, padding=padding))

    def __repr__(self) -> str:
        # keep key material out of tracebacks and logs
        return "Secret(<{} bytes>)".format(len(self.data))
