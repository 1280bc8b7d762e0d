import hashlib
import hmac
from enum import Enum
from typing import Any, Callable, Union

from .errors import ComputationError, UnsupportedAlgorithmError


class HashAlgorithm(Enum):
    """
    Hash functions an otpauth URI may name.
    """

    SHA1 = "SHA1"
    SHA256 = "SHA256"
    SHA512 = "SHA512"

    @property
    def digest(self) -> Callable[..., Any]:
        """The matching ``hashlib`` constructor."""
        return _DIGESTS[self]

    @classmethod
    def parse(cls, value: Union[str, "HashAlgorithm"]) -> "HashAlgorithm":
        """
        Looks up an algorithm by name, e.g. ``"SHA256"``, ``"sha-256"`` or ``"sha256"``.

        :raises UnsupportedAlgorithmError: for anything else
        """
        if isinstance(value, cls):
            return value
        name = str(value).replace("-", "").replace("_", "").strip().upper()
        try:
            return cls(name)
        except ValueError:
            raise UnsupportedAlgorithmError(
                "Invalid value for algorithm, must be SHA1, SHA256 or SHA512: {!r}".format(value)
            ) from None


_DIGESTS = {
    HashAlgorithm.SHA1: hashlib.sha1,
    HashAlgorithm.SHA256: hashlib.sha256,
    HashAlgorithm.SHA512: hashlib.sha512,
}


class HMACProvider(object):
    """
    Computes HMACs with one hash algorithm, chosen when the provider is built.
    """

    def __init__(self, algorithm: Union[str, HashAlgorithm] = HashAlgorithm.SHA1) -> None:
        self.algorithm = HashAlgorithm.parse(algorithm)
        self._digest = self.algorithm.digest

    def mac(self, key: bytes, message: bytes) -> bytes:
        """
        :param key: raw secret bytes
        :param message: message to authenticate
        :returns: the HMAC digest
        :raises ComputationError: if the underlying primitive fails
        """
        try:
            return hmac.new(bytes(key), message, self._digest).digest()
        except (TypeError, ValueError) as e:
            raise ComputationError("HMAC-{} failed: {}".format(self.algorithm.value, e)) from e

    def __repr__(self) -> str:
        return "HMACProvider({})".format(self.algorithm.value)


_PROVIDERS = {algorithm: HMACProvider(algorithm) for algorithm in HashAlgorithm}


def provider_for(algorithm: Union[str, HashAlgorithm]) -> HMACProvider:
    """Returns the shared provider for an algorithm."""
    return _PROVIDERS[HashAlgorithm.parse(algorithm)]
