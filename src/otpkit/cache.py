import logging
import threading
from typing import Dict, Tuple, Union

from . import base32, seed
from .algorithms import HashAlgorithm

log = logging.getLogger(__name__)


class SecretCache(object):
    """
    Remembers decoded seeds, keyed by (seed, hash algorithm).

    Safe to share between threads. Two threads decoding the same seed at the
    same time is harmless since both get the same bytes; the first one stored
    wins. Call :meth:`clear` (or use the cache as a context manager) to wipe
    the key material when done.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._entries: Dict[Tuple[str, HashAlgorithm], bytearray] = {}

    def get(self, s: str, algorithm: Union[str, HashAlgorithm] = HashAlgorithm.SHA1) -> bytes:
        """
        Returns the decoded bytes of a seed, decoding it on first use.

        :param s: seed in base32 format, normalized before lookup
        :param algorithm: hash algorithm the key will be used with
        """
        key = (seed.normalize(s), HashAlgorithm.parse(algorithm))
        with self._lock:
            entry = self._entries.get(key)
            if entry is not None:
                return bytes(entry)

        seed.validate(key[0])
        decoded = bytearray(base32.decode(key[0]))
        with self._lock:
            entry = self._entries.setdefault(key, decoded)
            result = bytes(entry)
        if entry is decoded:
            log.debug("Cached decoded seed for %s", key[1].value)
        else:
            _wipe(decoded)
        return result

    def clear(self) -> None:
        """
        Overwrites every cached key with zeros and forgets it.
        """
        with self._lock:
            entries = list(self._entries.values())
            self._entries.clear()
        for entry in entries:
            _wipe(entry)
        log.debug("Cleared %d cached seeds", len(entries))

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: Tuple[str, Union[str, HashAlgorithm]]) -> bool:
        s, algorithm = key
        with self._lock:
            return (seed.normalize(s), HashAlgorithm.parse(algorithm)) in self._entries

    def __enter__(self) -> "SecretCache":
        return self

    def __exit__(self, *exc_info) -> None:
        self.clear()


def _wipe(buffer: bytearray) -> None:
    buffer[:] = b"\0" * len(buffer)
