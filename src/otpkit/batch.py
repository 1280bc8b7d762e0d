"""
Code generation and URI parsing for many accounts at once.

A failure on one item is recorded on its result and the remaining items are
still processed, unless ``stop_on_error`` is set.
"""
import logging
from datetime import datetime
from typing import Iterable, List, NamedTuple, Optional, Union

from .cache import SecretCache
from .config import GeneratedCode, OTPConfiguration
from .errors import OTPError
from .uri import parse_uri

log = logging.getLogger(__name__)


class CodeResult(NamedTuple):
    config: OTPConfiguration
    code: Optional[GeneratedCode] = None
    error: Optional[OTPError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class ParseResult(NamedTuple):
    uri: str
    config: Optional[OTPConfiguration] = None
    error: Optional[OTPError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def generate_codes(
    configs: Iterable[OTPConfiguration],
    for_time: Union[None, int, float, datetime] = None,
    cache: Optional[SecretCache] = None,
    stop_on_error: bool = False,
) -> List[CodeResult]:
    """
    Computes the current code of every configuration.

    This is what a periodic refresh loop calls on each tick.

    :param configs: configurations to compute codes for
    :param for_time: moment for TOTP codes, defaults to now
    :param cache: decode cache shared by all items
    :param stop_on_error: re-raise the first error instead of recording it
    :returns: one result per configuration, in input order
    """
    results: List[CodeResult] = []
    for config in configs:
        try:
            code = config.generate_code(for_time, cache=cache)
        except OTPError as e:
            if stop_on_error:
                raise
            log.warning("Could not generate a code for %r: %s", config.label, e)
            results.append(CodeResult(config, error=e))
        else:
            results.append(CodeResult(config, code))
    return results


def parse_uris(uris: Iterable[str], stop_on_error: bool = False) -> List[ParseResult]:
    """
    Parses every otpauth URI.

    :param uris: URI texts
    :param stop_on_error: re-raise the first error instead of recording it
    :returns: one result per URI, in input order
    """
    results: List[ParseResult] = []
    for index, uri in enumerate(uris):
        try:
            config = parse_uri(uri)
        except OTPError as e:
            if stop_on_error:
                raise
            log.warning("Could not parse URI #%d: %s", index, e)
            results.append(ParseResult(uri, error=e))
        else:
            results.append(ParseResult(uri, config))
    return results
