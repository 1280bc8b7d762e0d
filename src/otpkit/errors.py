"""
Error kinds raised by otpkit.

Every error derives from :class:`OTPError`, which is itself a ``ValueError``,
so callers written against plain ``ValueError`` keep working.
"""


class OTPError(ValueError):
    """
    Base class for all otpkit errors.
    """


class EncodingError(OTPError):
    """Malformed Base32 text."""


class EmptySeedError(OTPError):
    """The seed is empty or only whitespace."""


class UnsupportedAlgorithmError(OTPError):
    """Hash algorithm outside SHA1, SHA256 and SHA512."""


class URIFormatError(OTPError):
    """The text is not a usable otpauth URI."""


class InvalidTypeError(URIFormatError):
    """The URI host is neither ``totp`` nor ``hotp``."""


class MissingLabelError(URIFormatError):
    """The URI (or configuration) has no label."""


class MissingSecretError(URIFormatError):
    """The URI has no ``secret`` parameter."""


class InvalidParameterError(URIFormatError):
    """digits, period or counter is not an integer in its allowed range."""


class ComputationError(OTPError):
    """
    The HMAC primitive failed. This is unexpected and is never retried.
    """


class ImageDecodeError(OTPError):
    """
    The external image codec could not turn a QR image into text.

    The original exception is kept as ``__cause__``; otpkit does not interpret it.
    """


class SecurityAdvisory(UserWarning):
    """
    Non-fatal warning, issued when a seed is shorter than 80 bits.
    """
