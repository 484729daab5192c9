"""
Error kinds raised by the password pipeline.

Every error is a deterministic function of its inputs, so nothing here is
retried. All kinds derive from :class:`ValueError` so callers that only care
about "bad input" can keep catching that.
"""


class OTPError(ValueError):
    """Base class for every one-time password error."""


class InvalidDigits(OTPError):
    """Digit count outside the supported range (6, 7 or 8)."""


class InvalidPeriod(OTPError):
    """Timer period that is zero, negative, NaN or infinite."""


class InvalidTime(OTPError):
    """Timestamp that yields a negative or non-representable counter."""


class InvalidCounter(OTPError):
    """Counter that does not fit in an unsigned 64-bit integer."""
