"""
Defaults and validation helpers shared by the otpgen modules.
"""

import math

from otpgen.errors import InvalidCounter, InvalidDigits, InvalidPeriod


# ── Defaults ──────────────────────────────────────────────────────────────────

DEFAULT_DIGITS = 6
DEFAULT_PERIOD = 30.0       # seconds, RFC 6238 recommendation
DEFAULT_WINDOW = 1          # verification steps either side / look-ahead
SUPPORTED_DIGITS = (6, 7, 8)
COUNTER_MAX = 2**64 - 1


# ── Validation ────────────────────────────────────────────────────────────────

def validate_digits(digits: int) -> None:
    """
    Raise :class:`InvalidDigits` unless ``digits`` is 6, 7 or 8.

    ``bool`` is rejected even though it is an ``int`` subclass.
    """
    if isinstance(digits, bool) or not isinstance(digits, int):
        raise InvalidDigits(f"Digits must be an integer, got {digits!r}.")
    if digits not in SUPPORTED_DIGITS:
        raise InvalidDigits(f"Digits must be 6, 7 or 8, got {digits}.")


def validate_period(period: float) -> None:
    try:
        ok = math.isfinite(period) and period > 0
    except (TypeError, OverflowError):
        ok = False
    if not ok:
        raise InvalidPeriod(f"Period must be a positive, finite number of seconds, got {period!r}.")


def validate_counter(value: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidCounter(f"Counter must be an integer, got {value!r}.")
    if not 0 <= value <= COUNTER_MAX:
        raise InvalidCounter(f"Counter must fit in 64 bits, got {value}.")


# ── Display ───────────────────────────────────────────────────────────────────

def format_otp(code: str, group: int = 3) -> str:
    """
    Format an OTP code with spaces for readability.

    Example::

        >>> format_otp("123456")
        '123 456'
        >>> format_otp("1234567", group=4)
        '1234 567'

    Args:
        code:  Digit string.
        group: Digit grouping size (``0`` disables grouping).

    Returns:
        Spaced OTP string.
    """
    if group <= 0:
        return code
    return " ".join(code[i : i + group] for i in range(0, len(code), group))
