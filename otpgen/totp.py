"""
Moving factors and counter resolution (RFC 4226 / RFC 6238).

A moving factor is either an explicit ``Counter`` (HOTP) or a ``Timer``
(TOTP) whose counter is ``floor(now / period)``. The current time is always
passed in by the caller; nothing in this module reads the system clock.
"""

import math
import struct
from dataclasses import dataclass
from typing import Union

from otpgen.errors import InvalidTime
from otpgen.utils import COUNTER_MAX, DEFAULT_PERIOD, validate_counter, validate_period


@dataclass(frozen=True)
class Counter:
    """HOTP factor. The owner advances ``value`` after each accepted password."""

    value: int = 0

    def __post_init__(self) -> None:
        validate_counter(self.value)


@dataclass(frozen=True)
class Timer:
    """TOTP factor: ``period`` seconds per time step."""

    period: float = DEFAULT_PERIOD

    def __post_init__(self) -> None:
        validate_period(self.period)


MovingFactor = Union[Counter, Timer]


def resolve_counter(factor: MovingFactor, now: float) -> int:
    """
    Resolve a moving factor to its counter value at time ``now``.

    Args:
        factor: ``Counter`` or ``Timer``.
        now:    Seconds since the Unix epoch (ignored for ``Counter``).

    Returns:
        Unsigned 64-bit counter.

    Raises:
        InvalidPeriod: Timer period not positive and finite.
        InvalidTime:   ``now`` is not finite, is negative, or overflows 64 bits.
    """
    if isinstance(factor, Counter):
        return factor.value
    if not isinstance(factor, Timer):
        raise TypeError(f"Unknown moving factor {factor!r}.")

    validate_period(factor.period)
    try:
        finite = math.isfinite(now)
    except (TypeError, OverflowError):
        finite = False
    if not finite:
        raise InvalidTime(f"Time must be a finite number of seconds, got {now!r}.")

    steps = now / factor.period
    if not math.isfinite(steps):
        raise InvalidTime(f"Time {now} overflows the 64-bit counter.")
    counter = math.floor(steps)
    if counter < 0:
        raise InvalidTime(f"Time {now} precedes the Unix epoch.")
    if counter > COUNTER_MAX:
        raise InvalidTime(f"Time {now} overflows the 64-bit counter.")
    return counter


def counter_bytes(counter: int) -> bytes:
    """Serialise ``counter`` as 8 bytes, big-endian."""
    if not 0 <= counter <= COUNTER_MAX:
        raise InvalidTime(f"Counter {counter} does not fit in 64 bits.")
    return struct.pack(">Q", counter)


# ── Time-step helpers ─────────────────────────────────────────────────────────

def time_step_start(timer: Timer, now: float) -> float:
    """Return the timestamp at which the time step containing ``now`` began."""
    return resolve_counter(timer, now) * timer.period


def remaining_seconds(timer: Timer, now: float) -> float:
    """Return seconds until the current TOTP window expires (always > 0)."""
    return (resolve_counter(timer, now) + 1) * timer.period - now
