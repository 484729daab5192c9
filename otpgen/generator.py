"""
Password generator configuration.

A :class:`Generator` bundles everything needed to derive a one-time password:
the moving factor, the shared secret, the hash algorithm and the digit count.
It is immutable; computing a password never advances a counter.
"""

import dataclasses
import logging
import time
from dataclasses import dataclass, field
from typing import Callable, Optional

from cryptography.hazmat.primitives import constant_time

from otpgen.errors import OTPError
from otpgen.hotp import DEFAULT_ALGORITHM, Algorithm, generate_password
from otpgen.totp import Counter, MovingFactor, Timer, counter_bytes, resolve_counter
from otpgen.utils import (
    COUNTER_MAX,
    DEFAULT_DIGITS,
    DEFAULT_WINDOW,
    validate_counter,
    validate_digits,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Generator:
    """Immutable set of parameters for HOTP/TOTP generation."""

    factor: MovingFactor
    secret: bytes = field(repr=False)
    algorithm: Algorithm = DEFAULT_ALGORITHM
    digits: int = DEFAULT_DIGITS

    def __post_init__(self) -> None:
        if not isinstance(self.factor, (Counter, Timer)):
            raise TypeError(f"Unknown moving factor {self.factor!r}.")
        validate_digits(self.digits)
        if not isinstance(self.secret, (bytes, bytearray, memoryview)):
            raise TypeError(
                f"Secret must be bytes, bytearray or memoryview, got {type(self.secret).__name__}."
            )
        # Own a private, immutable copy of the secret.
        object.__setattr__(self, "secret", bytes(self.secret))
        object.__setattr__(self, "algorithm", Algorithm(self.algorithm))

    # ── Password generation ──────────────────────────────────────────────

    def password_at(self, now: float) -> str:
        """
        Return the password for the given time.

        For a counter-based generator the result does not depend on ``now``.
        The counter is *not* incremented.

        Args:
            now: Seconds since the Unix epoch (UTC), fractional allowed.

        Raises:
            InvalidTime: If ``now`` yields a negative or overflowing counter.
        """
        counter = resolve_counter(self.factor, now)
        return self._password_for_counter(counter)

    def _password_for_counter(self, counter: int) -> str:
        return generate_password(
            self.algorithm, self.secret, counter_bytes(counter), self.digits
        )

    def successor(self) -> "Generator":
        """
        Return a copy with the counter advanced by one.

        Timer-based generators have nothing to advance and are returned as-is.
        """
        if isinstance(self.factor, Timer):
            return self
        return dataclasses.replace(self, factor=Counter(self.factor.value + 1))

    # ── Verification ─────────────────────────────────────────────────────

    def verify(
        self, token: str, now: float, window: int = DEFAULT_WINDOW
    ) -> Optional[int]:
        """
        Check a candidate password.

        Counter generators search ``window`` steps ahead of the stored counter
        and return the counter value to store next. Timer generators accept
        ``window`` steps of clock skew either side and return the matched
        time-step counter.

        Args:
            token:  Candidate password (surrounding whitespace is ignored).
            now:    Seconds since the Unix epoch.
            window: Look-ahead / skew in steps (>= 0).

        Returns:
            Counter as described above, or None if the token is invalid.

        Raises:
            InvalidCounter: A counter token matched at the last 64-bit value,
                leaving no next counter to store.
        """
        if window < 0:
            raise ValueError("Window must be non-negative.")
        candidate = token.strip().encode("ascii", "replace")
        current = resolve_counter(self.factor, now)

        if isinstance(self.factor, Counter):
            steps = range(current, current + window + 1)
        else:
            steps = range(current - window, current + window + 1)

        for counter in steps:
            if not 0 <= counter <= COUNTER_MAX:
                continue
            expected = self._password_for_counter(counter).encode("ascii")
            if constant_time.bytes_eq(candidate, expected):
                if isinstance(self.factor, Counter):
                    validate_counter(counter + 1)
                    return counter + 1
                return counter
        return None


def current_password(
    generator: Generator, clock: Callable[[], float] = time.time
) -> Optional[str]:
    """
    Best-effort password for "now".

    Reads ``clock`` (the wall clock by default) and swallows every
    :class:`OTPError`, returning None instead.
    """
    try:
        return generator.password_at(clock())
    except OTPError as exc:
        logger.debug("Could not generate password: %s", exc)
        return None
