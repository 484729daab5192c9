"""
HOTP (HMAC-based One-Time Password) password generation following RFC 4226.

The generator is a pure function of (algorithm, secret, counter, digits):
HMAC the 8-byte counter, apply dynamic truncation, reduce modulo 10^digits
and zero-pad.
"""

import hmac
import struct
from enum import Enum

from otpgen.errors import InvalidCounter
from otpgen.utils import DEFAULT_DIGITS, validate_counter, validate_digits


class Algorithm(str, Enum):
    """Supported HMAC algorithms."""

    SHA1 = "SHA1"
    SHA256 = "SHA256"
    SHA512 = "SHA512"

    @property
    def hash_name(self) -> str:
        """``hashlib`` name of the underlying hash function."""
        return _ALG_MAP[self]

    @property
    def digest_size(self) -> int:
        """Length in bytes of the HMAC output (20, 32 or 64)."""
        return _DIGEST_SIZES[self]


_ALG_MAP: dict[Algorithm, str] = {
    Algorithm.SHA1: "sha1",
    Algorithm.SHA256: "sha256",
    Algorithm.SHA512: "sha512",
}

_DIGEST_SIZES: dict[Algorithm, int] = {
    Algorithm.SHA1: 20,
    Algorithm.SHA256: 32,
    Algorithm.SHA512: 64,
}

DEFAULT_ALGORITHM = Algorithm.SHA1
COUNTER_SIZE = 8


def dynamic_truncate(digest: bytes) -> int:
    """
    Dynamic truncation (RFC 4226 §5.3).

    The low nibble of the last digest byte selects a 4-byte window, read as a
    big-endian integer with its most significant bit cleared.

    Args:
        digest: HMAC output, at least 20 bytes long.

    Returns:
        31-bit unsigned integer.
    """
    offset = digest[-1] & 0x0F
    (code,) = struct.unpack(">I", digest[offset : offset + 4])
    return code & 0x7FFFFFFF


def generate_password(
    algorithm: Algorithm,
    secret: bytes,
    counter_bytes: bytes,
    digits: int = DEFAULT_DIGITS,
) -> str:
    """
    Derive a password from an already serialised counter.

    Args:
        algorithm:     HMAC algorithm.
        secret:        Raw shared secret (any length, empty allowed).
        counter_bytes: 8-byte big-endian moving factor.
        digits:        Number of OTP digits (6, 7 or 8).

    Returns:
        Zero-padded OTP string of exactly ``digits`` characters.

    Raises:
        InvalidDigits:  If ``digits`` is not 6, 7 or 8.
        InvalidCounter: If ``counter_bytes`` is not 8 bytes long.
    """
    validate_digits(digits)
    if len(counter_bytes) != COUNTER_SIZE:
        raise InvalidCounter(
            f"Counter must be {COUNTER_SIZE} bytes, got {len(counter_bytes)}."
        )
    alg = Algorithm(algorithm)
    digest = hmac.new(bytes(secret), bytes(counter_bytes), alg.hash_name).digest()

    otp = dynamic_truncate(digest) % (10**digits)
    return str(otp).zfill(digits)


def generate_hotp(
    secret: bytes,
    counter: int,
    digits: int = DEFAULT_DIGITS,
    algorithm: Algorithm = DEFAULT_ALGORITHM,
) -> str:
    """
    Generate an HOTP code for an integer counter.

    Args:
        secret:    Raw shared secret bytes.
        counter:   Synchronisation counter value (unsigned 64-bit).
        digits:    Number of OTP digits.
        algorithm: HMAC algorithm.

    Returns:
        Zero-padded OTP string.
    """
    validate_counter(counter)
    return generate_password(algorithm, secret, struct.pack(">Q", counter), digits)
