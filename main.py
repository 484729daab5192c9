"""
otpgen – command line entry point.

Usage
-----
    python main.py totp --secret 12345678901234567890
    python main.py hotp --secret-hex 3132333435363738393031323334353637383930 --counter 1
    python main.py verify 287082 --secret 12345678901234567890 --counter 0

Or, if installed as a package:
    otpgen totp --secret ...

This is the only place the wall clock is read; the time is passed into the
generator explicitly.
"""

import argparse
import logging
import sys
import time
from typing import List, Optional

from otpgen.errors import OTPError
from otpgen.generator import Generator
from otpgen.hotp import Algorithm, DEFAULT_ALGORITHM
from otpgen.totp import Counter, Timer, remaining_seconds
from otpgen.utils import DEFAULT_DIGITS, DEFAULT_PERIOD, DEFAULT_WINDOW, format_otp

logger = logging.getLogger("otpgen")


# ── Argument parsing ──────────────────────────────────────────────────────────

def _add_common(parser: argparse.ArgumentParser) -> None:
    secret = parser.add_mutually_exclusive_group(required=True)
    secret.add_argument("--secret", help="Shared secret as UTF-8 text")
    secret.add_argument("--secret-hex", help="Shared secret as hex bytes")
    parser.add_argument(
        "--algorithm",
        type=str.upper,
        choices=[a.value for a in Algorithm],
        default=DEFAULT_ALGORITHM.value,
    )
    parser.add_argument("--digits", type=int, default=DEFAULT_DIGITS)
    parser.add_argument("--group", type=int, default=0, help="Group digits for display")
    parser.add_argument("-v", "--verbose", action="store_true")


def _add_timer(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--period", type=float, default=DEFAULT_PERIOD)
    parser.add_argument("--time", type=float, default=None, help="Unix time (default: now)")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="otpgen", description="HOTP / TOTP password generator")
    sub = parser.add_subparsers(dest="cmd", required=True)

    hotp_cmd = sub.add_parser("hotp", help="Counter-based password")
    _add_common(hotp_cmd)
    hotp_cmd.add_argument("--counter", type=int, required=True)

    totp_cmd = sub.add_parser("totp", help="Time-based password")
    _add_common(totp_cmd)
    _add_timer(totp_cmd)

    verify_cmd = sub.add_parser("verify", help="Check a password")
    verify_cmd.add_argument("token")
    _add_common(verify_cmd)
    _add_timer(verify_cmd)
    verify_cmd.add_argument("--counter", type=int, default=None, help="Verify as HOTP")
    verify_cmd.add_argument("--window", type=int, default=DEFAULT_WINDOW)

    return parser.parse_args(argv)


# ── Commands ──────────────────────────────────────────────────────────────────

def _secret(args: argparse.Namespace) -> bytes:
    if args.secret_hex is not None:
        try:
            return bytes.fromhex(args.secret_hex)
        except ValueError as exc:
            raise ValueError(f"Invalid hex secret: {exc}") from exc
    return args.secret.encode("utf-8")


def _build_generator(args: argparse.Namespace) -> Generator:
    if getattr(args, "counter", None) is not None:
        factor = Counter(args.counter)
    else:
        factor = Timer(args.period)
    return Generator(
        factor=factor,
        secret=_secret(args),
        algorithm=Algorithm(args.algorithm),
        digits=args.digits,
    )


def run(args: argparse.Namespace) -> int:
    now = args.time if getattr(args, "time", None) is not None else time.time()
    generator = _build_generator(args)
    logger.debug("Using %s/%d digits, factor=%r", generator.algorithm.value, generator.digits, generator.factor)

    if args.cmd == "verify":
        result = generator.verify(args.token, now, window=args.window)
        if result is None:
            print("invalid")
            return 1
        print(f"valid (counter={result})")
        return 0

    code = generator.password_at(now)
    if isinstance(generator.factor, Timer):
        rem = remaining_seconds(generator.factor, now)
        print(f"{format_otp(code, args.group)}  (valid {rem:.0f}s)")
    else:
        print(format_otp(code, args.group))
    return 0


# ── Main ──────────────────────────────────────────────────────────────────────

def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )
    if not args.verbose:
        logging.getLogger("otpgen").setLevel(logging.WARNING)

    try:
        return run(args)
    except OTPError as exc:
        logger.error("%s: %s", type(exc).__name__, exc)
        return 2
    except ValueError as exc:
        logger.error("Invalid argument: %s", exc)
        return 2


if __name__ == "__main__":
    sys.exit(main())
