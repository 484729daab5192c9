"""Tests for the command line entry point (main.py)."""

import pytest

from main import main


RFC_SECRET_HEX = "3132333435363738393031323334353637383930"


def test_hotp_command(capsys: pytest.CaptureFixture) -> None:
    assert main(["hotp", "--secret", "12345678901234567890", "--counter", "1"]) == 0
    assert capsys.readouterr().out.strip() == "287082"


def test_hotp_command_hex_secret_grouped(capsys: pytest.CaptureFixture) -> None:
    assert main(["hotp", "--secret-hex", RFC_SECRET_HEX, "--counter", "9", "--group", "3"]) == 0
    assert capsys.readouterr().out.strip() == "520 489"


def test_totp_command_with_fixed_time(capsys: pytest.CaptureFixture) -> None:
    rc = main([
        "totp", "--secret", "12345678901234567890",
        "--digits", "8", "--time", "59", "--algorithm", "sha1",
    ])
    assert rc == 0
    out = capsys.readouterr().out
    assert out.startswith("94287082")
    assert "valid 1s" in out


def test_totp_command_wall_clock(capsys: pytest.CaptureFixture) -> None:
    assert main(["totp", "--secret", "abc"]) == 0
    code = capsys.readouterr().out.split()[0]
    assert len(code) == 6 and code.isdigit()


def test_verify_command(capsys: pytest.CaptureFixture) -> None:
    assert main(["verify", "287082", "--secret", "12345678901234567890", "--counter", "0"]) == 0
    assert "counter=2" in capsys.readouterr().out


def test_verify_command_invalid(capsys: pytest.CaptureFixture) -> None:
    rc = main(["verify", "000000", "--secret", "12345678901234567890", "--counter", "0"])
    assert rc == 1
    assert capsys.readouterr().out.strip() == "invalid"


@pytest.mark.parametrize(
    "argv",
    [
        ["hotp", "--secret", "x", "--counter", "0", "--digits", "9"],
        ["totp", "--secret", "x", "--period", "0"],
        ["totp", "--secret", "x", "--time", "-30"],
        ["hotp", "--secret-hex", "zz", "--counter", "0"],
    ],
)
def test_errors_exit_with_status_2(argv: list) -> None:
    assert main(argv) == 2


def test_verify_command_rejects_negative_window(
    capsys: pytest.CaptureFixture, caplog: pytest.LogCaptureFixture
) -> None:
    rc = main([
        "verify", "287082", "--secret", "12345678901234567890",
        "--counter", "0", "--window", "-1",
    ])
    assert rc == 2
    assert capsys.readouterr().out == ""
    assert "Invalid argument: Window must be non-negative." in caplog.text
