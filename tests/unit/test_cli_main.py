"""Unit tests for simple_session.cli.main.

Uses Click's test runner (CliRunner); no network or disk I/O is required.
"""
from __future__ import annotations

import base64

import pytest
from click.testing import CliRunner

from simple_session.cli.main import cli

ROOT_KEY_B64: str = base64.b64encode(bytes(range(32))).decode("ascii")
OTHER_KEY_B64: str = base64.b64encode(bytes(range(1, 33))).decode("ascii")


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def runner() -> CliRunner:
    return CliRunner()


def _create(runner: CliRunner, *args: str) -> str:
    result = runner.invoke(cli, ["token", "create", *args])
    assert result.exit_code == 0, result.output
    return result.output.strip()


# ---------------------------------------------------------------------------
# version / keygen
# ---------------------------------------------------------------------------


class TestVersion:
    def test_version_command(self, runner: CliRunner) -> None:
        from simple_session import __version__

        result = runner.invoke(cli, ["version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_help_lists_commands(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        for name in ("version", "keygen", "token"):
            assert name in result.output


class TestKeygen:
    def test_default_length(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["keygen"])
        assert result.exit_code == 0
        assert len(base64.b64decode(result.output.strip())) == 32

    def test_custom_length(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["keygen", "--length", "48"])
        assert result.exit_code == 0
        assert len(base64.b64decode(result.output.strip())) == 48

    def test_keys_are_random(self, runner: CliRunner) -> None:
        first = runner.invoke(cli, ["keygen"]).output
        second = runner.invoke(cli, ["keygen"]).output
        assert first != second

    def test_too_short_rejected(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["keygen", "--length", "8"])
        assert result.exit_code == 2


# ---------------------------------------------------------------------------
# token create / verify
# ---------------------------------------------------------------------------


class TestTokenCreate:
    def test_creates_v0_token(self, runner: CliRunner) -> None:
        token = _create(runner, "--key", ROOT_KEY_B64, "00ff10")
        assert token.startswith("v0!")

    def test_random_payload_when_omitted(self, runner: CliRunner) -> None:
        first = _create(runner, "--key", ROOT_KEY_B64)
        second = _create(runner, "--key", ROOT_KEY_B64)
        assert first != second

    def test_bad_hex_exits_2(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["token", "create", "--key", ROOT_KEY_B64, "zz"])
        assert result.exit_code == 2
        assert "not valid hex" in result.output

    def test_bad_key_exits_2(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["token", "create", "--key", "not base64!", "00"])
        assert result.exit_code == 2

    def test_empty_key_exits_2(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["token", "create", "--key", "", "00"])
        assert result.exit_code == 2

    def test_key_from_environment(self, runner: CliRunner) -> None:
        result = runner.invoke(
            cli, ["token", "create", "00"], env={"SIMPLE_SESSION_KEY": ROOT_KEY_B64}
        )
        assert result.exit_code == 0
        assert result.output.startswith("v0!")

    def test_missing_key_is_usage_error(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["token", "create", "00"], env={"SIMPLE_SESSION_KEY": None})
        assert result.exit_code == 2


class TestTokenVerify:
    def test_round_trip(self, runner: CliRunner) -> None:
        token = _create(runner, "--key", ROOT_KEY_B64, "deadbeef")
        result = runner.invoke(cli, ["token", "verify", "--key", ROOT_KEY_B64, token])
        assert result.exit_code == 0
        assert "deadbeef" in result.output
        assert "v0" in result.output

    def test_csrf_role_round_trip(self, runner: CliRunner) -> None:
        token = _create(runner, "--key", ROOT_KEY_B64, "--role", "csrf", "0102")
        result = runner.invoke(
            cli, ["token", "verify", "--key", ROOT_KEY_B64, "--role", "csrf", token]
        )
        assert result.exit_code == 0
        assert "0102" in result.output

    def test_wrong_role_not_authentic(self, runner: CliRunner) -> None:
        token = _create(runner, "--key", ROOT_KEY_B64, "--role", "csrf", "0102")
        result = runner.invoke(cli, ["token", "verify", "--key", ROOT_KEY_B64, token])
        assert result.exit_code == 1
        assert "not authentic" in result.output

    def test_wrong_key_not_authentic(self, runner: CliRunner) -> None:
        token = _create(runner, "--key", ROOT_KEY_B64, "0102")
        result = runner.invoke(cli, ["token", "verify", "--key", OTHER_KEY_B64, token])
        assert result.exit_code == 1
        assert "not authentic" in result.output

    def test_unsupported_version(self, runner: CliRunner) -> None:
        token = _create(runner, "--key", ROOT_KEY_B64, "0102").replace("v0!", "v7!", 1)
        result = runner.invoke(cli, ["token", "verify", "--key", ROOT_KEY_B64, token])
        assert result.exit_code == 1
        assert "unsupported version" in result.output

    def test_malformed(self, runner: CliRunner) -> None:
        token = _create(runner, "--key", ROOT_KEY_B64, "0102")
        result = runner.invoke(cli, ["token", "verify", "--key", ROOT_KEY_B64, token[:-2]])
        assert result.exit_code == 1
        assert "malformed" in result.output
