"""Test command line parsing and the process entry point."""

import asyncio
import io
import json
import logging

import pytest

from confirmator import cli
from confirmator.config import SchedulerConfig
from confirmator.core.types import AcceptPolicy
from confirmator.errors import TransportError
from confirmator.session.models import AccountCredentials
from tests.conftest import FakeSession


def build_failing_session(credentials: AccountCredentials) -> FakeSession:
    return FakeSession(fetch_results=[TransportError("remote API changed")])


def build_session_with_bad_signature(credentials: AccountCredentials, region: str) -> FakeSession:
    return FakeSession()


class TtyStream(io.StringIO):
    def isatty(self) -> bool:
        return True


@pytest.fixture
def mafile(tmp_path):
    path = tmp_path / "bob.maFile"
    path.write_text(json.dumps({"account_name": "bob", "Session": {"SteamID": 76561198000000002}}))
    return path


@pytest.fixture
def quiet_main(monkeypatch, tmp_path):
    """Run main without touching global logging or a stray .env."""
    monkeypatch.setattr(cli, "setup_logging", lambda **kwargs: None)
    monkeypatch.chdir(tmp_path)
    for name in ("DRY_RUN", "CONFIRMATOR_SESSION_BACKEND", "CONFIRMATOR_IDLE_DELAY", "LOG_DIR"):
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    return monkeypatch


class TestParseArgs:
    """Test flag and positional handling."""

    def test_flags_build_policy(self):
        options = cli.parse_args(["a.maFile", "-trade", "-market"])
        assert options.paths == ["a.maFile"]
        assert options.policy == AcceptPolicy.TRADES | AcceptPolicy.MARKET_SALES
        assert options.policy_defaulted is False
        assert options.delay is None

    def test_long_aliases(self):
        options = cli.parse_args(["a.maFile", "--accept-other"])
        assert options.policy == AcceptPolicy.OTHER

    def test_no_flags_defaults_to_all(self):
        options = cli.parse_args(["a.maFile"])
        assert options.policy == AcceptPolicy.ALL
        assert options.policy_defaulted is True

    def test_bare_number_is_delay(self):
        options = cli.parse_args(["a.maFile", "30", "b.maFile"])
        assert options.paths == ["a.maFile", "b.maFile"]
        assert options.delay == 30

    def test_delay_after_flags(self):
        """Flags and positionals may come in any order."""
        options = cli.parse_args(["a.maFile", "-trade", "-market", "30"])
        assert options.paths == ["a.maFile"]
        assert options.delay == 30
        assert options.policy == AcceptPolicy.TRADES | AcceptPolicy.MARKET_SALES

    def test_file_after_flag(self):
        options = cli.parse_args(["a.maFile", "-trade", "b.maFile"])
        assert options.paths == ["a.maFile", "b.maFile"]
        assert options.policy == AcceptPolicy.TRADES

    def test_flag_first(self):
        options = cli.parse_args(["-other", "a.maFile", "15"])
        assert options.paths == ["a.maFile"]
        assert options.delay == 15

    def test_delay_option(self):
        assert cli.parse_args(["a.maFile", "--delay", "0"]).delay == 0

    def test_negative_delay_rejected(self):
        with pytest.raises(SystemExit) as exc_info:
            cli.parse_args(["a.maFile", "--delay", "-3"])
        assert exc_info.value.code == cli.EXIT_USAGE

    def test_missing_file_argument(self):
        with pytest.raises(SystemExit) as exc_info:
            cli.parse_args([])
        assert exc_info.value.code == cli.EXIT_USAGE

    def test_only_delay_given(self):
        with pytest.raises(SystemExit) as exc_info:
            cli.parse_args(["45"])
        assert exc_info.value.code == cli.EXIT_USAGE


class TestConsoleTitle:
    def test_written_to_terminal(self):
        stream = TtyStream()
        cli.set_console_title("Confirmator [bob]", stream)
        assert stream.getvalue() == "\x1b]0;Confirmator [bob]\x07"

    def test_skipped_when_not_a_terminal(self):
        stream = io.StringIO()
        cli.set_console_title("Confirmator", stream)
        assert stream.getvalue() == ""


class TestRunAccounts:
    """Test concurrent account loops."""

    def test_fatal_error_cancels_other_accounts(self):
        healthy = FakeSession()
        failing = FakeSession(fetch_results=[TransportError("boom")])
        config = SchedulerConfig(idle_delay_seconds=1, show_progress=False)

        with pytest.raises(TransportError):
            asyncio.run(cli.run_accounts([healthy, failing], AcceptPolicy.ALL, config))

        assert failing.fetch_calls == 1
        assert healthy.refresh_calls == 1


class TestMain:
    """Test exit codes of the entry point."""

    def test_missing_file_exits_with_usage_error(self, quiet_main, tmp_path, capsys):
        quiet_main.setenv("DRY_RUN", "true")
        with pytest.raises(SystemExit) as exc_info:
            cli.main([str(tmp_path / "nope.maFile")])
        assert exc_info.value.code == cli.EXIT_USAGE
        assert "File not found" in capsys.readouterr().err

    def test_no_backend_exits_with_usage_error(self, quiet_main, mafile, capsys):
        with pytest.raises(SystemExit) as exc_info:
            cli.main([str(mafile)])
        assert exc_info.value.code == cli.EXIT_USAGE
        assert "No session backend" in capsys.readouterr().err

    def test_fatal_loop_error_exits_non_zero(self, quiet_main, mafile, capsys):
        quiet_main.setenv("CONFIRMATOR_SESSION_BACKEND", "tests.test_cli:build_failing_session")
        with pytest.raises(SystemExit) as exc_info:
            cli.main([str(mafile), "-trade"])
        assert exc_info.value.code == cli.EXIT_FATAL
        assert "remote API changed" in capsys.readouterr().err

    def test_log_dir_passed_to_logging(self, quiet_main, tmp_path):
        calls = []
        quiet_main.setattr(cli, "setup_logging", lambda **kwargs: calls.append(kwargs))
        quiet_main.setenv("LOG_DIR", str(tmp_path / "custom-logs"))

        with pytest.raises(SystemExit):
            cli.main([str(tmp_path / "nope.maFile"), "-v"])

        assert calls[0]["log_dir"] == tmp_path / "custom-logs"
        assert calls[0]["level"] == logging.DEBUG

    def test_broken_backend_factory_exits_with_usage_error(self, quiet_main, mafile, capsys):
        quiet_main.setenv("CONFIRMATOR_SESSION_BACKEND", "tests.test_cli:build_session_with_bad_signature")
        with pytest.raises(SystemExit) as exc_info:
            cli.main([str(mafile)])
        assert exc_info.value.code == cli.EXIT_USAGE
        assert "failed for 76561198000000002" in capsys.readouterr().err
