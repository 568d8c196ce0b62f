"""Tests for command execution and step outcome reporting."""

import logging
import subprocess
import sys
from unittest.mock import MagicMock, call

import pytest

from popos_postinstall.config import Config
from popos_postinstall.runner import (
    COMMAND_NOT_FOUND,
    CommandRunner,
    SUDO_VALIDATE,
    DryRunRunner,
    Installer,
)
from popos_postinstall.steps import Routine, apt, command, flatpak, snap


def echo_command(text):
    return [sys.executable, "-c", f"print({text!r})"]


class TestCommandRunner:
    """Output routing between the log file and the terminal."""

    def test_quiet_mode_writes_only_to_log(self, config, logger, capfd):
        result = CommandRunner(config, logger).run(echo_command("quiet-output"))

        assert result.returncode == 0
        assert "quiet-output" not in capfd.readouterr().out
        assert "quiet-output" in config.log_file.read_text()

    def test_verbose_mode_writes_to_stdout(self, tmp_path, capfd):
        config = Config(log_file=tmp_path / "install_log.txt", verbose=True)
        config.log_file.touch()
        result = CommandRunner(config, logging.getLogger("test")).run(
            echo_command("verbose-output")
        )

        assert result.returncode == 0
        assert "verbose-output" in capfd.readouterr().out
        assert "verbose-output" not in config.log_file.read_text()

    def test_non_zero_exit_is_returned(self, config, logger):
        result = CommandRunner(config, logger).run(
            [sys.executable, "-c", "import sys; sys.exit(3)"]
        )
        assert result.returncode == 3

    def test_missing_executable(self, config, logger):
        result = CommandRunner(config, logger).run(["definitely-not-a-real-binary-xyz"])
        assert result.returncode == COMMAND_NOT_FOUND

    def test_dry_run_starts_nothing(self, config, logger, caplog):
        caplog.set_level(logging.INFO)
        result = DryRunRunner(config, logger).run(["definitely-not-a-real-binary-xyz"])
        assert result.returncode == 0
        assert "[dry-run] definitely-not-a-real-binary-xyz" in caplog.text


class TestAuthenticate:
    """sudo credentials are validated in the foreground before any install."""

    @pytest.fixture
    def fake_subprocess(self, monkeypatch):
        fake = MagicMock(return_value=subprocess.CompletedProcess(SUDO_VALIDATE, 0))
        monkeypatch.setattr("popos_postinstall.runner.subprocess.run", fake)
        return fake

    def test_root_needs_no_sudo(self, config, logger, fake_subprocess, monkeypatch):
        monkeypatch.setattr("popos_postinstall.runner.os.geteuid", lambda: 0)
        assert CommandRunner(config, logger).authenticate() is True
        fake_subprocess.assert_not_called()

    def test_user_prompted_on_terminal(self, config, logger, fake_subprocess, monkeypatch):
        monkeypatch.setattr("popos_postinstall.runner.os.geteuid", lambda: 1000)
        assert CommandRunner(config, logger).authenticate() is True
        # no stdin/stdout redirection, so sudo can talk to the user
        assert fake_subprocess.call_args_list == [call(["sudo", "-v"], check=False)]

    def test_rejected_password(self, config, logger, fake_subprocess, monkeypatch):
        monkeypatch.setattr("popos_postinstall.runner.os.geteuid", lambda: 1000)
        fake_subprocess.return_value = subprocess.CompletedProcess(SUDO_VALIDATE, 1)
        assert CommandRunner(config, logger).authenticate() is False

    def test_sudo_missing(self, config, logger, fake_subprocess, monkeypatch):
        monkeypatch.setattr("popos_postinstall.runner.os.geteuid", lambda: 1000)
        fake_subprocess.side_effect = FileNotFoundError("sudo")
        assert CommandRunner(config, logger).authenticate() is False

    def test_dry_run(self, config, logger, fake_subprocess, monkeypatch, caplog):
        caplog.set_level(logging.INFO)
        monkeypatch.setattr("popos_postinstall.runner.os.geteuid", lambda: 1000)
        assert DryRunRunner(config, logger).authenticate() is True
        fake_subprocess.assert_not_called()
        assert "[dry-run] sudo -v" in caplog.text


class TestInstaller:
    """Fallback chains and one report line per step."""

    @pytest.fixture
    def installer(self, config, logger, runner, tmp_path):
        return Installer(config, runner, logger, tmp_path)

    def test_success(self, installer, runner):
        outcome = installer.install(apt("nmap"), "Sysadmin")

        assert outcome.success is True
        assert outcome.routine == "Sysadmin"
        assert runner.commands == [["sudo", "apt", "install", "-y", "nmap"]]

    def test_fallback_used_after_failure(self, config, logger, make_runner, tmp_path):
        runner = make_runner(failing=["com.valvesoftware.Steam"])
        installer = Installer(config, runner, logger, tmp_path)
        step = flatpak("com.valvesoftware.Steam", "Steam", fallback=(apt("steam-installer"),))

        outcome = installer.install(step)

        assert outcome.success is True
        assert outcome.installed_by == step.fallback[0]
        assert "fallback" in outcome.message
        assert [cmd[-1] for cmd in runner.commands] == [
            "com.valvesoftware.Steam",
            "steam-installer",
        ]

    def test_fallback_not_tried_after_success(self, installer, runner):
        step = snap("discord", fallback=(flatpak("com.discordapp.Discord"),))
        installer.install(step)
        assert len(runner.commands) == 1

    def test_failure_logs_exactly_one_error(self, config, logger, make_runner, tmp_path, caplog):
        runner = make_runner(failing=["flatpak", "apt"])
        installer = Installer(config, runner, logger, tmp_path)
        step = flatpak("org.example.App", "Example", fallback=(apt("example"),))

        outcome = installer.install(step)

        errors = [r for r in caplog.records if r.levelno >= logging.ERROR]
        assert outcome.success is False
        assert outcome.returncode == 100
        assert len(errors) == 1
        assert "Example" in errors[0].getMessage()
        assert len(runner.commands) == 2

    def test_success_logs_exactly_one_info_line(self, installer, caplog):
        caplog.set_level(logging.INFO)
        installer.install(apt("nmap", "Nmap"))
        lines = [r for r in caplog.records if "Nmap" in r.getMessage()]
        assert len(lines) == 1
        assert lines[0].levelno == logging.INFO

    def test_routine_continues_after_failure(self, config, logger, make_runner, tmp_path):
        runner = make_runner(failing=["wireshark"])
        installer = Installer(config, runner, logger, tmp_path)
        routine = Routine("Demo", (apt("nmap"), apt("wireshark"), apt("virtualbox")))

        outcomes = installer.run_routine(routine)

        assert [o.success for o in outcomes] == [True, False, True]
        assert len(runner.commands) == 3

    def test_temp_dir_substituted(self, installer, runner, tmp_path):
        installer.install(command("Fetch", "wget", "-O", "{tmp}/a.tar.gz", "https://x"))
        assert runner.commands[0][3] == f"{tmp_path}/a.tar.gz"
