"""Shared fixtures: a private config and a runner that never starts a process."""

import subprocess
from typing import Iterable, List

import pytest

from popos_postinstall.config import Config
from popos_postinstall.logger import setup_logger
from popos_postinstall.runner import CommandRunner


class RecordingRunner(CommandRunner):
    """Records every command and fails those containing one of ``failing``."""

    def __init__(self, config, logger, failing: Iterable[str] = (), authorized: bool = True):
        super().__init__(config, logger)
        self.commands: List[List[str]] = []
        self.failing = tuple(failing)
        self.authorized = authorized
        self.auth_calls = 0

    def run(self, cmd):
        self.commands.append(list(cmd))
        joined = " ".join(cmd)
        code = 100 if any(pattern in joined for pattern in self.failing) else 0
        return subprocess.CompletedProcess(args=cmd, returncode=code)

    def authenticate(self):
        self.auth_calls += 1
        return self.authorized


@pytest.fixture
def config(tmp_path):
    return Config(log_file=tmp_path / "logs" / "install_log.txt", reboot_delay=0)


@pytest.fixture
def logger(config):
    return setup_logger(config)


@pytest.fixture
def runner(config, logger):
    return RecordingRunner(config, logger)


@pytest.fixture
def make_runner(config, logger):
    def factory(failing: Iterable[str] = (), authorized: bool = True):
        return RecordingRunner(config, logger, failing, authorized)

    return factory
