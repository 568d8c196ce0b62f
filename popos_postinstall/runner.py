"""Command execution and per-step success/failure reporting."""

import logging
import os
import subprocess
import time
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from popos_postinstall.config import Config
from popos_postinstall.steps import InstallStep, Routine
from popos_postinstall.ui import NordColors, console

COMMAND_NOT_FOUND: int = 127
SUDO_VALIDATE: List[str] = ["sudo", "-v"]


# ----------------------------------------------------------------
# Command Execution Utilities
# ----------------------------------------------------------------
class CommandRunner:
    """
    Runs delegated commands and never raises on a non-zero exit.

    In quiet mode the child's stdout and stderr are appended to the log file,
    in verbose mode they go straight to the terminal.
    """

    def __init__(self, config: Config, logger: logging.Logger) -> None:
        self.config = config
        self.logger = logger

    def run(self, cmd: List[str]) -> subprocess.CompletedProcess:
        self.logger.debug(f"Running command: {' '.join(cmd)}")
        try:
            if self.config.verbose:
                return subprocess.run(cmd, check=False)

            with open(self.config.log_file, "a", encoding="utf-8") as log:
                return subprocess.run(
                    cmd,
                    stdout=log,
                    stderr=subprocess.STDOUT,
                    stdin=subprocess.DEVNULL,
                    check=False,
                )
        except FileNotFoundError:
            self.logger.debug(f"Command not found: {cmd[0]}")
            return subprocess.CompletedProcess(args=cmd, returncode=COMMAND_NOT_FOUND)

    def authenticate(self) -> bool:
        """
        Cache sudo credentials before the first privileged step.

        Runs in the foreground with the terminal attached, so a password prompt
        is visible instead of hidden under the progress spinner.
        """
        if os.geteuid() == 0:
            return True
        self.logger.debug(f"Running command: {' '.join(SUDO_VALIDATE)}")
        try:
            result = subprocess.run(SUDO_VALIDATE, check=False)
        except FileNotFoundError:
            self.logger.debug(f"Command not found: {SUDO_VALIDATE[0]}")
            return False
        return result.returncode == 0


class DryRunRunner(CommandRunner):
    """Logs the commands it would run and reports them all as successful."""

    def run(self, cmd: List[str]) -> subprocess.CompletedProcess:
        self.logger.info(f"[dry-run] {' '.join(cmd)}")
        return subprocess.CompletedProcess(args=cmd, returncode=0)

    def authenticate(self) -> bool:
        self.logger.info(f"[dry-run] {' '.join(SUDO_VALIDATE)}")
        return True


# ----------------------------------------------------------------
# Step Execution
# ----------------------------------------------------------------
@dataclass
class StepOutcome:
    """Result of one install step, after its fallback chain was exhausted."""

    routine: str
    step: InstallStep
    success: bool
    returncode: int
    elapsed: float
    installed_by: Optional[InstallStep] = None

    @property
    def message(self) -> str:
        if self.success and self.installed_by is not None and self.installed_by is not self.step:
            return f"via {self.installed_by.kind.value} fallback in {self.elapsed:.2f}s"
        if self.success:
            return f"Completed in {self.elapsed:.2f}s"
        return f"Exit code {self.returncode} after {self.elapsed:.2f}s"


class Installer:
    """Executes install steps through a runner, walking fallback chains."""

    def __init__(
        self,
        config: Config,
        runner: CommandRunner,
        logger: logging.Logger,
        temp_dir: Path,
    ) -> None:
        self.config = config
        self.runner = runner
        self.logger = logger
        self.temp_dir = temp_dir

    def _run_attempt(self, step: InstallStep) -> subprocess.CompletedProcess:
        cmd = step.argv(self.temp_dir)
        if self.config.verbose or self.config.dry_run:
            return self.runner.run(cmd)
        with console.status(
            f"[bold {NordColors.FROST_2}]{step.name}[/] ({step.kind.value})",
            spinner="dots",
        ):
            return self.runner.run(cmd)

    def install(self, step: InstallStep, routine: str = "") -> StepOutcome:
        """Try the step and then each fallback until one succeeds."""
        start = time.time()
        chain = step.chain()
        result: Optional[subprocess.CompletedProcess] = None

        for index, attempt in enumerate(chain):
            if index > 0:
                self.logger.info(
                    f"{chain[index - 1].kind.value} install of {step.name} "
                    f"failed, trying fallback: {attempt.kind.value}"
                )
            result = self._run_attempt(attempt)
            if result.returncode == 0:
                elapsed = time.time() - start
                self.logger.info(f"✓ {step.name} succeeded")
                return StepOutcome(routine, step, True, 0, elapsed, installed_by=attempt)

        elapsed = time.time() - start
        returncode = result.returncode if result is not None else COMMAND_NOT_FOUND
        self.logger.error(f"✗ {step.name} failed (exit code {returncode})")
        return StepOutcome(routine, step, False, returncode, elapsed)

    def run_routine(self, routine: Routine) -> List[StepOutcome]:
        """Run every step of a routine in order; a failure never stops the routine."""
        self.logger.info(f"Running {routine.name} routine ({len(routine)} steps)...")
        return [self.install(step, routine.name) for step in routine.steps]
