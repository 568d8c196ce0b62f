"""Runs the bootstrap and profile routines, then cleans up and reboots."""

import logging
import shutil
import tempfile
import time
from pathlib import Path
from typing import Callable, List, Optional

from rich.progress import BarColumn, Progress, SpinnerColumn, TextColumn

from popos_postinstall.config import Config
from popos_postinstall.profiles import BOOTSTRAP, Profile
from popos_postinstall.runner import CommandRunner, Installer, StepOutcome
from popos_postinstall.ui import (
    NordColors,
    console,
    print_error,
    print_result_panel,
    print_section,
    print_status_report,
    print_warning,
)

REBOOT_COMMAND: List[str] = ["sudo", "reboot"]


class PostInstallSetup:
    """
    Drives one post-install run.

    Flow: sudo check -> temp dir -> bootstrap -> profile routines -> cleanup -> report -> reboot.
    Every step is attempted regardless of earlier failures; the run returns 1
    and skips the reboot when any step failed.
    """

    def __init__(
        self,
        config: Config,
        runner: CommandRunner,
        logger: logging.Logger,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.config = config
        self.runner = runner
        self.logger = logger
        self.sleep = sleep
        self.temp_dir: Optional[Path] = None
        self.outcomes: List[StepOutcome] = []
        self.start_time = time.time()

    @property
    def failures(self) -> List[StepOutcome]:
        return [outcome for outcome in self.outcomes if not outcome.success]

    def create_temp_dir(self) -> Path:
        self.temp_dir = Path(tempfile.mkdtemp(prefix=self.config.temp_prefix))
        self.logger.debug(f"Created temp directory {self.temp_dir}")
        return self.temp_dir

    def cleanup(self) -> None:
        """Remove the scratch directory, if one was created."""
        if self.temp_dir is None:
            return
        self.logger.info("Cleaning up temporary files.")
        try:
            shutil.rmtree(self.temp_dir)
        except FileNotFoundError:
            pass
        except OSError as e:
            self.logger.warning(f"Failed to clean up {self.temp_dir}: {e}")
        self.temp_dir = None

    def install(self, profile: Profile) -> List[StepOutcome]:
        """Run bootstrap and the profile's routines, always cleaning up afterwards."""
        temp_dir = self.create_temp_dir()
        installer = Installer(self.config, self.runner, self.logger, temp_dir)
        try:
            for routine in (BOOTSTRAP, *profile.routines()):
                print_section(f"{routine.name} Environment")
                self.outcomes.extend(installer.run_routine(routine))
        finally:
            self.cleanup()
        return self.outcomes

    def reboot(self) -> bool:
        """Reboot after a fixed delay; False if the reboot command failed."""
        delay = self.config.reboot_delay
        self.logger.info(f"Rebooting in {delay} seconds...")
        with Progress(
            SpinnerColumn(style=f"bold {NordColors.FROST_1}"),
            TextColumn("{task.description}"),
            BarColumn(bar_width=40, style=NordColors.FROST_4, complete_style=NordColors.FROST_2),
            console=console,
            transient=True,
        ) as progress:
            task = progress.add_task("Rebooting...", total=delay or 1)
            for _ in range(delay):
                self.sleep(1)
                progress.advance(task)
        result = self.runner.run(REBOOT_COMMAND)
        if result.returncode != 0:
            self.logger.error(f"✗ Reboot failed (exit code {result.returncode})")
            return False
        self.logger.info("✓ Reboot requested")
        return True

    def summarize(self) -> None:
        elapsed = time.time() - self.start_time
        minutes, seconds = divmod(elapsed, 60)
        print_status_report(self.outcomes)

        failures = self.failures
        if failures:
            print_result_panel(
                f"{len(failures)} of {len(self.outcomes)} steps failed "
                f"after {int(minutes)}m {int(seconds)}s.\n"
                f"See {self.config.log_file} for details.",
                title="Completed with Errors",
                style=NordColors.YELLOW,
            )
            self.logger.warning(
                "Failed steps: " + ", ".join(outcome.step.name for outcome in failures)
            )
        else:
            print_result_panel(
                f"All selected packages have been installed in {int(minutes)}m {int(seconds)}s.",
                title="Success",
                style=NordColors.GREEN,
            )

    def run(self, profile: Profile) -> int:
        """Execute the whole setup for a profile and return the process exit code."""
        self.logger.info(f"Selected profile: {profile.label}")
        if not self.runner.authenticate():
            self.logger.error("✗ sudo authentication failed, nothing was installed")
            print_error("Administrator privileges are required.")
            return 1
        self.install(profile)
        self.summarize()

        if self.failures:
            print_warning("Reboot skipped so the failures above can be reviewed.")
            return 1
        if self.config.no_reboot or self.config.dry_run:
            self.logger.info("Reboot skipped.")
            return 0
        return 0 if self.reboot() else 1
