"""Command line entry point."""

import signal
import sys
from pathlib import Path
from typing import Any, Optional

import click
from rich.traceback import install as install_rich_traceback

from popos_postinstall import APP_NAME, VERSION
from popos_postinstall.config import DEFAULT_LOG_FILE, DEFAULT_REBOOT_DELAY, Config
from popos_postinstall.logger import setup_logger
from popos_postinstall.menu import InvalidSelectionError, parse_choice, prompt_for_profile
from popos_postinstall.orchestrator import PostInstallSetup
from popos_postinstall.runner import CommandRunner, DryRunRunner
from popos_postinstall.ui import (
    NordColors,
    console,
    create_header,
    print_error,
    print_message,
    print_warning,
)


# ----------------------------------------------------------------
# Signal Handling
# ----------------------------------------------------------------
def signal_handler(sig: int, frame: Any) -> None:
    try:
        sig_name = signal.Signals(sig).name
        print_warning(f"Process interrupted by {sig_name}")
    except ValueError:
        print_warning(f"Process interrupted by signal {sig}")
    # SystemExit unwinds through PostInstallSetup.install, which removes the temp dir
    sys.exit(128 + sig)


# ----------------------------------------------------------------
# Main CLI Entry Point with Click
# ----------------------------------------------------------------
@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "-v", "--verbose", is_flag=True, help="Show command output instead of logging it."
)
@click.option(
    "-p",
    "--profile",
    "profile_choice",
    metavar="CHOICE",
    help="Skip the menu: 1-4 or gaming, work, sysadmin, all.",
)
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=DEFAULT_LOG_FILE,
    show_default=True,
    help="Append-only log file.",
)
@click.option("--dry-run", is_flag=True, help="Print commands without running them.")
@click.option("--no-reboot", is_flag=True, help="Do not reboot when finished.")
@click.option(
    "--reboot-delay",
    type=click.IntRange(min=0),
    default=DEFAULT_REBOOT_DELAY,
    show_default=True,
    help="Seconds to wait before rebooting.",
)
@click.version_option(VERSION, prog_name=APP_NAME)
def main(
    verbose: bool,
    profile_choice: Optional[str],
    log_file: Path,
    dry_run: bool,
    no_reboot: bool,
    reboot_delay: int,
) -> None:
    """Pop!_OS post-install configuration: update, install a profile, reboot."""
    install_rich_traceback(show_locals=True)
    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    config = Config(
        log_file=log_file,
        verbose=verbose,
        dry_run=dry_run,
        no_reboot=no_reboot,
        reboot_delay=reboot_delay,
    )

    try:
        logger = setup_logger(config)
    except OSError as e:
        print_error(f"Could not prepare log file {config.log_file}: {e}")
        sys.exit(1)

    console.print(create_header())
    if verbose:
        print_message("Running in verbose mode (output not redirected).", NordColors.FROST_3)
    else:
        print_message(f"Logging command output to {config.log_file}", NordColors.FROST_3)

    try:
        if profile_choice is not None:
            profile = parse_choice(profile_choice)
        else:
            profile = prompt_for_profile()
    except InvalidSelectionError as e:
        print_error(str(e))
        logger.debug(f"Invalid selection: {e}")
        sys.exit(1)

    runner = DryRunRunner(config, logger) if dry_run else CommandRunner(config, logger)
    setup = PostInstallSetup(config, runner, logger)
    try:
        exit_code = setup.run(profile)
    except Exception as e:
        console.print_exception()
        print_error(f"An unexpected error occurred: {e}")
        sys.exit(1)

    sys.exit(exit_code)
