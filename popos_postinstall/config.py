"""Run configuration passed explicitly to every component."""

from dataclasses import dataclass, field
from pathlib import Path

DEFAULT_LOG_FILE: Path = Path.home() / "Desktop" / "install_log.txt"
DEFAULT_REBOOT_DELAY: int = 10
TEMP_PREFIX: str = "popos_postinstall_"


@dataclass
class Config:
    """Configuration for a single post-install run."""

    log_file: Path = field(default_factory=lambda: DEFAULT_LOG_FILE)
    verbose: bool = False
    dry_run: bool = False
    no_reboot: bool = False
    reboot_delay: int = DEFAULT_REBOOT_DELAY
    temp_prefix: str = TEMP_PREFIX

    def __post_init__(self) -> None:
        self.log_file = Path(self.log_file).expanduser()
        if self.reboot_delay < 0:
            raise ValueError("reboot_delay must not be negative")
