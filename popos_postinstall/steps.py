"""Typed install step descriptors and the commands they translate to."""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import List, Tuple


class InstallerKind(Enum):
    NATIVE = "apt"
    FLATPAK = "flatpak"
    SNAP = "snap"
    CONTAINER = "docker"
    COMMAND = "command"


@dataclass(frozen=True)
class InstallStep:
    """
    One delegated action.

    Attributes:
        name: Human readable label used in log lines and the report
        kind: Which installer handles the step
        target: Package name, Flatpak app ID, snap name, container image or executable
        args: Extra arguments; ``{tmp}`` is replaced by the scratch directory
        fallback: Steps tried in order when this one fails
        privileged: Prefix the command with sudo
        remote: Flatpak remote to install from
    """

    name: str
    kind: InstallerKind
    target: str
    args: Tuple[str, ...] = ()
    fallback: Tuple["InstallStep", ...] = ()
    privileged: bool = True
    remote: str = "flathub"

    def argv(self, temp_dir: Path) -> List[str]:
        """Build the command list for this step (fallbacks excluded)."""
        args = [arg.replace("{tmp}", str(temp_dir)) for arg in self.args]

        if self.kind is InstallerKind.NATIVE:
            cmd = ["apt", "install", "-y", *args, self.target]
        elif self.kind is InstallerKind.FLATPAK:
            cmd = ["flatpak", "install", "-y", *args, self.remote, self.target]
        elif self.kind is InstallerKind.SNAP:
            cmd = ["snap", "install", self.target, *args]
        elif self.kind is InstallerKind.CONTAINER:
            cmd = ["docker", "run", *args, self.target]
        else:
            cmd = [self.target, *args]

        return ["sudo", *cmd] if self.privileged else cmd

    def chain(self) -> Tuple["InstallStep", ...]:
        """This step followed by its fallbacks, in the order they are tried."""
        return (self, *self.fallback)


@dataclass(frozen=True)
class Routine:
    """A named, ordered list of install steps."""

    name: str
    steps: Tuple[InstallStep, ...]

    def __len__(self) -> int:
        return len(self.steps)


# ----------------------------------------------------------------
# Step Constructors
# ----------------------------------------------------------------
def apt(package: str, name: str = "") -> InstallStep:
    return InstallStep(name or package, InstallerKind.NATIVE, package)


def flatpak(app_id: str, name: str = "", fallback: Tuple[InstallStep, ...] = ()) -> InstallStep:
    # flatpak asks polkit for system-wide installs, no sudo
    return InstallStep(
        name or app_id, InstallerKind.FLATPAK, app_id, fallback=fallback, privileged=False
    )


def snap(
    package: str,
    name: str = "",
    classic: bool = False,
    fallback: Tuple[InstallStep, ...] = (),
) -> InstallStep:
    args = ("--classic",) if classic else ()
    return InstallStep(
        name or package, InstallerKind.SNAP, package, args=args, fallback=fallback
    )


def container(name: str, image: str, *options: str) -> InstallStep:
    return InstallStep(
        name, InstallerKind.CONTAINER, image, args=("-d", "--name", name, *options)
    )


def command(name: str, executable: str, *args: str, privileged: bool = True) -> InstallStep:
    return InstallStep(
        name, InstallerKind.COMMAND, executable, args=tuple(args), privileged=privileged
    )
