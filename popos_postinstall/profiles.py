"""Install profiles and the routines each of them runs."""

from enum import IntEnum
from typing import Dict, Tuple

from popos_postinstall.steps import Routine, apt, command, container, flatpak, snap

FLATHUB_URL: str = "https://dl.flathub.org/repo/flathub.flatpakrepo"
JETBRAINS_TOOLBOX_URL: str = (
    "https://download.jetbrains.com/toolbox/jetbrains-toolbox-1.27.2.12534.tar.gz"
)
BURPSUITE_URL: str = (
    "https://portswigger-cdn.net/burp/releases/download"
    "?product=community&version=2025.3&type=Linux"
)

# ----------------------------------------------------------------
# Routines
# ----------------------------------------------------------------
BOOTSTRAP = Routine(
    "Bootstrap",
    (
        command("Refresh package lists", "apt", "update"),
        command("Upgrade installed packages", "apt", "full-upgrade", "-y"),
        command(
            "Install baseline tools",
            "apt", "install", "-y",
            "flatpak", "gnome-software-plugin-flatpak", "snapd", "curl", "wget",
        ),
        command(
            "Add Flathub remote",
            "flatpak", "remote-add", "--if-not-exists", "flathub", FLATHUB_URL,
        ),
        command(
            "Install PipeWire",
            "apt", "install", "-y",
            "pipewire", "pipewire-audio-client-libraries", "wireplumber",
            "libspa-0.2-bluetooth", "libspa-0.2-jack",
        ),
        command(
            "Remove PulseAudio",
            "apt", "remove", "-y",
            "pulseaudio", "pulseaudio-utils", "pulseaudio-module-bluetooth",
        ),
        command("Install monitoring tools", "apt", "install", "-y", "conky-all", "lm-sensors"),
    ),
)

STEAM = flatpak("com.valvesoftware.Steam", "Steam", fallback=(apt("steam-installer", "Steam"),))

GAMING = Routine(
    "Gaming",
    (
        snap("spotify", "Spotify"),
        snap("discord", "Discord", fallback=(flatpak("com.discordapp.Discord", "Discord"),)),
        apt("brave-browser", "Brave"),
        STEAM,
        command("Add Lutris PPA", "add-apt-repository", "-y", "ppa:lutris-team/lutris"),
        command("Refresh package lists", "apt", "update", "-qq"),
        apt("lutris", "Lutris"),
        flatpak("com.heroicgameslauncher.hgl", "Heroic Games Launcher"),
        apt("gnome-tweaks", "GNOME Tweaks"),
        apt("fancontrol"),
        apt("openrgb", "OpenRGB"),
        flatpak("com.parsecgaming.parsec", "Parsec"),
        apt("mesa-vulkan-drivers", "Mesa Vulkan drivers"),
        apt("amd64-microcode", "AMD microcode"),
    ),
)

WORK = Routine(
    "Work",
    (
        snap("cohesion-desktop", "Cohesion"),
        snap("spotify", "Spotify"),
        snap("signal-desktop", "Signal"),
        apt("brave-browser", "Brave"),
        STEAM,
        apt("conky-all", "Conky"),
        snap("protonvpn", "ProtonVPN"),
        flatpak(
            "org.onlyoffice.desktopeditors",
            "OnlyOffice",
            fallback=(apt("onlyoffice-desktopeditors", "OnlyOffice"),),
        ),
        apt("lm-sensors"),
    ),
)

SYSADMIN = Routine(
    "Sysadmin",
    (
        snap("winbox", "Winbox"),
        command(
            "Download JetBrains Toolbox",
            "wget", "-q", "-O", "{tmp}/jetbrains-toolbox.tar.gz", JETBRAINS_TOOLBOX_URL,
            privileged=False,
        ),
        command(
            "Extract JetBrains Toolbox",
            "tar", "-xzf", "{tmp}/jetbrains-toolbox.tar.gz",
            "-C", "{tmp}", "--strip-components=1",
            privileged=False,
        ),
        command(
            "Install JetBrains Toolbox",
            "install", "-m", "755", "{tmp}/jetbrains-toolbox", "/usr/local/bin/jetbrains-toolbox",
        ),
        apt("nmap", "Nmap"),
        apt("wireshark", "Wireshark"),
        command(
            "Download Burp Suite Community",
            "wget", "-q", "-O", "{tmp}/burpsuite-community.sh", BURPSUITE_URL,
            privileged=False,
        ),
        command(
            "Install Burp Suite Community",
            "bash", "{tmp}/burpsuite-community.sh", "-q",
            privileged=False,
        ),
        apt("docker.io", "Docker"),
        command("Create Portainer volume", "docker", "volume", "create", "portainer_data"),
        container(
            "portainer",
            "portainer/portainer-ce",
            "-p", "9000:9000",
            "--restart=always",
            "-v", "/var/run/docker.sock:/var/run/docker.sock",
            "-v", "portainer_data:/data",
        ),
        apt("virtualbox", "VirtualBox"),
    ),
)


# ----------------------------------------------------------------
# Profiles
# ----------------------------------------------------------------
class Profile(IntEnum):
    GAMING = 1
    WORK = 2
    SYSADMIN = 3
    ALL = 4

    @property
    def label(self) -> str:
        return PROFILE_LABELS[self]

    def routines(self) -> Tuple[Routine, ...]:
        """Routines to run for this profile, in execution order."""
        return PROFILE_ROUTINES[self]


PROFILE_LABELS: Dict[Profile, str] = {
    Profile.GAMING: "Gaming Usage",
    Profile.WORK: "Work Usage",
    Profile.SYSADMIN: "Sysadmin Usage",
    Profile.ALL: "All of the Above",
}

PROFILE_ROUTINES: Dict[Profile, Tuple[Routine, ...]] = {
    Profile.GAMING: (GAMING,),
    Profile.WORK: (WORK,),
    Profile.SYSADMIN: (SYSADMIN,),
    Profile.ALL: (GAMING, WORK, SYSADMIN),
}
