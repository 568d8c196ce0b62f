"""Console styling and output helpers shared by every part of the setup."""

import shutil
from typing import Iterable

import pyfiglet
from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text
from rich.theme import Theme

from popos_postinstall import APP_NAME, VERSION


# ----------------------------------------------------------------
# Nord-Themed Colors and Theme Setup
# ----------------------------------------------------------------
class NordColors:
    """Nord color palette definitions for consistent UI styling."""

    POLAR_NIGHT_3: str = "#434C5E"
    SNOW_STORM_1: str = "#D8DEE9"
    SNOW_STORM_2: str = "#E5E9F0"
    FROST_1: str = "#8FBCBB"
    FROST_2: str = "#88C0D0"
    FROST_3: str = "#81A1C1"
    FROST_4: str = "#5E81AC"
    RED: str = "#BF616A"
    YELLOW: str = "#EBCB8B"
    GREEN: str = "#A3BE8C"
    PURPLE: str = "#B48EAD"

    FROST = (FROST_1, FROST_2, FROST_3, FROST_4)


nord_theme = Theme(
    {
        "banner": f"bold {NordColors.FROST_2}",
        "header": f"bold {NordColors.FROST_2}",
        "info": NordColors.GREEN,
        "warning": NordColors.YELLOW,
        "error": NordColors.RED,
        "debug": NordColors.POLAR_NIGHT_3,
        "success": NordColors.GREEN,
    }
)

console = Console(theme=nord_theme)

BANNER_TEXT = "Pop!_OS"
BANNER_FONTS = ("slant", "small")


# ----------------------------------------------------------------
# UI Helper Functions
# ----------------------------------------------------------------
def render_banner(width: int) -> Text:
    """Figlet banner, one frost shade per line; plain text if no font fits."""
    for font in BANNER_FONTS:
        try:
            art = pyfiglet.Figlet(font=font, width=width).renderText(BANNER_TEXT)
        except pyfiglet.FontNotFound:
            continue
        lines = [line for line in art.splitlines() if line.strip()]
        if lines and max(len(line) for line in lines) <= width:
            banner = Text()
            for i, line in enumerate(lines):
                banner.append(line, style=f"bold {NordColors.FROST[i % len(NordColors.FROST)]}")
                banner.append("\n")
            banner.rstrip()
            return banner
    return Text(BANNER_TEXT, style="banner")


def create_header() -> Panel:
    """Startup panel: banner, version and what the tool is about to do."""
    term_width = shutil.get_terminal_size((80, 24)).columns
    return Panel(
        Align.center(render_banner(max(term_width - 10, 20))),
        border_style=NordColors.FROST_1,
        padding=(1, 2),
        title=Text(f"v{VERSION}", style=f"bold {NordColors.SNOW_STORM_2}"),
        title_align="right",
        subtitle=Text("Post-Install Configuration", style=f"bold {NordColors.SNOW_STORM_1}"),
    )


def print_message(text: str, style: str = NordColors.FROST_2, prefix: str = "•") -> None:
    """Print one line in ``style``; ``text`` is never parsed as markup."""
    console.print(Text(f"{prefix} {text}", style=style))


def print_warning(message: str) -> None:
    print_message(message, NordColors.YELLOW, "⚠")


def print_error(message: str) -> None:
    print_message(message, NordColors.RED, "✗")


def print_section(title: str) -> None:
    console.print()
    console.print(Text(title, style=f"bold {NordColors.FROST_3}"))
    console.print(Text("─" * len(title), style=NordColors.FROST_3))


def print_result_panel(message: str, title: str, style: str) -> None:
    """Boxed end-of-run verdict under the status report."""
    console.print(
        Panel(
            Text(message, style=style),
            border_style=style,
            padding=(1, 2),
            title=Text(title, style=f"bold {style}"),
        )
    )


def print_status_report(outcomes: Iterable) -> None:
    """Print a status report table with one row per executed step."""
    table = Table(title="Installation Report", style="banner")
    table.add_column("Routine", style="header")
    table.add_column("Step", style="info")
    table.add_column("Status")
    table.add_column("Message", style="info")

    for outcome in outcomes:
        if outcome.success:
            status = Text("SUCCESS", style="success")
        else:
            status = Text("FAILED", style="error")
        table.add_row(outcome.routine, outcome.step.name, status, outcome.message)

    console.print(
        Panel(
            table,
            title=Text(f"{APP_NAME} Status", style="banner"),
            border_style=NordColors.FROST_3,
        )
    )
