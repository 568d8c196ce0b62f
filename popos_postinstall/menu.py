"""Profile selection menu."""

from typing import Optional, TextIO

from rich.table import Table

from popos_postinstall.profiles import Profile
from popos_postinstall.ui import NordColors, console, print_error


class InvalidSelectionError(ValueError):
    """Raised when a menu choice does not name a profile."""


def parse_choice(value: str) -> Profile:
    """Map "1"-"4" or a profile name such as "gaming" to a Profile."""
    value = value.strip()
    if value.isdigit():
        try:
            return Profile(int(value))
        except ValueError:
            pass
    else:
        key = value.upper().replace("-", "_")
        if key in Profile.__members__:
            return Profile[key]
    raise InvalidSelectionError(
        f"Invalid option {value!r}. Please select 1-{len(Profile)}."
    )


def display_menu() -> None:
    console.print(f"[bold {NordColors.PURPLE}]Post-Install Configuration Menu[/]")
    table = Table(show_header=True, header_style=f"bold {NordColors.FROST_3}")
    table.add_column("Option", style="bold", width=8)
    table.add_column("Description", style="bold")
    for profile in Profile:
        table.add_row(str(profile.value), profile.label)
    console.print(table)


def prompt_for_profile(stream: Optional[TextIO] = None) -> Profile:
    """
    Show the menu and read choices until one is valid.

    Raises:
        InvalidSelectionError: Input ended before a valid choice was read.
    """
    display_menu()
    while True:
        try:
            answer = console.input(
                f"[bold {NordColors.FROST_2}]Enter your choice: [/]", stream=stream
            )
        except EOFError:
            raise InvalidSelectionError("No selection made.") from None
        # readline() returns "" only at end of stream
        if stream is not None and not answer:
            raise InvalidSelectionError("No selection made.")
        try:
            return parse_choice(answer)
        except InvalidSelectionError as e:
            print_error(str(e))
