"""Shared terminal UI components for the taxonomy browser.

This module provides reusable components for paging through option
lists and reading single-key commands.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable

from taxabrowser.formatting import option_label

if TYPE_CHECKING:
    from taxabrowser.models import BilingualText


def clear_screen() -> None:
    """Clear the terminal screen."""
    print("\033[2J\033[H", end="")


def index_to_label(index: int) -> str:
    """Convert a numeric index to a letter label (a, b, ... z)."""
    if 0 <= index < 26:
        return chr(ord('a') + index)
    return ""


def label_to_index(label: str) -> int:
    """Convert a letter label back to a numeric index."""
    label = label.lower().strip()
    if len(label) == 1 and 'a' <= label <= 'z':
        return ord(label) - ord('a')
    return -1


@dataclass
class OptionListDisplay:
    """Paging state for a list of options."""

    page: int = 0
    page_size: int = 26

    def get_page_items(self, items: list) -> list:
        """Get the items for the current page."""
        start_idx = self.page * self.page_size
        return items[start_idx:start_idx + self.page_size]

    def get_total_pages(self, total_items: int) -> int:
        """Get total number of pages."""
        if total_items == 0:
            return 1
        return (total_items + self.page_size - 1) // self.page_size

    def next_page(self, total_items: int) -> bool:
        """Go to next page. Returns True if page changed."""
        if self.page < self.get_total_pages(total_items) - 1:
            self.page += 1
            return True
        return False

    def prev_page(self) -> bool:
        """Go to previous page. Returns True if page changed."""
        if self.page > 0:
            self.page -= 1
            return True
        return False

    def reset(self) -> None:
        self.page = 0


def display_option_list(
    options: list[BilingualText],
    config: OptionListDisplay,
    header: str = "Options:",
) -> None:
    """Display a paginated list of options labelled a-z."""
    if not options:
        print()
        print("  (No options available)")
        print()
        return

    print(f"\n  {header}")
    print()
    for i, option in enumerate(config.get_page_items(options)):
        print(f"    ({index_to_label(i)}) {option_label(option)}")
    print()

    total_pages = config.get_total_pages(len(options))
    if total_pages > 1:
        nav_hints = []
        if config.page > 0:
            nav_hints.append("[P]rev")
        if config.page < total_pages - 1:
            nav_hints.append("[N]ext")
        print(f"  Page {config.page + 1}/{total_pages}   {'  '.join(nav_hints)}")


def resolve_choice(
    choice: str,
    options: list,
    config: OptionListDisplay,
    extra_commands: dict[str, Callable[[], bool]] | None = None,
) -> tuple[str, object | None]:
    """Interpret one line of user input against a paged list.

    Returns:
        Tuple of (action, selected_item):
        - ("quit", None) - User wants to quit
        - ("select", item) - User selected an item
        - ("refresh", None) - Display needs refresh (after page change or command)
        - ("back", None) - User pressed back
        - ("invalid", None) - Invalid input
    """
    if not choice:
        return ("invalid", None)

    if choice == 'Q':
        return ("quit", None)

    if choice == '<' or choice == '\x7f':
        return ("back", None)

    if choice == 'N':
        return ("refresh", None) if config.next_page(len(options)) else ("invalid", None)

    if choice == 'P':
        return ("refresh", None) if config.prev_page() else ("invalid", None)

    if extra_commands and choice in extra_commands:
        if extra_commands[choice]():
            return ("refresh", None)
        return ("invalid", None)

    page_idx = label_to_index(choice)
    if page_idx >= 0:
        absolute_idx = config.page * config.page_size + page_idx
        if absolute_idx < len(options):
            return ("select", options[absolute_idx])

    return ("invalid", None)


def get_user_choice(
    options: list,
    config: OptionListDisplay,
    prompt: str = "  > ",
    extra_commands: dict[str, Callable[[], bool]] | None = None,
) -> tuple[str, object | None]:
    """Read user input and resolve it with ``resolve_choice``."""
    try:
        choice = input(prompt).strip()
    except (KeyboardInterrupt, EOFError):
        return ("quit", None)
    return resolve_choice(choice, options, config, extra_commands)
