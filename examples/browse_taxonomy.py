#!/usr/bin/env python3
"""Interactive terminal browser for the bilingual taxonomy.

Pick Kingdom, Phylum, Class, Order, Family and Genus in turn to list the
species of a genus, or search by name to jump straight to a species.

Usage:
    python examples/browse_taxonomy.py [--data data/taxonomy.json]

Controls:
    a-z         Select an option on current page (lowercase)
    N / P       Next / Previous page (uppercase)
    <           Go back one level
    /           Search
    Q           Quit
"""

import argparse
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from taxabrowser.cascade import CascadeController
from taxabrowser.dataset import TaxonomyDataset
from taxabrowser.formatting import (
    classification_string,
    format_local_names,
    format_path,
    wrap_text,
)
from taxabrowser.index import TaxonomyIndex
from taxabrowser.logging_config import configure_logging
from taxabrowser.search import SearchEngine, prepare_query
from taxabrowser.ui import (
    OptionListDisplay,
    clear_screen,
    display_option_list,
    get_user_choice,
    index_to_label,
    label_to_index,
)


class TaxonomyBrowser:
    """Interactive cascade browser."""

    def __init__(self, controller: CascadeController, engine: SearchEngine) -> None:
        self.controller = controller
        self.engine = engine
        self.display_config = OptionListDisplay()
        self.highlight_index: int | None = None

    def current_level(self) -> int:
        """Index of the first unselected level (6 when all are set)."""
        for i, state in enumerate(self.controller.levels):
            if state.selected is None:
                return i
        return len(self.controller.levels)

    def get_breadcrumb(self) -> str:
        chosen = [s.selected for s in self.controller.levels if s.selected is not None]
        if not chosen:
            return "(nothing selected)"
        return format_path(chosen, language="english")

    def display(self) -> list:
        """Display the current state and return the selectable options."""
        clear_screen()
        print("=" * 70)
        print("  TAXONOMY BROWSER  |  متصفح التصنيف")
        print("=" * 70)
        print()
        print(f"  Path: {self.get_breadcrumb()}")

        level = self.current_level()
        options: list = []
        if level < len(self.controller.levels):
            state = self.controller.levels[level]
            options = state.options
            display_option_list(options, self.display_config, header=f"{state.label} | {state.name}:")
        else:
            self.display_species()

        print("-" * 70)
        print("  [a-z] select | [<] back | [/] search | [N/P] page | [Q] quit")
        print("=" * 70)
        return options

    def display_species(self) -> None:
        results = self.controller.results
        print(f"\n  Species ({len(results)}):\n")
        for i, record in enumerate(results):
            species = record.species
            marker = "→" if i == self.highlight_index else " "
            print(f"  {marker} {species.arabic} | {species.english}")
            local_names = format_local_names(species.local_names)
            if local_names:
                print(f"      {local_names}")
            print(wrap_text(species.description.english, indent="      "))
            print(wrap_text(classification_string(record).english, indent="      "))
            print()
        self.highlight_index = None

    def go_back(self) -> None:
        level = self.current_level()
        if level > 0:
            self.controller.on_level_changed(level - 1, None)
            self.display_config.reset()

    def search(self) -> None:
        """Search for a species and jump to it."""
        print("\n  Search: ", end="")
        query = prepare_query(input())
        if query is None:
            print("  Enter at least 2 characters.")
            input("  Press Enter to continue...")
            return

        hits = self.engine.search(query)
        if not hits:
            print(f"\n  No results found for '{query}'")
            input("  Press Enter to continue...")
            return

        clear_screen()
        print(f"\n  Search results for '{query}':\n")
        for i, hit in enumerate(hits):
            print(f"    ({index_to_label(i)}) {hit.species.arabic} | {hit.species.english}  [{hit.score}]")
            print(f"         {format_path(hit.path)}")
            print()

        print("\n  Enter letter to jump, or press Enter to cancel: ", end="")
        idx = label_to_index(input())
        if 0 <= idx < len(hits):
            hit = hits[idx]
            self.highlight_index = self.controller.select_path(hit.path, hit.species.name)
            self.display_config.reset()

    def run(self) -> None:
        """Run the interactive browser."""
        while True:
            options = self.display()
            action, selected = get_user_choice(
                options,
                self.display_config,
                extra_commands={'/': lambda: self.search() or True},
            )

            if action == "quit":
                break
            if action == "back":
                self.go_back()
            elif action == "select":
                self.controller.on_level_changed(self.current_level(), selected)
                self.display_config.reset()

        print("\n  Goodbye!\n")


def main() -> None:
    parser = argparse.ArgumentParser(description="Browse the bilingual taxonomy")
    parser.add_argument("--data", type=Path,
                        default=Path(__file__).parent.parent / "data" / "taxonomy.json",
                        help="Path to the taxonomy JSON document")
    parser.add_argument("--log-level", default=None,
                        help="Logging level (default: TAXABROWSER_LOG_LEVEL or INFO)")
    args = parser.parse_args()

    configure_logging(args.log_level)

    print("Loading taxonomy dataset...")
    dataset = TaxonomyDataset(args.data)
    index = TaxonomyIndex(dataset.records)
    print(f"Loaded {len(index):,} records.\n")

    browser = TaxonomyBrowser(CascadeController(index), SearchEngine(dataset.records))
    browser.run()


if __name__ == "__main__":
    main()
