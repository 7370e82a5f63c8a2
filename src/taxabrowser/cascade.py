"""Cascading level selection over a TaxonomyIndex.

The controller keeps one selection slot per level. Changing a level
invalidates every deeper level, populates only the level immediately below,
and produces the species result set once Genus is chosen.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from taxabrowser.index import LEVEL_LABELS, LEVELS, check_level, sort_options
from taxabrowser.models import BilingualText

if TYPE_CHECKING:
    from collections.abc import Sequence

    from taxabrowser.index import TaxonomyIndex
    from taxabrowser.models import TaxonomyRecord

logger = logging.getLogger(__name__)


@dataclass
class LevelState:
    """Observable state of one level selector.

    Attributes:
        name: Level name (e.g. 'Kingdom').
        enabled: Whether the selector accepts a choice.
        options: Valid choices, sorted by English text.
        selected: The current choice, or None when unset.
    """

    name: str
    enabled: bool = False
    options: list[BilingualText] = field(default_factory=list)
    selected: BilingualText | None = None

    @property
    def label(self) -> str:
        """Arabic name of the level."""
        return LEVEL_LABELS.get(self.name, "")

    def clear(self) -> None:
        """Unset, disable and empty this level."""
        self.selected = None
        self.enabled = False
        self.options = []

    def find_option(self, key: str) -> BilingualText | None:
        """Find a current option by its English key."""
        for option in self.options:
            if option.key == key:
                return option
        return None


class CascadeController:
    """Tracks selections for the six levels and derives downstream state.

    Example:
        >>> controller = CascadeController(index)
        >>> controller.on_level_changed(0, controller.levels[0].options[0])
        >>> controller.levels[1].options  # phyla under that kingdom
    """

    def __init__(self, index: TaxonomyIndex) -> None:
        self.index = index
        self.levels = [LevelState(name=name) for name in LEVELS]
        self.results: list[TaxonomyRecord] = []
        self._populate_first_level()

    def _populate_first_level(self) -> None:
        first = self.levels[0]
        first.enabled = True
        first.options = sort_options(self.index.options_at(0, []))

    @property
    def selections(self) -> list[BilingualText | None]:
        """Current slot values, Kingdom through Genus."""
        return [state.selected for state in self.levels]

    @property
    def is_complete(self) -> bool:
        """Check whether every level has a selection."""
        return all(state.selected is not None for state in self.levels)

    def reset(self) -> None:
        """Return to the initial state (nothing selected)."""
        for state in self.levels:
            state.clear()
        self.results = []
        self._populate_first_level()

    def on_level_changed(
        self, level: int, value: BilingualText | None
    ) -> list[TaxonomyRecord]:
        """Apply a new value (or None to unset) at a level.

        Deeper selections are always cleared. Only the next level is
        recomputed; levels beyond it stay disabled until reached.

        Args:
            level: Level index (0 = Kingdom ... 5 = Genus).
            value: The chosen value, or None to unset the level.

        Returns:
            The species result set (empty unless Genus is set).

        Raises:
            IndexError: If the level index is out of range.
        """
        check_level(level)
        ancestors_set = all(state.selected is not None for state in self.levels[:level])

        state = self.levels[level]
        if value is not None and not ancestors_set:
            logger.debug("Ignoring %s=%r: an ancestor level is unset", state.name, value.key)
            value = None
        elif value is not None and state.find_option(value.key) is None:
            logger.debug("%s=%r is not among the current options", state.name, value.key)
        state.selected = value

        for deeper in self.levels[level + 1:]:
            deeper.clear()
        self.results = []

        if value is None:
            return self.results

        if level + 1 < len(self.levels):
            next_state = self.levels[level + 1]
            next_state.enabled = True
            next_state.options = sort_options(
                self.index.options_at(level + 1, self.selections[: level + 1])
            )
            logger.debug(
                "%s=%r: %d %s options", state.name, value.key, len(next_state.options), next_state.name
            )
        else:
            self.results = self.index.records_matching(self.selections)
            logger.debug("Genus=%r: %d species", value.key, len(self.results))

        return self.results

    def choose(self, level: int, key: str | None) -> list[TaxonomyRecord]:
        """Apply a selection given only its English key.

        Keys not found among the level's current options still clear the
        deeper levels, but yield no downstream options or species.
        """
        check_level(level)
        if key is None:
            return self.on_level_changed(level, None)
        value = self.levels[level].find_option(key) or BilingualText(english=key)
        return self.on_level_changed(level, value)

    def restore(self, keys: Sequence[str | None]) -> None:
        """Rebuild state by replaying English keys from Kingdom down.

        Replay stops at the first unset key.
        """
        self.reset()
        for level, key in enumerate(list(keys)[: len(LEVELS)]):
            if key is None:
                break
            self.choose(level, key)

    def select_path(
        self,
        path: Sequence[BilingualText],
        target: BilingualText | None = None,
    ) -> int | None:
        """Drive the cascade through a full hierarchy path.

        Each level is committed, and the next level populated, before the
        following value is applied.

        Args:
            path: Six values, Kingdom through Genus.
            target: Optional species name to locate among the results.

        Returns:
            Index of the first result whose Arabic or English name matches
            ``target``, or None if there is no such result.
        """
        if len(path) != len(LEVELS):
            raise ValueError(f"Expected a path of {len(LEVELS)} levels, got {len(path)}")

        for level, value in enumerate(path):
            self.on_level_changed(level, value)

        if target is None:
            return None

        for i, record in enumerate(self.results):
            species = record.species
            if (target.arabic and species.arabic == target.arabic) or (
                target.english and species.english == target.english
            ):
                return i

        logger.warning("Species %r not found after selecting its path", target.english)
        return None
