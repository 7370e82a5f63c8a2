"""Level-by-level queries over the flat taxonomy record list.

The dataset is denormalized: every record carries its full classification
path. Valid options at a level are derived by filtering on the ancestor
levels and collecting distinct values, keyed by English text.
"""

from __future__ import annotations

import unicodedata
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from taxabrowser.models import BilingualText, TaxonomyRecord


# Selectable levels in hierarchical order (high to low).
# Species is the terminal payload, not a selectable level.
LEVELS = ("Kingdom", "Phylum", "Class", "Order", "Family", "Genus")

LEVEL_LABELS = {
    "Kingdom": "مملكة",
    "Phylum": "شعبة",
    "Class": "صف",
    "Order": "رتبة",
    "Family": "فصيلة",
    "Genus": "جنس",
}


def check_level(level: int) -> int:
    """Validate a level index, failing fast on programming errors."""
    if not 0 <= level < len(LEVELS):
        raise IndexError(f"Invalid level index {level} (expected 0..{len(LEVELS) - 1})")
    return level


def _strip_accents(text: str) -> str:
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def collation_key(text: str) -> tuple[str, str, str]:
    """Build a sort key approximating locale-aware collation.

    Letters compare first without accents or case, then accented after
    unaccented, then lowercase before uppercase.
    """
    return (_strip_accents(text).casefold(), text.casefold(), text.swapcase())


def sort_options(options: Iterable[BilingualText]) -> list[BilingualText]:
    """Sort options ascending by English text.

    The sort is stable, so equal English text keeps encounter order.
    """
    return sorted(options, key=lambda o: collation_key(o.english))


class TaxonomyIndex:
    """Read-only queries over the taxonomy records.

    Example:
        >>> index = TaxonomyIndex(dataset.records)
        >>> kingdoms = index.options_at(0, [])
        >>> phyla = index.options_at(1, [kingdoms[0]])
    """

    def __init__(self, records: Sequence[TaxonomyRecord]) -> None:
        self.records = list(records)

    def _matches(
        self, record: TaxonomyRecord, selections: Sequence[BilingualText | None]
    ) -> bool:
        for level, selected in enumerate(selections):
            if selected is not None and record.value_at(level).key != selected.key:
                return False
        return True

    def options_at(
        self, level: int, ancestor_selections: Sequence[BilingualText | None]
    ) -> list[BilingualText]:
        """Get the distinct values at a level under the given ancestors.

        Args:
            level: Level index (0 = Kingdom ... 5 = Genus).
            ancestor_selections: Selected values for levels ``0..level-1``.

        Returns:
            Distinct values in encounter order, one representative per
            English key.
        """
        check_level(level)
        ancestors = list(ancestor_selections)[:level]

        seen: dict[str, BilingualText] = {}
        for record in self.records:
            if not self._matches(record, ancestors):
                continue
            value = record.value_at(level)
            if value.key not in seen:
                seen[value.key] = value
        return list(seen.values())

    def records_matching(
        self, selections: Sequence[BilingualText | None]
    ) -> list[TaxonomyRecord]:
        """Get the records agreeing with every set level.

        Unset levels (``None``) are wildcards. Results keep dataset order.
        """
        if len(selections) > len(LEVELS):
            raise IndexError(f"Expected at most {len(LEVELS)} selections, got {len(selections)}")
        return [r for r in self.records if self._matches(r, selections)]

    def lookup(self, level: int, key: str) -> BilingualText | None:
        """Find the representative value with the given English key at a level."""
        check_level(level)
        for record in self.records:
            value = record.value_at(level)
            if value.key == key:
                return value
        return None

    def __len__(self) -> int:
        return len(self.records)
