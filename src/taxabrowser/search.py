"""Ranked free-text search across species names and descriptions.

Every record is scored by case-insensitive substring containment of the
query in an ordered list of fields:

    0  official Arabic name        weight 4
    1  official English name       weight 4
    2  Arabic description          weight 2
    3  English description         weight 2
    4+ local Arabic, local English and regional names   weight 3

A matching field equal to the query earns +5, and one starting with it
earns +2 (both may apply). Records scoring 0 are dropped; the top results
are kept with ties broken by dataset order.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from taxabrowser.models import BilingualText, Species, TaxonomyRecord

logger = logging.getLogger(__name__)

SEARCH_RESULT_LIMIT = 5

# Enforced by the calling layer, not by SearchEngine.search
MIN_QUERY_LENGTH = 2

OFFICIAL_NAME_WEIGHT = 4
DESCRIPTION_WEIGHT = 2
LOCAL_NAME_WEIGHT = 3
EXACT_MATCH_BONUS = 5
PREFIX_MATCH_BONUS = 2


def prepare_query(raw: str | None) -> str | None:
    """Normalize user input the way the search box does.

    Returns:
        The trimmed, lower-cased query, or None if it is too short to search.
    """
    query = (raw or "").strip().lower()
    if len(query) < MIN_QUERY_LENGTH:
        return None
    return query


def search_fields(species: Species) -> list[str]:
    """Build the ordered field list used for scoring.

    Missing local names contribute no fields.
    """
    fields = [
        species.arabic,
        species.english,
        species.description.arabic,
        species.description.english,
    ]
    local = species.local_names
    if local is not None:
        fields.extend(local.arabic)
        fields.extend(local.english)
        fields.extend(r.name for r in local.regional)
    return fields


def field_weight(position: int) -> int:
    """Base weight of a matching field at the given position."""
    if position < 2:
        return OFFICIAL_NAME_WEIGHT
    if position < 4:
        return DESCRIPTION_WEIGHT
    return LOCAL_NAME_WEIGHT


def score_species(query: str, species: Species) -> int:
    """Compute the total match score of a species for a query."""
    query = query.lower()
    score = 0
    for position, text in enumerate(search_fields(species)):
        if not text:
            continue
        text_lower = text.lower()
        if query not in text_lower:
            continue
        score += field_weight(position)
        if text_lower == query:
            score += EXACT_MATCH_BONUS
        if text_lower.startswith(query):
            score += PREFIX_MATCH_BONUS
    return score


@dataclass
class SearchHit:
    """A ranked search result.

    Attributes:
        species: The matched species.
        path: The record's hierarchy path, Kingdom through Genus.
        score: Total match score.
    """

    species: Species
    path: tuple[BilingualText, ...]
    score: int


class SearchEngine:
    """Scores and ranks species for free-text queries.

    The engine has no minimum query length; callers apply
    ``prepare_query`` first.

    Example:
        >>> engine = SearchEngine(dataset.records)
        >>> query = prepare_query("  Oryx ")
        >>> for hit in engine.search(query):
        ...     print(hit.score, hit.species.english)
    """

    def __init__(
        self,
        records: Sequence[TaxonomyRecord],
        *,
        limit: int = SEARCH_RESULT_LIMIT,
    ) -> None:
        self.records = list(records)
        self.limit = limit

    def search(self, query: str) -> list[SearchHit]:
        """Rank records for a query.

        Args:
            query: The (already trimmed and lower-cased) search text.

        Returns:
            Up to ``limit`` hits, highest score first; equal scores keep
            dataset order.
        """
        hits = []
        for record in self.records:
            score = score_species(query, record.species)
            if score > 0:
                hits.append(SearchHit(species=record.species, path=record.path, score=score))

        # sorted() is stable, so earlier records win ties
        hits = sorted(hits, key=lambda h: -h.score)
        logger.debug("Query %r matched %d records", query, len(hits))
        return hits[: self.limit]


def highlight_text(
    text: str,
    query: str,
    *,
    before: str = '<span class="highlight">',
    after: str = "</span>",
    escape: Callable[[str], str] | None = None,
) -> str:
    """Wrap every case-insensitive occurrence of the query in markers.

    The query is matched literally, never as a pattern.

    Args:
        text: Text to mark up.
        query: Literal substring to highlight.
        before: Marker inserted before each occurrence.
        after: Marker inserted after each occurrence.
        escape: Optional function applied to every text segment (e.g. HTML
            escaping) before markers are inserted.

    Returns:
        The marked-up text.
    """
    escape = escape or str
    if not query or not text:
        return escape(text)

    result = []
    position = 0
    for start, end in match_spans(text, query):
        result.append(escape(text[position:start]))
        result.append(f"{before}{escape(text[start:end])}{after}")
        position = end
    result.append(escape(text[position:]))
    return "".join(result)


def match_spans(text: str, query: str) -> list[tuple[int, int]]:
    """Find non-overlapping occurrences of the query, as ``score_species`` does.

    Matching runs on the lower-cased text. Offsets are mapped back to
    ``text``, widened to whole characters when lower-casing changed a
    character's length.
    """
    query = query.lower()
    lowered = text.lower()
    if len(lowered) == len(text):
        origins = list(range(len(text)))
    else:
        # Lower-case per character to know where each lowered char came from
        origins = []
        pieces = []
        for i, ch in enumerate(text):
            low = ch.lower()
            origins.extend([i] * len(low))
            pieces.append(low)
        lowered = "".join(pieces)

    spans = []
    found = lowered.find(query)
    while found != -1 and query:
        end = found + len(query)
        start = max(origins[found], spans[-1][1] if spans else 0)
        stop = origins[end - 1] + 1
        if start < stop:
            spans.append((start, stop))
        found = lowered.find(query, end)
    return spans
