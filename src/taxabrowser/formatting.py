"""Text helpers for presenting taxonomy records.

These are pure string transforms shared by the web front end and the
terminal browser.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from taxabrowser.index import LEVEL_LABELS, LEVELS
from taxabrowser.models import BilingualText

if TYPE_CHECKING:
    from collections.abc import Sequence

    from taxabrowser.models import LocalNames, TaxonomyRecord


def option_label(value: BilingualText) -> str:
    """Format a selector option as 'Arabic | English'."""
    return f"{value.arabic} | {value.english}"


def format_local_names(local_names: LocalNames | None) -> str:
    """Format local names as parenthesized groups.

    Example: ``(وضيحي - مها) (white oryx) (Baqar al-Wahsh (Najd))``.
    Empty groups are omitted; no local names gives an empty string.
    """
    if local_names is None:
        return ""

    parts = []
    if local_names.arabic:
        parts.append(f"({' - '.join(local_names.arabic)})")
    if local_names.english:
        parts.append(f"({' - '.join(local_names.english)})")
    if local_names.regional:
        regional = " - ".join(f"{r.name} ({r.region})" for r in local_names.regional)
        parts.append(f"({regional})")
    return " ".join(parts)


def classification_string(record: TaxonomyRecord) -> BilingualText:
    """Build the full 'Kingdom X - Phylum Y - ...' line in both languages."""
    arabic = " - ".join(
        f"{LEVEL_LABELS[name]} {value.arabic}" for name, value in zip(LEVELS, record.path)
    )
    english = " - ".join(f"{name} {value.english}" for name, value in zip(LEVELS, record.path))
    return BilingualText(english=english, arabic=arabic)


def format_path(path: Sequence[BilingualText], *, language: str = "arabic") -> str:
    """Join a hierarchy path into a breadcrumb."""
    if language == "english":
        return " > ".join(value.english for value in path)
    return " > ".join(value.arabic for value in path)


def wrap_text(text: str, width: int = 76, indent: str = "  ") -> str:
    """Word wrap text with optional indent."""
    words = text.split()
    lines = []
    current_line: list[str] = []
    current_length = 0

    for word in words:
        if current_line and current_length + len(word) + 1 > width:
            lines.append(indent + " ".join(current_line))
            current_line = [word]
            current_length = len(word)
        else:
            current_line.append(word)
            current_length += len(word) + 1

    if current_line:
        lines.append(indent + " ".join(current_line))

    return "\n".join(lines)


def species_card(record: TaxonomyRecord) -> dict[str, Any]:
    """Collect everything a species card displays.

    References come first, followed by image and then video links when the
    species has media.
    """
    species = record.species
    classification = classification_string(record)

    links = [
        {"kind": "image" if ref.is_image else "reference", "title": ref.title, "url": ref.url}
        for ref in species.references
    ]
    if species.media is not None:
        for item in species.media.images:
            links.append({
                "kind": "image",
                "title": item.caption.arabic,
                "tooltip": f"{item.caption.arabic} | {item.caption.english}",
                "url": item.url,
            })
        for item in species.media.videos:
            links.append({
                "kind": "video",
                "title": item.caption.arabic,
                "tooltip": f"{item.caption.arabic} | {item.caption.english}",
                "url": item.url,
            })

    return {
        "arabic": species.arabic,
        "english": species.english,
        "local_names": format_local_names(species.local_names),
        "description": species.description.to_dict(),
        "habitat": species.habitat.to_dict(),
        "classification": classification.to_dict(),
        "links": links,
    }
