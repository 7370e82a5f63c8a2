"""Loader for the bilingual taxonomy JSON document.

The document holds a single ``taxonomy`` field containing the flat list of
taxonomy records. It is read once and never re-fetched.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any

from taxabrowser.models import TaxonomyRecord

logger = logging.getLogger(__name__)


class DatasetError(Exception):
    """Raised when the taxonomy document cannot be read or parsed."""


def parse_records(document: dict[str, Any]) -> list[TaxonomyRecord]:
    """Parse the records of an already-decoded taxonomy document.

    Args:
        document: Decoded JSON with a ``taxonomy`` list.

    Returns:
        Records in dataset order.

    Raises:
        DatasetError: If the list is missing or a record lacks a required field.
    """
    rows = document.get("taxonomy") if isinstance(document, dict) else None
    if not isinstance(rows, list):
        raise DatasetError("Document has no 'taxonomy' list")

    records = []
    for i, row in enumerate(rows):
        try:
            records.append(TaxonomyRecord.from_dict(row))
        except KeyError as exc:
            raise DatasetError(f"Record {i} is malformed: missing {exc}") from exc
        except TypeError as exc:
            raise DatasetError(f"Record {i} is malformed: {exc}") from exc
    return records


class TaxonomyDataset:
    """The taxonomy document on disk.

    Example:
        >>> dataset = TaxonomyDataset("data/taxonomy.json")
        >>> print(len(dataset.records))
    """

    def __init__(self, path: str | Path) -> None:
        """Initialize the loader.

        Args:
            path: Path to the JSON document.
        """
        self.path = Path(path)
        if not self.path.exists():
            raise FileNotFoundError(f"Taxonomy dataset not found: {self.path}")

        # Parsed on first access
        self._records: list[TaxonomyRecord] | None = None

    @property
    def records(self) -> list[TaxonomyRecord]:
        """All records, in dataset order."""
        if self._records is None:
            self._records = self._load()
        return self._records

    @property
    def last_modified(self) -> datetime:
        """Modification time of the document."""
        return datetime.fromtimestamp(self.path.stat().st_mtime)

    def _load(self) -> list[TaxonomyRecord]:
        try:
            with open(self.path, encoding="utf-8") as f:
                document = json.load(f)
        except json.JSONDecodeError as exc:
            raise DatasetError(f"Invalid JSON in {self.path}: {exc}") from exc

        records = parse_records(document)
        logger.debug("Loaded %d taxonomy records from %s", len(records), self.path)
        return records

    def __len__(self) -> int:
        return len(self.records)
