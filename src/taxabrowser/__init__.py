"""Taxabrowser - Browse and search a bilingual Arabic/English taxonomy."""

__version__ = "0.1.0"

from taxabrowser.models import (
    BilingualText,
    LocalNames,
    Media,
    MediaItem,
    Reference,
    RegionalName,
    Species,
    TaxonomyRecord,
)
from taxabrowser.dataset import DatasetError, TaxonomyDataset, parse_records

# Cascading selection
from taxabrowser.index import LEVEL_LABELS, LEVELS, TaxonomyIndex, sort_options
from taxabrowser.cascade import CascadeController, LevelState

# Search
from taxabrowser.search import (
    MIN_QUERY_LENGTH,
    SEARCH_RESULT_LIMIT,
    SearchEngine,
    SearchHit,
    highlight_text,
    prepare_query,
    score_species,
)

# Presentation helpers
from taxabrowser.formatting import (
    classification_string,
    format_local_names,
    format_path,
    option_label,
    species_card,
)
from taxabrowser.logging_config import configure_logging

__all__ = [
    # Models
    "BilingualText",
    "LocalNames",
    "Media",
    "MediaItem",
    "Reference",
    "RegionalName",
    "Species",
    "TaxonomyRecord",
    # Dataset
    "DatasetError",
    "TaxonomyDataset",
    "parse_records",
    # Cascade
    "LEVEL_LABELS",
    "LEVELS",
    "CascadeController",
    "LevelState",
    "TaxonomyIndex",
    "sort_options",
    # Search
    "MIN_QUERY_LENGTH",
    "SEARCH_RESULT_LIMIT",
    "SearchEngine",
    "SearchHit",
    "highlight_text",
    "prepare_query",
    "score_species",
    # Formatting
    "classification_string",
    "format_local_names",
    "format_path",
    "option_label",
    "species_card",
    "configure_logging",
]
