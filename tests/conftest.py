import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT / "src") not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT / "src"))

from taxabrowser.index import TaxonomyIndex
from taxabrowser.models import (
    BilingualText,
    LocalNames,
    RegionalName,
    Species,
    TaxonomyRecord,
)

SAMPLE_DATA_PATH = PROJECT_ROOT / "data" / "taxonomy.json"


def text(english: str, arabic: str | None = None) -> BilingualText:
    """Build a BilingualText with a recognisable Arabic stand-in."""
    return BilingualText(english=english, arabic=arabic if arabic is not None else f"ع-{english}")


def make_record(
    *,
    kingdom: str = "Animalia",
    phylum: str = "Chordata",
    class_: str = "Mammalia",
    order: str = "Artiodactyla",
    family: str = "Bovidae",
    genus: str = "Oryx",
    english: str = "Arabian Oryx",
    arabic: str = "المها العربي",
    description: tuple[str, str] = ("Placeholder text", "نص"),
    local_names: LocalNames | None = None,
) -> TaxonomyRecord:
    """Build a record; keyword arguments override the default Oryx path."""
    return TaxonomyRecord(
        kingdom=text(kingdom),
        phylum=text(phylum),
        class_=text(class_),
        order=text(order),
        family=text(family),
        genus=text(genus),
        species=Species(
            arabic=arabic,
            english=english,
            description=BilingualText(english=description[0], arabic=description[1]),
            habitat=BilingualText(english="Desert", arabic="صحراء"),
            local_names=local_names,
        ),
    )


@pytest.fixture
def record_factory():
    """The make_record builder."""
    return make_record


@pytest.fixture
def animal_records() -> list[TaxonomyRecord]:
    """Animalia with three phyla (listed out of order) plus a plant."""
    return [
        make_record(phylum="Mollusca", class_="Gastropoda", order="Stylommatophora",
                    family="Helicidae", genus="Eremina", english="Desert Snail", arabic="حلزون"),
        make_record(),
        make_record(genus="Gazella", english="Sand Gazelle", arabic="غزال الريم",
                    local_names=LocalNames(arabic=["الريم"], regional=[RegionalName("Rheem", "Najd")])),
        make_record(phylum="Arthropoda", class_="Arachnida", order="Scorpiones",
                    family="Buthidae", genus="Leiurus", english="Deathstalker", arabic="العقرب الأصفر"),
        make_record(kingdom="Plantae", phylum="Tracheophyta", class_="Magnoliopsida",
                    order="Fabales", family="Fabaceae", genus="Vachellia",
                    english="Umbrella Thorn Acacia", arabic="السمر"),
    ]


@pytest.fixture
def animal_index(animal_records) -> TaxonomyIndex:
    return TaxonomyIndex(animal_records)
