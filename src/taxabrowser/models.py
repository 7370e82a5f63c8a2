"""Data model for the bilingual taxonomy dataset.

Each row of the dataset is a fully specified classification path
(Kingdom through Genus) with an embedded species payload. All taxonomic
and descriptive text is paired Arabic/English.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class BilingualText:
    """A paired Arabic/English string.

    Equality and hashing use the English text only: it is the dataset's
    canonical key, while the Arabic text is display-only and not
    guaranteed to be unique.
    """

    english: str
    arabic: str = field(default="", compare=False)

    @property
    def key(self) -> str:
        """The identity key used for filtering."""
        return self.english

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> BilingualText:
        return cls(english=data["English"], arabic=data["Arabic"])

    def to_dict(self) -> dict[str, str]:
        return {"Arabic": self.arabic, "English": self.english}


@dataclass
class RegionalName:
    """A local name used in a particular region."""

    name: str
    region: str = ""


@dataclass
class LocalNames:
    """Local and regional names attached to a species.

    Any of the lists may be empty; absence in the source data means
    "no names of that kind".
    """

    arabic: list[str] = field(default_factory=list)
    english: list[str] = field(default_factory=list)
    regional: list[RegionalName] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> LocalNames | None:
        if not data:
            return None
        return cls(
            arabic=list(data.get("Arabic") or []),
            english=list(data.get("English") or []),
            regional=[
                RegionalName(name=r.get("Name", ""), region=r.get("Region", ""))
                for r in data.get("Regional") or []
            ],
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "Arabic": list(self.arabic),
            "English": list(self.english),
            "Regional": [{"Name": r.name, "Region": r.region} for r in self.regional],
        }


@dataclass
class Reference:
    """An external link about a species (article or image gallery)."""

    type: str
    title: str
    url: str

    @property
    def is_image(self) -> bool:
        return self.type == "image"

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Reference:
        return cls(
            type=data.get("Type", "reference"),
            title=data.get("Title", ""),
            url=data.get("URL", ""),
        )

    def to_dict(self) -> dict[str, str]:
        return {"Type": self.type, "Title": self.title, "URL": self.url}


@dataclass
class MediaItem:
    """An image or video with a bilingual caption."""

    url: str
    caption: BilingualText

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> MediaItem:
        return cls(url=data["URL"], caption=BilingualText.from_dict(data["Caption"]))

    def to_dict(self) -> dict[str, Any]:
        return {"URL": self.url, "Caption": self.caption.to_dict()}


@dataclass
class Media:
    """Optional media attached to a species."""

    images: list[MediaItem] = field(default_factory=list)
    videos: list[MediaItem] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> Media | None:
        if not data:
            return None
        return cls(
            images=[MediaItem.from_dict(m) for m in data.get("Images") or []],
            videos=[MediaItem.from_dict(m) for m in data.get("Videos") or []],
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "Images": [m.to_dict() for m in self.images],
            "Videos": [m.to_dict() for m in self.videos],
        }


@dataclass
class Species:
    """The terminal payload of a taxonomy record.

    Attributes:
        arabic: Official Arabic name.
        english: Official English name.
        description: Bilingual description text.
        habitat: Bilingual habitat text.
        local_names: Local/regional names (None when the dataset has none).
        references: External links.
        media: Images and videos (None when absent).
    """

    arabic: str
    english: str
    description: BilingualText
    habitat: BilingualText
    local_names: LocalNames | None = None
    references: list[Reference] = field(default_factory=list)
    media: Media | None = None

    @property
    def name(self) -> BilingualText:
        return BilingualText(english=self.english, arabic=self.arabic)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Species:
        return cls(
            arabic=data["Arabic"],
            english=data["English"],
            description=BilingualText.from_dict(data["Description"]),
            habitat=BilingualText.from_dict(data["Habitat"]),
            local_names=LocalNames.from_dict(data.get("LocalNames")),
            references=[Reference.from_dict(r) for r in data.get("References") or []],
            media=Media.from_dict(data.get("Media")),
        )

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "Arabic": self.arabic,
            "English": self.english,
            "Description": self.description.to_dict(),
            "Habitat": self.habitat.to_dict(),
            "References": [r.to_dict() for r in self.references],
        }
        if self.local_names is not None:
            result["LocalNames"] = self.local_names.to_dict()
        if self.media is not None:
            result["Media"] = self.media.to_dict()
        return result


@dataclass
class TaxonomyRecord:
    """One row of the flat, denormalized taxonomy dataset."""

    kingdom: BilingualText
    phylum: BilingualText
    class_: BilingualText
    order: BilingualText
    family: BilingualText
    genus: BilingualText
    species: Species

    @property
    def path(self) -> tuple[BilingualText, ...]:
        """The hierarchy path, Kingdom through Genus."""
        return (self.kingdom, self.phylum, self.class_, self.order, self.family, self.genus)

    def value_at(self, level: int) -> BilingualText:
        """Get the value at a level index (0 = Kingdom ... 5 = Genus)."""
        return self.path[level]

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TaxonomyRecord:
        return cls(
            kingdom=BilingualText.from_dict(data["Kingdom"]),
            phylum=BilingualText.from_dict(data["Phylum"]),
            class_=BilingualText.from_dict(data["Class"]),
            order=BilingualText.from_dict(data["Order"]),
            family=BilingualText.from_dict(data["Family"]),
            genus=BilingualText.from_dict(data["Genus"]),
            species=Species.from_dict(data["Species"]),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "Kingdom": self.kingdom.to_dict(),
            "Phylum": self.phylum.to_dict(),
            "Class": self.class_.to_dict(),
            "Order": self.order.to_dict(),
            "Family": self.family.to_dict(),
            "Genus": self.genus.to_dict(),
            "Species": self.species.to_dict(),
        }
