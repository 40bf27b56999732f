"""Data models for transliteration schemas."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any


TABLE_FIELDS = (
    "single_letter_map",
    "previous_letter_map",
    "next_letter_map",
    "ending_letter_map",
)


def _empty_table() -> Mapping[str, str]:
    return MappingProxyType({})


@dataclass(frozen=True)
class Schema:
    """
    A named bundle of substitution tables describing one transliteration convention.

    Tables are stored already expanded (case variants included) and are
    read-only. Instances are built once by the repository and shared by
    every caller holding a reference.
    """

    name: str
    description: str = field(default="", hash=False)
    url: str = field(default="", hash=False)
    single_letter_map: Mapping[str, str] = field(default_factory=_empty_table, hash=False)
    previous_letter_map: Mapping[str, str] = field(default_factory=_empty_table, hash=False)
    next_letter_map: Mapping[str, str] = field(default_factory=_empty_table, hash=False)
    ending_letter_map: Mapping[str, str] = field(default_factory=_empty_table, hash=False)
    samples: tuple[tuple[str, str], ...] = field(default=(), hash=False)
    fingerprint: str = ""

    def __post_init__(self) -> None:
        for name in TABLE_FIELDS:
            table = getattr(self, name)
            if not isinstance(table, MappingProxyType):
                object.__setattr__(self, name, MappingProxyType(dict(table)))
        object.__setattr__(self, "samples", tuple((src, dst) for src, dst in self.samples))

    def __repr__(self) -> str:
        return f"Schema(name={self.name!r}, fingerprint={self.fingerprint!r})"

    @property
    def table_sizes(self) -> dict[str, int]:
        """Number of entries in each expanded table."""
        return {name: len(getattr(self, name)) for name in TABLE_FIELDS}

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "name": self.name,
            "description": self.description,
            "url": self.url,
            "fingerprint": self.fingerprint,
            "single_letter_map": dict(self.single_letter_map),
            "previous_letter_map": dict(self.previous_letter_map),
            "next_letter_map": dict(self.next_letter_map),
            "ending_letter_map": dict(self.ending_letter_map),
            "samples": [list(sample) for sample in self.samples],
        }


@dataclass(frozen=True)
class Word:
    """A word split into stem and two-character ending."""

    stem: str
    ending: str = ""

    @property
    def text(self) -> str:
        """The original word."""
        return self.stem + self.ending
