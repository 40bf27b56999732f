"""Catalog of the transliteration schemas bundled with the package."""

import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from scriptshift.errors import InvalidIdentifier, StartupInvariantViolation


SCHEMA_DIR = "schemas/"
SCHEMA_EXT = ".json"

_SLASHES_RE = re.compile(r"/+")
_NAME_SEPARATOR_RE = re.compile(r"[\s_]")


# Constant names of the bundled conventions, one JSON document each
BUILTIN_SCHEMAS: tuple[str, ...] = (
    "ALA_LC",
    "ALA_LC_ALT",
    "BGN_PCGN",
    "BGN_PCGN_ALT",
    "BS_2979",
    "BS_2979_ALT",
    "GOST_779",
    "GOST_779_ALT",
    "GOST_7034",
    "GOST_16876",
    "GOST_16876_ALT",
    "GOST_52290",
    "GOST_52535",
    "ICAO_DOC_9303",
    "ISO_9_1954",
    "ISO_9_1968",
    "ISO_9_1968_ALT",
    "MOSMETRO",
    "MVD_310",
    "MVD_310_FR",
    "MVD_782",
    "SCIENTIFIC",
    "TELEGRAM",
    "UNGEGN_1987",
    "WIKIPEDIA",
    "YANDEX_MAPS",
    "YANDEX_MONEY",
)


def normalize_identifier(identifier: str) -> str:
    """
    Normalize a schema path or identifier.

    Trims whitespace, converts backslashes to slashes, collapses repeated
    slashes and strips a leading or trailing slash.

    Args:
        identifier: Raw path or identifier

    Returns:
        Normalized form, possibly empty
    """
    path = identifier.strip().replace("\\", "/")
    path = _SLASHES_RE.sub("/", path)
    if path.startswith("/"):
        path = path[1:]
    if path.endswith("/"):
        path = path[:-1]
    return path


def canonical_name(identifier: str) -> str:
    """
    Turn a catalog identifier into its lowercase hyphenated resource name.

    ``"ALA_LC"``, ``"ala lc"`` and ``"Catalog.ALA_LC"`` all become ``"ala-lc"``.

    Raises:
        InvalidIdentifier: If nothing usable remains
    """
    path = normalize_identifier(identifier)
    if not path:
        raise InvalidIdentifier("Schema identifier is empty")

    name = path[path.rfind(".") + 1 :]
    name = _NAME_SEPARATOR_RE.sub("-", name).lower()
    if not name:
        raise InvalidIdentifier(f"Schema identifier has no name: {identifier!r}")
    return name


def canonical_path(identifier: str) -> str:
    """Canonical resource path of a catalog identifier, e.g. ``schemas/ala-lc.json``."""
    return SCHEMA_DIR + canonical_name(identifier) + SCHEMA_EXT


@dataclass(frozen=True)
class CatalogEntry:
    """One built-in schema: constant identifier and canonical resource path."""

    identifier: str
    path: str

    @property
    def name(self) -> str:
        return self.path[len(SCHEMA_DIR) : -len(SCHEMA_EXT)]


class SchemaCatalog:
    """
    Fixed table of schema identifiers and their canonical resource paths.

    Construction fails when two identifiers map to the same path, so an
    inconsistent catalog is caught once, when it is built.
    """

    def __init__(self, identifiers: Iterable[str]):
        entries: list[CatalogEntry] = []
        by_path: dict[str, CatalogEntry] = {}

        for identifier in identifiers:
            path = canonical_path(identifier)
            if path in by_path:
                raise StartupInvariantViolation(
                    f"Catalog identifiers {by_path[path].identifier!r} and {identifier!r} "
                    f"share the canonical path {path!r}",
                    code="duplicate-path",
                )
            entry = CatalogEntry(identifier=identifier, path=path)
            entries.append(entry)
            by_path[path] = entry

        self._entries = tuple(entries)
        self._by_path = by_path

    def __iter__(self) -> Iterator[CatalogEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, identifier: object) -> bool:
        return isinstance(identifier, str) and self.get(identifier) is not None

    @property
    def entries(self) -> tuple[CatalogEntry, ...]:
        return self._entries

    @property
    def identifiers(self) -> tuple[str, ...]:
        return tuple(entry.identifier for entry in self._entries)

    @property
    def paths(self) -> tuple[str, ...]:
        return tuple(entry.path for entry in self._entries)

    def get(self, identifier: str) -> CatalogEntry | None:
        """
        Find an entry by identifier, hyphenated name or canonical path.

        Args:
            identifier: Any spelling that canonicalizes to a known entry

        Returns:
            Matching entry, or None when unknown
        """
        path = normalize_identifier(identifier)
        if not path:
            return None
        if path in self._by_path:
            return self._by_path[path]
        if "/" in path:
            return None
        return self._by_path.get(canonical_path(path))

    def path_for(self, identifier: str) -> str:
        """
        Canonical resource path for a catalog identifier.

        Raises:
            InvalidIdentifier: If the identifier is not in the catalog
        """
        entry = self.get(identifier)
        if entry is None:
            raise InvalidIdentifier(f"Unknown schema identifier: {identifier!r}")
        return entry.path


BUILTIN_CATALOG = SchemaCatalog(BUILTIN_SCHEMAS)
