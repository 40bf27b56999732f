"""
Schema repository: resolve, parse, expand and cache transliteration schemas.

A repository owns its cache. Each normalized path is parsed at most once for
the lifetime of the repository; every caller resolving that path afterwards
gets the very same Schema instance.
"""

import json
import logging
import threading
from collections.abc import Iterable, Iterator, Mapping
from typing import Any

from scriptshift.catalog import BUILTIN_CATALOG, SCHEMA_EXT, SchemaCatalog, normalize_identifier
from scriptshift.errors import InvalidIdentifier, ParseError
from scriptshift.models import Schema
from scriptshift.resources import ResourceLocator
from scriptshift.utils.hashing import hash_bytes, hash_string
from scriptshift.utils.schema import validate_schema_document


SchemaRef = Schema | str


def capitalize(text: str) -> str:
    """Uppercase the first character and leave the rest untouched."""
    return text[:1].upper() + text[1:]


def _raw_pairs(mapping: Mapping[str, str | None] | None) -> Iterator[tuple[str, str]]:
    # Null values behave as absent keys
    for key, value in (mapping or {}).items():
        if value is not None:
            yield key, value


def expand_single_letter_map(mapping: Mapping[str, str | None] | None) -> dict[str, str]:
    """Add the capitalized variant of every entry."""
    table: dict[str, str] = {}
    for key, value in _raw_pairs(mapping):
        table[key] = value
        table[capitalize(key)] = capitalize(value)
    return table


def expand_previous_letter_map(mapping: Mapping[str, str | None] | None) -> dict[str, str]:
    """
    Add capitalized and upper-case key variants.

    The capitalized key keeps the original value while the upper-case key
    gets a capitalized value. Existing schema documents are written against
    this behaviour, so it must not be made symmetric with the next-letter map.
    """
    table: dict[str, str] = {}
    for key, value in _raw_pairs(mapping):
        table[key] = value
        table[capitalize(key)] = value
        table[key.upper()] = capitalize(value)
    return table


def expand_next_letter_map(mapping: Mapping[str, str | None] | None) -> dict[str, str]:
    """Add capitalized and upper-case key variants, both with a capitalized value."""
    table: dict[str, str] = {}
    for key, value in _raw_pairs(mapping):
        table[key] = value
        table[capitalize(key)] = capitalize(value)
        table[key.upper()] = capitalize(value)
    return table


def expand_ending_letter_map(mapping: Mapping[str, str | None] | None) -> dict[str, str]:
    """Add the upper-case variant of every ending."""
    table: dict[str, str] = {}
    for key, value in _raw_pairs(mapping):
        table[key] = value
        table[key.upper()] = value.upper()
    return table


def parse_schema_document(raw: bytes) -> dict[str, Any]:
    """
    Parse and validate the bytes of a schema document.

    Args:
        raw: Document content (UTF-8 JSON)

    Returns:
        Parsed document

    Raises:
        ParseError: If the bytes are not UTF-8 JSON or violate the document schema
    """
    try:
        document = json.loads(raw.decode("utf-8-sig"))
    except UnicodeDecodeError as e:
        raise ParseError(f"Schema document is not valid UTF-8: {e}", code="encoding") from e
    except json.JSONDecodeError as e:
        raise ParseError(f"Schema document is not valid JSON: {e}", code="json") from e

    errors = validate_schema_document(document)
    if errors:
        raise ParseError(
            "Malformed schema document: " + "; ".join(errors),
            errors=errors,
            code="structure",
        )
    return document


def build_schema(document: Mapping[str, Any], fingerprint: str | None = None) -> Schema:
    """
    Build a Schema from a parsed document, expanding its raw mappings.

    Args:
        document: Parsed schema document
        fingerprint: Digest of the source bytes; derived from the document when omitted

    Returns:
        Immutable schema
    """
    if fingerprint is None:
        fingerprint = hash_string(json.dumps(document, ensure_ascii=False, sort_keys=True))

    return Schema(
        name=document.get("name") or "",
        description=document.get("description") or "",
        url=document.get("url") or "",
        single_letter_map=expand_single_letter_map(document.get("mapping")),
        previous_letter_map=expand_previous_letter_map(document.get("prev_mapping")),
        next_letter_map=expand_next_letter_map(document.get("next_mapping")),
        ending_letter_map=expand_ending_letter_map(document.get("ending_mapping")),
        samples=tuple((src, dst) for src, dst in document.get("samples") or ()),
        fingerprint=fingerprint,
    )


class SchemaRepository:
    """
    Resolve schema references to cached Schema instances.

    A reference is a Schema (returned as is), a resource path such as
    ``schemas/wikipedia.json`` or a catalog identifier such as ``WIKIPEDIA``.
    Cache hits are lock-free; misses serialize on a single lock shared by all
    paths.
    """

    def __init__(
        self,
        locator: ResourceLocator | None = None,
        catalog: SchemaCatalog = BUILTIN_CATALOG,
        logger: logging.Logger | None = None,
    ):
        self.locator = locator or ResourceLocator()
        self.catalog = catalog
        self.logger = logger or logging.getLogger(__name__)
        self._cache: dict[str, Schema] = {}
        self._lock = threading.Lock()
        self._load_count = 0

    def __contains__(self, identifier: object) -> bool:
        if not isinstance(identifier, str):
            return False
        try:
            return self.resolve_path(identifier) in self._cache
        except InvalidIdentifier:
            return False

    @property
    def load_count(self) -> int:
        """Number of schema documents parsed so far."""
        return self._load_count

    def cached_paths(self) -> tuple[str, ...]:
        return tuple(sorted(self._cache))

    def resolve_path(self, identifier: str) -> str:
        """
        Normalized resource path for a path or catalog identifier.

        Raises:
            InvalidIdentifier: If the identifier is empty or unknown to the catalog
        """
        path = normalize_identifier(identifier)
        if not path:
            raise InvalidIdentifier(
                f"Schema identifier is empty after normalization: {identifier!r}",
                code="empty",
            )
        if "/" in path or path.endswith(SCHEMA_EXT):
            return path
        return self.catalog.path_for(path)

    def resolve(self, identifier: SchemaRef) -> Schema:
        """
        Resolve a schema reference, loading and caching it on first use.

        Args:
            identifier: Schema, resource path or catalog identifier

        Returns:
            Cached schema

        Raises:
            InvalidIdentifier: Empty path or unknown catalog identifier
            ResourceNotFound: No resource exists for the path
            ParseError: The resource is not a valid schema document
        """
        if isinstance(identifier, Schema):
            return identifier
        if not isinstance(identifier, str):
            raise InvalidIdentifier(f"Unsupported schema reference: {identifier!r}")

        path = self.resolve_path(identifier)

        schema = self._cache.get(path)
        if schema is not None:
            return schema

        with self._lock:
            # Another thread may have loaded it while we waited
            schema = self._cache.get(path)
            if schema is not None:
                return schema

            schema = self._load(path)
            self._cache[path] = schema

        return schema

    def preload(self, identifiers: Iterable[SchemaRef]) -> list[Schema]:
        """Resolve several references, returning the schemas in order."""
        return [self.resolve(identifier) for identifier in identifiers]

    def _load(self, path: str) -> Schema:
        raw = self.locator.read_bytes(path)
        try:
            document = parse_schema_document(raw)
        except ParseError as e:
            self.logger.error(f"Failed to parse schema {path}: {e.message}")
            raise

        schema = build_schema(document, fingerprint=hash_bytes(raw))
        self._load_count += 1
        self.logger.info(f"Loaded schema {schema.name!r} from {path}")
        return schema


_default_repository: SchemaRepository | None = None
_default_lock = threading.Lock()


def default_repository() -> SchemaRepository:
    """Process-wide repository over the bundled schemas, created on first use."""
    global _default_repository

    if _default_repository is None:
        with _default_lock:
            if _default_repository is None:
                _default_repository = SchemaRepository()
    return _default_repository
