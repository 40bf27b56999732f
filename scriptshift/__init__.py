"""Schema-driven transliteration between writing systems."""

from .catalog import BUILTIN_CATALOG, CatalogEntry, SchemaCatalog
from .errors import (
    ConfigurationError,
    InvalidIdentifier,
    InvalidSeparator,
    ParseError,
    ResourceNotFound,
    SchemaNotFound,
    StartupInvariantViolation,
    TransliterationError,
)
from .models import Schema, Word
from .normalize.transliteration import Transliterator, transliterate
from .repository import SchemaRepository, default_repository
from .resources import ResourceLocator

__version__ = "0.1.0"

__all__ = [
    "BUILTIN_CATALOG",
    "CatalogEntry",
    "ConfigurationError",
    "InvalidIdentifier",
    "InvalidSeparator",
    "ParseError",
    "ResourceLocator",
    "ResourceNotFound",
    "Schema",
    "SchemaCatalog",
    "SchemaNotFound",
    "SchemaRepository",
    "StartupInvariantViolation",
    "TransliterationError",
    "Transliterator",
    "Word",
    "default_repository",
    "transliterate",
]
