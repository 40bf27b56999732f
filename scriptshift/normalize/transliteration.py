"""Schema-driven transliteration of text."""

import logging
import re
from collections.abc import Iterable
from functools import lru_cache

from scriptshift.errors import InvalidSeparator
from scriptshift.models import Schema
from scriptshift.normalize.segmentation import segment_word
from scriptshift.repository import SchemaRef, SchemaRepository, default_repository
from scriptshift.utils.parallel import map_parallel_ordered


logger = logging.getLogger(__name__)

DEFAULT_SEPARATOR = r"\b"


@lru_cache(maxsize=128)
def compile_separator(separator: str | None = None) -> re.Pattern[str]:
    """
    Compile a word separator pattern.

    Args:
        separator: Regular expression; None means word boundaries

    Raises:
        InvalidSeparator: If the pattern does not compile
    """
    pattern = DEFAULT_SEPARATOR if separator is None else separator
    try:
        return re.compile(pattern)
    except re.error as e:
        raise InvalidSeparator(f"Invalid word separator {pattern!r}: {e}") from e


def split_words(text: str, separator: str | None = None) -> list[str]:
    """
    Split text into word and separator tokens without consuming anything.

    The text is cut right before and right after every separator match,
    overlapping matches included, so joining the tokens gives back the
    original text. With the default pattern a run of word characters and a
    run of other characters each form one token; a pattern that can match
    inside its own matches cuts the run at every such position.

    Args:
        text: Input text
        separator: Regular expression matching word separators; defaults to
            word boundaries

    Returns:
        Non-empty tokens in order
    """
    pattern = compile_separator(separator)

    cuts = {0, len(text)}
    for position in range(len(text) + 1):
        match = pattern.match(text, position)
        if match is not None:
            cuts.update(match.span())

    bounds = sorted(cuts)
    return [text[start:end] for start, end in zip(bounds, bounds[1:]) if end > start]


def transliterate_letter(prev: str, curr: str, next_: str, schema: Schema) -> str:
    """
    Substitute one character given its neighbours.

    Priority: previous-pair match, next-pair match, single-letter match,
    then the character itself. Missing neighbours are empty strings.
    """
    result = schema.previous_letter_map.get(prev + curr)
    if result is None:
        result = schema.next_letter_map.get(curr + next_)
    if result is None:
        result = schema.single_letter_map.get(curr, curr)
    return result


def transliterate_stem(stem: str, schema: Schema) -> str:
    """Transliterate a stem character by character."""
    last = len(stem) - 1
    parts = []
    for i, curr in enumerate(stem):
        prev = stem[i - 1] if i > 0 else ""
        next_ = stem[i + 1] if i < last else ""
        parts.append(transliterate_letter(prev, curr, next_, schema))
    return "".join(parts)


def transliterate_word(word: str, schema: Schema) -> str:
    """
    Transliterate one token.

    A known two-character ending is substituted as a whole and the stem is
    transliterated on its own; otherwise the whole word is treated as a stem.
    """
    segmented = segment_word(word)
    ending = schema.ending_letter_map.get(segmented.ending)
    if ending is None:
        return transliterate_stem(segmented.text, schema)
    return transliterate_stem(segmented.stem, schema) + ending


def transliterate(text: str | None, schema: SchemaRef, separator: str | None = None) -> str | None:
    """
    Transliterate text with a schema.

    Args:
        text: Input text; empty text or None is returned unchanged
        schema: Schema, resource path or catalog identifier; references are
            resolved through the default repository
        separator: Word separator pattern (default: word boundaries)

    Returns:
        Transliterated text

    Raises:
        SchemaNotFound: If a reference does not lead to a schema document
        ParseError: If the referenced document is malformed
        InvalidSeparator: If the separator does not compile
    """
    if not text:
        return text

    if not isinstance(schema, Schema):
        schema = default_repository().resolve(schema)

    return "".join(transliterate_word(token, schema) for token in split_words(text, separator))


class Transliterator:
    """
    Transliterate text with schemas referenced by object, path or catalog identifier.

    References are resolved through the repository, so each schema document
    is parsed once no matter how many texts use it.
    """

    def __init__(self, repository: SchemaRepository | None = None, separator: str | None = None):
        self.repository = repository or default_repository()
        self.separator = separator

    def schema(self, schema_ref: SchemaRef) -> Schema:
        return self.repository.resolve(schema_ref)

    def transliterate(
        self,
        text: str | None,
        schema_ref: SchemaRef,
        separator: str | None = None,
    ) -> str | None:
        """
        Transliterate text.

        Args:
            text: Input text
            schema_ref: Schema, resource path or catalog identifier
            separator: Word separator; falls back to the instance default

        Returns:
            Transliterated text
        """
        schema = self.repository.resolve(schema_ref)
        return transliterate(text, schema, separator if separator is not None else self.separator)

    def transliterate_many(
        self,
        texts: Iterable[str],
        schema_ref: SchemaRef,
        separator: str | None = None,
        max_workers: int = 4,
    ) -> list[str]:
        """
        Transliterate several texts in parallel, preserving order.

        The schema is resolved once before any worker starts.
        """
        schema = self.repository.resolve(schema_ref)
        sep = separator if separator is not None else self.separator
        compile_separator(sep)

        results = list(
            map_parallel_ordered(
                lambda text: transliterate(text, schema, sep),
                texts,
                max_workers=max_workers,
            )
        )
        logger.debug(f"Transliterated {len(results)} texts with {schema.name!r}")
        return results
