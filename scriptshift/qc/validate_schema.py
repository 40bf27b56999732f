"""Validation of transliteration schema documents."""

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from scriptshift.errors import ParseError, SchemaNotFound
from scriptshift.models import Schema
from scriptshift.normalize.segmentation import ENDING_LENGTH
from scriptshift.normalize.transliteration import transliterate
from scriptshift.repository import SchemaRepository, parse_schema_document


@dataclass
class ValidationResult:
    """Result of validation."""

    valid: bool
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    checked: list[str] = field(default_factory=list)


def check_mapping_keys(document: Mapping[str, Any]) -> tuple[list[str], list[str]]:
    """
    Check that table keys have lengths the transliteration can ever match.

    Args:
        document: Parsed schema document

    Returns:
        Tuple of (errors, warnings)
    """
    errors: list[str] = []
    warnings: list[str] = []

    for key in document.get("mapping") or {}:
        if len(key) != 1:
            warnings.append(f"mapping: key {key!r} is not a single character and never matches")

    for table in ("prev_mapping", "next_mapping"):
        for key in document.get(table) or {}:
            if len(key) > 2:
                warnings.append(f"{table}: key {key!r} is longer than two characters and never matches")

    # Endings are always exactly two characters long
    for key in document.get("ending_mapping") or {}:
        if len(key) != ENDING_LENGTH:
            errors.append(f"ending_mapping: key {key!r} must be {ENDING_LENGTH} characters long")

    return errors, warnings


def check_samples(schema: Schema, separator: str | None = None) -> list[str]:
    """
    Replay the samples carried by a schema.

    Args:
        schema: Schema to check
        separator: Word separator used for the samples

    Returns:
        One error message per mismatching sample
    """
    errors = []
    for source, expected in schema.samples:
        actual = transliterate(source, schema, separator)
        if actual != expected:
            errors.append(f"sample {source!r}: expected {expected!r}, got {actual!r}")
    return errors


def validate_schema_resource(
    repository: SchemaRepository,
    identifier: str,
    logger: logging.Logger,
) -> ValidationResult:
    """
    Validate one schema document reachable through the repository.

    Args:
        repository: Repository used to locate and build the schema
        identifier: Resource path or catalog identifier
        logger: Logger instance

    Returns:
        Validation result; messages are prefixed with the resource path
    """
    try:
        path = repository.resolve_path(identifier)
        raw = repository.locator.read_bytes(path)
    except SchemaNotFound as e:
        return ValidationResult(valid=False, errors=[f"{identifier}: {e.message}"])

    try:
        document = parse_schema_document(raw)
    except ParseError as e:
        messages = e.errors or [e.message]
        return ValidationResult(valid=False, errors=[f"{path}: {msg}" for msg in messages])

    key_errors, key_warnings = check_mapping_keys(document)
    schema = repository.resolve(path)
    sample_errors = check_samples(schema)

    errors = [f"{path}: {msg}" for msg in key_errors + sample_errors]
    warnings = [f"{path}: {msg}" for msg in key_warnings]

    if errors:
        logger.warning(f"Schema {path} has {len(errors)} validation errors")
    else:
        logger.info(f"Schema {path} is valid ({len(schema.samples)} samples checked)")

    return ValidationResult(valid=not errors, errors=errors, warnings=warnings, checked=[path])


def validate_schemas(
    repository: SchemaRepository,
    logger: logging.Logger,
    identifiers: Iterable[str] | None = None,
) -> ValidationResult:
    """
    Validate several schemas; all catalog entries by default.

    Args:
        repository: Repository used to locate and build the schemas
        logger: Logger instance
        identifiers: Paths or catalog identifiers to validate

    Returns:
        Combined validation result
    """
    if identifiers is None:
        identifiers = repository.catalog.identifiers

    all_errors: list[str] = []
    all_warnings: list[str] = []
    checked: list[str] = []

    for identifier in identifiers:
        result = validate_schema_resource(repository, identifier, logger)
        all_errors.extend(result.errors)
        all_warnings.extend(result.warnings)
        checked.extend(result.checked)

    return ValidationResult(
        valid=not all_errors,
        errors=all_errors,
        warnings=all_warnings,
        checked=checked,
    )
