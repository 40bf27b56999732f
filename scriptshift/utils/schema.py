"""JSON Schema validation utilities."""

import json
from functools import lru_cache
from importlib import resources
from typing import Any, cast

from jsonschema import Draft7Validator


DOCUMENT_SCHEMA = "schema-document.schema.json"


def load_schema(name: str, package: str = "scriptshift.data") -> dict[str, Any]:
    """
    Load a JSON schema shipped with the package.

    Args:
        name: Resource file name
        package: Package holding the resource

    Returns:
        Parsed schema dict
    """
    with resources.files(package).joinpath(name).open("r", encoding="utf-8") as f:
        return cast(dict[str, Any], json.load(f))


@lru_cache(maxsize=None)
def _document_validator() -> Draft7Validator:
    schema = load_schema(DOCUMENT_SCHEMA)
    Draft7Validator.check_schema(schema)
    return Draft7Validator(schema)


def validate_against_schema(
    data: Any,
    schema: dict[str, Any],
) -> list[str]:
    """
    Validate data against JSON schema.

    Args:
        data: Data to validate
        schema: JSON schema

    Returns:
        List of validation error messages (empty if valid)
    """
    return _format_errors(Draft7Validator(schema), data)


def validate_schema_document(data: Any) -> list[str]:
    """Validate a transliteration schema document against the packaged JSON schema."""
    return _format_errors(_document_validator(), data)


def _format_errors(validator: Draft7Validator, data: Any) -> list[str]:
    errors = []
    for error in sorted(validator.iter_errors(data), key=str):
        path = ".".join(str(p) for p in error.path) if error.path else "root"
        errors.append(f"{path}: {error.message}")
    return errors
