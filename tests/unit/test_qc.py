"""Tests for schema quality checks."""

import json
import logging

from scriptshift.models import Schema
from scriptshift.qc.validate_schema import (
    check_mapping_keys,
    check_samples,
    validate_schema_resource,
    validate_schemas,
)
from scriptshift.repository import SchemaRepository
from scriptshift.resources import ResourceLocator


def test_check_mapping_keys_clean(make_document):
    """Test a document whose keys all have usable lengths."""
    document = make_document(
        mapping={"а": "a"},
        prev_mapping={"е": "ye", "ье": "ye"},
        ending_mapping={"ий": "iy"},
    )

    assert check_mapping_keys(document) == ([], [])


def test_check_mapping_keys_problems(make_document):
    """Test keys that can never match."""
    document = make_document(
        mapping={"аб": "ab"},
        next_mapping={"абв": "x"},
        ending_mapping={"ого": "ovo"},
    )

    errors, warnings = check_mapping_keys(document)

    assert len(errors) == 1
    assert "ending_mapping" in errors[0]
    assert len(warnings) == 2


def test_check_samples():
    """Test replaying samples."""
    schema = Schema(
        name="samples",
        single_letter_map={"а": "a"},
        samples=(("а", "a"), ("аа", "b")),
    )

    errors = check_samples(schema)

    assert errors == ["sample 'аа': expected 'b', got 'aa'"]


def test_validate_resource(repository):
    """Test validating a schema from a search directory."""
    result = validate_schema_resource(repository, "schemas/local.json", logging.getLogger("test"))

    assert result.valid
    assert result.checked == ["schemas/local.json"]


def test_validate_resource_broken(repository):
    """Test that parse failures become validation errors."""
    logger = logging.getLogger("test")

    broken = validate_schema_resource(repository, "schemas/broken.json", logger)
    incomplete = validate_schema_resource(repository, "schemas/incomplete.json", logger)
    missing = validate_schema_resource(repository, "schemas/missing.json", logger)
    unknown = validate_schema_resource(repository, "KLINGON", logger)

    for result in (broken, incomplete, missing, unknown):
        assert not result.valid
        assert result.checked == []

    assert broken.errors[0].startswith("schemas/broken.json:")
    assert "mapping" in incomplete.errors[0]
    assert unknown.errors[0].startswith("KLINGON:")


def test_validate_resource_failing_sample(tmp_path, make_document):
    """Test a document whose sample disagrees with its tables."""
    document = make_document(mapping={"а": "a"}, samples=[["а", "b"]], ending_mapping={"а": "x"})
    (tmp_path / "wrong.json").write_text(json.dumps(document, ensure_ascii=False), encoding="utf-8")
    repository = SchemaRepository(locator=ResourceLocator(search_paths=[tmp_path]))

    result = validate_schema_resource(repository, "wrong.json", logging.getLogger("test"))

    assert not result.valid
    assert len(result.errors) == 2


def test_validate_schemas_combines(repository):
    """Test combining results over several identifiers."""
    result = validate_schemas(
        repository,
        logging.getLogger("test"),
        ["TELEGRAM", "schemas/local.json", "schemas/broken.json"],
    )

    assert not result.valid
    assert result.checked == ["schemas/telegram.json", "schemas/local.json"]
    assert len(result.errors) == 1
