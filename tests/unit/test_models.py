"""Tests for data models."""

from dataclasses import FrozenInstanceError
from types import MappingProxyType

import pytest

from scriptshift.models import TABLE_FIELDS, Schema, Word


def test_schema_tables_are_read_only():
    """Test that tables passed as dicts are frozen."""
    source = {"а": "a"}
    schema = Schema(name="test", single_letter_map=source)

    assert isinstance(schema.single_letter_map, MappingProxyType)
    with pytest.raises(TypeError):
        schema.single_letter_map["б"] = "b"  # type: ignore[index]

    # Mutating the source dict does not leak into the schema
    source["б"] = "b"
    assert "б" not in schema.single_letter_map


def test_schema_is_frozen():
    """Test that schema attributes cannot be reassigned."""
    schema = Schema(name="test")

    with pytest.raises(FrozenInstanceError):
        schema.name = "other"  # type: ignore[misc]


def test_schema_defaults():
    """Test that a bare schema has empty tables."""
    schema = Schema(name="test")

    for name in TABLE_FIELDS:
        assert len(getattr(schema, name)) == 0
    assert schema.samples == ()
    assert schema.table_sizes == dict.fromkeys(TABLE_FIELDS, 0)


def test_schema_samples_normalized():
    """Test that samples given as lists become tuples."""
    schema = Schema(name="test", samples=[["а", "a"]])  # type: ignore[arg-type]

    assert schema.samples == (("а", "a"),)


def test_schema_equality_and_hash():
    """Test value equality and hashing on name and fingerprint."""
    first = Schema(name="test", single_letter_map={"а": "a"}, fingerprint="blake2b:00")
    second = Schema(name="test", single_letter_map={"а": "a"}, fingerprint="blake2b:00")
    other = Schema(name="test", single_letter_map={"а": "b"}, fingerprint="blake2b:00")

    assert first == second
    assert hash(first) == hash(second)
    assert first != other
    assert len({first, second}) == 1


def test_schema_repr_is_short():
    """Test that repr does not dump the tables."""
    schema = Schema(name="wikipedia", single_letter_map={"а": "a"}, fingerprint="blake2b:ab")

    assert repr(schema) == "Schema(name='wikipedia', fingerprint='blake2b:ab')"


def test_schema_to_dict():
    """Test dictionary conversion."""
    schema = Schema(
        name="test",
        url="https://example.org",
        ending_letter_map={"ая": "aya"},
        samples=(("баая", "baaya"),),
    )

    data = schema.to_dict()

    assert data["name"] == "test"
    assert data["url"] == "https://example.org"
    assert data["ending_letter_map"] == {"ая": "aya"}
    assert data["samples"] == [["баая", "baaya"]]
    assert isinstance(data["single_letter_map"], dict)


def test_word_text():
    """Test that stem and ending join back into the word."""
    word = Word(stem="ба", ending="ая")

    assert word.text == "баая"
    assert Word(stem="аб").text == "аб"
