"""Pytest fixtures for scriptshift tests."""

import json
import logging
from pathlib import Path

import pytest

from scriptshift.repository import SchemaRepository, build_schema
from scriptshift.resources import ResourceLocator


def _document(**fields):
    document = {
        "name": "test",
        "description": "Test schema",
        "url": None,
        "mapping": {},
        "prev_mapping": None,
        "next_mapping": None,
        "ending_mapping": None,
        "samples": [],
    }
    document.update(fields)
    return document


class CountingLocator(ResourceLocator):
    """Locator recording every resource read."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.reads: list[str] = []

    def read_bytes(self, path: str) -> bytes:
        self.reads.append(path)
        return super().read_bytes(path)


@pytest.fixture
def make_document():
    """Factory for minimal schema documents; keyword arguments replace fields."""
    return _document


@pytest.fixture
def make_schema():
    """Factory building an expanded Schema from raw tables."""

    def _make(**fields):
        return build_schema(_document(**fields))

    return _make


@pytest.fixture
def sample_cyrillic_text():
    """Sample Russian text."""
    return "Юлия Щеглова"


@pytest.fixture
def schema_dir(tmp_path: Path) -> Path:
    """Search directory holding schema documents that are not bundled."""
    directory = tmp_path / "schemas"
    directory.mkdir()

    local = _document(
        name="local",
        mapping={"а": "a", "б": "b", "в": "v"},
        samples=[["Ваба", "Vaba"]],
    )
    (directory / "local.json").write_text(json.dumps(local, ensure_ascii=False), encoding="utf-8")
    (directory / "broken.json").write_text("{not json", encoding="utf-8")
    (directory / "incomplete.json").write_text(json.dumps({"name": "incomplete"}), encoding="utf-8")

    return tmp_path


@pytest.fixture
def locator(schema_dir: Path) -> CountingLocator:
    """Locator reading packaged schemas first, then the temporary directory."""
    return CountingLocator(search_paths=[schema_dir])


@pytest.fixture
def repository(locator: CountingLocator) -> SchemaRepository:
    """Fresh repository with an empty cache."""
    return SchemaRepository(locator=locator)


@pytest.fixture
def reset_logging():
    """Remove handlers installed on the package logger by setup_logging."""
    yield
    logger = logging.getLogger("scriptshift")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
