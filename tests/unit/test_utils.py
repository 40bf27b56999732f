"""Tests for I/O and parallel helpers."""

import pytest

from scriptshift.utils.io import ensure_dir, read_text, write_text
from scriptshift.utils.parallel import map_parallel_ordered


def test_write_and_read_text(tmp_path):
    """Test atomic writes, including line endings."""
    path = tmp_path / "nested" / "out.txt"
    text = "Yuliya\r\nShcheglova\n"

    write_text(path, text)

    assert read_text(path) == text
    assert not list(path.parent.glob(".tmp.*"))


def test_write_text_failure_leaves_nothing(tmp_path):
    """Test that a failed write removes its temporary file."""
    path = tmp_path / "out.txt"

    with pytest.raises(UnicodeEncodeError):
        write_text(path, "Щ", encoding="ascii")

    assert list(tmp_path.iterdir()) == []


def test_ensure_dir(tmp_path):
    """Test directory creation."""
    path = ensure_dir(tmp_path / "a" / "b")

    assert path.is_dir()
    assert ensure_dir(path) == path


def test_map_parallel_ordered():
    """Test that results keep input order."""
    assert list(map_parallel_ordered(lambda x: x * 2, range(10), max_workers=3)) == list(range(0, 20, 2))


def test_map_parallel_ordered_invalid_workers():
    """Test that a non-positive worker count is rejected."""
    with pytest.raises(ValueError):
        list(map_parallel_ordered(str, [1], max_workers=0))
