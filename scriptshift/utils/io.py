"""I/O utilities with atomic writes."""

import shutil
import tempfile
from collections.abc import Callable
from pathlib import Path


def atomic_write(
    path: Path,
    write_func: Callable[[Path], None],
) -> None:
    """
    Atomically write to a file using temp file and move.

    Args:
        path: Destination path
        write_func: Function that writes to a given path
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    # Temp file in the same directory keeps the move on one filesystem
    with tempfile.NamedTemporaryFile(
        mode="wb",
        dir=path.parent,
        delete=False,
        prefix=f".tmp.{path.name}.",
    ) as tmp_file:
        tmp_path = Path(tmp_file.name)

    try:
        write_func(tmp_path)
        shutil.move(str(tmp_path), str(path))
    except Exception:
        tmp_path.unlink(missing_ok=True)
        raise


def write_text(path: Path, text: str, encoding: str = "utf-8") -> None:
    """
    Write a text file atomically.

    Args:
        path: Destination path
        text: Content to write
        encoding: Text encoding
    """

    def _write(tmp_path: Path) -> None:
        with tmp_path.open("w", encoding=encoding, newline="") as f:
            f.write(text)

    atomic_write(path, _write)


def read_text(path: Path, encoding: str = "utf-8") -> str:
    """Read a whole text file."""
    with Path(path).open("r", encoding=encoding, newline="") as f:
        return f.read()


def ensure_dir(path: Path) -> Path:
    """
    Ensure directory exists.

    Args:
        path: Directory path

    Returns:
        Path object
    """
    path = Path(path)
    path.mkdir(parents=True, exist_ok=True)
    return path
