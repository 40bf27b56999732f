"""Locate schema documents by normalized resource path."""

import logging
from collections.abc import Iterable
from importlib import resources
from pathlib import Path

from scriptshift.errors import ResourceNotFound


logger = logging.getLogger(__name__)


def _safe_parts(path: str) -> list[str] | None:
    # Segments that could leave the package or a search directory
    parts = path.split("/")
    if any(part in ("", ".", "..") for part in parts):
        return None
    return parts


class ResourceLocator:
    """
    Resolve a normalized resource path to bytes.

    Resources bundled in ``package`` are consulted first, then each search
    directory in order.
    """

    def __init__(
        self,
        search_paths: Iterable[str | Path] = (),
        package: str = "scriptshift.data",
    ):
        self.search_paths = tuple(Path(p) for p in search_paths)
        self.package = package

    def __repr__(self) -> str:
        return f"ResourceLocator(search_paths={self.search_paths!r}, package={self.package!r})"

    def _candidates(self, path: str) -> Iterable[Path]:
        parts = _safe_parts(path)
        if parts is None:
            return
        for base in self.search_paths:
            yield base.joinpath(*parts)

    def _packaged(self, path: str):
        parts = _safe_parts(path)
        if parts is None:
            return None
        resource = resources.files(self.package)
        for part in parts:
            resource = resource.joinpath(part)
        return resource if resource.is_file() else None

    def exists(self, path: str) -> bool:
        """Check whether ``path`` can be located."""
        if self._packaged(path) is not None:
            return True
        return any(candidate.is_file() for candidate in self._candidates(path))

    def read_bytes(self, path: str) -> bytes:
        """
        Read the bytes of a resource.

        Args:
            path: Normalized resource path, e.g. ``schemas/wikipedia.json``

        Returns:
            Resource content

        Raises:
            ResourceNotFound: If no packaged resource or file matches
        """
        packaged = self._packaged(path)
        if packaged is not None:
            logger.debug(f"Reading packaged resource {self.package}:{path}")
            return packaged.read_bytes()

        for candidate in self._candidates(path):
            if candidate.is_file():
                logger.debug(f"Reading resource file {candidate}")
                return candidate.read_bytes()

        raise ResourceNotFound(f"Schema resource not found: {path}", code="not-found")
