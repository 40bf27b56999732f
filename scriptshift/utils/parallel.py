"""Parallel processing utilities."""

from collections.abc import Callable, Iterable, Iterator
from concurrent.futures import ThreadPoolExecutor
from typing import TypeVar


T = TypeVar("T")
R = TypeVar("R")


def map_parallel_ordered(
    func: Callable[[T], R],
    items: Iterable[T],
    max_workers: int = 4,
) -> Iterator[R]:
    """
    Map function over items on a thread pool, preserving order.

    Threads are enough here: transliteration over cached schemas is a pure
    function of immutable data.

    Args:
        func: Function to apply
        items: Items to process
        max_workers: Maximum parallel workers

    Yields:
        Results in original order
    """
    if max_workers < 1:
        raise ValueError(f"max_workers must be positive, got {max_workers}")

    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        yield from executor.map(func, items)
