"""General utility functions and helper classes."""

from typing import Sequence, TypeVar

T = TypeVar("T")


def chunk(items: Sequence[T], size: int) -> list[list[T]]:
    """Split items into contiguous lists of at most `size` elements, preserving order."""
    if size < 1:
        raise ValueError(f"Chunk size must be a positive integer, got {size}")
    return [list(items[start : start + size]) for start in range(0, len(items), size)]
