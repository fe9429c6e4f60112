"""
Fixed-size batching shared by the store writers.
"""

from typing import Iterator, Sequence, TypeVar


T = TypeVar("T")


def batched(items: Sequence[T], size: int) -> Iterator[list[T]]:
    """Yield consecutive batches of at most size items, in order."""
    if size < 1:
        raise ValueError(f"Batch size must be positive, got {size}")
    for start in range(0, len(items), size):
        yield list(items[start:start + size])
