"""Allocation helpers that go through the thread's default allocator."""

from __future__ import annotations

from typing import Optional

from hevtasks.allocator import get_default_allocator

__all__ = ["malloc", "malloc0", "calloc", "realloc", "free"]


def malloc(size: int) -> Optional[bytearray]:
    """Allocate ``size`` bytes from the default allocator."""
    return get_default_allocator().alloc(size)


def malloc0(size: int) -> Optional[bytearray]:
    """Allocate ``size`` bytes and clear them to zero."""
    block = get_default_allocator().alloc(size)
    if block is not None:
        block[:size] = bytes(size)
    return block


def calloc(nmemb: int, size: int) -> Optional[bytearray]:
    """Allocate a zeroed array of ``nmemb`` elements of ``size`` bytes."""
    if not nmemb or not size:
        return None
    total = nmemb * size
    block = get_default_allocator().alloc(total)
    if block is not None:
        block[:total] = bytes(total)
    return block


def realloc(block: Optional[bytearray], size: int) -> Optional[bytearray]:
    """Resize ``block`` to ``size`` bytes using the default allocator."""
    return get_default_allocator().realloc(block, size)


def free(block: Optional[bytearray]) -> None:
    """Return ``block`` to the default allocator."""
    get_default_allocator().free(block)