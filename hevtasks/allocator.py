"""Memory allocator interface, the simple allocator and the per-thread default."""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from typing import Optional

__all__ = [
    "MemoryAllocator",
    "SimpleAllocator",
    "get_default_allocator",
    "set_default_allocator",
]


class MemoryAllocator(ABC):
    """Reference-counted allocator handing out ``bytearray`` blocks."""

    def __init__(self) -> None:
        self.ref_count = 1

    @abstractmethod
    def alloc(self, size: int) -> Optional[bytearray]:
        """Return a block of ``size`` bytes, or None if none can be given."""

    @abstractmethod
    def realloc(
        self, block: Optional[bytearray], size: int
    ) -> Optional[bytearray]:
        """Resize ``block`` to ``size`` bytes, keeping its leading content."""

    @abstractmethod
    def free(self, block: Optional[bytearray]) -> None:
        """Give ``block`` back to the allocator."""

    def destroy(self) -> None:
        """Release what the allocator holds; called when the last ref goes."""

    def ref(self) -> MemoryAllocator:
        """Increase the reference count by one and return the allocator."""
        self.ref_count += 1
        return self

    def unref(self) -> None:
        """Decrease the reference count; destroy the allocator at zero."""
        if self.ref_count == 0:
            raise RuntimeError("allocator already released")
        self.ref_count -= 1
        if self.ref_count > 0:
            return
        self.destroy()


def _check_size(size: int) -> None:
    if size < 0:
        raise ValueError(f"negative allocation size: {size}")


class SimpleAllocator(MemoryAllocator):
    """Allocator that takes every block straight from the heap."""

    def alloc(self, size: int) -> bytearray:
        _check_size(size)
        return bytearray(size)

    def realloc(
        self, block: Optional[bytearray], size: int
    ) -> Optional[bytearray]:
        _check_size(size)
        if block is None:
            return self.alloc(size)
        if size == 0:
            self.free(block)
            return None
        current = len(block)
        if size < current:
            del block[size:]
        else:
            block.extend(bytes(size - current))
        return block

    def free(self, block: Optional[bytearray]) -> None:
        if block is not None and not isinstance(block, bytearray):
            raise TypeError("only blocks from an allocator can be freed")


_local = threading.local()


def get_default_allocator() -> MemoryAllocator:
    """Return this thread's default allocator, creating a simple one if unset."""
    allocator = getattr(_local, "allocator", None)
    if allocator is None:
        allocator = SimpleAllocator()
        _local.allocator = allocator
    return allocator


def set_default_allocator(
    allocator: Optional[MemoryAllocator],
) -> Optional[MemoryAllocator]:
    """Set this thread's default allocator and return the previous one."""
    old = getattr(_local, "allocator", None)
    _local.allocator = allocator
    return old