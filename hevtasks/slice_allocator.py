"""Allocator that caches freed blocks in size classes with LRU eviction."""

from __future__ import annotations

from collections import OrderedDict
from typing import Optional

from hevtasks.allocator import MemoryAllocator

__all__ = [
    "DEFAULT_ALIGN",
    "DEFAULT_MAX_SIZE",
    "DEFAULT_MAX_COUNT",
    "SliceAllocator",
    "align_up",
    "align_down",
]

DEFAULT_ALIGN = 64
DEFAULT_MAX_SIZE = 4096
DEFAULT_MAX_COUNT = 1000


def _check_align(align: int) -> None:
    if align <= 0 or align & (align - 1):
        raise ValueError(f"alignment must be a positive power of two: {align}")


def align_up(value: int, align: int) -> int:
    """Round ``value`` up to a multiple of ``align`` (a power of two)."""
    _check_align(align)
    return (value + align - 1) & ~(align - 1)


def align_down(value: int, align: int) -> int:
    """Round ``value`` down to a multiple of ``align`` (a power of two)."""
    _check_align(align)
    return value & ~(align - 1)


class _Slice(bytearray):
    """A block handed out by :class:`SliceAllocator`."""

    __slots__ = ("index", "owner", "cached")


def _resize(block: bytearray, size: int) -> None:
    current = len(block)
    if size < current:
        del block[size:]
    elif size > current:
        block.extend(bytes(size - current))


class SliceAllocator(MemoryAllocator):
    """Keeps freed small blocks per size class for quick reuse.

    Requests are rounded up to ``align``; those up to ``max_size`` fall into
    a size class whose freed blocks are kept (last freed, first reused).
    At most ``max_count`` blocks are kept in total; when full, a block of the
    size class least recently refilled or reused is dropped.
    """

    def __init__(
        self,
        align: int = DEFAULT_ALIGN,
        max_size: int = DEFAULT_MAX_SIZE,
        max_count: int = DEFAULT_MAX_COUNT,
    ) -> None:
        super().__init__()
        _check_align(align)
        if max_size < 0:
            raise ValueError(f"max_size must not be negative: {max_size}")
        if max_count < 1:
            raise ValueError(f"max_count must be at least one: {max_count}")
        self.align = align
        self.max_size = max_size
        self.max_count = max_count
        self._max_index = max_size // align
        self._cached: dict[int, list[_Slice]] = {}
        # Size classes with cached blocks; the last entry is the most recent.
        self._lru: OrderedDict[int, None] = OrderedDict()
        self.cached_count = 0

    def _class_index(self, size: int) -> int:
        return align_up(size, self.align) // self.align

    def _check_block(self, block: bytearray) -> _Slice:
        if not isinstance(block, _Slice) or block.owner is not self:
            raise ValueError("block was not allocated by this allocator")
        if block.cached:
            raise ValueError("block has already been freed")
        return block

    def alloc(self, size: int) -> Optional[bytearray]:
        if size < 0:
            raise ValueError(f"negative allocation size: {size}")
        index = self._class_index(size)
        if index == 0:
            return None
        if index > self._max_index:
            return self._new_slice(size, -1)

        slot = index - 1
        owner = self._cached.get(slot)
        if not owner:
            return self._new_slice(size, slot)

        block = owner.pop()
        self.cached_count -= 1
        del self._lru[slot]
        if owner:
            self._lru[slot] = None
        block.cached = False
        _resize(block, size)
        return block

    def _new_slice(self, size: int, index: int) -> _Slice:
        block = _Slice(size)
        block.index = index
        block.owner = self
        block.cached = False
        return block

    def realloc(
        self, block: Optional[bytearray], size: int
    ) -> Optional[bytearray]:
        if size < 0:
            raise ValueError(f"negative allocation size: {size}")
        if block is None:
            return self.alloc(size)
        if size == 0:
            self.free(block)
            return None
        piece = self._check_block(block)
        index = self._class_index(size)
        _resize(piece, size)
        piece.index = index - 1 if index <= self._max_index else -1
        return piece

    def free(self, block: Optional[bytearray]) -> None:
        if block is None:
            return
        piece = self._check_block(block)
        if piece.index < 0:
            piece.owner = None
            return

        if self.cached_count >= self.max_count:
            tail = next(iter(self._lru))
            victims = self._cached[tail]
            victim = victims.pop()
            victim.cached = False
            victim.owner = None
            self.cached_count -= 1
            if not victims:
                del self._lru[tail]

        owner = self._cached.setdefault(piece.index, [])
        was_empty = not owner
        owner.append(piece)
        piece.cached = True
        self.cached_count += 1
        if was_empty:
            self._lru[piece.index] = None

    def destroy(self) -> None:
        """Drop every cached block."""
        for slot in self._lru:
            for piece in self._cached.get(slot, ()):
                piece.cached = False
                piece.owner = None
        self._cached.clear()
        self._lru.clear()
        self.cached_count = 0