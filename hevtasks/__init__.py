"""Intrusive red-black trees, reference-counted objects and memory allocators."""

__version__ = "0.1.0"
__all__ = ["rbtree", "rbtree_cached", "refobject", "allocator", "slice_allocator", "memory"]