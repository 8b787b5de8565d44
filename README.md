# hevtasks

Low-level building blocks for a cooperative task system, written in plain
Python with no third-party dependencies.

## Modules

- `hevtasks.rbtree`: an intrusive red-black tree.
  - `RBTreeNode(value=None)` carries any payload in `value`. `next()` and
    `prev()` return the in-order neighbours, and `is_empty()` is true while
    the node is not linked into a tree.
  - `RBTree` does not compare values itself. You walk down from `root` to
    find the insertion point, attach the node with
    `link(node, parent, left)`, and then rebalance with `insert_color(node)`.
    `link` raises `ValueError` if the chosen slot is already occupied. The
    tree also offers `first()`, `last()`, `replace(victim, new)`,
    `erase(node)`, and iteration over its nodes in order.
- `hevtasks.rbtree_cached`: `CachedRBTree`, an `RBTree` that keeps its
  leftmost node in `leftmost`, so `first()` takes constant time. Its
  `insert_color(node, leftmost)` takes a flag that says whether the new node
  is the smallest one.
- `hevtasks.refobject`: `RefObject` starts with `ref_count` 1. `ref()`
  increments the count, and `unref()` decrements it and calls `destruct()`
  when it reaches zero. Unreferencing an object that is already released
  raises `RuntimeError`. `AtomicRefObject` does the same under a lock, so
  several threads can share it.
- `hevtasks.allocator`:
  - `MemoryAllocator` is the abstract interface. It has `alloc`, `realloc`
    and `free`, reference counting through `ref`/`unref`, and `destroy`,
    which runs when the last reference is dropped.
  - `SimpleAllocator` hands out fresh `bytearray` blocks.
  - `get_default_allocator()` returns the calling thread's allocator and
    creates a `SimpleAllocator` on first use. `set_default_allocator()`
    replaces it and returns the previous one.
- `hevtasks.slice_allocator`:
  - `SliceAllocator(align=64, max_size=4096, max_count=1000)` rounds each
    request up to `align`. When a block of up to `max_size` bytes is freed,
    the allocator keeps it in its size class and reuses it later, last freed
    first. At most `max_count` blocks stay cached. Once the cache is full,
    freeing another block first drops one block from the size class that
    was least recently refilled or reused.
  - `alloc(0)` returns `None`.
  - Passing a block that came from another allocator, or freeing the same
    block twice, raises `ValueError`.
  - `align_up(value, align)` and `align_down(value, align)` round to a power
    of two.
- `hevtasks.memory`: `malloc`, `malloc0`, `calloc`, `realloc` and `free`
  all go through the calling thread's default allocator.
  - `malloc0` and `calloc` return zeroed blocks.
  - `calloc` returns `None` when either argument is zero.
  - `realloc(block, 0)` frees the block and returns `None`.

## Installation

```
pip install .
```

## Examples

```python
from hevtasks import memory

block = memory.malloc0(64)          # 64 zeroed bytes
block = memory.realloc(block, 128)  # first 64 bytes kept, rest zero
memory.free(block)
```

```python
from hevtasks.allocator import set_default_allocator
from hevtasks.slice_allocator import SliceAllocator
from hevtasks import memory

previous = set_default_allocator(SliceAllocator())
block = memory.malloc(100)          # drawn from the 128-byte size class
memory.free(block)                  # cached for reuse
set_default_allocator(previous)
```

```python
from hevtasks.rbtree import RBTree, RBTreeNode

def insert(tree, value):
    node = RBTreeNode(value)
    parent, left, current = None, False, tree.root
    while current is not None:
        parent = current
        left = value < current.value
        current = current.left if left else current.right
    tree.link(node, parent, left)
    tree.insert_color(node)
    return node

tree = RBTree()
for value in (5, 1, 9, 3):
    insert(tree, value)
print([node.value for node in tree])  # [1, 3, 5, 9]
```

## What this package does not do

The package holds only the data structures and allocators. It has no task
scheduler, coroutines, channels, mutexes, timers, I/O helpers or DNS
lookups, and it provides no command-line program.

## Tests

```
pip install .[test]
pytest
```