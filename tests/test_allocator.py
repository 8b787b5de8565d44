import threading

import pytest

from hevtasks.allocator import (
    MemoryAllocator,
    SimpleAllocator,
    get_default_allocator,
    set_default_allocator,
)


@pytest.fixture
def clean_default():
    previous = set_default_allocator(None)
    yield
    set_default_allocator(previous)


class Recording(SimpleAllocator):
    def __init__(self):
        super().__init__()
        self.destroyed = 0

    def destroy(self):
        self.destroyed += 1


def test_base_class_is_abstract():
    with pytest.raises(TypeError):
        MemoryAllocator()


def test_alloc_returns_block_of_requested_size():
    allocator = SimpleAllocator()
    block = allocator.alloc(16)
    assert len(block) == 16
    allocator.free(block)


def test_alloc_negative_size_raises():
    with pytest.raises(ValueError):
        SimpleAllocator().alloc(-1)


def test_realloc_grows_and_keeps_content():
    allocator = SimpleAllocator()
    block = allocator.alloc(4)
    block[:] = b"abcd"
    grown = allocator.realloc(block, 8)
    assert len(grown) == 8
    assert grown[:4] == b"abcd"


def test_realloc_shrinks_and_keeps_prefix():
    allocator = SimpleAllocator()
    block = allocator.alloc(6)
    block[:] = b"abcdef"
    shrunk = allocator.realloc(block, 3)
    assert shrunk == bytearray(b"abc")


def test_realloc_to_zero_frees():
    allocator = SimpleAllocator()
    block = allocator.alloc(8)
    assert allocator.realloc(block, 0) is None


def test_realloc_none_allocates():
    allocator = SimpleAllocator()
    block = allocator.realloc(None, 5)
    assert len(block) == 5


def test_free_rejects_foreign_object():
    with pytest.raises(TypeError):
        SimpleAllocator().free(b"immutable")


def test_ref_and_unref_destroy_at_zero():
    allocator = SimpleAllocator()
    assert allocator.ref() is allocator
    assert allocator.ref_count == 2
    allocator.unref()
    assert allocator.ref_count == 1
    allocator.unref()
    assert allocator.ref_count == 0
    with pytest.raises(RuntimeError):
        allocator.unref()

    recording = Recording()
    recording.ref()
    recording.unref()
    assert recording.destroyed == 0
    recording.unref()
    assert recording.destroyed == 1


def test_default_allocator_is_created_and_stable(clean_default):
    first = get_default_allocator()
    assert isinstance(first, SimpleAllocator)
    assert get_default_allocator() is first


def test_set_default_returns_previous(clean_default):
    assert set_default_allocator(None) is None
    custom = SimpleAllocator()
    assert set_default_allocator(custom) is None
    assert get_default_allocator() is custom
    other = SimpleAllocator()
    assert set_default_allocator(other) is custom
    assert get_default_allocator() is other


def test_default_allocator_is_per_thread(clean_default):
    main = get_default_allocator()
    seen = []

    def worker():
        seen.append(get_default_allocator())

    thread = threading.Thread(target=worker)
    thread.start()
    thread.join()

    assert len(seen) == 1
    assert seen[0] is not main
    assert get_default_allocator() is main