import pytest

from hevtasks import memory
from hevtasks.allocator import set_default_allocator
from hevtasks.slice_allocator import SliceAllocator


@pytest.fixture(params=["simple", "slice"])
def default_allocator(request):
    allocator = SliceAllocator() if request.param == "slice" else None
    old = set_default_allocator(allocator)
    yield allocator
    set_default_allocator(old)


def test_malloc_and_free(default_allocator):
    block = memory.malloc(16)
    assert len(block) == 16
    memory.free(block)


def test_malloc0_is_zeroed(default_allocator):
    dirty = memory.malloc(64)
    dirty[:] = b"\xff" * 64
    memory.free(dirty)
    block = memory.malloc0(64)
    assert bytes(block[:64]) == bytes(64)
    memory.free(block)


def test_calloc_is_zeroed(default_allocator):
    block = memory.calloc(2, 64)
    assert len(block) == 2 * 64
    assert bytes(block) == bytes(2 * 64)
    memory.free(block)


@pytest.mark.parametrize("nmemb, size", [(0, 64), (2, 0)])
def test_calloc_empty_returns_none(default_allocator, nmemb, size):
    assert memory.calloc(nmemb, size) is None


def test_realloc_keeps_content(default_allocator):
    block = memory.malloc(128)
    block[:] = bytes(128)
    block = memory.realloc(block, 256)
    assert len(block) == 256
    assert bytes(block[:128]) == bytes(128)
    block = memory.realloc(block, 32)
    assert bytes(block[:32]) == bytes(32)
    assert memory.realloc(block, 0) is None


def test_helpers_use_installed_default():
    allocator = SliceAllocator()
    old = set_default_allocator(allocator)
    try:
        block = memory.malloc(16)
        memory.free(block)
        assert allocator.cached_count == 1
        assert memory.malloc(16) is block
    finally:
        set_default_allocator(old)