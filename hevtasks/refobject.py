"""Reference-counted base objects."""

from __future__ import annotations

import threading

__all__ = ["RefObject", "AtomicRefObject"]


class RefObject:
    """Object whose lifetime is managed by an explicit reference count.

    A new object starts with a count of one. When :meth:`unref` drops the
    count to zero, :meth:`destruct` is called.
    """

    type_name = "HevObject"

    def __init__(self) -> None:
        self.ref_count = 1

    def ref(self) -> RefObject:
        """Increase the reference count by one and return the object."""
        self.ref_count += 1
        return self

    def unref(self) -> None:
        """Decrease the reference count; destruct when it reaches zero."""
        if self.ref_count == 0:
            raise RuntimeError(f"{self.type_name} already released")
        self.ref_count -= 1
        if self.ref_count:
            return
        self.destruct()

    def destruct(self) -> None:
        """Release what the object holds; the base object holds nothing."""


class AtomicRefObject(RefObject):
    """A :class:`RefObject` whose count may be changed from several threads."""

    type_name = "HevObjectAtomic"

    def __init__(self) -> None:
        super().__init__()
        self._lock = threading.Lock()

    def ref(self) -> AtomicRefObject:
        """Atomically increase the reference count and return the object."""
        with self._lock:
            self.ref_count += 1
        return self

    def unref(self) -> None:
        """Atomically decrease the count; the last release destructs."""
        with self._lock:
            if self.ref_count == 0:
                raise RuntimeError(f"{self.type_name} already released")
            previous = self.ref_count
            self.ref_count -= 1
        if previous > 1:
            return
        self.destruct()