import logging
from itertools import islice
from typing import Any, Callable, Iterable, List, Optional

from array_ import Array
from logger import print_

Comparator = Callable[[Any, Any], int]


def heap_parent(index):
    return (index - 1) // 2


def heap_left(index):
    return 2 * index + 1


def heap_right(index):
    return 2 * index + 2


class Heap:
    """
    Binary min-heap over opaque handles with a capacity fixed at construction.

    Ordering comes from `comparator(a, b)`, which returns -1, 0 or 1. The heap
    only manages slots: handles are never inspected or released, and `None`
    is reserved as the "nothing extracted" result.
    """

    def __init__(self, capacity: int, comparator: Comparator):
        if capacity < 0:
            raise ValueError(f"Heap capacity must be non-negative, got {capacity}")
        self.comparator = comparator
        self.count = 0
        self.capacity = capacity
        self.entries = Array(capacity)

    def _compare(self, a_idx, b_idx):
        return self.comparator(self.entries.get(a_idx), self.entries.get(b_idx))

    # Heap property holds when the parent does not rank after the child
    def _property(self, parent_idx, child_idx):
        return self._compare(parent_idx, child_idx) != 1

    def insert(self, value):
        """Inserts `value`, or drops it if the heap is already full."""
        if self.count == self.capacity:
            return

        idx = self.count
        self.entries.set(idx, value)
        self.count += 1

        # Bubble upwards until heap property is restored
        while idx > 0:
            parent_idx = heap_parent(idx)
            if self._property(parent_idx, idx):
                break
            self.entries.swap(idx, parent_idx)
            idx = parent_idx

    def bulk_insert(self, values: Iterable[Any]):
        """
        Inserts as many of `values` as still fit, in O(n).

        Values are appended without regard to ordering and the heap property
        is re-established afterwards; values in excess of capacity are ignored.
        """
        available = self.capacity - self.count
        for value in islice(values, available):
            self.entries.set(self.count, value)
            self.count += 1

        for i in range(heap_parent(self.count - 1), -1, -1):
            self.heapify(i)

    def heapify(self, idx):
        """Restores the heap property for the subtree rooted at `idx`."""
        while True:
            left_idx = heap_left(idx)
            right_idx = heap_right(idx)

            if right_idx < self.count:
                # Both children exist; left wins ties
                smallest_idx = right_idx if self._compare(left_idx, right_idx) == 1 else left_idx
            elif left_idx < self.count:
                smallest_idx = left_idx
            else:
                return

            if self._property(idx, smallest_idx):
                return

            self.entries.swap(idx, smallest_idx)
            idx = smallest_idx

    def pop(self):
        """Extracts the minimum value, or returns None if the heap is empty."""
        if self.count == 0:
            return None

        extracted = self.entries.get(0)
        last_idx = self.count - 1
        self.entries.set(0, self.entries.get(last_idx))
        self.entries.clear(last_idx)
        self.count -= 1

        self.heapify(0)
        return extracted

    def peek(self):
        return self.entries.get(0) if self.count else None

    def length(self):
        return self.count

    def is_full(self):
        return self.count == self.capacity

    def to_list(self) -> List[Any]:
        # Heap order, not sorted order
        return [self.entries.get(i) for i in range(self.count)]

    def check_property(self) -> bool:
        for i in range(1, self.count):
            if not self._property(heap_parent(i), i):
                return False
        return True

    def free(self):
        """Releases the slot store. Stored handles are left to the caller."""
        self.entries.free()
        self.count = 0
        self.capacity = 0


def new_heap(capacity: int, comparator: Comparator) -> Optional[Heap]:
    """Returns a new heap, or None if its storage cannot be allocated."""
    try:
        return Heap(capacity, comparator)
    except MemoryError:
        print_(f"heap_.py: cannot allocate a heap of capacity {capacity}", level=logging.ERROR)
        return None
