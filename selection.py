import threading
from typing import List, Sequence

from heap_ import Heap, new_heap
from utils import compare_match

N_THREADS = 4


class SelectionParams:
    def __init__(self):
        self.limit = 0
        self.n_threads = N_THREADS


def consider(heap: Heap, match):
    """
    Offers `match` to a heap whose root is the worst match kept so far.

    The heap drops inserts once full, so the worst match is replaced here
    only when `match` ranks strictly above it.
    """
    if not heap.is_full():
        heap.insert(match)
    elif heap.count and heap.comparator(match, heap.peek()) == 1:
        heap.pop()
        heap.insert(match)


def drain(heap: Heap) -> List:
    """Extracts every value from `heap`, smallest first."""
    values = []
    while heap.length() != 0:
        values.append(heap.pop())
    return values


def _allocate_heap(capacity, comparator) -> Heap:
    heap = new_heap(capacity, comparator)
    if heap is None:
        raise MemoryError(f"Cannot allocate a selection heap of capacity {capacity}")
    return heap


def select_top(matches: Sequence, limit: int, comparator=compare_match) -> List:
    """Returns the best `limit` matches, best first."""
    heap = _allocate_heap(limit, comparator)
    for match in matches:
        consider(heap, match)

    results = drain(heap)
    heap.free()
    results.reverse()
    return results


def select_top_threads(matches: Sequence, limit: int, comparator=compare_match, n_threads=N_THREADS) -> List:
    """
    Same result as `select_top`, with the candidates split across threads.

    Every worker owns its heap; the workers' survivors are merged with a
    single bulk insert before the final drain. The first exception raised
    in a worker is re-raised here once all workers have stopped.
    """
    if n_threads < 1:
        raise ValueError(f"n_threads must be at least 1, got {n_threads}")

    n_matches = len(matches)
    chunk = max(1, -(-n_matches // n_threads))
    jobs = [(start, min(start + chunk, n_matches)) for start in range(0, n_matches, chunk)]
    jobs_mutex = threading.Lock()
    errors = []
    heaps = [_allocate_heap(limit, comparator) for _ in range(n_threads)]

    def selection_thread(heap):
        while True:
            with jobs_mutex:
                if not jobs:
                    return
                start, end = jobs.pop()
            try:
                for i in range(start, end):
                    consider(heap, matches[i])
            except Exception as e:
                with jobs_mutex:
                    errors.append(e)
                    # Remaining jobs are abandoned
                    jobs.clear()
                return

    threads = []
    for heap in heaps:
        thread = threading.Thread(target=selection_thread, args=(heap,))
        threads.append(thread)
        thread.start()

    for thread in threads:
        thread.join()

    if errors:
        for heap in heaps:
            heap.free()
        raise errors[0]

    merged = _allocate_heap(limit * n_threads, comparator)
    survivors = []
    for heap in heaps:
        survivors.extend(heap.to_list())
        heap.free()
    merged.bulk_insert(survivors)

    results = drain(merged)
    merged.free()
    results.reverse()
    return results[:limit]
