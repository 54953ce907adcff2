import threading

import numpy as np
import pytest

import selection
from heap_ import Heap
from matches import Match
from selection import consider, drain, select_top, select_top_threads
from utils import compare_long, compare_match


def random_matches(n, seed=3):
    rng = np.random.default_rng(seed)
    scores = rng.integers(0, 20, size=n)
    return [Match(id_=i, path=f"file_{i}.txt", score=float(score)) for i, score in enumerate(scores)]


def expected_top(matches, limit):
    return sorted(matches, key=lambda m: (-m.score, m.id))[:limit]


def test_compare_match_orders_worst_first():
    low = Match(0, "a", 1.0)
    high = Match(1, "b", 2.0)
    tie_late = Match(5, "c", 2.0)
    assert compare_match(low, high) == -1
    assert compare_match(high, low) == 1
    assert compare_match(tie_late, high) == -1
    assert compare_match(high, high) == 0


def test_consider_replaces_worst_only_when_better():
    heap = Heap(2, compare_long)
    for value in [5, 7]:
        consider(heap, value)

    consider(heap, 3)
    assert sorted(heap.to_list()) == [5, 7]

    consider(heap, 9)
    assert sorted(heap.to_list()) == [7, 9]

    consider(heap, 7)
    assert sorted(heap.to_list()) == [7, 9]


def test_drain_empties_heap_in_ascending_order():
    heap = Heap(4, compare_long)
    heap.bulk_insert([4, 2, 3, 1])
    assert drain(heap) == [1, 2, 3, 4]
    assert heap.count == 0


def test_select_top_returns_best_first():
    matches = random_matches(500)
    results = select_top(matches, 10)
    assert [m.id for m in results] == [m.id for m in expected_top(matches, 10)]


def test_select_top_with_limit_above_stream_size():
    matches = random_matches(5)
    results = select_top(matches, 50)
    assert [m.id for m in results] == [m.id for m in expected_top(matches, 5)]


def test_select_top_with_zero_limit():
    assert select_top(random_matches(10), 0) == []


def test_select_top_raises_when_heap_cannot_be_allocated(monkeypatch):
    monkeypatch.setattr(selection, "new_heap", lambda capacity, comparator: None)
    with pytest.raises(MemoryError):
        select_top(random_matches(3), 2)


@pytest.mark.parametrize("n_threads", [1, 3, 8])
def test_threaded_selection_matches_single_heap(n_threads):
    matches = random_matches(1000, seed=n_threads)
    threaded = select_top_threads(matches, 25, n_threads=n_threads)
    single = select_top(matches, 25)
    assert [m.id for m in threaded] == [m.id for m in single]


def test_threaded_selection_with_more_threads_than_matches():
    matches = random_matches(3)
    results = select_top_threads(matches, 10, n_threads=6)
    assert [m.id for m in results] == [m.id for m in expected_top(matches, 3)]


def test_threaded_selection_of_empty_stream():
    assert select_top_threads([], 5, n_threads=2) == []


def test_threaded_selection_rejects_bad_thread_count():
    with pytest.raises(ValueError):
        select_top_threads(random_matches(3), 2, n_threads=0)


def failing_on_call(n):
    calls = []

    def comparator(a, b):
        calls.append(1)
        if len(calls) >= n:
            raise ValueError("comparator failed")
        return compare_match(a, b)

    return comparator


@pytest.mark.parametrize("n_threads", [1, 4])
def test_threaded_selection_reraises_worker_error(n_threads):
    matches = [Match(id_=i, path=f"file_{i}.txt", score=float(i)) for i in range(100)]
    with pytest.raises(ValueError, match="comparator failed"):
        select_top_threads(matches, 5, comparator=failing_on_call(5), n_threads=n_threads)


def test_concurrent_threaded_selections_are_independent():
    matches = random_matches(400, seed=21)
    expected = [m.id for m in select_top(matches, 10)]
    results = [None] * 4

    def run(slot):
        results[slot] = [m.id for m in select_top_threads(matches, 10, n_threads=3)]

    threads = [threading.Thread(target=run, args=(slot,)) for slot in range(4)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert results == [expected] * 4
