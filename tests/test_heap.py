"""
Tests for the indexed min-heap.
"""

import math
import random

import pytest

from lightpath.exceptions import AlgorithmError, EmptyHeapError, InvalidIndexError
from lightpath.heap import IndexedMinHeap


def _drain(heap):
    out = []
    while not heap.is_empty():
        out.append(heap.extract_min())
    return out


class TestIndexedMinHeap:
    """Tests for IndexedMinHeap."""

    def test_extracts_in_priority_order(self):
        heap = IndexedMinHeap(5)
        for v, p in [(0, 7), (1, 3), (2, 9), (3, 1), (4, 5)]:
            heap.push(v, p)
        assert _drain(heap) == [(3, 1), (1, 3), (4, 5), (0, 7), (2, 9)]

    def test_equal_priorities_pop_lowest_id_first(self):
        heap = IndexedMinHeap(4)
        for v in (3, 1, 2, 0):
            heap.push(v, 5)
        assert [v for v, _ in _drain(heap)] == [0, 1, 2, 3]

    def test_filled_then_decrease(self):
        heap = IndexedMinHeap.filled(4, math.inf)
        assert len(heap) == 4
        assert heap.decrease_key(2, 0)
        assert heap.peek() == (2, 0)
        assert heap.extract_min() == (2, 0)
        assert not heap.contains(2)
        assert heap.extract_min() == (0, math.inf)

    def test_extract_marks_absent(self):
        heap = IndexedMinHeap(2)
        heap.push(0, 1)
        heap.push(1, 2)
        assert 0 in heap
        heap.extract_min()
        assert 0 not in heap
        assert 1 in heap

    def test_decrease_key_on_absent_vertex_is_noop(self):
        heap = IndexedMinHeap.filled(3, 10)
        v, _ = heap.extract_min()
        assert not heap.decrease_key(v, 0)
        assert v not in heap
        heap.validate()
        assert [u for u, _ in _drain(heap)] == [1, 2]

    def test_decrease_key_ignores_larger_or_equal(self):
        heap = IndexedMinHeap(2)
        heap.push(0, 5)
        assert not heap.decrease_key(0, 5)
        assert not heap.decrease_key(0, 8)
        assert heap.priority_of(0) == 5

    def test_decrease_key_out_of_range_is_noop(self):
        heap = IndexedMinHeap(2)
        assert not heap.decrease_key(7, 0)
        assert not heap.contains(-1)

    def test_empty_extract(self):
        heap = IndexedMinHeap(1)
        with pytest.raises(EmptyHeapError):
            heap.extract_min()
        with pytest.raises(EmptyHeapError):
            heap.peek()

    def test_push_errors(self):
        heap = IndexedMinHeap(2)
        heap.push(0, 1)
        with pytest.raises(AlgorithmError):
            heap.push(0, 2)
        with pytest.raises(InvalidIndexError):
            heap.push(2, 1)

    def test_priority_of_missing(self):
        heap = IndexedMinHeap(1)
        with pytest.raises(KeyError):
            heap.priority_of(0)

    def test_validate_detects_corruption(self):
        heap = IndexedMinHeap(3)
        for v, p in [(0, 1), (1, 2), (2, 3)]:
            heap.push(v, p)
        heap._prio[0] = 99
        with pytest.raises(AlgorithmError):
            heap.validate()

    @pytest.mark.parametrize("seed", range(5))
    def test_invariant_holds_under_random_operations(self, seed):
        rnd = random.Random(seed)
        n = 40
        heap = IndexedMinHeap.filled(n, math.inf)
        current = {v: math.inf for v in range(n)}
        while not heap.is_empty():
            if rnd.random() < 0.3:
                v, p = heap.extract_min()
                assert p == min(current.values())
                assert p == current.pop(v)
            else:
                v = rnd.randrange(n)
                p = rnd.randrange(100)
                changed = heap.decrease_key(v, p)
                if v in current and p < current[v]:
                    assert changed
                    current[v] = p
                else:
                    assert not changed
            heap.validate()
        assert not current
