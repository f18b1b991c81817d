"""Indexed binary min-heap keyed by junction id."""

from __future__ import annotations

from typing import Generic, List, Optional, Tuple, TypeVar

from .exceptions import AlgorithmError, EmptyHeapError, InvalidIndexError

Vertex = int
P = TypeVar("P")

ABSENT = -1


class IndexedMinHeap(Generic[P]):
    """Binary min-heap over vertex ids ``0 .. capacity-1``.

    Alongside the heap array a position index maps every vertex to its slot,
    or to :data:`ABSENT` once it has been extracted (or was never pushed).
    That index is what makes :meth:`decrease_key` by vertex identity
    ``O(log n)``.

    Entries are ordered by ``(priority, vertex)`` so that equal priorities
    always pop the lowest vertex id first, independently of insertion order.

    Args:
        capacity: Number of distinct vertex ids the heap can hold.
    """

    def __init__(self, capacity: int) -> None:
        if capacity < 0:
            raise ValueError("capacity must be non-negative.")
        self.capacity = capacity
        self._slots: List[Vertex] = []
        self._pos: List[int] = [ABSENT] * capacity
        self._prio: List[Optional[P]] = [None] * capacity

    @classmethod
    def filled(cls, capacity: int, priority: P) -> "IndexedMinHeap[P]":
        """Return a heap holding every vertex id at the same ``priority``."""
        heap: IndexedMinHeap[P] = cls(capacity)
        for v in range(capacity):
            heap.push(v, priority)
        return heap

    # ---- internals ----------------------------------------------------

    def _key(self, slot: int) -> Tuple[P, Vertex]:
        v = self._slots[slot]
        return (self._prio[v], v)  # type: ignore[return-value]

    def _swap(self, i: int, j: int) -> None:
        a, b = self._slots[i], self._slots[j]
        self._slots[i], self._slots[j] = b, a
        self._pos[a] = j
        self._pos[b] = i

    def _sift_up(self, i: int) -> None:
        while i > 0:
            parent = (i - 1) // 2
            if not self._key(i) < self._key(parent):
                break
            self._swap(i, parent)
            i = parent

    def _sift_down(self, i: int) -> None:
        size = len(self._slots)
        while True:
            smallest = i
            left = 2 * i + 1
            right = left + 1
            if left < size and self._key(left) < self._key(smallest):
                smallest = left
            if right < size and self._key(right) < self._key(smallest):
                smallest = right
            if smallest == i:
                return
            self._swap(i, smallest)
            i = smallest

    def _check_vertex(self, vertex: Vertex) -> None:
        if not (0 <= vertex < self.capacity):
            raise InvalidIndexError(f"vertex {vertex} outside [0, {self.capacity}).")

    # ---- public API ---------------------------------------------------

    def push(self, vertex: Vertex, priority: P) -> None:
        """Insert ``vertex`` with ``priority``.

        Raises:
            InvalidIndexError: If ``vertex`` is outside ``[0, capacity)``.
            AlgorithmError: If ``vertex`` is already present.
        """
        self._check_vertex(vertex)
        if self._pos[vertex] != ABSENT:
            raise AlgorithmError(f"vertex {vertex} is already in the heap.")
        self._prio[vertex] = priority
        self._slots.append(vertex)
        self._pos[vertex] = len(self._slots) - 1
        self._sift_up(len(self._slots) - 1)

    def extract_min(self) -> Tuple[Vertex, P]:
        """Remove and return the ``(vertex, priority)`` pair with the smallest key.

        The last entry replaces the root and sinks into place; the extracted
        vertex is marked absent.

        Raises:
            EmptyHeapError: If the heap is empty.
        """
        if not self._slots:
            raise EmptyHeapError("extract_min on an empty heap.")
        root = self._slots[0]
        last = self._slots.pop()
        if self._slots:
            self._slots[0] = last
            self._pos[last] = 0
            self._sift_down(0)
        self._pos[root] = ABSENT
        return root, self._prio[root]  # type: ignore[return-value]

    def decrease_key(self, vertex: Vertex, priority: P) -> bool:
        """Lower the priority of ``vertex`` and restore the heap order.

        Nothing happens when ``vertex`` is absent (already extracted or never
        pushed) or when ``priority`` is not smaller than its current one.

        Returns:
            ``True`` if the key changed.
        """
        if not (0 <= vertex < self.capacity):
            return False
        i = self._pos[vertex]
        if i == ABSENT:
            return False
        if not priority < self._prio[vertex]:  # type: ignore[operator]
            return False
        self._prio[vertex] = priority
        self._sift_up(i)
        return True

    def contains(self, vertex: Vertex) -> bool:
        """Return ``True`` while ``vertex`` is still in the heap."""
        return 0 <= vertex < self.capacity and self._pos[vertex] != ABSENT

    __contains__ = contains

    def peek(self) -> Tuple[Vertex, P]:
        """Return the minimum entry without removing it."""
        if not self._slots:
            raise EmptyHeapError("peek on an empty heap.")
        root = self._slots[0]
        return root, self._prio[root]  # type: ignore[return-value]

    def priority_of(self, vertex: Vertex) -> P:
        """Return the current priority of a vertex still in the heap."""
        if not self.contains(vertex):
            raise KeyError(vertex)
        return self._prio[vertex]  # type: ignore[return-value]

    def is_empty(self) -> bool:
        return not self._slots

    def __len__(self) -> int:
        return len(self._slots)

    def validate(self) -> None:
        """Check the heap property and the position index.

        Raises:
            AlgorithmError: On the first inconsistency found.
        """
        size = len(self._slots)
        for i, v in enumerate(self._slots):
            if self._pos[v] != i:
                raise AlgorithmError(f"position index of vertex {v} is {self._pos[v]}, expected {i}.")
            for child in (2 * i + 1, 2 * i + 2):
                if child < size and self._key(child) < self._key(i):
                    raise AlgorithmError(f"heap order violated between slots {i} and {child}.")
        present = sum(1 for p in self._pos if p != ABSENT)
        if present != size:
            raise AlgorithmError(f"{present} vertices indexed but heap holds {size}.")


__all__ = ["ABSENT", "IndexedMinHeap"]
