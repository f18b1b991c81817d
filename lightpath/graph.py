"""Road network model: junctions, symmetric roads and their builder."""

from __future__ import annotations

import numbers
from dataclasses import dataclass, replace
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple

import networkx as nx

from .exceptions import CapacityError, ConfigError, GraphFormatError, InvalidIndexError
from .lights import ALWAYS_GREEN, TrafficLight
from .logger import Logger, NoopLogger

Vertex = int
Weight = int
Arc = Tuple[Vertex, Weight]
Road = Tuple[Vertex, Vertex, Weight]
Coords = Tuple[float, float]

DEFAULT_CAPACITY = 50


@dataclass(frozen=True)
class Junction:
    """A named junction with its traffic light and optional coordinates.

    Attributes:
        name: Display name.
        light: Traffic light cycle governing entry delays.
        coords: ``(lat, lon)`` used by the map exporters only.
    """

    name: str
    light: TrafficLight = ALWAYS_GREEN
    coords: Optional[Coords] = None


def _check_weight(u: Vertex, v: Vertex, w: object) -> Weight:
    if isinstance(w, bool) or not isinstance(w, numbers.Integral):
        raise GraphFormatError(f"non-integer weight {w!r} on road ({u}, {v})")
    if w < 0:
        raise GraphFormatError(f"negative weight {w} on road ({u}, {v})")
    return int(w)


def _check_endpoint(u: object, n: int) -> Vertex:
    if isinstance(u, bool) or not isinstance(u, numbers.Integral):
        raise InvalidIndexError(f"junction id {u!r} is not an integer.")
    if not (0 <= u < n):
        raise InvalidIndexError(f"junction id {u} outside [0, {n}).")
    return int(u)


class Graph:
    """Immutable undirected road network.

    Every road ``(u, v, w)`` is realised as the two arcs ``u -> v`` and
    ``v -> u`` with the same weight. Self-loops and parallel roads are kept
    as given. Instances are produced by :class:`GraphBuilder` and never change
    afterwards; use :meth:`with_light` to derive a modified copy.

    Attributes:
        n: Number of junctions, ids ``0`` .. ``n-1``.
        capacity: Maximum number of junctions the graph was built against.
    """

    def __init__(
        self,
        junctions: Sequence[Junction],
        adj: Sequence[Sequence[Arc]],
        roads: Sequence[Road],
        capacity: int = DEFAULT_CAPACITY,
    ) -> None:
        self._junctions: Tuple[Junction, ...] = tuple(junctions)
        self._adj: Tuple[Tuple[Arc, ...], ...] = tuple(tuple(arcs) for arcs in adj)
        self._roads: Tuple[Road, ...] = tuple(roads)
        self.capacity = capacity

    @property
    def n(self) -> int:
        return len(self._junctions)

    @property
    def m(self) -> int:
        """Number of undirected roads."""
        return len(self._roads)

    def _check(self, u: Vertex) -> None:
        if not (0 <= u < self.n):
            raise InvalidIndexError(f"junction id {u} outside [0, {self.n}).")

    def neighbors(self, u: Vertex) -> Iterator[Arc]:
        """Return a fresh iterator over the ``(v, weight)`` arcs leaving ``u``.

        Raises:
            InvalidIndexError: If ``u`` is not a junction id.
        """
        self._check(u)
        return iter(self._adj[u])

    def degree(self, u: Vertex) -> int:
        """Return the number of arcs leaving ``u``."""
        self._check(u)
        return len(self._adj[u])

    def junction(self, u: Vertex) -> Junction:
        self._check(u)
        return self._junctions[u]

    def junctions(self) -> Tuple[Junction, ...]:
        return self._junctions

    def name(self, u: Vertex) -> str:
        return self.junction(u).name

    def light(self, u: Vertex) -> TrafficLight:
        return self.junction(u).light

    def edges(self) -> Iterator[Road]:
        """Iterate over every undirected road once, in insertion order."""
        return iter(self._roads)

    def index_of(self, name: str) -> Vertex:
        """Return the id of the first junction called ``name``.

        Raises:
            InvalidIndexError: If no junction has that name.
        """
        for i, junction in enumerate(self._junctions):
            if junction.name == name:
                return i
        raise InvalidIndexError(f"unknown junction {name!r}")

    def with_light(self, u: Vertex, light: TrafficLight) -> "Graph":
        """Return a copy of the graph where junction ``u`` uses ``light``."""
        self._check(u)
        junctions = list(self._junctions)
        junctions[u] = replace(junctions[u], light=light)
        return Graph(junctions, self._adj, self._roads, capacity=self.capacity)

    def to_networkx(self) -> nx.MultiGraph:
        """Return the network as a :class:`networkx.MultiGraph`.

        Nodes carry ``name``, ``red``, ``green``, ``yellow`` and, when known,
        ``lat``/``lon`` attributes; edges carry ``weight``.
        """
        G = nx.MultiGraph()
        for i, junction in enumerate(self._junctions):
            attrs = {
                "name": junction.name,
                "red": junction.light.red,
                "green": junction.light.green,
                "yellow": junction.light.yellow,
            }
            if junction.coords is not None:
                attrs["lat"], attrs["lon"] = junction.coords
            G.add_node(i, **attrs)
        for u, v, w in self._roads:
            G.add_edge(u, v, weight=w)
        return G

    @classmethod
    def from_roads(
        cls,
        junctions: Iterable[Junction],
        roads: Iterable[Road],
        capacity: int = DEFAULT_CAPACITY,
    ) -> "Graph":
        """Build a graph from junctions and ``(u, v, w)`` roads.

        Raises:
            InvalidIndexError: If a road references an unknown junction.
            GraphFormatError: If a road weight is negative or not an integer.
        """
        builder = GraphBuilder(capacity=capacity)
        for junction in junctions:
            builder.add_vertex(junction.name, junction.light, junction.coords)
        for u, v, w in roads:
            builder.add_edge(u, v, w)
        return builder.build()

    def __repr__(self) -> str:
        return f"Graph(n={self.n}, m={self.m})"


class GraphBuilder:
    """Accumulate junctions and roads, then freeze them into a :class:`Graph`.

    Args:
        capacity: Maximum number of junctions.
        logger: Receives a ``warning`` event for every road skipped by
            :meth:`add_edges`.

    Examples:
        ```python
        >>> b = GraphBuilder()
        >>> a = b.add_vertex("A")
        >>> c = b.add_vertex("B", TrafficLight(red=5, green=5))
        >>> b.add_edge(a, c, 10)
        >>> g = b.build()
        >>> list(g.neighbors(a))
        [(1, 10)]
        ```
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY, logger: Logger | None = None) -> None:
        if isinstance(capacity, bool) or not isinstance(capacity, int) or capacity <= 0:
            raise ConfigError("capacity must be a positive integer.")
        self.capacity = capacity
        self.logger = logger or NoopLogger()
        self._junctions: List[Junction] = []
        self._adj: List[List[Arc]] = []
        self._roads: List[Road] = []

    @property
    def n(self) -> int:
        return len(self._junctions)

    def add_vertex(
        self,
        name: str,
        light: TrafficLight | None = None,
        coords: Optional[Coords] = None,
    ) -> Vertex:
        """Add a junction and return its id.

        Raises:
            CapacityError: If the builder already holds ``capacity`` junctions.
        """
        if self.n >= self.capacity:
            raise CapacityError(f"cannot add {name!r}: capacity of {self.capacity} junctions reached.")
        self._junctions.append(Junction(name, light or ALWAYS_GREEN, coords))
        self._adj.append([])
        return self.n - 1

    def add_edge(self, u: Vertex, v: Vertex, weight: Weight) -> None:
        """Add the undirected road ``u -- v``.

        Raises:
            InvalidIndexError: If ``u`` or ``v`` is not an integer in ``[0, n)``.
            GraphFormatError: If ``weight`` is negative or not an integer.
        """
        u = _check_endpoint(u, self.n)
        v = _check_endpoint(v, self.n)
        w = _check_weight(u, v, weight)
        self._adj[u].append((v, w))
        self._adj[v].append((u, w))
        self._roads.append((u, v, w))

    def add_edges(self, roads: Iterable[Road]) -> List[Road]:
        """Add many roads, skipping those with bad endpoints or weights.

        Each skipped road is logged as a ``road_skipped`` warning carrying the
        reason; the remaining roads are still added.

        Returns:
            The roads that were rejected, in input order.
        """
        rejected: List[Road] = []
        for u, v, w in roads:
            try:
                self.add_edge(u, v, w)
            except (InvalidIndexError, GraphFormatError) as exc:
                self.logger.warning("road_skipped", u=u, v=v, weight=w, n=self.n, reason=str(exc))
                rejected.append((u, v, w))
        return rejected

    def build(self) -> Graph:
        """Return an immutable snapshot of what has been added so far."""
        return Graph(self._junctions, self._adj, self._roads, capacity=self.capacity)


__all__ = [
    "DEFAULT_CAPACITY",
    "Graph",
    "GraphBuilder",
    "Junction",
    "Vertex",
    "Weight",
    "Road",
]
