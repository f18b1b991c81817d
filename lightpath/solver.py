"""Time-dependent shortest paths through junctions with traffic lights.

The search is Dijkstra's algorithm with a modified relaxation rule: crossing
road ``u -> v`` of weight ``w`` reaches ``v`` at ``dist[u] + w`` and then
waits for the light of ``v`` to turn green. Waiting never lets a vehicle
overtake one that arrived earlier, so settled distances stay final and the
search may stop as soon as the target is extracted.
"""

from __future__ import annotations

import math
import time
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import ClassVar, Dict, List, Optional, Union

from .exceptions import ConfigError, InvalidIndexError
from .graph import Graph, Vertex
from .heap import IndexedMinHeap
from .lights import wait_time
from .logger import Logger, NoopLogger
from .path import reconstruct_path

INF = math.inf


class SolverState(Enum):
    """Lifecycle of a single shortest-path computation."""

    INITIALIZED = "initialized"
    RELAXING = "relaxing"
    FOUND = "found"
    UNREACHABLE = "unreachable"


@dataclass(frozen=True)
class SolverConfig:
    """Configuration knobs for the solver.

    Attributes:
        start_time: Clock value at departure. Light phases are evaluated at
            ``start_time + elapsed``; reported distances stay elapsed time.
        early_exit: Stop as soon as the target is settled. With ``False``
            every reachable junction is settled.
    """

    start_time: int = 0
    early_exit: bool = True

    def __post_init__(self) -> None:
        """Validate the option values."""
        if isinstance(self.start_time, bool) or not isinstance(self.start_time, int):
            raise ConfigError("start_time must be an integer.")
        if self.start_time < 0:
            raise ConfigError("start_time must be non-negative.")


@dataclass(frozen=True)
class Route:
    """A least-cost route.

    Attributes:
        distance: Total travel time including waits at lights.
        path: Junction ids from source to target inclusive.
        waits: Delay incurred at each junction of ``path`` (``0`` for the
            source).
    """

    distance: int
    path: List[Vertex]
    waits: List[int] = field(default_factory=list)

    found = True

    @property
    def source(self) -> Vertex:
        return self.path[0]

    @property
    def target(self) -> Vertex:
        return self.path[-1]

    @property
    def hops(self) -> int:
        return len(self.path) - 1


@dataclass(frozen=True)
class NoPath:
    """Result value for an unreachable target."""

    source: Vertex
    target: Vertex

    found = False
    distance = None
    path: ClassVar[Optional[List[Vertex]]] = None


RouteResult = Union[Route, NoPath]


@dataclass(frozen=True)
class SolverMetrics:
    """Performance metrics collected from a solver run."""

    n: int
    m: int
    state: str
    counters: Dict[str, int]
    wall_ms: float


class TimeDependentSolver:
    """Single-query solver from ``source`` to ``target``.

    Each instance owns its distance, parent and heap state; the graph is only
    read.

    Args:
        G: Road network.
        source: Departure junction.
        target: Destination junction.
        config: Optional solver configuration.
        logger: Receives ``solve_start`` (debug) and ``solve`` (info) events.

    Raises:
        InvalidIndexError: If ``source`` or ``target`` is outside ``[0, n)``.
    """

    def __init__(
        self,
        G: Graph,
        source: Vertex,
        target: Vertex,
        config: Optional[SolverConfig] = None,
        logger: Logger | None = None,
    ) -> None:
        n = G.n
        if not (0 <= source < n and 0 <= target < n):
            raise InvalidIndexError(f"source/target must be junction ids in [0, {n}).")
        self.G = G
        self.source = source
        self.target = target
        self.cfg = config or SolverConfig()
        self.logger = logger or NoopLogger()
        self.state = SolverState.INITIALIZED

        self.dist: List[float] = [INF] * n
        self.parent: List[Optional[Vertex]] = [None] * n
        self.wait: List[int] = [0] * n
        self.counters: Dict[str, int] = {
            "pops": 0,
            "edges_relaxed": 0,
            "decrease_keys": 0,
        }

    def _reset(self) -> None:
        n = self.G.n
        self.dist = [INF] * n
        self.parent = [None] * n
        self.wait = [0] * n
        for k in self.counters:
            self.counters[k] = 0

    def _relax(self, heap: IndexedMinHeap[float], u: Vertex, v: Vertex, w: int) -> bool:
        """Relax road ``u -> v`` with weight ``w``.

        Returns:
            ``True`` if ``v`` improved.
        """
        self.counters["edges_relaxed"] += 1
        arrival = self.dist[u] + w
        delay = wait_time(self.G.light(v), self.cfg.start_time + int(arrival))
        cand = arrival + delay
        if cand < self.dist[v]:
            self.dist[v] = cand
            self.parent[v] = u
            self.wait[v] = delay
            heap.decrease_key(v, cand)
            self.counters["decrease_keys"] += 1
            return True
        return False

    # ---------- public API ------------------------------------------------

    def solve(self) -> RouteResult:
        """Run the search and return a :class:`Route` or :class:`NoPath`."""
        self._reset()
        self.logger.debug(
            "solve_start",
            n=self.G.n,
            source=self.source,
            target=self.target,
            start_time=self.cfg.start_time,
        )
        self.dist[self.source] = 0

        heap: IndexedMinHeap[float] = IndexedMinHeap.filled(self.G.n, INF)
        heap.decrease_key(self.source, 0)
        self.state = SolverState.RELAXING

        while not heap.is_empty():
            u, du = heap.extract_min()
            self.counters["pops"] += 1
            if du == INF:
                break
            if self.cfg.early_exit and u == self.target:
                break
            for v, w in self.G.neighbors(u):
                if v in heap:
                    self._relax(heap, u, v, w)

        result = self._result()
        self.logger.info(
            "solve",
            source=self.source,
            target=self.target,
            state=self.state.value,
            distance=result.distance,
            **self.counters,
        )
        return result

    def _result(self) -> RouteResult:
        if self.dist[self.target] == INF:
            self.state = SolverState.UNREACHABLE
            return NoPath(self.source, self.target)
        path = reconstruct_path(self.parent, self.source, self.target)
        self.state = SolverState.FOUND
        return Route(
            distance=int(self.dist[self.target]),
            path=path,
            waits=[self.wait[v] for v in path],
        )

    def distances(self) -> List[float]:
        """Return tentative distances, ``inf`` for unreached junctions."""
        return list(self.dist)

    def summary(self) -> Dict[str, int]:
        """Return a copy of internal counter values."""
        return dict(self.counters)

    def metrics(self, wall_ms: float) -> SolverMetrics:
        """Return performance metrics for the most recent run."""
        return SolverMetrics(
            n=self.G.n,
            m=self.G.m,
            state=self.state.value,
            counters=self.summary(),
            wall_ms=wall_ms,
        )


def shortest_path(
    G: Graph,
    source: Vertex,
    target: Vertex,
    config: Optional[SolverConfig] = None,
    logger: Logger | None = None,
) -> RouteResult:
    """Compute the least-cost route from ``source`` to ``target``.

    Args:
        G: Road network.
        source: Departure junction.
        target: Destination junction.
        config: Optional solver configuration.
        logger: Optional logger.

    Returns:
        A :class:`Route` with the travel time and the junctions visited in
        order, or :class:`NoPath` if ``target`` cannot be reached.

    Raises:
        InvalidIndexError: If ``source`` or ``target`` is not a junction id.

    Examples:
        ```python
        >>> from lightpath.graph import GraphBuilder
        >>> from lightpath.lights import TrafficLight
        >>> b = GraphBuilder()
        >>> for name in "ABC":
        ...     _ = b.add_vertex(name, TrafficLight(red=5, green=5))
        >>> b.add_edge(0, 1, 10)
        >>> b.add_edge(1, 2, 10)
        >>> r = shortest_path(b.build(), 0, 2)
        >>> r.distance, r.path
        (20, [0, 1, 2])
        ```
    """
    return TimeDependentSolver(G, source, target, config=config, logger=logger).solve()


def all_distances(
    G: Graph,
    source: Vertex,
    config: Optional[SolverConfig] = None,
    logger: Logger | None = None,
) -> List[float]:
    """Return travel times from ``source`` to every junction (``inf`` if unreachable)."""
    cfg = replace(config or SolverConfig(), early_exit=False)
    solver = TimeDependentSolver(G, source, source, config=cfg, logger=logger)
    solver.solve()
    return solver.distances()


def timed_solve(solver: TimeDependentSolver) -> tuple[RouteResult, SolverMetrics]:
    """Run ``solver`` and return its result with wall-clock metrics."""
    t0 = time.perf_counter()
    result = solver.solve()
    wall_ms = (time.perf_counter() - t0) * 1000.0
    return result, solver.metrics(wall_ms=wall_ms)


__all__ = [
    "INF",
    "NoPath",
    "Route",
    "RouteResult",
    "SolverConfig",
    "SolverMetrics",
    "SolverState",
    "TimeDependentSolver",
    "all_distances",
    "shortest_path",
    "timed_solve",
]
