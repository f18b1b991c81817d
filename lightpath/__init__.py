"""Public package exports for :mod:`lightpath`."""

from __future__ import annotations

from .exceptions import (
    AlgorithmError,
    CapacityError,
    ConfigError,
    EmptyHeapError,
    GraphFormatError,
    InputError,
    InvalidIndexError,
    LightpathError,
)
from .export import export_dot, export_leaflet_html, export_route_json
from .generator import CityConfig, generate_city
from .graph import DEFAULT_CAPACITY, Graph, GraphBuilder, Junction
from .heap import IndexedMinHeap
from .io import read_graph, write_graph
from .lights import LightState, TrafficLight, wait_time
from .logger import Logger, NoopLogger, StdLogger
from .path import Leg, leg_breakdown, reconstruct_path, route_cost
from .solver import (
    NoPath,
    Route,
    RouteResult,
    SolverConfig,
    SolverMetrics,
    SolverState,
    TimeDependentSolver,
    all_distances,
    shortest_path,
)

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_CAPACITY",
    "Graph",
    "GraphBuilder",
    "Junction",
    "TrafficLight",
    "LightState",
    "wait_time",
    "IndexedMinHeap",
    "TimeDependentSolver",
    "SolverConfig",
    "SolverMetrics",
    "SolverState",
    "Route",
    "NoPath",
    "RouteResult",
    "shortest_path",
    "all_distances",
    "Leg",
    "leg_breakdown",
    "reconstruct_path",
    "route_cost",
    "read_graph",
    "write_graph",
    "export_dot",
    "export_leaflet_html",
    "export_route_json",
    "CityConfig",
    "generate_city",
    "Logger",
    "NoopLogger",
    "StdLogger",
    "LightpathError",
    "InputError",
    "InvalidIndexError",
    "GraphFormatError",
    "CapacityError",
    "ConfigError",
    "AlgorithmError",
    "EmptyHeapError",
]
