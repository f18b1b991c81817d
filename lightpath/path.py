"""Utilities for reconstructing and re-costing routes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence

from .exceptions import InputError
from .graph import Graph, Vertex
from .lights import wait_time


@dataclass(frozen=True)
class Leg:
    """One hop of a route.

    Attributes:
        source: Junction the hop leaves from.
        target: Junction the hop enters.
        weight: Road travel time.
        wait: Delay at the light of ``target``.
        elapsed: Time since departure once the light at ``target`` is passed.
    """

    source: Vertex
    target: Vertex
    weight: int
    wait: int
    elapsed: int


def reconstruct_path(
    parents: Sequence[Optional[Vertex]],
    source: Vertex,
    target: Vertex,
) -> List[Vertex]:
    """Return the path from ``source`` to ``target`` using a parent array.

    Args:
        parents: Parent of each vertex, ``None`` for the root and unreached
            vertices.
        source: Source vertex identifier.
        target: Target vertex identifier.

    Returns:
        Vertices from source to target (inclusive). Returns an empty list if
        the parent chain of ``target`` does not lead back to ``source``.
    """
    if not (0 <= source < len(parents) and 0 <= target < len(parents)):
        raise InputError("source/target out of range.")
    if source == target:
        return [source]

    chain: List[Vertex] = []
    cur: Optional[Vertex] = target
    seen = set()
    while cur is not None:
        chain.append(cur)
        if cur == source:
            chain.reverse()
            return chain
        if cur in seen:
            break
        seen.add(cur)
        cur = parents[cur]
    return []


def leg_breakdown(graph: Graph, path: Sequence[Vertex], start_time: int = 0) -> List[Leg]:
    """Split ``path`` into legs, re-deriving each wait independently.

    For parallel roads between two junctions the one giving the earliest
    departure from the next light is used.

    Raises:
        InputError: If ``path`` is empty or two consecutive junctions are not
            connected by a road.
    """
    if not path:
        raise InputError("path must contain at least one junction.")
    legs: List[Leg] = []
    elapsed = 0
    for u, v in zip(path, path[1:]):
        best: Optional[Leg] = None
        light = graph.light(v)
        for nbr, w in graph.neighbors(u):
            if nbr != v:
                continue
            wait = wait_time(light, start_time + elapsed + w)
            total = elapsed + w + wait
            if best is None or total < best.elapsed:
                best = Leg(u, v, w, wait, total)
        if best is None:
            raise InputError(f"no road between {u} and {v}.")
        legs.append(best)
        elapsed = best.elapsed
    return legs


def route_cost(graph: Graph, path: Sequence[Vertex], start_time: int = 0) -> int:
    """Return the total travel time along ``path`` including light waits."""
    legs = leg_breakdown(graph, path, start_time)
    return legs[-1].elapsed if legs else 0


__all__ = ["Leg", "leg_breakdown", "reconstruct_path", "route_cost"]
