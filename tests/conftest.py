"""Shared fixtures for the test-suite."""

import matplotlib

matplotlib.use("Agg")

import pytest

from lightpath.graph import GraphBuilder
from lightpath.lights import TrafficLight


@pytest.fixture
def line_city():
    """A -- B -- C, roads of weight 10, every light (red=5, green=5)."""
    b = GraphBuilder()
    for name in "ABC":
        b.add_vertex(name, TrafficLight(red=5, green=5, yellow=0))
    b.add_edge(0, 1, 10)
    b.add_edge(1, 2, 10)
    return b.build()


@pytest.fixture
def detour_city():
    """Diamond where the short road leads to a long red light.

    ::

        A --1-- B(red 10) --1-- D
        A --3-- C(green) ---1-- D
    """
    b = GraphBuilder()
    b.add_vertex("A")
    b.add_vertex("B", TrafficLight(red=10, green=0, yellow=0))
    b.add_vertex("C")
    b.add_vertex("D")
    b.add_edge(0, 1, 1)
    b.add_edge(1, 3, 1)
    b.add_edge(0, 2, 3)
    b.add_edge(2, 3, 1)
    return b.build()
