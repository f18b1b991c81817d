"""
Tests for the road network model and its builder.
"""

import io

import pytest

from lightpath.exceptions import CapacityError, ConfigError, GraphFormatError, InvalidIndexError
from lightpath.graph import Graph, GraphBuilder, Junction
from lightpath.lights import ALWAYS_GREEN, TrafficLight
from lightpath.logger import StdLogger


class TestGraphBuilder:
    """Tests for GraphBuilder."""

    def test_add_vertex_returns_dense_ids(self):
        b = GraphBuilder()
        assert b.add_vertex("A") == 0
        assert b.add_vertex("B") == 1
        assert b.n == 2

    def test_road_is_stored_both_ways(self):
        b = GraphBuilder()
        b.add_vertex("A")
        b.add_vertex("B")
        b.add_edge(0, 1, 7)
        g = b.build()
        assert list(g.neighbors(0)) == [(1, 7)]
        assert list(g.neighbors(1)) == [(0, 7)]
        assert list(g.edges()) == [(0, 1, 7)]

    @pytest.mark.parametrize("u,v", [(0, 2), (-1, 0), (5, 1)])
    def test_invalid_endpoints(self, u, v):
        b = GraphBuilder()
        b.add_vertex("A")
        b.add_vertex("B")
        with pytest.raises(InvalidIndexError):
            b.add_edge(u, v, 1)

    @pytest.mark.parametrize("w", [-1, 1.5, "3", True])
    def test_invalid_weights(self, w):
        b = GraphBuilder()
        b.add_vertex("A")
        b.add_vertex("B")
        with pytest.raises(GraphFormatError):
            b.add_edge(0, 1, w)

    def test_capacity_is_enforced(self):
        b = GraphBuilder(capacity=2)
        b.add_vertex("A")
        b.add_vertex("B")
        with pytest.raises(CapacityError):
            b.add_vertex("C")

    @pytest.mark.parametrize("capacity", [0, -3, 2.5])
    def test_invalid_capacity(self, capacity):
        with pytest.raises(ConfigError):
            GraphBuilder(capacity=capacity)

    def test_self_loops_and_parallel_roads_accumulate(self):
        b = GraphBuilder()
        b.add_vertex("A")
        b.add_vertex("B")
        b.add_edge(0, 0, 3)
        b.add_edge(0, 1, 4)
        b.add_edge(0, 1, 2)
        g = b.build()
        assert sorted(g.neighbors(0)) == [(0, 3), (0, 3), (1, 2), (1, 4)]
        assert g.degree(1) == 2
        assert g.m == 3

    def test_add_edges_skips_and_reports_bad_roads(self):
        stream = io.StringIO()
        b = GraphBuilder(logger=StdLogger(level="warning", stream=stream))
        b.add_vertex("A")
        b.add_vertex("B")
        rejected = b.add_edges([(0, 1, 5), (0, 9, 1), (1, 0, 2)])
        assert rejected == [(0, 9, 1)]
        assert b.build().m == 2
        assert "road_skipped" in stream.getvalue()

    def test_add_edges_skips_bad_weights_and_continues(self):
        stream = io.StringIO()
        b = GraphBuilder(logger=StdLogger(level="warning", stream=stream))
        b.add_vertex("A")
        b.add_vertex("B")
        rejected = b.add_edges([(0, 1, 5), (0, 1, -3), (1, 0, 2.5), (1, 0, 2)])
        assert rejected == [(0, 1, -3), (1, 0, 2.5)]
        assert list(b.build().edges()) == [(0, 1, 5), (1, 0, 2)]
        log = stream.getvalue()
        assert log.count("road_skipped") == 2
        assert "negative weight" in log
        assert "non-integer weight" in log

    @pytest.mark.parametrize("u,v", [(True, 0), (1.0, 0), (0, "1")])
    def test_non_integer_endpoints(self, u, v):
        b = GraphBuilder()
        b.add_vertex("A")
        b.add_vertex("B")
        with pytest.raises(InvalidIndexError):
            b.add_edge(u, v, 1)
        assert b.build().m == 0

    def test_build_is_a_snapshot(self):
        b = GraphBuilder()
        b.add_vertex("A")
        g = b.build()
        b.add_vertex("B")
        assert g.n == 1


class TestGraph:
    """Tests for the immutable Graph."""

    def test_neighbors_is_restartable(self, line_city):
        first = list(line_city.neighbors(1))
        second = list(line_city.neighbors(1))
        assert first == second
        assert sorted(first) == [(0, 10), (2, 10)]

    def test_neighbors_invalid_index(self, line_city):
        with pytest.raises(InvalidIndexError):
            line_city.neighbors(3)

    def test_junction_accessors(self, line_city):
        assert line_city.n == 3
        assert line_city.name(1) == "B"
        assert line_city.light(1) == TrafficLight(5, 5, 0)
        assert line_city.index_of("C") == 2
        with pytest.raises(InvalidIndexError):
            line_city.index_of("Z")

    def test_with_light_leaves_original_untouched(self, line_city):
        changed = line_city.with_light(1, ALWAYS_GREEN)
        assert changed.light(1) == ALWAYS_GREEN
        assert line_city.light(1) == TrafficLight(5, 5, 0)
        assert list(changed.edges()) == list(line_city.edges())

    def test_from_roads(self):
        g = Graph.from_roads(
            [Junction("A"), Junction("B", coords=(1.0, 2.0))],
            [(0, 1, 4)],
        )
        assert g.junction(1).coords == (1.0, 2.0)
        assert list(g.neighbors(1)) == [(0, 4)]

    def test_to_networkx(self, line_city):
        nxg = line_city.to_networkx()
        assert nxg.number_of_nodes() == 3
        assert nxg.number_of_edges() == 2
        assert nxg.nodes[1]["name"] == "B"
        assert nxg.nodes[1]["green"] == 5
