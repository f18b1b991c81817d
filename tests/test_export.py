"""
Tests for DOT, Leaflet and JSON exports.
"""

import json

from lightpath.export import export_dot, export_leaflet_html, export_route_json
from lightpath.graph import GraphBuilder
from lightpath.solver import NoPath, shortest_path


class TestExportDot:
    """Tests for export_dot."""

    def test_nodes_and_edges(self, line_city):
        dot = export_dot(line_city)
        assert dot.startswith("graph City {")
        assert 'n1 [label="B\\nR:5 G:5 Y:0"];' in dot
        assert '  n0 -- n1 [label="10"];' in dot
        assert dot.count(" -- ") == 2
        assert "color" not in dot

    def test_route_is_highlighted(self, detour_city):
        dot = export_dot(detour_city, [0, 2, 3])
        assert 'n0 -- n2 [label="3", color="red", penwidth=3];' in dot
        assert 'n2 -- n3 [label="1", color="red", penwidth=3];' in dot
        assert 'n0 -- n1 [label="1"];' in dot


class TestExportLeaflet:
    """Tests for export_leaflet_html."""

    def test_contains_network_and_route(self, line_city):
        html = export_leaflet_html(line_city, [0, 1, 2])
        assert html.startswith("<!doctype html>")
        assert "var sp = [0, 1, 2];" in html
        assert '"name": "B"' in html
        assert '{"u": 1, "v": 2, "w": 10}' in html
        assert html.rstrip().endswith("</html>")

    def test_without_route(self, line_city):
        assert "var sp = [];" in export_leaflet_html(line_city)

    def test_centres_on_coordinates(self):
        b = GraphBuilder()
        b.add_vertex("P", coords=(10.0, 20.0))
        b.add_vertex("Q", coords=(12.0, 22.0))
        html = export_leaflet_html(b.build())
        assert "setView([11.000000, 21.000000], 5)" in html

    def test_quotes_in_names_are_neutralised(self):
        b = GraphBuilder()
        b.add_vertex('Main "St"')
        html = export_leaflet_html(b.build())
        assert "Main 'St'" in html


class TestExportRouteJson:
    """Tests for export_route_json."""

    def test_found(self, line_city):
        result = shortest_path(line_city, 0, 2)
        data = json.loads(export_route_json(line_city, result))
        assert data["found"] is True
        assert data["distance"] == 20
        assert data["path"] == ["A", "B", "C"]
        assert [leg["elapsed"] for leg in data["legs"]] == [10, 20]

    def test_no_path(self):
        b = GraphBuilder()
        b.add_vertex("A")
        b.add_vertex("B")
        g = b.build()
        data = json.loads(export_route_json(g, NoPath(0, 1)))
        assert data["found"] is False
        assert data["distance"] is None
        assert data["path"] is None
        assert data["legs"] == []
