"""Export utilities for road networks and routes."""

from __future__ import annotations

import json
from typing import List, Optional, Sequence, Set, Tuple

from .graph import Graph, Vertex
from .path import leg_breakdown
from .solver import RouteResult

# Centre of India, used when no junction has coordinates.
DEFAULT_CENTER = (22.5937, 78.9629)


def _route_pairs(path: Optional[Sequence[Vertex]]) -> Set[Tuple[Vertex, Vertex]]:
    pairs: Set[Tuple[Vertex, Vertex]] = set()
    if path:
        for u, v in zip(path, path[1:]):
            pairs.add((min(u, v), max(u, v)))
    return pairs


def _dot_escape(text: str) -> str:
    return text.replace("\\", "\\\\").replace('"', '\\"')


def export_dot(G: Graph, path: Optional[Sequence[Vertex]] = None) -> str:
    """Return a GraphViz ``graph City`` document.

    Nodes are labelled with their name and light timings; each road appears
    once with its weight. Roads along ``path`` are drawn in red.
    """
    on_route = _route_pairs(path)
    lines: List[str] = ["graph City {", "  overlap=false;", "  splines=true;"]
    for i, junction in enumerate(G.junctions()):
        light = junction.light
        label = f"{_dot_escape(junction.name)}\\nR:{light.red} G:{light.green} Y:{light.yellow}"
        lines.append(f'  n{i} [label="{label}"];')
    drawn: Set[Tuple[Vertex, Vertex]] = set()
    for u, v, w in G.edges():
        key = (min(u, v), max(u, v))
        attrs = f'label="{w}"'
        if key in on_route and key not in drawn:
            attrs += ', color="red", penwidth=3'
            drawn.add(key)
        lines.append(f"  n{u} -- n{v} [{attrs}];")
    lines.append("}")
    return "\n".join(lines) + "\n"


def _js_name(name: str) -> str:
    return name.replace('"', "'").replace("\\", "'")


_LEAFLET_HEAD = (
    "<!doctype html><html><head><meta charset='utf-8'>"
    "<meta name='viewport' content='width=device-width, initial-scale=1'>"
    "<title>City Map</title>"
    "<link rel='stylesheet' href='https://unpkg.com/leaflet@1.9.4/dist/leaflet.css'/>"
    "<style>html,body,#map{height:100%;margin:0;} "
    ".edge-label{background:transparent;border:none;font-weight:600;}</style>"
    "</head><body><div id='map'></div>"
    "<script src='https://unpkg.com/leaflet@1.9.4/dist/leaflet.js'></script>"
    "<script>\n"
)

_LEAFLET_BODY = """\
var map = L.map('map').setView([%(lat)f, %(lon)f], 5);
L.tileLayer('https://{s}.tile.openstreetmap.org/{z}/{x}/{y}.png', {
  maxZoom: 18, attribution: '&copy; OpenStreetMap contributors'}).addTo(map);
function pt(id){ var n = nodes.find(function(x){ return x.id === id; }); return [n.lat, n.lon]; }
nodes.forEach(function(n){
  L.marker([n.lat, n.lon]).addTo(map).bindPopup('<b>' + n.name + '</b>');
});
edges.forEach(function(e){
  var a = pt(e.u), b = pt(e.v);
  L.polyline([a, b], {weight: 3, opacity: 0.6}).addTo(map);
  L.marker([(a[0] + b[0]) / 2, (a[1] + b[1]) / 2], {opacity: 0}).addTo(map)
    .bindTooltip(String(e.w), {permanent: true, direction: 'center', className: 'edge-label'});
});
if (sp.length > 1) {
  var coords = sp.map(pt);
  L.polyline(coords, {color: 'red', weight: 6, opacity: 0.9}).addTo(map).bindPopup('Shortest Path');
  map.fitBounds(coords, {padding: [40, 40]});
} else if (nodes.length > 0) {
  map.fitBounds(nodes.map(function(n){ return [n.lat, n.lon]; }), {padding: [40, 40]});
}
"""


def export_leaflet_html(G: Graph, path: Optional[Sequence[Vertex]] = None) -> str:
    """Return a self-contained Leaflet page showing the network and ``path``.

    Junctions without coordinates are placed at ``(0, 0)``.
    """
    nodes = []
    for i, junction in enumerate(G.junctions()):
        lat, lon = junction.coords if junction.coords is not None else (0.0, 0.0)
        nodes.append({"id": i, "name": _js_name(junction.name), "lat": lat, "lon": lon})
    edges = [{"u": u, "v": v, "w": w} for u, v, w in G.edges()]
    located = [j.coords for j in G.junctions() if j.coords is not None]
    if located:
        center = (
            sum(c[0] for c in located) / len(located),
            sum(c[1] for c in located) / len(located),
        )
    else:
        center = DEFAULT_CENTER

    parts = [
        _LEAFLET_HEAD,
        f"var nodes = {json.dumps(nodes)};\n",
        f"var edges = {json.dumps(edges)};\n",
        f"var sp = {json.dumps(list(path or []))};\n",
        _LEAFLET_BODY % {"lat": center[0], "lon": center[1]},
        "</script></body></html>\n",
    ]
    return "".join(parts)


def export_route_json(G: Graph, result: RouteResult, start_time: int = 0) -> str:
    """Return a JSON document describing ``result``.

    A found route lists its junction names and one entry per leg; an
    unreachable target yields ``"path": null``.
    """
    data = {
        "source": G.name(result.source),
        "target": G.name(result.target),
        "found": result.found,
        "distance": result.distance,
        "path": None,
        "legs": [],
    }
    if result.path is not None:
        data["path"] = [G.name(v) for v in result.path]
        data["legs"] = [
            {
                "from": G.name(leg.source),
                "to": G.name(leg.target),
                "weight": leg.weight,
                "wait": leg.wait,
                "elapsed": leg.elapsed,
            }
            for leg in leg_breakdown(G, result.path, start_time)
        ]
    return json.dumps(data, indent=2)


__all__ = ["export_dot", "export_leaflet_html", "export_route_json"]
