"""Render a road network and a route with NetworkX + Matplotlib."""

from __future__ import annotations

from typing import Dict, Optional, Sequence, Tuple

import matplotlib.pyplot as plt
import networkx as nx

from .graph import Graph, Vertex
from .lights import LightState

_STATE_COLORS = {
    LightState.GREEN: "tab:green",
    LightState.YELLOW: "gold",
    LightState.RED: "tab:red",
}


def layout_positions(G: Graph, layout: str = "spring", seed: int = 42) -> Dict[Vertex, Tuple[float, float]]:
    """Return node positions.

    Coordinates are used as ``(lon, lat)`` when every junction has them;
    otherwise the requested NetworkX layout is computed.
    """
    junctions = G.junctions()
    if junctions and all(j.coords is not None for j in junctions):
        return {i: (j.coords[1], j.coords[0]) for i, j in enumerate(junctions)}  # type: ignore[index]
    nxg = nx.Graph(G.to_networkx())
    if layout == "spring":
        return nx.spring_layout(nxg, seed=seed)
    if layout == "kamada_kawai":
        return nx.kamada_kawai_layout(nxg)
    if layout == "shell":
        return nx.shell_layout(nxg)
    raise ValueError(f"Unknown layout: {layout}")


def plot_network(
    G: Graph,
    path: Optional[Sequence[Vertex]] = None,
    *,
    at_time: int = 0,
    layout: str = "spring",
    show_weights: bool = True,
    node_size: int = 400,
    out: Optional[str] = None,
):
    """Draw junctions coloured by their light state at ``at_time``.

    Args:
        G: Road network.
        path: Optional route to highlight in red.
        at_time: Clock value used to colour the lights.
        layout: NetworkX layout used when coordinates are missing.
        show_weights: Render road weights.
        node_size: Marker size.
        out: Save the figure here instead of leaving it open.

    Returns:
        The Matplotlib figure.
    """
    nxg = nx.Graph(G.to_networkx())
    pos = layout_positions(G, layout=layout)

    fig, ax = plt.subplots(figsize=(12, 10))
    node_colors = [_STATE_COLORS[G.light(v).state_at(at_time)] for v in nxg.nodes]
    nx.draw_networkx_nodes(nxg, pos, node_color=node_colors, node_size=node_size, alpha=0.9, ax=ax)
    nx.draw_networkx_edges(nxg, pos, width=1.2, alpha=0.6, ax=ax)
    nx.draw_networkx_labels(
        nxg,
        pos,
        labels={v: G.name(v) for v in nxg.nodes},
        font_size=8,
        ax=ax,
    )

    if path and len(path) > 1:
        route_edges = list(zip(path, path[1:]))
        nx.draw_networkx_edges(nxg, pos, edgelist=route_edges, width=4, edge_color="red", ax=ax)

    if show_weights:
        # Parallel roads collapse in nx.Graph; label the cheapest one.
        labels: Dict[Tuple[Vertex, Vertex], int] = {}
        for u, v, w in G.edges():
            if u == v:
                continue
            key = (min(u, v), max(u, v))
            labels[key] = min(w, labels.get(key, w))
        nx.draw_networkx_edge_labels(nxg, pos, edge_labels=labels, font_size=7, ax=ax)

    ax.set_title(f"Road network (lights at t={at_time})", fontsize=14)
    ax.axis("off")
    fig.tight_layout()
    if out:
        fig.savefig(out)
        plt.close(fig)
    return fig


__all__ = ["layout_positions", "plot_network"]
