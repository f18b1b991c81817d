"""Synthetic city networks for experiments and tests.

Cities are laid out on a near-square grid (a planar backbone), a share of the
grid roads is dropped at random and a few diagonal shortcuts are added. Road
weights and light timings are sampled uniformly with NumPy.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

import networkx as nx
import numpy as np

from .exceptions import ConfigError
from .graph import DEFAULT_CAPACITY, Graph, GraphBuilder
from .lights import TrafficLight


@dataclass(frozen=True)
class CityConfig:
    """Parameters of :func:`generate_city`.

    Attributes:
        n: Number of junctions.
        keep_prob: Probability that a grid road is kept.
        shortcuts: Number of extra diagonal roads.
        w_min: Smallest road weight.
        w_max: Largest road weight.
        light_max: Upper bound of each red/green/yellow duration.
        origin: ``(lat, lon)`` of junction ``0``.
        spacing: Grid spacing in degrees.
    """

    n: int = 16
    keep_prob: float = 0.85
    shortcuts: int = 2
    w_min: int = 1
    w_max: int = 20
    light_max: int = 10
    origin: Tuple[float, float] = (28.6139, 77.2090)
    spacing: float = 0.01

    def __post_init__(self) -> None:
        """Validate parameter ranges."""
        if self.n <= 0:
            raise ConfigError("n must be > 0.")
        if not (0.0 <= self.keep_prob <= 1.0):
            raise ConfigError("keep_prob must be in [0, 1].")
        if self.shortcuts < 0:
            raise ConfigError("shortcuts must be >= 0.")
        if self.w_min < 0 or self.w_max < self.w_min:
            raise ConfigError("need 0 <= w_min <= w_max.")
        if self.light_max < 0:
            raise ConfigError("light_max must be >= 0.")


def generate_city(
    n: int = 16,
    seed: Optional[int] = 0,
    config: Optional[CityConfig] = None,
    capacity: int = DEFAULT_CAPACITY,
) -> Graph:
    """Generate a random city.

    Args:
        n: Number of junctions (ignored when ``config`` is given).
        seed: Seed for :func:`numpy.random.default_rng`.
        config: Full parameter set.
        capacity: Capacity of the resulting graph.

    Returns:
        An immutable :class:`Graph` named ``J0`` .. ``J{n-1}``.
    """
    cfg = config or CityConfig(n=n)
    if cfg.n > capacity:
        raise ConfigError(f"n={cfg.n} exceeds capacity {capacity}.")
    rng = np.random.default_rng(seed)

    rows = max(1, int(np.floor(np.sqrt(cfg.n))))
    cols = int(np.ceil(cfg.n / rows))
    grid = nx.grid_2d_graph(rows, cols)

    builder = GraphBuilder(capacity=capacity)
    for i in range(cfg.n):
        r, c = divmod(i, cols)
        red, green, yellow = (int(x) for x in rng.integers(0, cfg.light_max + 1, size=3))
        coords = (cfg.origin[0] + r * cfg.spacing, cfg.origin[1] + c * cfg.spacing)
        builder.add_vertex(f"J{i}", TrafficLight(red, green, yellow), coords)

    for (r1, c1), (r2, c2) in sorted(grid.edges()):
        u, v = r1 * cols + c1, r2 * cols + c2
        if u >= cfg.n or v >= cfg.n:
            continue
        if rng.random() <= cfg.keep_prob:
            builder.add_edge(u, v, int(rng.integers(cfg.w_min, cfg.w_max + 1)))

    for _ in range(cfg.shortcuts):
        if cfg.n < 2:
            break
        u, v = (int(x) for x in rng.choice(cfg.n, size=2, replace=False))
        builder.add_edge(u, v, int(rng.integers(cfg.w_min, cfg.w_max + 1)))

    return builder.build()


__all__ = ["CityConfig", "generate_city"]
