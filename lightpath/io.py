"""City network input/output helpers."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from .exceptions import CapacityError, GraphFormatError, InputError
from .graph import DEFAULT_CAPACITY, Graph, GraphBuilder, Road
from .lights import TrafficLight
from .logger import Logger, NoopLogger

DEFAULT_LIGHT = TrafficLight(red=10, green=5, yellow=2)


def _parse_junction(line: str) -> Optional[Tuple[str, TrafficLight, Optional[Tuple[float, float]]]]:
    """Parse ``name R G Y [lat lon]``; return ``None`` if the line is malformed."""
    parts = line.split()
    if len(parts) < 4:
        return None
    try:
        light = TrafficLight(int(parts[1]), int(parts[2]), int(parts[3]))
    except (ValueError, InputError):
        return None
    coords = None
    if len(parts) >= 6:
        try:
            coords = (float(parts[4]), float(parts[5]))
        except ValueError:
            coords = None
    return parts[0], light, coords


def _read_city(path: Path, capacity: int, logger: Logger) -> Graph:
    """Read the plain-text city format.

    Layout::

        V
        name red green yellow [lat lon]     (V lines)
        E
        u v w                                (E lines)

    A junction line that cannot be parsed gets the name ``J<i>`` and the
    default light ``(10, 5, 2)``. Roads with unknown endpoints or negative
    weights are logged and skipped. A missing or negative road count means the
    city has no roads.

    Raises:
        GraphFormatError: If the junction count is missing or invalid.
    """
    lines = [ln.strip() for ln in path.read_text(encoding="utf-8").splitlines()]
    lines = [ln for ln in lines if ln and not ln.startswith("#")]
    if not lines:
        raise GraphFormatError(f"{path}: empty city file")
    try:
        v_count = int(lines[0])
    except ValueError as exc:
        raise GraphFormatError(f"{path}: first line must be the junction count") from exc
    if v_count < 0:
        raise GraphFormatError(f"{path}: negative junction count {v_count}")

    builder = GraphBuilder(capacity=capacity, logger=logger)
    body = lines[1 : 1 + v_count]
    for i in range(v_count):
        parsed = _parse_junction(body[i]) if i < len(body) else None
        if parsed is None:
            logger.warning("junction_defaulted", index=i)
            builder.add_vertex(f"J{i}", DEFAULT_LIGHT)
        else:
            builder.add_vertex(*parsed)

    rest = lines[1 + v_count :]
    roads: List[Road] = []
    if rest:
        try:
            e_count = int(rest[0])
        except ValueError:
            e_count = 0
        for row in rest[1 : 1 + max(e_count, 0)]:
            parts = row.split()
            try:
                u, v, w = int(parts[0]), int(parts[1]), int(parts[2])
            except (IndexError, ValueError):
                break
            roads.append((u, v, w))
    builder.add_edges(roads)
    return builder.build()


def _write_city(path: Path, G: Graph) -> None:
    """Write ``G`` in the plain-text city format, one line per road."""
    lines: List[str] = [str(G.n)]
    for junction in G.junctions():
        light = junction.light
        row = f"{junction.name} {light.red} {light.green} {light.yellow}"
        if junction.coords is not None:
            row += f" {junction.coords[0]:.6f} {junction.coords[1]:.6f}"
        lines.append(row)
    roads = list(G.edges())
    lines.append(str(len(roads)))
    for u, v, w in roads:
        lines.append(f"{u} {v} {w}")
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")


def _read_json(path: Path, capacity: int, logger: Logger) -> Graph:
    """Read ``{"junctions": [...], "roads": [...]}``.

    Each junction is ``{"name", "red", "green", "yellow", "lat"?, "lon"?}``
    and each road ``{"u", "v", "w"}``. Roads whose ids or weight are not
    integers in range are logged and skipped rather than coerced.
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise GraphFormatError(f"{path}: invalid JSON ({exc})") from exc
    if not isinstance(data, dict) or "junctions" not in data:
        raise GraphFormatError(f"{path}: expected an object with a 'junctions' list")
    builder = GraphBuilder(capacity=capacity, logger=logger)
    for obj in data["junctions"]:
        try:
            light = TrafficLight(obj.get("red", 0), obj.get("green", 0), obj.get("yellow", 0))
            coords = None
            if obj.get("lat") is not None and obj.get("lon") is not None:
                coords = (float(obj["lat"]), float(obj["lon"]))
            builder.add_vertex(str(obj["name"]), light, coords)
        except CapacityError:
            raise
        except (AttributeError, KeyError, TypeError, ValueError) as exc:
            raise GraphFormatError(f"{path}: bad junction {obj!r}") from exc
    roads: List[Road] = []
    for obj in data.get("roads", []):
        try:
            roads.append((obj["u"], obj["v"], obj["w"]))
        except (KeyError, TypeError) as exc:
            raise GraphFormatError(f"{path}: bad road {obj!r}") from exc
    builder.add_edges(roads)
    return builder.build()


def graph_to_dict(G: Graph) -> Dict[str, Any]:
    """Return the JSON-serialisable form used by :func:`_write_json`."""
    junctions = []
    for junction in G.junctions():
        obj: Dict[str, Any] = {
            "name": junction.name,
            "red": junction.light.red,
            "green": junction.light.green,
            "yellow": junction.light.yellow,
        }
        if junction.coords is not None:
            obj["lat"], obj["lon"] = junction.coords
        junctions.append(obj)
    roads = [{"u": u, "v": v, "w": w} for u, v, w in G.edges()]
    return {"junctions": junctions, "roads": roads}


def _write_json(path: Path, G: Graph) -> None:
    path.write_text(json.dumps(graph_to_dict(G), indent=2) + "\n", encoding="utf-8")


_FMT_READERS = {
    "city": _read_city,
    "json": _read_json,
}

_FMT_WRITERS = {
    "city": _write_city,
    "json": _write_json,
}


def _detect_format(path: Path) -> Optional[str]:
    """Detect the file format from the extension (``.json`` or ``.txt``/``.city``)."""
    ext = path.suffix.lower()
    if ext == ".json":
        return "json"
    if ext in {".txt", ".city", ""}:
        return "city"
    return None


def read_graph(
    path: str,
    fmt: Optional[str] = None,
    capacity: int = DEFAULT_CAPACITY,
    logger: Logger | None = None,
) -> Graph:
    """Read a city network from ``path``.

    Args:
        path: File to read.
        fmt: ``"city"`` or ``"json"``; auto-detected when ``None``.
        capacity: Maximum number of junctions accepted.
        logger: Receives warnings about skipped roads and defaulted junctions.

    Raises:
        InputError: If the file does not exist.
        GraphFormatError: If the format is unknown or the file is malformed.
        CapacityError: If the file holds more junctions than ``capacity``.
    """
    p = Path(path)
    if not p.exists():
        raise InputError(f"city file not found: {path}")
    fmt = fmt or _detect_format(p)
    if fmt is None or fmt not in _FMT_READERS:
        raise GraphFormatError("unknown city file format")
    return _FMT_READERS[fmt](p, capacity, logger or NoopLogger())


def write_graph(G: Graph, path: str, fmt: Optional[str] = None) -> None:
    """Write ``G`` to ``path`` in ``fmt`` (auto-detected when ``None``).

    Raises:
        GraphFormatError: If the format is unknown.
    """
    p = Path(path)
    fmt = fmt or _detect_format(p)
    if fmt is None or fmt not in _FMT_WRITERS:
        raise GraphFormatError("unknown city file format")
    _FMT_WRITERS[fmt](p, G)


__all__ = ["DEFAULT_LIGHT", "graph_to_dict", "read_graph", "write_graph"]
