"""Command-line interface for routing through a city."""

from __future__ import annotations

import argparse
import json
import sys
import traceback
from dataclasses import asdict
from typing import List, Optional

from .exceptions import ConfigError, GraphFormatError, InputError, InvalidIndexError, LightpathError
from .export import export_dot, export_leaflet_html, export_route_json
from .generator import generate_city
from .graph import DEFAULT_CAPACITY, Graph, Vertex
from .io import read_graph, write_graph
from .logger import StdLogger
from .path import leg_breakdown
from .solver import Route, RouteResult, SolverConfig, TimeDependentSolver, timed_solve

EXAMPLE_CITY = """3
A 0 10 0 28.613900 77.209000
B 5 5 0 28.623900 77.209000
C 0 10 0 28.633900 77.209000
2
0 1 10
1 2 10
"""


def _resolve(G: Graph, token: str) -> Vertex:
    """Accept a junction name, or a junction id when no junction has that name."""
    token = token.strip()
    try:
        return G.index_of(token)
    except InvalidIndexError:
        if token.lstrip("-").isdigit():
            return int(token)
        raise


def _adjacency_listing(G: Graph) -> str:
    lines = ["City Map (Adjacency List):"]
    for u in range(G.n):
        arcs = " ".join(f"[{v},{w}]" for v, w in G.neighbors(u))
        lines.append(f"{u} ({G.name(u)}) -> {arcs}".rstrip())
    return "\n".join(lines) + "\n"


def _travel_summary(G: Graph, result: RouteResult, start_time: int) -> str:
    src, dst = G.name(result.source), G.name(result.target)
    if not isinstance(result, Route):
        return f"No path found from {src} to {dst}\n"
    lines = [f"Shortest Time from {src} to {dst} = {result.distance} units"]
    lines.append(" -> ".join(G.name(v) for v in result.path))
    for leg in leg_breakdown(G, result.path, start_time):
        lines.append(
            f"  {G.name(leg.source)} -> {G.name(leg.target)}: "
            f"road {leg.weight}, wait {leg.wait}, at {leg.elapsed}"
        )
    lines.append(f"Total Time Taken: {result.distance} units")
    return "\n".join(lines) + "\n"


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the ``lightpath`` command-line tool."""
    examples = (
        "Examples:\n"
        "  lightpath --city city.txt --source 0 --target 2\n"
        "  lightpath --city city.json --source A --target C --export-html map.html\n"
        "  lightpath --random --n 25 --source 0 --target 24 --plot route.png\n"
    )
    p = argparse.ArgumentParser(
        prog="lightpath",
        description="Least-time routes through junctions with traffic lights",
        epilog=examples,
        formatter_class=argparse.RawTextHelpFormatter,
    )
    p.add_argument("--verbose", action="store_true", help="Show full tracebacks")
    p.add_argument("--log-json", action="store_true", help="Emit structured log lines")
    p.add_argument(
        "--log-level",
        choices=["debug", "info", "warning"],
        default="warning",
        help="Log verbosity",
    )
    src = p.add_mutually_exclusive_group(required=True)
    src.add_argument("--city", type=str, help="Path to a city file")
    src.add_argument("--random", action="store_true", help="Use a generated city")
    src.add_argument(
        "--example",
        action="store_true",
        help="Print a sample city file to stdout and exit",
    )
    p.add_argument(
        "--format",
        choices=["city", "json"],
        default=None,
        help="City file format (auto-detected from extension)",
    )
    p.add_argument("--capacity", type=int, default=DEFAULT_CAPACITY, help="Maximum junctions")
    p.add_argument("--n", type=int, default=16, help="Junctions (random mode)")
    p.add_argument("--seed", type=int, default=0, help="Seed for the generated city")

    p.add_argument("--source", type=str, default=None, help="Source junction name or id (names win over ids)")
    p.add_argument("--target", type=str, default=None, help="Target junction name or id (names win over ids)")
    p.add_argument("--start-time", type=int, default=0, help="Clock value at departure")
    p.add_argument("--show", action="store_true", help="Print the adjacency list")
    p.add_argument("--summary", action="store_true", help="Print a travel summary")

    p.add_argument("--export-dot", type=str, default=None, help="Write the network as GraphViz DOT")
    p.add_argument("--export-html", type=str, default=None, help="Write an interactive Leaflet map")
    p.add_argument("--export-json", type=str, default=None, help="Write the route as JSON")
    p.add_argument("--plot", type=str, default=None, help="Save a Matplotlib rendering")
    p.add_argument("--save", type=str, default=None, help="Write the city to this file")
    p.add_argument("--metrics-out", type=str, default=None, help="Write run metrics as JSON")

    args = p.parse_args(argv)

    if args.example:
        sys.stdout.write(EXAMPLE_CITY)
        return 0

    stream = sys.stdout if args.log_json else sys.stderr
    level = "info" if args.log_json and args.log_level == "warning" else args.log_level
    logger = StdLogger(level=level, json_fmt=args.log_json, stream=stream)

    try:
        if args.random:
            G = generate_city(args.n, seed=args.seed, capacity=max(args.capacity, args.n))
        else:
            G = read_graph(args.city, args.format, capacity=args.capacity, logger=logger)

        if args.verbose and not args.log_json:
            sys.stderr.write(f"config: n={G.n} m={G.m} start_time={args.start_time}\n")
        if args.show:
            sys.stdout.write(_adjacency_listing(G))

        route_path: Optional[List[Vertex]] = None
        if (args.source is None) != (args.target is None):
            raise InputError("--source and --target must be given together")
        if args.source is not None:
            cfg = SolverConfig(start_time=args.start_time)
            source = _resolve(G, args.source)
            target = _resolve(G, args.target)
            solver = TimeDependentSolver(G, source, target, config=cfg, logger=logger)
            result, metrics = timed_solve(solver)
            route_path = result.path

            if args.summary:
                sys.stdout.write(_travel_summary(G, result, args.start_time))
            if args.export_json:
                with open(args.export_json, "w", encoding="utf-8") as fh:
                    fh.write(export_route_json(G, result, args.start_time))
            if args.metrics_out:
                with open(args.metrics_out, "w", encoding="utf-8") as fh:
                    json.dump(asdict(metrics), fh)
            if not args.log_json:
                out = {
                    "source": source,
                    "target": target,
                    "start_time": args.start_time,
                    "distance": result.distance,
                    "path": result.path,
                }
                print(json.dumps(out))

        if args.export_dot:
            with open(args.export_dot, "w", encoding="utf-8") as fh:
                fh.write(export_dot(G, route_path))
        if args.export_html:
            with open(args.export_html, "w", encoding="utf-8") as fh:
                fh.write(export_leaflet_html(G, route_path))
        if args.plot:
            from .visualize import plot_network

            plot_network(G, route_path, at_time=args.start_time, out=args.plot)
        if args.save:
            write_graph(G, args.save)
        return 0

    except (InputError, ConfigError, GraphFormatError) as exc:
        if args.verbose:
            traceback.print_exc()
        else:
            sys.stderr.write(f"error: {exc}\n")
        return 64
    except LightpathError as exc:
        if args.verbose:
            traceback.print_exc()
        else:
            sys.stderr.write(f"internal error: {exc}\n")
        return 70


if __name__ == "__main__":
    sys.exit(main())
