#!/usr/bin/env python3
"""Command-line interface for the metro planner."""

import argparse
import logging
import sys
from pathlib import Path

from .config import DATASETS_DIR, LOG_LEVEL
from .database import Database
from .exceptions import MetroPlannerError
from .ingest import parse_all_lines, seed_database
from .planner import JourneyPlan, get_planner


def print_banner():
    """Print the welcome banner."""
    print("""
╔═══════════════════════════════════════════════════════════╗
║                    Metro Planner 🚇                       ║
║                                                           ║
║  Enter an origin and a destination station to get the    ║
║  shortest route and the route with fewest interchanges.  ║
║                                                           ║
║  Type /quit to exit.                                      ║
╚═══════════════════════════════════════════════════════════╝
""")


def format_plan(plan: JourneyPlan) -> str:
    if not plan.found:
        return "No path found between these stations."

    result = []
    if plan.shortest:
        result.append(f"Shortest route (fare ₹{plan.shortest.fare}):")
        result.append(str(plan.shortest.path))
    if plan.least_interchange:
        result.append(f"\nFewest interchanges (fare ₹{plan.least_interchange.fare}):")
        result.append(str(plan.least_interchange.path))
    return "\n".join(result)


def interactive():
    """Prompt for station pairs until the user quits."""
    print_banner()
    planner = get_planner()

    while True:
        try:
            from_name = input("\nFrom: ").strip()
            if from_name.lower() in ["/quit", "/exit", "/q"]:
                break
            to_name = input("To: ").strip()
            if to_name.lower() in ["/quit", "/exit", "/q"]:
                break
            if not from_name or not to_name:
                continue

            print()
            print(format_plan(planner.plan(from_name, to_name)))

        except MetroPlannerError as e:
            print(f"\nError: {e.message}")
        except (KeyboardInterrupt, EOFError):
            break

    print("\nGoodbye! Safe travels! 🚇")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="metro-planner", description=__doc__)
    subparsers = parser.add_subparsers(dest="command")

    seed = subparsers.add_parser("seed", help="Load line files into the database")
    seed.add_argument("dataset_dir", nargs="?", type=Path, default=DATASETS_DIR)

    route = subparsers.add_parser("route", help="Plan a route between two stations")
    route.add_argument("from_station")
    route.add_argument("to_station")

    serve = subparsers.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", default="0.0.0.0")
    serve.add_argument("--port", type=int, default=8000)

    return parser


def main(argv=None) -> int:
    """Run the CLI."""
    logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    args = build_parser().parse_args(argv)

    try:
        if args.command == "seed":
            lines = parse_all_lines(args.dataset_dir)
            if not lines:
                print(f"No line files found in {args.dataset_dir}", file=sys.stderr)
                return 1
            edge_count = seed_database(Database(), lines)
            print(f"Seeded {len(lines)} lines and {edge_count} edges")
        elif args.command == "route":
            print(format_plan(get_planner().plan(args.from_station, args.to_station)))
        elif args.command == "serve":
            from .api import run_server
            run_server(host=args.host, port=args.port)
        else:
            interactive()
    except MetroPlannerError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
