"""Command-line interface."""

import logging
import sys
from argparse import ArgumentParser, Namespace
from pathlib import Path
from typing import Any, Callable, List, Mapping, Optional, Tuple

from digraph.config import GraphConfig, WeightError
from digraph.errors import DigraphError
from digraph.graph import Digraph, reconstruct_path
from digraph.logs import fatal, setup_logging


def main(argv: Optional[List[str]] = None):
    parser, commands = get_parser()
    args = parser.parse_args(argv)
    if args.command == "help":
        if args.help_target:
            commands[args.help_target].print_help()
        else:
            parser.print_help()
        return

    log_level = logging.WARNING
    if args.verbose and args.verbose == 1:
        log_level = logging.INFO
    elif args.verbose and args.verbose >= 2:
        log_level = logging.DEBUG
    exit_level = logging.ERROR
    if args.keep_going:
        exit_level = logging.FATAL
    setup_logging(sys.stderr, log_level, exit_level)

    command = globals()[f"command_{args.command}"]
    assert command, "unexpected command name"
    command(args)


def get_parser() -> Tuple[ArgumentParser, Mapping[str, ArgumentParser]]:
    parser = ArgumentParser(prog="dg", description="tool for inspecting digraphs")
    commands = parser.add_subparsers(metavar="command", dest="command", required=True)

    parser_help = commands.add_parser("help", help="show this help message and exit")
    parser_help.add_argument(
        metavar="command",
        dest="help_target",
        nargs="?",
        help="get help for a specific command",
    )

    parser_info = commands.add_parser("info", help="show vertices and edges")
    parser_info.add_argument("file", type=Path, help="graph description (YAML)")

    parser_check = commands.add_parser("check", help="check strong connectivity")
    parser_check.add_argument("file", type=Path, help="graph description (YAML)")

    parser_paths = commands.add_parser("paths", help="show shortest paths")
    parser_paths.add_argument("file", type=Path, help="graph description (YAML)")
    parser_paths.add_argument("start", type=int, help="start vertex")
    parser_paths.add_argument(
        "-w", "--weight", help="edge field to weigh by, or FIELD/FIELD",
    )

    for subparser in [parser_info, parser_check, parser_paths]:
        subparser.add_argument(
            "-k",
            "--keep-going",
            action="store_true",
            help="keep going if there are errors",
        )
        subparser.add_argument(
            "-v",
            "--verbose",
            action="count",
            help="increase logging (can use multiple times)",
        )

    return parser, commands.choices


def load(path: Path) -> Tuple[GraphConfig, Digraph[Any, Any]]:
    """Load and build the graph described in path.

    Exits with a fatal log if the file does not exist.
    """
    if not path.is_file():
        fatal("file %s not found", path)
    cfg = GraphConfig.load(path)
    cfg.validate()
    logging.debug("graph config: %r", cfg)
    try:
        graph = cfg.build()
    except DigraphError as ex:
        logging.error("%s: %s", path, ex)
        graph = Digraph()
    return cfg, graph


def command_info(args: Namespace):
    _, graph = load(args.file)
    print(f"{graph.vertex_count()} vertices, {graph.edge_count()} edges")
    graph.dump(sys.stdout)


def command_check(args: Namespace):
    _, graph = load(args.file)
    if graph.is_strongly_connected():
        print("strongly connected")
    else:
        print("not strongly connected")


def command_paths(args: Namespace):
    cfg, graph = load(args.file)
    try:
        weight = cfg.weight_function(args.weight)
        predecessors = graph.find_shortest_paths(args.start, weight)
    except (DigraphError, KeyError, WeightError) as ex:
        logging.error("%s: %s", args.file, ex)
        return
    printer = PathPrinter(graph, weight)
    for vertex in graph.vertices():
        printer.path(vertex, reconstruct_path(predecessors, args.start, vertex))


class PathPrinter:

    """Helper class for implementing command_paths."""

    def __init__(self, graph: Digraph[Any, Any], weight: Callable[[Any], float]):
        self.graph = graph
        self.weight = weight

    def path(self, vertex: int, path: Optional[List[int]]):
        if path is None:
            print(f"{vertex}: unreachable")
            return
        total = sum(
            self.weight(self.graph.edge_info(src, dst))
            for src, dst in zip(path, path[1:])
        )
        route = " -> ".join(str(v) for v in path)
        print(f"{vertex}: {route} ({total:g})")
