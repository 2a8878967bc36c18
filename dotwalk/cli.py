import argparse
import json
import logging
import os
import sys
from typing import List, Optional

import graphviz

from .render import RenderOption, render_opts
from .simple import SimpleGraph
from .source import to_source

logger = logging.getLogger(__name__)

# fmt: off
_flags = (
    ("--no-node-labels", RenderOption.NO_NODE_LABELS, "do not write node and subgraph labels"),
    ("--no-edge-labels", RenderOption.NO_EDGE_LABELS, "do not write edge labels"),
    ("--no-node-styles", RenderOption.NO_NODE_STYLES, "do not write node and subgraph styles"),
    ("--no-edge-styles", RenderOption.NO_EDGE_STYLES, "do not write edge styles"),
    ("--no-node-colors", RenderOption.NO_NODE_COLORS, "do not write node and subgraph colors"),
    ("--no-edge-colors", RenderOption.NO_EDGE_COLORS, "do not write edge colors"),
    ("--no-arrows", RenderOption.NO_ARROWS, "do not write arrowhead and arrowtail"),
    ("--dark-theme", RenderOption.DARK_THEME, "white on black colors"),
)
# fmt: on


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dotwalk",
        description="Render JSON graph descriptions as Graphviz DOT.",
    )
    parser.add_argument(
        "paths",
        metavar="path",
        type=str,
        nargs="+",
        help="a JSON file describing a graph",
    )
    parser.add_argument("-o", "--output", help="write DOT to this file instead of stdout (single input only)")
    parser.add_argument(
        "-T",
        "--format",
        help="render an image with the graphviz executables next to each input, e.g. png or svg",
    )
    parser.add_argument("--fontname", help="font used for the graph, its nodes and its edges")
    for flag, _, help_text in _flags:
        parser.add_argument(flag, action="store_true", help=help_text)
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    return parser


def options_from_args(args: argparse.Namespace) -> List[RenderOption]:
    options = []
    if args.fontname:
        options.append(RenderOption.fontname(args.fontname))
    for flag, option, _ in _flags:
        if getattr(args, flag[2:].replace("-", "_")):
            options.append(option)
    return options


def load_graph(path: str) -> SimpleGraph:
    with open(path, encoding="utf-8") as f:
        return SimpleGraph.from_dict(json.load(f))


def _render_one(path: str, args: argparse.Namespace, options: List[RenderOption]) -> None:
    graph = load_graph(path)
    logger.debug("loaded %s: %d nodes, %d edges", path, len(graph.nodes()), len(graph.edges()))

    if args.format:
        directory, name = os.path.split(path)
        filename = os.path.splitext(name)[0]
        source = to_source(graph, options, filename=filename, directory=directory or None, format=args.format.lower())
        out = source.render(cleanup=True, quiet=True)
        logger.info("rendered %s", out)
    elif args.output:
        with open(args.output, "wb") as f:
            render_opts(graph, f, options)
        logger.info("wrote %s", args.output)
    else:
        render_opts(graph, sys.stdout.buffer, options)
        sys.stdout.flush()


def run(argv: Optional[List[str]] = None) -> int:
    """
    Render graph description files as DOT.
    Args:
        argv: Command line arguments, defaults to sys.argv.

    Returns:
        The exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.output and len(args.paths) > 1:
        parser.error("--output accepts a single input path")
    if args.output and args.format:
        parser.error("--output cannot be combined with --format")
    if args.format and args.format.lower() not in graphviz.FORMATS:
        parser.error(f'"{args.format}" is not a valid output format')

    options = options_from_args(args)
    status = 0
    for path in args.paths:
        try:
            _render_one(path, args, options)
        except (OSError, ValueError, KeyError, TypeError) as e:
            logger.error("%s: %s", path, e)
            status = 1
        except (graphviz.ExecutableNotFound, graphviz.CalledProcessError) as e:
            logger.error("%s: graphviz failed: %s", path, e)
            status = 1

    return status


def main():
    sys.exit(run())


if __name__ == "__main__":
    main()
