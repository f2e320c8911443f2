"""Command line entry point: calc, graph and the interactive screen."""

import argparse
import logging
import sys

from . import __version__
from .engine import default_functions
from .errors import ExpressionError
from .graph import render_graph
from .lexer import tokenize
from .parser import parse
from .tokens import detokenize

logger = logging.getLogger(__name__)

DEFAULT_ORIGIN = 0.0
DEFAULT_WIDTH = 10.0


def build_parser():
    parser = argparse.ArgumentParser(
        prog="graphing-calculator",
        description="Evaluate arithmetic expressions or plot them in the terminal.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="show tokens and the parsed tree, enable debug logging")

    subcommands = parser.add_subparsers(dest="command", required=True)

    calc = subcommands.add_parser("calc", help="evaluate an expression")
    calc.add_argument("expression")

    graph = subcommands.add_parser("graph", help="plot an expression in x")
    graph.add_argument("expression")
    graph.add_argument("--origin", type=float, default=DEFAULT_ORIGIN,
                       help="left end of the x domain (default: %(default)s)")
    graph.add_argument("--width", type=float, default=DEFAULT_WIDTH,
                       help="length of the x domain (default: %(default)s)")

    interactive = subcommands.add_parser("cli", help="interactive plotting screen")
    interactive.add_argument("expression", nargs="?")

    return parser


def print_verbose(expression, tokens, tree):
    print(f"> Input\n{expression}")
    print(f"> Tokens\n{detokenize(tokens)}")
    print(f"> AST\n{tree!r}")
    print(f"> Sympy\n{tree.to_sympy()}")
    print("> Value")


def main(argv=None):
    """Run one command; returns the process exit code"""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command == "cli":
        from .screen import run as run_screen
        run_screen(args.expression)
        return 0

    functions = default_functions()

    try:
        tokens = tokenize(args.expression)
        tree = parse(tokens, functions)

        if args.verbose:
            print_verbose(args.expression, tokens, tree)

        if args.command == "calc":
            print(f"{args.expression} = {tree.evaluate({})}")
        else:
            print(render_graph(tree, args.origin, args.width))
    except ExpressionError as e:
        logger.debug("Expression %r failed", args.expression, exc_info=True)
        print(e, file=sys.stderr)
        return 1

    return 0


def run():
    """Console script entry point"""
    sys.exit(main())
