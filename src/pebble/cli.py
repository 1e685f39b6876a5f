"""Command-line entry point for Pebble."""
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Optional

from termcolor import colored

from .dump import dump_tree, format_tokens
from .errors import PebbleError
from .interpreter import Interpreter
from .lexer import tokenize
from .parser import LineSupplier
from .session import Result, Session, lines_from
from .shell import Shell

#each Pebble call costs several Python frames
RECURSION_LIMIT = 10_000


#loads a source file as a line supplier
def load_lines(path: Path) -> LineSupplier:
    return lines_from(path.read_text().splitlines())


def _print_tokens(number: int, tokens) -> None:
    print(f"{number:>4}: {format_tokens(tokens)}")


def _print_tree(node) -> None:
    print(dump_tree(node))


def _report(result: Result, color: bool) -> None:
    text = result.display()
    if result.ok:
        if text:
            print(text)
        return
    if color:
        text = colored(text, "red", attrs=["bold"])
    print(text, file=sys.stderr)


#handles the `pebble run` subcommand; the first error stops the program
def cmd_run(args: argparse.Namespace) -> int:
    session = Session(
        load_lines(Path(args.source)),
        Interpreter(trace=args.trace),
        on_node=_print_tree if args.tree else None,
    )
    if args.tokens:
        session.parser.on_tokens = _print_tokens
    for result in session.run():
        _report(result, color=not args.no_color)
        if not result.ok:
            return 1
    return 0


#starts the interactive shell
def cmd_repl(args: argparse.Namespace) -> int:
    session = Session(
        interpreter=Interpreter(trace=args.trace),
        on_node=_print_tree if args.tree else None,
    )
    if args.tokens:
        session.parser.on_tokens = _print_tokens
    Shell(session, color=not args.no_color).cmdloop()
    return 0


#prints the tokens of every line, threading indentation from line to line
def cmd_tokens(args: argparse.Namespace) -> int:
    indent = 0
    for number, line in enumerate(Path(args.source).read_text().splitlines(keepends=True), start=1):
        try:
            tokens, indent = tokenize(line, indent, number)
        except PebbleError as error:
            print(f"{number:>4}: {error}", file=sys.stderr)
            return 1
        _print_tokens(number, tokens)
    return 0


#prints the parse tree of every top-level statement without running it
def cmd_parse(args: argparse.Namespace) -> int:
    session = Session(load_lines(Path(args.source)))
    supplier = session.parser.line_supplier
    while True:
        line = supplier()
        if not line:
            return 0
        try:
            for node in session.parser.statements(line):
                print(dump_tree(node))
        except PebbleError as error:
            print(error, file=sys.stderr)
            return 1


#configures the CLI surface across run/repl/tokens/parse
def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="pebble", description="Pebble language tools")
    subparsers = parser.add_subparsers(dest="command", required=True)

    p_run = subparsers.add_parser("run", help="run a source file")
    p_run.add_argument("source", help="path to source file")
    p_run.add_argument("--trace", action="store_true", help="print interpreter trace while executing")
    p_run.add_argument("--tokens", action="store_true", help="print the tokens of each line as it is read")
    p_run.add_argument("--tree", action="store_true", help="print each parse tree before running it")
    p_run.add_argument("--no-color", action="store_true", help="do not color error messages")
    p_run.set_defaults(func=cmd_run)

    p_repl = subparsers.add_parser("repl", help="start the interactive interpreter")
    p_repl.add_argument("--trace", action="store_true", help="print interpreter trace while executing")
    p_repl.add_argument("--tokens", action="store_true", help="print the tokens of each line as it is read")
    p_repl.add_argument("--tree", action="store_true", help="print each parse tree before running it")
    p_repl.add_argument("--no-color", action="store_true", help="do not color error messages")
    p_repl.set_defaults(func=cmd_repl)

    p_tokens = subparsers.add_parser("tokens", help="print the tokens of each source line")
    p_tokens.add_argument("source", help="path to source file")
    p_tokens.set_defaults(func=cmd_tokens)

    p_parse = subparsers.add_parser("parse", help="print parse trees without running")
    p_parse.add_argument("source", help="path to source file")
    p_parse.set_defaults(func=cmd_parse)

    return parser


#entry point used by both console script and module execution
def main(argv: Optional[list[str]] = None) -> int:
    sys.setrecursionlimit(max(sys.getrecursionlimit(), RECURSION_LIMIT))
    parser = build_parser()
    args = parser.parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())
