from __future__ import annotations

import argparse
import os
import sys
import traceback
from pathlib import Path
from typing import Optional, Sequence

from .evaluator import CalcRuntimeError, eval_expr
from .lexer_rd import LexError, tokenize
from .parse_auto import differential, parse_with_grammar
from .parser_rd import ParseError, parse
from .tree import Node, format_number
from .tree_printer import print_tree, render, visualize_tree

DEBUG_TRACE_ENV = "CALCTREE_DEBUG_PY_TRACE"


def parse_text(src: str, use_grammar: bool = False) -> Node:
    if use_grammar:
        return parse_with_grammar(src)
    return parse(tokenize(src))


def run(src: str, use_grammar: bool = False) -> float:
    return eval_expr(parse_text(src, use_grammar=use_grammar))


def _load_source(arg: Optional[str]) -> str:
    """
    Resolve CLI input into source text.
    - None or "-" => read stdin.
    - Existing path => read file contents.
    - Otherwise treat the argument as literal source.
    """

    if arg is None or arg == "-":
        data = sys.stdin.read()
        if not data.strip():
            raise SystemExit("No input provided on stdin")
        return data

    candidate = Path(arg)
    try:
        is_file = candidate.is_file()
    except OSError:
        # long expressions overflow the OS name limit
        return arg
    if is_file:
        return candidate.read_text(encoding="utf-8")

    return arg


def _trace_enabled() -> bool:
    return bool(os.environ.get(DEBUG_TRACE_ENV))


def _fail(kind: str, exc: Exception) -> int:
    if _trace_enabled():
        traceback.print_exception(exc)
    print(f"{kind}: {exc}", file=sys.stderr)
    return 1


def _build_arg_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="calctree",
        description="Parse an arithmetic expression, evaluate it and draw its tree.",
    )
    ap.add_argument("source", nargs="?", help="Expression text, a file path, or '-' for stdin")
    ap.add_argument("--tree", action="store_true", help="Print the indented parse tree")
    ap.add_argument("--label", action="store_true", help="Print the root node label")
    ap.add_argument("--grammar", action="store_true", help="Parse with the Lark reference grammar")
    ap.add_argument("--check", action="store_true", help="Compare the recursive-descent parser with the grammar")
    return ap


def _report_check(src: str) -> int:
    result = differential(src)
    if result.match:
        outcome = "rejected" if result.rd_error is not None else "accepted"
        print(f"OK: both parsers {outcome} the input")
        return 0

    print("MISMATCH between parsers", file=sys.stderr)
    for name, node, err in (
        ("parser_rd", result.rd, result.rd_error),
        ("grammar", result.grammar, result.grammar_error),
    ):
        if err is not None:
            print(f"  {name}: error: {err}", file=sys.stderr)
        else:
            print(f"  {name}:", file=sys.stderr)
            sys.stderr.write(render(node))
    return 1


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _build_arg_parser().parse_args(argv)
    src = _load_source(args.source)

    try:
        if args.check:
            return _report_check(src)

        tree = parse_text(src, use_grammar=args.grammar)
        if args.label:
            print_tree(tree)
        if args.tree:
            visualize_tree(tree)
        if not (args.label or args.tree):
            print(format_number(eval_expr(tree)))
    except LexError as e:
        return _fail("Lex error", e)
    except ParseError as e:
        return _fail("Parse error", e)
    except CalcRuntimeError as e:
        return _fail("Runtime error", e)
    except ValueError as e:
        return _fail("Render error", e)

    return 0


if __name__ == "__main__":
    sys.exit(main())
