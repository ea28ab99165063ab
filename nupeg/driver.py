# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Command-line driver: read source, parse it at a chosen production, then either
dump the CST (`--diagnostic`) or lower each tree to the expression AST
(`--expression`).

Exit codes: 0 on success, 1 when the input cannot be read or parsed or any
tree fails to lower, 2 for usage errors (reported by argparse before any
parsing happens).
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .ast import expression_to_dict, format_expression
from .cst import CstNode, parse
from .diagnostics import print_tree, tree_to_dict, use_color
from .errors import LoweringError, ParseError, UnknownRule
from .lower import LowerResult, lower_trees
from .rules import DEFAULT_RULE, resolve_rule
from .span import location

logger = logging.getLogger(__name__)

_EPILOG = """\
examples:
  nupeg -s '10.4 + 9.6' -e -r plus_expr
  nupeg -s 'let a = 1 + 2' -d
  nupeg -f script.nu -d --color never
  nupeg -f script.nu -e --json
"""


def _build_parser() -> argparse.ArgumentParser:
	parser = argparse.ArgumentParser(
		prog="nupeg",
		description="Parse Nushell-style source and dump its syntax tree or lowered expression AST",
		epilog=_EPILOG,
		formatter_class=argparse.RawDescriptionHelpFormatter,
	)
	source = parser.add_mutually_exclusive_group()
	source.add_argument("-f", "--file", type=Path, help="Read source from a file")
	source.add_argument("-s", "--string", help="Use the given text as source")
	mode = parser.add_mutually_exclusive_group()
	mode.add_argument("-d", "--diagnostic", action="store_true", help="Print the raw parse tree")
	mode.add_argument("-e", "--expression", action="store_true", help="Lower each tree and print the expression AST")
	parser.add_argument(
		"-r",
		"--rule",
		default=DEFAULT_RULE.value,
		help=f"Grammar production to start parsing at (default: {DEFAULT_RULE.value})",
	)
	parser.add_argument("--json", action="store_true", help="Emit output and errors as JSON")
	parser.add_argument(
		"--color",
		choices=("auto", "always", "never"),
		default="auto",
		help="Colorize the parse tree dump (default: auto)",
	)
	parser.add_argument("-v", "--verbose", action="store_true", help="Log debug output to stderr")
	return parser


def main(argv: Optional[List[str]] = None) -> int:
	parser = _build_parser()
	args = parser.parse_args(argv)

	if args.file is None and args.string is None:
		parser.error("one of the arguments -f/--file -s/--string is required")
	if not args.diagnostic and not args.expression:
		parser.error("one of the arguments -d/--diagnostic -e/--expression is required")
	try:
		rule = resolve_rule(args.rule)
	except UnknownRule as err:
		parser.error(str(err))

	if args.verbose:
		logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

	if args.file is not None:
		origin = str(args.file)
		try:
			source = args.file.read_text(encoding="utf-8")
		except (OSError, UnicodeDecodeError) as err:
			print(f"{origin}: error: cannot read input: {err}", file=sys.stderr)
			return 1
	else:
		origin = "<string>"
		source = args.string
	logger.debug("parsing %s at rule %s", origin, rule.value)

	try:
		trees = parse(source, rule)
	except ParseError as err:
		_report_parse_error(err, origin, as_json=args.json)
		return 1

	if args.diagnostic:
		_print_diagnostic(trees, color_mode=args.color, as_json=args.json)
		return 0

	results = lower_trees(trees)
	_print_results(results, source, origin, as_json=args.json)
	return 0 if all(result.ok for result in results) else 1


def _report_parse_error(err: ParseError, origin: str, *, as_json: bool) -> None:
	if as_json:
		diag = err.to_dict()
		diag["file"] = origin
		print(json.dumps({"exit_code": 1, "diagnostics": [diag]}))
		return
	line = err.line if err.line is not None else "?"
	column = err.column if err.column is not None else "?"
	print(f"{origin}:{line}:{column}: error: {err.message}", file=sys.stderr)


def _print_diagnostic(trees: List[CstNode], *, color_mode: str, as_json: bool) -> None:
	if as_json:
		print(json.dumps([tree_to_dict(tree) for tree in trees], indent=2))
		return
	color = use_color(color_mode, sys.stdout)
	for tree in trees:
		print_tree(tree, color=color, file=sys.stdout)


def _print_results(results: List[LowerResult], source: str, origin: str, *, as_json: bool) -> None:
	if as_json:
		payload = []
		for result in results:
			if result.ok:
				payload.append({"ok": True, "expression": expression_to_dict(result.expression)})
			else:
				payload.append({"ok": False, "error": result.error.to_dict()})
		print(json.dumps(payload, indent=2, allow_nan=False))
		return
	for result in results:
		if result.ok:
			print(format_expression(result.expression))
		else:
			print(_format_lowering_error(result.error, source, origin), file=sys.stderr)


def _format_lowering_error(err: LoweringError, source: str, origin: str) -> str:
	line, column = location(source, err.span.start)
	return f"{origin}:{line}:{column}: error[{err.code}]: {err.message}"


__all__ = ["main"]
