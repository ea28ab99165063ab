# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Raw CST dump used by `--diagnostic`.

Each node prints its rule, matched text and span, indented two spaces deeper
than its parent. It reads the CST only, so it works whether or not the same
tree later lowers.
"""

from __future__ import annotations

import os
import sys
from typing import Any, Dict, List, Optional, TextIO

from .cst import CstNode

INDENT_STEP = 2

_GREEN = "\x1b[32m"
_CYAN = "\x1b[36m"
_MAGENTA = "\x1b[35m"
_RESET = "\x1b[0m"


def use_color(mode: str, stream: TextIO) -> bool:
	"""Resolve `--color auto|always|never` for `stream`."""
	if mode == "always":
		return True
	if mode == "never":
		return False
	if os.environ.get("NO_COLOR"):
		return False
	isatty = getattr(stream, "isatty", None)
	return bool(isatty and isatty())


def format_node(node: CstNode, indent: int = 0, *, color: bool = False) -> str:
	rule, text = node.rule.value, node.text
	start, end = str(node.span.start), str(node.span.end)
	if color:
		rule = f"{_GREEN}{rule}{_RESET}"
		text = f"{_CYAN}{text}{_RESET}"
		start = f"{_MAGENTA}{start}{_RESET}"
		end = f"{_MAGENTA}{end}{_RESET}"
	return f"{' ' * indent}Rule: {rule}, Text: {text}, Span: {{ start: {start} end: {end} }}"


def format_tree(node: CstNode, indent: int = 0, *, color: bool = False) -> List[str]:
	lines = [format_node(node, indent, color=color)]
	for child in node.children:
		lines.extend(format_tree(child, indent + INDENT_STEP, color=color))
	return lines


def print_tree(node: CstNode, indent: int = 0, *, color: bool = False, file: Optional[TextIO] = None) -> None:
	if file is None:
		file = sys.stdout
	for line in format_tree(node, indent, color=color):
		print(line, file=file)


def tree_to_dict(node: CstNode) -> Dict[str, Any]:
	return {
		"rule": node.rule.value,
		"text": node.text,
		"span": node.span.to_dict(),
		"children": [tree_to_dict(child) for child in node.children],
	}


__all__ = ["INDENT_STEP", "use_color", "format_node", "format_tree", "print_tree", "tree_to_dict"]
