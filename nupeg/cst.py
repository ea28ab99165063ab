# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Concrete syntax tree: parse source text with the shipped grammar and expose
the result as immutable, rule-tagged nodes.

The parser itself is lark (Earley, dynamic lexer) driven by `nushell.lark`.
Lark trees are adapted into `CstNode`s right away so nothing downstream
depends on lark types:

- every lark rule becomes a node tagged with its `RuleId`;
- lexical tokens (keywords, punctuation, quotes) are dropped, except
  terminals that are themselves productions (`COMMENT`), which become leaves;
- a rule that matched the empty string gets a zero-width span at the end of
  whatever preceded it, so spans still nest;
- spans are UTF-8 byte offsets while `text` is the matched character slice.

Lark errors become `ParseError`s carrying lark's own message, which includes
the offending context and the expected terminals.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, List, Sequence, Tuple

from lark import Lark, Token, Tree
from lark.exceptions import UnexpectedInput

from .errors import ParseError
from .rules import DEFAULT_RULE, RuleId
from .span import Span, byte_offsets

logger = logging.getLogger(__name__)

_GRAMMAR_PATH = Path(__file__).with_name("nushell.lark")
_GRAMMAR_SRC = _GRAMMAR_PATH.read_text(encoding="utf-8")

# Productions lark can start from: everything except terminal-level ones.
ENTRY_POINTS: Tuple[str, ...] = tuple(rule.value for rule in RuleId if not rule.is_terminal)

# Terminals kept as CST leaves because the registry names them.
_TOKEN_RULES = frozenset(rule.value for rule in RuleId if rule.is_terminal)

_PARSER = Lark(
	_GRAMMAR_SRC,
	parser="earley",
	lexer="dynamic",
	start=list(ENTRY_POINTS),
	propagate_positions=True,
	maybe_placeholders=False,
)


@dataclass(frozen=True)
class CstNode:
	"""One matched production: its rule, span, matched text and children."""

	rule: RuleId
	span: Span
	text: str
	children: Tuple["CstNode", ...] = ()

	def walk(self) -> Iterator["CstNode"]:
		"""Pre-order traversal, this node first."""
		yield self
		for child in self.children:
			yield from child.walk()


def parse(source: str, rule: RuleId = DEFAULT_RULE) -> List[CstNode]:
	"""
	Parse `source` starting at production `rule`.

	Returns the top-level trees in source order. Lark always yields a single
	root, so the list has one element; callers still treat it as a sequence
	so every tree is reported on its own.
	"""
	if rule.is_terminal:
		raise ParseError(f"rule {rule.value} is a terminal and cannot be used as an entry point")
	try:
		tree = _PARSER.parse(source, start=rule.value)
	except UnexpectedInput as exc:
		raise _convert_lark_error(exc) from exc
	if not isinstance(tree, Tree):
		raise ParseError(f"rule {rule.value} did not produce a tree")
	root, _end = _build_node(tree, source, byte_offsets(source), 0)
	logger.debug("parsed %d characters at %s into %d nodes", len(source), rule.value, sum(1 for _ in root.walk()))
	return [root]


def _build_node(tree: Tree, source: str, offsets: Sequence[int], anchor: int) -> Tuple[CstNode, int]:
	"""Adapt one lark tree; returns the node and its end as a character offset."""
	start, end = _char_range(tree, anchor)
	children: List[CstNode] = []
	cursor = start
	for child in tree.children:
		if isinstance(child, Token):
			if child.type in _TOKEN_RULES:
				children.append(CstNode(rule=RuleId(child.type), span=Span.from_meta(child, offsets), text=str(child)))
			cursor = child.end_pos
			continue
		node, cursor = _build_node(child, source, offsets, cursor)
		children.append(node)
	span = Span(offsets[start], offsets[end])
	return CstNode(rule=RuleId(_name(tree)), span=span, text=source[start:end], children=tuple(children)), end


def _char_range(tree: Tree, anchor: int) -> Tuple[int, int]:
	meta = tree.meta
	if meta.empty:
		return anchor, anchor
	return meta.start_pos, meta.end_pos


def _name(node: Tree | Token) -> str:
	if isinstance(node, Tree):
		data = node.data
		if isinstance(data, Token):
			return data.value
		return data
	return node.type


def _convert_lark_error(exc: UnexpectedInput) -> ParseError:
	line = getattr(exc, "line", None)
	column = getattr(exc, "column", None)
	if line is not None and line < 1:
		line, column = None, None
	return ParseError(str(exc), line=line, column=column)


__all__ = ["CstNode", "ENTRY_POINTS", "parse"]
