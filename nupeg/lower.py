# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Lower CST nodes into the typed expression AST.

`lower` dispatches on the node's rule and recurses into the children it
needs, building the result bottom-up. It is pure: the CST is only read, and
every failure is raised as a `LoweringError` subclass carrying the span of
the offending node. `lower_trees` turns those errors into per-tree results so
one bad tree never hides the others.

Precedence tiers rely on the grammar for associativity. A tier node has one
child when no operator at that tier is present (returned as-is, no wrapper)
or three children `[left, op, right]`; left-associative chains arrive already
nested as the left operand.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

from .ast import (
	BinaryOp,
	Expression,
	FloatLiteral,
	IntLiteral,
	Operator,
	OperatorExpr,
	StringLiteral,
	Type,
)
from .cst import CstNode
from .errors import (
	IncompleteString,
	LiteralParse,
	LoweringError,
	MalformedArity,
	UnsupportedOperator,
	UnsupportedRule,
)
from .rules import RuleId

logger = logging.getLogger(__name__)

_I64_MIN = -(2**63)
_I64_MAX = 2**63 - 1

# Accepted literal text: ASCII digits and an optional sign, no spaces or underscores.
_DECIMAL_RE = re.compile(r"[+-]?[0-9]+\Z")
_RADIX_RE = {
	RuleId.hex_int: (re.compile(r"[+-]?0[xX][0-9a-fA-F]+\Z"), 16),
	RuleId.oct_int: (re.compile(r"[+-]?0[oO][0-7]+\Z"), 8),
	RuleId.bin_int: (re.compile(r"[+-]?0[bB][01]+\Z"), 2),
}
_FLOAT_RE = re.compile(
	r"[+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|inf|infinity|nan)\Z",
	re.IGNORECASE,
)

_CHAIN_RULES = frozenset({RuleId.plus_expr, RuleId.mul_expr, RuleId.pow_expr})
_INT_RULES = frozenset({RuleId.int, RuleId.dec_int})
_STRING_WRAPPERS = frozenset({
	RuleId.string,
	RuleId.double_quote_string,
	RuleId.single_quote_string,
	RuleId.backtick_string,
})
_STRING_CONTENTS = frozenset({
	RuleId.double_quote_string_inner,
	RuleId.single_quote_string_inner,
	RuleId.backtick_string_inner,
})

_PLUS_OPS: Dict[str, Operator] = {
	"+": Operator.PLUS,
	"-": Operator.MINUS,
}
_MUL_OPS: Dict[str, Operator] = {
	"*": Operator.MULTIPLY,
	"/": Operator.DIVIDE,
	"//": Operator.FLOOR_DIVIDE,
}


def lower(node: CstNode) -> Expression:
	"""Lower one CST node; raises a `LoweringError` subclass on failure."""
	rule = node.rule
	if rule in _CHAIN_RULES:
		return _lower_chain(node)
	if rule in _INT_RULES:
		return _lit(IntLiteral(_parse_decimal(node)), node)
	if rule in _RADIX_RE:
		return _lit(IntLiteral(_parse_radix(node)), node)
	if rule is RuleId.float:
		return _lit(FloatLiteral(_parse_float(node)), node)
	if rule is RuleId.plus_op:
		return _lower_operator(node, _PLUS_OPS)
	if rule is RuleId.mul_op:
		return _lower_operator(node, _MUL_OPS)
	if rule in _STRING_WRAPPERS:
		if len(node.children) != 1:
			raise IncompleteString(node.text, span=node.span)
		return lower(node.children[0])
	if rule in _STRING_CONTENTS:
		# TODO: decode escape sequences once the escape grammar (\n, \", \\, \u{...}) is settled.
		return Expression(expr=StringLiteral(node.text), span=node.span, ty=Type.STRING)
	raise UnsupportedRule(rule, span=node.span)


def _lower_chain(node: CstNode) -> Expression:
	children = node.children
	if len(children) == 1:
		return lower(children[0])
	if len(children) != 3:
		raise MalformedArity(node.rule, len(children), span=node.span)
	left = lower(children[0])
	operator = lower(children[1])
	right = lower(children[2])
	return Expression(expr=BinaryOp(operator=operator, left=left, right=right), span=node.span)


def _lower_operator(node: CstNode, table: Dict[str, Operator]) -> Expression:
	op = table.get(node.text)
	if op is None:
		raise UnsupportedOperator(node.text, span=node.span)
	return Expression(expr=OperatorExpr(op), span=node.span)


def _lit(expr: IntLiteral | FloatLiteral, node: CstNode) -> Expression:
	return Expression(expr=expr, span=node.span)


def _parse_decimal(node: CstNode) -> int:
	if not _DECIMAL_RE.match(node.text):
		raise LiteralParse(node.text, span=node.span)
	return _check_i64(int(node.text), node)


def _parse_radix(node: CstNode) -> int:
	pattern, base = _RADIX_RE[node.rule]
	if not pattern.match(node.text):
		raise LiteralParse(node.text, span=node.span)
	return _check_i64(int(node.text, base), node)


def _check_i64(value: int, node: CstNode) -> int:
	if value < _I64_MIN or value > _I64_MAX:
		raise LiteralParse(node.text, span=node.span)
	return value


def _parse_float(node: CstNode) -> float:
	text = node.text
	if not _FLOAT_RE.match(text):
		raise LiteralParse(text, span=node.span)
	return float(text)


@dataclass(frozen=True)
class LowerResult:
	"""Outcome of lowering one top-level tree: an expression or an error."""

	tree: CstNode
	expression: Optional[Expression] = None
	error: Optional[LoweringError] = None

	@property
	def ok(self) -> bool:
		return self.error is None


def try_lower(node: CstNode) -> LowerResult:
	try:
		return LowerResult(tree=node, expression=lower(node))
	except LoweringError as exc:
		logger.debug("lowering %s at %s failed: %s", node.rule.value, node.span, exc)
		return LowerResult(tree=node, error=exc)


def lower_trees(trees: Iterable[CstNode]) -> List[LowerResult]:
	"""Lower every top-level tree independently."""
	return [try_lower(tree) for tree in trees]


__all__ = ["lower", "try_lower", "lower_trees", "LowerResult"]
