import math

import pytest

from nupeg.ast import BinaryOp, FloatLiteral, IntLiteral, Operator, OperatorExpr, StringLiteral, Type, format_expression
from nupeg.cst import CstNode
from nupeg.errors import (
	IncompleteString,
	LiteralParse,
	LoweringError,
	MalformedArity,
	UnsupportedOperator,
	UnsupportedRule,
)
from nupeg.lower import lower, lower_trees, try_lower
from nupeg.rules import RuleId
from nupeg.span import Span


def node(rule: RuleId, text: str, start: int = 0, *children: CstNode) -> CstNode:
	return CstNode(rule=rule, span=Span(start, start + len(text)), text=text, children=tuple(children))


def test_int_literal_keeps_node_span() -> None:
	expr = lower(node(RuleId.int, "42", 3))
	assert expr.expr == IntLiteral(42)
	assert expr.span == Span(3, 5)
	assert expr.ty is Type.ANY


def test_signed_and_bounded_ints() -> None:
	assert lower(node(RuleId.int, "-17")).expr == IntLiteral(-17)
	assert lower(node(RuleId.dec_int, "+5")).expr == IntLiteral(5)
	assert lower(node(RuleId.int, "9223372036854775807")).expr == IntLiteral(2**63 - 1)
	assert lower(node(RuleId.int, "-9223372036854775808")).expr == IntLiteral(-(2**63))


@pytest.mark.parametrize("text", ["9223372036854775808", "-9223372036854775809", "1_000", " 1", "1.0", "", "abc"])
def test_bad_int_text_is_literal_parse(text: str) -> None:
	with pytest.raises(LiteralParse) as excinfo:
		lower(node(RuleId.int, text, 7))
	assert excinfo.value.text == text
	assert excinfo.value.span.start == 7


def test_radix_ints() -> None:
	assert lower(node(RuleId.hex_int, "0xff")).expr == IntLiteral(255)
	assert lower(node(RuleId.oct_int, "0o17")).expr == IntLiteral(15)
	assert lower(node(RuleId.bin_int, "0b101")).expr == IntLiteral(5)
	with pytest.raises(LiteralParse):
		lower(node(RuleId.hex_int, "0x" + "f" * 17))
	with pytest.raises(LiteralParse):
		lower(node(RuleId.bin_int, "0b102"))


def test_float_literals() -> None:
	assert lower(node(RuleId.float, "10.4")).expr == FloatLiteral(10.4)
	assert lower(node(RuleId.float, "-1.5e3")).expr == FloatLiteral(-1500.0)
	assert lower(node(RuleId.float, "Infinity")).expr == FloatLiteral(math.inf)
	assert math.isnan(lower(node(RuleId.float, "nan")).expr.value)


@pytest.mark.parametrize("text", ["1.0 ", "1_0.5", "", "1.2.3", "e5"])
def test_bad_float_text_is_literal_parse(text: str) -> None:
	with pytest.raises(LiteralParse):
		lower(node(RuleId.float, text))


@pytest.mark.parametrize(
	"rule, text, op",
	[
		(RuleId.plus_op, "+", Operator.PLUS),
		(RuleId.plus_op, "-", Operator.MINUS),
		(RuleId.mul_op, "*", Operator.MULTIPLY),
		(RuleId.mul_op, "/", Operator.DIVIDE),
		(RuleId.mul_op, "//", Operator.FLOOR_DIVIDE),
	],
)
def test_operator_tables(rule: RuleId, text: str, op: Operator) -> None:
	expr = lower(node(rule, text, 2))
	assert expr.expr == OperatorExpr(op)
	assert expr.span == Span(2, 2 + len(text))


def test_operator_outside_its_tier_is_unsupported() -> None:
	with pytest.raises(UnsupportedOperator) as excinfo:
		lower(node(RuleId.plus_op, "*"))
	assert excinfo.value.text == "*"
	with pytest.raises(UnsupportedOperator):
		lower(node(RuleId.mul_op, "%"))


def test_single_child_chain_is_transparent() -> None:
	leaf = node(RuleId.float, "2.5", 4)
	chain = node(RuleId.plus_expr, "2.5", 4, node(RuleId.mul_expr, "2.5", 4, node(RuleId.pow_expr, "2.5", 4, leaf)))
	assert lower(chain) == lower(leaf)


def test_three_child_chain_builds_binary_op() -> None:
	left = node(RuleId.mul_expr, "10.4", 0, node(RuleId.float, "10.4", 0))
	op = node(RuleId.plus_op, "+", 5)
	right = node(RuleId.mul_expr, "9.6", 7, node(RuleId.float, "9.6", 7))
	expr = lower(node(RuleId.plus_expr, "10.4 + 9.6", 0, left, op, right))
	assert isinstance(expr.expr, BinaryOp)
	assert expr.span == Span(0, 10)
	assert expr.expr.operator.expr == OperatorExpr(Operator.PLUS)
	assert expr.expr.left.expr == FloatLiteral(10.4)
	assert expr.expr.right.expr == FloatLiteral(9.6)
	assert expr.expr.right.span == Span(7, 10)
	assert format_expression(expr) == "BinaryOp(Plus, FloatLiteral(10.4), FloatLiteral(9.6))"


def test_nested_left_operand_stays_nested() -> None:
	inner = node(
		RuleId.plus_expr,
		"1-2",
		0,
		node(RuleId.plus_expr, "1", 0, node(RuleId.int, "1", 0)),
		node(RuleId.plus_op, "-", 1),
		node(RuleId.int, "2", 2),
	)
	outer = node(RuleId.plus_expr, "1-2-3", 0, inner, node(RuleId.plus_op, "-", 3), node(RuleId.int, "3", 4))
	assert format_expression(lower(outer)) == "BinaryOp(Minus, BinaryOp(Minus, IntLiteral(1), IntLiteral(2)), IntLiteral(3))"


@pytest.mark.parametrize("count", [0, 2, 4])
def test_other_arities_are_malformed(count: int) -> None:
	children = [node(RuleId.int, "1", i) for i in range(count)]
	with pytest.raises(MalformedArity) as excinfo:
		lower(node(RuleId.mul_expr, "1" * max(count, 1), 0, *children))
	assert excinfo.value.count == count
	assert excinfo.value.rule is RuleId.mul_expr


def test_string_wrappers_pass_through() -> None:
	inner = node(RuleId.double_quote_string_inner, "hi", 1)
	wrapped = node(RuleId.string, '"hi"', 0, node(RuleId.double_quote_string, '"hi"', 0, inner))
	expr = lower(wrapped)
	assert expr.expr == StringLiteral("hi")
	assert expr.ty is Type.STRING
	assert expr.span == Span(1, 3)


def test_string_content_is_verbatim() -> None:
	expr = lower(node(RuleId.single_quote_string_inner, r"a\nb"))
	assert expr.expr == StringLiteral(r"a\nb")
	assert lower(node(RuleId.backtick_string_inner, "x y")).expr == StringLiteral("x y")


def test_empty_string_content() -> None:
	empty = CstNode(rule=RuleId.double_quote_string_inner, span=Span(1, 1), text="")
	expr = lower(CstNode(rule=RuleId.double_quote_string, span=Span(0, 2), text='""', children=(empty,)))
	assert expr.expr == StringLiteral("")
	assert expr.span.width == 0


@pytest.mark.parametrize("count", [0, 2])
def test_wrapper_without_single_child_is_incomplete(count: int) -> None:
	children = [node(RuleId.double_quote_string_inner, "a", 1) for _ in range(count)]
	with pytest.raises(IncompleteString):
		lower(node(RuleId.double_quote_string, '"a"', 0, *children))


def test_unhandled_rule_is_unsupported() -> None:
	with pytest.raises(UnsupportedRule) as excinfo:
		lower(node(RuleId.let_command, "let a = 1", 0))
	assert excinfo.value.rule is RuleId.let_command
	assert excinfo.value.to_dict()["code"] == "unsupported-rule"


def test_error_deep_in_tree_propagates() -> None:
	bad = node(RuleId.plus_expr, "1+x", 0, node(RuleId.int, "1", 0), node(RuleId.plus_op, "+", 1), node(RuleId.variable, "x", 2))
	with pytest.raises(UnsupportedRule) as excinfo:
		lower(bad)
	assert excinfo.value.span == Span(2, 3)


def test_try_lower_returns_error_value() -> None:
	result = try_lower(node(RuleId.record, "{}", 0))
	assert not result.ok
	assert isinstance(result.error, LoweringError)
	assert result.expression is None


def test_lower_trees_continues_past_failures() -> None:
	trees = [node(RuleId.int, "1", 0), node(RuleId.block, "{}", 2), node(RuleId.float, "2.0", 5)]
	results = lower_trees(trees)
	assert [result.ok for result in results] == [True, False, True]
	assert results[0].expression.expr == IntLiteral(1)
	assert isinstance(results[1].error, UnsupportedRule)
	assert results[2].expression.expr == FloatLiteral(2.0)
	assert results[1].tree is trees[1]
