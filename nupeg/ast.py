# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Typed AST for the expression sub-language.

Every node is an `Expression`: a payload (`Expr`), the span it came from and a
coarse type tag. Nodes are frozen and own their payloads, so they stay valid
after the CST and the source text are gone.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict

from .span import Span


class Operator(Enum):
	PLUS = "Plus"
	MINUS = "Minus"
	MULTIPLY = "Multiply"
	DIVIDE = "Divide"
	FLOOR_DIVIDE = "FloorDivide"


class Type(Enum):
	"""Structural type tag; assigned by the producing rule, never inferred."""

	ANY = "Any"
	STRING = "String"


class Expr:
	"""Base class for expression payloads."""
	pass


@dataclass(frozen=True)
class IntLiteral(Expr):
	value: int


@dataclass(frozen=True)
class FloatLiteral(Expr):
	value: float


@dataclass(frozen=True)
class StringLiteral(Expr):
	value: str


@dataclass(frozen=True)
class OperatorExpr(Expr):
	op: Operator


@dataclass(frozen=True)
class BinaryOp(Expr):
	operator: "Expression"
	left: "Expression"
	right: "Expression"


@dataclass(frozen=True)
class Expression:
	expr: Expr
	span: Span
	ty: Type = Type.ANY


def format_expression(node: Expression) -> str:
	"""Compact one-line rendering, e.g. `BinaryOp(Plus, IntLiteral(1), IntLiteral(2))`."""
	expr = node.expr
	if isinstance(expr, IntLiteral):
		return f"IntLiteral({expr.value})"
	if isinstance(expr, FloatLiteral):
		return f"FloatLiteral({expr.value!r})"
	if isinstance(expr, StringLiteral):
		return f"StringLiteral({expr.value!r})"
	if isinstance(expr, OperatorExpr):
		return expr.op.value
	if isinstance(expr, BinaryOp):
		return (
			f"BinaryOp({format_expression(expr.operator)}, "
			f"{format_expression(expr.left)}, {format_expression(expr.right)})"
		)
	return f"<unknown {type(expr).__name__}>"


def expression_to_dict(node: Expression) -> Dict[str, Any]:
	"""JSON-ready form carrying spans and type tags for every node."""
	expr = node.expr
	data: Dict[str, Any] = {
		"kind": type(expr).__name__,
		"span": node.span.to_dict(),
		"ty": node.ty.value,
	}
	if isinstance(expr, FloatLiteral):
		data["value"] = _json_float(expr.value)
	elif isinstance(expr, (IntLiteral, StringLiteral)):
		data["value"] = expr.value
	elif isinstance(expr, OperatorExpr):
		data["kind"] = "Operator"
		data["op"] = expr.op.value
	elif isinstance(expr, BinaryOp):
		data["operator"] = expression_to_dict(expr.operator)
		data["left"] = expression_to_dict(expr.left)
		data["right"] = expression_to_dict(expr.right)
	return data


def _json_float(value: float) -> float | str:
	# JSON has no inf/nan tokens; non-finite values travel as strings.
	if math.isnan(value):
		return "nan"
	if math.isinf(value):
		return "inf" if value > 0 else "-inf"
	return value


__all__ = [
	"Operator",
	"Type",
	"Expr",
	"IntLiteral",
	"FloatLiteral",
	"StringLiteral",
	"OperatorExpr",
	"BinaryOp",
	"Expression",
	"format_expression",
	"expression_to_dict",
]
