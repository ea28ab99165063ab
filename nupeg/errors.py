# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Error taxonomy for parsing and lowering.

Every error is a `ValueError` subclass carrying a stable `code` so the CLI can
emit structured diagnostics (`to_dict`) as well as human-readable lines.
Lowering errors additionally carry the span of the CST node that failed.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Optional

from .span import Span

if TYPE_CHECKING:
	from .rules import RuleId


class NupegError(ValueError):
	"""Base class for all user-facing errors."""

	code = "error"

	def __init__(self, message: str) -> None:
		super().__init__(message)
		self.message = message

	def to_dict(self) -> Dict[str, Any]:
		return {"code": self.code, "message": self.message}


class UnknownRule(NupegError):
	"""A rule name given on the command line is not a grammar production."""

	code = "unknown-rule"

	def __init__(self, name: str) -> None:
		super().__init__(f"unknown rule '{name}'")
		self.name = name


class ParseError(NupegError):
	"""The parser rejected the input at the selected entry production."""

	code = "parse-error"

	def __init__(self, message: str, *, line: Optional[int] = None, column: Optional[int] = None) -> None:
		super().__init__(message)
		self.line = line
		self.column = column

	def to_dict(self) -> Dict[str, Any]:
		data = super().to_dict()
		data["line"] = self.line
		data["column"] = self.column
		return data


class LoweringError(NupegError):
	"""A CST node could not be lowered to an AST node."""

	code = "lowering-error"

	def __init__(self, message: str, *, span: Span) -> None:
		super().__init__(message)
		self.span = span

	def to_dict(self) -> Dict[str, Any]:
		data = super().to_dict()
		data["span"] = self.span.to_dict()
		return data


class MalformedArity(LoweringError):
	"""A precedence-chain node has a child count other than 1 or 3."""

	code = "malformed-arity"

	def __init__(self, rule: "RuleId", count: int, *, span: Span) -> None:
		super().__init__(f"{rule.value} expects 1 or 3 children, got {count}", span=span)
		self.rule = rule
		self.count = count


class LiteralParse(LoweringError):
	"""Literal text failed numeric conversion."""

	code = "literal-parse"

	def __init__(self, text: str, *, span: Span) -> None:
		super().__init__(f"cannot parse literal {text!r}", span=span)
		self.text = text


class UnsupportedOperator(LoweringError):
	"""Operator text outside the operator table of its precedence tier."""

	code = "unsupported-operator"

	def __init__(self, text: str, *, span: Span) -> None:
		super().__init__(f"operator {text!r} is not supported", span=span)
		self.text = text


class IncompleteString(LoweringError):
	"""A string wrapper without exactly one content child."""

	code = "incomplete-string"

	def __init__(self, text: str, *, span: Span) -> None:
		super().__init__(f"string {text!r} has no resolvable content", span=span)
		self.text = text


class UnsupportedRule(LoweringError):
	"""No lowering exists for this production yet."""

	code = "unsupported-rule"

	def __init__(self, rule: "RuleId", *, span: Span) -> None:
		super().__init__(f"no lowering for rule {rule.value}", span=span)
		self.rule = rule


__all__ = [
	"NupegError",
	"UnknownRule",
	"ParseError",
	"LoweringError",
	"MalformedArity",
	"LiteralParse",
	"UnsupportedOperator",
	"IncompleteString",
	"UnsupportedRule",
]
