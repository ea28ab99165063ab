# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
nupeg: parse Nushell-style source with a lark grammar and lower its
expression subset into a typed AST.

Pipeline: `rules` names the productions, `cst.parse` runs the grammar,
`lower.lower_trees` builds the AST, `diagnostics` dumps raw trees. The CLI
entrypoint is `nupeg.driver:main`.
"""

from .ast import Expression, format_expression
from .cst import CstNode, parse
from .errors import LoweringError, NupegError, ParseError, UnknownRule
from .lower import LowerResult, lower, lower_trees, try_lower
from .rules import DEFAULT_RULE, RuleId, lookup, resolve_rule
from .span import Span

__all__ = [
	"CstNode",
	"DEFAULT_RULE",
	"Expression",
	"LowerResult",
	"LoweringError",
	"NupegError",
	"ParseError",
	"RuleId",
	"Span",
	"UnknownRule",
	"format_expression",
	"lookup",
	"lower",
	"lower_trees",
	"parse",
	"resolve_rule",
	"try_lower",
]
