# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Rule registry: the closed set of grammar productions and name lookup.

`RuleId` mirrors every named production of `nushell.lark` (plus the two
terminal-level productions `COMMENT` and `EOI`). Member names are the
production names themselves so CST dumps read like the grammar.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, List, Optional

from .errors import UnknownRule


class RuleId(Enum):
	and_expr = "and_expr"
	arg_list = "arg_list"
	array = "array"
	assignment = "assignment"
	assignment_operator = "assignment_operator"
	backtick_string = "backtick_string"
	backtick_string_char = "backtick_string_char"
	backtick_string_inner = "backtick_string_inner"
	bare_char = "bare_char"
	bare_follow_char = "bare_follow_char"
	bare_string = "bare_string"
	bare_value = "bare_value"
	bare_word = "bare_word"
	bin_int = "bin_int"
	binary_data = "binary_data"
	binary_data_bin = "binary_data_bin"
	binary_data_hex = "binary_data_hex"
	binary_data_oct = "binary_data_oct"
	bitand_expr = "bitand_expr"
	bitor_expr = "bitor_expr"
	bitxor_expr = "bitxor_expr"
	block = "block"
	break_command = "break_command"
	closure = "closure"
	closure_args = "closure_args"
	code_block = "code_block"
	command = "command"
	commands = "commands"
	COMMENT = "COMMENT"
	comp_expr = "comp_expr"
	comp_op = "comp_op"
	comp_op_word = "comp_op_word"
	continue_command = "continue_command"
	date_fullyear = "date_fullyear"
	date_mday = "date_mday"
	date_month = "date_month"
	date_or_datetime = "date_or_datetime"
	date_sigil = "date_sigil"
	date_time = "date_time"
	dec_int = "dec_int"
	def_command = "def_command"
	def_env_command = "def_env_command"
	double_quote_interpolated_string = "double_quote_interpolated_string"
	double_quote_string = "double_quote_string"
	double_quote_string_char = "double_quote_string_char"
	double_quote_string_inner = "double_quote_string_inner"
	duration = "duration"
	EOI = "EOI"
	expr = "expr"
	filesize = "filesize"
	flag = "flag"
	float = "float"
	for_command = "for_command"
	full_date = "full_date"
	full_time = "full_time"
	hex_int = "hex_int"
	ident = "ident"
	ident_char = "ident_char"
	if_command = "if_command"
	int = "int"
	interpolated_string = "interpolated_string"
	label = "label"
	let_command = "let_command"
	let_env_command = "let_env_command"
	local_date_time = "local_date_time"
	long_flag = "long_flag"
	mul_expr = "mul_expr"
	mul_op = "mul_op"
	mul_op_word = "mul_op_word"
	mut_command = "mut_command"
	named_arg = "named_arg"
	nl = "nl"
	oct_int = "oct_int"
	or_expr = "or_expr"
	pair = "pair"
	param = "param"
	params = "params"
	paren_expr = "paren_expr"
	partial_time = "partial_time"
	pathed_value = "pathed_value"
	pipeline = "pipeline"
	plus_expr = "plus_expr"
	plus_op = "plus_op"
	pow_expr = "pow_expr"
	program = "program"
	quotes = "quotes"
	range = "range"
	range_value = "range_value"
	record = "record"
	return_command = "return_command"
	row_and_expr = "row_and_expr"
	row_bitand_expr = "row_bitand_expr"
	row_bitor_expr = "row_bitor_expr"
	row_bitxor_expr = "row_bitxor_expr"
	row_comp_expr = "row_comp_expr"
	row_condition = "row_condition"
	row_mul_expr = "row_mul_expr"
	row_or_expr = "row_or_expr"
	row_plus_expr = "row_plus_expr"
	row_pow_expr = "row_pow_expr"
	row_shift_expr = "row_shift_expr"
	row_value = "row_value"
	shift_expr = "shift_expr"
	shift_op_word = "shift_op_word"
	short_flag = "short_flag"
	single_quote_interpolated_string = "single_quote_interpolated_string"
	single_quote_string = "single_quote_string"
	single_quote_string_char = "single_quote_string_char"
	single_quote_string_inner = "single_quote_string_inner"
	sp = "sp"
	string = "string"
	table = "table"
	time_hour = "time_hour"
	time_minute = "time_minute"
	time_offset = "time_offset"
	time_secfrac = "time_secfrac"
	time_second = "time_second"
	toplevel = "toplevel"
	traditional_call = "traditional_call"
	traditional_call_arg = "traditional_call_arg"
	unit = "unit"
	unnamed_arg = "unnamed_arg"
	user_command = "user_command"
	value = "value"
	variable = "variable"
	variable_char = "variable_char"
	variable_name = "variable_name"
	where_command = "where_command"
	while_command = "while_command"
	ws = "ws"

	@property
	def is_terminal(self) -> bool:
		"""True for productions the grammar defines as terminals, not rules."""
		return self.value.isupper()


DEFAULT_RULE = RuleId.program

_REGISTRY: Dict[str, RuleId] = {rule.value: rule for rule in RuleId}


def lookup(name: str) -> Optional[RuleId]:
	"""Exact, case-sensitive lookup of a production name."""
	return _REGISTRY.get(name)


def resolve_rule(name: str) -> RuleId:
	rule = lookup(name)
	if rule is None:
		raise UnknownRule(name)
	return rule


def rule_names() -> List[str]:
	return sorted(_REGISTRY)


__all__ = ["RuleId", "DEFAULT_RULE", "lookup", "resolve_rule", "rule_names"]
