# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Source spans shared by the CST and the AST.

A Span is a half-open `[start, end)` range of byte offsets into the UTF-8
encoding of the source text the parser was run on. It is a plain value: AST
nodes keep their spans after the CST and the source buffer are gone.

Lark reports character offsets; `byte_offsets` builds the prefix table that
maps them to byte offsets.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Sequence, Tuple


@dataclass(frozen=True)
class Span:
	"""Half-open byte range `[start, end)` into the UTF-8 encoded source."""

	start: int = 0
	end: int = 0

	def __post_init__(self) -> None:
		if self.start < 0 or self.end < self.start:
			raise ValueError(f"invalid span [{self.start}, {self.end})")

	@property
	def width(self) -> int:
		return self.end - self.start

	def contains(self, other: "Span") -> bool:
		return self.start <= other.start and other.end <= self.end

	def slice(self, source: str) -> str:
		return source.encode("utf-8", "surrogatepass")[self.start:self.end].decode("utf-8", "surrogatepass")

	def to_dict(self) -> Dict[str, Any]:
		return {"start": self.start, "end": self.end}

	@classmethod
	def from_meta(cls, meta: Any, offsets: Sequence[int]) -> "Span":
		"""
		Construct a Span from a lark `Meta` or `Token`.

		Both carry character `start_pos`/`end_pos` once the parser runs with
		`propagate_positions=True`; `offsets` is the table from `byte_offsets`
		for the same source. An empty meta (a rule that matched nothing) has no
		positions; callers place those themselves.
		"""
		return cls(start=offsets[meta.start_pos], end=offsets[meta.end_pos])


def byte_offsets(source: str) -> List[int]:
	"""Prefix table: entry `i` is the UTF-8 byte offset of character `i`."""
	table = [0]
	total = 0
	for ch in source:
		total += len(ch.encode("utf-8", "surrogatepass"))
		table.append(total)
	return table


def location(source: str, offset: int) -> Tuple[int, int]:
	"""Map a byte offset to a 1-based `(line, column)` pair; columns count characters."""
	prefix = source.encode("utf-8", "surrogatepass")[:max(0, offset)].decode("utf-8", "ignore")
	line = prefix.count("\n") + 1
	return line, len(prefix) - (prefix.rfind("\n") + 1) + 1


__all__ = ["Span", "byte_offsets", "location"]
