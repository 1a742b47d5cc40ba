"""Exceptions raised while reading and analysing grammars."""

from __future__ import annotations

from typing import List


class GrammarError(ValueError):
	"""Base class for every grammar-level failure."""


class MalformedProductionError(GrammarError):
	def __init__(self, production: str, reason: str) -> None:
		super().__init__(f"Invalid production ({reason}): {production!r}")
		self.production = production
		self.reason = reason


class GrammarStateError(GrammarError):
	"""A query was made before the grammar was classified."""


class UnknownSymbolError(GrammarError):
	def __init__(self, symbol: str, context: str) -> None:
		super().__init__(f"Unknown symbol '{symbol}' in {context}")
		self.symbol = symbol


class LeftRecursionError(GrammarError):
	def __init__(self, cycle: List[str]) -> None:
		super().__init__("Left recursion through " + " -> ".join(cycle))
		self.cycle = cycle


class NotLL1Error(GrammarError):
	"""Raised when a parsing table is requested for a grammar that is not LL(1)."""


class SourceFormatError(ValueError):
	def __init__(self, line_no: int, message: str) -> None:
		super().__init__(f"line {line_no}: {message}")
		self.line_no = line_no
