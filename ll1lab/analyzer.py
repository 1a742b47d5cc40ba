from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from ll1lab.errors import GrammarStateError, NotLL1Error
from ll1lab.grammar import END_MARKER, EPSILON, Grammar, Production

Table = Dict[str, Dict[str, int]]


@dataclass
class ParserState:
	"""Scratch space for one evaluation: symbol stack, pending input and applied rules."""

	stack: List[str] = field(default_factory=list)
	input: List[str] = field(default_factory=list)
	rule: List[str] = field(default_factory=list)

	def reset(self, tokens: List[str], start: str) -> None:
		self.stack = [END_MARKER, start]
		self.input = tokens + [END_MARKER]
		self.rule = []


@dataclass(frozen=True)
class ParseStep:
	stack: List[str]
	remaining_input: List[str]
	action: str


@dataclass(frozen=True)
class ParseResult:
	accepted: bool
	error: Optional[str]
	steps: List[ParseStep]
	rules: List[str]


class LL1Analyzer:
	"""
	Predictive (table-driven) LL(1) parser over a classified Grammar.

	The analyzer owns the grammar while it is alive; nothing else should
	mutate it. build_table() refuses grammars that are not LL(1).
	"""

	def __init__(self, grammar: Grammar) -> None:
		self.grammar = grammar
		self.table: Table = {nt: {} for nt in grammar.non_terminals()}
		self.parser = ParserState()
		self._built = False

	@property
	def is_built(self) -> bool:
		return self._built

	def build_table(self) -> Table:
		if not self.grammar.is_ll1():
			details = "; ".join(d.message for d in self.grammar.conflicts())
			raise NotLL1Error(f"Grammar is not LL(1): {details}" if details else "Grammar is not LL(1)")

		for production in self.grammar.productions():
			row = self.table[production.lhs]
			first = self.grammar.find_first_production(production.rhs)
			for symbol in first:
				if symbol != EPSILON:
					row[symbol] = production.index
			if EPSILON in first:
				for symbol in self.grammar.find_follow(production.lhs):
					row[symbol] = production.index

		self._built = True
		return self.table

	def lookup(self, non_terminal: str, symbol: str) -> Optional[Production]:
		index = self.table.get(non_terminal, {}).get(symbol)
		return self.grammar.production(index) if index is not None else None

	def export_table(self) -> Dict[str, Dict[str, Optional[Production]]]:
		"""Every (non-terminal, terminal or end marker) cell, in grammar order; None where empty."""
		columns = self.grammar.terminals() + [END_MARKER]
		return {
			nt: {symbol: self.lookup(nt, symbol) for symbol in columns}
			for nt in self.grammar.non_terminals()
		}

	def eval(self, text: str) -> bool:
		return self.run(text, trace=False).accepted

	def run(self, text: str, *, trace: bool = True) -> ParseResult:
		"""
		Table-driven LL(1) parsing with an explicit stack.
		- Input is split on whitespace and the end marker is appended
		- The stack starts as [$, start] with the end marker at the bottom
		- Epsilon bodies push nothing
		"""
		if not self._built:
			raise GrammarStateError("build_table() must run before parsing input")

		tokens = text.split()
		state = self.parser
		state.reset(tokens, self.grammar.start_symbol)
		steps: List[ParseStep] = []

		def snapshot(action: str) -> None:
			if trace:
				steps.append(ParseStep(stack=list(state.stack), remaining_input=list(state.input), action=action))

		def finish(accepted: bool, error: Optional[str] = None) -> ParseResult:
			return ParseResult(accepted=accepted, error=error, steps=steps, rules=list(state.rule))

		if END_MARKER in tokens:
			return finish(False, f"'{END_MARKER}' is reserved for the end of input")

		snapshot("init")
		while True:
			if not state.stack or not state.input:
				return finish(False, "Unexpected end of parse")

			front = state.input[0]
			top = state.stack[-1]

			if top == END_MARKER and front == END_MARKER:
				snapshot("accept")
				return finish(True)

			if self.grammar.is_non_terminal(top):
				production = self.lookup(top, front)
				if production is None:
					return finish(False, f"No rule for M[{top}, {front}]")
				state.stack.pop()
				for symbol in reversed(production.rhs):
					if symbol != EPSILON:
						state.stack.append(symbol)
				state.rule.append(str(production))
				snapshot(str(production))
				continue

			if top != front:
				return finish(False, f"Mismatch: expected '{top}' but found '{front}'")
			state.stack.pop()
			state.input.pop(0)
			snapshot(f"match {front}")
