from __future__ import annotations

from dataclasses import dataclass
from itertools import combinations
from typing import Dict, FrozenSet, Iterable, List, Optional, Sequence, Set, Tuple

from ll1lab.diagnostics import Diagnostic, DiagnosticEngine, Severity
from ll1lab.errors import (
	GrammarError,
	GrammarStateError,
	LeftRecursionError,
	MalformedProductionError,
	UnknownSymbolError,
)

EPSILON = "'"
END_MARKER = "$"
ARROW = " -> "

DEFAULT_PRODUCTIONS: Tuple[str, ...] = (
	"S -> A",
	"A -> ( A )",
	"A -> two",
	"two -> a",
	"two -> b",
)


@dataclass(frozen=True)
class Production:
	index: int
	lhs: str
	rhs: Tuple[str, ...]

	@property
	def is_epsilon(self) -> bool:
		return self.rhs == (EPSILON,)

	def __str__(self) -> str:
		return f"{self.lhs}{ARROW}" + " ".join(self.rhs)


@dataclass
class Sides:
	"""Raw production text split around the arrow, indexed by production number."""

	left: List[str]
	right: List[str]


def split_production(raw: str) -> Tuple[str, str]:
	"""
	Split one "LHS -> RHS" line into its two sides.

	Notes:
	- The separator is the literal " -> " and must appear exactly once.
	- The LHS is a single symbol; the RHS holds one or more space separated symbols.
	- An empty body is written as a lone "'" (epsilon).
	"""
	parts = raw.strip().split(ARROW)
	if len(parts) != 2:
		raise MalformedProductionError(raw, f"expected exactly one '{ARROW.strip()}' separator")
	lhs, rhs = parts[0].strip(), parts[1].strip()
	if not lhs:
		raise MalformedProductionError(raw, "empty left-hand side")
	if len(lhs.split()) != 1:
		raise MalformedProductionError(raw, "left-hand side must be a single symbol")
	if lhs in (EPSILON, END_MARKER, ARROW.strip()):
		raise MalformedProductionError(raw, f"'{lhs}' cannot be defined")
	symbols = rhs.split()
	if not symbols:
		raise MalformedProductionError(raw, "empty right-hand side, use ' for epsilon")
	if END_MARKER in symbols:
		raise MalformedProductionError(raw, f"'{END_MARKER}' is reserved for the end marker")
	if ARROW.strip() in symbols:
		raise MalformedProductionError(raw, f"'{ARROW.strip()}' is reserved as the separator")
	if EPSILON in symbols and len(symbols) > 1:
		raise MalformedProductionError(raw, "epsilon must be the only symbol of its body")
	return lhs, rhs


class Grammar:
	"""
	A context-free grammar read from "LHS -> RHS" lines.

	The three classification steps (find_non_terminals, find_terminals,
	find_all_productions) must run in that order before FIRST/FOLLOW queries.
	FIRST and FOLLOW results are cached per non-terminal and never recomputed.
	"""

	def __init__(self, productions: Iterable[str]) -> None:
		left: List[str] = []
		right: List[str] = []
		for raw in productions:
			lhs, rhs = split_production(raw)
			left.append(lhs)
			right.append(rhs)
		if not left:
			raise GrammarError("A grammar needs at least one production")

		self.sides = Sides(left=left, right=right)
		self.diagnostics = DiagnosticEngine()

		self._non_terminals: Optional[List[str]] = None
		self._terminals: Optional[List[str]] = None
		self._non_terminal_set: FrozenSet[str] = frozenset()
		self._terminal_set: FrozenSet[str] = frozenset()

		self._bodies: Dict[int, Tuple[str, ...]] = {}
		self._indexes: Dict[str, List[int]] = {}
		for index, lhs in enumerate(left):
			self._indexes.setdefault(lhs, []).append(index)

		self._firsts: Dict[str, FrozenSet[str]] = {}
		self._follows: Dict[str, FrozenSet[str]] = {}
		self._first_stack: List[str] = []
		self._follows_in_progress: Dict[str, Set[str]] = {}

		self._ll1: Optional[bool] = None
		self._conflicts: List[Diagnostic] = []

	@classmethod
	def build(cls, productions: Iterable[str]) -> "Grammar":
		grammar = cls(productions)
		grammar.find_non_terminals()
		grammar.find_terminals()
		grammar.find_all_productions()
		return grammar

	def __len__(self) -> int:
		return len(self.sides.left)

	def __repr__(self) -> str:
		return f"Grammar(productions={len(self)}, start={self.sides.left[0]!r})"

	# -------------------------------------------------------------------
	# Classification

	def find_non_terminals(self) -> List[str]:
		non_terminals: List[str] = []
		for symbol in self.sides.left:
			if symbol not in non_terminals:
				non_terminals.append(symbol)
		self._non_terminals = non_terminals
		self._non_terminal_set = frozenset(non_terminals)
		return list(non_terminals)

	def find_terminals(self) -> List[str]:
		if self._non_terminals is None:
			raise GrammarStateError("find_non_terminals() must run before find_terminals()")
		terminals: List[str] = []
		for rhs in self.sides.right:
			# Bodies such as "( A )" hold several symbols.
			for symbol in rhs.split():
				if symbol == EPSILON or symbol in self._non_terminal_set or symbol in terminals:
					continue
				terminals.append(symbol)
		self._terminals = terminals
		self._terminal_set = frozenset(terminals)
		return list(terminals)

	def find_all_productions(self) -> None:
		for index in range(len(self)):
			self.body(index)

	def _require_classified(self) -> None:
		if self._non_terminals is None or self._terminals is None:
			raise GrammarStateError("Grammar symbols have not been classified yet")

	# -------------------------------------------------------------------
	# Accessors

	def non_terminals(self) -> List[str]:
		self._require_classified()
		return list(self._non_terminals or [])

	def terminals(self) -> List[str]:
		self._require_classified()
		return list(self._terminals or [])

	@property
	def start_symbol(self) -> str:
		return self.sides.left[0]

	def is_terminal(self, symbol: str) -> bool:
		return symbol in self._terminal_set

	def is_non_terminal(self, symbol: str) -> bool:
		return symbol in self._non_terminal_set

	def body(self, index: int) -> Tuple[str, ...]:
		cached = self._bodies.get(index)
		if cached is None:
			cached = tuple(self.sides.right[index].split())
			self._bodies[index] = cached
		return cached

	def production(self, index: int) -> Production:
		return Production(index=index, lhs=self.sides.left[index], rhs=self.body(index))

	def productions(self) -> List[Production]:
		return [self.production(i) for i in range(len(self))]

	def production_indexes(self, non_terminal: str) -> List[int]:
		return list(self._indexes.get(non_terminal, []))

	def productions_for(self, non_terminal: str) -> List[Production]:
		return [self.production(i) for i in self.production_indexes(non_terminal)]

	def ordered(self, symbols: Iterable[str]) -> List[str]:
		"""Terminals in grammar order, then the end marker, then epsilon."""
		rank = {symbol: i for i, symbol in enumerate(self._terminals or [])}
		tail = {END_MARKER: len(rank), EPSILON: len(rank) + 1}
		return sorted(symbols, key=lambda s: (rank.get(s, tail.get(s, len(rank) + 2)), s))

	# -------------------------------------------------------------------
	# FIRST

	def first(self, symbol: str) -> FrozenSet[str]:
		self._require_classified()
		return self.find_single_first(symbol)

	def find_single_first(self, symbol: str) -> FrozenSet[str]:
		if symbol in self._terminal_set:
			return frozenset({symbol})
		if symbol == EPSILON:
			return frozenset({EPSILON})
		if symbol not in self._non_terminal_set:
			raise UnknownSymbolError(symbol, "FIRST")

		cached = self._firsts.get(symbol)
		if cached is not None:
			return cached
		if symbol in self._first_stack:
			cycle = self._first_stack[self._first_stack.index(symbol):] + [symbol]
			raise LeftRecursionError(cycle)

		first: Set[str] = set()
		self._first_stack.append(symbol)
		try:
			for index in self.production_indexes(symbol):
				head = self.body(index)[0]
				if head == symbol:
					continue
				if head == EPSILON:
					first.add(EPSILON)
				elif head in self._non_terminal_set:
					first |= self.find_first_production(self.body(index))
				else:
					first.add(head)
		finally:
			self._first_stack.pop()

		result = frozenset(first)
		self._firsts[symbol] = result
		return result

	def find_first_production(self, sequence: Sequence[str]) -> FrozenSet[str]:
		"""
		FIRST of a symbol string, left to right.
		Epsilon is included only when every symbol of the string is nullable.
		"""
		first: Set[str] = set()
		for symbol in sequence:
			symbol_first = self.find_single_first(symbol)
			first |= symbol_first - {EPSILON}
			if EPSILON not in symbol_first:
				return frozenset(first)
		first.add(EPSILON)
		return frozenset(first)

	# -------------------------------------------------------------------
	# FOLLOW

	def follow(self, non_terminal: str) -> FrozenSet[str]:
		self._require_classified()
		return self.find_follow(non_terminal)

	def find_follow(self, non_terminal: str) -> FrozenSet[str]:
		if non_terminal not in self._non_terminal_set:
			raise UnknownSymbolError(non_terminal, "FOLLOW")

		cached = self._follows.get(non_terminal)
		if cached is not None:
			return cached

		# Re-entered through a cycle of rule 3 inheritances: hand back what is known so far.
		partial = self._follows_in_progress.get(non_terminal)
		if partial is not None:
			self.diagnostics.report(
				Severity.WARNING,
				f"FOLLOW({non_terminal}) was read while still being computed",
				symbol=non_terminal,
				hint="FOLLOW sets that inherit from each other may be incomplete",
			)
			return frozenset(partial)

		follow: Set[str] = set()
		self._follows_in_progress[non_terminal] = follow
		try:
			if non_terminal == self.start_symbol:
				follow.add(END_MARKER)
			for index, lhs in enumerate(self.sides.left):
				body = self.body(index)
				for position, symbol in enumerate(body):
					if symbol != non_terminal:
						continue
					beta = body[position + 1:]
					inherits = True
					if beta:
						beta_first = self.find_first_production(beta)
						follow |= beta_first - {EPSILON}
						inherits = EPSILON in beta_first
					if inherits and lhs != non_terminal:
						follow |= self.find_follow(lhs)
		finally:
			del self._follows_in_progress[non_terminal]

		result = frozenset(follow)
		self._follows[non_terminal] = result
		return result

	def firsts(self) -> Dict[str, FrozenSet[str]]:
		return {nt: self.first(nt) for nt in self.non_terminals()}

	def follows(self) -> Dict[str, FrozenSet[str]]:
		return {nt: self.follow(nt) for nt in self.non_terminals()}

	# -------------------------------------------------------------------
	# LL(1)

	def is_ll1(self) -> bool:
		"""
		True when no non-terminal has two alternatives whose FIRST sets overlap,
		and no nullable alternative has a sibling whose FIRST set meets FOLLOW.

		Every failing pair is reported as an ERROR diagnostic; see conflicts().
		"""
		self._require_classified()
		if self._ll1 is not None:
			return self._ll1

		valid = True
		seen_cycles: Set[FrozenSet[str]] = set()

		def report_cycle(exc: LeftRecursionError) -> None:
			key = frozenset(exc.cycle)
			if key in seen_cycles:
				return
			seen_cycles.add(key)
			self._report_conflict(str(exc), exc.cycle[0], "Left-recursive grammars cannot be parsed top-down")

		for nt in self._non_terminals or []:
			try:
				self.find_single_first(nt)
			except LeftRecursionError as exc:
				report_cycle(exc)
				valid = False

		for nt in self._non_terminals or []:
			indexes = self.production_indexes(nt)
			if len(indexes) < 2:
				continue
			try:
				alternatives = [(self.production(i), self.find_first_production(self.body(i))) for i in indexes]
				for (left, left_first), (right, right_first) in combinations(alternatives, 2):
					if not self._check_pair(nt, left, left_first, right, right_first):
						valid = False
			except LeftRecursionError as exc:
				report_cycle(exc)
				valid = False

		self._ll1 = valid
		return valid

	def _check_pair(
		self,
		non_terminal: str,
		left: Production,
		left_first: FrozenSet[str],
		right: Production,
		right_first: FrozenSet[str],
	) -> bool:
		shared = left_first & right_first
		if shared:
			self._report_conflict(
				f"FIRST/FIRST conflict in {non_terminal}: '{left}' and '{right}' share {self._fmt(shared)}",
				non_terminal,
				"Left-factor the alternatives or remove left recursion",
			)
			return False

		ok = True
		for nullable, nullable_first, other, other_first in (
			(left, left_first, right, right_first),
			(right, right_first, left, left_first),
		):
			if EPSILON not in nullable_first:
				continue
			overlap = other_first & self.find_follow(non_terminal)
			if overlap:
				self._report_conflict(
					f"FIRST/FOLLOW conflict in {non_terminal}: '{other}' starts with {self._fmt(overlap)}, "
					f"which may also follow {non_terminal} through '{nullable}'",
					non_terminal,
				)
				ok = False
		return ok

	def _report_conflict(self, message: str, symbol: str, hint: Optional[str] = None) -> None:
		self._conflicts.append(self.diagnostics.report(Severity.ERROR, message, symbol=symbol, hint=hint))

	def _fmt(self, symbols: Iterable[str]) -> str:
		return "{" + ", ".join(self.ordered(symbols)) + "}"

	def conflicts(self) -> List[Diagnostic]:
		return list(self._conflicts)


def default_grammar() -> Grammar:
	"""The balanced-parentheses demo grammar used when no grammar is supplied."""
	return Grammar.build(DEFAULT_PRODUCTIONS)
