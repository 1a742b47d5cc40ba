from __future__ import annotations

"""
Print the analysis of a grammar source file: symbols, FIRST/FOLLOW sets,
diagnostics, LL(1) table entries and the verdict for every input.
Without a file argument the built-in demo grammar is analysed.

Usage:
  python -X utf8 gen_ll1_logs.py [grammar.txt]
"""

import sys
from pathlib import Path
from typing import List, Optional, TextIO

from ll1lab.analyzer import LL1Analyzer
from ll1lab.errors import GrammarError, SourceFormatError
from ll1lab.grammar import DEFAULT_PRODUCTIONS, Grammar
from ll1lab.reader import LL1Source, read_source


def fmt_set(grammar: Grammar, symbols: frozenset) -> str:
	return "{" + ", ".join(grammar.ordered(symbols)) + "}"


def report(source: LL1Source, out: TextIO = sys.stdout) -> int:
	grammar = Grammar.build(source.productions)

	print("=== GRAMMAR ===", file=out)
	for p in grammar.productions():
		print(f"{p.index}: {p}", file=out)
	print(f"non-terminals: {' '.join(grammar.non_terminals())}", file=out)
	print(f"terminals: {' '.join(grammar.terminals())}", file=out)

	ll1 = grammar.is_ll1()

	print("\n=== FIRST / FOLLOW ===", file=out)
	for nt in grammar.non_terminals():
		try:
			print(f"{nt} => FIRST = {fmt_set(grammar, grammar.first(nt))}, FOLLOW = {fmt_set(grammar, grammar.follow(nt))}", file=out)
		except GrammarError as exc:
			print(f"{nt} => {exc}", file=out)

	if grammar.diagnostics.items:
		print("\n=== DIAGNOSTICS ===", file=out)
		for diagnostic in grammar.diagnostics.items:
			print(diagnostic, file=out)

	if not ll1:
		print("\nThe grammar is not LL(1); no table was built.", file=out)
		return 1

	analyzer = LL1Analyzer(grammar)
	analyzer.build_table()

	print("\n=== LL(1) TABLE (non-empty cells) ===", file=out)
	for nt, row in analyzer.export_table().items():
		for symbol, p in row.items():
			if p is not None:
				print(f"M[{nt}, {symbol}] = {p}", file=out)

	if source.inputs:
		print("\n=== INPUTS ===", file=out)
	for text in source.inputs:
		result = analyzer.run(text, trace=False)
		verdict = "accepted" if result.accepted else f"rejected ({result.error})"
		print(f"{text!r}: {verdict}", file=out)
	return 0


def main(argv: Optional[List[str]] = None) -> int:
	args = sys.argv[1:] if argv is None else argv
	if args:
		try:
			source = read_source(Path(args[0]))
		except (OSError, SourceFormatError) as exc:
			print(f"[ERROR] {exc}", file=sys.stderr)
			return 2
	else:
		source = LL1Source(productions=list(DEFAULT_PRODUCTIONS), inputs=["( ( a ) )", "( a ) )"])

	try:
		return report(source)
	except GrammarError as exc:
		print(f"[ERROR] {exc}", file=sys.stderr)
		return 2


if __name__ == "__main__":
	sys.exit(main())
