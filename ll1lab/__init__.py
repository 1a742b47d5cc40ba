"""LL(1) grammar analysis: FIRST/FOLLOW sets, predictive table, table-driven parsing."""

from ll1lab.analyzer import LL1Analyzer, ParseResult, ParserState, ParseStep
from ll1lab.diagnostics import Diagnostic, DiagnosticEngine, Severity
from ll1lab.errors import (
	GrammarError,
	GrammarStateError,
	LeftRecursionError,
	MalformedProductionError,
	NotLL1Error,
	SourceFormatError,
	UnknownSymbolError,
)
from ll1lab.grammar import ARROW, END_MARKER, EPSILON, Grammar, Production, default_grammar
from ll1lab.reader import LL1Source, parse_source, read_source

__all__ = [
	"ARROW",
	"END_MARKER",
	"EPSILON",
	"Diagnostic",
	"DiagnosticEngine",
	"Grammar",
	"GrammarError",
	"GrammarStateError",
	"LL1Analyzer",
	"LL1Source",
	"LeftRecursionError",
	"MalformedProductionError",
	"NotLL1Error",
	"ParseResult",
	"ParseStep",
	"ParserState",
	"Production",
	"Severity",
	"SourceFormatError",
	"UnknownSymbolError",
	"default_grammar",
	"parse_source",
	"read_source",
]
