from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse
from fastapi.staticfiles import StaticFiles
from pydantic import BaseModel

from ll1lab.analyzer import LL1Analyzer, ParseResult
from ll1lab.diagnostics import Diagnostic
from ll1lab.errors import GrammarError, LeftRecursionError
from ll1lab.grammar import DEFAULT_PRODUCTIONS, END_MARKER, Grammar


app = FastAPI(title="LL(1) Grammar Lab", version="1.0.0")

STATIC_DIR = Path(__file__).parent / "static"
if STATIC_DIR.exists():
	app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")

app.add_middleware(
	CORSMiddleware,
	allow_origins=["*"],
	allow_credentials=True,
	allow_methods=["*"],
	allow_headers=["*"],
)


class LL1Request(BaseModel):
	# Example: ["S -> A", "A -> ( A )", "A -> two", "two -> a", "two -> b"]
	productions: Optional[List[str]] = None
	# Example: ["( ( a ) )", "( a ) )"]
	inputs: List[str] = []
	# Include the stack/input snapshots of every parse
	trace: bool = False


def _diagnostic_json(d: Diagnostic) -> Dict[str, Any]:
	return {
		"severity": d.severity.name,
		"message": d.message,
		"symbol": d.symbol,
		"hint": d.hint,
	}


def _result_json(text: str, result: ParseResult, *, trace: bool) -> Dict[str, Any]:
	out: Dict[str, Any] = {
		"input": text,
		"accepted": result.accepted,
		"error": result.error,
		"rules": result.rules,
	}
	if trace:
		out["steps"] = [
			{
				"stack": step.stack,
				"remaining_input": step.remaining_input,
				"action": step.action,
			}
			for step in result.steps
		]
	return out


@app.get("/", response_class=HTMLResponse)
def index() -> HTMLResponse:
	index_path = STATIC_DIR / "index.html"
	if index_path.exists():
		return HTMLResponse(index_path.read_text(encoding="utf-8"))
	return HTMLResponse(
		"<h2>LL(1) Grammar Lab API</h2><p>POST <code>/api/ll1</code> with JSON: "
		"<code>{\"productions\": [\"S -> A\", ...], \"inputs\": [\"...\"]}</code></p>"
	)


@app.get("/health")
def health() -> Dict[str, str]:
	return {"status": "ok"}


@app.post("/api/ll1")
def analyze(req: LL1Request) -> Dict[str, Any]:
	"""
	Classify the grammar, compute FIRST/FOLLOW and decide LL(1).

	The parsing table is built and the inputs evaluated only for LL(1) grammars;
	otherwise the conflicts are returned and "table"/"results" stay empty.
	"""
	productions = list(DEFAULT_PRODUCTIONS) if req.productions is None else req.productions
	try:
		grammar = Grammar.build(productions)
	except GrammarError as exc:
		raise HTTPException(status_code=400, detail=str(exc)) from exc

	ll1 = grammar.is_ll1()
	first: Dict[str, Optional[List[str]]] = {}
	follow: Dict[str, Optional[List[str]]] = {}
	for nt in grammar.non_terminals():
		# Left-recursive cycles have no FIRST set; they are already listed in "conflicts".
		try:
			first[nt] = grammar.ordered(grammar.first(nt))
		except LeftRecursionError:
			first[nt] = None
		try:
			follow[nt] = grammar.ordered(grammar.follow(nt))
		except LeftRecursionError:
			follow[nt] = None

	table_out: Optional[Dict[str, Dict[str, str]]] = None
	results: List[Dict[str, Any]] = []
	if ll1:
		analyzer = LL1Analyzer(grammar)
		analyzer.build_table()
		table_out = {
			nt: {symbol: str(p) if p is not None else "" for symbol, p in row.items()}
			for nt, row in analyzer.export_table().items()
		}
		for text in req.inputs:
			results.append(_result_json(text, analyzer.run(text, trace=req.trace), trace=req.trace))

	return {
		"grammar": {
			"start": grammar.start_symbol,
			"non_terminals": grammar.non_terminals(),
			"terminals": grammar.terminals(),
			"columns": grammar.terminals() + [END_MARKER],
			"productions": [str(p) for p in grammar.productions()],
		},
		"first": first,
		"follow": follow,
		"ll1": ll1,
		"conflicts": [_diagnostic_json(d) for d in grammar.conflicts()],
		"diagnostics": [_diagnostic_json(d) for d in grammar.diagnostics.items],
		"table": table_out,
		"results": results,
	}
