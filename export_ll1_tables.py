from __future__ import annotations

"""
Export LL(1) artifacts (grammar, FIRST, FOLLOW, parse table) into Excel-friendly files.

Outputs (always):
  - LL1_Grammar.csv
  - LL1_FIRST.csv
  - LL1_FOLLOW.csv
  - LL1_ParseTable.csv

Optional (only if openpyxl is installed):
  - LL1_Parse_Table.xlsx  (multiple sheets)

Run:
  python -X utf8 export_ll1_tables.py [grammar.txt] [out_dir]
"""

import csv
import sys
from pathlib import Path
from typing import Dict, List, Optional

from ll1lab.analyzer import LL1Analyzer
from ll1lab.errors import GrammarError, SourceFormatError
from ll1lab.grammar import DEFAULT_PRODUCTIONS, END_MARKER, EPSILON, Grammar, Production
from ll1lab.reader import read_source


ROOT = Path(__file__).resolve().parent

Rows = List[List[str]]


def fmt_sym(s: str) -> str:
	return "eps" if s == EPSILON else s


def fmt_prod(p: Optional[Production]) -> str:
	if p is None:
		return ""
	return f"{p.lhs} -> " + " ".join(fmt_sym(s) for s in p.rhs)


def grammar_rows(grammar: Grammar) -> Rows:
	rows: Rows = [["Index", "Production"]]
	for p in grammar.productions():
		rows.append([str(p.index), fmt_prod(p)])
	return rows


def set_rows(title: str, grammar: Grammar, sets: Dict[str, frozenset]) -> Rows:
	rows: Rows = [[title, "Symbols"]]
	for nt in grammar.non_terminals():
		rows.append([nt, " ".join(fmt_sym(s) for s in grammar.ordered(sets[nt]))])
	return rows


def table_rows(analyzer: LL1Analyzer) -> Rows:
	exported = analyzer.export_table()
	columns = analyzer.grammar.terminals() + [END_MARKER]
	rows: Rows = [["NonTerminal"] + columns]
	for nt, row in exported.items():
		rows.append([nt] + [fmt_prod(row[t]) for t in columns])
	return rows


def write_csv(path: Path, rows: Rows) -> None:
	with path.open("w", newline="", encoding="utf-8") as f:
		w = csv.writer(f)
		for row in rows:
			w.writerow(row)


def try_export_xlsx(path: Path, sheets: Dict[str, Rows]) -> bool:
	try:
		import openpyxl  # type: ignore
		from openpyxl.utils import get_column_letter  # type: ignore
	except ImportError:
		return False

	wb = openpyxl.Workbook()
	wb.remove(wb.active)
	for title, rows in sheets.items():
		ws = wb.create_sheet(title)
		for row in rows:
			ws.append(row)

	# Basic column sizing
	for sheet in wb.worksheets:
		for col in range(1, sheet.max_column + 1):
			letter = get_column_letter(col)
			sheet.column_dimensions[letter].width = 22 if col == 1 else 18

	wb.save(path)
	return True


def export(grammar: Grammar, out_dir: Path) -> List[Path]:
	"""Write the CSV files (and the workbook when possible); returns the paths written."""
	if not grammar.is_ll1():
		details = "; ".join(d.message for d in grammar.conflicts())
		raise GrammarError(f"Grammar is not LL(1): {details}")

	analyzer = LL1Analyzer(grammar)
	analyzer.build_table()

	sheets = {
		"Grammar": grammar_rows(grammar),
		"FIRST": set_rows("FIRST", grammar, grammar.firsts()),
		"FOLLOW": set_rows("FOLLOW", grammar, grammar.follows()),
		"ParseTable": table_rows(analyzer),
	}
	files = {
		"Grammar": "LL1_Grammar.csv",
		"FIRST": "LL1_FIRST.csv",
		"FOLLOW": "LL1_FOLLOW.csv",
		"ParseTable": "LL1_ParseTable.csv",
	}

	out_dir.mkdir(parents=True, exist_ok=True)
	written: List[Path] = []
	for title, rows in sheets.items():
		path = out_dir / files[title]
		write_csv(path, rows)
		written.append(path)

	xlsx_path = out_dir / "LL1_Parse_Table.xlsx"
	if try_export_xlsx(xlsx_path, sheets):
		written.append(xlsx_path)
	return written


def main(argv: Optional[List[str]] = None) -> int:
	args = sys.argv[1:] if argv is None else argv
	try:
		productions = read_source(Path(args[0])).productions if args else list(DEFAULT_PRODUCTIONS)
		out_dir = Path(args[1]) if len(args) > 1 else ROOT
		written = export(Grammar.build(productions), out_dir)
	except (OSError, SourceFormatError, GrammarError) as exc:
		print(f"[ERROR] {exc}", file=sys.stderr)
		return 1

	print("Wrote:", ", ".join(p.name for p in written))
	return 0


if __name__ == "__main__":
	sys.exit(main())
