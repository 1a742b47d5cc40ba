"""
Line-oriented grammar source files.

  5
  S -> A
  A -> ( A )
  A -> two
  two -> a
  two -> b
  2
  ( ( a ) )
  ( a ) )

The first count gives the number of productions that follow. An optional
second count gives the number of input strings to evaluate. Blank lines and
lines starting with '#' are ignored everywhere except inside the input
block, where every line (even an empty one) is one input.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, List, Sequence, Tuple, Union

from ll1lab.errors import SourceFormatError


@dataclass
class LL1Source:
	productions: List[str]
	inputs: List[str] = field(default_factory=list)


def _significant(lines: Sequence[str], start: int) -> Iterator[Tuple[int, str]]:
	for i in range(start, len(lines)):
		line = lines[i].strip()
		if line and not line.startswith("#"):
			yield i, line


def _read_count(lines: Sequence[str], start: int, what: str) -> Tuple[int, int]:
	for i, line in _significant(lines, start):
		try:
			count = int(line)
		except ValueError:
			raise SourceFormatError(i + 1, f"expected the number of {what}, got {line!r}") from None
		if count < 0:
			raise SourceFormatError(i + 1, f"the number of {what} cannot be negative")
		return count, i + 1
	return -1, len(lines)


def parse_source(text: str) -> LL1Source:
	lines = text.splitlines()

	count, pos = _read_count(lines, 0, "productions")
	if count < 0:
		raise SourceFormatError(1, "missing production count")

	productions: List[str] = []
	for i, line in _significant(lines, pos):
		if len(productions) == count:
			break
		productions.append(line)
		pos = i + 1
	if len(productions) < count:
		raise SourceFormatError(len(lines), f"expected {count} productions, found {len(productions)}")

	inputs: List[str] = []
	count, pos = _read_count(lines, pos, "inputs")
	if count > 0:
		block = lines[pos:pos + count]
		if len(block) < count:
			raise SourceFormatError(len(lines), f"expected {count} inputs, found {len(block)}")
		inputs = [line.strip() for line in block]

	return LL1Source(productions=productions, inputs=inputs)


def read_source(path: Union[str, Path]) -> LL1Source:
	return parse_source(Path(path).read_text(encoding="utf-8"))
