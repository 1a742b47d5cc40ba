from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import List, Optional


class Severity(Enum):
	INFO = auto()
	WARNING = auto()
	ERROR = auto()


@dataclass(frozen=True)
class Diagnostic:
	severity: Severity
	message: str
	symbol: Optional[str] = None
	hint: Optional[str] = None

	def __str__(self) -> str:
		return f"[{self.severity.name}] {self.message}"


class DiagnosticEngine:
	def __init__(self) -> None:
		self._items: List[Diagnostic] = []

	@property
	def items(self) -> List[Diagnostic]:
		return self._items

	def report(self, severity: Severity, message: str, symbol: Optional[str] = None, hint: Optional[str] = None) -> Diagnostic:
		diagnostic = Diagnostic(severity, message, symbol, hint)
		self._items.append(diagnostic)
		return diagnostic

	def errors(self) -> List[Diagnostic]:
		return [d for d in self._items if d.severity is Severity.ERROR]

	def warnings(self) -> List[Diagnostic]:
		return [d for d in self._items if d.severity is Severity.WARNING]

	def has_errors(self) -> bool:
		return any(d.severity is Severity.ERROR for d in self._items)

	def clear(self) -> None:
		self._items.clear()
