from __future__ import annotations

import pytest

from ll1lab.analyzer import LL1Analyzer
from ll1lab.grammar import Grammar
from tests.grammars import EXPR, PAREN


@pytest.fixture
def paren() -> Grammar:
	return Grammar.build(PAREN)


@pytest.fixture
def expr() -> Grammar:
	return Grammar.build(EXPR)


@pytest.fixture
def paren_analyzer(paren: Grammar) -> LL1Analyzer:
	analyzer = LL1Analyzer(paren)
	analyzer.build_table()
	return analyzer
