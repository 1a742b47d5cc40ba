from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from tests.grammars import INDIRECT_LEFT_RECURSIVE, LEFT_RECURSIVE, PAREN
from webapp.main import app


@pytest.fixture
def client() -> TestClient:
	return TestClient(app)


def test_health(client):
	assert client.get("/health").json() == {"status": "ok"}


def test_index(client):
	res = client.get("/")
	assert res.status_code == 200
	assert "/api/ll1" in res.text


def test_analyze_paren_grammar(client):
	res = client.post("/api/ll1", json={"productions": PAREN, "inputs": ["( ( a ) )", "( a ) )"]})
	assert res.status_code == 200
	body = res.json()
	assert body["ll1"] is True
	assert body["grammar"]["non_terminals"] == ["S", "A", "two"]
	assert body["grammar"]["terminals"] == ["(", ")", "a", "b"]
	assert body["grammar"]["columns"] == ["(", ")", "a", "b", "$"]
	assert body["first"]["A"] == ["(", "a", "b"]
	assert body["follow"]["A"] == [")", "$"]
	assert body["table"]["A"]["("] == "A -> ( A )"
	assert body["table"]["A"][")"] == ""
	assert [r["accepted"] for r in body["results"]] == [True, False]
	assert "steps" not in body["results"][0]
	assert body["conflicts"] == []


def test_trace(client):
	res = client.post("/api/ll1", json={"productions": PAREN, "inputs": ["a"], "trace": True})
	result = res.json()["results"][0]
	assert result["rules"] == ["S -> A", "A -> two", "two -> a"]
	assert result["steps"][0]["action"] == "init"
	assert result["steps"][-1]["action"] == "accept"


def test_default_grammar(client):
	body = client.post("/api/ll1", json={"inputs": ["b"]}).json()
	assert body["grammar"]["start"] == "S"
	assert body["results"][0]["accepted"] is True


def test_not_ll1_builds_no_table(client):
	body = client.post("/api/ll1", json={"productions": LEFT_RECURSIVE, "inputs": ["id"]}).json()
	assert body["ll1"] is False
	assert body["table"] is None
	assert body["results"] == []
	assert body["conflicts"][0]["severity"] == "ERROR"
	assert body["conflicts"][0]["symbol"] == "E"


def test_left_recursive_cycle_has_no_first(client):
	body = client.post("/api/ll1", json={"productions": INDIRECT_LEFT_RECURSIVE}).json()
	assert body["ll1"] is False
	assert body["first"]["A"] is None
	assert body["follow"]["A"] == ["y", "$"]


def test_malformed_production(client):
	res = client.post("/api/ll1", json={"productions": ["S a"]})
	assert res.status_code == 400
	assert "S a" in res.json()["detail"]


def test_empty_grammar_is_rejected(client):
	res = client.post("/api/ll1", json={"productions": [], "inputs": ["a"]})
	assert res.status_code == 400
	assert "at least one production" in res.json()["detail"]
