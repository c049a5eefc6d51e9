"""Tests for six7typing.server – the leaderboard HTTP API."""

from __future__ import annotations

import pytest

from six7typing.core.leaderboard import LeaderboardStore
from six7typing.server import MAX_LIST_LIMIT, create_app


@pytest.fixture()
def store(tmp_path) -> LeaderboardStore:
    return LeaderboardStore(tmp_path / "scores.json")


@pytest.fixture()
def client(store):
    app = create_app(store)
    app.config["TESTING"] = True
    return app.test_client()


# ---------------------------------------------------------------------------
# GET /scores
# ---------------------------------------------------------------------------

class TestListScores:
    def test_empty(self, client):
        res = client.get("/scores")
        assert res.status_code == 200
        assert res.get_json() == []

    def test_sorted_top_ten_by_default(self, client, store):
        for i in range(12):
            store.submit(f"p{i}", i * 10)
        body = client.get("/scores").get_json()
        assert len(body) == 10
        assert body[0] == {"name": "p11", "score": 110}
        assert [e["score"] for e in body] == sorted((e["score"] for e in body), reverse=True)

    def test_limit_param(self, client, store):
        for i in range(5):
            store.submit(f"p{i}", i)
        assert len(client.get("/scores?limit=2").get_json()) == 2

    @pytest.mark.parametrize("raw,expected", [("0", 1), ("-3", 1), ("abc", 5)])
    def test_limit_clamped(self, client, store, raw, expected):
        for i in range(5):
            store.submit(f"p{i}", i)
        assert len(client.get(f"/scores?limit={raw}").get_json()) == expected

    def test_limit_upper_bound(self, client, store):
        for i in range(MAX_LIST_LIMIT + 5):
            store.submit(f"p{i}", i % 200)
        assert len(client.get("/scores?limit=1000").get_json()) == MAX_LIST_LIMIT


# ---------------------------------------------------------------------------
# POST /scores
# ---------------------------------------------------------------------------

class TestSubmitScore:
    def test_accepts_valid(self, client, store):
        res = client.post("/scores", json={"name": "ana", "score": 42})
        assert res.status_code == 200
        assert res.get_data(as_text=True) == "OK"
        assert store.list_scores()[0].score == 42

    def test_trims_name(self, client, store):
        client.post("/scores", json={"name": "  ana  ", "score": 42})
        assert store.list_scores()[0].name == "ana"

    def test_lower_score_accepted_but_not_stored(self, client, store):
        client.post("/scores", json={"name": "ana", "score": 42})
        res = client.post("/scores", json={"name": "ana", "score": 10})
        assert res.status_code == 200
        assert store.list_scores()[0].score == 42

    @pytest.mark.parametrize(
        "payload",
        [
            {"name": "", "score": 10},
            {"name": "   ", "score": 10},
            {"name": "x" * 13, "score": 10},
            {"name": "ana", "score": 201},
            {"name": "ana", "score": -1},
            {"name": "ana", "score": "10"},
            {"name": "ana", "score": 10.5},
            {"name": "ana", "score": True},
            {"name": 5, "score": 10},
            {"name": "ana"},
            {"score": 10},
            [1, 2],
        ],
    )
    def test_rejects_invalid(self, client, store, payload):
        res = client.post("/scores", json=payload)
        assert res.status_code == 400
        assert res.get_data(as_text=True) == "Invalid"
        assert store.list_scores() == []

    def test_rejects_non_json_body(self, client):
        res = client.post("/scores", data="name=ana&score=3", content_type="text/plain")
        assert res.status_code == 400

    def test_rejects_malformed_json(self, client):
        res = client.post("/scores", data="{bad", content_type="application/json")
        assert res.status_code == 400
