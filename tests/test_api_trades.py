"""Tests for trades API endpoints."""

import pytest
from fastapi.testclient import TestClient

from conftest import make_vector

SETUP = make_vector(yes_keys={"p1", "p4", "p13"})


def create_test_client(store) -> TestClient:
    """Create app wired to the given store."""
    from tradecheck.api.app import create_app, get_trade_store

    app = create_app()
    app.dependency_overrides[get_trade_store] = lambda: store
    return TestClient(app)


def _post_trade(client, result="Win", comments="", strategy="Strategy A", parameters=None):
    return client.post(
        "/api/trades",
        json={
            "strategy": strategy,
            "parameters": SETUP if parameters is None else parameters,
            "result": result,
            "comments": comments,
        },
    )


class TestCreateTrade:
    """Test POST /api/trades."""

    def test_create_trade(self, store):
        """Valid submission returns the saved record."""
        client = create_test_client(store)

        response = _post_trade(client, comments="clean")

        assert response.status_code == 201
        data = response.json()
        assert data["strategy"] == "Strategy A"
        assert data["parameters"]["p1"] is True
        assert data["parameters"]["p2"] is False
        assert data["comments"] == "clean"
        assert data["date"] == "1/5/2026"
        assert data["id"]
        assert len(store.get_all()) == 1

    def test_incomplete_parameters_rejected(self, store):
        """Unset answers give 400 and nothing is saved."""
        client = create_test_client(store)

        response = _post_trade(client, parameters=make_vector(unset_keys={"p3"}))

        assert response.status_code == 400
        assert "15 parameters" in response.json()["detail"]
        assert store.get_all() == []

    def test_empty_result_rejected(self, store):
        """Empty result gives 400."""
        client = create_test_client(store)
        response = _post_trade(client, result="")
        assert response.status_code == 400

    def test_malformed_body(self, store):
        """Missing fields fail request validation."""
        client = create_test_client(store)
        response = client.post("/api/trades", json={"strategy": "Strategy A"})
        assert response.status_code == 422

    @pytest.mark.parametrize("value", ["yes", 0, 1, "true"])
    def test_non_boolean_answer_rejected(self, store, value):
        """Answers must be JSON true/false/null; coercible values are a 422."""
        client = create_test_client(store)

        response = _post_trade(client, parameters=dict(SETUP, p1=value))

        assert response.status_code == 422
        assert store.get_all() == []

    def test_storage_failure_detail_is_generic(self, engine, clock):
        """A failed write is a 500 without database details."""
        from sqlalchemy.orm import sessionmaker

        from tradecheck.db.schema import Base
        from tradecheck.db.store import TradeStore

        store = TradeStore(sessionmaker(bind=engine), clock=clock)
        store.initialize()
        Base.metadata.drop_all(engine)
        client = create_test_client(store)

        response = _post_trade(client)

        assert response.status_code == 500
        assert response.json() == {"detail": "Error saving trade"}


class TestListTrades:
    """Test GET /api/trades."""

    def test_list_insertion_order(self, store):
        """Trades come back in save order."""
        client = create_test_client(store)
        ids = [_post_trade(client, result=r).json()["id"] for r in ["Win", "Loss"]]

        response = client.get("/api/trades")

        assert response.status_code == 200
        assert [t["id"] for t in response.json()] == ids

    def test_list_by_strategy(self, store):
        """Strategy query filters exactly."""
        client = create_test_client(store)
        _post_trade(client, strategy="Strategy A")
        _post_trade(client, strategy="Strategy B")

        response = client.get("/api/trades", params={"strategy": "Strategy B"})

        assert [t["strategy"] for t in response.json()] == ["Strategy B"]

    def test_list_chronological(self, store):
        """Chronological order is newest first."""
        client = create_test_client(store)
        first = _post_trade(client).json()["id"]
        second = _post_trade(client).json()["id"]

        response = client.get("/api/trades", params={"order": "chronological"})

        assert [t["id"] for t in response.json()] == [second, first]

    def test_invalid_order(self, store):
        """Unknown order value is a 422."""
        client = create_test_client(store)
        response = client.get("/api/trades", params={"order": "random"})
        assert response.status_code == 422


class TestDeleteTrades:
    """Test DELETE endpoints."""

    def test_delete_trade(self, store):
        """Deleting removes the trade."""
        client = create_test_client(store)
        trade_id = _post_trade(client).json()["id"]

        response = client.delete(f"/api/trades/{trade_id}")

        assert response.status_code == 200
        assert response.json() == {"success": True, "error": None}
        assert store.get_all() == []

    def test_delete_unknown(self, store):
        """Unknown id still succeeds."""
        client = create_test_client(store)
        response = client.delete("/api/trades/does-not-exist")
        assert response.status_code == 200

    def test_clear(self, store):
        """Clearing removes everything."""
        client = create_test_client(store)
        _post_trade(client)
        _post_trade(client)

        response = client.delete("/api/trades")

        assert response.status_code == 200
        assert store.get_all() == []


class TestCheckTrade:
    """Test POST /api/trades/check."""

    def test_check_scenario(self, store):
        """Two wins and a commented loss are grouped by result."""
        client = create_test_client(store)
        _post_trade(client, result="Win")
        _post_trade(client, result="Win")
        _post_trade(client, result="Loss", comments="good entry")

        response = client.post(
            "/api/trades/check", json={"strategy": "Strategy A", "parameters": SETUP}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["total_occurrences"] == 3
        assert [(g["result"], g["count"]) for g in data["groups"]] == [("Win", 2), ("Loss", 1)]
        assert data["groups"][0]["comments"] == []
        assert data["groups"][1]["comments"][0]["comment"] == "good entry"
        assert data["message"].startswith("Found 3")

    def test_check_no_history(self, store):
        """Empty history is a normal response."""
        client = create_test_client(store)
        response = client.post(
            "/api/trades/check", json={"strategy": "Strategy A", "parameters": SETUP}
        )
        assert response.status_code == 200
        assert response.json()["total_occurrences"] == 0
        assert response.json()["groups"] == []

    def test_check_other_strategy(self, store):
        """Trades from another strategy are not matched."""
        client = create_test_client(store)
        _post_trade(client, strategy="Strategy B")
        response = client.post(
            "/api/trades/check", json={"strategy": "Strategy A", "parameters": SETUP}
        )
        assert response.json()["total_occurrences"] == 0

    def test_check_incomplete(self, store):
        """Unset answers give 400."""
        client = create_test_client(store)
        response = client.post(
            "/api/trades/check",
            json={"strategy": "Strategy A", "parameters": make_vector(unset_keys={"p1"})},
        )
        assert response.status_code == 400

    def test_check_non_boolean_answer_rejected(self, store):
        """A string answer is a 422, not a silent coercion."""
        client = create_test_client(store)
        response = client.post(
            "/api/trades/check",
            json={"strategy": "Strategy A", "parameters": dict(SETUP, p2="no")},
        )
        assert response.status_code == 422
