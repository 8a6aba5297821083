"""
Tests for settlement endpoints.
"""
from fastapi.testclient import TestClient
from tripsplit.core.config import settings
from tripsplit.main import app

client = TestClient(app)


def test_health():
    """Liveness endpoints respond."""
    assert client.get("/health").json() == {"status": "healthy"}
    assert client.get("/").status_code == 200


def test_compute_two_members():
    """Alice pays 100.00 split in half; Bob owes her 50.00."""
    response = client.post(
        "/api/settlement/compute",
        json={
            "members": [
                {"id": "alice", "display_name": "Alice"},
                {"id": "bob", "display_name": "Bob"}
            ],
            "expenses": [
                {"id": "e1", "payer_id": "alice", "amount_cents": 10000, "currency": "USD"}
            ],
            "shares": [
                {"expense_id": "e1", "member_id": "alice", "share_cents": 5000},
                {"expense_id": "e1", "member_id": "bob", "share_cents": 5000}
            ]
        }
    )
    assert response.status_code == 200
    data = response.json()
    assert data["currency"] == "USD"
    assert [(b["member_id"], b["net_cents"]) for b in data["balances"]] == [("alice", 5000), ("bob", -5000)]
    assert data["transfers"] == [
        {
            "from_member_id": "bob",
            "from_display_name": "Bob",
            "to_member_id": "alice",
            "to_display_name": "Alice",
            "amount_cents": 5000,
            "formatted": "USD 50.00"
        }
    ]
    assert data["is_settled"] is False


def test_compute_without_expenses_is_settled():
    """No expenses: zero balances and no transfers, in the default currency."""
    response = client.post(
        "/api/settlement/compute",
        json={"members": [{"id": "a"}, {"id": "b"}]}
    )
    assert response.status_code == 200
    data = response.json()
    assert data["currency"] == "USD"
    assert data["transfers"] == []
    assert data["is_settled"] is True
    assert [b["net_cents"] for b in data["balances"]] == [0, 0]


def test_compute_mixed_currencies_requires_choice():
    """Several currencies without an explicit choice is a bad request."""
    payload = {
        "members": [{"id": "a"}, {"id": "b"}],
        "expenses": [
            {"id": "e1", "payer_id": "a", "amount_cents": 100, "currency": "USD"},
            {"id": "e2", "payer_id": "b", "amount_cents": 300, "currency": "EUR"}
        ],
        "shares": [
            {"expense_id": "e1", "member_id": "b", "share_cents": 100},
            {"expense_id": "e2", "member_id": "a", "share_cents": 300}
        ]
    }
    response = client.post("/api/settlement/compute", json=payload)
    assert response.status_code == 400

    payload["currency"] = "eur"
    response = client.post("/api/settlement/compute", json=payload)
    assert response.status_code == 200
    data = response.json()
    assert data["currency"] == "EUR"
    assert [(t["from_member_id"], t["to_member_id"], t["amount_cents"]) for t in data["transfers"]] == [("a", "b", 300)]


def test_compute_reports_unbalanced_expense():
    """Shares that fall short are reported alongside the result."""
    response = client.post(
        "/api/settlement/compute",
        json={
            "members": [{"id": "a"}, {"id": "b"}, {"id": "c"}],
            "expenses": [{"id": "e1", "payer_id": "a", "amount_cents": 100}],
            "shares": [
                {"expense_id": "e1", "member_id": "a", "share_cents": 33},
                {"expense_id": "e1", "member_id": "b", "share_cents": 33},
                {"expense_id": "e1", "member_id": "c", "share_cents": 33}
            ]
        }
    )
    assert response.status_code == 200
    assert response.json()["unbalanced_expense_ids"] == ["e1"]


def test_compute_rejects_negative_amounts():
    """Negative amounts fail validation at the boundary."""
    response = client.post(
        "/api/settlement/compute",
        json={
            "members": [{"id": "a"}],
            "expenses": [{"id": "e1", "payer_id": "a", "amount_cents": -100}]
        }
    )
    assert response.status_code == 422


def test_compute_rejects_empty_ids_and_bad_currency():
    """Empty ids and malformed currencies fail validation."""
    response = client.post("/api/settlement/compute", json={"members": [{"id": ""}]})
    assert response.status_code == 422

    response = client.post(
        "/api/settlement/compute",
        json={"members": [{"id": "a"}], "currency": "DOLLARS"}
    )
    assert response.status_code == 422


def test_get_trip_settlement(client, seeded_trip):
    """Trip settlement is read from the database."""
    response = client.get(f"/api/settlement/{seeded_trip['trip'].id}")
    assert response.status_code == 200
    data = response.json()
    assert data["trip_id"] == seeded_trip["trip"].id
    assert [(t["from_display_name"], t["to_display_name"], t["formatted"]) for t in data["transfers"]] == [
        ("Carol", "Alice", "USD 40.00"),
        ("Carol", "Bob", "USD 10.00"),
    ]


def test_get_trip_settlement_in_currency(client, seeded_trip):
    """A currency query selects which expenses are balanced."""
    response = client.get(f"/api/settlement/{seeded_trip['trip'].id}", params={"currency": "EUR"})
    assert response.status_code == 200
    data = response.json()
    assert data["total_expenses_cents"] == 3000
    assert [b["net_cents"] for b in data["balances"]] == [2000, -1000, -1000]


def test_get_trip_settlement_per_currency(client, seeded_trip):
    """One summary per currency."""
    response = client.get(f"/api/settlement/{seeded_trip['trip'].id}/currencies")
    assert response.status_code == 200
    assert [s["currency"] for s in response.json()] == ["EUR", "USD"]


def test_get_unknown_trip(client):
    """Unknown trips return 404."""
    response = client.get("/api/settlement/999")
    assert response.status_code == 404
    assert response.json()["detail"] == "Trip not found"
    assert client.get("/api/settlement/999/currencies").status_code == 404


def test_compute_expense_currency_defaults_to_setting(monkeypatch):
    """Expenses sent without a currency are balanced in the configured default."""
    monkeypatch.setattr(settings, "DEFAULT_CURRENCY", "EUR")
    response = client.post(
        "/api/settlement/compute",
        json={
            "members": [{"id": "a"}, {"id": "b"}],
            "expenses": [{"id": "e1", "payer_id": "a", "amount_cents": 400}],
            "shares": [{"expense_id": "e1", "member_id": "b", "share_cents": 400}]
        }
    )
    assert response.status_code == 200
    data = response.json()
    assert data["currency"] == "EUR"
    assert data["total_expenses_cents"] == 400
    assert data["transfers"][0]["formatted"] == "EUR 4.00"
