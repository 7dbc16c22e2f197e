"""Integration tests for portfolio holdings, transactions and summary endpoints."""

from decimal import Decimal

from models import Holding, Transaction
from tests.fixtures import OWNER_ID, create_holding

BASE = f"/api/portfolios/{OWNER_ID}"

NEW_HOLDING = {
    "symbol": "jkh",
    "company_name": "John Keells Holdings",
    "quantity": "100",
    "purchase_price": "180",
    "purchase_date": "2024-03-01",
}


class TestHoldings:
    def test_add_holding_creates_transaction(self, client, db):
        response = client.post(f"{BASE}/holdings", json=NEW_HOLDING)

        assert response.status_code == 201
        holding_id = response.json()["id"]
        assert db.query(Holding).filter(Holding.id == holding_id).one().symbol == "JKH"
        assert db.query(Transaction).one().type == "buy"

    def test_add_holding_validates_positive_values(self, client):
        response = client.post(f"{BASE}/holdings", json={**NEW_HOLDING, "quantity": "0"})
        assert response.status_code == 422

        response = client.post(f"{BASE}/holdings", json={**NEW_HOLDING, "purchase_price": "-5"})
        assert response.status_code == 422

    def test_list_holdings(self, client, holding):
        data = client.get(f"{BASE}/holdings").json()

        assert len(data) == 1
        assert data[0]["id"] == holding.id
        assert Decimal(data[0]["quantity"]) == Decimal("100")

    def test_get_holding(self, client, holding):
        assert client.get(f"{BASE}/holdings/{holding.id}").status_code == 200
        assert client.get(f"/api/portfolios/other/holdings/{holding.id}").status_code == 404

    def test_update_holding(self, client, holding):
        response = client.patch(f"{BASE}/holdings/{holding.id}", json={"quantity": "150"})

        assert response.status_code == 200
        assert Decimal(response.json()["quantity"]) == Decimal("150")
        assert Decimal(response.json()["purchase_price"]) == Decimal("180")

    def test_update_missing_holding(self, client):
        response = client.patch(f"{BASE}/holdings/nope", json={"quantity": "1"})
        assert response.status_code == 404

    def test_delete_holding(self, client, holding):
        response = client.delete(f"{BASE}/holdings/{holding.id}")

        assert response.status_code == 204
        assert client.get(f"{BASE}/holdings").json() == []

    def test_delete_missing_holding(self, client):
        assert client.delete(f"{BASE}/holdings/nope").status_code == 404


class TestWithoutStore:
    def test_reads_are_empty(self, client_without_store):
        assert client_without_store.get(f"{BASE}/holdings").json() == []
        assert client_without_store.get(f"{BASE}/transactions").json() == []

    def test_writes_are_rejected(self, client_without_store):
        response = client_without_store.post(f"{BASE}/holdings", json=NEW_HOLDING)

        assert response.status_code == 503
        assert "add holding" in response.json()["detail"]

        assert client_without_store.patch(f"{BASE}/holdings/h1", json={"notes": "x"}).status_code == 503
        assert client_without_store.delete(f"{BASE}/holdings/h1").status_code == 503


class TestTransactions:
    def test_list_and_filter(self, client):
        client.post(f"{BASE}/holdings", json=NEW_HOLDING)
        client.post(f"{BASE}/holdings", json={**NEW_HOLDING, "symbol": "COMB"})

        assert len(client.get(f"{BASE}/transactions").json()) == 2
        data = client.get(f"{BASE}/transactions?symbol=comb").json()
        assert [t["symbol"] for t in data] == ["COMB"]
        assert Decimal(data[0]["total_amount"]) == Decimal("18000")

    def test_add_sell(self, client):
        response = client.post(
            f"{BASE}/transactions",
            json={"symbol": "JKH", "type": "sell", "quantity": "10", "price": "200"},
        )

        assert response.status_code == 201
        assert response.json()["type"] == "sell"
        assert Decimal(response.json()["total_amount"]) == Decimal("2000")


class TestSummary:
    def test_server_resolved_quotes(self, client, holding):
        data = client.get(f"{BASE}/summary").json()

        assert data["quote_source"] == "live"
        assert Decimal(data["total_invested"]) == Decimal("18000")
        assert Decimal(data["current_value"]) == Decimal("20000")
        assert Decimal(data["total_gain_loss"]) == Decimal("2000")
        assert data["holdings"][0]["id"] == holding.id
        assert data["top_performers"][0]["symbol"] == "JKH"

    def test_caller_supplied_quotes(self, client, holding):
        response = client.post(
            f"{BASE}/summary", json={"quotes": [{"symbol": "JKH", "price": "162"}]}
        )

        data = response.json()
        assert data["quote_source"] is None
        assert Decimal(data["current_value"]) == Decimal("16200")
        assert Decimal(data["total_gain_loss_percent"]) == Decimal("-10")

    def test_missing_quote_uses_purchase_price(self, client, holding):
        data = client.post(f"{BASE}/summary", json={"quotes": []}).json()

        h = data["holdings"][0]
        assert Decimal(h["current_price"]) == Decimal("180")
        assert Decimal(h["gain_loss"]) == Decimal("0")
        assert Decimal(h["gain_loss_percent"]) == Decimal("0")

    def test_aggregate(self, client, db):
        create_holding(db, "JKH", Decimal("10"), Decimal("100"))
        create_holding(db, "JKH", Decimal("10"), Decimal("200"))

        data = client.post(f"{BASE}/summary?aggregate=true", json={"quotes": []}).json()

        assert data["aggregated"] is True
        assert len(data["holdings"]) == 1
        h = data["holdings"][0]
        assert Decimal(h["quantity"]) == Decimal("20")
        assert Decimal(h["purchase_price"]) == Decimal("150")
        assert Decimal(h["invested"]) == Decimal("3000")

    def test_summary_without_store(self, client_without_store):
        data = client_without_store.get(f"{BASE}/summary").json()

        assert data["holdings"] == []
        assert Decimal(data["total_invested"]) == Decimal("0")
