"""
Tests for transaction API endpoints.
"""


class TestTransactions:

    def _create_accounts(self, client):
        """Helper to create cash and revenue accounts."""
        r1 = client.post("/accounts", json={
            "code": "1001", "name": "Cash", "account_type": "ASSET",
        })
        r2 = client.post("/accounts", json={
            "code": "4001", "name": "Revenue", "account_type": "REVENUE",
        })
        return r1.json()["id"], r2.json()["id"]

    def _post_sale(self, client, cash_id, revenue_id, amount=1500):
        return client.post("/transactions", json={
            "description": "Sale",
            "reference": "INV-7",
            "entries": [
                {"account_id": cash_id, "debit": amount},
                {"account_id": revenue_id, "credit": amount},
            ],
        })

    def _balance(self, client, account_id):
        return float(client.get(f"/accounts/{account_id}").json()["balance"])

    def test_create_returns_201_with_entries(self, client):
        cash_id, revenue_id = self._create_accounts(client)
        response = self._post_sale(client, cash_id, revenue_id)

        assert response.status_code == 201
        data = response.json()
        assert len(data["entries"]) == 2
        assert data["entries"][0]["account"]["code"] == "1001"
        assert self._balance(client, cash_id) == 1500.0
        assert self._balance(client, revenue_id) == 1500.0

    def test_unbalanced_returns_400(self, client):
        cash_id, revenue_id = self._create_accounts(client)
        response = client.post("/transactions", json={
            "description": "Bad",
            "entries": [
                {"account_id": cash_id, "debit": 100},
                {"account_id": revenue_id, "credit": 50},
            ],
        })
        assert response.status_code == 400
        assert response.json()["detail"]["kind"] == "Unbalanced"

    def test_missing_entries_is_invalid_input(self, client):
        response = client.post("/transactions", json={"description": "No lines"})
        assert response.status_code == 400
        assert response.json()["detail"]["kind"] == "InvalidInput"

    def test_unknown_account_returns_404(self, client):
        cash_id, _ = self._create_accounts(client)
        response = client.post("/transactions", json={
            "description": "Ghost",
            "entries": [
                {"account_id": cash_id, "debit": 5},
                {"account_id": 999, "credit": 5},
            ],
        })
        assert response.status_code == 404
        assert response.json()["detail"]["kind"] == "AccountsNotFound"

    def test_update_replaces_balances(self, client):
        cash_id, revenue_id = self._create_accounts(client)
        txn_id = self._post_sale(client, cash_id, revenue_id).json()["id"]

        response = client.put(f"/transactions/{txn_id}", json={
            "entries": [
                {"account_id": cash_id, "debit": 700},
                {"account_id": revenue_id, "credit": 700},
            ],
        })

        assert response.status_code == 200
        assert self._balance(client, cash_id) == 700.0
        assert self._balance(client, revenue_id) == 700.0

    def test_update_clears_reference(self, client):
        cash_id, revenue_id = self._create_accounts(client)
        txn_id = self._post_sale(client, cash_id, revenue_id).json()["id"]

        response = client.put(f"/transactions/{txn_id}", json={"reference": ""})
        assert response.json()["reference"] is None
        assert self._balance(client, cash_id) == 1500.0

    def test_delete_restores_balances(self, client):
        cash_id, revenue_id = self._create_accounts(client)
        txn_id = self._post_sale(client, cash_id, revenue_id).json()["id"]

        response = client.delete(f"/transactions/{txn_id}")

        assert response.status_code == 200
        assert self._balance(client, cash_id) == 0.0
        assert client.get(f"/transactions/{txn_id}").status_code == 404

    def test_delete_missing_returns_404(self, client):
        assert client.delete("/transactions/999").status_code == 404

    def test_list_with_pagination(self, client):
        cash_id, revenue_id = self._create_accounts(client)
        for amount in (10, 20, 30):
            self._post_sale(client, cash_id, revenue_id, amount)

        response = client.get("/transactions", params={"page": 1, "limit": 2})
        data = response.json()
        assert response.status_code == 200
        assert len(data["transactions"]) == 2
        assert data["pagination"] == {
            "total": 3, "page": 1, "limit": 2, "total_pages": 2,
        }
