from datetime import date


class TestTransactionCreation:
    """Tests for creating transactions"""

    def test_create_transaction_success(self, client, auth_headers, api, user_a):
        card = api.card()
        budget = api.budget(card["id"])
        category = api.category()

        response = client.post(
            "/api/transactions",
            headers=auth_headers,
            json={
                "card_id": card["id"],
                "budget_id": budget["id"],
                "category_id": category["id"],
                "amount": 50.00,
                "transaction_type": "expense",
                "date": "2024-01-15",
                "description": "Weekly shopping",
            },
        )

        assert response.status_code == 201
        txn = response.json()
        assert txn["amount"] == 50.00
        assert txn["transaction_type"] == "expense"
        assert txn["budget_id"] == budget["id"]
        assert txn["category_id"] == category["id"]
        assert txn["user_id"] == user_a.id

    def test_date_defaults_to_today(self, client, auth_headers, api):
        card = api.card()

        txn = api.transaction(card["id"], 5)

        assert txn["date"] == str(date.today())

    def test_amount_must_be_positive(self, client, auth_headers, api):
        card = api.card()

        for amount in (0, -50):
            response = client.post(
                "/api/transactions",
                headers=auth_headers,
                json={"card_id": card["id"], "amount": amount, "transaction_type": "expense"},
            )
            assert response.status_code == 422

    def test_invalid_type_rejected(self, client, auth_headers, api):
        card = api.card()

        response = client.post(
            "/api/transactions",
            headers=auth_headers,
            json={"card_id": card["id"], "amount": 5, "transaction_type": "refund"},
        )

        assert response.status_code == 422

    def test_card_required(self, client, auth_headers):
        response = client.post(
            "/api/transactions",
            headers=auth_headers,
            json={"amount": 5, "transaction_type": "expense"},
        )

        assert response.status_code == 422

    def test_other_users_card_rejected(self, client, api, user_a_headers, user_b_headers):
        foreign_card = api.card(headers=user_a_headers)

        response = client.post(
            "/api/transactions",
            headers=user_b_headers,
            json={"card_id": foreign_card["id"], "amount": 5, "transaction_type": "expense"},
        )

        assert response.status_code == 422
        assert response.json()["field"] == "card_id"
        assert api.balance(foreign_card["id"], headers=user_a_headers) == 0.00

    def test_other_users_budget_rejected(self, client, api, user_a_headers, user_b_headers):
        card = api.card(headers=user_b_headers)
        foreign_card = api.card(headers=user_a_headers)
        foreign_budget = api.budget(foreign_card["id"], headers=user_a_headers)

        response = client.post(
            "/api/transactions",
            headers=user_b_headers,
            json={
                "card_id": card["id"],
                "budget_id": foreign_budget["id"],
                "amount": 5,
                "transaction_type": "expense",
            },
        )

        assert response.status_code == 422
        assert response.json()["field"] == "budget_id"
        assert client.get("/api/transactions", headers=user_b_headers).json()["total"] == 0

    def test_other_users_category_rejected(self, client, api, user_a_headers, user_b_headers):
        card = api.card(headers=user_b_headers)
        foreign_category = api.category(headers=user_a_headers)

        response = client.post(
            "/api/transactions",
            headers=user_b_headers,
            json={
                "card_id": card["id"],
                "category_id": foreign_category["id"],
                "amount": 5,
                "transaction_type": "expense",
            },
        )

        assert response.status_code == 422
        assert response.json()["field"] == "category_id"


class TestCardBalance:
    """Card balance is recomputed from the transaction set"""

    def test_balance_scenario(self, client, auth_headers, api):
        card = api.card()
        api.transaction(card["id"], 100, "income")
        api.transaction(card["id"], 40, "expense")
        coffee = api.transaction(card["id"], 10, "expense")

        assert api.balance(card["id"]) == 50.00

        client.delete(f"/api/transactions/{coffee['id']}", headers=auth_headers)

        assert api.balance(card["id"]) == 60.00

    def test_transfer_moves_money_out_of_card(self, client, auth_headers, api):
        card = api.card()
        api.transaction(card["id"], 100, "income")
        api.transaction(card["id"], 25, "transfer")

        assert api.balance(card["id"]) == 75.00

    def test_update_amount_and_type(self, client, auth_headers, api):
        card = api.card()
        txn = api.transaction(card["id"], 40, "expense")

        client.patch(f"/api/transactions/{txn['id']}", headers=auth_headers, json={"amount": 55})
        assert api.balance(card["id"]) == -55.00

        client.patch(
            f"/api/transactions/{txn['id']}",
            headers=auth_headers,
            json={"transaction_type": "income"},
        )
        assert api.balance(card["id"]) == 55.00

    def test_moving_card_recomputes_both(self, client, auth_headers, api):
        old_card = api.card("Old")
        new_card = api.card("New")
        api.transaction(old_card["id"], 100, "income")
        moved = api.transaction(old_card["id"], 30, "expense")

        response = client.patch(
            f"/api/transactions/{moved['id']}",
            headers=auth_headers,
            json={"card_id": new_card["id"]},
        )

        assert response.status_code == 200
        assert response.json()["card_id"] == new_card["id"]
        assert api.balance(old_card["id"]) == 100.00
        assert api.balance(new_card["id"]) == -30.00


class TestTransactionUpdate:
    """Tests for updating transactions"""

    def test_owner_never_changes(self, client, api, user_a, user_b, user_a_headers):
        card = api.card(headers=user_a_headers)
        txn = api.transaction(card["id"], 10, headers=user_a_headers)

        response = client.patch(
            f"/api/transactions/{txn['id']}",
            headers=user_a_headers,
            json={"user_id": user_b.id, "description": "Edited"},
        )

        assert response.status_code == 200
        assert response.json()["user_id"] == user_a.id
        assert response.json()["description"] == "Edited"

    def test_card_cannot_be_cleared(self, client, auth_headers, api):
        card = api.card()
        txn = api.transaction(card["id"], 10)

        response = client.patch(
            f"/api/transactions/{txn['id']}",
            headers=auth_headers,
            json={"card_id": None, "amount": 99},
        )

        assert response.status_code == 400
        assert response.json()["field"] == "card_id"
        unchanged = client.get(f"/api/transactions/{txn['id']}", headers=auth_headers).json()
        assert unchanged["card_id"] == card["id"]
        assert unchanged["amount"] == 10.00

    def test_explicit_null_detaches_category(self, client, auth_headers, api):
        card = api.card()
        category = api.category()
        txn = api.transaction(card["id"], 10, category_id=category["id"])

        response = client.patch(
            f"/api/transactions/{txn['id']}", headers=auth_headers, json={"category_id": None}
        )

        assert response.status_code == 200
        assert response.json()["category_id"] is None

    def test_omitted_reference_is_kept(self, client, auth_headers, api):
        card = api.card()
        category = api.category()
        txn = api.transaction(card["id"], 10, category_id=category["id"])

        response = client.patch(
            f"/api/transactions/{txn['id']}", headers=auth_headers, json={"amount": 11}
        )

        assert response.json()["category_id"] == category["id"]

    def test_update_to_foreign_budget_rejected(self, client, api, user_a_headers, user_b_headers):
        card = api.card(headers=user_a_headers)
        txn = api.transaction(card["id"], 10, headers=user_a_headers)
        foreign_card = api.card(headers=user_b_headers)
        foreign_budget = api.budget(foreign_card["id"], headers=user_b_headers)

        response = client.patch(
            f"/api/transactions/{txn['id']}",
            headers=user_a_headers,
            json={"budget_id": foreign_budget["id"], "amount": 999},
        )

        assert response.status_code == 422
        unchanged = client.get(f"/api/transactions/{txn['id']}", headers=user_a_headers).json()
        assert unchanged["budget_id"] is None
        assert unchanged["amount"] == 10.00

    def test_other_users_transaction_forbidden(self, client, api, user_a_headers, user_b_headers):
        card = api.card(headers=user_a_headers)
        txn = api.transaction(card["id"], 10, headers=user_a_headers)

        response = client.patch(
            f"/api/transactions/{txn['id']}", headers=user_b_headers, json={"amount": 1}
        )

        assert response.status_code == 403


class TestTransactionRetrieval:
    """Listing and detail views"""

    def test_detail_resolves_references(self, client, auth_headers, api):
        card = api.card("Visa")
        budget = api.budget(card["id"], name="Groceries budget")
        category = api.category("Food")
        txn = api.transaction(
            card["id"], 10, budget_id=budget["id"], category_id=category["id"]
        )

        detail = client.get(f"/api/transactions/{txn['id']}", headers=auth_headers).json()

        assert detail["card"] == {"id": card["id"], "name": "Visa"}
        assert detail["budget"] == {"id": budget["id"], "name": "Groceries budget"}
        assert detail["category"] == {"id": category["id"], "name": "Food"}

    def test_list_filters(self, client, auth_headers, api):
        card = api.card()
        other_card = api.card("Other")
        category = api.category()
        api.transaction(card["id"], 10, date="2024-01-05", category_id=category["id"])
        api.transaction(card["id"], 20, "income", date="2024-02-05")
        api.transaction(other_card["id"], 30, date="2024-03-05")

        def total(**params):
            response = client.get("/api/transactions", headers=auth_headers, params=params)
            assert response.status_code == 200
            return response.json()["total"]

        assert total() == 3
        assert total(card_id=card["id"]) == 2
        assert total(category_id=category["id"]) == 1
        assert total(transaction_type="income") == 1
        assert total(start_date="2024-02-01") == 2
        assert total(start_date="2024-01-01", end_date="2024-01-31") == 1

    def test_list_newest_first_with_pagination(self, client, auth_headers, api):
        card = api.card()
        for day in ("2024-01-01", "2024-01-03", "2024-01-02"):
            api.transaction(card["id"], 1, date=day)

        response = client.get(
            "/api/transactions", headers=auth_headers, params={"limit": 2, "offset": 0}
        )

        data = response.json()
        assert data["total"] == 3
        assert [t["date"] for t in data["transactions"]] == ["2024-01-03", "2024-01-02"]

    def test_users_see_only_own_transactions(self, client, api, user_a_headers, user_b_headers):
        card_a = api.card(headers=user_a_headers)
        card_b = api.card(headers=user_b_headers)
        api.transaction(card_a["id"], 10, headers=user_a_headers)
        api.transaction(card_b["id"], 10, headers=user_b_headers)
        api.transaction(card_b["id"], 10, headers=user_b_headers)

        assert client.get("/api/transactions", headers=user_a_headers).json()["total"] == 1
        assert client.get("/api/transactions", headers=user_b_headers).json()["total"] == 2


class TestTransactionDeletion:
    def test_delete_twice_returns_not_found(self, client, auth_headers, api):
        card = api.card()
        txn = api.transaction(card["id"], 10)

        assert client.delete(f"/api/transactions/{txn['id']}", headers=auth_headers).status_code == 204
        assert client.delete(f"/api/transactions/{txn['id']}", headers=auth_headers).status_code == 404
        assert api.balance(card["id"]) == 0.00
