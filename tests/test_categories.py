class TestCategoryCrud:
    """Tests for category create/read/update"""

    def test_create_category(self, client, auth_headers):
        response = client.post(
            "/api/categories",
            headers=auth_headers,
            json={"name": "Dining", "description": "Eating out", "budgeted_amount": 150},
        )

        assert response.status_code == 201
        category = response.json()
        assert category["name"] == "Dining"
        assert category["description"] == "Eating out"
        assert category["budgeted_amount"] == 150.00

    def test_budgeted_amount_defaults_to_zero(self, client, auth_headers):
        response = client.post("/api/categories", headers=auth_headers, json={"name": "Misc"})

        assert response.status_code == 201
        assert response.json()["budgeted_amount"] == 0.00

    def test_negative_budgeted_amount_rejected(self, client, auth_headers):
        response = client.post(
            "/api/categories", headers=auth_headers, json={"name": "Misc", "budgeted_amount": -1}
        )

        assert response.status_code == 422

    def test_list_and_update(self, client, auth_headers, api):
        category = api.category("Fuel")
        api.category("Rent")

        listing = client.get("/api/categories", headers=auth_headers).json()
        assert listing["total"] == 2

        response = client.patch(
            f"/api/categories/{category['id']}",
            headers=auth_headers,
            json={"budgeted_amount": 80},
        )
        assert response.status_code == 200
        assert response.json()["budgeted_amount"] == 80.00
        assert response.json()["name"] == "Fuel"

    def test_other_user_category_is_forbidden(self, client, api, user_a_headers, user_b_headers):
        category = api.category(headers=user_a_headers)

        response = client.get(f"/api/categories/{category['id']}", headers=user_b_headers)

        assert response.status_code == 403


class TestCategoryDeletion:
    """Category deletion detaches instead of blocking"""

    def test_delete_detaches_transactions(self, client, auth_headers, api):
        card = api.card()
        category = api.category()
        first = api.transaction(card["id"], 12, category_id=category["id"])
        second = api.transaction(card["id"], 30, category_id=category["id"])

        response = client.delete(f"/api/categories/{category['id']}", headers=auth_headers)
        assert response.status_code == 204

        for txn in (first, second):
            detail = client.get(f"/api/transactions/{txn['id']}", headers=auth_headers).json()
            assert detail["category_id"] is None
            assert detail["category"] is None

        # Balance is untouched by detaching
        assert api.balance(card["id"]) == -42.00

    def test_delete_removes_category_from_budgets(self, client, auth_headers, api):
        card = api.card()
        kept = api.category("Kept")
        removed = api.category("Removed")
        budget = api.budget(card["id"], category_ids=[kept["id"], removed["id"]])

        client.delete(f"/api/categories/{removed['id']}", headers=auth_headers)

        detail = client.get(f"/api/budgets/{budget['id']}", headers=auth_headers).json()
        assert detail["category_ids"] == [kept["id"]]
        assert [c["name"] for c in detail["categories"]] == ["Kept"]

    def test_delete_twice_returns_not_found(self, client, auth_headers, api):
        category = api.category()
        client.delete(f"/api/categories/{category['id']}", headers=auth_headers)

        response = client.delete(f"/api/categories/{category['id']}", headers=auth_headers)

        assert response.status_code == 404
