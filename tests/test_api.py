"""Integration tests for the HTTP endpoints via TestClient."""

from fastapi.testclient import TestClient

from fooddelivery.core.config import Settings
from fooddelivery.main import create_app

from helpers import register, register_payload


def _add(client, email, item_id):
    response = client.post(f"/cart/{email}/{item_id}")
    assert response.status_code == 200, response.text
    return response.json()


def _checkout(client, email):
    response = client.post(f"/orders/{email}")
    assert response.status_code == 201, response.text
    return response.json()


class TestRootEndpoints:
    def test_status(self, client):
        response = client.get("/status")
        assert response.status_code == 200
        assert response.json()["status"] == "running"
        assert "timestamp" in response.json()

    def test_about(self, client):
        body = client.get("/about").json()
        assert body["name"] == "Food Delivery API"
        assert body["environment"] == "development"

    def test_root_links(self, client):
        assert client.get("/").json()["menu"] == "/menu"

    def test_support(self, client):
        response = client.post("/support", json={"email": "jane@example.com", "message": "Where is my pizza?"})
        assert response.status_code == 200
        body = response.json()
        assert body["ticketId"].startswith("SUP-")
        assert body["ticketId"] in body["message"]

    def test_support_missing_message(self, client):
        response = client.post("/support", json={"email": "jane@example.com"})
        assert response.status_code == 400
        assert response.json()["success"] is False
        assert response.json()["error"] == "Validation Error"

    def test_support_without_body(self, client):
        response = client.post("/support")
        assert response.status_code == 400
        assert response.json()["error"] == "Validation Error"
        assert "email" in response.json()["detail"]

    def test_support_message_too_long(self, client):
        response = client.post("/support", json={"email": "jane@example.com", "message": "x" * 2001})
        assert response.status_code == 400
        assert response.json() == {
            "success": False,
            "error": "Validation Error",
            "detail": "Message must be at most 2000 characters",
        }


class TestAuthEndpoints:
    def test_register_and_me(self, client):
        body = register(client)
        assert body["email"] == "jane@example.com"

        response = client.get("/me", params={"token": body["token"]})
        assert response.status_code == 200
        assert response.json() == {"email": "jane@example.com"}

    def test_register_duplicate(self, client):
        register(client)
        response = client.post("/register", json=register_payload(name="Someone Else"))
        assert response.status_code == 409
        assert len(client.get("/profiles").json()) == 1

    def test_register_validates_payload(self, client):
        response = client.post("/register", json=register_payload(phone="123"))
        assert response.status_code == 422
        response = client.post("/register", json=register_payload(email="not-an-email"))
        assert response.status_code == 422

    def test_register_accepts_snake_case(self, client):
        payload = register_payload()
        payload["birth_date"] = payload.pop("birthDate")
        assert client.post("/register", json=payload).status_code == 201

    def test_register_keeps_email_as_typed(self, client):
        body = register(client, email="Jane.Doe@Example.COM")
        assert body["email"] == "Jane.Doe@Example.COM"
        assert client.get("/profile/jane.doe@example.com").json()["email"] == "Jane.Doe@Example.COM"

    def test_login(self, client):
        register(client)
        response = client.post("/login", json={"email": "jane@example.com", "password": "secret"})
        assert response.status_code == 200
        assert response.json()["token"]

    def test_login_bad_password(self, client):
        register(client)
        response = client.post("/login", json={"email": "jane@example.com", "password": "wrong"})
        assert response.status_code == 401

    def test_me_malformed_token(self, client):
        response = client.get("/me", params={"token": "%%%"})
        assert response.status_code == 401
        assert response.json()["error"] == "Unauthorized"

    def test_logout_is_stateless(self, client):
        token = register(client)["token"]
        assert client.post("/logout", params={"token": token}).status_code == 200
        # Nothing is revoked
        assert client.get("/me", params={"token": token}).status_code == 200


class TestProfileEndpoints:
    def test_get_profile_hides_password(self, client):
        register(client)
        body = client.get("/profile/jane@example.com").json()
        assert body["birthDate"] == "1990-05-17"
        assert "password" not in body

    def test_get_unknown(self, client):
        response = client.get("/profile/ghost@example.com")
        assert response.status_code == 404
        assert response.json()["error"] == "Not Found"

    def test_update(self, client):
        register(client)
        response = client.put(
            "/profile/jane@example.com",
            json={"name": "Jane Roe", "address": "1 Elm St", "phone": "555-000-1111", "birthDate": "1985-02-03"},
        )
        assert response.status_code == 200
        assert response.json()["name"] == "Jane Roe"
        assert client.get("/profile/jane@example.com").json()["birthDate"] == "1985-02-03"

    def test_update_unknown(self, client):
        response = client.put(
            "/profile/ghost@example.com",
            json={"name": "X", "address": "Y", "phone": "555-000-1111", "birthDate": "1985-02-03"},
        )
        assert response.status_code == 404

    def test_delete(self, client):
        register(client)
        assert client.delete("/profile/jane@example.com").status_code == 200
        assert client.get("/profile/jane@example.com").status_code == 404
        assert client.get("/profiles/summary").json()["totalUsers"] == 0
        assert client.delete("/profile/jane@example.com").status_code == 404

    def test_summary_empty(self, client):
        assert client.get("/profiles/summary").json() == {
            "totalUsers": 0,
            "oldestUserName": "N/A",
            "youngestUserName": "N/A",
            "averageAge": 0.0,
        }

    def test_summary(self, client):
        register(client, email="old@example.com", name="Old", birthDate="1950-01-01")
        register(client, email="young@example.com", name="Young", birthDate="2000-01-01")
        body = client.get("/profiles/summary").json()
        assert body["totalUsers"] == 2
        assert body["oldestUserName"] == "Old"
        assert body["youngestUserName"] == "Young"

    def test_activity(self, client):
        register(client)
        assert client.get("/profile/jane@example.com/activity").status_code == 404

        response = client.post("/profile/jane@example.com/login")
        assert response.status_code == 200

        body = client.get("/profile/jane@example.com/activity").json()
        assert body["status"] == "Active"
        assert body["lastLogin"]

    def test_activity_unknown_user(self, client):
        assert client.post("/profile/ghost@example.com/login").status_code == 404

    def test_reregistered_user_has_no_activity(self, client):
        register(client)
        client.post("/profile/jane@example.com/login")
        client.delete("/profile/jane@example.com")

        register(client, name="Jane Again")
        response = client.get("/profile/jane@example.com/activity")
        assert response.status_code == 404
        assert "No activity recorded" in response.json()["detail"]


class TestMenuEndpoints:
    def test_menu_category(self, client):
        names = [item["name"] for item in client.get("/menu", params={"category": "Italian"}).json()]
        assert names == ["Pizza", "Pasta"]

    def test_menu_price_desc(self, client):
        items = client.get("/menu", params={"sortBy": "price_desc"}).json()
        assert [(item["name"], item["price"]) for item in items] == [
            ("Steak", 15.99),
            ("Pasta", 12.29),
            ("Pizza", 10.99),
            ("Veggie Burger", 8.49),
        ]

    def test_menu_search(self, client):
        names = [item["name"] for item in client.get("/menu", params={"search": "veg"}).json()]
        assert names == ["Veggie Burger"]

    def test_vegetarian(self, client):
        items = client.get("/menu/vegetarian").json()
        assert all(item["vegetarian"] for item in items)
        assert len(items) == 2

    def test_top_rated(self, client):
        names = [item["name"] for item in client.get("/menu/top-rated").json()]
        assert names == ["Veggie Burger", "Steak", "Pasta"]

    def test_item_lookup(self, client):
        assert client.get("/menu/4").json()["name"] == "Steak"
        assert client.get("/menu/99").status_code == 404


class TestCartAndOrderEndpoints:
    def test_cart_flow(self, client):
        _add(client, "jane@example.com", 1)
        body = _add(client, "jane@example.com", 1)
        assert body["itemCount"] == 2
        assert body["total"] == 21.98

        assert client.get("/cart/jane@example.com").json()["itemCount"] == 2

    def test_unknown_cart_is_empty(self, client):
        body = client.get("/cart/nobody@example.com").json()
        assert body["items"] == []
        assert body["itemCount"] == 0

    def test_add_unknown_item(self, client):
        response = client.post("/cart/jane@example.com/42")
        assert response.status_code == 404

    def test_checkout(self, client):
        _add(client, "jane@example.com", 1)
        _add(client, "jane@example.com", 4)

        order = _checkout(client, "jane@example.com")

        assert order["id"] == 1
        assert order["status"] == "InProcess"
        assert order["userEmail"] == "jane@example.com"
        assert [item["name"] for item in order["items"]] == ["Pizza", "Steak"]
        assert order["total"] == 26.98
        assert client.get("/cart/jane@example.com").json()["items"] == []

    def test_checkout_empty_cart(self, client):
        response = client.post("/orders/jane@example.com")
        assert response.status_code == 400
        assert response.json()["error"] == "Empty Cart"
        assert client.get("/orders/summary").json()["total"] == 0

    def test_list_orders(self, client):
        _add(client, "jane@example.com", 1)
        first = _checkout(client, "jane@example.com")
        _add(client, "jane@example.com", 2)
        second = _checkout(client, "jane@example.com")

        orders = client.get("/orders/jane@example.com").json()
        assert [order["id"] for order in orders] == [first["id"], second["id"]]
        assert client.get("/orders/bob@example.com").json() == []

    def test_confirm(self, client):
        _add(client, "jane@example.com", 3)
        order = _checkout(client, "jane@example.com")

        response = client.put(f"/orders/{order['id']}/confirm")
        assert response.status_code == 200
        assert response.json()["status"] == "Delivered"

        response = client.put(f"/orders/{order['id']}/confirm")
        assert response.status_code == 409
        assert response.json()["error"] == "Invalid State"

    def test_confirm_unknown(self, client):
        assert client.put("/orders/99/confirm").status_code == 404

    def test_summary(self, client):
        assert client.get("/orders/summary").json() == {
            "total": 0, "delivered": 0, "cancelled": 0, "inProcess": 0,
        }
        for email in ("a@example.com", "b@example.com"):
            _add(client, email, 1)
            _checkout(client, email)
        client.put("/orders/1/confirm")

        assert client.get("/orders/summary").json() == {
            "total": 2, "delivered": 1, "cancelled": 0, "inProcess": 1,
        }

    def test_apps_do_not_share_state(self, client):
        _add(client, "jane@example.com", 1)
        _checkout(client, "jane@example.com")

        other = TestClient(create_app(Settings(_env_file=None)))
        assert other.get("/orders/summary").json()["total"] == 0


class TestErrorHandling:
    def test_unexpected_error_returns_500_and_keeps_serving(self, app):
        def explode():
            raise RuntimeError("boom")

        app.state.context.orders.summary = explode
        client = TestClient(app, raise_server_exceptions=False)

        response = client.get("/orders/summary")
        assert response.status_code == 500
        assert response.json() == {
            "success": False,
            "error": "Internal Server Error",
            "detail": "An unexpected error occurred",
        }
        assert client.get("/status").status_code == 200
