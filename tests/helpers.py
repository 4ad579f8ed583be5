"""Builders shared by the test modules."""

from datetime import date

from fooddelivery.models import User


def make_user(email="jane@example.com", name="Jane Doe", birth_date=date(1990, 5, 17), **overrides):
    data = {
        "email": email,
        "password": "secret",
        "name": name,
        "address": "12 Baker Street",
        "phone": "+1 555 123 4567",
        "birth_date": birth_date,
    }
    data.update(overrides)
    return User(**data)


def register_payload(email="jane@example.com", **overrides):
    payload = {
        "email": email,
        "password": "secret",
        "name": "Jane Doe",
        "address": "12 Baker Street",
        "phone": "+1 555 123 4567",
        "birthDate": "1990-05-17",
    }
    payload.update(overrides)
    return payload


def register(client, email="jane@example.com", **overrides):
    """Helper: POST /register and return the response body."""
    response = client.post("/register", json=register_payload(email, **overrides))
    assert response.status_code == 201, response.text
    return response.json()
