import pytest
from fastapi.testclient import TestClient

from fooddelivery.context import AppContext
from fooddelivery.core.config import Settings
from fooddelivery.main import create_app


@pytest.fixture()
def settings():
    return Settings(_env_file=None, debug=False)


@pytest.fixture()
def ctx(settings):
    """A fresh set of stores, no HTTP layer."""
    return AppContext.create(settings)


@pytest.fixture()
def app(settings):
    return create_app(settings)


@pytest.fixture()
def client(app):
    return TestClient(app)
