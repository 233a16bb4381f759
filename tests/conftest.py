# tests/conftest.py
import pytest
from fastapi.testclient import TestClient

from product_api.config import Settings
from product_api.database import ProductStore
from product_api.main import create_app

API_KEY = "plp-student-key"
AUTH = {"x-api-key": API_KEY}


def make_app(store=None):
    return create_app(store if store is not None else ProductStore.seeded(), Settings(api_key=API_KEY))


@pytest.fixture
def client():
    return TestClient(make_app())
