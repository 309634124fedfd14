# tests/conftest.py
import pytest
from fastapi.testclient import TestClient

from api.app import STORE, app
from core.client import ProductAPIClient


@pytest.fixture
def http():
    STORE.reset()
    with TestClient(app) as client:
        yield client
    STORE.reset()


@pytest.fixture
def api(http):
    return ProductAPIClient(http=http)
