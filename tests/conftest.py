# tests/conftest.py
import pytest
from fastapi.testclient import TestClient

from inventory.config import Settings
from inventory.main import create_app


@pytest.fixture
def make_app(tmp_path):
    def _make(**overrides):
        overrides.setdefault("data_file", tmp_path / "data.json")
        return create_app(Settings(**overrides))
    return _make


@pytest.fixture
def client(make_app):
    with TestClient(make_app()) as c:
        yield c


@pytest.fixture
def data_file(client):
    return client.app.state.storage.active_path
