from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from exhibition_api.app.core.config import Settings
from exhibition_api.app.core.storage import Storage
from exhibition_api.app.main import create_app
from exhibition_api.app.services.registry import ExhibitionRegistry


@pytest.fixture
def storage(tmp_path) -> Storage:
    return Storage.open(str(tmp_path / "registry.db"))


@pytest.fixture
def registry(storage: Storage) -> ExhibitionRegistry:
    return ExhibitionRegistry.create(storage)


@pytest.fixture
def make_settings(tmp_path):
    def _make(**overrides) -> Settings:
        values = {
            "database_url": str(tmp_path / "api.db"),
            "secret_key": "test-secret",
            "product_delete_mode": "hard",
            "enforce_caller_binding": False,
        }
        values.update(overrides)
        return Settings(**values)

    return _make


@pytest.fixture
def client(make_settings):
    with TestClient(create_app(make_settings())) as test_client:
        yield test_client
