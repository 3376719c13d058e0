import os

import pytest
from fastapi.testclient import TestClient

# Default to the memory backend so tests never need a running MongoDB
os.environ.setdefault("PERSISTENCE_BACKEND", "memory")

from src.todo_api.main import app  # noqa: E402
from src.todo_api.repositories import InMemoryRepository, get_repository  # noqa: E402


@pytest.fixture
def repo():
    return InMemoryRepository()


@pytest.fixture
def client(repo):
    app.dependency_overrides[get_repository] = lambda: repo
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
