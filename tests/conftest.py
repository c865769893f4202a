import pytest
from fastapi.testclient import TestClient

from main import app
from services.activity_service import activity_service
from services.grid_allocator import GridAllocator, get_grid_allocator


@pytest.fixture
def allocator() -> GridAllocator:
    return GridAllocator(rows=1, cols=1, max_dim=50)


@pytest.fixture
def client(allocator: GridAllocator, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(activity_service, "base_url", None)
    app.dependency_overrides[get_grid_allocator] = lambda: allocator
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
