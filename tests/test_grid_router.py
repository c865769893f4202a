from fastapi.testclient import TestClient


def test_get_grid(client: TestClient) -> None:
    response = client.get("/api/grid")
    assert response.status_code == 200
    assert response.json() == {"success": True, "message": None, "data": {"rows": 1, "cols": 1}}


def test_resize_grid_grows(client: TestClient) -> None:
    response = client.put("/api/grid", json={"rows": 5, "cols": 8})
    assert response.status_code == 200
    body = response.json()
    assert body["data"] == {"rows": 5, "cols": 8}
    assert body["message"] == "Grid settings updated successfully"


def test_resize_grid_never_shrinks(client: TestClient) -> None:
    client.put("/api/grid", json={"rows": 5, "cols": 8})

    response = client.put("/api/grid", json={"rows": 2, "cols": 10})

    assert response.json()["data"] == {"rows": 5, "cols": 10}


def test_resize_grid_rejects_zero(client: TestClient) -> None:
    response = client.put("/api/grid", json={"rows": 0, "cols": 3})
    assert response.status_code == 422


def test_ensure_capacity(client: TestClient) -> None:
    response = client.post("/api/grid/ensure-capacity", json={"x": 4, "y": 2})
    assert response.json()["data"] == {"rows": 3, "cols": 5}

    response = client.post("/api/grid/ensure-capacity", json={"x": 1, "y": 1})
    assert response.json()["data"] == {"rows": 3, "cols": 5}


def test_frontier_around_single_space(client: TestClient) -> None:
    client.post("/api/spaces", json={"position": {"x": 0, "y": 0}})

    data = client.get("/api/grid/frontier").json()["data"]

    assert data["count"] == 3
    assert data["cells"] == [{"x": 1, "y": 0}, {"x": 0, "y": 1}, {"x": 1, "y": 1}]


def test_frontier_of_empty_grid(client: TestClient) -> None:
    client.put("/api/grid", json={"rows": 2, "cols": 2})
    data = client.get("/api/grid/frontier").json()["data"]
    assert data["cells"] == [{"x": 0, "y": 0}, {"x": 1, "y": 0}, {"x": 0, "y": 1}, {"x": 1, "y": 1}]


def test_layout_snapshot(client: TestClient) -> None:
    client.post("/api/spaces", json={"position": {"x": 2, "y": 1}, "name": "C"})

    data = client.get("/api/grid/layout").json()["data"]

    assert data["grid"] == {"rows": 2, "cols": 3}
    assert [s["name"] for s in data["spaces"]] == ["C"]


def test_health_and_root(client: TestClient) -> None:
    health = client.get("/health").json()
    assert health["status"] == "healthy"
    assert set(health["grid"]) == {"rows", "cols"}

    root = client.get("/").json()
    assert root["endpoints"]["grid"]["frontier"] == "GET /api/grid/frontier"


def test_ensure_capacity_beyond_limit_is_rejected(client: TestClient) -> None:
    response = client.post("/api/grid/ensure-capacity", json={"x": 10**9, "y": 10**9})

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_POSITION"
    assert client.get("/api/grid").json()["data"] == {"rows": 1, "cols": 1}


def test_resize_beyond_limit_is_rejected(client: TestClient, allocator) -> None:
    response = client.put("/api/grid", json={"rows": allocator.max_dim + 1, "cols": 2})

    assert response.status_code == 400
    assert client.get("/api/grid").json()["data"] == {"rows": 1, "cols": 1}


def test_frontier_at_largest_grid_still_answers(client: TestClient, allocator) -> None:
    edge = allocator.max_dim - 1
    client.post("/api/grid/ensure-capacity", json={"x": edge, "y": edge})

    data = client.get("/api/grid/frontier").json()["data"]

    assert data["count"] == allocator.max_dim ** 2
    assert client.get("/health").status_code == 200
