"""Integration tests for the schema document routes and application plumbing."""

from fastapi.testclient import TestClient


def test_schema_documents_and_values(client: TestClient):
    raw = client.get("/api/v1/schemas/raw").json()["data"]
    assert "person" in raw
    transformed = client.get("/api/v1/schemas/transformed").json()["data"]
    assert "userDetails" in transformed

    value = client.get("/api/v1/schemas/raw/value", params={"path": "person/name/firstname"}).json()["data"]
    assert value == {"path": "person/name/firstname", "exists": True, "value": ""}
    missing = client.get("/api/v1/schemas/raw/value", params={"path": "person/age"}).json()["data"]
    assert missing["exists"] is False


def test_reset_discards_mapping_driven_changes(client: TestClient):
    client.put(
        "/api/v1/path-mappings/1",
        json={"levels": {"level1": "userDetails", "level2": "profile", "level3": "givenName"}},
    )
    probe = {"path": "userDetails/profile/givenName"}
    assert client.get("/api/v1/schemas/transformed/value", params=probe).json()["data"]["exists"] is True

    assert client.post("/api/v1/schemas/reset").status_code == 200
    assert client.get("/api/v1/schemas/transformed/value", params=probe).json()["data"]["exists"] is False


def test_health_and_request_id(client: TestClient):
    resp = client.get("/health", headers={"X-Request-ID": "req-123"})
    assert resp.status_code == 200
    assert resp.json() == {"msg": "OK", "data": {"status": "healthy"}, "code": 200}
    assert resp.headers["x-request-id"] == "req-123"

    generated = client.get("/health")
    assert generated.headers["x-request-id"]
