"""Integration tests for the attribute browser tree routes."""

from fastapi.testclient import TestClient


def _lookup(client: TestClient, path: str) -> dict:
    resp = client.get("/api/v1/tree/lookup", params={"path": path})
    assert resp.status_code == 200
    return resp.json()["data"]


def test_tree_and_flat_nodes(client: TestClient):
    roots = client.get("/api/v1/tree").json()["data"]
    assert [root["path"] for root in roots] == sorted(root["path"] for root in roots)
    user_details = next(root for root in roots if root["path"] == "userDetails")
    assert user_details["type"] == "folder"
    assert user_details["level"] == 0
    assert any(child["path"] == "userDetails/identity" for child in user_details["children"])

    flat = client.get("/api/v1/tree/nodes").json()["data"]
    assert flat[0]["node"]["path"] == roots[0]["path"]
    assert all(entry["node"]["children"] is None for entry in flat)
    by_id = {entry["node"]["id"]: entry for entry in flat}
    assert by_id[user_details["id"]]["children_ids"] == [child["id"] for child in user_details["children"]]


def test_node_lookup_children_and_ancestry(client: TestClient):
    leaf = _lookup(client, "userDetails/identity/firstName")
    assert leaf["type"] == "file"
    assert leaf["value"] == "John"
    assert leaf["xdm_path"] == "person/name/firstname"

    folder = _lookup(client, "userDetails/identity")
    children = client.get(f"/api/v1/tree/nodes/{folder['id']}/children").json()["data"]
    assert leaf["id"] in {child["id"] for child in children}

    chain = client.get(f"/api/v1/tree/nodes/{leaf['id']}/ancestry").json()["data"]
    assert [node["name"] for node in chain] == ["User Details", "Identity", "First Name"]

    assert client.get("/api/v1/tree/nodes/missing").status_code == 404
    assert client.get("/api/v1/tree/nodes/missing/ancestry").status_code == 404
    assert client.get("/api/v1/tree/lookup", params={"path": "no/such/node"}).status_code == 404


def test_search(client: TestClient):
    results = client.get("/api/v1/tree/search", params={"q": "EXAMPLE.COM"}).json()["data"]
    assert {node["path"] for node in results} >= {"userDetails/email/address", "userDetails/email/emailDomain"}
    assert client.get("/api/v1/tree/search", params={"q": " "}).json()["data"] == []


def test_select_expand_collapse(client: TestClient):
    folder = _lookup(client, "userDetails/identity")
    node_id = folder["id"]

    assert client.post(f"/api/v1/tree/nodes/{node_id}/select").json()["data"]["is_selected"] is True
    assert client.post(f"/api/v1/tree/nodes/{node_id}/expand").json()["data"]["is_expanded"] is True
    assert _lookup(client, "userDetails/identity")["is_expanded"] is True
    assert client.post(f"/api/v1/tree/nodes/{node_id}/collapse").json()["data"]["is_expanded"] is False
    assert _lookup(client, "userDetails/identity")["is_selected"] is True

    assert client.post("/api/v1/tree/nodes/missing/select").status_code == 404


def test_rebuild_from_mapped_data(client: TestClient):
    resp = client.post("/api/v1/tree/rebuild", json={"source": "mapped"})
    assert resp.status_code == 200
    payload = resp.json()["data"]
    assert payload["source"] == "mapped"
    assert payload["node_count"] > payload["root_count"] > 0

    assert _lookup(client, "modelsAndScores/overallScore/modelRawScore")["value"] == 80
    assert client.get("/api/v1/tree/lookup", params={"path": "emailMarketingPermission"}).status_code == 404

    assert client.post("/api/v1/tree/rebuild", json={"source": "bogus"}).status_code == 422
    assert client.post("/api/v1/tree/rebuild", json={}).json()["data"]["source"] == "seed"
