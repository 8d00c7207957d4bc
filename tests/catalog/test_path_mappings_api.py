"""Integration tests for the path mapping routes."""

from fastapi.testclient import TestClient

CONTRACT_TYPE = "adobeCorpnew/memberAccountGUID/contract/contractType"


def test_list_and_filter_mappings(client: TestClient):
    resp = client.get("/api/v1/path-mappings")
    assert resp.status_code == 200
    mappings = resp.json()["data"]
    assert len(mappings) == 31
    assert mappings[0]["levels"] == {
        "level1": "userDetails",
        "level2": "identity",
        "level3": "firstName",
        "level4": "",
        "level5": "",
    }

    filtered = client.get("/api/v1/path-mappings", params={"level": "level2", "value": "email"}).json()["data"]
    assert {item["levels"]["level3"] for item in filtered} == {"address", "emailDomain", "hashedEmail", "emailValidFlag"}

    assert client.get("/api/v1/path-mappings", params={"level": "level2"}).status_code == 400
    assert client.get("/api/v1/path-mappings", params={"level": "level9", "value": "x"}).status_code == 422

    values = client.get("/api/v1/path-mappings/levels/level1/values").json()["data"]
    assert values == sorted(values)
    assert "userDetails" in values


def test_resolve_split_and_lookup(client: TestClient):
    resolved = client.get("/api/v1/path-mappings/resolve", params={"raw_path": "person/name/firstname"}).json()["data"]
    assert resolved["transformed_path"] == "userDetails/identity/firstName"
    assert resolved["mapping_id"] == "1"
    assert resolved["levels"]["level3"] == "firstName"

    unmapped = client.get("/api/v1/path-mappings/resolve", params={"raw_path": "custom/field"}).json()["data"]
    assert unmapped["transformed_path"] == "custom/field"
    assert unmapped["mapping_id"] is None

    split = client.get("/api/v1/path-mappings/split", params={"path": "a/b/c/d/e/f"}).json()["data"]
    assert split["level5"] == "e/f"

    found = client.get("/api/v1/path-mappings/lookup", params={"transformed_path": "userDetails/email/address"})
    assert found.json()["data"]["raw_path"] == "personalEmail/address"
    assert client.get("/api/v1/path-mappings/lookup", params={"raw_path": "nope"}).status_code == 404
    assert client.get("/api/v1/path-mappings/lookup").status_code == 400


def test_update_mapping_changes_the_transformed_path(client: TestClient):
    resp = client.put(
        "/api/v1/path-mappings/3",
        json={"levels": {"level1": "userDetails", "level2": "location", "level3": "countryCode"}},
    )
    assert resp.status_code == 200
    assert resp.json()["data"]["transformed_path"] == "userDetails/location/countryCode"

    fetched = client.get("/api/v1/path-mappings/3").json()["data"]
    assert fetched["transformed_path"] == "userDetails/location/countryCode"

    schema_value = client.get("/api/v1/schemas/transformed/value", params={"path": "userDetails/location/countryCode"})
    assert schema_value.json()["data"]["exists"] is True

    assert client.put("/api/v1/path-mappings/999", json={"levels": {"level1": "x"}}).status_code == 404
    assert client.put("/api/v1/path-mappings/3", json={"levels": {}}).status_code == 422
    assert client.put("/api/v1/path-mappings/3", json={"levels": {"level1": "a/b"}}).status_code == 422


def test_create_and_delete_mapping(client: TestClient):
    payload = {
        "raw_path": CONTRACT_TYPE,
        "levels": {"level1": "teamEntitlements", "level2": "contractInfo", "level3": "contractType"},
        "description": "Contract type",
        "data_type": "string",
    }
    created = client.post("/api/v1/path-mappings", json=payload)
    assert created.status_code == 200
    mapping = created.json()["data"]
    assert mapping["id"] == "32"
    assert mapping["transformed_path"] == "teamEntitlements/contractInfo/contractType"

    assert client.post("/api/v1/path-mappings", json=payload).status_code == 409
    missing = {**payload, "raw_path": "adobeCorpnew/unknownField"}
    assert client.post("/api/v1/path-mappings", json=missing).status_code == 400

    assert client.delete("/api/v1/path-mappings/32").status_code == 200
    assert client.get("/api/v1/path-mappings/32").status_code == 404
    assert client.delete("/api/v1/path-mappings/32").status_code == 404


def test_raw_paths_transform_and_apply_value(client: TestClient):
    rows = client.get("/api/v1/path-mappings/raw-paths").json()["data"]
    by_raw = {row["raw_path"]: row for row in rows}
    assert by_raw["personalEmail/address"]["transformed_path"] == "userDetails/email/address"
    assert by_raw["personalEmail/address"]["is_mapped"] is True

    transformed = client.post("/api/v1/path-mappings/transform", json={}).json()["data"]
    assert transformed["userDetails"]["email"]["address"] == "john.doe@gmail.com"

    custom = client.post(
        "/api/v1/path-mappings/transform",
        json={"data": {"person": {"name": {"firstname": "Ada"}}}},
    ).json()["data"]
    assert custom == {"userDetails": {"identity": {"firstName": "Ada"}}}

    applied = client.post("/api/v1/path-mappings/apply-value", json={"raw_path": "person/name/lastname", "value": "Lovelace"})
    assert applied.json()["data"]["applied"] is True
    value = client.get("/api/v1/schemas/transformed/value", params={"path": "userDetails/identity/lastName"})
    assert value.json()["data"]["value"] == "Lovelace"

    assert client.post("/api/v1/path-mappings/apply-value", json={"raw_path": "nope", "value": 1}).status_code == 404


def test_export_mappings(client: TestClient):
    resp = client.get("/api/v1/path-mappings/export")
    assert resp.status_code == 200
    assert "attachment; filename=path-mappings-" in resp.headers["content-disposition"]
    assert resp.content[:2] == b"PK"
