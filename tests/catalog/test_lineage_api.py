"""Integration tests for attribute lineage."""

from fastapi.testclient import TestClient


def _create_attribute(client: TestClient, name: str) -> int:
    resp = client.post("/api/v1/attributes", json={"attribute_name": name})
    assert resp.status_code == 200
    return resp.json()["data"]["id"]


def test_lineage_with_steps_and_systems(client: TestClient):
    source_id = _create_attribute(client, "crmCustomerId")
    target_id = _create_attribute(client, "profileCustomerId")

    create_resp = client.post(
        "/api/v1/lineage",
        json={
            "source_attribute_id": source_id,
            "target_attribute_id": target_id,
            "relationship_type": "derived_from",
            "transformation_logic": "trim + upper",
        },
    )
    assert create_resp.status_code == 200
    lineage = create_resp.json()["data"]
    assert lineage["steps"] == []

    client.post(f"/api/v1/lineage/{lineage['id']}/steps", json={"step_type": "load", "step_order": 2})
    client.post(f"/api/v1/lineage/{lineage['id']}/steps", json={"step_type": "extract", "step_order": 1})
    steps = client.get(f"/api/v1/lineage/{lineage['id']}/steps").json()["data"]
    assert [step["step_type"] for step in steps] == ["extract", "load"]

    first = client.post(f"/api/v1/lineage/{lineage['id']}/systems", json={"system_name": "CRM", "system_role": "source"})
    second = client.post(f"/api/v1/lineage/{lineage['id']}/systems", json={"system_name": "Profile Store"})
    assert first.json()["data"]["system_order"] == 1
    assert second.json()["data"]["system_order"] == 2

    for attribute_id in (source_id, target_id):
        listed = client.get(f"/api/v1/attributes/{attribute_id}/lineage").json()["data"]
        assert [item["id"] for item in listed] == [lineage["id"]]
        assert [system["system_name"] for system in listed[0]["systems"]] == ["CRM", "Profile Store"]

    assert client.delete(f"/api/v1/lineage/{lineage['id']}").status_code == 200
    assert client.get(f"/api/v1/lineage/{lineage['id']}").status_code == 404
    assert client.get(f"/api/v1/attributes/{source_id}/lineage").json()["data"] == []


def test_lineage_requires_two_distinct_existing_attributes(client: TestClient):
    attribute_id = _create_attribute(client, "selfLinked")

    same = client.post(
        "/api/v1/lineage",
        json={"source_attribute_id": attribute_id, "target_attribute_id": attribute_id, "relationship_type": "copy"},
    )
    assert same.status_code == 400

    missing = client.post(
        "/api/v1/lineage",
        json={"source_attribute_id": attribute_id, "target_attribute_id": 987654, "relationship_type": "copy"},
    )
    assert missing.status_code == 404


def test_deleting_an_attribute_removes_its_lineage(client: TestClient):
    source_id = _create_attribute(client, "legacyScore")
    target_id = _create_attribute(client, "modernScore")
    lineage_id = client.post(
        "/api/v1/lineage",
        json={"source_attribute_id": source_id, "target_attribute_id": target_id, "relationship_type": "replaced_by"},
    ).json()["data"]["id"]

    assert client.delete(f"/api/v1/attributes/{source_id}").status_code == 200
    assert client.get(f"/api/v1/lineage/{lineage_id}").status_code == 404
    assert client.get(f"/api/v1/attributes/{target_id}/lineage").json()["data"] == []
