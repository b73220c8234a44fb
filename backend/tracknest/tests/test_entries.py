"""
Tests for journal entry endpoints.
"""
import pytest

pytestmark = pytest.mark.usefixtures("seeded")


def new_entry(**overrides):
    payload = {
        "title": "Yoga",
        "type": "Workout",
        "description": "Stretching",
        "visibility": "PRIVATE",
        "date": "2025-06-01",
        "group": {"id": 1},
    }
    payload.update(overrides)
    return payload


def test_user_sees_own_entries(client, login):
    response = client.get("/api/entries", headers=login("alice", "alice"))
    assert response.status_code == 200
    entries = response.json()
    assert len(entries) == 3
    assert all(e["createdBy"] == "alice" for e in entries)


def test_admin_sees_all_entries(client, login):
    response = client.get("/api/entries", headers=login("admin", "admin"))
    assert response.status_code == 200
    assert len(response.json()) == 7


def test_entry_carries_group(client, login):
    entry = client.get("/api/entries", headers=login("alice", "alice")).json()[0]
    assert entry["group"]["id"] == 1
    assert entry["group"]["createdBy"] == "alice"
    assert entry["date"] == "2025-05-01"
    assert entry["type"] == "Workout"
    assert entry["visibility"] == "PRIVATE"


def test_public_entries_are_shared(client, login):
    alice = login("alice", "alice")
    client.post("/api/entries", json=new_entry(visibility="PUBLIC"), headers=alice)

    entries = client.get("/api/entries", headers=login("bob", "bob")).json()
    assert len(entries) == 3
    assert {e["createdBy"] for e in entries} == {"alice", "bob"}
    assert all(e["createdBy"] == "bob" or e["visibility"] == "PUBLIC" for e in entries)


def test_create_stamps_owner(client, login):
    headers = login("bob", "bob")
    payload = new_entry(group={"id": 3}, createdBy="alice")
    response = client.post("/api/entries", json=payload, headers=headers)
    assert response.status_code == 200
    body = response.json()
    assert body["createdBy"] == "bob"
    assert body["id"] == 8
    assert body["group"]["id"] == 3


def test_create_requires_token(client):
    assert client.post("/api/entries", json=new_entry()).status_code == 401


def test_create_unknown_type(client, login):
    response = client.post("/api/entries", json=new_entry(type="Sleep"), headers=login("alice", "alice"))
    assert response.status_code == 400


def test_create_type_is_case_sensitive(client, login):
    response = client.post("/api/entries", json=new_entry(type="workout"), headers=login("alice", "alice"))
    assert response.status_code == 400


def test_create_missing_title(client, login):
    payload = new_entry()
    del payload["title"]
    response = client.post("/api/entries", json=payload, headers=login("alice", "alice"))
    assert response.status_code == 400


def test_create_in_unknown_group(client, login):
    response = client.post("/api/entries", json=new_entry(group={"id": 99}), headers=login("alice", "alice"))
    assert response.status_code == 400


def test_create_in_private_group_of_other_user(client, login):
    response = client.post("/api/entries", json=new_entry(group={"id": 3}), headers=login("alice", "alice"))
    assert response.status_code == 400


def test_update_entry(client, login):
    headers = login("alice", "alice")
    response = client.put("/api/entries/1", json={"title": "Long Run", "group": {"id": 2}}, headers=headers)
    assert response.status_code == 200
    body = response.json()
    assert body["title"] == "Long Run"
    assert body["group"]["id"] == 2
    # Omitted fields keep their stored values
    assert body["description"] == "5k easy pace around the park"
    assert body["createdBy"] == "alice"


def test_update_is_idempotent(client, login):
    headers = login("alice", "alice")
    payload = new_entry(createdBy="bob")
    first = client.put("/api/entries/2", json=payload, headers=headers)
    second = client.put("/api/entries/2", json=payload, headers=headers)
    assert first.status_code == 200
    assert second.json() == first.json()
    assert second.json()["createdBy"] == "alice"


def test_update_null_required_field(client, login):
    response = client.put("/api/entries/1", json={"title": None}, headers=login("alice", "alice"))
    assert response.status_code == 400


def test_update_unknown_entry(client, login):
    headers = login("alice", "alice")
    assert client.put("/api/entries/999", json=new_entry(), headers=headers).status_code == 404


def test_update_other_users_entry(client, login):
    response = client.put("/api/entries/4", json={"title": "Mine now"}, headers=login("alice", "alice"))
    assert response.status_code == 403


def test_admin_updates_any_entry(client, login):
    response = client.put("/api/entries/4", json={"title": "Lunch"}, headers=login("admin", "admin"))
    assert response.status_code == 200
    assert response.json()["createdBy"] == "bob"


def test_delete_entry(client, login):
    headers = login("alice", "alice")
    assert client.delete("/api/entries/1", headers=headers).status_code == 200
    ids = [e["id"] for e in client.get("/api/entries", headers=headers).json()]
    assert ids == [2, 3]


def test_delete_unknown_entry(client, login):
    assert client.delete("/api/entries/999", headers=login("alice", "alice")).status_code == 404


def test_delete_other_users_entry(client, login):
    assert client.delete("/api/entries/6", headers=login("bob", "bob")).status_code == 403


def test_entries_by_user(client, login):
    response = client.get("/api/entries/user/carol", headers=login("admin", "admin"))
    assert response.status_code == 200
    assert [e["id"] for e in response.json()] == [6, 7]


def test_entries_by_user_hides_private_rows(client, login):
    response = client.get("/api/entries/user/carol", headers=login("alice", "alice"))
    assert response.status_code == 200
    assert response.json() == []


def test_search_by_type(client, login):
    response = client.get(
        "/api/entries/search",
        params={"field": "type", "query": "Workout"},
        headers=login("alice", "alice")
    )
    assert response.status_code == 200
    entries = response.json()
    assert len(entries) == 3
    assert all(e["type"] == "Workout" for e in entries)


def test_search_is_case_insensitive(client, login):
    response = client.get(
        "/api/entries/search",
        params={"field": "title", "query": "RUN"},
        headers=login("admin", "admin")
    )
    assert [e["title"] for e in response.json()] == ["Morning Run"]


def test_search_description_respects_scope(client, login):
    params = {"field": "description", "query": "headache"}
    assert len(client.get("/api/entries/search", params=params, headers=login("admin", "admin")).json()) == 1
    assert client.get("/api/entries/search", params=params, headers=login("alice", "alice")).json() == []


def test_search_wildcards_are_literal(client, login):
    response = client.get(
        "/api/entries/search",
        params={"field": "title", "query": "%"},
        headers=login("admin", "admin")
    )
    assert response.status_code == 200
    assert response.json() == []


@pytest.mark.parametrize("field", ["password", "created_by", "title; DROP TABLE entries", ""])
def test_search_rejects_other_fields(client, login, field):
    response = client.get(
        "/api/entries/search",
        params={"field": field, "query": "x"},
        headers=login("alice", "alice")
    )
    assert response.status_code == 400


def test_search_requires_parameters(client, login):
    response = client.get("/api/entries/search", params={"field": "title"}, headers=login("alice", "alice"))
    assert response.status_code == 400


def test_search_non_ascii_title(client, login):
    headers = login("alice", "alice")
    client.post("/api/entries", json=new_entry(title="Épée drills"), headers=headers)

    response = client.get("/api/entries/search", params={"field": "title", "query": "Épée"}, headers=headers)
    assert response.status_code == 200
    assert [e["title"] for e in response.json()] == ["Épée drills"]


def test_public_entry_in_private_group_hides_group(client, login):
    alice = login("alice", "alice")
    created = client.post("/api/entries", json=new_entry(visibility="PUBLIC"), headers=alice).json()
    assert created["group"]["name"] == "Morning Training"

    entries = client.get("/api/entries", headers=login("bob", "bob")).json()
    shared = [e for e in entries if e["id"] == created["id"]]
    assert shared[0]["group"] == {"id": 1}

    entries = client.get("/api/entries", headers=login("admin", "admin")).json()
    shared = [e for e in entries if e["id"] == created["id"]]
    assert shared[0]["group"]["name"] == "Morning Training"


def test_create_after_account_deleted(client, login):
    bob = login("bob", "bob")
    client.delete("/api/users/bob", headers=login("admin", "admin"))

    response = client.post("/api/entries", json=new_entry(group={"id": 1}), headers=bob)
    assert response.status_code == 401
    assert response.json()["message"] == "Account no longer exists"
