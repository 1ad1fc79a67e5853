"""Project Routes — HTTP surface over a SQLite-backed store.

Invariants:
    - Each operation maps to one route; failures use the {"error": {...}} envelope
    - JSON uses camelCase fields; snake_case accepted on input
    - Error codes: INVALID_PAYLOAD 400, NOT_FOUND 404, INVALID_STATUS 400, PROJECT_EXPIRED 409
"""

import pytest

BASE = "/api/v1/projects"

BODY = {
    "title": "Skate park",
    "description": "Concrete bowl by the river",
    "goalAmount": 500,
    "duration": 1000,
    "creator": "alice",
}


async def _create(client, **overrides) -> dict:
    res = await client.post(BASE, json={**BODY, **overrides})
    assert res.status_code == 201, res.text
    return res.json()


async def test_create_project_returns_camel_case_record(client, clock):
    project = await _create(client)

    assert project["status"] == "Funding"
    assert project["raisedAmount"] == 0
    assert project["contributors"] == []
    assert project["goalAmount"] == 500
    assert project["startTime"] == clock.now
    assert project["deadline"] == clock.now + 1000
    assert len(project["id"]) == 32


async def test_create_project_accepts_snake_case(client):
    body = {**BODY}
    body["goal_amount"] = body.pop("goalAmount")
    res = await client.post(BASE, json=body)
    assert res.status_code == 201
    assert res.json()["goalAmount"] == 500


async def test_create_project_missing_field_is_invalid_payload(client):
    body = {k: v for k, v in BODY.items() if k != "creator"}
    res = await client.post(BASE, json=body)
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "INVALID_PAYLOAD"


async def test_create_project_zero_goal_is_invalid_payload(client):
    res = await client.post(BASE, json={**BODY, "goalAmount": 0})
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "INVALID_PAYLOAD"


@pytest.mark.parametrize("amount", [-1, 2**64])
async def test_create_project_out_of_range_amount_is_invalid_payload(client, amount):
    res = await client.post(BASE, json={**BODY, "goalAmount": amount})
    assert res.status_code == 400
    error = res.json()["error"]
    assert error["code"] == "INVALID_PAYLOAD"
    assert error["details"]


async def test_contribution_flow_with_lazy_expiry(client, clock):
    project = await _create(client)
    url = f"{BASE}/{project['id']}"

    clock.advance(10)
    res = await client.post(f"{url}/contributions", json={"contributor": "bob", "amount": 300})
    assert res.status_code == 200
    assert res.json()["raisedAmount"] == 300

    clock.advance(1490)
    res = await client.post(f"{url}/contributions", json={"contributor": "carol", "amount": 400})
    assert res.status_code == 409
    assert res.json()["error"]["code"] == "PROJECT_EXPIRED"

    stored = (await client.get(url)).json()
    assert stored["status"] == "Expired"
    assert stored["raisedAmount"] == 300
    assert (await client.get(f"{url}/contributors")).json() == ["bob"]


async def test_contribution_without_amount_is_invalid_payload(client):
    project = await _create(client)
    res = await client.post(
        f"{BASE}/{project['id']}/contributions", json={"contributor": "bob"},
    )
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "INVALID_PAYLOAD"


async def test_unknown_project_is_not_found(client):
    for path in ["/nope", "/nope/contributors"]:
        res = await client.get(f"{BASE}{path}")
        assert res.status_code == 404
        assert res.json()["error"]["code"] == "NOT_FOUND"
    res = await client.post(f"{BASE}/nope/contributions", json={"contributor": "b", "amount": 1})
    assert res.status_code == 404
    res = await client.post(f"{BASE}/nope/cancel")
    assert res.status_code == 404


async def test_update_status_rejects_unknown_value(client):
    project = await _create(client)
    res = await client.put(f"{BASE}/{project['id']}/status", json={"status": "Paused"})
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "INVALID_STATUS"
    assert (await client.get(f"{BASE}/{project['id']}")).json()["status"] == "Funding"


async def test_update_status_overwrites_terminal_state(client):
    project = await _create(client)
    url = f"{BASE}/{project['id']}/status"
    assert (await client.put(url, json={"status": "Successful"})).json()["status"] == "Successful"
    assert (await client.put(url, json={"status": "Funding"})).json()["status"] == "Funding"


async def test_cancel_project_sets_expired(client):
    project = await _create(client)
    res = await client.post(f"{BASE}/{project['id']}/cancel")
    assert res.status_code == 200
    assert res.json()["status"] == "Expired"


async def test_update_project_recomputes_deadline(client, clock):
    project = await _create(client)
    clock.advance(100)

    res = await client.put(
        f"{BASE}/{project['id']}",
        json={**BODY, "title": "Bigger park", "duration": 9000},
    )

    assert res.status_code == 200
    updated = res.json()
    assert updated["title"] == "Bigger park"
    assert updated["deadline"] == project["startTime"] + 9000
    assert updated["startTime"] == project["startTime"]


async def test_update_project_with_elapsed_duration_is_rejected(client, clock):
    project = await _create(client)
    clock.advance(600)

    res = await client.put(f"{BASE}/{project['id']}", json={**BODY, "duration": 500})

    assert res.status_code == 400
    assert res.json()["error"]["code"] == "INVALID_PAYLOAD"
    assert (await client.get(f"{BASE}/{project['id']}")).json() == project


async def test_list_projects_with_status_filter(client):
    open_project = await _create(client, title="Open")
    closed = await _create(client, title="Closed")
    await client.post(f"{BASE}/{closed['id']}/cancel")

    all_ids = {p["id"] for p in (await client.get(BASE)).json()}
    assert all_ids == {open_project["id"], closed["id"]}

    funding = (await client.get(BASE, params={"status": "Funding"})).json()
    assert [p["id"] for p in funding] == [open_project["id"]]

    expired = (await client.get(f"{BASE}/expired")).json()
    assert [p["id"] for p in expired] == [closed["id"]]


async def test_list_projects_unknown_filter_is_rejected(client):
    res = await client.get(BASE, params={"status": "Paused"})
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "INVALID_STATUS"
