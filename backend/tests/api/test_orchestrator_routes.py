"""Orchestrator Routes — devices, policies, orchestration, and history over HTTP.

Tests cover:
    - Device registration (201) and per-user listing
    - Policy creation with condition validation
    - Orchestrate returns matched results with per-device outcomes
    - Unknown device surfaces inside the body, not as an HTTP error
    - History limit and deactivation
    - Feature flag off → 404 FEATURE_DISABLED envelope
"""

import pytest

LIGHT = {
    "userId": "user-123",
    "deviceId": "light-living-room",
    "deviceName": "Living Room Light",
    "deviceType": "light",
    "state": {"on": True},
}

FOCUS_POLICY = {
    "userId": "user-123",
    "policyName": "Focus Mode",
    "condition": {
        "emotionVector": {"focused": 0.7},
        "frictionScore": {"min": 0.3, "max": 0.8},
    },
    "action": {"devices": [
        {
            "deviceId": "light-living-room",
            "command": "set_brightness",
            "parameters": {"brightness": 60, "color": "warm"},
        },
    ]},
}


async def _orchestrate(client, focused: float = 0.8, friction: float = 0.5):
    return await client.post("/api/v1/orchestrator/orchestrate", json={
        "userId": "user-123",
        "emotionVector": {"focused": focused},
        "frictionScore": friction,
    })


# ─── Devices & policies ─────────────────────────────────────────

@pytest.mark.asyncio
async def test_register_and_list_devices(client):
    response = await client.post("/api/v1/orchestrator/devices", json=LIGHT)
    assert response.status_code == 201
    assert response.json()["lastSyncedAt"] is not None

    listed = await client.get("/api/v1/orchestrator/devices/user-123")
    assert [d["deviceId"] for d in listed.json()] == ["light-living-room"]


@pytest.mark.asyncio
async def test_register_device_rejects_unknown_type(client):
    response = await client.post(
        "/api/v1/orchestrator/devices", json={**LIGHT, "deviceType": "toaster"},
    )
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_create_and_list_policies(client):
    response = await client.post("/api/v1/orchestrator/policies", json=FOCUS_POLICY)
    assert response.status_code == 201
    created = response.json()
    assert created["isActive"] is True
    assert created["condition"]["emotionVector"] == {"focused": 0.7}

    listed = await client.get("/api/v1/orchestrator/policies/user-123")
    assert [p["policyName"] for p in listed.json()] == ["Focus Mode"]


@pytest.mark.asyncio
async def test_policy_rejects_inverted_friction_window(client):
    body = {**FOCUS_POLICY, "condition": {"frictionScore": {"min": 0.8, "max": 0.2}}}
    response = await client.post("/api/v1/orchestrator/policies", json=body)
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_policy_rejects_unknown_command(client):
    body = {**FOCUS_POLICY, "action": {"devices": [
        {"deviceId": "light-living-room", "command": "self_destruct"},
    ]}}
    response = await client.post("/api/v1/orchestrator/policies", json=body)
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_policy_rejects_midnight_window_without_flag(client):
    body = {**FOCUS_POLICY, "condition": {"timeOfDay": {"start": "22:00", "end": "06:00"}}}
    response = await client.post("/api/v1/orchestrator/policies", json=body)
    assert response.status_code == 400


# ─── Orchestration ───────────────────────────────────────────────

@pytest.mark.asyncio
async def test_orchestrate_end_to_end(client):
    await client.post("/api/v1/orchestrator/devices", json=LIGHT)
    await client.post("/api/v1/orchestrator/policies", json=FOCUS_POLICY)

    response = await _orchestrate(client)

    assert response.status_code == 200
    [result] = response.json()
    assert result["policyName"] == "Focus Mode"
    assert result["actions"] == [{
        "deviceId": "light-living-room",
        "command": "set_brightness",
        "status": "success",
        "success": True,
        "error": None,
    }]
    [light] = (await client.get("/api/v1/orchestrator/devices/user-123")).json()
    assert light["state"]["brightness"] == 60
    assert light["state"]["on"] is True


@pytest.mark.asyncio
async def test_orchestrate_unknown_device_reported_in_body(client):
    await client.post("/api/v1/orchestrator/policies", json=FOCUS_POLICY)

    response = await _orchestrate(client)

    assert response.status_code == 200
    action = response.json()[0]["actions"][0]
    assert action["success"] is False
    assert action["error"] == "Device not found"


@pytest.mark.asyncio
async def test_orchestrate_no_match_returns_empty_list(client):
    await client.post("/api/v1/orchestrator/policies", json=FOCUS_POLICY)
    response = await _orchestrate(client, focused=0.3)
    assert response.json() == []


@pytest.mark.asyncio
async def test_history_limit(client):
    await client.post("/api/v1/orchestrator/devices", json=LIGHT)
    await client.post("/api/v1/orchestrator/policies", json=FOCUS_POLICY)
    first = (await _orchestrate(client)).json()[0]
    second = (await _orchestrate(client)).json()[0]

    response = await client.get("/api/v1/orchestrator/history/user-123?limit=1")
    assert response.json() == [second]
    full = await client.get("/api/v1/orchestrator/history/user-123")
    assert full.json() == [first, second]


@pytest.mark.asyncio
async def test_deactivated_policy_stops_matching(client):
    created = (await client.post(
        "/api/v1/orchestrator/policies", json=FOCUS_POLICY,
    )).json()

    response = await client.post(
        f"/api/v1/orchestrator/policies/user-123/{created['id']}/deactivate",
    )
    assert response.status_code == 200
    assert response.json()["isActive"] is False
    assert (await _orchestrate(client)).json() == []


@pytest.mark.asyncio
async def test_deactivate_unknown_policy_is_404(client):
    response = await client.post(
        "/api/v1/orchestrator/policies/user-123/missing/deactivate",
    )
    assert response.status_code == 404
    assert response.json()["error"]["code"] == "RESOURCE_NOT_FOUND"


# ─── Feature flag ────────────────────────────────────────────────

@pytest.mark.asyncio
@pytest.mark.parametrize(
    "settings_overrides", [{"enable_environmental_orchestrator": False}],
)
async def test_orchestrator_disabled_returns_404(client):
    response = await client.get("/api/v1/orchestrator/devices/user-123")
    assert response.status_code == 404
    assert response.json()["error"]["code"] == "FEATURE_DISABLED"
