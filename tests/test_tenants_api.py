async def test_health(client):
    resp = await client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


async def test_create_and_list_tenants(client, database):
    resp = await client.post("/tenants", json={"name": "  Seaside Inn  "})
    assert resp.status_code == 201
    body = resp.json()
    assert body["name"] == "Seaside Inn"
    assert "/tenants" in resp.headers["x-invalidate-views"]

    await client.post("/tenants", json={"name": "Alpine Lodge"})
    resp = await client.get("/tenants")
    assert [t["name"] for t in resp.json()] == ["Alpine Lodge", "Seaside Inn"]


async def test_duplicate_name_conflicts(client, tenant):
    resp = await client.post("/tenants", json={"name": "Grand Hotel"})
    assert resp.status_code == 409
    assert resp.json()["detail"] == "Tenant 'Grand Hotel' already exists"


async def test_short_name_is_rejected_per_field(client, database):
    resp = await client.post("/tenants", json={"name": " x "})
    assert resp.status_code == 422
    body = resp.json()
    assert body["detail"] == "Invalid tenant data provided"
    assert body["errors"]["name"] == ["Name must be at least 2 characters"]


async def test_get_missing_tenant(client, database):
    resp = await client.get("/tenants/does-not-exist")
    assert resp.status_code == 404
    assert resp.json()["detail"] == "Tenant not found"


async def test_rename_tenant(client, tenant):
    resp = await client.patch(f"/tenants/{tenant['id']}", json={"name": "Grand Hotel Annex"})
    assert resp.status_code == 200
    assert resp.json()["name"] == "Grand Hotel Annex"
    assert f"/tenants/{tenant['id']}" in resp.headers["x-invalidate-views"]

    resp = await client.get(f"/tenants/{tenant['id']}")
    assert resp.json()["name"] == "Grand Hotel Annex"


async def test_rename_to_existing_name_conflicts(client, tenant):
    await client.post("/tenants", json={"name": "Harbour View"})
    resp = await client.patch(f"/tenants/{tenant['id']}", json={"name": "Harbour View"})
    assert resp.status_code == 409


async def test_delete_tenant_cascades(client, tenant, make_room, add_devices):
    room = await make_room("101")
    await add_devices(room["id"], ("TV", 120, 5))
    loose = await client.post(
        f"/tenants/{tenant['id']}/devices",
        json={"device_name": "Lobby sign", "power_watts": 300, "usage_hours_per_day": 24},
    )
    assert loose.status_code == 201

    resp = await client.delete(f"/tenants/{tenant['id']}")
    assert resp.status_code == 204

    assert (await client.get(f"/tenants/{tenant['id']}")).status_code == 404
    assert (await client.get(f"/tenants/{tenant['id']}/rooms")).status_code == 404
    assert (await client.delete(f"/tenants/{tenant['id']}")).status_code == 404


async def test_missing_name_uses_error_shape(client, database):
    resp = await client.post("/tenants", json={})
    assert resp.status_code == 422
    body = resp.json()
    assert body["detail"] == "Invalid request data"
    assert list(body["errors"]) == ["name"]


async def test_non_string_name_is_rejected(client, database):
    resp = await client.post("/tenants", json={"name": 42})
    assert resp.status_code == 422
    assert "name" in resp.json()["errors"]
