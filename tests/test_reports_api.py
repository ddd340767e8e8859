import pytest


@pytest.fixture
async def furnished(make_room, add_devices):
    """Three rooms: one moderate, one good, one empty."""
    ac_room = await make_room("101", "Deluxe")
    fridge_room = await make_room("102", "Standard")
    empty = await make_room("103")
    await add_devices(ac_room["id"], ("Air conditioner", 1500, 8))
    await add_devices(fridge_room["id"], ("Fridge", 100, 24), ("Lamp", 10, 8))
    return ac_room, fridge_room, empty


async def test_dashboard(client, tenant, furnished):
    resp = await client.get(f"/tenants/{tenant['id']}/dashboard")
    assert resp.status_code == 200
    body = resp.json()

    assert body["tenant"]["id"] == tenant["id"]
    rooms = [
        (r["room_number"], r["device_count"], r["daily_kwh"], r["health_status"])
        for r in body["rooms"]
    ]
    assert rooms == [
        ("101", 1, 12.0, "moderate"),
        ("102", 2, 2.48, "good"),
        ("103", 0, 0.0, "good"),
    ]
    assert body["rooms"][0]["monthly_kwh"] == 360.0
    assert body["rooms"][0]["yearly_kwh"] == 4380.0

    assert body["stats"] == {
        "total_rooms": 3,
        "total_devices": 3,
        "total_daily_kwh": 14.48,
        "total_monthly_kwh": 434.4,
        "estimated_monthly_cost": 65.16,
    }


async def test_dashboard_high_consumption(client, tenant, make_room, add_devices):
    room = await make_room("Laundry")
    await add_devices(room["id"], ("Dryer", 5000, 6))
    body = (await client.get(f"/tenants/{tenant['id']}/dashboard")).json()
    assert body["rooms"][0]["health_status"] == "high"


async def test_dashboard_without_rooms(client, tenant):
    body = (await client.get(f"/tenants/{tenant['id']}/dashboard")).json()
    assert body["rooms"] == []
    assert body["stats"]["total_rooms"] == 0
    assert body["stats"]["estimated_monthly_cost"] == 0


async def test_dashboard_follows_mutations(client, tenant, furnished):
    ac_room = furnished[0]
    devices = (await client.get(f"/tenants/{tenant['id']}/rooms/{ac_room['id']}/devices")).json()
    await client.patch(
        f"/tenants/{tenant['id']}/devices/{devices[0]['id']}",
        json={"device_name": "Air conditioner", "power_watts": 1500, "usage_hours_per_day": 16},
    )
    body = (await client.get(f"/tenants/{tenant['id']}/dashboard")).json()
    assert body["rooms"][0]["daily_kwh"] == 24.0
    assert body["rooms"][0]["health_status"] == "high"


async def test_report_ranks_rooms(client, tenant, furnished):
    resp = await client.get(f"/tenants/{tenant['id']}/report", params={"price_per_kwh": "0.15"})
    assert resp.status_code == 200
    body = resp.json()

    assert body["price_per_kwh"] == 0.15
    assert body["total_rooms"] == 3
    assert [r["room"]["room_number"] for r in body["rooms"]] == ["101", "102", "103"]

    top = body["rooms"][0]
    assert top["yearly_kwh"] == 4380.0
    assert top["yearly_cost"] == 657.0
    assert top["percentage_of_total"] == pytest.approx(82.87, abs=0.01)
    assert sum(r["percentage_of_total"] for r in body["rooms"]) == pytest.approx(100, abs=0.02)
    assert body["rooms"][2]["percentage_of_total"] == 0

    assert body["totals"]["devices"] == 3
    assert body["totals"]["yearly_kwh"] == pytest.approx(5285.2)


async def test_report_default_rate(client, tenant, furnished):
    body = (await client.get(f"/tenants/{tenant['id']}/report")).json()
    assert body["price_per_kwh"] == 0.15


@pytest.mark.parametrize("price", ["", "abc", "-3"])
async def test_report_bad_rate_counts_as_zero(client, tenant, furnished, price):
    body = (
        await client.get(f"/tenants/{tenant['id']}/report", params={"price_per_kwh": price})
    ).json()
    assert body["price_per_kwh"] == 0
    assert body["totals"]["yearly_cost"] == 0
    assert body["totals"]["yearly_kwh"] == pytest.approx(5285.2)


async def test_report_rate_change_is_side_effect_free(client, tenant, furnished):
    url = f"/tenants/{tenant['id']}/report"
    first = (await client.get(url, params={"price_per_kwh": "0.2"})).json()
    await client.get(url, params={"price_per_kwh": "1.5"})
    again = (await client.get(url, params={"price_per_kwh": "0.2"})).json()
    assert first == again


async def test_report_for_idle_hotel(client, tenant, make_room):
    await make_room("101")
    await make_room("102")
    body = (await client.get(f"/tenants/{tenant['id']}/report")).json()
    assert [r["percentage_of_total"] for r in body["rooms"]] == [0, 0]


async def test_report_unknown_tenant(client, database):
    resp = await client.get("/tenants/missing/report")
    assert resp.status_code == 404
