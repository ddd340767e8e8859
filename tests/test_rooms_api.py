async def test_rooms_get_increasing_display_order(client, tenant, make_room):
    first = await make_room("101", "Standard")
    second = await make_room("102")
    third = await make_room("201", "Suite")
    assert [first["display_order"], second["display_order"], third["display_order"]] == [1, 2, 3]
    assert second["room_type"] is None


async def test_list_rooms_with_device_counts(client, tenant, make_room, add_devices):
    a = await make_room("101")
    b = await make_room("102")
    await add_devices(a["id"], ("TV", 120, 5), ("Kettle", 2200, 0.25))

    resp = await client.get(f"/tenants/{tenant['id']}/rooms")
    assert resp.status_code == 200
    listing = resp.json()
    assert [(r["room_number"], r["device_count"]) for r in listing] == [("101", 2), ("102", 0)]
    assert listing[1]["id"] == b["id"]


async def test_duplicate_room_number_conflicts(client, tenant, make_room):
    await make_room("101")
    resp = await client.post(f"/tenants/{tenant['id']}/rooms", json={"room_number": "101"})
    assert resp.status_code == 409
    assert resp.json()["detail"] == "Room number already exists for this hotel"


async def test_same_room_number_in_other_hotel_is_fine(client, tenant, make_room):
    await make_room("101")
    other = (await client.post("/tenants", json={"name": "Other Hotel"})).json()
    resp = await client.post(f"/tenants/{other['id']}/rooms", json={"room_number": "101"})
    assert resp.status_code == 201
    assert resp.json()["display_order"] == 1


async def test_blank_room_number_is_rejected(client, tenant):
    resp = await client.post(f"/tenants/{tenant['id']}/rooms", json={"room_number": "  "})
    assert resp.status_code == 422
    assert resp.json()["errors"] == {"room_number": ["Room number is required"]}


async def test_room_in_missing_tenant(client, database):
    resp = await client.post("/tenants/nope/rooms", json={"room_number": "101"})
    assert resp.status_code == 404


async def test_update_room(client, tenant, make_room):
    room = await make_room("101")
    await make_room("102")
    url = f"/tenants/{tenant['id']}/rooms/{room['id']}"

    resp = await client.patch(url, json={"room_number": "101A", "room_type": "Deluxe"})
    assert resp.status_code == 200
    assert resp.json()["room_number"] == "101A"
    assert resp.json()["room_type"] == "Deluxe"
    assert resp.json()["display_order"] == 1

    resp = await client.patch(url, json={"room_number": "102"})
    assert resp.status_code == 409


async def test_room_of_other_tenant_is_not_found(client, tenant, make_room):
    room = await make_room("101")
    other = (await client.post("/tenants", json={"name": "Other Hotel"})).json()
    resp = await client.get(f"/tenants/{other['id']}/rooms/{room['id']}")
    assert resp.status_code == 404
    assert resp.json()["detail"] == "Room not found"


async def test_delete_room_removes_its_devices(client, tenant, make_room, add_devices):
    room = await make_room("101")
    keep = await make_room("102")
    await add_devices(room["id"], ("TV", 120, 5))
    await add_devices(keep["id"], ("Fan", 45, 12))

    resp = await client.delete(f"/tenants/{tenant['id']}/rooms/{room['id']}")
    assert resp.status_code == 204
    assert f"/tenants/{tenant['id']}/rooms/{room['id']}" in resp.headers["x-invalidate-views"]

    devices = (await client.get(f"/tenants/{tenant['id']}/devices")).json()
    assert [d["device_name"] for d in devices] == ["Fan"]


async def test_next_room_walk(client, tenant, make_room):
    rooms = [await make_room(number) for number in ("101", "102", "103")]
    base = f"/tenants/{tenant['id']}/rooms"

    resp = await client.get(f"{base}/{rooms[0]['id']}/next")
    assert resp.status_code == 200
    assert resp.json()["action"] == "next_room"
    assert resp.json()["room"]["id"] == rooms[1]["id"]

    # Removing 102 makes 103 follow 101
    await client.delete(f"{base}/{rooms[1]['id']}")
    resp = await client.get(f"{base}/{rooms[0]['id']}/next")
    assert resp.json()["room"]["room_number"] == "103"

    resp = await client.get(f"{base}/{rooms[2]['id']}/next")
    assert resp.json() == {
        "action": "return_to_tenant",
        "tenant_id": tenant["id"],
        "room": None,
    }


async def test_next_room_for_unknown_room(client, tenant):
    resp = await client.get(f"/tenants/{tenant['id']}/rooms/missing/next")
    assert resp.status_code == 404


async def test_copy_room_devices(client, tenant, make_room, add_devices):
    source = await make_room("101")
    target = await make_room("102")
    originals = await add_devices(
        source["id"], ("TV", 120, 5), ("Kettle", 2200, 0.25), ("Lamp", 10, 8)
    )
    await add_devices(target["id"], ("Minibar", 80, 24))
    base = f"/tenants/{tenant['id']}/rooms"

    resp = await client.post(
        f"{base}/{source['id']}/copy-devices", json={"target_room_id": target["id"]}
    )
    assert resp.status_code == 201
    assert resp.json() == {
        "copied": 3,
        "message": "Successfully copied 3 device(s) to target room",
    }

    source_devices = (await client.get(f"{base}/{source['id']}/devices")).json()
    target_devices = (await client.get(f"{base}/{target['id']}/devices")).json()
    assert len(source_devices) == 3
    assert len(target_devices) == 4

    def fingerprint(d):
        return (d["device_name"], d["power_watts"], d["usage_hours_per_day"])

    copied = [d for d in target_devices if d["device_name"] != "Minibar"]
    assert sorted(map(fingerprint, copied)) == sorted(map(fingerprint, originals))
    assert not {d["id"] for d in copied} & {d["id"] for d in originals}


async def test_copy_from_empty_room_is_reported(client, tenant, make_room):
    source = await make_room("101")
    target = await make_room("102")
    resp = await client.post(
        f"/tenants/{tenant['id']}/rooms/{source['id']}/copy-devices",
        json={"target_room_id": target["id"]},
    )
    assert resp.status_code == 422
    assert resp.json()["detail"] == "Source room has no devices to copy"


async def test_copy_onto_itself_is_rejected(client, tenant, make_room, add_devices):
    room = await make_room("101")
    await add_devices(room["id"], ("TV", 120, 5))
    resp = await client.post(
        f"/tenants/{tenant['id']}/rooms/{room['id']}/copy-devices",
        json={"target_room_id": room["id"]},
    )
    assert resp.status_code == 422


async def test_room_consumption(client, tenant, make_room, add_devices):
    room = await make_room("101", "Deluxe")
    await add_devices(room["id"], ("Air conditioner", 1500, 8))

    resp = await client.get(f"/tenants/{tenant['id']}/rooms/{room['id']}/consumption")
    assert resp.status_code == 200
    body = resp.json()
    assert body["room"]["id"] == room["id"]
    assert body["device_count"] == 1
    assert body["daily_kwh"] == 12.0
    assert body["monthly_kwh"] == 360.0
    assert body["yearly_kwh"] == 4380.0
    assert body["estimated_monthly_cost"] == 54.0
    assert body["health_status"] == "moderate"


async def test_empty_room_consumption(client, tenant, make_room):
    room = await make_room("101")
    body = (await client.get(f"/tenants/{tenant['id']}/rooms/{room['id']}/consumption")).json()
    assert body["device_count"] == 0
    assert body["estimated_monthly_cost"] == 0
    assert body["health_status"] == "good"


async def test_consumption_of_other_tenants_room(client, tenant, make_room):
    room = await make_room("101")
    other = (await client.post("/tenants", json={"name": "Other Hotel"})).json()
    resp = await client.get(f"/tenants/{other['id']}/rooms/{room['id']}/consumption")
    assert resp.status_code == 404
