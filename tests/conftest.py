import os

# Settings are read at import time; point them at an in-memory database
# before anything from the application is imported.
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["DEBUG"] = "false"

from types import SimpleNamespace  # noqa: E402

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from hotel_energy.db.session import AsyncSessionLocal, engine  # noqa: E402
from hotel_energy.models import Base  # noqa: E402
from main import app  # noqa: E402


@pytest.fixture
async def database():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    # Drops the shared in-memory connection so the next test starts clean
    await engine.dispose()


@pytest.fixture
async def session(database):
    async with AsyncSessionLocal() as db:
        yield db


@pytest.fixture
async def client(database):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as http:
        yield http


@pytest.fixture
def device():
    def make(power_watts, usage_hours_per_day, name="Device"):
        return SimpleNamespace(
            device_name=name,
            power_watts=power_watts,
            usage_hours_per_day=usage_hours_per_day,
        )

    return make


@pytest.fixture
async def tenant(client):
    resp = await client.post("/tenants", json={"name": "Grand Hotel"})
    assert resp.status_code == 201
    return resp.json()


@pytest.fixture
def make_room(client, tenant):
    async def make(room_number, room_type=None):
        resp = await client.post(
            f"/tenants/{tenant['id']}/rooms",
            json={"room_number": room_number, "room_type": room_type},
        )
        assert resp.status_code == 201, resp.text
        return resp.json()

    return make


@pytest.fixture
def add_devices(client, tenant):
    async def add(room_id, *devices):
        payload = [
            {"device_name": name, "power_watts": watts, "usage_hours_per_day": hours}
            for name, watts, hours in devices
        ]
        resp = await client.post(
            f"/tenants/{tenant['id']}/rooms/{room_id}/devices",
            json={"devices": payload},
        )
        assert resp.status_code == 201, resp.text
        return resp.json()

    return add
