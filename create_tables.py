"""
create_tables.py
----------------
One-shot script to create all database tables (tenants, rooms,
electrical_devices). Schema migrations are out of scope for this project;
drop and re-run against an empty database when the models change.

Usage:
    python create_tables.py
"""

import asyncio

from hotel_energy.db.session import engine
from hotel_energy.models import Base  # Imports all models so metadata is populated


async def create_all_tables() -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    await engine.dispose()
    print("All tables created successfully.")


if __name__ == "__main__":
    asyncio.run(create_all_tables())
