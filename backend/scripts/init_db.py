"""
Initialize the database: create the staff and patients tables.
Run with: python -m scripts.init_db
"""

import asyncio
from app.database import engine, Base
from app.models import Patient, Staff  # noqa: F401


async def init():
    print("Creating database tables...")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    print("Tables created: " + ", ".join(sorted(Base.metadata.tables)))
    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(init())
