"""
Initialize the database: create all tables.
Run with: python -m scripts.init_db
"""

import asyncio
from care_api.config import get_settings
from care_api.database import Database


async def init():
    print("Creating database tables...")
    database = Database(get_settings())
    await database.startup()
    print("All tables created successfully.")
    await database.shutdown()


if __name__ == "__main__":
    asyncio.run(init())
