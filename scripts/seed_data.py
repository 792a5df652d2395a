#!/usr/bin/env python3
"""
Seed MongoDB with demo users, projects and coachings.

Clears the three collections first, so don't point this at data you
want to keep.

Usage:
    python scripts/seed_data.py

Requires:
    - .env file (or environment) with MONGODB_URI and MONGODB_DATABASE
"""

import asyncio
import sys
from pathlib import Path

# Add project root to path so we can import our modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

from coaching_api.config.settings import get_settings
from coaching_api.core.access.models import Role
from coaching_api.infrastructure.mongo.client import MongoConfig, MongoStore
from coaching_api.infrastructure.mongo.seed import seed_database


async def main() -> int:
    settings = get_settings()
    store = MongoStore(MongoConfig(uri=settings.mongodb_uri, database=settings.mongodb_database))

    try:
        await store.ping()
        print(f"Connected to MongoDB database '{settings.mongodb_database}'")

        summary = await seed_database(store)

        print("\nDatabase seeding completed successfully!")
        print("\nSummary:")
        print(f"   Users: {len(summary.users)}")
        print(f"      - Clients: {summary.count_role(Role.CLIENT)}")
        print(f"      - Coaches: {summary.count_role(Role.COACH)}")
        print(f"      - PMs: {summary.count_role(Role.PM)}")
        print(f"      - Ops: {summary.count_role(Role.OPS)}")
        print(f"   Projects: {len(summary.projects)}")
        print(f"   Coaching relationships: {len(summary.coachings)}")
        return 0
    except Exception as e:
        print(f"Error seeding database: {e}")
        return 1
    finally:
        store.close()
        print("Database connection closed")


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
