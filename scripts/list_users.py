#!/usr/bin/env python3
"""
Print every user's id and role, for trying the API by hand.

Usage:
    python scripts/list_users.py
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
from coaching_api.infrastructure.mongo.client import MongoConfig, MongoStore
from coaching_api.infrastructure.mongo.repositories import UserRepository


async def main() -> int:
    settings = get_settings()
    store = MongoStore(MongoConfig(uri=settings.mongodb_uri, database=settings.mongodb_database))

    try:
        users = await UserRepository(store).find_all()

        print("\nAvailable Users for API Testing:")
        print("================================\n")
        for user in users:
            print(f"ID: {user.id} | Role: {user.role.value:<7}| Name: {user.full_name}")

        print("\nUsage:\n")
        print("  In the docs page (/docs):")
        print("    Click 'Authorize' and paste a user ID from the list")
        print("  With curl or Postman, send the header:")
        print("    X-User-Id: <user_id_from_above>")
        return 0
    except Exception as e:
        print(f"Error listing users: {e}")
        return 1
    finally:
        store.close()


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
