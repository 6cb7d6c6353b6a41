#!/usr/bin/env python3
"""
Connection Test Script

Run this to verify the database and MongoDB cache are reachable.
Usage: python scripts/check_connections.py
"""
import sys
sys.path.insert(0, '.')

from jobboard.db.database import check_db_connection
from jobboard.db.mongodb import check_mongo_connection
from jobboard.core.config import get_settings


def main():
    settings = get_settings()
    print("=" * 50)
    print("JOB BOARD - CONNECTION TEST")
    print("=" * 50)

    print("\n[1] Testing database...")
    url = settings.sqlalchemy_url
    if settings.postgres_password and not settings.database_url:
        url = url.replace(settings.postgres_password, "****")
    print(f"    URL: {url}")
    db_ok = check_db_connection()
    print("    ✅ Database: CONNECTED" if db_ok else "    ❌ Database: FAILED")

    print("\n[2] Testing MongoDB cache...")
    if settings.cache_enabled:
        print(f"    URI: {settings.mongodb_uri}")
        print(f"    Database: {settings.mongodb_db}")
        if check_mongo_connection():
            print("    ✅ MongoDB: CONNECTED")
        else:
            print("    ❌ MongoDB: FAILED (API still works, cache degrades to misses)")
    else:
        print("    ⚠️  Cache disabled (CACHE_ENABLED=false)")

    print("\n" + "=" * 50)
    print("Connection test complete!")
    print("=" * 50)
    return 0 if db_ok else 1


if __name__ == "__main__":
    sys.exit(main())
