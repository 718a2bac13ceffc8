# scripts/setup/init_db.py
"""
Initialize database: creates all tables and, optionally, the default zones.
Run once before first launch, or after adding new models.
Usage: python scripts/setup/init_db.py [--with-zones]
"""

import argparse
import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", ".."))

from app.database import create_tables, engine, SessionLocal
from app.config import settings
from app.exceptions import ValidationError
from app.services.zone_service import initialize_default_zones
from sqlalchemy import inspect, text


def main():
    parser = argparse.ArgumentParser(description="Create tables for the parking backend")
    parser.add_argument("--with-zones", action="store_true",
                        help=f"Register {settings.DEFAULT_ZONE_COUNT} default zones")
    args = parser.parse_args()

    print("🗄️  Parking DB Initialization")
    print("=" * 40)
    print(f"📡 Database: {settings.DATABASE_URL}")

    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        print("✅ Database connection OK")
    except Exception as e:
        print(f"❌ Cannot connect to database: {e}")
        print("\nMake sure PostgreSQL is running:")
        print("  docker-compose up -d db")
        print("  # or: sudo systemctl start postgresql")
        sys.exit(1)

    print("\n📋 Creating tables...")
    create_tables()
    tables = sorted(inspect(engine).get_table_names())
    print(f"\n📊 Tables in database ({len(tables)} total):")
    for t in tables:
        print(f"   ✓ {t}")

    if args.with_zones:
        db = SessionLocal()
        try:
            zones = initialize_default_zones(db)
            print(f"\n🅿️  Registered {len(zones)} zones")
        except ValidationError as e:
            print(f"\n⚠️  {e.message}")
        finally:
            db.close()

    print("\n🎉 Database ready! You can now start the backend:")
    print(f"   uvicorn app.main:app --host {settings.BACKEND_IP} --port {settings.BACKEND_PORT} --reload")


if __name__ == "__main__":
    main()
