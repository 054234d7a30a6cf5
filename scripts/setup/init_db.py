# scripts/setup/init_db.py
"""
Initialize the SQL backend - creates all tables and seeds the demo bars.
Run once before first launch with STORAGE_BACKEND=sql.
Usage: python scripts/setup/init_db.py
"""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", ".."))

from app.database import make_engine, make_session_factory, create_tables
from app.storage.sql import SqlStorage
from app.storage.seed import seed_demo_data
from app.config import settings
from sqlalchemy import text, inspect
from sqlalchemy.exc import SQLAlchemyError


def main():
    print("🗄️  Bar Occupancy DB Initialization")
    print("=" * 40)
    print(f"📡 Database: {settings.DATABASE_URL}")

    engine = make_engine(settings.DATABASE_URL)
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        print("✅ Database connection OK")
    except SQLAlchemyError as e:
        print(f"❌ Cannot connect to database: {e}")
        sys.exit(1)

    print("\n📋 Creating tables...")
    create_tables(engine)
    tables = sorted(inspect(engine).get_table_names())
    print(f"📊 Tables in database ({len(tables)} total):")
    for t in tables:
        print(f"   ✓ {t}")

    storage = SqlStorage(make_session_factory(engine))
    seed_demo_data(storage)
    for bar in storage.get_all_bars():
        print(f"   🍺 {bar.id}: {bar.name} ({bar.current_count}/{bar.capacity})")

    print("\n🎉 Database ready! Start the backend with:")
    print("   STORAGE_BACKEND=sql uvicorn app.main:app --host 0.0.0.0 --port 5000 --reload")


if __name__ == "__main__":
    main()
