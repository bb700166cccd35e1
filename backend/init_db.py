"""
Initialize the short link database.

Run this script once to create the tables:
    python init_db.py
"""

from shortlink.config import settings
from shortlink.database import engine, Base, SessionLocal
from shortlink.models import ShortLink  # noqa: F401  registers the table
from shortlink.store.sql import SQLAlchemyMappingStore


def init_database():
    """Create all database tables"""
    print("Creating database tables...")
    Base.metadata.create_all(bind=engine)
    print("Database tables created successfully!")


def report():
    """Print what the store currently holds"""
    db = SessionLocal()
    try:
        store = SQLAlchemyMappingStore(db)
        print(f"Store reachable: {store.ping()}")
        print(f"Stored short links: {store.count()}")
    finally:
        db.close()


if __name__ == "__main__":
    print("=" * 50)
    print("Short Links - Database Initialization")
    print(f"Database: {engine.url.render_as_string(hide_password=True)}")
    print(f"Short URLs: {settings.BASE_URL.rstrip('/')}/{settings.SHORT_PATH_PREFIX.strip('/')}/<code>")
    print("=" * 50)

    init_database()
    report()

    print("\nYou can now start the server with:")
    print("    uvicorn shortlink.main:app --reload")
