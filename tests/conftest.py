# tests/conftest.py
"""
Shared fixtures. The app reads DATABASE_URL at import time, so it is pointed
at in-memory SQLite here, before anything under app/ is imported.
"""

import sys
import os
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.pop("API_KEY", None)
os.environ["LOG_TO_FILE"] = "false"
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
from app.database import SessionLocal, create_tables, drop_tables
from app.models.parking_zone import ParkingZone


@pytest.fixture
def db():
    """Fresh schema per test."""
    create_tables()
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        drop_tables()


@pytest.fixture
def client(db):
    from fastapi.testclient import TestClient
    from app.main import app

    with TestClient(app) as c:
        yield c


@pytest.fixture
def make_zone(db):
    """Register a zone directly; positions follow call order."""
    created = []

    def _make(zone_id="Z1", capacity=50, heavy=10, medium=15, light=25, name=None):
        zone = ParkingZone(
            id=zone_id, name=name or f"Zone {zone_id}", capacity=capacity,
            heavy_limit=heavy, medium_limit=medium, light_limit=light,
            position=len(created) + 1,
        )
        db.add(zone)
        db.commit()
        created.append(zone)
        return zone

    return _make
