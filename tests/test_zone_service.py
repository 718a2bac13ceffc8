# tests/test_zone_service.py
"""Unit tests for the zone registry."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
from app.exceptions import NotFoundError, ValidationError
from app.schemas.zone import ZoneCreate, ZoneUpdate
from app.services import zone_service
from app.services.vehicle_service import enter_vehicle


def body(zone_id, capacity=20):
    return ZoneCreate(id=zone_id, name=f"Zone {zone_id}", capacity=capacity,
                      heavy_limit=4, medium_limit=6, light_limit=10)


class TestZoneRegistry:
    def test_list_in_registration_order(self, db):
        for zone_id in ("B", "A", "C"):
            zone_service.create_zone(db, body(zone_id))
        assert [z.id for z in zone_service.list_zones(db)] == ["B", "A", "C"]

    def test_duplicate_id_rejected(self, db):
        zone_service.create_zone(db, body("A"))
        with pytest.raises(ValidationError):
            zone_service.create_zone(db, body("A"))

    def test_partial_update(self, db):
        zone_service.create_zone(db, body("A"))
        zone = zone_service.update_zone(db, "A", ZoneUpdate(capacity=30))
        assert zone.capacity == 30
        assert zone.name == "Zone A"

    def test_update_missing(self, db):
        with pytest.raises(NotFoundError):
            zone_service.update_zone(db, "nope", ZoneUpdate(name="x"))

    def test_delete_refused_while_occupied(self, db):
        zone_service.create_zone(db, body("A"))
        enter_vehicle(db, "KL-1", "light", zone_id="A")
        with pytest.raises(ValidationError):
            zone_service.delete_zone(db, "A")

    def test_delete_empty_zone(self, db):
        zone_service.create_zone(db, body("A"))
        zone_service.delete_zone(db, "A")
        assert zone_service.list_zones(db) == []

    def test_initialize_defaults(self, db):
        zones = zone_service.initialize_default_zones(db, count=3, capacity=50)
        assert [z.id for z in zones] == ["Z1", "Z2", "Z3"]
        assert (zones[0].heavy_limit, zones[0].medium_limit, zones[0].light_limit) == (10, 15, 25)
        assert [z.id for z in zone_service.list_zones(db)] == ["Z1", "Z2", "Z3"]
        with pytest.raises(ValidationError):
            zone_service.initialize_default_zones(db)

    def test_stats(self, db):
        zone_service.create_zone(db, body("A"))
        enter_vehicle(db, "H1", "heavy", zone_id="A")
        enter_vehicle(db, "L1", "light", zone_id="A")
        [stats] = zone_service.zones_with_stats(db)
        assert stats["occupied"] == 2
        assert stats["stats"] == {"heavy": 1, "medium": 0, "light": 1}
        assert stats["limits"] == {"heavy": 4, "medium": 6, "light": 10}
        assert {v["number"] for v in stats["vehicles"]} == {"H1", "L1"}
