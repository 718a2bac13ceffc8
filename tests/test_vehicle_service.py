# tests/test_vehicle_service.py
"""Unit tests for vehicle entry, exit, search and zone assignment."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import threading
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from app.database import Base
from app.models.parking_zone import ParkingZone
from app.exceptions import CapacityExceededError, NotFoundError, ValidationError
from app.models.parking_event import ParkingEvent
from app.models.vehicle import Vehicle
from app.services.vehicle_service import enter_vehicle, exit_vehicle, search_vehicle


class TestEnterVehicle:
    def test_entry_creates_vehicle_and_event(self, db, make_zone):
        make_zone("Z1")
        vehicle, zone = enter_vehicle(db, "KL-07-AB-1234", "medium", slot="A3")

        assert zone.id == "Z1"
        assert vehicle.ticket_id.startswith("TKT-")
        assert vehicle.slot == "A3"
        event = db.query(ParkingEvent).one()
        assert (event.event_type, event.zone_id, event.vehicle_type) == ("entry", "Z1", "medium")
        assert event.hour_of_day == event.event_time.hour

    def test_missing_number_rejected(self, db, make_zone):
        make_zone("Z1")
        with pytest.raises(ValidationError):
            enter_vehicle(db, "  ", "light")
        with pytest.raises(ValidationError):
            enter_vehicle(db, None, "light")

    def test_unknown_type_rejected(self, db, make_zone):
        make_zone("Z1")
        with pytest.raises(ValidationError):
            enter_vehicle(db, "KL-1", "bus")

    def test_unknown_zone(self, db, make_zone):
        make_zone("Z1")
        with pytest.raises(NotFoundError):
            enter_vehicle(db, "KL-1", "light", zone_id="Z9")

    def test_heavy_limit_reached(self, db, make_zone):
        make_zone("Z1", capacity=50, heavy=10)
        for i in range(10):
            enter_vehicle(db, f"HV-{i}", "heavy", zone_id="Z1")

        with pytest.raises(CapacityExceededError) as exc:
            enter_vehicle(db, "HV-10", "heavy", zone_id="Z1")

        assert exc.value.message == "Zone Zone Z1 is full for heavy vehicles!"
        assert db.query(Vehicle).filter(Vehicle.zone_id == "Z1").count() == 10
        assert db.query(ParkingEvent).count() == 10

    def test_zone_capacity_reached(self, db, make_zone):
        make_zone("Z1", capacity=2, heavy=5, medium=5, light=5, name="North")
        enter_vehicle(db, "A", "light", zone_id="Z1")
        enter_vehicle(db, "B", "medium", zone_id="Z1")
        with pytest.raises(CapacityExceededError, match="Zone North is full!"):
            enter_vehicle(db, "C", "heavy", zone_id="Z1")

    def test_auto_assign_uses_registration_order(self, db, make_zone):
        make_zone("Z2", heavy=1)
        make_zone("Z1", heavy=1)
        _, first = enter_vehicle(db, "H1", "heavy")
        _, second = enter_vehicle(db, "H2", "heavy")
        assert (first.id, second.id) == ("Z2", "Z1")

    def test_auto_assign_all_full(self, db, make_zone):
        make_zone("Z1", heavy=0)
        make_zone("Z2", heavy=0)
        with pytest.raises(CapacityExceededError, match="All parking zones are full for heavy vehicles!"):
            enter_vehicle(db, "H1", "heavy")

    def test_concurrent_entries_do_not_overfill(self, tmp_path):
        # Own file-backed engine: threads need separate connections
        engine = create_engine(f"sqlite:///{tmp_path}/race.db", connect_args={"check_same_thread": False})
        Base.metadata.create_all(bind=engine)
        Session = sessionmaker(bind=engine)
        setup = Session()
        setup.add(ParkingZone(id="Z1", name="Race", capacity=3, heavy_limit=3,
                              medium_limit=3, light_limit=3, position=1))
        setup.commit()
        results = []

        def park(i):
            session = Session()
            try:
                enter_vehicle(session, f"C-{i}", "light", zone_id="Z1")
                results.append("ok")
            except CapacityExceededError:
                results.append("full")
            finally:
                session.close()

        threads = [threading.Thread(target=park, args=(i,)) for i in range(6)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert results.count("ok") == 3
        assert setup.query(Vehicle).count() == 3
        setup.close()
        engine.dispose()


class TestExitVehicle:
    def test_exit_records_event_and_frees_space(self, db, make_zone):
        make_zone("Z1")
        vehicle, _ = enter_vehicle(db, "KL-1", "light")
        vehicle_id = vehicle.id

        exit_vehicle(db, vehicle_id)

        assert db.query(Vehicle).count() == 0
        kinds = [e.event_type for e in db.query(ParkingEvent).order_by(ParkingEvent.id)]
        assert kinds == ["entry", "exit"]

    def test_unknown_vehicle(self, db):
        with pytest.raises(NotFoundError):
            exit_vehicle(db, "missing")


class TestSearchVehicle:
    def test_case_insensitive_partial_match(self, db, make_zone):
        make_zone("Z1", name="North")
        enter_vehicle(db, "KL-07-AB-1234", "light")
        found = search_vehicle(db, "ab-12")
        assert found["number"] == "KL-07-AB-1234"
        assert found["zone_name"] == "North"

    def test_no_match(self, db, make_zone):
        make_zone("Z1")
        assert search_vehicle(db, "XYZ") is None

    def test_blank_term(self, db):
        with pytest.raises(ValidationError):
            search_vehicle(db, "")
