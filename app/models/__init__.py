# Parking Forecast: Database Models
# Import all models here for SQLAlchemy discovery

from app.models.parking_zone import ParkingZone     # noqa
from app.models.vehicle import Vehicle              # noqa
from app.models.parking_event import ParkingEvent   # noqa
from app.models.admin import Admin                  # noqa
