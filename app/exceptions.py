# app/exceptions.py
"""
Domain errors raised by the services layer.
Each carries the HTTP status it maps to; app/main.py turns them into
{"success": false, "message": ...} responses.
"""


class ParkingError(Exception):
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ParkingError):
    """Missing vehicle number, malformed zone payload, duplicate ids."""
    status_code = 400


class AuthenticationError(ParkingError):
    status_code = 401


class NotFoundError(ParkingError):
    status_code = 404


class CapacityExceededError(ParkingError):
    """Zone capacity or per-class limit reached."""
    status_code = 400
