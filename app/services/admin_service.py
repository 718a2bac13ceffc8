# app/services/admin_service.py
"""
Admin accounts for the ticketing panel. Plain credential check only:
no hashing, sessions or tokens.
"""

import hmac
import uuid
from sqlalchemy.orm import Session
from app.exceptions import AuthenticationError, ValidationError
from app.models.admin import Admin
from app.schemas.admin import AdminCreate
from app.utils.logger import get_logger

logger = get_logger(__name__)


def get_admin_by_username(db: Session, username: str):
    return db.query(Admin).filter(Admin.username == username).first()


def register_admin(db: Session, body: AdminCreate) -> Admin:
    if get_admin_by_username(db, body.username):
        raise ValidationError("Username already exists")
    admin = Admin(id=str(uuid.uuid4()), **body.model_dump())
    db.add(admin)
    db.commit()
    logger.info(f"[ADMIN] Registered {admin.username}")
    return admin


def authenticate(db: Session, username: str, password: str) -> Admin:
    admin = get_admin_by_username(db, username)
    if not admin or not hmac.compare_digest(admin.password.encode(), password.encode()):
        logger.warning(f"[ADMIN] Failed login for {username}")
        raise AuthenticationError("Invalid credentials")
    return admin
