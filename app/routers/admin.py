# app/routers/admin.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from app.database import get_db
from app.schemas.admin import AdminCreate, AdminLogin, AdminOut
from app.services.admin_service import authenticate, register_admin

router = APIRouter()


@router.post("/admin/register", summary="Create an admin account")
def register(body: AdminCreate, db: Session = Depends(get_db)):
    admin = register_admin(db, body)
    return {"success": True, "admin": AdminOut.model_validate(admin)}


@router.post("/admin/login", summary="Check admin credentials")
def login(body: AdminLogin, db: Session = Depends(get_db)):
    admin = authenticate(db, body.username, body.password)
    return {"success": True, "admin": AdminOut.model_validate(admin)}
