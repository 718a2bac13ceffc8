# app/models/admin.py
from sqlalchemy import Column, String
from app.database import Base


class Admin(Base):
    __tablename__ = "admins"

    id = Column(String(36), primary_key=True)
    username = Column(String(100), unique=True, nullable=False, index=True)
    password = Column(String(200), nullable=False)
    name = Column(String(200), nullable=False)
    police_id = Column(String(100), nullable=False)

    def __repr__(self):
        return f"<Admin {self.username}>"
