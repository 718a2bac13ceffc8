# app/schemas/admin.py
from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class AdminCreate(BaseModel):
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)
    name: str = Field(min_length=1)
    police_id: str = Field(min_length=1)

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class AdminLogin(BaseModel):
    username: str
    password: str


class AdminOut(BaseModel):
    id: str
    username: str
    name: str

    class Config:
        from_attributes = True
