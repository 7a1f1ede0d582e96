# app/models/users.py

from pydantic import BaseModel


class User(BaseModel):
    id: str
    name: str
    email: str
    password: str  # hash, never the plain text