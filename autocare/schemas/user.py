from __future__ import annotations

from pydantic import BaseModel

from autocare.schemas.common import CamelModel


class RegisterRequest(CamelModel):
    first_name: str
    last_name: str
    email: str
    password: str
    mobile: str = ""
    address: str = ""


class LoginRequest(BaseModel):
    email: str
    password: str


class UserRead(CamelModel):
    id: str
    first_name: str
    last_name: str
    email: str
    role: str
    mobile: str = ""
    address: str = ""
