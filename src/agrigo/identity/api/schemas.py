"""Pydantic request/response schemas for the auth endpoints.

Register and login answer with the account keys existing clients already
read (``userID``, ``refresh_token``, ``OK``), so those fields carry explicit
aliases instead of the camelCase default.
"""

from pydantic import Field

from agrigo.identity.user import UserRole
from agrigo.schemas import CamelModel


class RegisterUserRequest(CamelModel):
    name: str = Field(min_length=1, max_length=150)
    email: str = Field(min_length=3, max_length=254)
    password: str = Field(min_length=6, max_length=128)
    phone: str = Field(min_length=1, max_length=20)
    role: UserRole = UserRole.CONSUMER
    farm_name: str | None = Field(default=None, max_length=200)


class LoginRequest(CamelModel):
    email: str
    password: str


class UserSummary(CamelModel):
    user_id: str = Field(alias="userID")
    name: str
    role: str


class RegisterResponse(CamelModel):
    message: str
    user: UserSummary


class LoginResponse(CamelModel):
    ok: bool = Field(default=True, alias="OK")
    message: str
    token: str
    refresh_token: str = Field(alias="refresh_token")
    user: UserSummary


class LogoutResponse(CamelModel):
    message: str
