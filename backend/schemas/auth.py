# backend/schemas/auth.py
from typing import NewType
from pydantic import BaseModel, constr

from models.role import Role

Username = NewType("Username", constr(strip_whitespace=True, min_length=1, max_length=64))
Password = NewType("Password", constr(min_length=1, max_length=128))


class SessionUser(BaseModel):
    """Snapshot of the logged-in principal, stored under the session ``user`` key."""
    id: int
    username: str
    role: Role


class LoginPayload(BaseModel):
    username: Username
    password: Password


class RegisterWorkerPayload(BaseModel):
    username: Username
    password: Password


class LoginResponse(BaseModel):
    message: str
    user: SessionUser


class AuthStatus(BaseModel):
    authenticated: bool = True
    user: SessionUser


class RegisterResponse(BaseModel):
    message: str
    user_id: int


class MessageResponse(BaseModel):
    message: str
