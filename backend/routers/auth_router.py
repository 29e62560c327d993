# backend/routers/auth_router.py
from typing import Optional

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from database.session import get_db
from models.role import Role
from routers.dependencies import get_session_user
from schemas.auth import (
    AuthStatus, LoginPayload, LoginResponse, MessageResponse,
    RegisterResponse, RegisterWorkerPayload, SessionUser,
)
from services import auth_service
from services.errors import Unauthorized

router = APIRouter(prefix="/auth", tags=["auth"])


def _login(request: Request, db: Session, role: Role, body: LoginPayload) -> LoginResponse:
    user = auth_service.login(db, role, body.username, body.password)
    auth_service.start_session(request.session, user)
    return LoginResponse(message=f"{role.value.capitalize()} login successful", user=user)


@router.post("/worker-login", response_model=LoginResponse)
def worker_login(body: LoginPayload, request: Request, db: Session = Depends(get_db)):
    return _login(request, db, Role.WORKER, body)


@router.post("/admin-login", response_model=LoginResponse)
def admin_login(body: LoginPayload, request: Request, db: Session = Depends(get_db)):
    return _login(request, db, Role.ADMIN, body)


@router.post("/logout", response_model=MessageResponse)
def logout(request: Request):
    auth_service.logout(request.session)
    return MessageResponse(message="Logout successful")


@router.get("/check-auth", response_model=AuthStatus)
def check_auth(user: Optional[SessionUser] = Depends(get_session_user)):
    if user is None:
        raise Unauthorized()
    return AuthStatus(user=user)


@router.post("/worker-register", response_model=RegisterResponse, status_code=201)
def register_worker(
    body: RegisterWorkerPayload,
    user: Optional[SessionUser] = Depends(get_session_user),
    db: Session = Depends(get_db),
):
    w = auth_service.register_worker(db, user, body.username, body.password)
    return RegisterResponse(message="Worker registered successfully", user_id=w.id)
