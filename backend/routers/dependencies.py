# backend/routers/dependencies.py
from typing import Optional

from fastapi import Request

from schemas.auth import SessionUser
from services.auth_service import who_am_i


def get_session_user(request: Request) -> Optional[SessionUser]:
    """Principal stored in the session cookie, or None. Gates are applied by the services."""
    return who_am_i(request.session)
