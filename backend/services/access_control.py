# backend/services/access_control.py
from typing import Iterable, Optional

from models.role import Role
from schemas.auth import SessionUser
from services.errors import Unauthorized, Forbidden


def require_authenticated(user: Optional[SessionUser]) -> SessionUser:
    if user is None:
        raise Unauthorized()
    return user


def require_role(user: Optional[SessionUser], allowed: Iterable[Role]) -> SessionUser:
    """Pass when the principal's role grants any of ``allowed``.

    Admin grants worker, so every worker gate also admits admins.
    """
    user = require_authenticated(user)
    allowed = tuple(allowed)
    if not any(user.role.grants(r) for r in allowed):
        names = " or ".join(r.value for r in allowed)
        raise Forbidden(f"Forbidden: {names} only")
    return user


def require_worker(user: Optional[SessionUser]) -> SessionUser:
    return require_role(user, {Role.WORKER})


def require_admin(user: Optional[SessionUser]) -> SessionUser:
    return require_role(user, {Role.ADMIN})
