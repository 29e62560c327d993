# backend/services/auth_service.py
import logging
from typing import Any, MutableMapping, Optional

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from models.role import Role
from models.user_model import User
from schemas.auth import SessionUser
from services.access_control import require_admin
from services.errors import (
    Conflict, InternalError, InvalidCredentials, UserNotFound, ValidationError,
)

logger = logging.getLogger(__name__)

SESSION_KEY = "user"


def login(db: Session, role: Role, username: str, password: str) -> SessionUser:
    """Verify credentials against the principals of ``role``."""
    u = (
        db.query(User)
        .filter(User.username == username, User.role == role)
        .first()
    )
    if not u:
        logger.info("Login rejected: no %s named %r", role.value, username)
        raise UserNotFound(f"{role.value.capitalize()} not found")
    if not u.check_password(password):
        logger.info("Login rejected: bad password for %s %r", role.value, username)
        raise InvalidCredentials()

    logger.info("%s %r logged in", role.value.capitalize(), username)
    return SessionUser(id=u.id, username=u.username, role=u.role)


def start_session(session: MutableMapping[str, Any], user: SessionUser) -> None:
    session[SESSION_KEY] = user.model_dump(mode="json")


def logout(session: MutableMapping[str, Any]) -> None:
    try:
        session.clear()
    except Exception as e:
        logger.exception("Logout failed")
        raise InternalError("Logout failed") from e


def who_am_i(session: MutableMapping[str, Any]) -> Optional[SessionUser]:
    data = session.get(SESSION_KEY)
    if not data:
        return None
    try:
        return SessionUser.model_validate(data)
    except PydanticValidationError:
        # stale or tampered payload
        logger.warning("Discarding malformed session payload")
        return None


def create_user(db: Session, role: Role, username: str, password: str) -> User:
    username = (username or "").strip()
    if not username or not password:
        raise ValidationError("username and password are required")
    if db.query(User).filter(User.username == username).count() > 0:
        raise Conflict("Username already in use")

    u = User(username=username, password=password, role=role)
    db.add(u)
    try:
        db.commit()
    except IntegrityError:
        # lost a race with another registration
        db.rollback()
        raise Conflict("Username already in use")
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Failed to create %s %r", role.value, username)
        raise InternalError("Server error") from e
    db.refresh(u)
    logger.info("Created %s %r (id=%s)", role.value, username, u.id)
    return u


def register_worker(db: Session, actor: Optional[SessionUser], username: str, password: str) -> User:
    require_admin(actor)
    return create_user(db, Role.WORKER, username, password)
