# backend/create_admin.py
"""
Create an administrator account.

    python create_admin.py <username> <password>
"""
import logging
import sys

from database.session import SessionLocal, init_db
from models.role import Role
from services.auth_service import create_user
from services.errors import ServiceError

logger = logging.getLogger(__name__)


def create_admin(username: str, password: str) -> int:
    init_db()
    db = SessionLocal()
    try:
        admin = create_user(db, Role.ADMIN, username, password)
        return admin.id
    finally:
        db.close()


def main(argv=None) -> int:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    argv = sys.argv[1:] if argv is None else argv
    if len(argv) != 2:
        print(__doc__.strip())
        return 2

    try:
        admin_id = create_admin(argv[0], argv[1])
    except ServiceError as e:
        logger.error("Could not create admin: %s", e.detail)
        return 1
    logger.info("Admin %r created (id=%s)", argv[0], admin_id)
    return 0


if __name__ == "__main__":
    sys.exit(main())
