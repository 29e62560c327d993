import create_admin
from database.session import SessionLocal
from models.role import Role
from models.user_model import User


def test_bootstraps_first_admin():
    assert create_admin.main(["bootstrap-admin", "s3cret"]) == 0

    db = SessionLocal()
    try:
        admin = db.query(User).filter(User.username == "bootstrap-admin").one()
        assert admin.role is Role.ADMIN
        assert admin.check_password("s3cret")
    finally:
        db.close()


def test_refuses_duplicate_and_bad_usage():
    assert create_admin.main(["bootstrap-twice", "pw"]) == 0
    assert create_admin.main(["bootstrap-twice", "pw"]) == 1
    assert create_admin.main(["only-one-arg"]) == 2
