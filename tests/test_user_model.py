import pytest

from models.role import Role
from models.user_model import User


def test_password_is_hashed_on_assignment():
    u = User(username="alice", password="s3cret", role=Role.WORKER)
    assert u.password_hash
    assert u.password_hash != "s3cret"
    assert u.check_password("s3cret")
    assert not u.check_password("wrong")


def test_password_is_write_only():
    u = User(username="alice", password="s3cret", role=Role.WORKER)
    with pytest.raises(AttributeError):
        u.password


def test_hash_is_untouched_unless_password_changes(db):
    u = User(username="alice", password="s3cret", role=Role.WORKER)
    db.add(u)
    db.commit()
    original = u.password_hash

    u.username = "alice2"
    db.commit()
    db.refresh(u)
    assert u.password_hash == original

    u.password = "n3w"
    db.commit()
    db.refresh(u)
    assert u.password_hash != original
    assert u.check_password("n3w")


def test_role_cannot_change(db):
    u = User(username="bob", password="pw", role=Role.WORKER)
    db.add(u)
    db.commit()
    with pytest.raises(ValueError):
        u.role = Role.ADMIN


def test_role_accepts_string_values():
    u = User(username="carol", password="pw", role="admin")
    assert u.role is Role.ADMIN
