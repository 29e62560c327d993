import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("SESSION_SECRET", "test-session-secret")
for _var in ("CLOUDINARY_CLOUD_NAME", "CLOUDINARY_API_KEY", "CLOUDINARY_API_SECRET"):
    os.environ[_var] = ""

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

import models  # noqa: E402,F401
from database.session import Base, build_engine, get_db  # noqa: E402
from main import app  # noqa: E402
from models.product_model import Product  # noqa: E402
from models.role import Role  # noqa: E402
from schemas.auth import SessionUser  # noqa: E402
from services.auth_service import create_user  # noqa: E402
from services.cloudinary_service import get_image_storage  # noqa: E402
from services.errors import InternalError  # noqa: E402

API = "/api/v1/gateway"

ADMIN_PASSWORD = "admin-pass"
WORKER_PASSWORD = "worker-pass"

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


class FakeImageStorage:
    """In-memory stand-in for CloudinaryService."""

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.uploads = []
        self.deleted = []

    async def upload_product_image(self, file_content: bytes, filename: str):
        if self.fail:
            raise InternalError("Image upload failed")
        self.uploads.append(filename)
        public_id = f"products/fake_{len(self.uploads)}"
        return {"public_id": public_id, "url": f"https://res.cloudinary.test/{public_id}.jpg"}

    async def delete_product_image(self, public_id: str) -> bool:
        self.deleted.append(public_id)
        return True


@pytest.fixture()
def engine():
    eng = build_engine("sqlite://")
    Base.metadata.create_all(eng)
    yield eng
    eng.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)


@pytest.fixture()
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture()
def storage():
    return FakeImageStorage()


@pytest.fixture()
def make_client(session_factory, storage):
    """Factory for TestClients sharing the test database; each has its own cookie jar."""

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_image_storage] = lambda: storage

    clients = []

    def _make():
        c = TestClient(app)
        clients.append(c)
        return c

    yield _make

    for c in clients:
        c.close()
    app.dependency_overrides.clear()


@pytest.fixture()
def client(make_client):
    return make_client()


@pytest.fixture()
def admin(db):
    return create_user(db, Role.ADMIN, "admin", ADMIN_PASSWORD)


@pytest.fixture()
def worker(db):
    return create_user(db, Role.WORKER, "worker1", WORKER_PASSWORD)


@pytest.fixture()
def other_worker(db):
    return create_user(db, Role.WORKER, "worker2", WORKER_PASSWORD)


@pytest.fixture()
def admin_session(admin):
    return SessionUser(id=admin.id, username=admin.username, role=Role.ADMIN)


@pytest.fixture()
def worker_session(worker):
    return SessionUser(id=worker.id, username=worker.username, role=Role.WORKER)


@pytest.fixture()
def widget(db):
    p = Product(name="Widget", price=5.0, stock=10, size="M", color="red")
    db.add(p)
    db.commit()
    db.refresh(p)
    return p


def login(client, role: str, username: str, password: str):
    response = client.post(
        f"{API}/auth/{role}-login",
        json={"username": username, "password": password},
    )
    assert response.status_code == 200, response.text
    return response


@pytest.fixture()
def admin_client(make_client, admin):
    c = make_client()
    login(c, "admin", admin.username, ADMIN_PASSWORD)
    return c


@pytest.fixture()
def worker_client(make_client, worker):
    c = make_client()
    login(c, "worker", worker.username, WORKER_PASSWORD)
    return c
