
import os

os.environ.setdefault("ADMIN_PASSWORD", "test-admin-password")

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session, SQLModel, create_engine
from sqlmodel.pool import StaticPool

from main import app
from metaclub.database import get_session
from metaclub.dependencies import get_notifier, get_upload_store
from metaclub.services.storage import UploadStore
from tests.factories import RecordingNotifier, registration_form, screenshot_file

ADMIN_PASSWORD = os.environ["ADMIN_PASSWORD"]

# Create in-memory database for testing
TEST_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)


@pytest.fixture(name="session")
def session_fixture():
    SQLModel.metadata.create_all(engine)
    with Session(engine) as session:
        yield session
    SQLModel.metadata.drop_all(engine)


@pytest.fixture(name="store")
def store_fixture(tmp_path):
    return UploadStore(directory=tmp_path / "uploads")


@pytest.fixture(name="notifier")
def notifier_fixture():
    return RecordingNotifier()


@pytest.fixture(name="client")
def client_fixture(session: Session, store: UploadStore, notifier: RecordingNotifier):
    def get_session_override():
        return session

    app.dependency_overrides[get_session] = get_session_override
    app.dependency_overrides[get_upload_store] = lambda: store
    app.dependency_overrides[get_notifier] = lambda: notifier
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()


@pytest.fixture(name="admin_client")
def admin_client_fixture(client: TestClient):
    """Client holding a session cookie from a real login."""
    response = client.post("/api/admin/login", json={"password": ADMIN_PASSWORD})
    assert response.status_code == 200
    return client


@pytest.fixture(name="register")
def register_fixture(client: TestClient):
    """Submit a registration and return the parsed response body."""
    def _register(team_type="Duo", members=None, **overrides):
        response = client.post(
            "/api/register",
            data=registration_form(team_type, members, **overrides),
            files=screenshot_file()
        )
        assert response.status_code == 200, response.text
        return response.json()

    return _register
