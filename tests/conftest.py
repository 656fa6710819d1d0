"""Common test fixtures for the NotyApp API.

Every test runs against a fresh in-memory SQLite database. The auth client
resolves every bearer token to a switchable user so routes can be exercised
as the owner, as a share recipient or anonymously.
"""

import os

os.environ["DATABASE_URL"] = "sqlite://"

from typing import List, Optional  # noqa: E402
from uuid import UUID  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from domain.entities.upload import ImageUpload, StoredImage  # noqa: E402
from domain.entities.user import AuthenticatedUser  # noqa: E402
from domain.repositories.image_store import ImageStore  # noqa: E402
from infrastructure.models.base import Base  # noqa: E402
from infrastructure.models.profile_orm import ProfileORM  # noqa: E402
from infrastructure.models.tag_orm import TagORM  # noqa: E402
from main import create_app  # noqa: E402
from utils.dependencies import get_db  # noqa: E402
from utils.supabase_auth import InvalidSessionError, SupabaseAuthClient  # noqa: E402

OWNER = AuthenticatedUser(
    id=UUID("11111111-1111-4111-8111-111111111111"), email="owner@example.com"
)
RECIPIENT = AuthenticatedUser(
    id=UUID("22222222-2222-4222-8222-222222222222"), email="recipient@example.com"
)
STRANGER = AuthenticatedUser(
    id=UUID("33333333-3333-4333-8333-333333333333"), email="stranger@example.com"
)

STORED_URL = "https://res.cloudinary.com/demo/image/upload/v1/noty-app/abc123.png"


class FakeImageStore(ImageStore):
    """In-memory image store recording what the gateway sends."""

    def __init__(self, missing: Optional[List[str]] = None):
        self.missing = list(missing or [])
        self.uploads: List[ImageUpload] = []
        self.deleted: List[str] = []
        self.failure: Optional[Exception] = None

    def missing_configuration(self) -> List[str]:
        return self.missing

    async def upload_image(self, upload: ImageUpload) -> StoredImage:
        if self.failure:
            raise self.failure
        self.uploads.append(upload)
        return StoredImage(url=STORED_URL, public_id="noty-app/abc123")

    async def delete_image(self, public_id: str) -> str:
        if self.failure:
            raise self.failure
        self.deleted.append(public_id)
        return "ok"


class SessionState:
    """The user every bearer token resolves to, None for a rejected token."""

    def __init__(self, user: Optional[AuthenticatedUser] = OWNER):
        self.user = user


class SessionAuthClient(SupabaseAuthClient):
    """Auth client answering from a SessionState instead of the backend."""

    def __init__(self, state: SessionState):
        super().__init__(base_url="https://backend.test", anon_key="anon-key")
        self.state = state

    async def get_user(self, access_token: str) -> AuthenticatedUser:
        if self.state.user is None:
            raise InvalidSessionError("Invalid or expired session")
        return self.state.user


@pytest.fixture(params=["asyncio"])
def anyio_backend(request):
    """Restrict anyio tests to asyncio only (trio is not installed)."""
    return request.param


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def tags(db_session):
    """Seed the tag catalogue and return the tag ids by name."""
    catalogue = [
        TagORM(name="Work", icon="Briefcase", color="#3b82f6"),
        TagORM(name="Personal", icon="User", color="#22c55e"),
        TagORM(name="Ideas", icon="Lightbulb", color=None),
    ]
    db_session.add_all(catalogue)
    db_session.commit()
    return {tag.name: tag.id for tag in catalogue}


@pytest.fixture
def profiles(db_session):
    """Seed profiles for the owner and the recipient. The stranger has none."""
    db_session.add_all(
        [
            ProfileORM(id=OWNER.id, email=OWNER.email, full_name="Olivia Owner"),
            ProfileORM(id=RECIPIENT.id, email=RECIPIENT.email, full_name="Riley Recipient"),
        ]
    )
    db_session.commit()


@pytest.fixture
def session_state():
    return SessionState()


@pytest.fixture
def image_store():
    return FakeImageStore()


@pytest.fixture
def app(session_factory, session_state, image_store, tags, profiles):
    app = create_app(
        image_store=image_store, auth_client=SessionAuthClient(session_state)
    )

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    return app


@pytest.fixture
def client(app):
    return TestClient(app, headers={"Authorization": "Bearer session-token"})
