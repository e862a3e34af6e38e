# tests/conftest.py
import io
import os
import tempfile

# Point the app at throwaway resources before anything from app is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["STORAGE_BACKEND"] = "local"
os.environ.setdefault("LOCAL_MEDIA_PATH", tempfile.mkdtemp(prefix="groups-media-"))

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool
from starlette.datastructures import Headers, UploadFile

from app.config import settings
from app.database import Base, get_db
from app.auth import get_current_user
from app.models import (  # noqa: F401  (register every table)
    user, group, group_post, post, comment, like, report, group_attachment,
)
from app.models.user import User
from app.models.group import Group

# In-memory SQLite shared by every connection of the test engine
engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db_session() -> Session:
    """
    Fresh database for every test.
    """
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(autouse=True)
def media_root(tmp_path, monkeypatch):
    root = tmp_path / "media"
    monkeypatch.setattr(settings, "LOCAL_MEDIA_PATH", str(root))
    monkeypatch.setattr(settings, "STORAGE_BACKEND", "local")
    return root


@pytest.fixture
def owner(db_session):
    u = User(id=1, email="owner@example.com", hashed_password="not-a-real-hash", name="Owner")
    db_session.add(u)
    db_session.commit()
    return u


@pytest.fixture
def group_5(db_session, owner):
    g = Group(id=5, name="Book club", created_by=owner.id)
    db_session.add(g)
    db_session.commit()
    return g


@pytest.fixture
def make_upload():
    def _make(filename="photo.png", content=b"\x89PNG fake image bytes", content_type="image/png"):
        return UploadFile(
            file=io.BytesIO(content),
            filename=filename,
            headers=Headers({"content-type": content_type}),
        )
    return _make


@pytest.fixture
def stored_path(media_root):
    """Maps a /media/... URL back to the file on disk."""
    def _path(url):
        return media_root / url[len("/media/"):]
    return _path


@pytest.fixture
def client(db_session, owner):
    from app.main import app

    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_current_user] = lambda: owner
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def anon_client(db_session):
    from app.main import app

    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
