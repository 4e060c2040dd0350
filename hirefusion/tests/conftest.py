import os
import tempfile
from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from fastapi.testclient import TestClient

# Point the app at a throwaway SQLite file before anything reads settings
_db_fd, _db_path = tempfile.mkstemp(prefix="test_hirefusion_", suffix=".db")
os.close(_db_fd)
os.environ["DATABASE_URL"] = f"sqlite:///{_db_path}"

from hirefusion import models
from hirefusion.database import Base, get_db
from hirefusion.emails import get_mailer
from hirefusion.main import app

DEFAULT_PASSWORD = "Aa1!aaaa"


class RecordingMailer:
    """Stands in for the SMTP mailer; keeps what would have been sent."""

    def __init__(self):
        self.sent = []
        self.fail = False

    def send(self, to, subject, html, sender_name=None):
        if self.fail:
            raise RuntimeError("SMTP unavailable")
        self.sent.append({"to": to, "subject": subject, "html": html, "sender_name": sender_name})


@pytest.fixture(scope="session")
def test_db_url():
    yield os.environ["DATABASE_URL"]
    try:
        os.remove(_db_path)
    except FileNotFoundError:
        pass


@pytest.fixture()
def db_session(test_db_url):
    engine = create_engine(test_db_url, connect_args={"check_same_thread": False})
    TestingSessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture()
def mailer():
    return RecordingMailer()


@pytest.fixture()
def client(db_session, mailer):
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_mailer] = lambda: mailer
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture()
def make_user(db_session):
    def _make(username="jane_doe", email="jane@example.com", password=DEFAULT_PASSWORD,
              verified=True, code="123456", expires_in=timedelta(hours=1), **fields):
        user = models.User(
            username=username,
            email=email,
            password=password,
            verify_code=code,
            verify_code_expire=datetime.now(timezone.utc) + expires_in,
            is_verified=verified,
            **fields,
        )
        db_session.add(user)
        db_session.commit()
        return user
    return _make


@pytest.fixture()
def make_job(db_session):
    def _make(title="Backend Engineer", created_at=None, **fields):
        job = models.Job(title=title, **fields)
        if created_at is not None:
            job.created_at = created_at
        db_session.add(job)
        db_session.commit()
        return job
    return _make
