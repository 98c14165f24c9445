import os

import pytest
from fastapi.security import HTTPAuthorizationCredentials
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault('DATABASE_URL', 'sqlite://')
os.environ.setdefault('JWT_SECRET_KEY', 'companion-test-secret-0123456789abcdef')

from backend.auth.users import create_user  # noqa: E402
from backend.database import Base, get_db  # noqa: E402
from backend.main import app  # noqa: E402
from backend.models import chord_note, recording, song, user, vocal_recording  # noqa: E402,F401


@pytest.fixture
def db():
    engine = create_engine('sqlite:///:memory:')
    testing_session_local = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.create_all(bind=engine)

    session = testing_session_local()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def make_user(db):
    def _make_user(email='player@example.com', name='Player', password='secret123', is_admin=False):
        return create_user(db, name=name, email=email, password=password, is_admin=is_admin)

    return _make_user


@pytest.fixture
def bearer():
    def _bearer(token: str) -> HTTPAuthorizationCredentials:
        return HTTPAuthorizationCredentials(scheme='Bearer', credentials=token)

    return _bearer


@pytest.fixture
def api_sessions():
    # Requests run in a worker thread, so every session shares one connection.
    engine = create_engine('sqlite://', connect_args={'check_same_thread': False}, poolclass=StaticPool)
    testing_session_local = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.create_all(bind=engine)

    def override_get_db():
        session = testing_session_local()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield testing_session_local
    finally:
        app.dependency_overrides.pop(get_db, None)
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(api_sessions):
    # No context manager: the startup hook would touch the configured database.
    return TestClient(app)


@pytest.fixture
def api_user(api_sessions):
    def _api_user(email='player@example.com', name='Player', password='secret123', is_admin=False):
        session = api_sessions()
        try:
            return create_user(session, name=name, email=email, password=password, is_admin=is_admin).id
        finally:
            session.close()

    return _api_user
