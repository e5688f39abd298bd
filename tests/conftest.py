"""Pytest fixtures for testing"""

import pytest
from typing import Callable, Generator
from fastapi.testclient import TestClient
from jose import jwt
from sqlalchemy.orm import Session
from solar_quotes.api.main import create_app
from solar_quotes.config import settings
from solar_quotes.infrastructure.database.models import Base, User
from solar_quotes.infrastructure.database.repositories import UserRepository
from solar_quotes.infrastructure.database.session import create_db_engine, create_session_factory, get_db


# Test database
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_db_engine(TEST_DATABASE_URL)
TestingSessionLocal = create_session_factory(engine)


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Create test database and session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db: Session) -> TestClient:
    """Create FastAPI test client with test database"""
    app = create_app(session_factory=TestingSessionLocal)

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    return TestClient(app)


@pytest.fixture
def alice(db: Session) -> User:
    """Regular user with an address"""
    user = UserRepository(db).create_user("Alice Sun", "alice@example.com", address="1 Solar Way")
    db.commit()
    return user


@pytest.fixture
def bob(db: Session) -> User:
    """Regular user without an address"""
    user = UserRepository(db).create_user("Bob Panel", "bob@example.com")
    db.commit()
    return user


@pytest.fixture
def admin(db: Session) -> User:
    """Administrator"""
    user = UserRepository(db).create_user("Ada Admin", "admin@example.com", role_name="ADMIN")
    db.commit()
    return user


@pytest.fixture
def make_token() -> Callable[[User], str]:
    """Sign a bearer token the way the identity provider does"""

    def _make_token(user: User) -> str:
        payload = {
            "userId": user.id,
            "fullName": user.full_name,
            "email": user.email,
            "roleName": user.role_name,
        }
        return jwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)

    return _make_token


@pytest.fixture
def auth_headers(make_token) -> Callable[[User], dict]:
    """Authorization header for a user"""

    def _auth_headers(user: User) -> dict:
        return {"Authorization": f"Bearer {make_token(user)}"}

    return _auth_headers
