import os

# Settings are read once, so set them before the package is imported
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["DATABASE_URL"] = "sqlite://"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from ojt_records.auth.passwords import PasswordHasher
from ojt_records.auth.token import TokenIssuer, get_token_issuer
from ojt_records.database import Base, get_db
from ojt_records.dependencies import get_clock, get_password_hasher
from ojt_records.main import app
from ojt_records.services.auth import AuthService
from ojt_records.services.profiles import ProfileService
from ojt_records.stores.credentials import CredentialStore
from ojt_records.stores.students import StudentRecordStore

from factories import ADMIN_EMAIL, ADMIN_PASSWORD, FakeClock

# Create in-memory SQLite database for testing
SQLALCHEMY_DATABASE_URL = "sqlite://"
engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db():
    # Create the tables
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        # Drop the tables
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def hasher():
    return PasswordHasher(rounds=4)


@pytest.fixture
def tokens():
    return TokenIssuer("test-secret-key")


@pytest.fixture
def credentials(db):
    return CredentialStore(db)


@pytest.fixture
def students(db):
    return StudentRecordStore(db)


@pytest.fixture
def profile_service(students, credentials, clock):
    return ProfileService(students, credentials, clock=clock)


@pytest.fixture
def auth_service(credentials, profile_service, hasher, tokens):
    return AuthService(credentials, profile_service, hasher, tokens)


@pytest.fixture
def client(db, auth_service, hasher, tokens, clock):
    # Override the dependencies
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_password_hasher] = lambda: hasher
    app.dependency_overrides[get_token_issuer] = lambda: tokens
    app.dependency_overrides[get_clock] = lambda: clock

    auth_service.bootstrap_admin(ADMIN_EMAIL, ADMIN_PASSWORD)

    yield TestClient(app)

    app.dependency_overrides.clear()
