"""
Pytest fixtures for Resume Bank API tests.
Uses in-memory SQLite, mocks Redis, fakes the artifact store and the metadata extractor.
"""
import os
import tempfile
import pytest
from unittest.mock import AsyncMock, MagicMock, patch
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient
from jose import jwt

# Use in-memory SQLite for tests - set before config/session load
# Must override any .env DATABASE_URL
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["ADMIN_PASSWORD"] = "test-admin-password"
os.environ["SUPABASE_JWT_SECRET"] = "test-member-secret"
os.environ["UPLOAD_DIR"] = tempfile.mkdtemp(prefix="resume_bank_test_")
os.environ["AWS_ACCESS_KEY_ID"] = ""
os.environ["AWS_SECRET_ACCESS_KEY"] = ""
os.environ["OPENAI_API_KEY"] = ""
os.environ["REDIS_URL"] = ""

from backend.app.db.base import Base
from backend.main import app
from backend.app.core.dependencies import get_db, get_extractor, get_store
from backend.app.core.security import create_admin_token
from backend.app.schemas.resume import ExtractedMetadata

# In-memory SQLite for tests - StaticPool ensures all sessions share same DB
engine = create_engine(
    "sqlite:///:memory:",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Patch the session module so app startup and tasks use our test engine
import backend.app.db.session as session_module
session_module.engine = engine
session_module.SessionLocal = TestingSessionLocal

PDF_BYTES = b"%PDF-1.4\n% test resume\n"

JANE_DOE = ExtractedMetadata(
    name="Jane Doe",
    major="Computer Science",
    graduationYear="2024",
    companies=["Acme Corp", "Globex"],
    keywords=["Python", "SQL"],
)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


app.dependency_overrides[get_db] = override_get_db


def make_member_token(sub: str = "member-123", email: str = "member@example.com") -> str:
    """Token shaped like the identity provider's access tokens."""
    return jwt.encode(
        {"sub": sub, "email": email, "aud": "authenticated"},
        os.environ["SUPABASE_JWT_SECRET"],
        algorithm="HS256",
    )


@pytest.fixture(scope="function")
def db_session():
    """Create tables and a fresh DB session per test."""
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def fake_store():
    """Artifact store double: put returns a URL, delete succeeds, no signed URLs."""
    store = MagicMock()
    store.put.side_effect = lambda data, key, content_type: f"https://files.test/{key}"
    store.delete.return_value = True
    store.signed_url.return_value = None
    return store


@pytest.fixture
def fake_extractor():
    """Extractor double returning Jane Doe's metadata."""
    return MagicMock(return_value=JANE_DOE.model_copy(deep=True))


@pytest.fixture
def admin_headers():
    return {"Authorization": f"Bearer {create_admin_token()}"}


@pytest.fixture
def member_token():
    return make_member_token


@pytest.fixture
def member_headers():
    return {"Authorization": f"Bearer {make_member_token()}"}


@pytest.fixture
def client(db_session, fake_store, fake_extractor):
    """TestClient with empty tables, fake artifact store and fake extractor."""
    app.dependency_overrides[get_store] = lambda: fake_store
    app.dependency_overrides[get_extractor] = lambda: fake_extractor
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.pop(get_store, None)
        app.dependency_overrides.pop(get_extractor, None)


@pytest.fixture(autouse=True)
def mock_redis():
    """Mock Redis cache: get returns None (cache miss), set/delete no-op. Skip connect."""
    with patch("backend.app.utils.cache.get", new_callable=AsyncMock, return_value=None), \
         patch("backend.app.utils.cache.set", new_callable=AsyncMock), \
         patch("backend.app.utils.cache.delete", new_callable=AsyncMock), \
         patch("backend.app.utils.cache.connect", new_callable=AsyncMock):
        yield
