# tests/conftest.py
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from policy_files.main import app
from policy_files.backends import StorageBackends, get_storage_backends
from policy_files.database import Base, get_db
from policy_files.models import Document

from fakes import FakeStorage

# Create test database
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///:memory:"


@pytest.fixture(scope="session")
def engine():
    """Create test database engine"""
    engine = create_engine(
        SQLALCHEMY_TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool  # Needed for SQLite in-memory database
    )
    return engine

@pytest.fixture(scope="session")
def tables(engine):
    """Create all tables in the test database"""
    Base.metadata.create_all(engine)
    yield
    Base.metadata.drop_all(engine)

@pytest.fixture
def db_session(engine, tables):
    """Creates a new database session for a test"""
    connection = engine.connect()
    transaction = connection.begin()
    session = sessionmaker(bind=connection)()

    yield session

    session.close()
    transaction.rollback()
    connection.close()

@pytest.fixture
def standalone_session(engine, tables):
    """Session with its own transactions, for tests that exercise rollback"""
    session = sessionmaker(bind=engine)()
    yield session
    session.close()

@pytest.fixture
def primary_storage():
    return FakeStorage("firebase")

@pytest.fixture
def fallback_storage():
    return FakeStorage("supabase")

@pytest.fixture
def backends(primary_storage, fallback_storage):
    return StorageBackends(primary=primary_storage, fallback=fallback_storage)

@pytest.fixture
def client(db_session, backends):
    """Test client using the test database and in-memory storage"""
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_storage_backends] = lambda: backends
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()

@pytest.fixture
def client_without_database(backends):
    """Test client for a deployment with no DATABASE_URL"""
    def override_get_db():
        yield None

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_storage_backends] = lambda: backends
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()

@pytest.fixture
def make_document(db_session):
    """Insert a document row directly, bypassing the upload flow"""
    def _make_document(**fields):
        values = {
            "project_id": "proj-1",
            "filename": "policy.pdf",
            "file_path": "1700000000000_policy.pdf",
            "source": "Upload",
            "status": "pending",
        }
        values.update(fields)
        document = Document(**values)
        db_session.add(document)
        db_session.commit()
        db_session.refresh(document)
        return document
    return _make_document

@pytest.fixture
def error_client(db_session, backends):
    """Test client that returns 500 responses for unhandled errors instead of raising them"""
    app.dependency_overrides[get_db] = lambda: db_session
    app.dependency_overrides[get_storage_backends] = lambda: backends
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client
    app.dependency_overrides.clear()
