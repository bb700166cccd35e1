"""Pytest configuration and fixtures."""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from shortlink.api.deps import limiter
from shortlink.core.exceptions import CodeConflict
from shortlink.core.generator import CodeGenerator, RandomCodeGenerator
from shortlink.database import Base, get_db, make_engine
from shortlink.main import app
from shortlink.store.memory import InMemoryMappingStore
from shortlink.store.sql import SQLAlchemyMappingStore


class StubGenerator(CodeGenerator):
    """Returns scripted codes and records every call."""

    def __init__(self, codes):
        super().__init__(length=7)
        self.codes = list(codes)
        self.calls = []

    def generate(self, long_url: str, attempt: int = 0) -> str:
        self.calls.append((long_url, attempt))
        return self.codes[min(attempt, len(self.codes) - 1)]


class CountingStore(InMemoryMappingStore):
    """In-memory store that counts insert attempts and conflicts."""

    def __init__(self):
        super().__init__()
        self.insert_calls = 0
        self.conflicts = 0

    def insert_unique(self, code, long_url):
        self.insert_calls += 1
        try:
            return super().insert_unique(code, long_url)
        except CodeConflict:
            self.conflicts += 1
            raise


@pytest.fixture
def engine(tmp_path):
    """SQLite database in a temporary directory."""
    engine = make_engine(f"sqlite:///{tmp_path / 'test.db'}", timeout=30)
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session(session_factory):
    db = session_factory()
    yield db
    db.close()


@pytest.fixture
def sql_store(db_session):
    return SQLAlchemyMappingStore(db_session)


@pytest.fixture
def memory_store():
    return InMemoryMappingStore()


@pytest.fixture(params=["sql", "memory"])
def store(request):
    """Every mapping store backing."""
    return request.getfixturevalue(f"{request.param}_store")


@pytest.fixture
def generator():
    return RandomCodeGenerator(length=7)


@pytest.fixture
def client(session_factory):
    """Test client with the database pointed at the temporary engine."""

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    was_enabled = limiter.enabled
    limiter.enabled = False
    limiter.reset()

    yield TestClient(app)

    app.dependency_overrides.clear()
    limiter.enabled = was_enabled
    limiter.reset()


@pytest.fixture
def sample_urls():
    """Sample URLs for testing."""
    return [
        "https://example.com/a",
        "https://github.com/user/repo?tab=readme#install",
        "http://stackoverflow.com/questions/123456",
    ]
