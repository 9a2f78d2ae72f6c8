"""
Test fixtures for EcoWise backend tests.
"""
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from httpx import AsyncClient, ASGITransport

from ecowise.database import Base, get_db
from ecowise.main import app
from ecowise.models import Trip  # noqa: F401  (registers the table)
from ecowise.services.ai_service import AIBackend, AIService
from ecowise.services.rate_limiter import get_generation_limiter
from ecowise.services.trip_store import DemoTripSource


# Create test database engine (SQLite in-memory, one shared connection)
TEST_DATABASE_URL = "sqlite:///:memory:"

test_engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


class MockBackend(AIBackend):
    """A backend that returns a fixed response, or raises a fixed error."""

    def __init__(self, response: str = "[]", error: Exception = None, models: list = None):
        self.response = response
        self.error = error
        self.models = models or []
        self.call_count = 0
        self.last_prompt = None
        self.last_json_output = None

    async def complete(self, prompt, json_output=False):
        self.call_count += 1
        self.last_prompt = prompt
        self.last_json_output = json_output
        if self.error is not None:
            raise self.error
        return self.response

    async def list_models(self):
        if self.error is not None:
            raise self.error
        return self.models


@pytest.fixture
def configure_backend():
    """Install a MockBackend as the AIService backend."""
    def _configure(**kwargs) -> MockBackend:
        backend = MockBackend(**kwargs)
        AIService._backend = backend
        AIService._model = "gemini-test"
        return backend

    return _configure


@pytest.fixture(autouse=True)
def reset_shared_state():
    """Reset AI configuration, rate limiter and demo data around each test."""
    AIService._backend = None
    AIService._model = None
    get_generation_limiter().reset()
    DemoTripSource.reset()
    yield
    AIService._backend = None
    AIService._model = None
    get_generation_limiter().reset()
    DemoTripSource.reset()


@pytest.fixture(scope="function")
def db_session():
    """
    Create a fresh database session for each test.
    Creates all tables before the test and drops them after.
    """
    Base.metadata.create_all(bind=test_engine)

    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=test_engine)


@pytest.fixture(scope="function")
def override_get_db(db_session):
    """
    Override the get_db dependency to use the test database session.
    """
    def _override_get_db():
        try:
            yield db_session
        finally:
            pass

    return _override_get_db


@pytest.fixture(scope="function")
async def client(override_get_db):
    """
    Create an async test client with the database dependency overridden.
    """
    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


def make_generate_payload(**overrides) -> dict:
    payload = {
        "from": "Bengaluru",
        "to": "Mysuru",
        "startDate": "2026-02-14",
        "deadline": "2026-02-16",
        "budget": 16000,
        "userID": "user-1",
        "travelSelection": {
            "outboundId": "R12",
            "returnId": "R13",
            "outboundCost": 320,
            "returnCost": 320,
        },
        "sideLocations": [{"name": "Srirangapatna", "days": 1, "budget": 2500}],
        "avoidNightTravel": False,
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def generate_payload():
    """Factory for valid /api/trips/generate bodies."""
    return make_generate_payload
