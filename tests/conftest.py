import pytest
from unittest.mock import Mock
from fastapi.testclient import TestClient
from sqlmodel import Session, SQLModel, create_engine
from sqlalchemy.pool import StaticPool
from app.main import app
from app.database import get_db


@pytest.fixture
def engine():
    """Create a temporary in-memory database shared by every connection."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db_session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def client(engine):
    """TestClient whose routes use the in-memory database."""
    def override_get_db():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def mock_db_session():
    """Mock database session for tests that should not touch a database."""
    return Mock()


@pytest.fixture
def valid_request_data():
    """A submission as the public form posts it."""
    return {
        "fullName": "Aisyah Rahman",
        "email": "aisyah@example.com",
        "company": "Kedai Digital Sdn Bhd",
        "phoneNumber": "+60 12-345 6789",
        "requestType": "feature-request",
        "projectTitle": "Inventory dashboard",
        "description": "A dashboard with analytics and an API integration for our stock levels.",
        "timeline": "3 months",
        "budget": "MYR 20,000",
    }
