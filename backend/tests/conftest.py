"""Pytest configuration and fixtures."""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from api.market_data import get_market_data_service
from database import Base, get_db
from main import app
from services.market_data_service import MarketDataService
# Pytest fixtures - imported to make them available to tests
from tests.fixtures import (  # noqa: F401
    fixed_deposit,
    holding,
    mutual_fund,
    stock_prices,
)
from tests.fixtures.mocks import SAMPLE_QUOTES, MockQuoteProvider


@pytest.fixture(name="db")
def db_fixture():
    """Create an in-memory SQLite database for testing."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)

    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()

    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(name="mock_provider")
def mock_provider_fixture():
    """Create a mock quote provider returning the sample quotes."""
    return MockQuoteProvider(quotes=SAMPLE_QUOTES)


@pytest.fixture(name="client")
def client_fixture(db, mock_provider):
    """Create a test client with the test database and a mock provider."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    service = MarketDataService(provider=mock_provider)

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_market_data_service] = lambda: service
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()


@pytest.fixture(name="client_without_store")
def client_without_store_fixture(mock_provider):
    """Create a test client whose store is not configured."""

    def override_get_db():
        yield None

    service = MarketDataService(provider=mock_provider)

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_market_data_service] = lambda: service
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()
