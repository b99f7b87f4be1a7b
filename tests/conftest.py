"""Pytest fixtures for testing"""

import pytest
from datetime import date
from decimal import Decimal
from typing import Callable, Generator, Optional
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from credit_tracker.api.main import create_app
from credit_tracker.domain.models import Purchase
from credit_tracker.domain.planner import plan_purchase
from credit_tracker.infrastructure.database.models import Base
from credit_tracker.infrastructure.database.session import get_db


# Test database
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


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
def session_factory(db: Session) -> sessionmaker:
    """Independent sessions on the test database, one per worker thread"""
    return TestingSessionLocal


@pytest.fixture
def client(db: Session) -> TestClient:
    """Create FastAPI test client with test database"""
    app = create_app()

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    return TestClient(app)


@pytest.fixture
def make_purchase() -> Callable[..., Purchase]:
    """Build a planned purchase with a stable id"""

    def _make(
        amount: str,
        purchase_date: date,
        purchase_id: Optional[str] = None,
        name: str = "Item",
    ) -> Purchase:
        return plan_purchase(
            name,
            Decimal(amount),
            purchase_date,
            purchase_id=purchase_id or f"p-{purchase_date.isoformat()}-{amount}",
        )

    return _make
