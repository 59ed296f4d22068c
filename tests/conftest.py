"""Shared fixtures: SQLite-backed session, API client and request body factories"""

import os

# Cheap hashes for tests; must be set before settings are loaded
os.environ.setdefault("BCRYPT_ROUNDS", "4")

import pytest
from typing import Any, Callable, Dict, Generator
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from loan_origination.api.main import create_app
from loan_origination.infrastructure.database.models import Base
from loan_origination.infrastructure.database.session import get_db


# Each test gets a fresh SQLite file; tables are created on entry and dropped on exit
SQLITE_URL = "sqlite:///./test.db"
sqlite_engine = create_engine(SQLITE_URL, connect_args={"check_same_thread": False})
SqliteSession = sessionmaker(autocommit=False, autoflush=False, bind=sqlite_engine)


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Session bound to an empty users/loan_bookings schema"""
    Base.metadata.create_all(bind=sqlite_engine)
    session = SqliteSession()
    yield session
    session.close()
    Base.metadata.drop_all(bind=sqlite_engine)


@pytest.fixture
def client(db: Session) -> TestClient:
    """API client whose routes all share the test session"""
    app = create_app()
    app.dependency_overrides[get_db] = lambda: db
    return TestClient(app)


@pytest.fixture
def user_payload() -> Callable[..., Dict[str, Any]]:
    """Build a valid registration body; keyword overrides replace fields"""

    def _build(**overrides: Any) -> Dict[str, Any]:
        payload = {
            "name": "Rajesh Kumar",
            "email": "rajesh.kumar22@example.com",
            "aadhar_num": 987654321098,
            "mobile_num": 9123456780,
            "pan_num": "XYZPQ6789A",
            "address": "45 Sector 12, Noida, Uttar Pradesh, India",
            "password": "SecurePass456",
            "gender": "Male",
            "salary": 550000,
            "is_kyc": False,
        }
        payload.update(overrides)
        return payload

    return _build


@pytest.fixture
def registered_user(client: TestClient, user_payload) -> Dict[str, Any]:
    """Register the default user and return its payload plus id"""
    payload = user_payload()
    response = client.post("/register", json=payload)
    assert response.status_code == 201
    return {**payload, "id": response.json()["id"]}


@pytest.fixture
def loan_payload(registered_user: Dict[str, Any]) -> Callable[..., Dict[str, Any]]:
    """Build a valid loan booking body for the registered user"""

    def _build(**overrides: Any) -> Dict[str, Any]:
        payload = {
            "borrower_id": registered_user["id"],
            "loan_type": "Personal Loan",
            "loan_amount": 50000,
            "interest_rate": 10,
            "tenure": 24,
        }
        payload.update(overrides)
        return payload

    return _build
