import os

# Settings are read at import time, so the test environment goes first
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("CASCADE_RETRY_DELAY_SECONDS", "0")

import pytest
from datetime import datetime, timedelta, UTC
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from jose import jwt

from app.database import get_db
from app.models.base import Base
from app.config import settings
from app.core.security import hash_password
# Import all model classes to ensure they're registered with SQLAlchemy
from app.models.user import User
from app.models.card import Card
from app.models.category import Category
from app.models.budget import Budget
from app.models.ledger import Ledger, LedgerEntry
from app.models.transaction import Transaction
# Import FastAPI app AFTER model imports
from app.main import app

# Test database (SQLite in-memory for speed)
# Use StaticPool to ensure all connections share the same in-memory database
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///:memory:"
engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db_session():
    """Create fresh database for each test"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db_session):
    """FastAPI test client with test database"""

    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def create_test_token(user_id: int | str, expired: bool = False) -> str:
    """
    Generate valid JWT token for testing.

    Args:
        user_id: User ID to embed in 'sub' claim
        expired: If True, create expired token

    Returns:
        Encoded JWT token
    """
    if expired:
        exp = datetime.now(UTC) - timedelta(minutes=5)
    else:
        exp = datetime.now(UTC) + timedelta(minutes=15)

    payload = {"sub": str(user_id), "exp": exp, "iat": datetime.now(UTC)}

    token = jwt.encode(payload, settings.SECRET_KEY, algorithm="HS256")
    return token


def make_user(db_session, email: str, username: str, password: str = "password123") -> User:
    user = User(email=email, username=username, password_hash=hash_password(password))
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture
def user_a(db_session):
    return make_user(db_session, "alice@example.com", "alice")


@pytest.fixture
def user_b(db_session):
    return make_user(db_session, "bob@example.com", "bob")


@pytest.fixture
def user_a_headers(user_a):
    """Authorization headers for user A"""
    return {"Authorization": f"Bearer {create_test_token(user_a.id)}"}


@pytest.fixture
def user_b_headers(user_b):
    """Authorization headers for user B"""
    return {"Authorization": f"Bearer {create_test_token(user_b.id)}"}


@pytest.fixture
def auth_headers(user_a_headers):
    """Authorization headers for the default authenticated user"""
    return user_a_headers


@pytest.fixture
def api(client, auth_headers):
    """Small helper for creating records as the default user"""

    class Api:
        def card(self, name="Checking", headers=auth_headers):
            response = client.post("/api/cards", headers=headers, json={"name": name})
            assert response.status_code == 201, response.text
            return response.json()

        def category(self, name="Groceries", headers=auth_headers, **extra):
            response = client.post(
                "/api/categories", headers=headers, json={"name": name, **extra}
            )
            assert response.status_code == 201, response.text
            return response.json()

        def budget(self, card_id, headers=auth_headers, **extra):
            data = {
                "name": "January",
                "start_date": "2024-01-01",
                "end_date": "2024-01-31",
                "amount": 500.00,
                "card_id": card_id,
                **extra,
            }
            response = client.post("/api/budgets", headers=headers, json=data)
            assert response.status_code == 201, response.text
            return response.json()

        def transaction(self, card_id, amount, transaction_type="expense", headers=auth_headers, **extra):
            data = {
                "card_id": card_id,
                "amount": amount,
                "transaction_type": transaction_type,
                **extra,
            }
            response = client.post("/api/transactions", headers=headers, json=data)
            assert response.status_code == 201, response.text
            return response.json()

        def ledger(self, transaction_ids=(), headers=auth_headers, **extra):
            data = {
                "name": "Q1",
                "start_date": "2024-01-01",
                "end_date": "2024-03-31",
                "transaction_ids": list(transaction_ids),
                **extra,
            }
            response = client.post("/api/ledgers", headers=headers, json=data)
            assert response.status_code == 201, response.text
            return response.json()

        def balance(self, card_id, headers=auth_headers):
            return client.get(f"/api/cards/{card_id}", headers=headers).json()["balance"]

    return Api()
