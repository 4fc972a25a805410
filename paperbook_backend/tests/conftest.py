"""Pytest configuration and fixtures for paperbook_backend tests."""

import os

# Must be set before paperbook_backend.settings is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("SIGNUP_RATE_LIMIT", "1000/minute")
os.environ.setdefault("DEBUG_MODE", "development")

from typing import Optional

import pytest
from argon2 import PasswordHasher
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from paperbook_backend import password_utils
from paperbook_backend.business_logic.services import Services, build_services
from paperbook_backend.interfaces import (
    AddressCreate,
    ProductCreate,
    Role,
    UserCreate,
)
from paperbook_backend.model import Base
from paperbook_backend.permissions.principal import Principal

DEFAULT_PASSWORD = "Str0ng!Passw0rd"

# Acts as an admin before any admin row exists
ROOT = Principal(user_id=0, role=Role.admin)


# ============================================================================
# Database
# ============================================================================


@pytest.fixture(autouse=True)
def fast_password_hasher(monkeypatch):
    """Argon2 with minimal cost so tests creating users stay fast."""
    monkeypatch.setattr(
        password_utils,
        "_ph",
        PasswordHasher(time_cost=1, memory_cost=8, parallelism=1, hash_len=16, salt_len=16),
    )


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, expire_on_commit=False, autoflush=False, class_=Session)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.rollback()
    session.close()


@pytest.fixture
def services(db) -> Services:
    return build_services(db)


# ============================================================================
# Factories
# ============================================================================


def principal_of(user) -> Principal:
    return Principal(user_id=user.id, role=Role(user.role))


@pytest.fixture
def make_user(services):
    counter = {"n": 0}

    def _make_user(role: Role = Role.user, name: Optional[str] = None, email: Optional[str] = None):
        counter["n"] += 1
        payload = UserCreate(
            name=name or f"Reader {counter['n']}",
            email=email or f"reader{counter['n']}@paperbook.dev",
            password=DEFAULT_PASSWORD,
            role=role,
        )
        return services.users.create(payload, ROOT)

    return _make_user


@pytest.fixture
def make_product(services):
    def _make_product(seller, name: str = "Notebook A5", price: float = 12.5, stock: int = 10):
        payload = ProductCreate(name=name, price=price, stock=stock)
        return services.products.create(payload, principal_of(seller))

    return _make_product


@pytest.fixture
def make_address(services):
    def _make_address(owner, city: str = "Recife"):
        payload = AddressCreate(
            postal_code="50000-000",
            street="Rua da Aurora",
            house_number="100",
            neighborhood="Boa Vista",
            city=city,
            state="PE",
        )
        return services.addresses.create(payload, principal_of(owner))

    return _make_address


# ============================================================================
# HTTP
# ============================================================================


@pytest.fixture
def test_client(session_factory):
    """TestClient with get_db bound to the in-memory test database."""
    from paperbook_backend.database import get_db
    from paperbook_backend.server import app

    def _override_get_db():
        session = session_factory()
        try:
            yield session
            if session.in_transaction():
                session.commit()
        except Exception:
            if session.in_transaction():
                session.rollback()
            raise
        finally:
            session.close()

    app.dependency_overrides[get_db] = _override_get_db
    client = TestClient(app, raise_server_exceptions=False)
    yield client
    app.dependency_overrides.clear()


def basic_auth(email: str, password: str = DEFAULT_PASSWORD):
    return (email, password)
