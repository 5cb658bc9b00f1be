"""
Test configuration for pytest
"""

import pytest
import os
from decimal import Decimal
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, Session, create_engine
from typing import Generator
import uuid

# Test environment variables
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["JWT_SECRET_KEY"] = "test-jwt-secret"

from fastapi.testclient import TestClient  # noqa: E402

from roombook.core.auth import create_access_token  # noqa: E402
import roombook.models  # noqa: E402,F401
from roombook.core.database import get_session  # noqa: E402
from roombook.main import app  # noqa: E402
from roombook.models.business_hours import BusinessHoursRule, Weekday  # noqa: E402
from roombook.models.room import Room  # noqa: E402
from roombook.models.tenant import Tenant  # noqa: E402


# Create test engine using in-memory SQLite shared across threads
test_engine = create_engine(
    "sqlite:///:memory:",
    echo=False,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)


@pytest.fixture(scope="function")
def db() -> Generator[Session, None, None]:
    """Create a clean database session for each test"""
    # Create all tables
    SQLModel.metadata.create_all(test_engine)

    # Create session
    with Session(test_engine) as session:
        yield session

    # Cleanup
    SQLModel.metadata.drop_all(test_engine)


def make_tenant(db: Session, subdomain: str, name: str = "Test Karaoke") -> Tenant:
    tenant = Tenant(name=name, subdomain=subdomain)
    db.add(tenant)
    db.flush()
    for weekday in Weekday:
        db.add(BusinessHoursRule.default_for(tenant.id, weekday))
    db.commit()
    db.refresh(tenant)
    return tenant


def make_room(db: Session, tenant: Tenant, name: str = "Room A", hourly_rate: str = "25.00") -> Room:
    room = Room(tenant_id=tenant.id, name=name, capacity=4, hourly_rate=Decimal(hourly_rate))
    db.add(room)
    db.commit()
    db.refresh(room)
    return room


# Fixtures
@pytest.fixture
def test_tenant(db: Session) -> Tenant:
    """Create a test tenant with default business hours"""
    return make_tenant(db, "test-karaoke")


@pytest.fixture
def other_tenant(db: Session) -> Tenant:
    """Second tenant, used to check isolation"""
    return make_tenant(db, "other-karaoke", name="Other Karaoke")


@pytest.fixture
def test_room(db: Session, test_tenant: Tenant) -> Room:
    """Room A at 25.00 per hour"""
    return make_room(db, test_tenant)


@pytest.fixture
def client(db: Session) -> Generator[TestClient, None, None]:
    """API client bound to the test database"""
    def override_get_session():
        with Session(test_engine) as session:
            yield session

    app.dependency_overrides[get_session] = override_get_session
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def other_room(db: Session, other_tenant: Tenant) -> Room:
    """Room of the second tenant"""
    return make_room(db, other_tenant, name="Other Room")


def bearer_headers(tenant: Tenant, role: str = "manager") -> dict:
    token = create_access_token(user_id=uuid.uuid4(), tenant_id=tenant.id, role=role)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def headers(test_tenant: Tenant) -> dict:
    """Staff credentials for the test tenant"""
    return bearer_headers(test_tenant)


@pytest.fixture
def other_headers(other_tenant: Tenant) -> dict:
    return bearer_headers(other_tenant)


@pytest.fixture
def public_headers(test_tenant: Tenant) -> dict:
    """Customer-facing tenant header, no credentials"""
    return {"X-Tenant-ID": str(test_tenant.id)}
