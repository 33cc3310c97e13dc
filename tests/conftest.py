# tests/conftest.py
import os
import tempfile
from datetime import timedelta
from unittest.mock import AsyncMock

# Settings are read on import, so the environment must be ready first
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["SCHEDULER_ENABLED"] = "false"
os.environ["UPLOAD_DIR"] = tempfile.mkdtemp(prefix="foodconnect-uploads-")

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from foodconnect.core import security
from foodconnect.core.redis import get_redis_client
from foodconnect.crud import profile as crud_profile
from foodconnect.crud import user as crud_user
from foodconnect.db.session import Base
from foodconnect.dependencies import get_db
from foodconnect.main import app
from foodconnect.models.campaign import Application, Campaign
from foodconnect.services.auth import issue_token
from foodconnect.utils.dates import utcnow
import foodconnect.models  # noqa: F401

# In-memory SQLite shared by every connection of the test engine
engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

TEST_PASSWORD = "secret123"


@pytest.fixture(autouse=True)
def fast_hashing(monkeypatch):
    monkeypatch.setattr(security, "BCRYPT_ROUNDS", 4)


@pytest.fixture(scope="function")
def db_session() -> Session:
    """
    A clean database for every test.
    """
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def session_factory(db_session, monkeypatch):
    """Points background jobs that open their own session at the test database."""
    from foodconnect.services import maintenance
    monkeypatch.setattr(maintenance, "SessionLocal", TestingSessionLocal)
    return TestingSessionLocal


@pytest.fixture
def mock_redis():
    redis = AsyncMock()
    redis.get.return_value = None
    return redis


@pytest.fixture
async def client(db_session, mock_redis):
    def override_get_db():
        yield db_session

    async def override_get_redis():
        return mock_redis

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_redis_client] = override_get_redis
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


# --- Data helpers ---

def create_restaurant_user(db, email="chef@example.com", status="approved", **profile):
    user = crud_user.create_user(
        db,
        email=email,
        password_hash=security.hash_password(TEST_PASSWORD),
        user_type="restaurant",
        status=status,
        email_verified=True,
    )
    data = {
        "business_name": "Nasi Lemak House",
        "address": "1 Jalan Ampang",
        "city": "Kuala Lumpur",
        "state": "Kuala Lumpur",
        "dietary_categories": ["halal_certified"],
    }
    data.update(profile)
    crud_profile.create_restaurant(db, user.id, data)
    db.refresh(user)
    return user


def create_influencer_user(db, email="foodie@example.com", status="approved", tier="growing", **profile):
    user = crud_user.create_user(
        db,
        email=email,
        password_hash=security.hash_password(TEST_PASSWORD),
        user_type="influencer",
        status=status,
        email_verified=True,
    )
    data = {
        "display_name": "KL Foodie",
        "location": "Bangsar",
        "city": "Kuala Lumpur",
        "state": "Kuala Lumpur",
        "instagram_followers": 6000,
        "tier": tier,
    }
    data.update(profile)
    crud_profile.create_influencer(db, user.id, data)
    db.refresh(user)
    return user


def create_campaign(db, restaurant_user, status="published", **fields):
    data = {
        "restaurant_id": restaurant_user.restaurant.id,
        "title": "Weekend Nasi Lemak Review",
        "description": "Try our signature nasi lemak and share it.",
        "brief": "Film a short video showing the sambal, the rice and the fried chicken. Tag us.",
        "total_budget": 1000.0,
        "deadline": utcnow() + timedelta(days=14),
        "dietary_categories": ["halal_certified"],
        "target_tiers": ["emerging", "growing"],
        "budget_allocations": [],
        "max_influencers": 2,
        "status": status,
    }
    data.update(fields)
    campaign = Campaign(**data)
    db.add(campaign)
    db.commit()
    db.refresh(campaign)
    return campaign


def create_application(db, campaign, influencer_user, status="pending"):
    application = Application(
        campaign_id=campaign.id,
        influencer_id=influencer_user.influencer.id,
        message="I would love to review this.",
        portfolio_examples=[],
        status=status,
    )
    db.add(application)
    db.commit()
    db.refresh(application)
    return application


def auth_headers(user) -> dict:
    return {"Authorization": f"Bearer {issue_token(user)}"}


# --- User fixtures ---

@pytest.fixture
def admin_user(db_session):
    return crud_user.create_user(
        db_session,
        email="admin@foodconnect.my",
        password_hash=security.hash_password(TEST_PASSWORD),
        user_type="admin",
        status="active",
        email_verified=True,
    )


@pytest.fixture
def restaurant_user(db_session):
    return create_restaurant_user(db_session)


@pytest.fixture
def influencer_user(db_session):
    return create_influencer_user(db_session)


@pytest.fixture
def admin_auth_headers(admin_user):
    return auth_headers(admin_user)


@pytest.fixture
def restaurant_auth_headers(restaurant_user):
    return auth_headers(restaurant_user)


@pytest.fixture
def influencer_auth_headers(influencer_user):
    return auth_headers(influencer_user)


@pytest.fixture
def campaign(db_session, restaurant_user):
    return create_campaign(db_session, restaurant_user)
