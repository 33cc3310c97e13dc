# tests/api/test_auth.py

from datetime import timedelta

from httpx import AsyncClient

from foodconnect.core.limiter import limiter
from foodconnect.crud import user as crud_user
from foodconnect.utils.dates import utcnow
from tests.conftest import TEST_PASSWORD, create_influencer_user

RESTAURANT_PAYLOAD = {
    "email": "Owner@Example.com",
    "password": "secret123",
    "user_type": "restaurant",
    "business_name": "Mamak Corner",
    "address": "12 Jalan Alor",
    "city": "Kuala Lumpur",
    "state": "Kuala Lumpur",
    "dietary_categories": ["halal_friendly"],
}

INFLUENCER_PAYLOAD = {
    "email": "eater@example.com",
    "password": "secret123",
    "user_type": "influencer",
    "display_name": "Penang Eats",
    "location": "George Town",
    "city": "George Town",
    "state": "Pulau Pinang",
    "tiktok_followers": 25_000,
    "instagram_followers": 4_000,
}


async def test_register_restaurant_creates_pending_account(client: AsyncClient, db_session):
    response = await client.post("/api/v1/auth/register", json=RESTAURANT_PAYLOAD)

    assert response.status_code == 201
    data = response.json()
    assert data["user"]["email"] == "owner@example.com"
    assert data["user"]["status"] == "pending"
    assert data["user"]["email_verified"] is False

    user = crud_user.get_user_by_email(db_session, "owner@example.com")
    assert user.restaurant.business_name == "Mamak Corner"
    assert user.email_verification_token is not None


async def test_register_influencer_calculates_tier(client: AsyncClient, db_session):
    response = await client.post("/api/v1/auth/register", json=INFLUENCER_PAYLOAD)

    assert response.status_code == 201
    user = crud_user.get_user_by_email(db_session, "eater@example.com")
    # Largest count is 25K on TikTok
    assert user.influencer.tier == "large"


async def test_register_duplicate_email(client: AsyncClient):
    first = await client.post("/api/v1/auth/register", json=RESTAURANT_PAYLOAD)
    second = await client.post("/api/v1/auth/register", json=RESTAURANT_PAYLOAD)

    assert first.status_code == 201
    assert second.status_code == 400


async def test_register_missing_profile_fields(client: AsyncClient):
    payload = {**RESTAURANT_PAYLOAD, "business_name": None}
    response = await client.post("/api/v1/auth/register", json=payload)
    assert response.status_code == 422


async def test_register_rejects_unknown_state(client: AsyncClient):
    payload = {**INFLUENCER_PAYLOAD, "state": "Bangkok"}
    response = await client.post("/api/v1/auth/register", json=payload)
    assert response.status_code == 422


async def test_login_pending_account_is_blocked(client: AsyncClient, db_session):
    create_influencer_user(db_session, email="waiting@example.com", status="pending")

    response = await client.post(
        "/api/v1/auth/login", json={"email": "waiting@example.com", "password": TEST_PASSWORD}
    )

    assert response.status_code == 403
    assert "pending" in response.json()["detail"]


async def test_login_wrong_password(client: AsyncClient, restaurant_user):
    response = await client.post(
        "/api/v1/auth/login", json={"email": restaurant_user.email, "password": "wrong-password"}
    )
    assert response.status_code == 401


async def test_login_returns_token_and_profile(client: AsyncClient, restaurant_user, db_session):
    response = await client.post(
        "/api/v1/auth/login", json={"email": restaurant_user.email, "password": TEST_PASSWORD}
    )

    assert response.status_code == 200
    data = response.json()
    assert data["token_type"] == "bearer"
    assert data["profile"]["business_name"] == "Nasi Lemak House"

    me = await client.get("/api/v1/users/me", headers={"Authorization": f"Bearer {data['access_token']}"})
    assert me.status_code == 200
    assert me.json()["user"]["id"] == restaurant_user.id

    db_session.refresh(restaurant_user)
    assert restaurant_user.last_login is not None


async def test_verify_email(client: AsyncClient, db_session):
    await client.post("/api/v1/auth/register", json=RESTAURANT_PAYLOAD)
    user = crud_user.get_user_by_email(db_session, "owner@example.com")

    response = await client.get(f"/api/v1/auth/verify-email/{user.email_verification_token}")

    assert response.status_code == 200
    db_session.refresh(user)
    assert user.email_verified is True
    assert user.email_verification_token is None


async def test_verify_email_invalid_token(client: AsyncClient, db_session):
    response = await client.get("/api/v1/auth/verify-email/not-a-real-token")
    assert response.status_code == 400


async def test_password_reset_flow(client: AsyncClient, restaurant_user, db_session):
    response = await client.post("/api/v1/auth/forgot-password", json={"email": restaurant_user.email})
    assert response.status_code == 200

    db_session.refresh(restaurant_user)
    token = restaurant_user.password_reset_token
    assert token

    response = await client.post(f"/api/v1/auth/reset-password/{token}", json={"password": "brand-new-pass"})
    assert response.status_code == 200

    login = await client.post(
        "/api/v1/auth/login", json={"email": restaurant_user.email, "password": "brand-new-pass"}
    )
    assert login.status_code == 200


async def test_reset_password_expired_token(client: AsyncClient, restaurant_user, db_session):
    restaurant_user.password_reset_token = "expired-token"
    restaurant_user.password_reset_expires = utcnow() - timedelta(minutes=5)
    db_session.commit()

    response = await client.post("/api/v1/auth/reset-password/expired-token", json={"password": "another-pass"})
    assert response.status_code == 400


async def test_forgot_password_unknown_email(client: AsyncClient, db_session):
    response = await client.post("/api/v1/auth/forgot-password", json={"email": "nobody@example.com"})
    assert response.status_code == 404


async def test_protected_endpoint_requires_token(client: AsyncClient, db_session):
    response = await client.get("/api/v1/users/me")
    assert response.status_code in (401, 403)


async def test_suspended_user_token_is_rejected(client: AsyncClient, influencer_user, influencer_auth_headers, db_session):
    influencer_user.status = "suspended"
    db_session.commit()

    response = await client.get("/api/v1/users/me", headers=influencer_auth_headers)
    assert response.status_code == 403


async def test_login_is_rate_limited(client: AsyncClient, restaurant_user, monkeypatch):
    monkeypatch.setattr(limiter, "enabled", True)
    limiter.reset()
    try:
        codes = []
        for _ in range(6):
            response = await client.post(
                "/api/v1/auth/login", json={"email": restaurant_user.email, "password": "wrong-password"}
            )
            codes.append(response.status_code)
    finally:
        limiter.reset()

    assert codes == [401] * 5 + [429]
