# tests/api/test_profiles.py

import pytest
from httpx import AsyncClient

from foodconnect.services.profiles import calculate_tier
from tests.conftest import create_influencer_user


@pytest.mark.parametrize(
    "followers, expected",
    [
        (0, "emerging"),
        (4_999, "emerging"),
        (5_000, "growing"),
        (10_000, "established"),
        (20_000, "large"),
        (50_000, "major"),
        (99_999, "major"),
        (100_000, "mega"),
    ],
)
def test_calculate_tier_boundaries(followers, expected):
    assert calculate_tier(followers) == expected


async def test_update_own_profile_ignores_unknown_fields(client: AsyncClient, restaurant_user, restaurant_auth_headers):
    response = await client.put(
        "/api/v1/users/me/profile",
        json={"description": "Best sambal in town", "status": "approved", "tier": "mega"},
        headers=restaurant_auth_headers,
    )

    assert response.status_code == 200
    data = response.json()
    assert data["profile"]["description"] == "Best sambal in town"
    assert data["user"]["status"] == "approved"


async def test_update_profile_without_valid_fields(client: AsyncClient, influencer_auth_headers):
    response = await client.put(
        "/api/v1/users/me/profile",
        json={"instagram_followers": 999_999},
        headers=influencer_auth_headers,
    )
    assert response.status_code == 400


async def test_update_profile_rejects_bad_state(client: AsyncClient, influencer_auth_headers):
    response = await client.put(
        "/api/v1/users/me/profile",
        json={"state": "Atlantis"},
        headers=influencer_auth_headers,
    )
    assert response.status_code == 422


async def test_follower_update_approval_recalculates_tier(
    client: AsyncClient, influencer_user, influencer_auth_headers, admin_auth_headers, db_session
):
    # 1. The influencer asks for a new Instagram count
    response = await client.post(
        "/api/v1/users/me/follower-updates",
        json={"platform": "instagram", "requested_count": 55_000, "proof_url": "https://example.com/proof.png"},
        headers=influencer_auth_headers,
    )
    assert response.status_code == 201
    update = response.json()
    assert update["current_count"] == 6000
    assert update["status"] == "pending"

    # 2. A second pending request for the same platform is refused
    duplicate = await client.post(
        "/api/v1/users/me/follower-updates",
        json={"platform": "instagram", "requested_count": 60_000},
        headers=influencer_auth_headers,
    )
    assert duplicate.status_code == 400

    # 3. The admin approves it
    pending = await client.get("/api/v1/admin/follower-updates", headers=admin_auth_headers)
    assert pending.json()["total_items"] == 1

    response = await client.post(
        f"/api/v1/admin/follower-updates/{update['id']}/process",
        json={"action": "approve"},
        headers=admin_auth_headers,
    )
    assert response.status_code == 200
    assert response.json()["status"] == "approved"

    db_session.refresh(influencer_user)
    assert influencer_user.influencer.instagram_followers == 55_000
    assert influencer_user.influencer.tier == "major"

    # 4. Processing twice is an error
    again = await client.post(
        f"/api/v1/admin/follower-updates/{update['id']}/process",
        json={"action": "reject"},
        headers=admin_auth_headers,
    )
    assert again.status_code == 400


async def test_search_influencers_only_lists_approved(
    client: AsyncClient, db_session, influencer_user, restaurant_auth_headers
):
    create_influencer_user(db_session, email="pending@example.com", status="pending", display_name="Hidden")
    create_influencer_user(db_session, email="mega@example.com", display_name="Mega Makan", tier="mega")

    response = await client.get("/api/v1/influencers", headers=restaurant_auth_headers)
    assert response.status_code == 200
    names = {item["display_name"] for item in response.json()["items"]}
    assert names == {"KL Foodie", "Mega Makan"}

    response = await client.get("/api/v1/influencers?tier=mega", headers=restaurant_auth_headers)
    assert [item["display_name"] for item in response.json()["items"]] == ["Mega Makan"]


async def test_influencers_cannot_search_influencers(client: AsyncClient, influencer_auth_headers):
    response = await client.get("/api/v1/influencers", headers=influencer_auth_headers)
    assert response.status_code == 403


async def test_public_restaurant_profile(client: AsyncClient, restaurant_user):
    response = await client.get(f"/api/v1/restaurants/{restaurant_user.restaurant.id}")
    assert response.status_code == 200
    assert response.json()["business_name"] == "Nasi Lemak House"


async def test_registration_reference_data(client: AsyncClient):
    response = await client.get("/api/v1/reference/registration-data")
    assert response.status_code == 200
    data = response.json()
    assert "Selangor" in data["malaysian_states"]
    assert data["dietary_categories"]["halal_certified"] == "Halal Certified"
