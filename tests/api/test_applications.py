# tests/api/test_applications.py

from datetime import timedelta

from httpx import AsyncClient

from foodconnect.models.notification import Notification
from foodconnect.utils.dates import utcnow
from tests.conftest import (
    auth_headers,
    create_application,
    create_campaign,
    create_influencer_user,
)


async def test_apply_to_campaign_notifies_restaurant(
    client: AsyncClient, db_session, campaign, restaurant_user, influencer_auth_headers
):
    response = await client.post(
        "/api/v1/applications",
        json={"campaign_id": campaign.id, "message": "Big fan of your sambal!", "proposed_timeline": "This weekend"},
        headers=influencer_auth_headers,
    )

    assert response.status_code == 201
    data = response.json()
    assert data["status"] == "pending"
    assert data["campaign_title"] == campaign.title
    assert data["influencer_tier"] == "growing"

    notification = db_session.query(Notification).filter(Notification.user_id == restaurant_user.id).one()
    assert notification.type == "application_received"


async def test_apply_twice(client: AsyncClient, campaign, influencer_auth_headers):
    payload = {"campaign_id": campaign.id}
    first = await client.post("/api/v1/applications", json=payload, headers=influencer_auth_headers)
    second = await client.post("/api/v1/applications", json=payload, headers=influencer_auth_headers)

    assert first.status_code == 201
    assert second.status_code == 400


async def test_apply_wrong_tier(client: AsyncClient, db_session, restaurant_user, influencer_auth_headers):
    mega_only = create_campaign(db_session, restaurant_user, target_tiers=["mega"])
    response = await client.post(
        "/api/v1/applications", json={"campaign_id": mega_only.id}, headers=influencer_auth_headers
    )
    assert response.status_code == 400


async def test_apply_to_draft_or_expired(client: AsyncClient, db_session, restaurant_user, influencer_auth_headers):
    draft = create_campaign(db_session, restaurant_user, status="draft")
    expired = create_campaign(db_session, restaurant_user, deadline=utcnow() - timedelta(minutes=1))

    for campaign in (draft, expired):
        response = await client.post(
            "/api/v1/applications", json={"campaign_id": campaign.id}, headers=influencer_auth_headers
        )
        assert response.status_code == 400


async def test_apply_unknown_campaign(client: AsyncClient, influencer_auth_headers, db_session):
    response = await client.post("/api/v1/applications", json={"campaign_id": 999}, headers=influencer_auth_headers)
    assert response.status_code == 404


async def test_restaurant_cannot_apply(client: AsyncClient, campaign, restaurant_auth_headers):
    response = await client.post(
        "/api/v1/applications", json={"campaign_id": campaign.id}, headers=restaurant_auth_headers
    )
    assert response.status_code == 403


async def test_accept_application(
    client: AsyncClient, db_session, campaign, influencer_user, restaurant_auth_headers
):
    application = create_application(db_session, campaign, influencer_user)

    response = await client.post(
        f"/api/v1/applications/{application.id}/process", json={"action": "accept"}, headers=restaurant_auth_headers
    )

    assert response.status_code == 200
    assert response.json()["status"] == "accepted"
    assert response.json()["responded_at"] is not None

    notification = db_session.query(Notification).filter(Notification.user_id == influencer_user.id).one()
    assert notification.type == "application_accepted"

    # Only pending applications can be processed
    again = await client.post(
        f"/api/v1/applications/{application.id}/process", json={"action": "reject"}, headers=restaurant_auth_headers
    )
    assert again.status_code == 400


async def test_accept_respects_max_influencers(
    client: AsyncClient, db_session, restaurant_user, restaurant_auth_headers
):
    campaign = create_campaign(db_session, restaurant_user, max_influencers=1)
    first = create_influencer_user(db_session, email="one@example.com", display_name="One")
    second = create_influencer_user(db_session, email="two@example.com", display_name="Two")
    create_application(db_session, campaign, first, status="accepted")
    pending = create_application(db_session, campaign, second)

    response = await client.post(
        f"/api/v1/applications/{pending.id}/process", json={"action": "accept"}, headers=restaurant_auth_headers
    )
    assert response.status_code == 400

    # Rejecting is still possible
    response = await client.post(
        f"/api/v1/applications/{pending.id}/process", json={"action": "reject"}, headers=restaurant_auth_headers
    )
    assert response.status_code == 200
    assert response.json()["status"] == "rejected"


async def test_get_application_access(
    client: AsyncClient, db_session, campaign, influencer_user, influencer_auth_headers, restaurant_auth_headers,
    admin_auth_headers
):
    application = create_application(db_session, campaign, influencer_user)
    stranger = create_influencer_user(db_session, email="stranger@example.com", display_name="Stranger")

    for headers in (influencer_auth_headers, restaurant_auth_headers, admin_auth_headers):
        response = await client.get(f"/api/v1/applications/{application.id}", headers=headers)
        assert response.status_code == 200

    response = await client.get(f"/api/v1/applications/{application.id}", headers=auth_headers(stranger))
    assert response.status_code == 403


async def test_my_applications_filtered(
    client: AsyncClient, db_session, restaurant_user, influencer_user, influencer_auth_headers
):
    create_application(db_session, create_campaign(db_session, restaurant_user), influencer_user, status="accepted")
    create_application(db_session, create_campaign(db_session, restaurant_user), influencer_user)

    response = await client.get("/api/v1/applications/my", headers=influencer_auth_headers)
    assert response.json()["total_items"] == 2

    response = await client.get("/api/v1/applications/my?status=accepted", headers=influencer_auth_headers)
    data = response.json()
    assert data["total_items"] == 1
    assert data["items"][0]["status"] == "accepted"


async def test_campaign_applications_for_owner(
    client: AsyncClient, db_session, campaign, influencer_user, restaurant_auth_headers
):
    create_application(db_session, campaign, influencer_user)

    response = await client.get(f"/api/v1/campaigns/{campaign.id}/applications", headers=restaurant_auth_headers)

    assert response.status_code == 200
    assert [item["influencer_name"] for item in response.json()] == ["KL Foodie"]
