# tests/api/test_campaigns.py

from datetime import timedelta

from httpx import AsyncClient

from foodconnect.services import campaign as campaign_service
from foodconnect.utils.dates import utcnow
from tests.conftest import (
    auth_headers,
    create_application,
    create_campaign,
    create_influencer_user,
    create_restaurant_user,
)


def campaign_payload(**overrides) -> dict:
    payload = {
        "title": "Ramadan Bazaar Special",
        "description": "Showcase our Ramadan buka puasa set menu.",
        "brief": "Visit during buka puasa, film the set menu and mention the early bird price in the caption.",
        "total_budget": 1500,
        "deadline": (utcnow() + timedelta(days=20)).isoformat(),
        "dietary_categories": ["halal_certified"],
        "target_tiers": ["growing", "established"],
        "budget_allocations": [{"tier": "growing", "amount": 300}],
        "max_influencers": 3,
    }
    payload.update(overrides)
    return payload


async def test_create_campaign_as_draft(client: AsyncClient, restaurant_auth_headers):
    response = await client.post("/api/v1/campaigns", json=campaign_payload(), headers=restaurant_auth_headers)

    assert response.status_code == 201
    data = response.json()
    assert data["status"] == "draft"
    assert data["restaurant_name"] == "Nasi Lemak House"
    assert data["budget_allocations"] == [{"tier": "growing", "amount": 300.0}]


async def test_create_campaign_publish_immediately(client: AsyncClient, restaurant_auth_headers):
    response = await client.post(
        "/api/v1/campaigns", json=campaign_payload(publish_immediately=True), headers=restaurant_auth_headers
    )
    assert response.status_code == 201
    assert response.json()["status"] == "published"


async def test_create_campaign_budget_below_minimum(client: AsyncClient, restaurant_auth_headers):
    response = await client.post(
        "/api/v1/campaigns", json=campaign_payload(total_budget=50), headers=restaurant_auth_headers
    )
    assert response.status_code == 400


async def test_create_campaign_deadline_too_far(client: AsyncClient, restaurant_auth_headers):
    deadline = (utcnow() + timedelta(days=90)).isoformat()
    response = await client.post(
        "/api/v1/campaigns", json=campaign_payload(deadline=deadline), headers=restaurant_auth_headers
    )
    assert response.status_code == 400


async def test_create_campaign_deadline_in_past(client: AsyncClient, restaurant_auth_headers):
    deadline = (utcnow() - timedelta(days=1)).isoformat()
    response = await client.post(
        "/api/v1/campaigns", json=campaign_payload(deadline=deadline), headers=restaurant_auth_headers
    )
    assert response.status_code == 400


async def test_create_campaign_short_title(client: AsyncClient, restaurant_auth_headers):
    response = await client.post(
        "/api/v1/campaigns", json=campaign_payload(title="Hi"), headers=restaurant_auth_headers
    )
    assert response.status_code == 422


async def test_influencer_cannot_create_campaign(client: AsyncClient, influencer_auth_headers):
    response = await client.post("/api/v1/campaigns", json=campaign_payload(), headers=influencer_auth_headers)
    assert response.status_code == 403


async def test_draft_then_publish(client: AsyncClient, restaurant_auth_headers):
    # 1. A draft only needs a title
    response = await client.post(
        "/api/v1/campaigns/draft", json={"title": "Half-finished idea"}, headers=restaurant_auth_headers
    )
    assert response.status_code == 201
    campaign_id = response.json()["id"]

    # 2. Publishing an incomplete draft fails
    response = await client.post(f"/api/v1/campaigns/{campaign_id}/publish", headers=restaurant_auth_headers)
    assert response.status_code == 400

    # 3. Complete it and publish
    full = campaign_payload()
    update = {key: full[key] for key in ("title", "description", "brief", "total_budget", "deadline")}
    response = await client.put(f"/api/v1/campaigns/{campaign_id}", json=update, headers=restaurant_auth_headers)
    assert response.status_code == 200

    response = await client.post(f"/api/v1/campaigns/{campaign_id}/publish", headers=restaurant_auth_headers)
    assert response.status_code == 200
    assert response.json()["status"] == "published"

    # 4. Closed campaigns cannot be reopened
    response = await client.post(f"/api/v1/campaigns/{campaign_id}/close", headers=restaurant_auth_headers)
    assert response.json()["status"] == "closed"
    response = await client.put(
        f"/api/v1/campaigns/{campaign_id}", json={"status": "published"}, headers=restaurant_auth_headers
    )
    assert response.status_code == 400


async def test_cannot_edit_published_campaign_with_applications(
    client: AsyncClient, db_session, campaign, influencer_user, restaurant_auth_headers
):
    create_application(db_session, campaign, influencer_user)

    response = await client.put(
        f"/api/v1/campaigns/{campaign.id}", json={"title": "A brand new title"}, headers=restaurant_auth_headers
    )
    assert response.status_code == 400


async def test_other_restaurant_cannot_update(client: AsyncClient, db_session, campaign):
    other = create_restaurant_user(db_session, email="rival@example.com", business_name="Rival Kopitiam")

    response = await client.put(
        f"/api/v1/campaigns/{campaign.id}", json={"title": "Hijacked campaign"}, headers=auth_headers(other)
    )
    assert response.status_code == 403


async def test_my_campaigns_include_application_stats(
    client: AsyncClient, db_session, campaign, influencer_user, restaurant_auth_headers
):
    create_application(db_session, campaign, influencer_user, status="accepted")
    second = create_influencer_user(db_session, email="second@example.com", display_name="Second")
    create_application(db_session, campaign, second)

    response = await client.get("/api/v1/campaigns/my", headers=restaurant_auth_headers)

    assert response.status_code == 200
    data = response.json()
    assert data["total_items"] == 1
    stats = data["items"][0]["application_stats"]
    assert stats == {"total": 2, "pending": 1, "accepted": 1, "rejected": 0}


async def test_browse_shows_only_open_published_campaigns(
    client: AsyncClient, db_session, restaurant_user, influencer_auth_headers
):
    open_campaign = create_campaign(db_session, restaurant_user, title="Open Campaign")
    create_campaign(db_session, restaurant_user, title="Draft Campaign", status="draft")
    create_campaign(db_session, restaurant_user, title="Expired Campaign", deadline=utcnow() - timedelta(days=1))
    create_campaign(db_session, restaurant_user, title="Mega Only", target_tiers=["mega"])

    response = await client.get("/api/v1/campaigns/browse", headers=influencer_auth_headers)

    assert response.status_code == 200
    items = {item["title"]: item for item in response.json()["items"]}
    assert set(items) == {"Open Campaign", "Mega Only"}
    assert items["Open Campaign"]["can_apply"] is True
    assert items["Open Campaign"]["id"] == open_campaign.id
    # Tier mismatch
    assert items["Mega Only"]["can_apply"] is False


async def test_browse_filters_by_tier_and_dietary(client: AsyncClient, db_session, restaurant_user):
    create_campaign(db_session, restaurant_user, title="Vegan Feast", dietary_categories=["vegan"])
    create_campaign(db_session, restaurant_user, title="Halal Grill")

    response = await client.get("/api/v1/campaigns/browse?dietary_category=vegan")
    assert [item["title"] for item in response.json()["items"]] == ["Vegan Feast"]

    response = await client.get("/api/v1/campaigns/browse?target_tier=mega")
    assert response.json()["items"] == []


async def test_campaign_detail_hides_applications_from_influencers(
    client: AsyncClient, db_session, campaign, influencer_user, influencer_auth_headers, restaurant_auth_headers
):
    create_application(db_session, campaign, influencer_user)

    as_influencer = await client.get(f"/api/v1/campaigns/{campaign.id}", headers=influencer_auth_headers)
    assert as_influencer.status_code == 200
    assert as_influencer.json()["applications"] is None
    assert as_influencer.json()["user_application_status"] == "pending"
    assert as_influencer.json()["can_apply"] is False

    as_owner = await client.get(f"/api/v1/campaigns/{campaign.id}", headers=restaurant_auth_headers)
    assert len(as_owner.json()["applications"]) == 1


async def test_influencer_cannot_see_draft(client: AsyncClient, db_session, restaurant_user, influencer_auth_headers):
    draft = create_campaign(db_session, restaurant_user, status="draft")
    response = await client.get(f"/api/v1/campaigns/{draft.id}", headers=influencer_auth_headers)
    assert response.status_code == 404


async def test_form_data(client: AsyncClient, db_session):
    response = await client.get("/api/v1/campaigns/form-data")
    assert response.status_code == 200
    data = response.json()
    assert data["min_campaign_budget"] == 100.0
    assert data["budget_suggestions"]["mega"] == {"min": 2000, "max": 10000}


def test_close_expired_campaigns(db_session, restaurant_user):
    expired = create_campaign(db_session, restaurant_user, deadline=utcnow() - timedelta(hours=1))
    active = create_campaign(db_session, restaurant_user)

    closed = campaign_service.close_expired_campaigns(db_session)

    assert closed == 1
    db_session.refresh(expired)
    db_session.refresh(active)
    assert expired.status == "closed"
    assert active.status == "published"
