# tests/api/admin/test_users.py

from httpx import AsyncClient

from foodconnect.models.notification import Notification
from tests.conftest import TEST_PASSWORD, create_influencer_user, create_restaurant_user


async def test_pending_approvals_lists_profiles(client: AsyncClient, db_session, admin_auth_headers):
    create_restaurant_user(db_session, email="newshop@example.com", status="pending", business_name="New Shop")
    create_influencer_user(db_session, email="newbie@example.com", status="pending", display_name="Newbie")

    response = await client.get("/api/v1/admin/users/pending", headers=admin_auth_headers)

    assert response.status_code == 200
    data = response.json()
    assert data["total"] == 2
    assert data["restaurants"][0]["profile"]["business_name"] == "New Shop"
    assert data["influencers"][0]["display_name"] == "Newbie"


async def test_approve_user_allows_login(client: AsyncClient, db_session, admin_user, admin_auth_headers):
    pending = create_restaurant_user(db_session, email="newshop@example.com", status="pending")

    response = await client.post(
        f"/api/v1/admin/users/{pending.id}/approval",
        json={"action": "approve", "admin_notes": "Documents verified"},
        headers=admin_auth_headers,
    )

    assert response.status_code == 200
    assert response.json()["status"] == "approved"

    db_session.refresh(pending)
    assert pending.restaurant.approved_by == admin_user.id
    assert pending.restaurant.admin_notes == "Documents verified"

    notification = db_session.query(Notification).filter(Notification.user_id == pending.id).one()
    assert notification.type == "account_approved"

    login = await client.post("/api/v1/auth/login", json={"email": pending.email, "password": TEST_PASSWORD})
    assert login.status_code == 200


async def test_reject_user(client: AsyncClient, db_session, admin_auth_headers):
    pending = create_influencer_user(db_session, email="newbie@example.com", status="pending")

    response = await client.post(
        f"/api/v1/admin/users/{pending.id}/approval",
        json={"action": "reject", "admin_notes": "Follower counts could not be verified"},
        headers=admin_auth_headers,
    )
    assert response.json()["status"] == "rejected"

    # A decided registration cannot be decided again
    response = await client.post(
        f"/api/v1/admin/users/{pending.id}/approval", json={"action": "approve"}, headers=admin_auth_headers
    )
    assert response.status_code == 400


async def test_suspend_and_reactivate(client: AsyncClient, db_session, influencer_user, admin_auth_headers):
    response = await client.put(
        f"/api/v1/admin/users/{influencer_user.id}/status",
        json={"status": "suspended", "reason": "Spam messages"},
        headers=admin_auth_headers,
    )
    assert response.json()["status"] == "suspended"

    response = await client.put(
        f"/api/v1/admin/users/{influencer_user.id}/status", json={"status": "approved"}, headers=admin_auth_headers
    )
    assert response.json()["status"] == "approved"

    types = [n.type for n in db_session.query(Notification).filter(Notification.user_id == influencer_user.id)]
    assert sorted(types) == ["account_reactivated", "account_suspended"]


async def test_cannot_change_admin_status(client: AsyncClient, admin_user, admin_auth_headers):
    response = await client.put(
        f"/api/v1/admin/users/{admin_user.id}/status", json={"status": "suspended"}, headers=admin_auth_headers
    )
    assert response.status_code == 400


async def test_user_list_filters(client: AsyncClient, db_session, restaurant_user, influencer_user, admin_auth_headers):
    response = await client.get("/api/v1/admin/users?user_type=influencer", headers=admin_auth_headers)
    data = response.json()
    assert data["total_items"] == 1
    assert data["items"][0]["id"] == influencer_user.id

    response = await client.get("/api/v1/admin/users?search=Nasi", headers=admin_auth_headers)
    assert [item["id"] for item in response.json()["items"]] == [restaurant_user.id]

    response = await client.get(f"/api/v1/admin/users/{influencer_user.id}", headers=admin_auth_headers)
    assert response.json()["profile"]["tier"] == "growing"

    response = await client.get("/api/v1/admin/users/9999", headers=admin_auth_headers)
    assert response.status_code == 404


async def test_status_update_cannot_approve_registration(client: AsyncClient, db_session, admin_auth_headers):
    pending = create_restaurant_user(db_session, email="newshop@example.com", status="pending")

    response = await client.put(
        f"/api/v1/admin/users/{pending.id}/status", json={"status": "approved"}, headers=admin_auth_headers
    )
    assert response.status_code == 400

    db_session.refresh(pending)
    assert pending.status == "pending"
    assert pending.restaurant.approved_by is None

    # Reactivating via "active" still lands on the approved status
    await client.put(f"/api/v1/admin/users/{pending.id}/status", json={"status": "suspended"}, headers=admin_auth_headers)
    response = await client.put(
        f"/api/v1/admin/users/{pending.id}/status", json={"status": "active"}, headers=admin_auth_headers
    )
    assert response.json()["status"] == "approved"
