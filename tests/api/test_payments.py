# tests/api/test_payments.py

import csv
import io

import pytest
from httpx import AsyncClient

from foodconnect.models.notification import Notification
from foodconnect.services.payment import calculate_fee
from tests.conftest import auth_headers, create_restaurant_user


@pytest.mark.parametrize(
    "amount, percentage, fee, net",
    [
        (1000, 15, 150.0, 850.0),
        (99.99, 15, 15.0, 84.99),
        (10, 0, 0.0, 10.0),
        (200, 12.5, 25.0, 175.0),
    ],
)
def test_calculate_fee(amount, percentage, fee, net):
    breakdown = calculate_fee(amount, percentage)
    assert breakdown.platform_fee == fee
    assert breakdown.net_amount == net
    assert breakdown.platform_fee + breakdown.net_amount == pytest.approx(amount)


@pytest.fixture
async def payment(client, campaign, influencer_user, restaurant_auth_headers):
    response = await client.post(
        "/api/v1/payments",
        json={"campaign_id": campaign.id, "influencer_id": influencer_user.influencer.id, "amount": 400},
        headers=restaurant_auth_headers,
    )
    assert response.status_code == 201
    return response.json()["payment"]


async def process(client, payment_id, action, headers, **extra):
    return await client.post(
        f"/api/v1/admin/payments/{payment_id}/process", json={"action": action, **extra}, headers=headers
    )


async def test_create_payment_returns_breakdown(client: AsyncClient, campaign, influencer_user, restaurant_auth_headers):
    response = await client.post(
        "/api/v1/payments",
        json={"campaign_id": campaign.id, "influencer_id": influencer_user.influencer.id, "amount": 400},
        headers=restaurant_auth_headers,
    )

    assert response.status_code == 201
    data = response.json()
    assert data["payment"]["status"] == "pending"
    assert data["fee_breakdown"] == {
        "amount": 400.0,
        "platform_fee_percentage": 15.0,
        "platform_fee": 60.0,
        "net_amount": 340.0,
    }
    assert data["next_steps"][0] == "Transfer RM 400.00 to admin account"


async def test_create_payment_twice(client: AsyncClient, payment, campaign, influencer_user, restaurant_auth_headers):
    response = await client.post(
        "/api/v1/payments",
        json={"campaign_id": campaign.id, "influencer_id": influencer_user.influencer.id, "amount": 100},
        headers=restaurant_auth_headers,
    )
    assert response.status_code == 400


async def test_create_payment_below_minimum(client: AsyncClient, campaign, influencer_user, restaurant_auth_headers):
    response = await client.post(
        "/api/v1/payments",
        json={"campaign_id": campaign.id, "influencer_id": influencer_user.influencer.id, "amount": 5},
        headers=restaurant_auth_headers,
    )
    assert response.status_code == 400


async def test_create_payment_for_foreign_campaign(client: AsyncClient, db_session, campaign, influencer_user):
    other = create_restaurant_user(db_session, email="other@example.com", business_name="Other")
    response = await client.post(
        "/api/v1/payments",
        json={"campaign_id": campaign.id, "influencer_id": influencer_user.influencer.id, "amount": 100},
        headers=auth_headers(other),
    )
    assert response.status_code == 403


async def test_escrow_lifecycle(
    client: AsyncClient, db_session, payment, influencer_user, influencer_auth_headers, admin_auth_headers
):
    # Steps must follow the order pending -> received -> held -> released
    response = await process(client, payment["id"], "release_payment", admin_auth_headers)
    assert response.status_code == 400

    response = await process(client, payment["id"], "confirm_received", admin_auth_headers, transaction_reference="TNG-123")
    assert response.json()["status"] == "received"
    assert response.json()["transaction_reference"] == "TNG-123"

    influencer_view = await client.get("/api/v1/payments/influencer", headers=influencer_auth_headers)
    assert influencer_view.json()["summary"]["pending_earnings"] == 340.0

    response = await process(client, payment["id"], "hold_payment", admin_auth_headers)
    assert response.json()["status"] == "held"

    response = await process(client, payment["id"], "release_payment", admin_auth_headers, admin_notes="Content posted")
    assert response.status_code == 200
    assert response.json()["status"] == "released"

    notification = db_session.query(Notification).filter(Notification.user_id == influencer_user.id).one()
    assert notification.type == "payment_released"

    summary = (await client.get("/api/v1/payments/influencer", headers=influencer_auth_headers)).json()["summary"]
    assert summary == {"total_earned": 340.0, "pending_earnings": 0.0, "completed_campaigns": 1}

    # Released payments cannot be cancelled
    response = await process(client, payment["id"], "cancel_payment", admin_auth_headers)
    assert response.status_code == 400


async def test_cancel_excludes_from_totals(
    client: AsyncClient, db_session, payment, restaurant_user, restaurant_auth_headers, admin_auth_headers
):
    response = await process(client, payment["id"], "cancel_payment", admin_auth_headers, admin_notes="Duplicate")
    assert response.json()["status"] == "cancelled"

    notification = db_session.query(Notification).filter(Notification.user_id == restaurant_user.id).one()
    assert notification.type == "payment_cancelled"

    data = (await client.get("/api/v1/payments/restaurant", headers=restaurant_auth_headers)).json()
    assert data["total_items"] == 1
    assert data["summary"] == {"total_paid": 0.0, "total_fees": 0.0, "pending_count": 0}

    stats = (await client.get("/api/v1/admin/payments/stats", headers=admin_auth_headers)).json()
    assert stats["by_status"] == {"cancelled": 1}
    assert stats["total_amount"] == 0.0
    assert stats["average_payment"] == 0.0


async def test_touch_n_go_confirms_pending_payment(client: AsyncClient, payment, restaurant_auth_headers):
    response = await client.post(
        f"/api/v1/payments/{payment['id']}/touch-n-go", json={"phone_number": "+60123456789"}, headers=restaurant_auth_headers
    )

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "received"
    assert data["transaction_reference"].startswith("TNG_")

    again = await client.post(f"/api/v1/payments/{payment['id']}/touch-n-go", json={}, headers=restaurant_auth_headers)
    assert again.status_code == 400


async def test_payment_detail_access(
    client: AsyncClient, db_session, payment, influencer_auth_headers, restaurant_auth_headers
):
    response = await client.get(f"/api/v1/payments/{payment['id']}", headers=influencer_auth_headers)
    assert response.status_code == 200
    assert response.json()["status_label"] == "Pending Payment"

    outsider = create_restaurant_user(db_session, email="outsider@example.com", business_name="Outsider")
    response = await client.get(f"/api/v1/payments/{payment['id']}", headers=auth_headers(outsider))
    assert response.status_code == 403


async def test_calculate_uses_platform_setting(client: AsyncClient, admin_auth_headers, restaurant_auth_headers):
    await client.put("/api/v1/admin/settings", json={"platform_fee_percentage": 10}, headers=admin_auth_headers)

    response = await client.post("/api/v1/payments/calculate", json={"amount": 250}, headers=restaurant_auth_headers)

    assert response.status_code == 200
    assert response.json() == {
        "amount": 250.0,
        "platform_fee_percentage": 10.0,
        "platform_fee": 25.0,
        "net_amount": 225.0,
    }


async def test_instructions_and_workflow(client: AsyncClient, restaurant_auth_headers):
    instructions = (await client.get("/api/v1/payments/instructions", headers=restaurant_auth_headers)).json()
    assert instructions["payment_methods"][0]["name"] == "Touch 'n Go eWallet"
    assert len(instructions["workflow"]) == 8

    workflow = (await client.get("/api/v1/payments/workflow")).json()
    assert [step["status"] for step in workflow["workflow"]] == ["pending", "received", "held", "released"]


async def test_report_json_and_csv(client: AsyncClient, payment, admin_auth_headers):
    report = (await client.get("/api/v1/admin/payments/report", headers=admin_auth_headers)).json()
    assert report["total_payments"] == 1
    assert report["total_platform_fees"] == 60.0

    response = await client.get("/api/v1/admin/payments/report?format=csv", headers=admin_auth_headers)
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    assert "attachment" in response.headers["content-disposition"]

    rows = list(csv.reader(io.StringIO(response.text)))
    assert rows[0][0] == "Payment ID"
    assert rows[1][4:7] == ["400.00", "60.00", "340.00"]


async def test_pending_payments_for_admin(client: AsyncClient, payment, admin_auth_headers, restaurant_auth_headers):
    response = await client.get("/api/v1/admin/payments/pending", headers=admin_auth_headers)
    assert response.json()["total_items"] == 1

    forbidden = await client.get("/api/v1/admin/payments/pending", headers=restaurant_auth_headers)
    assert forbidden.status_code == 403
