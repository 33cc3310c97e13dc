# tests/api/test_messages.py

from httpx import AsyncClient

from foodconnect.services.message import conversation_id
from tests.conftest import auth_headers, create_application, create_campaign, create_influencer_user


def test_conversation_id_is_order_independent():
    assert conversation_id(7, 3) == conversation_id(3, 7) == "3-7"


async def send(client, headers, receiver_id, text, **extra):
    return await client.post(
        "/api/v1/messages", json={"receiver_id": receiver_id, "message": text, **extra}, headers=headers
    )


async def test_send_and_read_conversation(
    client: AsyncClient, restaurant_user, influencer_user, restaurant_auth_headers, influencer_auth_headers
):
    # 1. Influencer writes twice
    response = await send(client, influencer_auth_headers, restaurant_user.id, "Hi! Is Saturday okay?")
    assert response.status_code == 201
    assert response.json()["sender_name"] == "KL Foodie"
    await send(client, influencer_auth_headers, restaurant_user.id, "I can come at 7pm.")

    # 2. The restaurant has two unread messages
    response = await client.get("/api/v1/messages/unread-count", headers=restaurant_auth_headers)
    assert response.json() == {"unread_count": 2}

    conversations = (await client.get("/api/v1/messages/conversations", headers=restaurant_auth_headers)).json()
    assert len(conversations) == 1
    assert conversations[0]["unread_count"] == 2
    assert conversations[0]["last_message"]["message"] == "I can come at 7pm."
    assert conversations[0]["other_user"]["display_name"] == "KL Foodie"

    # 3. Opening the conversation marks everything read
    response = await client.get(
        f"/api/v1/messages/conversation/{influencer_user.id}", headers=restaurant_auth_headers
    )
    data = response.json()
    assert data["conversation_id"] == conversation_id(restaurant_user.id, influencer_user.id)
    assert [m["message"] for m in data["messages"]] == ["Hi! Is Saturday okay?", "I can come at 7pm."]
    assert all(m["status"] == "read" for m in data["messages"])

    response = await client.get("/api/v1/messages/unread-count", headers=restaurant_auth_headers)
    assert response.json() == {"unread_count": 0}


async def test_cannot_message_self_or_unknown(client: AsyncClient, restaurant_user, restaurant_auth_headers):
    response = await send(client, restaurant_auth_headers, restaurant_user.id, "Talking to myself")
    assert response.status_code == 400

    response = await send(client, restaurant_auth_headers, 9999, "Hello?")
    assert response.status_code == 404


async def test_empty_message_is_rejected(client: AsyncClient, influencer_user, restaurant_auth_headers):
    response = await send(client, restaurant_auth_headers, influencer_user.id, "   ")
    assert response.status_code == 422


async def test_cannot_message_pending_user(client: AsyncClient, db_session, restaurant_auth_headers):
    pending = create_influencer_user(db_session, email="pending@example.com", status="pending")
    response = await send(client, restaurant_auth_headers, pending.id, "Welcome!")
    assert response.status_code == 403


async def test_campaign_context_requires_involvement(
    client: AsyncClient, db_session, campaign, restaurant_user, influencer_user, influencer_auth_headers
):
    outsider = create_influencer_user(db_session, email="outsider@example.com", display_name="Outsider")

    # Neither side owns the campaign or applied to it
    response = await send(
        client, auth_headers(outsider), influencer_user.id, "About that campaign...", campaign_id=campaign.id
    )
    assert response.status_code == 403

    create_application(db_session, campaign, influencer_user)
    response = await send(
        client, influencer_auth_headers, restaurant_user.id, "Question about the brief", campaign_id=campaign.id
    )
    assert response.status_code == 201


async def test_start_conversation(client: AsyncClient, influencer_user, restaurant_auth_headers):
    response = await client.post(
        "/api/v1/messages/start",
        json={"user_id": influencer_user.id, "message": "Loved your last review!"},
        headers=restaurant_auth_headers,
    )
    assert response.status_code == 200
    data = response.json()
    assert data["other_user"]["user_type"] == "influencer"
    assert data["message"]["message"] == "Loved your last review!"

    response = await client.post(
        "/api/v1/messages/start", json={"user_id": influencer_user.id}, headers=restaurant_auth_headers
    )
    assert response.json()["message"] is None


async def test_search_and_delete(
    client: AsyncClient, restaurant_user, influencer_user, restaurant_auth_headers, influencer_auth_headers
):
    sent = (await send(client, restaurant_auth_headers, influencer_user.id, "Parking is behind the shop")).json()
    await send(client, restaurant_auth_headers, influencer_user.id, "See you soon")

    response = await client.get("/api/v1/messages/search?q=parking", headers=influencer_auth_headers)
    assert [m["id"] for m in response.json()] == [sent["id"]]

    response = await client.get("/api/v1/messages/search?q=p", headers=influencer_auth_headers)
    assert response.status_code == 400

    # Only the sender can delete
    response = await client.delete(f"/api/v1/messages/{sent['id']}", headers=influencer_auth_headers)
    assert response.status_code == 403
    response = await client.delete(f"/api/v1/messages/{sent['id']}", headers=restaurant_auth_headers)
    assert response.status_code == 204
    response = await client.delete(f"/api/v1/messages/{sent['id']}", headers=restaurant_auth_headers)
    assert response.status_code == 404


async def test_message_stats(client: AsyncClient, influencer_user, restaurant_auth_headers, influencer_auth_headers):
    await send(client, restaurant_auth_headers, influencer_user.id, "Hello there")

    stats = (await client.get("/api/v1/messages/stats", headers=influencer_auth_headers)).json()
    assert stats == {"total_conversations": 1, "unread_messages": 1, "active_conversations": 1}


async def test_contacts_come_from_applications(
    client: AsyncClient, db_session, restaurant_user, influencer_user, restaurant_auth_headers, influencer_auth_headers
):
    first = create_campaign(db_session, restaurant_user, title="First Campaign")
    second = create_campaign(db_session, restaurant_user, title="Second Campaign")
    create_application(db_session, first, influencer_user)
    create_application(db_session, second, influencer_user)

    restaurant_contacts = (await client.get("/api/v1/messages/contacts", headers=restaurant_auth_headers)).json()
    assert len(restaurant_contacts) == 1
    assert restaurant_contacts[0]["id"] == influencer_user.id

    influencer_contacts = (await client.get("/api/v1/messages/contacts", headers=influencer_auth_headers)).json()
    assert [c["display_name"] for c in influencer_contacts] == ["Nasi Lemak House"]

    filtered = await client.get("/api/v1/messages/contacts?search=zzz", headers=influencer_auth_headers)
    assert filtered.json() == []


async def test_campaign_thread_marks_only_its_messages_read(
    client: AsyncClient, db_session, restaurant_user, influencer_user, restaurant_auth_headers, influencer_auth_headers
):
    first = create_campaign(db_session, restaurant_user, title="First Campaign")
    second = create_campaign(db_session, restaurant_user, title="Second Campaign")
    await send(client, restaurant_auth_headers, influencer_user.id, "About the first one", campaign_id=first.id)
    await send(client, restaurant_auth_headers, influencer_user.id, "About the second one", campaign_id=second.id)

    response = await client.get(
        f"/api/v1/messages/conversation/{restaurant_user.id}?campaign_id={first.id}", headers=influencer_auth_headers
    )
    assert [m["message"] for m in response.json()["messages"]] == ["About the first one"]

    # The second campaign's message stays unread
    response = await client.get("/api/v1/messages/unread-count", headers=influencer_auth_headers)
    assert response.json() == {"unread_count": 1}

    response = await client.post(
        f"/api/v1/messages/conversation/{restaurant_user.id}/read?campaign_id={first.id}",
        headers=influencer_auth_headers,
    )
    assert response.json() == {"marked_read": 0}

    response = await client.post(
        f"/api/v1/messages/conversation/{restaurant_user.id}/read?campaign_id={second.id}",
        headers=influencer_auth_headers,
    )
    assert response.json() == {"marked_read": 1}
