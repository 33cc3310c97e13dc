# tests/test_tasks.py

from datetime import timedelta
from unittest.mock import MagicMock

from httpx import AsyncClient

from foodconnect.models.notification import Notification
from foodconnect.services import maintenance
from foodconnect.tasks_registry import TASKS
from foodconnect.utils.dates import utcnow
from tests.conftest import create_campaign


def test_close_expired_campaigns_task(session_factory, db_session, restaurant_user):
    expired = create_campaign(db_session, restaurant_user, deadline=utcnow() - timedelta(hours=1))
    draft = create_campaign(db_session, restaurant_user, status="draft", deadline=utcnow() - timedelta(hours=1))
    running = create_campaign(db_session, restaurant_user)

    maintenance.close_expired_campaigns_task()

    db_session.expire_all()
    assert expired.status == "closed"
    assert draft.status == "draft"
    assert running.status == "published"


def test_cleanup_old_notifications_task(session_factory, db_session, influencer_user):
    now = utcnow()
    rows = {
        "read_old": Notification(user_id=influencer_user.id, type="system", title="a", is_read=True,
                                 created_at=now - timedelta(days=31)),
        "unread_old": Notification(user_id=influencer_user.id, type="system", title="b", is_read=False,
                                   created_at=now - timedelta(days=31)),
        "ancient": Notification(user_id=influencer_user.id, type="system", title="c", is_read=False,
                                created_at=now - timedelta(days=91)),
        "read_recent": Notification(user_id=influencer_user.id, type="system", title="d", is_read=True,
                                    created_at=now - timedelta(days=2)),
    }
    db_session.add_all(rows.values())
    db_session.commit()

    maintenance.cleanup_old_notifications_task()

    db_session.expire_all()
    remaining = {n.title for n in db_session.query(Notification).all()}
    assert remaining == {"b", "d"}


def test_purge_expired_tokens_task(session_factory, db_session, influencer_user, restaurant_user):
    influencer_user.password_reset_token = "stale"
    influencer_user.password_reset_expires = utcnow() - timedelta(minutes=5)
    restaurant_user.email_verification_token = "fresh"
    restaurant_user.email_verification_expires = utcnow() + timedelta(hours=5)
    db_session.commit()

    maintenance.purge_expired_tokens_task()

    db_session.expire_all()
    assert influencer_user.password_reset_token is None
    assert restaurant_user.email_verification_token == "fresh"


async def test_get_tasks_list(client: AsyncClient, admin_auth_headers: dict):
    response = await client.get("/api/v1/admin/tasks", headers=admin_auth_headers)

    assert response.status_code == 200
    assert {task["task_name"] for task in response.json()} == set(TASKS)


async def test_run_single_task(client: AsyncClient, admin_auth_headers: dict, mocker):
    mock_task = MagicMock()
    mocker.patch.dict(TASKS["purge_expired_tokens"], {"function": mock_task})

    response = await client.post(
        "/api/v1/admin/tasks/run", json={"task_name": "purge_expired_tokens"}, headers=admin_auth_headers
    )

    assert response.status_code == 202
    assert response.json()["status"] == "accepted"
    mock_task.assert_called_once()


async def test_run_all_tasks(client: AsyncClient, admin_auth_headers: dict, mocker):
    mocks = {}
    for name in TASKS:
        mocks[name] = MagicMock()
        mocker.patch.dict(TASKS[name], {"function": mocks[name]})

    response = await client.post("/api/v1/admin/tasks/run", json={"task_name": "all"}, headers=admin_auth_headers)

    assert response.status_code == 202
    for mock_task in mocks.values():
        mock_task.assert_called_once()


async def test_run_unknown_task(client: AsyncClient, admin_auth_headers: dict):
    response = await client.post("/api/v1/admin/tasks/run", json={"task_name": "reboot"}, headers=admin_auth_headers)
    assert response.status_code == 422


async def test_health(client: AsyncClient):
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json()["database"] == "connected"
