from datetime import timedelta
from uuid import uuid4

import pytest
from conftest import OWNER, STRANGER

from domain.entities.common import utcnow
from infrastructure.models.user_task_orm import UserTaskORM


def create_task(client, **payload):
    payload.setdefault("title", "Move out")
    response = client.post("/api/tasks", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


def test_create_task_with_checklist(client, tags):
    body = create_task(
        client,
        description="Before June",
        tag_ids=[str(tags["Personal"])],
        checklist=["Boxes", "  ", "Van"],
    )

    assert body["completed"] is False
    assert body["order_index"] == 0
    assert body["tag"]["name"] == "Personal"
    assert [(item["title"], item["order_index"]) for item in body["checklist"]] == [
        ("Boxes", 0),
        ("Van", 1),
    ]
    assert body["total_items"] == 2
    assert body["completed_items"] == 0
    assert body["progress"] == 0


def test_create_task_requires_a_title(client):
    response = client.post("/api/tasks", json={"title": ""})

    assert response.status_code == 400
    assert response.json() == {"detail": "Task title is required"}


def test_progress_follows_checklist(client):
    task = create_task(client, checklist=["Boxes", "Van", "Keys"])
    boxes_id = task["checklist"][0]["id"]

    toggled = client.post(f"/api/tasks/{task['id']}/checklist/{boxes_id}/toggle")

    assert toggled.status_code == 200
    assert toggled.json()["completed_items"] == 1
    assert toggled.json()["progress"] == 33


def test_task_without_items_has_zero_progress(client):
    task = create_task(client)

    assert task["progress"] == 0
    assert task["total_items"] == 0


def test_list_reports_total_progress(client):
    done = create_task(client, title="Done", checklist=["One"])
    client.post(f"/api/tasks/{done['id']}/checklist/{done['checklist'][0]['id']}/toggle")
    create_task(client, title="Half", checklist=["One", "Two"])
    create_task(client, title="Empty")

    body = client.get("/api/tasks").json()

    assert len(body["tasks"]) == 3
    # (100 + 0 + 0) / 3
    assert body["total_progress"] == 33


def test_list_searches_title_and_description(client):
    create_task(client, title="Move out", description="Call the VAN company")
    create_task(client, title="Vanilla cake")
    create_task(client, title="Taxes")

    response = client.get("/api/tasks", params={"q": "van"})

    assert sorted(task["title"] for task in response.json()["tasks"]) == [
        "Move out",
        "Vanilla cake",
    ]


def test_list_is_newest_first_and_owner_only(client, db_session):
    now = utcnow()
    for title, age in [("Older", 2), ("Newer", 0)]:
        db_session.add(
            UserTaskORM(
                user_id=OWNER.id,
                title=title,
                created_at=now - timedelta(days=age),
                updated_at=now - timedelta(days=age),
            )
        )
    db_session.add(UserTaskORM(user_id=STRANGER.id, title="Not mine"))
    db_session.commit()

    response = client.get("/api/tasks")

    assert [task["title"] for task in response.json()["tasks"]] == ["Newer", "Older"]


@pytest.mark.parametrize(
    "window, expected",
    [
        ("all", ["Now", "Six weeks ago", "Last year"]),
        ("week", ["Now"]),
        ("month", ["Now"]),
        ("year", ["Now", "Six weeks ago"]),
    ],
)
def test_list_filters_by_creation_date(client, db_session, window, expected):
    now = utcnow()
    for title, age in [("Now", 0), ("Six weeks ago", 42), ("Last year", 400)]:
        db_session.add(
            UserTaskORM(
                user_id=OWNER.id,
                title=title,
                created_at=now - timedelta(days=age),
                updated_at=now - timedelta(days=age),
            )
        )
    db_session.commit()

    response = client.get("/api/tasks", params={"date": window})

    assert response.status_code == 200
    assert [task["title"] for task in response.json()["tasks"]] == expected


def test_unknown_date_window_is_rejected(client):
    response = client.get("/api/tasks", params={"date": "decade"})

    assert response.status_code == 400
    assert response.json() == {"detail": "Invalid date parameter."}


def test_tasks_of_other_users_are_not_found(client, session_state):
    task = create_task(client)

    session_state.user = STRANGER

    assert client.get(f"/api/tasks/{task['id']}").status_code == 404
    assert client.delete(f"/api/tasks/{task['id']}").status_code == 404


def test_update_task(client, tags):
    task = create_task(client, tag_ids=[str(tags["Work"])])

    response = client.put(
        f"/api/tasks/{task['id']}",
        json={"title": "Move in", "description": "New flat", "tag_ids": []},
    )

    body = response.json()
    assert response.status_code == 200
    assert body["title"] == "Move in"
    assert body["description"] == "New flat"
    assert body["tag"] is None


def test_delete_task(client):
    task = create_task(client, checklist=["Boxes"])

    assert client.delete(f"/api/tasks/{task['id']}").status_code == 204
    assert client.get(f"/api/tasks/{task['id']}").status_code == 404


def test_task_checklist_add_and_delete(client):
    task = create_task(client, checklist=["Boxes"])

    added = client.post(f"/api/tasks/{task['id']}/checklist", json={"title": "Keys"})
    assert added.status_code == 201
    assert [item["order_index"] for item in added.json()["checklist"]] == [0, 1]

    boxes_id = added.json()["checklist"][0]["id"]
    removed = client.delete(f"/api/tasks/{task['id']}/checklist/{boxes_id}")
    assert removed.status_code == 200
    assert [item["title"] for item in removed.json()["checklist"]] == ["Keys"]

    missing = client.post(f"/api/tasks/{task['id']}/checklist/{uuid4()}/toggle")
    assert missing.status_code == 404
