from datetime import timedelta
from uuid import uuid4

from conftest import OWNER, RECIPIENT, STRANGER

from domain.entities.common import utcnow
from infrastructure.models.note_orm import NoteORM


def create_note(client, **payload):
    payload.setdefault("title", "Groceries")
    response = client.post("/api/notes", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


def share_with_recipient(client, note_id):
    response = client.post(
        f"/api/notes/{note_id}/shares", json={"email": RECIPIENT.email}
    )
    assert response.status_code == 201, response.text
    return response.json()


def test_create_note_returns_detail(client, tags):
    body = create_note(
        client,
        title="  Groceries  ",
        content="For the weekend",
        cover_image_url="https://res.cloudinary.com/demo/cover.png",
        tag_ids=[str(tags["Work"])],
        checklist=["Milk", "   ", "Eggs"],
    )

    assert body["title"] == "Groceries"
    assert body["owner_id"] == str(OWNER.id)
    assert body["cover_image_url"] == "https://res.cloudinary.com/demo/cover.png"
    assert body["tag"]["name"] == "Work"
    assert [item["title"] for item in body["checklist"]] == ["Milk", "Eggs"]
    assert [item["order_index"] for item in body["checklist"]] == [0, 1]
    assert body["checklist_total"] == 2
    assert body["checklist_completed"] == 0
    assert body["is_owner"] is True
    assert body["can_edit"] is True


def test_create_note_with_blank_title_is_rejected(client):
    response = client.post("/api/notes", json={"title": "   "})

    assert response.status_code == 400
    assert response.json() == {"detail": "Note title is required"}


def test_create_note_with_two_tags_is_rejected(client, tags):
    response = client.post(
        "/api/notes",
        json={"title": "Plan", "tag_ids": [str(tags["Work"]), str(tags["Ideas"])]},
    )

    assert response.status_code == 400
    assert response.json() == {"detail": "Only one tag can be assigned"}


def test_duplicate_tag_ids_collapse_to_one(client, tags):
    body = create_note(client, tag_ids=[str(tags["Ideas"]), str(tags["Ideas"])])

    assert body["tag"]["name"] == "Ideas"


def test_create_note_with_unknown_tag_is_not_found(client):
    response = client.post("/api/notes", json={"title": "Plan", "tag_ids": [str(uuid4())]})

    assert response.status_code == 404


def test_routes_require_a_session(client, session_state):
    session_state.user = None

    response = client.get("/api/notes")

    assert response.status_code == 401
    assert response.json() == {"detail": "Authentication required"}


def test_invalid_note_id_is_bad_request(client):
    response = client.get("/api/notes/not-a-uuid")

    assert response.status_code == 400
    assert response.json() == {"detail": "Invalid UUID format: not-a-uuid"}


def test_note_is_hidden_from_other_users(client, session_state):
    note = create_note(client)

    session_state.user = STRANGER
    response = client.get(f"/api/notes/{note['id']}")

    assert response.status_code == 404


def test_recipient_can_read_and_edit_but_not_delete(client, session_state):
    note = create_note(client, content="original")
    share_with_recipient(client, note["id"])

    session_state.user = RECIPIENT
    detail = client.get(f"/api/notes/{note['id']}")
    assert detail.status_code == 200
    assert detail.json()["is_owner"] is False
    assert detail.json()["can_edit"] is True

    updated = client.put(
        f"/api/notes/{note['id']}",
        json={"title": "Groceries", "content": "edited by recipient"},
    )
    assert updated.status_code == 200
    assert updated.json()["content"] == "edited by recipient"

    deleted = client.delete(f"/api/notes/{note['id']}")
    assert deleted.status_code == 403
    assert deleted.json() == {"detail": "Only the owner can delete this note"}


def test_update_note_refreshes_updated_at_and_keeps_tag(client, tags):
    note = create_note(client, tag_ids=[str(tags["Personal"])])

    response = client.put(
        f"/api/notes/{note['id']}",
        json={"title": "Groceries v2", "content": None},
    )

    body = response.json()
    assert response.status_code == 200
    assert body["title"] == "Groceries v2"
    assert body["tag"]["name"] == "Personal"
    assert body["updated_at"] >= note["updated_at"]


def test_update_note_with_blank_title_is_rejected(client):
    note = create_note(client)

    response = client.put(f"/api/notes/{note['id']}", json={"title": ""})

    assert response.status_code == 400


def test_owner_deletes_note(client):
    note = create_note(client, checklist=["Milk"])
    client.post(f"/api/notes/{note['id']}/images", json={"image_url": "https://img/1.png"})

    response = client.delete(f"/api/notes/{note['id']}")

    assert response.status_code == 204
    assert client.get(f"/api/notes/{note['id']}").status_code == 404


def test_dashboard_lists_unshared_notes_newest_first(client, db_session):
    now = utcnow()
    for title, age in [("Old", 3), ("Newest", 0), ("Middle", 1)]:
        db_session.add(
            NoteORM(
                title=title,
                user_id=OWNER.id,
                created_at=now - timedelta(days=age),
                updated_at=now - timedelta(days=age),
            )
        )
    db_session.add(NoteORM(title="Not mine", user_id=STRANGER.id))
    db_session.commit()

    response = client.get("/api/notes")

    assert response.status_code == 200
    assert [note["title"] for note in response.json()["notes"]] == [
        "Newest",
        "Middle",
        "Old",
    ]


def test_dashboard_excludes_notes_the_owner_has_shared(client):
    kept = create_note(client, title="Private")
    shared = create_note(client, title="Team plan")
    share_with_recipient(client, shared["id"])

    ids = [note["id"] for note in client.get("/api/notes").json()["notes"]]

    assert ids == [kept["id"]]


def test_dashboard_filters_titles_case_insensitively(client):
    create_note(client, title="Groceries")
    create_note(client, title="Holiday plan")

    response = client.get("/api/notes", params={"q": "GROC"})

    assert [note["title"] for note in response.json()["notes"]] == ["Groceries"]


def test_gallery_indices_are_never_compacted(client):
    note = create_note(client)
    first = client.post(
        f"/api/notes/{note['id']}/images", json={"image_url": "https://img/1.png"}
    ).json()
    client.post(f"/api/notes/{note['id']}/images", json={"image_url": "https://img/2.png"})

    first_id = first["images"][0]["id"]
    client.delete(f"/api/notes/{note['id']}/images/{first_id}")
    response = client.post(
        f"/api/notes/{note['id']}/images", json={"image_url": "https://img/3.png"}
    )

    images = response.json()["images"]
    assert response.status_code == 201
    assert [image["order_index"] for image in images] == [1, 2]
    assert [image["image_url"] for image in images] == [
        "https://img/2.png",
        "https://img/3.png",
    ]
    assert response.json()["image_count"] == 2


def test_deleting_unknown_image_is_not_found(client):
    note = create_note(client)

    response = client.delete(f"/api/notes/{note['id']}/images/{uuid4()}")

    assert response.status_code == 404


def test_checklist_add_toggle_and_delete(client):
    note = create_note(client, checklist=["Milk"])

    added = client.post(f"/api/notes/{note['id']}/checklist", json={"title": "Eggs"})
    assert added.status_code == 201
    items = added.json()["checklist"]
    assert [(item["title"], item["order_index"]) for item in items] == [
        ("Milk", 0),
        ("Eggs", 1),
    ]

    milk_id = items[0]["id"]
    toggled = client.post(f"/api/notes/{note['id']}/checklist/{milk_id}/toggle")
    assert toggled.status_code == 200
    assert toggled.json()["checklist"][0]["completed"] is True
    assert toggled.json()["checklist_completed"] == 1

    removed = client.delete(f"/api/notes/{note['id']}/checklist/{milk_id}")
    assert removed.status_code == 200
    assert [item["title"] for item in removed.json()["checklist"]] == ["Eggs"]


def test_blank_checklist_item_is_rejected(client):
    note = create_note(client)

    response = client.post(f"/api/notes/{note['id']}/checklist", json={"title": " "})

    assert response.status_code == 400
    assert response.json() == {"detail": "Checklist item title cannot be empty"}


def test_replace_and_clear_note_tag(client, tags):
    note = create_note(client, tag_ids=[str(tags["Work"])])

    replaced = client.put(
        f"/api/notes/{note['id']}/tags", json={"tag_ids": [str(tags["Ideas"])]}
    )
    assert replaced.status_code == 200
    assert replaced.json()["tag"]["name"] == "Ideas"

    cleared = client.put(f"/api/notes/{note['id']}/tags", json={"tag_ids": []})
    assert cleared.status_code == 200
    assert cleared.json()["tag"] is None


def test_stranger_cannot_change_sub_items(client, session_state):
    note = create_note(client)

    session_state.user = STRANGER
    response = client.post(f"/api/notes/{note['id']}/checklist", json={"title": "Hack"})

    assert response.status_code == 404
