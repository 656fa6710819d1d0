from conftest import OWNER, RECIPIENT, STRANGER


def create_note(client, title="Team plan"):
    response = client.post("/api/notes", json={"title": title})
    assert response.status_code == 201, response.text
    return response.json()


def test_share_with_registered_user_stores_user_id(client):
    note = create_note(client)

    response = client.post(
        f"/api/notes/{note['id']}/shares", json={"email": "  Recipient@Example.com "}
    )

    body = response.json()
    assert response.status_code == 201
    assert body["shared_with_email"] == RECIPIENT.email
    assert body["shared_with_user_id"] == str(RECIPIENT.id)
    assert body["owner_id"] == str(OWNER.id)
    assert body["can_edit"] is True


def test_share_with_unknown_email_is_matched_by_email_later(client, session_state):
    note = create_note(client)

    response = client.post(
        f"/api/notes/{note['id']}/shares", json={"email": STRANGER.email}
    )
    assert response.status_code == 201
    assert response.json()["shared_with_user_id"] is None

    session_state.user = STRANGER
    shared = client.get("/api/shared").json()["notes"]
    assert [item["id"] for item in shared] == [note["id"]]
    assert client.get(f"/api/notes/{note['id']}").status_code == 200


def test_duplicate_share_is_a_conflict(client):
    note = create_note(client)
    client.post(f"/api/notes/{note['id']}/shares", json={"email": RECIPIENT.email})

    response = client.post(
        f"/api/notes/{note['id']}/shares", json={"email": "RECIPIENT@example.com"}
    )

    assert response.status_code == 409
    assert response.json() == {"detail": "This note is already shared with that user"}


def test_sharing_with_oneself_is_rejected(client):
    note = create_note(client)

    response = client.post(f"/api/notes/{note['id']}/shares", json={"email": OWNER.email})

    assert response.status_code == 400
    assert response.json() == {"detail": "You cannot share a note with yourself"}


def test_invalid_email_is_rejected(client):
    note = create_note(client)

    response = client.post(f"/api/notes/{note['id']}/shares", json={"email": "nobody"})

    assert response.status_code == 400
    assert response.json() == {"detail": "A valid email address is required"}


def test_only_the_owner_manages_shares(client, session_state):
    note = create_note(client)
    client.post(f"/api/notes/{note['id']}/shares", json={"email": RECIPIENT.email})

    session_state.user = RECIPIENT
    reshare = client.post(
        f"/api/notes/{note['id']}/shares", json={"email": STRANGER.email}
    )
    listing = client.get(f"/api/notes/{note['id']}/shares")

    assert reshare.status_code == 403
    assert listing.status_code == 403


def test_list_and_revoke_shares(client, session_state):
    note = create_note(client)
    share = client.post(
        f"/api/notes/{note['id']}/shares", json={"email": RECIPIENT.email}
    ).json()

    listing = client.get(f"/api/notes/{note['id']}/shares")
    assert listing.status_code == 200
    assert listing.json()["note_id"] == note["id"]
    assert [item["id"] for item in listing.json()["shares"]] == [share["id"]]

    revoked = client.delete(f"/api/notes/{note['id']}/shares/{share['id']}")
    assert revoked.status_code == 204

    session_state.user = RECIPIENT
    assert client.get(f"/api/notes/{note['id']}").status_code == 404
    assert client.get("/api/shared").json()["notes"] == []


def test_revoking_unknown_share_is_not_found(client):
    note = create_note(client)

    response = client.delete(
        f"/api/notes/{note['id']}/shares/44444444-4444-4444-8444-444444444444"
    )

    assert response.status_code == 404


def test_shared_section_lists_each_note_once(client, session_state):
    note = create_note(client)
    client.post(f"/api/notes/{note['id']}/shares", json={"email": RECIPIENT.email})
    client.post(f"/api/notes/{note['id']}/shares", json={"email": STRANGER.email})
    create_note(client, title="Private")

    owner_view = client.get("/api/shared").json()["notes"]
    assert [item["id"] for item in owner_view] == [note["id"]]

    session_state.user = RECIPIENT
    recipient_view = client.get("/api/shared").json()["notes"]
    assert [item["title"] for item in recipient_view] == ["Team plan"]


def test_shared_section_filters_titles(client):
    for title in ["Team plan", "Trip budget"]:
        note = create_note(client, title=title)
        client.post(f"/api/notes/{note['id']}/shares", json={"email": RECIPIENT.email})

    response = client.get("/api/shared", params={"q": "trip"})

    assert [item["title"] for item in response.json()["notes"]] == ["Trip budget"]


def test_create_shared_note(client, session_state):
    response = client.post(
        "/api/shared",
        json={
            "title": "Trip plan",
            "content": "Day 1",
            "recipients": [
                {"email": RECIPIENT.email, "user_id": str(RECIPIENT.id)},
                {"email": STRANGER.email},
            ],
        },
    )

    body = response.json()
    assert response.status_code == 201
    assert body["note"]["title"] == "Trip plan"
    assert body["note"]["is_owner"] is True
    assert sorted(share["shared_with_email"] for share in body["shares"]) == [
        RECIPIENT.email,
        STRANGER.email,
    ]

    session_state.user = RECIPIENT
    assert [item["id"] for item in client.get("/api/shared").json()["notes"]] == [
        body["note"]["id"]
    ]


def test_create_shared_note_requires_a_recipient(client):
    response = client.post("/api/shared", json={"title": "Trip plan", "recipients": []})

    assert response.status_code == 400
    assert response.json() == {"detail": "At least one recipient is required"}


def test_create_shared_note_collapses_repeated_recipients(client):
    response = client.post(
        "/api/shared",
        json={
            "title": "Trip plan",
            "recipients": [
                {"email": RECIPIENT.email, "user_id": str(RECIPIENT.id)},
                {"email": "recipient@EXAMPLE.com"},
            ],
        },
    )

    body = response.json()
    assert response.status_code == 201
    assert [share["shared_with_email"] for share in body["shares"]] == [RECIPIENT.email]
    assert body["shares"][0]["shared_with_user_id"] == str(RECIPIENT.id)
    assert client.get("/api/notes").json()["notes"] == []
