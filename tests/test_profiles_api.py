from conftest import OWNER, RECIPIENT, STRANGER


def test_get_own_profile(client):
    response = client.get("/api/profile")

    assert response.status_code == 200
    assert response.json()["id"] == str(OWNER.id)
    assert response.json()["full_name"] == "Olivia Owner"


def test_missing_profile_is_not_found(client, session_state):
    session_state.user = STRANGER

    assert client.get("/api/profile").status_code == 404


def test_update_profile_returns_stored_values(client):
    response = client.put(
        "/api/profile",
        json={"full_name": "Olivia O.", "avatar_url": "https://img/avatar.png"},
    )

    assert response.status_code == 200
    assert response.json()["full_name"] == "Olivia O."
    assert response.json()["avatar_url"] == "https://img/avatar.png"
    assert client.get("/api/profile").json()["full_name"] == "Olivia O."


def test_short_queries_return_nothing(client):
    response = client.get("/api/profiles/search", params={"q": " ri "})

    assert response.status_code == 200
    assert response.json() == []


def test_search_matches_name_and_email_case_insensitively(client):
    by_name = client.get("/api/profiles/search", params={"q": "RILEY"}).json()
    by_email = client.get("/api/profiles/search", params={"q": "recipient@"}).json()

    assert [profile["id"] for profile in by_name] == [str(RECIPIENT.id)]
    assert [profile["email"] for profile in by_email] == [RECIPIENT.email]


def test_search_excludes_the_caller(client):
    response = client.get("/api/profiles/search", params={"q": "example.com"})

    assert [profile["email"] for profile in response.json()] == [RECIPIENT.email]
