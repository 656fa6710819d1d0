def test_health_check(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "service": "noty-app"}


def test_health_check_does_not_need_a_session(client, session_state):
    session_state.user = None

    assert client.get("/health").status_code == 200
