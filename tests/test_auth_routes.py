"""Tests for the authentication endpoints."""


def test_register_login_verify_logout(client) -> None:
    response = client.post("/api/auth/register", json={
        "username": "dana", "email": "dana@example.kz", "password": "secret123"
    })
    assert response.status_code == 201

    response = client.post("/api/auth/login", json={"username": "dana", "password": "secret123"})
    assert response.status_code == 200
    headers = {"Authorization": f"Bearer {response.get_json()['token']}"}

    response = client.get("/api/auth/verify", headers=headers)
    assert response.get_json()["user"]["username"] == "dana"

    assert client.post("/api/auth/logout", headers=headers).status_code == 200
    assert client.get("/api/auth/verify", headers=headers).status_code == 401


def test_register_requires_body(client) -> None:
    response = client.post("/api/auth/register")
    assert response.status_code == 400
    assert response.get_json() == {"success": False, "error": "Request body is required"}


def test_login_failure(client, user_id) -> None:
    response = client.post("/api/auth/login", json={"username": "aigerim", "password": "nope-nope"})
    assert response.status_code == 401
    assert response.get_json()["error"] == "Invalid username or password"
