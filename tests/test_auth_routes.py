from app.core.security import create_access_token


def register(client, **overrides):
    payload = {"email": "new@example.com", "username": "newhost", "name": "New Host", "password": "s3cret-pass"}
    payload.update(overrides)
    return client.post("/users/register", json=payload)


def test_register_login_and_me(client):
    created = register(client)
    assert created.status_code == 201
    assert "password" not in created.json()
    assert "hashed_password" not in created.json()

    login = client.post("/auth/login", json={"email": "new@example.com", "password": "s3cret-pass"})
    assert login.status_code == 200
    token = login.json()["token"]

    me = client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert me.status_code == 200
    assert me.json()["username"] == "newhost"


def test_duplicate_email_or_username_is_rejected(client):
    assert register(client).status_code == 201
    assert register(client, username="other").status_code == 400
    assert register(client, email="other@example.com").status_code == 400


def test_wrong_password_is_401(client):
    register(client)
    response = client.post("/auth/login", json={"email": "new@example.com", "password": "nope"})
    assert response.status_code == 401


def test_invalid_token_is_401(client):
    response = client.get("/auth/me", headers={"Authorization": "Bearer not-a-token"})
    assert response.status_code == 401


def test_token_for_unknown_account_is_401(client):
    token = create_access_token({"sub": "gone@example.com"})
    response = client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401


def test_login_ignores_email_case(client):
    register(client, email="Mixed@Example.com")
    response = client.post("/auth/login", json={"email": "mixed@example.com", "password": "s3cret-pass"})
    assert response.status_code == 200
    assert response.json()["token_type"] == "bearer"
    assert response.json()["user"]["email"] == "mixed@example.com"


def test_short_password_is_rejected(client):
    response = register(client, password="short")
    assert response.status_code == 400
    assert response.json()["error"] == "input_error"
