async def test_register(client):
    response = await client.post(
        "/api/auth/register",
        json={"username": "alice", "password": "secret123"},
    )
    assert response.status_code == 201
    data = response.json()
    assert data["username"] == "alice"
    assert "id" in data
    assert "password_hash" not in data


async def test_register_duplicate_username(client):
    payload = {"username": "alice", "password": "secret123"}
    await client.post("/api/auth/register", json=payload)

    response = await client.post("/api/auth/register", json=payload)
    assert response.status_code == 409


async def test_register_short_password(client):
    response = await client.post(
        "/api/auth/register",
        json={"username": "alice", "password": "123"},
    )
    assert response.status_code == 422


async def test_login(client):
    await client.post("/api/auth/register", json={"username": "alice", "password": "secret123"})
    response = await client.post(
        "/api/auth/login",
        json={"username": "alice", "password": "secret123"},
    )
    assert response.status_code == 200
    data = response.json()
    assert "access_token" in data
    assert data["token_type"] == "bearer"


async def test_login_wrong_password(client):
    await client.post("/api/auth/register", json={"username": "alice", "password": "secret123"})
    response = await client.post(
        "/api/auth/login",
        json={"username": "alice", "password": "wrong"},
    )
    assert response.status_code == 401


async def test_me(client, auth_headers):
    response = await client.get("/api/auth/me", headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["username"] == "testuser"


async def test_me_no_token(client):
    response = await client.get("/api/auth/me")
    assert response.status_code in (401, 403)


async def test_change_password(client, auth_headers):
    response = await client.patch(
        "/api/auth/password",
        json={"old_password": "secret123", "new_password": "changed123"},
        headers=auth_headers,
    )
    assert response.status_code == 200

    response = await client.post(
        "/api/auth/login",
        json={"username": "testuser", "password": "changed123"},
    )
    assert response.status_code == 200


async def test_change_password_wrong_old_password(client, auth_headers):
    response = await client.patch(
        "/api/auth/password",
        json={"old_password": "wrong", "new_password": "changed123"},
        headers=auth_headers,
    )
    assert response.status_code == 401
