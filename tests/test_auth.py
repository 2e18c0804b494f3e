def test_admin_registers_and_user_logs_in(client, admin_headers) -> None:
    res = client.post("/api/auth/register", json={
        "username": "alice", "password": "pw123", "role": "TEACHER",
    }, headers=admin_headers)
    assert res.status_code == 201
    assert res.get_json()["data"]["role"] == "TEACHER"

    res = client.post("/api/auth/login", json={"username": "alice", "password": "pw123"})
    assert res.status_code == 200
    token = res.get_json()["data"]["access_token"]

    res = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert res.get_json()["data"]["username"] == "alice"
    assert res.get_json()["data"]["role"] == "TEACHER"


def test_register_requires_admin(client, teacher_headers) -> None:
    res = client.post("/api/auth/register", json={
        "username": "bob", "password": "pw", "role": "STUDENT",
    }, headers=teacher_headers)
    assert res.status_code == 403


def test_register_rejects_bad_role_and_duplicates(client, admin_headers) -> None:
    res = client.post("/api/auth/register", json={
        "username": "bob", "password": "pw", "role": "JANITOR",
    }, headers=admin_headers)
    assert res.status_code == 400
    assert res.get_json()["code"] == "INVALID_ROLE"

    res = client.post("/api/auth/register", json={
        "username": "student", "password": "pw", "role": "STUDENT",
    }, headers=admin_headers)
    assert res.status_code == 409
    assert res.get_json()["code"] == "USERNAME_TAKEN"


def test_login_failures(client, users) -> None:
    res = client.post("/api/auth/login", json={"username": "nobody", "password": "x"})
    assert res.status_code == 404

    res = client.post("/api/auth/login", json={"username": "student", "password": "wrong"})
    assert res.status_code == 401
    assert res.get_json()["code"] == "INVALID_CREDENTIALS"


def test_invalid_token(client) -> None:
    res = client.get("/api/auth/me", headers={"Authorization": "Bearer not-a-token"})
    assert res.status_code == 401
