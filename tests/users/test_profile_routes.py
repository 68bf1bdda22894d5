from __future__ import annotations


def test_requires_login(client):
    resp = client.get("/api/profile")
    assert resp.status_code == 401
    assert resp.get_json() == {"success": False, "error": "로그인이 필요합니다"}


def test_login_then_profile(client, login):
    login()
    body = client.get("/api/profile").get_json()
    assert body["success"] is True
    assert body["profile"]["email"] == "a@example.com"
    assert "password_hash" not in body["profile"]


def test_login_failure_is_401_json(client):
    resp = client.post("/api/auth/login", json={"email": "a@example.com", "password": "bad"})
    assert resp.status_code == 401
    assert resp.get_json()["success"] is False


def test_signup_starts_session(client):
    resp = client.post(
        "/api/auth/signup",
        json={"email": "fresh@example.com", "password": "abcdef", "accept_code": "abc123"},
    )
    assert resp.status_code == 201
    assert resp.get_json()["user"]["company_id"] == "company-1"
    assert client.get("/api/auth/me").get_json()["user"]["email"] == "fresh@example.com"


def test_signup_invalid_code_message(client):
    resp = client.post(
        "/api/auth/signup",
        json={"email": "fresh@example.com", "password": "abcdef", "accept_code": "nope"},
    )
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "유효하지 않은 회사 코드입니다."


def test_patch_profile_and_work_settings(client, login):
    login()
    resp = client.patch("/api/profile", json={"full_name": "박민수"})
    assert resp.get_json()["profile"]["full_name"] == "박민수"

    resp = client.put(
        "/api/profile/work-settings",
        json={"weekly_work_hours": 30, "weekly_work_start": "월", "weekly_work_end": "목"},
    )
    assert resp.status_code == 200
    assert client.get("/api/profile/work-settings").get_json()["settings"]["weekly_work_hours"] == 30


def test_logout_clears_session(client, login):
    login()
    client.post("/api/auth/logout")
    assert client.get("/api/profile").status_code == 401


def test_password_mismatch_is_400(client, login):
    login()
    resp = client.post("/api/auth/password", json={"new_password": "abcdef", "confirm_password": "abcdeg"})
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "비밀번호가 일치하지 않습니다."


def test_unknown_route_is_json_404(client):
    resp = client.get("/api/does-not-exist")
    assert resp.status_code == 404
    assert resp.get_json()["success"] is False
