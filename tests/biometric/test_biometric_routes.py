from __future__ import annotations

import json

from src.groupware.groupware.biometric.service import b64url_encode


def _client_data(type_: str, challenge) -> str:
    payload = {"type": type_, "challenge": b64url_encode(bytes(challenge))}
    return b64url_encode(json.dumps(payload).encode("utf-8"))


def test_register_then_biometric_login(client, login):
    login()
    options = client.post("/api/biometric/register", json={"userId": "user-a", "email": "a@example.com"}).get_json()
    resp = client.put(
        "/api/biometric/register",
        json={
            "userId": "user-a",
            "credential": {
                "id": "cred-route",
                "publicKey": [4, 5, 6],
                "response": {"clientDataJSON": _client_data("webauthn.create", options["challenge"])},
            },
        },
    )
    assert resp.status_code == 200, resp.get_json()
    client.post("/api/auth/logout")

    auth_options = client.post("/api/biometric/authenticate").get_json()
    assert auth_options["rpId"] == "localhost"
    resp = client.put(
        "/api/biometric/authenticate",
        json={
            "assertion": {
                "id": "cred-route",
                "response": {"clientDataJSON": _client_data("webauthn.get", auth_options["challenge"])},
            }
        },
    )
    assert resp.status_code == 200, resp.get_json()
    assert client.get("/api/auth/me").get_json()["user"]["user_id"] == "user-a"


def test_register_for_someone_else_forbidden(client, login):
    login()
    resp = client.post("/api/biometric/register", json={"userId": "admin-1", "email": "admin@example.com"})
    assert resp.status_code == 403


def test_register_options_missing_fields(client, login):
    login()
    resp = client.post("/api/biometric/register", json={"userId": "user-a"})
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "필수 데이터가 누락되었습니다"


def test_authenticate_unknown_credential_is_401(client):
    resp = client.put("/api/biometric/authenticate", json={"assertion": {"id": "nobody"}})
    assert resp.status_code == 401
    assert resp.get_json()["error"] == "등록되지 않은 생체 인식입니다"


def test_authenticate_without_assertion_is_400(client):
    assert client.put("/api/biometric/authenticate", json={}).status_code == 400


def test_unregister(client, login):
    login()
    client.put("/api/biometric/register", json={"userId": "user-a", "credential": {"id": "c", "publicKey": "k"}})
    body = client.delete("/api/biometric/unregister").get_json()
    assert body["removed"] == 1
    assert client.get("/api/biometric/credentials").get_json()["registered"] is False


def test_authenticate_with_bare_credential_id_is_401(client, repos):
    repos.biometric_credentials.create_credential(user_id="user-a", credential_id="cred-x", public_key="k", sign_count=0)

    resp = client.put("/api/biometric/authenticate", json={"assertion": {"id": "cred-x"}})
    assert resp.status_code == 401
    assert resp.get_json()["success"] is False
    assert client.get("/api/auth/me").status_code == 401


def test_authenticate_without_issued_challenge_is_401(client, repos):
    repos.biometric_credentials.create_credential(user_id="user-a", credential_id="cred-x", public_key="k", sign_count=0)

    resp = client.put(
        "/api/biometric/authenticate",
        json={"assertion": {"id": "cred-x", "response": {"clientDataJSON": _client_data("webauthn.get", range(32))}}},
    )
    assert resp.status_code == 401
    assert client.get("/api/auth/me").status_code == 401


def test_authenticate_with_malformed_client_data_is_401(client, repos):
    repos.biometric_credentials.create_credential(user_id="user-a", credential_id="cred-x", public_key="k", sign_count=0)
    client.post("/api/biometric/authenticate")

    resp = client.put(
        "/api/biometric/authenticate",
        json={"assertion": {"id": "cred-x", "response": {"clientDataJSON": b64url_encode(b"[1, 2]")}}},
    )
    assert resp.status_code == 401
