from datetime import timedelta

from onboarding.core.config import settings
from onboarding.schemas.auth_schema import LAST_NAME_MAX_LENGTH


def sign_in(client, last_name, password):
    return client.post("/api/auth/sign-in", json={"lastName": last_name, "password": password})


def employee_payload(**overrides):
    payload = {
        "firstName": "Selam",
        "middleName": "",
        "lastName": "Haile",
        "nationalId": "ET-55501",
        "phone": "0912345678",
        "address": "Bole, Addis Ababa",
        "role": "USER",
    }
    payload.update(overrides)
    return payload


def test_sign_in_returns_token_and_sets_cookie(client, db):
    db.add_user("Abebe", password="Abebe@12341234", first_name="Lulit")

    response = sign_in(client, "Abebe", "Abebe@12341234")

    assert response.status_code == 200
    body = response.json()
    assert body["tokenType"] == "bearer"
    assert body["session"]["email"] == "abebe@dashenbank.com"
    assert body["session"]["role"] == "USER"
    assert "sessionId" not in body["session"]
    assert response.cookies.get(settings.SESSION_COOKIE_NAME) == body["token"]
    assert len(db.sessions) == 1


def test_sign_in_is_case_insensitive_on_last_name(client, db):
    db.add_user("Abebe", password="Abebe@12341234")
    assert sign_in(client, "abebe", "Abebe@12341234").status_code == 200


def test_wrong_password_is_unauthorized(client, db):
    db.add_user("Abebe", password="Abebe@12341234")

    response = sign_in(client, "Abebe", "wrong-password")

    assert response.status_code == 401
    assert response.json()["code"] == "UNAUTHORIZED"
    assert response.json()["error"] == "Invalid last name or password."
    assert not db.sessions


def test_unknown_last_name_is_unauthorized(client):
    assert sign_in(client, "Nobody", "whatever").status_code == 401


def test_banned_user_cannot_sign_in(client, db):
    db.add_user("Girma", role="BANNED", password="Girma@12341234")

    response = sign_in(client, "Girma", "Girma@12341234")

    assert response.status_code == 403
    assert response.json()["code"] == "FORBIDDEN"
    assert not db.sessions


def test_session_endpoint_with_bearer(client, staff, staff_headers):
    response = client.get("/api/session", headers=staff_headers)

    assert response.status_code == 200
    body = response.json()
    assert body["userId"] == staff["id"]
    assert body["name"] == "Dawit Tesfaye"
    assert body["role"] == "USER"


def test_session_endpoint_with_cookie(client, db):
    db.add_user("Abebe", password="Abebe@12341234")
    sign_in(client, "Abebe", "Abebe@12341234")

    response = client.get("/api/session")

    assert response.status_code == 200
    assert response.json()["email"] == "abebe@dashenbank.com"


def test_session_endpoint_without_credentials(client):
    response = client.get("/api/session")

    assert response.status_code == 401
    assert response.json() == {"error": "User not authenticated.", "code": "UNAUTHORIZED"}
    assert response.headers["WWW-Authenticate"] == "Bearer"


def test_garbage_token_is_no_session(client):
    response = client.get("/api/session", headers={"Authorization": "Bearer not-a-jwt"})
    assert response.status_code == 401


def test_expired_session_row_is_rejected_and_removed(client, db, staff):
    token = db.open_session(staff, expires_in=timedelta(seconds=-1))

    response = client.get("/api/session", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 401
    assert not db.sessions


def test_sign_out_revokes_the_session(client, db):
    db.add_user("Abebe", password="Abebe@12341234")
    token = sign_in(client, "Abebe", "Abebe@12341234").json()["token"]
    headers = {"Authorization": f"Bearer {token}"}

    response = client.post("/api/auth/sign-out", headers=headers)

    assert response.status_code == 200
    assert not db.sessions
    assert client.get("/api/session", headers=headers).status_code == 401


def test_sign_out_requires_session(client):
    assert client.post("/api/auth/sign-out").status_code == 401


def test_deleted_user_session_is_rejected(client, db, staff, staff_headers):
    del db.users[staff["id"]]
    assert client.get("/api/session", headers=staff_headers).status_code == 401


def test_admin_registers_employee_with_default_password(client, db, admin_headers):
    response = client.post("/api/auth/register", json=employee_payload(), headers=admin_headers)

    assert response.status_code == 201
    body = response.json()
    assert "Haile@12341234" not in body["message"]
    assert body["user"]["email"] == "haile@dashenbank.com"
    assert body["user"]["name"] == "Selam Haile"
    assert body["user"]["middleName"] is None
    assert body["user"]["role"] == "USER"
    assert "hashedPassword" not in body["user"]

    assert sign_in(client, "Haile", "Haile@12341234").status_code == 200


def test_register_requires_session(client):
    response = client.post("/api/auth/register", json=employee_payload())
    assert response.status_code == 401


def test_register_requires_admin(client, db, staff_headers):
    response = client.post("/api/auth/register", json=employee_payload(), headers=staff_headers)

    assert response.status_code == 403
    assert response.json()["code"] == "FORBIDDEN"
    assert all(u["last_name"] != "Haile" for u in db.users.values())


def test_register_duplicate_last_name(client, staff, admin_headers):
    response = client.post(
        "/api/auth/register", json=employee_payload(lastName="tesfaye"), headers=admin_headers
    )

    assert response.status_code == 400
    assert response.json()["code"] == "DUPLICATE_KEY"


def test_register_rejects_bad_last_name(client, admin_headers):
    response = client.post(
        "/api/auth/register", json=employee_payload(lastName="Ha1le"), headers=admin_headers
    )

    assert response.status_code == 400
    assert response.json()["code"] == "VALIDATION_ERROR"


def test_change_password(client, db):
    db.add_user("Abebe", password="Abebe@12341234")
    token = sign_in(client, "Abebe", "Abebe@12341234").json()["token"]

    response = client.post(
        "/api/auth/change-password",
        json={"currentPassword": "Abebe@12341234", "newPassword": "n3w-Secret!"},
        headers={"Authorization": f"Bearer {token}"},
    )

    assert response.status_code == 200
    assert sign_in(client, "Abebe", "Abebe@12341234").status_code == 401
    assert sign_in(client, "Abebe", "n3w-Secret!").status_code == 200


def test_change_password_wrong_current(client, db):
    user = db.add_user("Abebe", password="Abebe@12341234")
    headers = db.auth_headers(user)

    response = client.post(
        "/api/auth/change-password",
        json={"currentPassword": "nope", "newPassword": "n3w-Secret!"},
        headers=headers,
    )

    assert response.status_code == 400
    assert response.json()["error"] == "Current password is incorrect."


def test_change_password_must_differ(client, db):
    user = db.add_user("Abebe", password="Abebe@12341234")
    headers = db.auth_headers(user)

    response = client.post(
        "/api/auth/change-password",
        json={"currentPassword": "Abebe@12341234", "newPassword": "Abebe@12341234"},
        headers=headers,
    )

    assert response.status_code == 400


def test_longest_registrable_last_name_can_sign_in_with_default_password(client, admin_headers):
    last_name = "A" + "b" * (LAST_NAME_MAX_LENGTH - 1)

    response = client.post("/api/auth/register", json=employee_payload(lastName=last_name), headers=admin_headers)

    assert response.status_code == 201
    assert sign_in(client, last_name, f"{last_name}{settings.DEFAULT_PASSWORD_SUFFIX}").status_code == 200


def test_last_name_too_long_for_default_password_is_rejected(client, db, admin_headers):
    last_name = "A" + "b" * LAST_NAME_MAX_LENGTH

    response = client.post("/api/auth/register", json=employee_payload(lastName=last_name), headers=admin_headers)

    assert response.status_code == 400
    assert response.json()["code"] == "VALIDATION_ERROR"
    assert all(u["last_name"] != last_name for u in db.users.values())
