from datetime import datetime, timedelta

import jwt

from greatwok.core import config
from greatwok.core.auth_service import USER_EXISTS, create_user
from greatwok.models.user import User


def test_signup_creates_plain_user_with_hashed_password(client, db_session):
    res = client.post("/api/users", json={
        "username": "carol", "email": "Carol@Example.com", "password": "hunter22", "role": "admin",
    })
    assert res.status_code == 201
    body = res.json()
    assert body["token"]
    assert body["user"]["role"] == "user"
    assert "password_hash" not in body["user"]

    user = db_session.query(User).filter(User.email == "carol@example.com").one()
    assert user.role == "user"
    assert user.password_hash and user.password_hash != "hunter22"


def test_signup_rejects_duplicate_email(client, customer):
    res = client.post("/api/users", json={"username": "alice2", "email": customer.email, "password": "secret1"})
    assert res.status_code == 400
    assert res.json() == {"error": "User already exists"}


def test_signup_validation_lists_fields(client):
    res = client.post("/api/users", json={"username": "al", "email": "nope", "password": "123", "phone": "abc"})
    assert res.status_code == 400
    fields = {e["field"] for e in res.json()["errors"]}
    assert fields == {"username", "email", "password", "phone"}


def test_password_longer_than_bcrypt_limit_is_rejected(client):
    res = client.post("/api/users", json={"username": "longpw", "email": "long@example.com", "password": "x" * 80})
    assert res.status_code == 400
    assert [e["field"] for e in res.json()["errors"]] == ["password"]

    # multi-byte characters count by their encoded size
    res = client.post("/api/login", json={"email": "long@example.com", "password": "\u00e9" * 40})
    assert res.status_code == 400
    assert res.json()["errors"][0]["field"] == "password"


def test_signup_race_on_same_email_reports_existing_user(db_session, customer):
    class EmptyQuery:
        def filter(self, *args):
            return self

        def first(self):
            return None

    class StaleReadSession:
        # the existence check sees nothing, as if the other signup had not committed yet
        def __init__(self, session):
            self._session = session

        def query(self, *args):
            return EmptyQuery()

        def __getattr__(self, name):
            return getattr(self._session, name)

    user, message = create_user(StaleReadSession(db_session), "alice2", customer.email, "secret1")
    assert user is None
    assert message == USER_EXISTS
    assert db_session.query(User).filter(User.email == customer.email).count() == 1


def test_login_success_and_failures(client, customer):
    ok = client.post("/api/login", json={"email": customer.email, "password": "secret1"})
    assert ok.status_code == 200
    assert ok.json()["user"]["user_id"] == customer.user_id

    unknown = client.post("/api/login", json={"email": "ghost@example.com", "password": "secret1"})
    assert unknown.status_code == 400
    assert unknown.json()["error"] == "User not found. Please register first."

    wrong = client.post("/api/login", json={"email": customer.email, "password": "wrong-pass"})
    assert wrong.status_code == 401


def test_guest_login_creates_guest_row(client, db_session):
    res = client.post("/api/guest")
    assert res.status_code == 201
    user = res.json()["user"]
    assert user["role"] == "guest"
    assert user["is_guest"] is True
    assert user["username"].startswith("Guest_")
    assert user["email"] is None


def test_profile_requires_bearer_token(client, customer, user_headers):
    assert client.get("/api/profile").status_code == 401
    assert client.get("/api/profile", headers={"Authorization": "Token abc"}).status_code == 403
    assert client.get("/api/profile", headers={"Authorization": "Bearer not-a-jwt"}).status_code == 403

    res = client.get("/api/profile", headers=user_headers)
    assert res.status_code == 200
    assert res.json()["user"]["email"] == customer.email


def test_expired_token_is_forbidden(client, customer):
    token = jwt.encode(
        {"id": customer.user_id, "role": "user", "exp": datetime.utcnow() - timedelta(minutes=1)},
        config.JWT_SECRET, algorithm=config.JWT_ALGORITHM,
    )
    res = client.get("/api/profile", headers={"Authorization": f"Bearer {token}"})
    assert res.status_code == 403


def test_token_for_deleted_user_is_unauthorized(client, db_session, user_factory, headers_for):
    ghost = user_factory("ghost", "ghost@example.com")
    headers = headers_for(ghost)
    db_session.delete(ghost)
    db_session.commit()
    assert client.get("/api/profile", headers=headers).status_code == 401


def test_update_phone(client, db_session, customer, user_headers):
    bad = client.put("/api/profile/phone", json={"phone": "call me"}, headers=user_headers)
    assert bad.status_code == 400

    res = client.put("/api/profile/phone", json={"phone": "+61 400 123 456"}, headers=user_headers)
    assert res.status_code == 200
    db_session.expire_all()
    assert db_session.get(User, customer.user_id).phone == "+61 400 123 456"


def test_admin_routes_use_database_role(client, admin_headers, user_headers):
    assert client.get("/api/users", headers=user_headers).status_code == 403
    assert client.get("/api/admin", headers=user_headers).status_code == 403

    users = client.get("/api/users", headers=admin_headers)
    assert users.status_code == 200
    assert all("password_hash" not in u for u in users.json())
    assert "Welcome" in client.get("/api/admin", headers=admin_headers).json()["message"]


def test_role_claim_in_token_is_not_trusted(client, customer):
    forged = jwt.encode(
        {"id": customer.user_id, "role": "admin", "exp": datetime.utcnow() + timedelta(minutes=5)},
        config.JWT_SECRET, algorithm=config.JWT_ALGORITHM,
    )
    res = client.get("/api/users", headers={"Authorization": f"Bearer {forged}"})
    assert res.status_code == 403
