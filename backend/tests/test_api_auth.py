import pytest

from pageflow.domain.roles import Role
from pageflow.extensions import db
from pageflow.models.user import User


@pytest.fixture
def checker_user(app):
    user = User()
    user.username = "carol"
    user.role = "checker"
    user.set_password("s3cret")
    db.session.add(user)
    db.session.commit()
    return user


def test_login_returns_tokens_carrying_role(client, checker_user):
    res = client.post("/api/v1/auth/login", json={"username": "carol", "password": "s3cret"})

    assert res.status_code == 200
    body = res.get_json()
    assert body["user"]["role"] == "checker"

    me = client.get("/api/v1/auth/me", headers={"Authorization": f"Bearer {body['access_token']}"})
    assert me.status_code == 200
    assert me.get_json() == {"id": checker_user.id, "role": "checker"}


def test_login_with_bad_password(client, checker_user):
    res = client.post("/api/v1/auth/login", json={"username": "carol", "password": "nope"})

    assert res.status_code == 401


def test_login_requires_credentials(client):
    assert client.post("/api/v1/auth/login", json={"username": "carol"}).status_code == 400


def test_disabled_user_cannot_log_in(client, checker_user):
    checker_user.is_active = False
    db.session.commit()

    res = client.post("/api/v1/auth/login", json={"username": "carol", "password": "s3cret"})

    assert res.status_code == 403


def test_seed_users_creates_one_user_per_role(app):
    result = app.test_cli_runner().invoke(args=["seed-users", "--password", "pw"])

    assert result.exit_code == 0
    users = {u.username: u.role for u in User.query.all()}
    assert users == {"maker": "maker", "checker": "checker", "admin": "admin"}


def test_user_with_unknown_role_cannot_log_in(client, checker_user):
    checker_user.role = "editor"
    db.session.commit()

    res = client.post("/api/v1/auth/login", json={"username": "carol", "password": "s3cret"})

    assert res.status_code == 403


def test_user_to_actor(checker_user):
    actor = checker_user.to_actor()

    assert actor.actor_id == checker_user.id
    assert actor.role is Role.CHECKER
