from __future__ import annotations

from types import SimpleNamespace
from typing import Optional

import pytest
from flask import Flask
from werkzeug.security import generate_password_hash

from src.hr_timekeeping.hr_timekeeping.core.enums import Role
from src.hr_timekeeping.hr_timekeeping.core.exceptions import AuthenticationError
from src.hr_timekeeping.hr_timekeeping.users import controller as users_controller
from src.hr_timekeeping.hr_timekeeping.users.model import User
from src.hr_timekeeping.hr_timekeeping.users.service import AuthService


class InMemoryUsers:
    def __init__(self, users):
        self._by_username = {u.username: u for u in users}

    def get_by_username(self, username: str) -> Optional[User]:
        return self._by_username.get(username)


@pytest.fixture
def auth_service():
    return AuthService(
        InMemoryUsers(
            [
                User(1, "Admin", "admin", generate_password_hash("admin123"), Role.ADMIN),
                User(2, "Former", "former", generate_password_hash("secret"), Role.STAFF, is_active=False),
                User(3, "Broken", "broken", "CHANGE_ME", Role.STAFF),
            ]
        )
    )


def test_authenticate_ok(auth_service):
    user = auth_service.authenticate("admin", "admin123")

    assert user.user_id == 1
    assert user.role == Role.ADMIN


@pytest.mark.parametrize(
    "username,password",
    [("admin", "wrong"), ("nobody", "x"), ("former", "secret"), ("broken", "CHANGE_ME"), ("  ", "x")],
)
def test_authenticate_rejects(auth_service, username, password):
    with pytest.raises(AuthenticationError):
        auth_service.authenticate(username, password)


def test_login_and_logout_fill_and_clear_session(auth_service):
    app = Flask(__name__)
    app.config.update(SECRET_KEY="test", TESTING=True)
    users_controller.register(app, SimpleNamespace(auth_service=auth_service))
    client = app.test_client()

    assert client.post("/api/auth/login", json={"username": "admin", "password": "bad"}).status_code == 401

    resp = client.post("/api/auth/login", json={"username": "admin", "password": "admin123"})
    assert resp.status_code == 200
    assert resp.get_json()["user"]["role"] == "admin"
    with client.session_transaction() as sess:
        assert sess["user_id"] == 1
        assert sess["role"] == "admin"

    client.post("/api/auth/logout")
    with client.session_transaction() as sess:
        assert "user_id" not in sess
