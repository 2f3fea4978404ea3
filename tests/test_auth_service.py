"""Tests for authentication."""
import jwt
import pytest

from kazlingo.config import TestingConfig


def test_register_and_login(services, user_id: str) -> None:
    auth = services["auth"]

    result = auth.login_user("  AIGERIM ", "secret123")

    assert result["success"]
    assert result["user"]["id"] == user_id
    assert result["user"]["username"] == "aigerim"
    assert result["user"]["email"] == "aigerim@example.kz"
    payload = jwt.decode(result["token"], TestingConfig.JWT_SECRET, algorithms=["HS256"])
    assert payload["user_id"] == user_id


def test_registered_user_has_default_levels(services, db, user_id: str) -> None:
    user = db.users.find_one({"username": "aigerim"})
    assert user["levels"] == {"talda": 1, "sozdly": 1, "maqal": 1, "sj": 1}
    assert user["password"] != "secret123"


@pytest.mark.parametrize("username,email,password,error", [
    ("", "a@b.kz", "secret123", "Username, email and password are required"),
    ("ab", "a@b.kz", "secret123", "Username must be at least 3 characters long"),
    ("asel", "a@b.kz", "123", "Password must be at least 6 characters long"),
    ("asel", "not-an-email", "secret123", "Invalid email address"),
    ("Aigerim", "x@b.kz", "secret123", "Username already exists"),
])
def test_register_validation(services, user_id, username, email, password, error) -> None:
    result = services["auth"].register_user(username, email, password)
    assert result == {"success": False, "error": error}


def test_login_with_wrong_password(services, user_id: str) -> None:
    result = services["auth"].login_user("aigerim", "wrong-password")
    assert result == {"success": False, "error": "Invalid username or password"}


def test_verify_and_logout(services, user_id: str) -> None:
    auth = services["auth"]
    token = auth.login_user("aigerim", "secret123")["token"]

    assert auth.verify_token(token)["user"]["id"] == user_id
    assert auth.get_active_sessions_count() == 1

    assert auth.logout_user(token)["success"]
    assert auth.verify_token(token) == {"success": False, "error": "Session has expired or is invalid"}
    assert not auth.logout_user(token)["success"]


def test_verify_rejects_foreign_tokens(services, user_id: str) -> None:
    forged = jwt.encode({"user_id": user_id}, "another-secret", algorithm="HS256")
    assert services["auth"].verify_token(forged) == {"success": False, "error": "Invalid token"}
    assert services["auth"].verify_token("") == {"success": False, "error": "Token is required"}
