"""Tests for /api/users."""

import asyncio
import threading

from vidly_api.app.core.db import get_cursor
from vidly_api.app.schemas.user import UserCreate
from vidly_api.app.services.user_service import UserService


def register(client, name="First User", email="first@example.com", password="12345"):
    return client.post("/api/users", json={"name": name, "email": email, "password": password})


def test_first_registered_user_is_admin(client):
    first = register(client)
    second = register(client, name="Second User", email="second@example.com")

    assert first.status_code == 200
    assert first.json()["isAdmin"] is True
    assert second.json()["isAdmin"] is False


def test_password_is_hashed_and_never_returned(client):
    res = register(client, password="secret-pass")

    assert "password" not in res.json()
    with get_cursor() as cursor:
        stored = cursor.execute("SELECT password FROM users").fetchone()["password"]
    assert stored != "secret-pass"
    assert "$" in stored


def test_duplicate_email_returns_400(client):
    register(client)

    res = register(client, name="Other Name")

    assert res.status_code == 400
    assert res.json()["detail"] == "User already registered."


def test_invalid_email_returns_400(client):
    res = register(client, email="not-an-email")

    assert res.status_code == 400


def test_me_returns_user_the_token_was_issued_for(client, token_for):
    user_id = register(client).json()["id"]

    res = client.get("/api/users/me", headers={"x-auth-token": token_for(user_id=user_id)})

    assert res.status_code == 200
    assert res.json()["email"] == "first@example.com"


def test_me_requires_token(client):
    assert client.get("/api/users/me").status_code == 401


def test_me_for_unknown_user_returns_404(client, token_for):
    res = client.get("/api/users/me", headers={"x-auth-token": token_for(user_id=99)})

    assert res.status_code == 404


def test_listing_users_requires_admin(client, token, admin_token):
    register(client)

    assert client.get("/api/users", headers={"x-auth-token": token}).status_code == 403
    res = client.get("/api/users", headers={"x-auth-token": admin_token})
    assert res.status_code == 200
    assert len(res.json()) == 1


def test_delete_user_twice_returns_404_the_second_time(client, admin_token):
    user_id = register(client).json()["id"]
    headers = {"x-auth-token": admin_token}

    assert client.delete(f"/api/users/{user_id}", headers=headers).status_code == 200
    assert client.delete(f"/api/users/{user_id}", headers=headers).status_code == 404


def test_concurrent_first_registrations_yield_one_admin(store):
    barrier = threading.Barrier(4)
    outcomes = []

    def worker(n):
        data = UserCreate(name=f"Racing User {n}", email=f"racer{n}@example.com", password="12345")
        barrier.wait()
        try:
            outcomes.append(asyncio.run(UserService.create_user(data)).is_admin)
        except Exception as exc:  # surfaced through the assertion below
            outcomes.append(repr(exc))

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(4)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert sorted(outcomes, key=str) == [False, False, False, True]
    with get_cursor() as cursor:
        assert cursor.execute("SELECT COUNT(*) FROM users WHERE is_admin = 1").fetchone()[0] == 1
