"""Shared fixtures: an isolated SQLite file per test, a test client and seed helpers."""

import pytest
from fastapi.testclient import TestClient

from vidly_api.app.core.config import settings
from vidly_api.app.core.db import get_cursor, init_db
from vidly_api.app.core.security import create_access_token
from vidly_api.app.main import app


def make_token(user_id: int = 1, is_admin: bool = False, expires_delta=None) -> str:
    return create_access_token({"sub": str(user_id), "is_admin": is_admin}, expires_delta=expires_delta)


class Seeder:
    """Writes records straight into the store, bypassing the API."""

    def genre(self, name: str = "Comedy") -> int:
        with get_cursor() as cursor:
            cursor.execute("INSERT INTO genres (name) VALUES (?)", (name,))
            return cursor.lastrowid

    def customer(self, name: str = "Customer One", phone: str = "555-0100", is_gold: bool = False) -> int:
        with get_cursor() as cursor:
            cursor.execute(
                "INSERT INTO customers (name, phone, is_gold) VALUES (?, ?, ?)",
                (name, phone, int(is_gold)),
            )
            return cursor.lastrowid

    def movie(self, title: str = "The Matrix", stock: int = 3, rate: float = 2.5, genre_id: int | None = None) -> int:
        if genre_id is None:
            genre_id = self.genre("Action")
        with get_cursor() as cursor:
            name = cursor.execute("SELECT name FROM genres WHERE id = ?", (genre_id,)).fetchone()["name"]
            cursor.execute(
                """
                INSERT INTO movies (title, genre_id, genre_name, number_in_stock, daily_rental_rate)
                VALUES (?, ?, ?, ?, ?)
                """,
                (title, genre_id, name, stock, rate),
            )
            return cursor.lastrowid

    def stock(self, movie_id: int) -> int:
        with get_cursor() as cursor:
            return cursor.execute("SELECT number_in_stock FROM movies WHERE id = ?", (movie_id,)).fetchone()[0]

    def count(self, table: str) -> int:
        with get_cursor() as cursor:
            return cursor.execute(f"SELECT COUNT(*) FROM {table}").fetchone()[0]


@pytest.fixture
def db_path(tmp_path, monkeypatch):
    path = tmp_path / "vidly-test.db"
    monkeypatch.setattr(settings, "database_url", str(path))
    return path


@pytest.fixture
def store(db_path):
    """A migrated, empty database without starting the app."""
    init_db()
    return db_path


@pytest.fixture
def client(db_path):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def seed(store):
    return Seeder()


@pytest.fixture
def token():
    return make_token(user_id=1, is_admin=False)


@pytest.fixture
def admin_token():
    return make_token(user_id=1, is_admin=True)


@pytest.fixture
def token_for():
    """Factory for tokens with a chosen user id, admin flag or lifetime."""
    return make_token
