"""
Business logic for users.

The first registered user becomes the administrator; everyone after
that is a regular user.  Passwords are hashed before they are stored
and are never read back by this service.
"""

import logging
import sqlite3
from typing import List

from vidly_api.app.core.db import get_connection
from vidly_api.app.core.exceptions import NotFoundError, TransactionError, ValidationError
from vidly_api.app.core.security import hash_password
from vidly_api.app.schemas.user import UserCreate, UserRead

USER_COLUMNS = "id, name, email, is_admin"


def _row_to_user(row) -> UserRead:
    return UserRead(id=row["id"], name=row["name"], email=row["email"], is_admin=bool(row["is_admin"]))


class UserService:
    """Service for registering and managing users."""

    @classmethod
    async def create_user(cls, data: UserCreate) -> UserRead:
        """Register a user.

        Raises ``ValidationError`` if the e‑mail address is already
        registered.  The duplicate check, the first-user count and the
        insert run in one write transaction (``BEGIN IMMEDIATE``), so
        two concurrent registrations on an empty store cannot both
        become admin.  The UNIQUE constraint on ``users.email`` backs
        the duplicate check.
        """
        logger = logging.getLogger(__name__)
        logger.info("Registering user %s", data.email)
        password = hash_password(data.password)
        conn = get_connection()
        try:
            cursor = conn.cursor()
            try:
                cursor.execute("BEGIN IMMEDIATE")
                existing = cursor.execute("SELECT id FROM users WHERE email = ?", (data.email,)).fetchone()
                if existing:
                    conn.rollback()
                    raise ValidationError("User already registered.")
                row = cursor.execute("SELECT COUNT(*) AS count FROM users").fetchone()
                is_admin = row["count"] == 0
                cursor.execute(
                    "INSERT INTO users (name, email, password, is_admin) VALUES (?, ?, ?, ?)",
                    (data.name, data.email, password, int(is_admin)),
                )
                user_id = cursor.lastrowid
                conn.commit()
            except sqlite3.IntegrityError as exc:
                conn.rollback()
                raise ValidationError("User already registered.") from exc
            except sqlite3.Error as exc:
                conn.rollback()
                logger.exception("Registering user %s failed, rolled back", data.email)
                raise TransactionError() from exc
            return UserRead(id=user_id, name=data.name, email=data.email, is_admin=is_admin)
        finally:
            conn.close()

    @classmethod
    async def get_user(cls, user_id: int) -> UserRead:
        conn = get_connection()
        try:
            row = conn.execute(f"SELECT {USER_COLUMNS} FROM users WHERE id = ?", (user_id,)).fetchone()
            if not row:
                raise NotFoundError("user")
            return _row_to_user(row)
        finally:
            conn.close()

    @classmethod
    async def list_users(cls) -> List[UserRead]:
        """Return the list of all users ordered by id."""
        conn = get_connection()
        try:
            rows = conn.execute(f"SELECT {USER_COLUMNS} FROM users ORDER BY id ASC").fetchall()
            return [_row_to_user(row) for row in rows]
        finally:
            conn.close()

    @classmethod
    async def delete_user(cls, user_id: int) -> UserRead:
        """Delete a user and return the removed record.

        Tokens already issued to the user stay valid until they expire,
        since token verification does not consult the users table.
        """
        logger = logging.getLogger(__name__)
        conn = get_connection()
        try:
            cursor = conn.cursor()
            row = cursor.execute(f"SELECT {USER_COLUMNS} FROM users WHERE id = ?", (user_id,)).fetchone()
            if not row:
                raise NotFoundError("user")
            cursor.execute("DELETE FROM users WHERE id = ?", (user_id,))
            if cursor.rowcount == 0:
                raise NotFoundError("user")
            conn.commit()
            logger.info("Deleted user %s", user_id)
            return _row_to_user(row)
        finally:
            conn.close()
