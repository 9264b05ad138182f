"""
Business logic for genres.
"""

import logging
from typing import List

from vidly_api.app.core.db import get_connection
from vidly_api.app.core.exceptions import NotFoundError
from vidly_api.app.schemas.genre import GenreCreate, GenreRead


def _row_to_genre(row) -> GenreRead:
    return GenreRead(id=row["id"], name=row["name"])


class GenreService:
    """Service for managing genres."""

    @classmethod
    async def list_genres(cls) -> List[GenreRead]:
        """Return all genres sorted by name."""
        conn = get_connection()
        try:
            rows = conn.execute("SELECT id, name FROM genres ORDER BY name ASC").fetchall()
            return [_row_to_genre(row) for row in rows]
        finally:
            conn.close()

    @classmethod
    async def get_genre(cls, genre_id: int) -> GenreRead:
        """Retrieve a single genre.  Raises ``NotFoundError`` if it does not exist."""
        conn = get_connection()
        try:
            row = conn.execute("SELECT id, name FROM genres WHERE id = ?", (genre_id,)).fetchone()
            if not row:
                raise NotFoundError("genre")
            return _row_to_genre(row)
        finally:
            conn.close()

    @classmethod
    async def create_genre(cls, data: GenreCreate) -> GenreRead:
        logger = logging.getLogger(__name__)
        conn = get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("INSERT INTO genres (name) VALUES (?)", (data.name,))
            genre_id = cursor.lastrowid
            conn.commit()
            logger.info("Created genre %s '%s'", genre_id, data.name)
            return GenreRead(id=genre_id, name=data.name)
        finally:
            conn.close()

    @classmethod
    async def update_genre(cls, genre_id: int, data: GenreCreate) -> GenreRead:
        """Rename a genre.

        Movies keep the genre name they were saved with; only movies
        written afterwards pick up the new name.
        """
        conn = get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("UPDATE genres SET name = ? WHERE id = ?", (data.name, genre_id))
            if cursor.rowcount == 0:
                raise NotFoundError("genre")
            conn.commit()
            return GenreRead(id=genre_id, name=data.name)
        finally:
            conn.close()

    @classmethod
    async def delete_genre(cls, genre_id: int) -> GenreRead:
        """Delete a genre and return the removed record."""
        logger = logging.getLogger(__name__)
        conn = get_connection()
        try:
            cursor = conn.cursor()
            row = cursor.execute("SELECT id, name FROM genres WHERE id = ?", (genre_id,)).fetchone()
            if not row:
                raise NotFoundError("genre")
            cursor.execute("DELETE FROM genres WHERE id = ?", (genre_id,))
            if cursor.rowcount == 0:
                raise NotFoundError("genre")
            conn.commit()
            logger.info("Deleted genre %s", genre_id)
            return _row_to_genre(row)
        finally:
            conn.close()
