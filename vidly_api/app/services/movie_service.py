"""
Business logic for movies.

A movie stores a snapshot of its genre (id and name) resolved from the
``genreId`` of the request.  ``number_in_stock`` is also changed by
``RentalService.create_rental``, which takes one copy out of stock in
the same transaction that records the rental.
"""

import logging
import sqlite3
from typing import List

from vidly_api.app.core.db import get_connection
from vidly_api.app.core.exceptions import InvalidReferenceError, NotFoundError
from vidly_api.app.schemas.genre import GenreRead
from vidly_api.app.schemas.movie import MovieCreate, MovieRead

MOVIE_COLUMNS = "id, title, genre_id, genre_name, number_in_stock, daily_rental_rate"


def _row_to_movie(row) -> MovieRead:
    return MovieRead(
        id=row["id"],
        title=row["title"],
        genre=GenreRead(id=row["genre_id"], name=row["genre_name"]),
        number_in_stock=row["number_in_stock"],
        daily_rental_rate=row["daily_rental_rate"],
    )


def _resolve_genre(cursor: sqlite3.Cursor, genre_id: int) -> GenreRead:
    row = cursor.execute("SELECT id, name FROM genres WHERE id = ?", (genre_id,)).fetchone()
    if not row:
        raise InvalidReferenceError("genre")
    return GenreRead(id=row["id"], name=row["name"])


class MovieService:
    """Service for managing movies."""

    @classmethod
    async def list_movies(cls) -> List[MovieRead]:
        """Return all movies sorted by title."""
        conn = get_connection()
        try:
            rows = conn.execute(f"SELECT {MOVIE_COLUMNS} FROM movies ORDER BY title ASC").fetchall()
            return [_row_to_movie(row) for row in rows]
        finally:
            conn.close()

    @classmethod
    async def get_movie(cls, movie_id: int) -> MovieRead:
        """Retrieve a single movie.  Raises ``NotFoundError`` if it does not exist."""
        conn = get_connection()
        try:
            row = conn.execute(f"SELECT {MOVIE_COLUMNS} FROM movies WHERE id = ?", (movie_id,)).fetchone()
            if not row:
                raise NotFoundError("movie")
            return _row_to_movie(row)
        finally:
            conn.close()

    @classmethod
    async def create_movie(cls, data: MovieCreate) -> MovieRead:
        """Create a movie.

        Raises ``InvalidReferenceError`` when ``genre_id`` does not name
        an existing genre.
        """
        logger = logging.getLogger(__name__)
        conn = get_connection()
        try:
            cursor = conn.cursor()
            genre = _resolve_genre(cursor, data.genre_id)
            cursor.execute(
                """
                INSERT INTO movies (title, genre_id, genre_name, number_in_stock, daily_rental_rate)
                VALUES (?, ?, ?, ?, ?)
                """,
                (data.title, genre.id, genre.name, data.number_in_stock, data.daily_rental_rate),
            )
            movie_id = cursor.lastrowid
            conn.commit()
            logger.info("Created movie %s '%s' with %s in stock", movie_id, data.title, data.number_in_stock)
            return MovieRead(
                id=movie_id,
                title=data.title,
                genre=genre,
                number_in_stock=data.number_in_stock,
                daily_rental_rate=data.daily_rental_rate,
            )
        finally:
            conn.close()

    @classmethod
    async def update_movie(cls, movie_id: int, data: MovieCreate) -> MovieRead:
        """Replace all fields of a movie, re-resolving its genre snapshot.

        The genre is checked before the movie, so a dangling ``genre_id``
        is reported as ``InvalidReferenceError`` even for an unknown
        movie.
        """
        conn = get_connection()
        try:
            cursor = conn.cursor()
            genre = _resolve_genre(cursor, data.genre_id)
            cursor.execute(
                """
                UPDATE movies
                SET title = ?, genre_id = ?, genre_name = ?, number_in_stock = ?, daily_rental_rate = ?
                WHERE id = ?
                """,
                (data.title, genre.id, genre.name, data.number_in_stock, data.daily_rental_rate, movie_id),
            )
            if cursor.rowcount == 0:
                raise NotFoundError("movie")
            conn.commit()
            return MovieRead(
                id=movie_id,
                title=data.title,
                genre=genre,
                number_in_stock=data.number_in_stock,
                daily_rental_rate=data.daily_rental_rate,
            )
        finally:
            conn.close()

    @classmethod
    async def delete_movie(cls, movie_id: int) -> MovieRead:
        logger = logging.getLogger(__name__)
        conn = get_connection()
        try:
            cursor = conn.cursor()
            row = cursor.execute(f"SELECT {MOVIE_COLUMNS} FROM movies WHERE id = ?", (movie_id,)).fetchone()
            if not row:
                raise NotFoundError("movie")
            cursor.execute("DELETE FROM movies WHERE id = ?", (movie_id,))
            if cursor.rowcount == 0:
                raise NotFoundError("movie")
            conn.commit()
            logger.info("Deleted movie %s", movie_id)
            return _row_to_movie(row)
        finally:
            conn.close()
