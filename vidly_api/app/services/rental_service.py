"""
Business logic for rentals.

``RentalService.create_rental`` is the one operation that writes two
tables: it records the rental and takes one copy of the movie out of
stock.  Both writes happen in a single SQLite write transaction
(``BEGIN IMMEDIATE``), and the stock decrement is conditional on the
stock still being positive, so two requests racing for the last copy
cannot both succeed.  If anything in the transaction fails, it is
rolled back and no rental or decrement is visible to other readers.

Updating a rental rewrites its customer and movie snapshots but does
not change any stock, and deleting a rental does not put the copy back
in stock.
"""

import logging
import sqlite3
from datetime import datetime, timezone
from typing import List, Optional

from fastapi.concurrency import run_in_threadpool

from vidly_api.app.core.db import get_connection
from vidly_api.app.core.exceptions import (
    InvalidReferenceError,
    NotFoundError,
    OutOfStockError,
    TransactionError,
)
from vidly_api.app.schemas.rental import (
    CustomerSnapshot,
    MovieSnapshot,
    RentalCreate,
    RentalRead,
)

logger = logging.getLogger(__name__)

RENTAL_WRITE_COLUMNS = (
    "customer_id, customer_name, "
    "movie_id, movie_title, movie_daily_rental_rate, date_out, date_returned, rental_fee"
)
RENTAL_COLUMNS = "id, " + RENTAL_WRITE_COLUMNS


def _row_to_rental(row) -> RentalRead:
    return RentalRead(
        id=row["id"],
        customer=CustomerSnapshot(
            id=row["customer_id"],
            name=row["customer_name"],
        ),
        movie=MovieSnapshot(
            id=row["movie_id"],
            title=row["movie_title"],
            daily_rental_rate=row["movie_daily_rental_rate"],
        ),
        date_out=row["date_out"],
        date_returned=row["date_returned"],
        rental_fee=row["rental_fee"],
    )


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Convert ``value`` to UTC; a naive datetime is taken to be UTC already."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _store_datetime(value: Optional[datetime]) -> Optional[str]:
    # Fixed-width UTC text, so ORDER BY date_out sorts chronologically.
    if value is None:
        return None
    return value.isoformat(timespec="microseconds")


def _normalize_dates(data: RentalCreate) -> RentalCreate:
    return data.model_copy(
        update={"date_out": _as_utc(data.date_out), "date_returned": _as_utc(data.date_returned)}
    )


def _snapshot_values(customer: CustomerSnapshot, movie: MovieSnapshot, data: RentalCreate) -> tuple:
    """Column values for the snapshot and date fields, in RENTAL_WRITE_COLUMNS order.

    ``data`` must already have gone through ``_normalize_dates``.
    """
    return (
        customer.id,
        customer.name,
        movie.id,
        movie.title,
        movie.daily_rental_rate,
        _store_datetime(data.date_out),
        _store_datetime(data.date_returned),
        data.rental_fee,
    )


class RentalService:
    """Service for rentals and the rental-creation transaction."""

    @staticmethod
    def _resolve_references(cursor: sqlite3.Cursor, data: RentalCreate) -> tuple[CustomerSnapshot, MovieSnapshot, int]:
        """Look up the customer and movie a rental request points at.

        Returns the two snapshots and the movie's current stock.
        Raises ``InvalidReferenceError`` naming whichever record is
        missing, customer first.
        """
        customer = cursor.execute(
            "SELECT id, name FROM customers WHERE id = ?",
            (data.customer_id,),
        ).fetchone()
        if not customer:
            raise InvalidReferenceError("customer")
        movie = cursor.execute(
            "SELECT id, title, number_in_stock, daily_rental_rate FROM movies WHERE id = ?",
            (data.movie_id,),
        ).fetchone()
        if not movie:
            raise InvalidReferenceError("movie")
        customer_snapshot = CustomerSnapshot(
            id=customer["id"],
            name=customer["name"],
        )
        movie_snapshot = MovieSnapshot(
            id=movie["id"],
            title=movie["title"],
            daily_rental_rate=movie["daily_rental_rate"],
        )
        return customer_snapshot, movie_snapshot, movie["number_in_stock"]

    @staticmethod
    def _commit_rental(
        conn: sqlite3.Connection,
        customer: CustomerSnapshot,
        movie: MovieSnapshot,
        data: RentalCreate,
    ) -> int:
        """Insert the rental and decrement the movie's stock as one unit.

        Contains no ``await``, so a cancelled request cannot stop it
        between the two writes.  Returns the new rental id.  Raises
        ``OutOfStockError`` when the stock reached zero after the
        pre-check (another rental took the last copy) and
        ``TransactionError`` for any store failure, including a lock wait
        longer than ``settings.db_timeout``.
        """
        cursor = conn.cursor()
        try:
            cursor.execute("BEGIN IMMEDIATE")
            cursor.execute(
                f"INSERT INTO rentals ({RENTAL_WRITE_COLUMNS}) "
                "VALUES (?, ?, ?, ?, ?, ?, ?, ?)",
                _snapshot_values(customer, movie, data),
            )
            rental_id = cursor.lastrowid
            cursor.execute(
                "UPDATE movies SET number_in_stock = number_in_stock - 1 "
                "WHERE id = ? AND number_in_stock > 0",
                (movie.id,),
            )
            if cursor.rowcount != 1:
                conn.rollback()
                raise OutOfStockError()
            conn.commit()
        except sqlite3.Error as exc:
            conn.rollback()
            logger.exception("Rental transaction for movie %s failed, rolled back", movie.id)
            raise TransactionError() from exc
        return rental_id

    @classmethod
    def _create_rental_sync(cls, data: RentalCreate) -> RentalRead:
        conn = get_connection()
        try:
            reader = conn.cursor()
            customer, movie, in_stock = cls._resolve_references(reader, data)
            # release the read statements before asking for the write lock
            reader.close()
            if in_stock <= 0:
                logger.warning("Rental rejected: movie %s is out of stock", movie.id)
                raise OutOfStockError()
            data = _normalize_dates(data)
            try:
                rental_id = cls._commit_rental(conn, customer, movie, data)
            except OutOfStockError:
                logger.warning("Rental rejected: last copy of movie %s was taken concurrently", movie.id)
                raise
            logger.info("Customer %s rented movie %s (rental %s)", customer.id, movie.id, rental_id)
            return RentalRead(
                id=rental_id,
                customer=customer,
                movie=movie,
                date_out=data.date_out,
                date_returned=data.date_returned,
                rental_fee=data.rental_fee,
            )
        finally:
            conn.close()

    @classmethod
    async def create_rental(cls, data: RentalCreate) -> RentalRead:
        """Rent a movie to a customer.

        Preconditions are checked before anything is written: the
        customer and movie must exist and the movie must have at least
        one copy in stock.  The rental then snapshots the customer's
        ``{id, name}`` and the movie's ``{id, title, dailyRentalRate}``
        and is committed together with the stock decrement.  Dates are
        stored in UTC.

        The work runs in the threadpool: waiting for another writer's
        lock (up to ``settings.db_timeout``) does not stall the event
        loop.  Once started it runs to completion even if the awaiting
        request is cancelled.

        Raises
        ------
        InvalidReferenceError
            ``customer_id`` or ``movie_id`` does not exist.
        OutOfStockError
            The movie has no copies left.
        TransactionError
            The store could not commit the rental; nothing was written.
        """
        return await run_in_threadpool(cls._create_rental_sync, data)

    @classmethod
    async def list_rentals(cls) -> List[RentalRead]:
        """Return all rentals, most recent ``date_out`` first."""
        conn = get_connection()
        try:
            rows = conn.execute(f"SELECT {RENTAL_COLUMNS} FROM rentals ORDER BY date_out DESC").fetchall()
            return [_row_to_rental(row) for row in rows]
        finally:
            conn.close()

    @classmethod
    async def get_rental(cls, rental_id: int) -> RentalRead:
        conn = get_connection()
        try:
            row = conn.execute(f"SELECT {RENTAL_COLUMNS} FROM rentals WHERE id = ?", (rental_id,)).fetchone()
            if not row:
                raise NotFoundError("rental")
            return _row_to_rental(row)
        finally:
            conn.close()

    @classmethod
    async def update_rental(cls, rental_id: int, data: RentalCreate) -> RentalRead:
        """Rewrite a rental from a new request body.

        Customer and movie are resolved again and both snapshots are
        replaced wholesale, including the movie's daily rate.  Stock is
        neither checked nor adjusted.  References are validated before
        the rental's existence, matching the create route.  Dates are
        stored in UTC.
        """
        conn = get_connection()
        try:
            cursor = conn.cursor()
            customer, movie, _ = cls._resolve_references(cursor, data)
            data = _normalize_dates(data)
            cursor.execute(
                """
                UPDATE rentals
                SET customer_id = ?, customer_name = ?,
                    movie_id = ?, movie_title = ?, movie_daily_rental_rate = ?,
                    date_out = ?, date_returned = ?, rental_fee = ?
                WHERE id = ?
                """,
                _snapshot_values(customer, movie, data) + (rental_id,),
            )
            if cursor.rowcount == 0:
                raise NotFoundError("rental")
            conn.commit()
            return RentalRead(
                id=rental_id,
                customer=customer,
                movie=movie,
                date_out=data.date_out,
                date_returned=data.date_returned,
                rental_fee=data.rental_fee,
            )
        finally:
            conn.close()

    @classmethod
    async def delete_rental(cls, rental_id: int) -> RentalRead:
        """Delete a rental and return the removed record.

        The movie's stock is left as it is.
        """
        conn = get_connection()
        try:
            cursor = conn.cursor()
            row = cursor.execute(f"SELECT {RENTAL_COLUMNS} FROM rentals WHERE id = ?", (rental_id,)).fetchone()
            if not row:
                raise NotFoundError("rental")
            cursor.execute("DELETE FROM rentals WHERE id = ?", (rental_id,))
            if cursor.rowcount == 0:
                raise NotFoundError("rental")
            conn.commit()
            logger.info("Deleted rental %s", rental_id)
            return _row_to_rental(row)
        finally:
            conn.close()
