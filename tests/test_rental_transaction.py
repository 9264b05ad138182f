"""Atomicity and concurrency of rental creation."""

import asyncio
import sqlite3
import threading
from datetime import datetime, timezone

import pytest

from vidly_api.app.core.config import settings
from vidly_api.app.core.db import get_cursor
from vidly_api.app.core.exceptions import OutOfStockError, TransactionError
from vidly_api.app.schemas.rental import RentalCreate
from vidly_api.app.services.rental_service import RentalService


def rent(customer_id: int, movie_id: int):
    request = RentalCreate(customer_id=customer_id, movie_id=movie_id, date_out=datetime.now(timezone.utc))
    return asyncio.run(RentalService.create_rental(request))


@pytest.mark.parametrize("stock", [1, 2, 7])
def test_successful_rental_decrements_stock_by_exactly_one(seed, stock):
    customer_id = seed.customer()
    movie_id = seed.movie(stock=stock, rate=3.5)

    rental = rent(customer_id, movie_id)

    assert seed.stock(movie_id) == stock - 1
    assert seed.count("rentals") == 1
    assert rental.movie.daily_rental_rate == 3.5
    assert rental.customer.id == customer_id


def test_zero_stock_never_creates_a_rental(seed):
    customer_id = seed.customer()
    movie_id = seed.movie(stock=0)

    for _ in range(3):
        with pytest.raises(OutOfStockError):
            rent(customer_id, movie_id)

    assert seed.count("rentals") == 0
    assert seed.stock(movie_id) == 0


def test_two_concurrent_rentals_of_the_last_copy(seed):
    customer_id = seed.customer()
    movie_id = seed.movie(stock=1)
    barrier = threading.Barrier(2)
    outcomes = []

    def worker():
        barrier.wait()
        try:
            rent(customer_id, movie_id)
            outcomes.append("rented")
        except OutOfStockError:
            outcomes.append("out of stock")
        except Exception as exc:  # surfaced through the assertion below
            outcomes.append(repr(exc))

    threads = [threading.Thread(target=worker) for _ in range(2)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert sorted(outcomes) == ["out of stock", "rented"]
    assert seed.stock(movie_id) == 0
    assert seed.count("rentals") == 1


def test_stock_fault_leaves_no_orphan_rental(seed):
    customer_id = seed.customer()
    movie_id = seed.movie(stock=3)
    with get_cursor() as cursor:
        cursor.execute(
            """
            CREATE TRIGGER fail_stock_update BEFORE UPDATE OF number_in_stock ON movies
            BEGIN
                SELECT RAISE(ABORT, 'simulated store fault');
            END
            """
        )

    with pytest.raises(TransactionError) as excinfo:
        rent(customer_id, movie_id)

    assert str(excinfo.value) == "Something failed."
    assert seed.count("rentals") == 0
    assert seed.stock(movie_id) == 3


def test_stock_fault_returns_generic_500(client, seed):
    customer_id = seed.customer()
    movie_id = seed.movie(stock=3)
    with get_cursor() as cursor:
        cursor.execute(
            "CREATE TRIGGER fail_stock_update BEFORE UPDATE ON movies "
            "BEGIN SELECT RAISE(ABORT, 'simulated store fault'); END"
        )

    res = client.post(
        "/api/rentals",
        json={"customerId": customer_id, "movieId": movie_id, "dateOut": "2026-03-01T10:00:00Z"},
    )

    assert res.status_code == 500
    assert res.json() == {"detail": "Something failed."}
    assert seed.count("rentals") == 0


def test_lock_timeout_surfaces_as_transaction_error(seed, store, monkeypatch):
    customer_id = seed.customer()
    movie_id = seed.movie(stock=3)
    monkeypatch.setattr(settings, "db_timeout", 0.1)
    blocker = sqlite3.connect(str(store))
    try:
        blocker.execute("BEGIN IMMEDIATE")
        with pytest.raises(TransactionError):
            rent(customer_id, movie_id)
    finally:
        blocker.rollback()
        blocker.close()

    assert seed.count("rentals") == 0
    assert seed.stock(movie_id) == 3


def test_lock_wait_does_not_stall_the_event_loop(seed, store, monkeypatch):
    customer_id = seed.customer()
    movie_id = seed.movie(stock=3)
    monkeypatch.setattr(settings, "db_timeout", 0.5)
    request = RentalCreate(customer_id=customer_id, movie_id=movie_id, date_out=datetime.now(timezone.utc))

    async def scenario():
        task = asyncio.ensure_future(RentalService.create_rental(request))
        ticks = 0
        while not task.done():
            await asyncio.sleep(0.01)
            ticks += 1
        with pytest.raises(TransactionError):
            await task
        return ticks

    blocker = sqlite3.connect(str(store))
    try:
        blocker.execute("BEGIN IMMEDIATE")
        ticks = asyncio.run(scenario())
    finally:
        blocker.rollback()
        blocker.close()

    # the loop kept running while the rental waited for the write lock
    assert ticks > 5
    assert seed.count("rentals") == 0
