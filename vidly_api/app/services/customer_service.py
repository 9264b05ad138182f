"""
Business logic for customers.

Rentals copy the customer's id, name, phone and gold flag when they are
created, so updating or deleting a customer here never touches
existing rentals.
"""

import logging
from typing import List

from vidly_api.app.core.db import get_connection
from vidly_api.app.core.exceptions import NotFoundError
from vidly_api.app.schemas.customer import CustomerCreate, CustomerRead

CUSTOMER_COLUMNS = "id, name, phone, is_gold"


def _row_to_customer(row) -> CustomerRead:
    return CustomerRead(
        id=row["id"],
        name=row["name"],
        phone=row["phone"],
        is_gold=bool(row["is_gold"]),
    )


class CustomerService:
    """Service for managing customers."""

    @classmethod
    async def list_customers(cls) -> List[CustomerRead]:
        conn = get_connection()
        try:
            rows = conn.execute(f"SELECT {CUSTOMER_COLUMNS} FROM customers ORDER BY name ASC").fetchall()
            return [_row_to_customer(row) for row in rows]
        finally:
            conn.close()

    @classmethod
    async def get_customer(cls, customer_id: int) -> CustomerRead:
        conn = get_connection()
        try:
            row = conn.execute(
                f"SELECT {CUSTOMER_COLUMNS} FROM customers WHERE id = ?",
                (customer_id,),
            ).fetchone()
            if not row:
                raise NotFoundError("customer")
            return _row_to_customer(row)
        finally:
            conn.close()

    @classmethod
    async def create_customer(cls, data: CustomerCreate) -> CustomerRead:
        logger = logging.getLogger(__name__)
        conn = get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                "INSERT INTO customers (name, phone, is_gold) VALUES (?, ?, ?)",
                (data.name, data.phone, int(data.is_gold)),
            )
            customer_id = cursor.lastrowid
            conn.commit()
            logger.info("Created customer %s", customer_id)
            return CustomerRead(id=customer_id, **data.model_dump())
        finally:
            conn.close()

    @classmethod
    async def update_customer(cls, customer_id: int, data: CustomerCreate) -> CustomerRead:
        """Replace all fields of a customer.  Raises ``NotFoundError`` if it does not exist."""
        conn = get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                "UPDATE customers SET name = ?, phone = ?, is_gold = ? WHERE id = ?",
                (data.name, data.phone, int(data.is_gold), customer_id),
            )
            if cursor.rowcount == 0:
                raise NotFoundError("customer")
            conn.commit()
            return CustomerRead(id=customer_id, **data.model_dump())
        finally:
            conn.close()

    @classmethod
    async def delete_customer(cls, customer_id: int) -> CustomerRead:
        logger = logging.getLogger(__name__)
        conn = get_connection()
        try:
            cursor = conn.cursor()
            row = cursor.execute(
                f"SELECT {CUSTOMER_COLUMNS} FROM customers WHERE id = ?",
                (customer_id,),
            ).fetchone()
            if not row:
                raise NotFoundError("customer")
            cursor.execute("DELETE FROM customers WHERE id = ?", (customer_id,))
            if cursor.rowcount == 0:
                raise NotFoundError("customer")
            conn.commit()
            logger.info("Deleted customer %s", customer_id)
            return _row_to_customer(row)
        finally:
            conn.close()
