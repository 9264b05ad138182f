"""
Helpers shared by the endpoint modules.

Path ids arrive as strings so that an id which cannot exist (``abc``,
``0``, a number too large for the store) is answered with 404 like any
other unknown id, rather than with a validation error.
"""

from fastapi import HTTPException

from vidly_api.app.core.db import parse_id
from vidly_api.app.core.exceptions import NotFoundError, StoreError


def path_id(raw: str, kind: str) -> int:
    """Return the row id for a path parameter or raise ``NotFoundError``."""
    row_id = parse_id(raw)
    if row_id is None:
        raise NotFoundError(kind)
    return row_id


def http_error(exc: StoreError) -> HTTPException:
    """Translate a domain exception into the HTTP error sent to the client."""
    return HTTPException(status_code=exc.status_code, detail=str(exc))
