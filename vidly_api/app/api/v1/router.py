"""
Top‑level router for version 1 of the API.

Aggregates the per‑collection routers under a unified prefix.  When a
new collection is added, include its router here.
"""

from fastapi import APIRouter

from .endpoints import customers, genres, movies, rentals, users

router = APIRouter()

router.include_router(genres.router, prefix="/genres", tags=["genres"])
router.include_router(customers.router, prefix="/customers", tags=["customers"])
router.include_router(movies.router, prefix="/movies", tags=["movies"])
router.include_router(rentals.router, prefix="/rentals", tags=["rentals"])
router.include_router(users.router, prefix="/users", tags=["users"])
