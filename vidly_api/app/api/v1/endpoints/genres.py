"""
Genre endpoints for API v1.

Reading genres is public.  Creating and renaming require a valid
token; deleting additionally requires an administrator.
"""

from typing import List

from fastapi import APIRouter, Depends

from vidly_api.app.api.deps import http_error, path_id
from vidly_api.app.core.exceptions import StoreError
from vidly_api.app.core.security import get_current_user, require_admin
from vidly_api.app.schemas.genre import GenreCreate, GenreRead
from vidly_api.app.services.genre_service import GenreService

router = APIRouter()


@router.get("", response_model=List[GenreRead])
async def list_genres() -> List[GenreRead]:
    """List all genres sorted by name."""
    return await GenreService.list_genres()


@router.post("", response_model=GenreRead)
async def create_genre(
    genre: GenreCreate,
    current_user: dict = Depends(get_current_user),
) -> GenreRead:
    return await GenreService.create_genre(genre)


@router.put("/{genre_id}", response_model=GenreRead)
async def update_genre(
    genre_id: str,
    genre: GenreCreate,
    current_user: dict = Depends(get_current_user),
) -> GenreRead:
    try:
        return await GenreService.update_genre(path_id(genre_id, "genre"), genre)
    except StoreError as e:
        raise http_error(e) from e


@router.delete("/{genre_id}", response_model=GenreRead)
async def delete_genre(
    genre_id: str,
    current_user: dict = Depends(require_admin),
) -> GenreRead:
    """Delete a genre (admin only) and return it.

    Movies keep their embedded copy of the genre.
    """
    try:
        return await GenreService.delete_genre(path_id(genre_id, "genre"))
    except StoreError as e:
        raise http_error(e) from e


@router.get("/{genre_id}", response_model=GenreRead)
async def get_genre(genre_id: str) -> GenreRead:
    """Retrieve a single genre by its ID, 404 if it does not exist."""
    try:
        return await GenreService.get_genre(path_id(genre_id, "genre"))
    except StoreError as e:
        raise http_error(e) from e
