"""
Movie endpoints for API v1.

Create and update take a ``genreId`` and answer 400 when it does not
name an existing genre.
"""

from typing import List

from fastapi import APIRouter, Depends

from vidly_api.app.api.deps import http_error, path_id
from vidly_api.app.core.exceptions import StoreError
from vidly_api.app.core.security import get_current_user, require_admin
from vidly_api.app.schemas.movie import MovieCreate, MovieRead
from vidly_api.app.services.movie_service import MovieService

router = APIRouter()


@router.get("", response_model=List[MovieRead])
async def list_movies() -> List[MovieRead]:
    return await MovieService.list_movies()


@router.post("", response_model=MovieRead)
async def create_movie(
    movie: MovieCreate,
    current_user: dict = Depends(get_current_user),
) -> MovieRead:
    try:
        return await MovieService.create_movie(movie)
    except StoreError as e:
        raise http_error(e) from e


@router.put("/{movie_id}", response_model=MovieRead)
async def update_movie(
    movie_id: str,
    movie: MovieCreate,
    current_user: dict = Depends(get_current_user),
) -> MovieRead:
    try:
        return await MovieService.update_movie(path_id(movie_id, "movie"), movie)
    except StoreError as e:
        raise http_error(e) from e


@router.delete("/{movie_id}", response_model=MovieRead)
async def delete_movie(
    movie_id: str,
    current_user: dict = Depends(require_admin),
) -> MovieRead:
    try:
        return await MovieService.delete_movie(path_id(movie_id, "movie"))
    except StoreError as e:
        raise http_error(e) from e


@router.get("/{movie_id}", response_model=MovieRead)
async def get_movie(movie_id: str) -> MovieRead:
    try:
        return await MovieService.get_movie(path_id(movie_id, "movie"))
    except StoreError as e:
        raise http_error(e) from e
