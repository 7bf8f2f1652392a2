from fastapi import APIRouter, status, Depends
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from database import get_db
from database.collections import ensure_collections
from database.models.movies import MovieModel
from exceptions.api import (
    BadRequestError,
    DuplicateMovieError,
    MovieNotFoundError,
    PersistenceError
)
from schemas.accounts import MessageResponseSchema
from schemas.movies import (
    MovieCreateRequestSchema,
    MovieListResponseSchema,
    MovieResponseSchema,
    MovieSchema,
    MovieUpdateSchema
)
from validation.requests import Pagination, get_pagination, validate_object_id

router = APIRouter()

INVALID_MOVIE_ID = "Invalid movie ObjectId format"


async def get_movie_or_none(db: AsyncSession, movie_id: str) -> MovieModel | None:
    result = await db.execute(
        select(MovieModel).where(MovieModel.id == movie_id)
    )
    return result.scalars().first()


@router.get(
    "",
    response_model=MovieListResponseSchema,
    response_model_exclude_unset=True,
    status_code=status.HTTP_200_OK,
    summary="List movies",
    description="Browse the movie catalog page by page. "
                "`limit` must be between 1 and 50 and `page` at least 1.",
    responses={
        400: {
            "description": "Invalid pagination parameters",
            "content": {
                "application/json": {
                    "example": {
                        "status": 400,
                        "error": "Invalid query parameters"
                    }
                }
            }
        },
        404: {
            "description": "Collection not found",
            "content": {
                "application/json": {
                    "example": {
                        "status": 404,
                        "error": "Collection 'movies' not found"
                    }
                }
            }
        }
    },
)
async def get_movies(
    pagination: Pagination = Depends(get_pagination),
    db: AsyncSession = Depends(get_db)
) -> MovieListResponseSchema:
    """Return one page of movies.

    Args:
        pagination: Validated page size and number.
        db: Database session.

    Returns:
        MovieListResponseSchema: The movies of the page, possibly empty.
    """
    await ensure_collections(db, "movies")

    stmt = (
        select(MovieModel)
        .order_by(MovieModel.id)
        .offset(pagination.offset)
        .limit(pagination.limit)
    )
    result = await db.execute(stmt)
    movies = result.scalars().all()

    if not movies:
        return MovieListResponseSchema(
            status=status.HTTP_200_OK,
            message="No movies found",
            data=[]
        )

    return MovieListResponseSchema(
        status=status.HTTP_200_OK,
        data=[MovieSchema.model_validate(movie) for movie in movies]
    )


@router.post(
    "",
    response_model=MovieResponseSchema,
    response_model_exclude_unset=True,
    status_code=status.HTTP_201_CREATED,
    summary="Create a movie",
    description="Add a movie to the catalog. `title` and `year` are required; "
                "a movie with the same title and year is rejected.",
    responses={
        400: {
            "description": "Invalid movie data",
            "content": {
                "application/json": {
                    "example": {
                        "status": 400,
                        "errors": ["title: Field required", "year: Field required"]
                    }
                }
            }
        },
        409: {
            "description": "Movie already exists",
            "content": {
                "application/json": {
                    "example": {"status": 409, "error": "Movie already exists"}
                }
            }
        }
    },
)
async def create_movie(
    data: MovieCreateRequestSchema,
    db: AsyncSession = Depends(get_db)
) -> MovieResponseSchema:
    """Create a new movie.

    Args:
        data: Movie attributes.
        db: Database session.

    Returns:
        MovieResponseSchema: The stored movie.
    """
    await ensure_collections(db, "movies")

    stmt = select(MovieModel).where(
        MovieModel.title == data.title,
        MovieModel.year == data.year
    )
    result = await db.execute(stmt)
    if result.scalars().first():
        raise DuplicateMovieError

    movie = MovieModel(**data.model_dump())
    try:
        db.add(movie)
        await db.commit()
        await db.refresh(movie)
    except IntegrityError as e:
        await db.rollback()
        raise DuplicateMovieError from e
    except SQLAlchemyError as e:
        await db.rollback()
        raise PersistenceError(str(e)) from e

    return MovieResponseSchema(
        status=status.HTTP_201_CREATED,
        message="Movie created",
        data=MovieSchema.model_validate(movie)
    )


@router.get(
    "/{movie_id}",
    response_model=MovieResponseSchema,
    response_model_exclude_unset=True,
    status_code=status.HTTP_200_OK,
    summary="Get movie by ID",
    description="Return a single movie. An unknown id still answers 200, "
                "with empty data and a not found message.",
    responses={
        200: {
            "description": "Movie found, or not found with empty data",
            "content": {
                "application/json": {
                    "example": {
                        "status": 200,
                        "message": "Movie not found",
                        "data": None
                    }
                }
            }
        },
        400: {
            "description": "Malformed movie id",
            "content": {
                "application/json": {
                    "example": {"status": 400, "error": INVALID_MOVIE_ID}
                }
            }
        }
    },
)
async def get_movie_by_id(
    movie_id: str,
    db: AsyncSession = Depends(get_db)
) -> MovieResponseSchema:
    """Retrieve a movie by its id.

    Args:
        movie_id: 24 character hexadecimal movie id.
        db: Database session.

    Returns:
        MovieResponseSchema: The movie, or empty data when it does not exist.
    """
    movie_id = validate_object_id(movie_id, INVALID_MOVIE_ID)
    await ensure_collections(db, "movies")

    movie = await get_movie_or_none(db, movie_id)
    if not movie:
        return MovieResponseSchema(
            status=status.HTTP_200_OK,
            message="Movie not found",
            data=None
        )

    return MovieResponseSchema(
        status=status.HTTP_200_OK,
        data=MovieSchema.model_validate(movie)
    )


@router.put(
    "/{movie_id}",
    response_model=MovieResponseSchema,
    response_model_exclude_unset=True,
    status_code=status.HTTP_200_OK,
    summary="Update movie",
    description="Update the given attributes of a movie.",
    responses={
        404: {
            "description": "Movie not found",
            "content": {
                "application/json": {
                    "example": {"status": 404, "error": "Movie not found"}
                }
            }
        }
    },
)
async def update_movie(
    movie_id: str,
    data: MovieUpdateSchema,
    db: AsyncSession = Depends(get_db)
) -> MovieResponseSchema:
    """Apply a partial update to a movie.

    Args:
        movie_id: 24 character hexadecimal movie id.
        data: Attributes to change.
        db: Database session.

    Returns:
        MovieResponseSchema: The updated movie.
    """
    movie_id = validate_object_id(movie_id, INVALID_MOVIE_ID)

    changes = data.model_dump(exclude_unset=True)
    if not changes:
        raise BadRequestError("No fields to update")

    await ensure_collections(db, "movies")

    movie = await get_movie_or_none(db, movie_id)
    if not movie:
        raise MovieNotFoundError

    for field, value in changes.items():
        setattr(movie, field, value)

    try:
        await db.commit()
        await db.refresh(movie)
    except IntegrityError as e:
        await db.rollback()
        raise DuplicateMovieError from e
    except SQLAlchemyError as e:
        await db.rollback()
        raise PersistenceError(str(e)) from e

    return MovieResponseSchema(
        status=status.HTTP_200_OK,
        message="Movie updated",
        data=MovieSchema.model_validate(movie)
    )


@router.delete(
    "/{movie_id}",
    response_model=MessageResponseSchema,
    status_code=status.HTTP_200_OK,
    summary="Delete movie",
    description="Delete a movie together with its comments.",
    responses={
        404: {
            "description": "Movie not found",
            "content": {
                "application/json": {
                    "example": {"status": 404, "error": "Movie not found"}
                }
            }
        }
    },
)
async def delete_movie(
    movie_id: str,
    db: AsyncSession = Depends(get_db)
) -> MessageResponseSchema:
    """Delete a movie by its id.

    Args:
        movie_id: 24 character hexadecimal movie id.
        db: Database session.

    Returns:
        MessageResponseSchema: Confirmation message.
    """
    movie_id = validate_object_id(movie_id, INVALID_MOVIE_ID)
    await ensure_collections(db, "movies")

    movie = await get_movie_or_none(db, movie_id)
    if not movie:
        raise MovieNotFoundError

    try:
        await db.delete(movie)
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        raise PersistenceError(str(e)) from e

    return MessageResponseSchema(
        status=status.HTTP_200_OK,
        message="Movie deleted"
    )
