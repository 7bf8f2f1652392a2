from fastapi import APIRouter, status, Depends
from sqlalchemy import select, desc
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from database import get_db
from database.collections import ensure_collections
from database.models.movies import CommentModel
from exceptions.api import (
    CommentNotFoundError,
    MovieNotFoundError,
    PersistenceError,
    RequestValidationFailedError
)
from routers.movies import INVALID_MOVIE_ID, get_movie_or_none
from schemas.accounts import MessageResponseSchema
from schemas.movies import (
    CommentCreateRequestSchema,
    CommentListResponseSchema,
    CommentResponseSchema,
    CommentSchema,
    CommentUpdateRequestSchema
)
from validation.requests import (
    Pagination,
    get_pagination,
    is_valid_object_id,
    validate_object_id
)

router = APIRouter()

INVALID_COMMENT_ID = "Invalid comment ObjectId format"
COMMENT_NOT_FOR_MOVIE = "Comment not found for this movie"


def validate_comment_path(movie_id: str, comment_id: str) -> tuple[str, str]:
    """Validate both identifiers of a comment path, reporting every failure.

    Raises:
        RequestValidationFailedError: If either identifier is malformed.
    """
    errors = []
    if not is_valid_object_id(movie_id):
        errors.append(INVALID_MOVIE_ID)
    if not is_valid_object_id(comment_id):
        errors.append(INVALID_COMMENT_ID)
    if errors:
        raise RequestValidationFailedError(errors)
    return movie_id.lower(), comment_id.lower()


async def get_comment_or_none(
    db: AsyncSession,
    comment_id: str
) -> CommentModel | None:
    result = await db.execute(
        select(CommentModel).where(CommentModel.id == comment_id)
    )
    return result.scalars().first()


async def get_comment_of_movie(
    db: AsyncSession,
    movie_id: str,
    comment_id: str
) -> CommentModel:
    """Load a comment that must belong to the movie.

    Raises:
        MovieNotFoundError: If the movie does not exist.
        CommentNotFoundError: If the comment does not exist or belongs to
            another movie.
    """
    if not await get_movie_or_none(db, movie_id):
        raise MovieNotFoundError

    comment = await get_comment_or_none(db, comment_id)
    if not comment:
        raise CommentNotFoundError
    if comment.movie_id != movie_id:
        raise CommentNotFoundError(COMMENT_NOT_FOR_MOVIE)
    return comment


@router.get(
    "/{movie_id}/comments",
    response_model=CommentListResponseSchema,
    response_model_exclude_unset=True,
    status_code=status.HTTP_200_OK,
    summary="List comments of a movie",
    description="Return one page of the comments of a movie, newest first. "
                "A page without comments answers 404.",
    responses={
        404: {
            "description": "Movie not found or no comments on the page",
            "content": {
                "application/json": {
                    "example": {"status": 404, "error": "No comments found"}
                }
            }
        }
    },
)
async def get_comments(
    movie_id: str,
    pagination: Pagination = Depends(get_pagination),
    db: AsyncSession = Depends(get_db)
) -> CommentListResponseSchema:
    """Return the comments of a movie.

    Args:
        movie_id: 24 character hexadecimal movie id.
        pagination: Validated page size and number.
        db: Database session.

    Returns:
        CommentListResponseSchema: The comments of the page.
    """
    movie_id = validate_object_id(movie_id, INVALID_MOVIE_ID)
    await ensure_collections(db, "movies", "comments")

    if not await get_movie_or_none(db, movie_id):
        raise MovieNotFoundError

    stmt = (
        select(CommentModel)
        .where(CommentModel.movie_id == movie_id)
        .order_by(desc(CommentModel.date), CommentModel.id)
        .offset(pagination.offset)
        .limit(pagination.limit)
    )
    result = await db.execute(stmt)
    comments = result.scalars().all()

    if not comments:
        raise CommentNotFoundError("No comments found")

    return CommentListResponseSchema(
        status=status.HTTP_200_OK,
        data=[CommentSchema.model_validate(comment) for comment in comments]
    )


@router.post(
    "/{movie_id}/comments",
    response_model=CommentResponseSchema,
    response_model_exclude_unset=True,
    status_code=status.HTTP_201_CREATED,
    summary="Add a comment",
    description="Add a comment to a movie. `name`, `email` and `text` are required.",
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
async def create_comment(
    movie_id: str,
    data: CommentCreateRequestSchema,
    db: AsyncSession = Depends(get_db)
) -> CommentResponseSchema:
    """Add a comment to a movie.

    Args:
        movie_id: 24 character hexadecimal movie id.
        data: Comment author and text.
        db: Database session.

    Returns:
        CommentResponseSchema: The stored comment.
    """
    movie_id = validate_object_id(movie_id, INVALID_MOVIE_ID)
    await ensure_collections(db, "movies", "comments")

    if not await get_movie_or_none(db, movie_id):
        raise MovieNotFoundError

    comment = CommentModel(movie_id=movie_id, **data.model_dump())
    try:
        db.add(comment)
        await db.commit()
        await db.refresh(comment)
    except SQLAlchemyError as e:
        await db.rollback()
        raise PersistenceError(str(e)) from e

    return CommentResponseSchema(
        status=status.HTTP_201_CREATED,
        message="Comment added",
        data=CommentSchema.model_validate(comment)
    )


@router.get(
    "/{movie_id}/comments/{comment_id}",
    response_model=CommentResponseSchema,
    response_model_exclude_unset=True,
    status_code=status.HTTP_200_OK,
    summary="Get a comment",
    description="Return one comment of a movie. An unknown comment id answers "
                "200 with empty data; a comment of another movie answers 404.",
)
async def get_comment_by_id(
    movie_id: str,
    comment_id: str,
    db: AsyncSession = Depends(get_db)
) -> CommentResponseSchema:
    movie_id, comment_id = validate_comment_path(movie_id, comment_id)
    await ensure_collections(db, "movies", "comments")

    if not await get_movie_or_none(db, movie_id):
        raise MovieNotFoundError

    comment = await get_comment_or_none(db, comment_id)
    if not comment:
        return CommentResponseSchema(
            status=status.HTTP_200_OK,
            message="Comment not found",
            data=None
        )
    if comment.movie_id != movie_id:
        raise CommentNotFoundError(COMMENT_NOT_FOR_MOVIE)

    return CommentResponseSchema(
        status=status.HTTP_200_OK,
        data=CommentSchema.model_validate(comment)
    )


@router.put(
    "/{movie_id}/comments/{comment_id}",
    response_model=CommentResponseSchema,
    response_model_exclude_unset=True,
    status_code=status.HTTP_200_OK,
    summary="Update a comment",
    description="Update the name, email or text of a comment.",
)
async def update_comment(
    movie_id: str,
    comment_id: str,
    data: CommentUpdateRequestSchema,
    db: AsyncSession = Depends(get_db)
) -> CommentResponseSchema:
    """Apply a partial update to a comment.

    Args:
        movie_id: 24 character hexadecimal movie id.
        comment_id: 24 character hexadecimal comment id.
        data: Attributes to change.
        db: Database session.

    Returns:
        CommentResponseSchema: The updated comment.
    """
    movie_id, comment_id = validate_comment_path(movie_id, comment_id)
    await ensure_collections(db, "movies", "comments")

    comment = await get_comment_of_movie(db, movie_id, comment_id)
    for field, value in data.model_dump(exclude_none=True).items():
        setattr(comment, field, value)

    try:
        await db.commit()
        await db.refresh(comment)
    except SQLAlchemyError as e:
        await db.rollback()
        raise PersistenceError(str(e)) from e

    return CommentResponseSchema(
        status=status.HTTP_200_OK,
        message="Comment updated",
        data=CommentSchema.model_validate(comment)
    )


@router.delete(
    "/{movie_id}/comments/{comment_id}",
    response_model=MessageResponseSchema,
    status_code=status.HTTP_200_OK,
    summary="Delete a comment",
)
async def delete_comment(
    movie_id: str,
    comment_id: str,
    db: AsyncSession = Depends(get_db)
) -> MessageResponseSchema:
    movie_id, comment_id = validate_comment_path(movie_id, comment_id)
    await ensure_collections(db, "movies", "comments")

    comment = await get_comment_of_movie(db, movie_id, comment_id)
    try:
        await db.delete(comment)
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        raise PersistenceError(str(e)) from e

    return MessageResponseSchema(
        status=status.HTTP_200_OK,
        message="Comment deleted"
    )
