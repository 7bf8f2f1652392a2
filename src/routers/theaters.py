from fastapi import APIRouter, status, Depends
from sqlalchemy import select, func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from database import get_db
from database.collections import ensure_collections
from database.models.movies import TheaterModel
from exceptions.api import PersistenceError, TheaterNotFoundError
from schemas.accounts import MessageResponseSchema
from schemas.theaters import (
    TheaterListResponseSchema,
    TheaterRequestSchema,
    TheaterResponseSchema,
    TheaterSchema
)
from validation.requests import Pagination, get_pagination, validate_object_id

router = APIRouter()

INVALID_THEATER_ID = "Invalid theater ObjectId format"


async def get_theater_or_none(
    db: AsyncSession,
    theater_id: str
) -> TheaterModel | None:
    result = await db.execute(
        select(TheaterModel).where(TheaterModel.id == theater_id)
    )
    return result.scalars().first()


@router.get(
    "",
    response_model=TheaterListResponseSchema,
    response_model_exclude_unset=True,
    status_code=status.HTTP_200_OK,
    summary="List theaters",
    description="Browse theaters page by page, ordered by theater number.",
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
        }
    },
)
async def get_theaters(
    pagination: Pagination = Depends(get_pagination),
    db: AsyncSession = Depends(get_db)
) -> TheaterListResponseSchema:
    await ensure_collections(db, "theaters")

    stmt = (
        select(TheaterModel)
        .order_by(TheaterModel.theater_id)
        .offset(pagination.offset)
        .limit(pagination.limit)
    )
    result = await db.execute(stmt)
    theaters = result.scalars().all()

    if not theaters:
        return TheaterListResponseSchema(
            status=status.HTTP_200_OK,
            message="No theaters found",
            data=[]
        )

    return TheaterListResponseSchema(
        status=status.HTTP_200_OK,
        data=[TheaterSchema.model_validate(theater) for theater in theaters]
    )


@router.post(
    "",
    response_model=TheaterResponseSchema,
    response_model_exclude_unset=True,
    status_code=status.HTTP_201_CREATED,
    summary="Create a theater",
    description="Add a theater. Its `theaterId` is one more than the highest "
                "existing number, starting at 1.",
    responses={
        400: {
            "description": "Location missing or invalid",
            "content": {
                "application/json": {
                    "example": {
                        "status": 400,
                        "errors": ["location: Field required"]
                    }
                }
            }
        }
    },
)
async def create_theater(
    data: TheaterRequestSchema,
    db: AsyncSession = Depends(get_db)
) -> TheaterResponseSchema:
    """Create a theater with the next free theater number.

    Args:
        data: Theater location.
        db: Database session.

    Returns:
        TheaterResponseSchema: The stored theater.
    """
    await ensure_collections(db, "theaters")

    result = await db.execute(select(func.max(TheaterModel.theater_id)))
    next_theater_id = (result.scalar() or 0) + 1

    theater = TheaterModel(
        theater_id=next_theater_id,
        location=data.location.model_dump(exclude_none=True)
    )
    try:
        db.add(theater)
        await db.commit()
        await db.refresh(theater)
    except SQLAlchemyError as e:
        await db.rollback()
        raise PersistenceError(str(e)) from e

    return TheaterResponseSchema(
        status=status.HTTP_201_CREATED,
        message="Theater created",
        data=TheaterSchema.model_validate(theater)
    )


@router.get(
    "/{theater_id}",
    response_model=TheaterResponseSchema,
    response_model_exclude_unset=True,
    status_code=status.HTTP_200_OK,
    summary="Get theater by ID",
    description="Return a single theater. An unknown id still answers 200, "
                "with empty data and a not found message.",
)
async def get_theater_by_id(
    theater_id: str,
    db: AsyncSession = Depends(get_db)
) -> TheaterResponseSchema:
    theater_id = validate_object_id(theater_id, INVALID_THEATER_ID)
    await ensure_collections(db, "theaters")

    theater = await get_theater_or_none(db, theater_id)
    if not theater:
        return TheaterResponseSchema(
            status=status.HTTP_200_OK,
            message="Theater not found",
            data=None
        )

    return TheaterResponseSchema(
        status=status.HTTP_200_OK,
        data=TheaterSchema.model_validate(theater)
    )


@router.put(
    "/{theater_id}",
    response_model=TheaterResponseSchema,
    response_model_exclude_unset=True,
    status_code=status.HTTP_200_OK,
    summary="Update theater",
    description="Replace the location of a theater.",
    responses={
        404: {
            "description": "Theater not found",
            "content": {
                "application/json": {
                    "example": {"status": 404, "error": "Theater not found"}
                }
            }
        }
    },
)
async def update_theater(
    theater_id: str,
    data: TheaterRequestSchema,
    db: AsyncSession = Depends(get_db)
) -> TheaterResponseSchema:
    """Replace the location of a theater.

    Args:
        theater_id: 24 character hexadecimal theater id.
        data: New location.
        db: Database session.

    Returns:
        TheaterResponseSchema: The updated theater.
    """
    theater_id = validate_object_id(theater_id, INVALID_THEATER_ID)
    await ensure_collections(db, "theaters")

    theater = await get_theater_or_none(db, theater_id)
    if not theater:
        raise TheaterNotFoundError

    theater.location = data.location.model_dump(exclude_none=True)
    try:
        await db.commit()
        await db.refresh(theater)
    except SQLAlchemyError as e:
        await db.rollback()
        raise PersistenceError(str(e)) from e

    return TheaterResponseSchema(
        status=status.HTTP_200_OK,
        message="Theater updated",
        data=TheaterSchema.model_validate(theater)
    )


@router.delete(
    "/{theater_id}",
    response_model=MessageResponseSchema,
    status_code=status.HTTP_200_OK,
    summary="Delete theater",
    responses={
        404: {
            "description": "Theater not found",
            "content": {
                "application/json": {
                    "example": {"status": 404, "error": "Theater not found"}
                }
            }
        }
    },
)
async def delete_theater(
    theater_id: str,
    db: AsyncSession = Depends(get_db)
) -> MessageResponseSchema:
    theater_id = validate_object_id(theater_id, INVALID_THEATER_ID)
    await ensure_collections(db, "theaters")

    theater = await get_theater_or_none(db, theater_id)
    if not theater:
        raise TheaterNotFoundError

    try:
        await db.delete(theater)
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        raise PersistenceError(str(e)) from e

    return MessageResponseSchema(
        status=status.HTTP_200_OK,
        message="Theater deleted"
    )
