from sqlalchemy import inspect
from sqlalchemy.ext.asyncio import AsyncSession

from exceptions.api import CollectionNotFoundError


async def collection_exists(db: AsyncSession, name: str) -> bool:
    """Check whether the table backing a collection exists.

    Args:
        db (AsyncSession): Database session of the current request.
        name (str): Collection (table) name.

    Returns:
        bool: True if the table exists.
    """
    return await db.run_sync(
        lambda session: inspect(session.connection()).has_table(name)
    )


async def ensure_collections(db: AsyncSession, *names: str) -> None:
    """Fail with CollectionNotFoundError for the first missing collection.

    Args:
        db (AsyncSession): Database session of the current request.
        *names (str): Collections the caller is about to touch.

    Raises:
        CollectionNotFoundError: If one of the collections does not exist.
    """
    for name in names:
        if not await collection_exists(db, name):
            raise CollectionNotFoundError(name)
