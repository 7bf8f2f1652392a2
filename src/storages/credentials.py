from typing import Optional

from sqlalchemy import select, update, delete, or_, func
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession

from database.collections import ensure_collections
from database.models.accounts import UserModel, SessionModel
from storages.interfaces import CredentialStoreInterface

_INSERT_BY_DIALECT = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class CredentialStore(CredentialStoreInterface):
    """SQLAlchemy implementation of the credential store.

    Works on the request's AsyncSession; transaction boundaries belong to
    the caller.

    Attributes:
        _db (AsyncSession): Database session of the current request.
    """

    def __init__(self, db: AsyncSession) -> None:
        self._db = db

    async def ensure_collections(self, *names: str) -> None:
        await ensure_collections(self._db, *names)

    async def get_user_by_email(self, email: str) -> Optional[UserModel]:
        result = await self._db.execute(
            select(UserModel).where(UserModel.email == email)
        )
        return result.scalars().first()

    async def get_user_by_id(self, user_id: str) -> Optional[UserModel]:
        result = await self._db.execute(
            select(UserModel).where(UserModel.id == user_id)
        )
        return result.scalars().first()

    async def add_user(self, user: UserModel) -> UserModel:
        self._db.add(user)
        await self._db.flush()
        return user

    async def add_session(
        self, user_id: str, access_token: str, refresh_token: str
    ) -> SessionModel:
        session = SessionModel(
            user_id=user_id,
            access_token=access_token,
            refresh_token=refresh_token
        )
        self._db.add(session)
        await self._db.flush()
        return session

    async def upsert_session(
        self, user_id: str, access_token: str, refresh_token: str
    ) -> None:
        dialect = self._db.get_bind().dialect.name
        insert = _INSERT_BY_DIALECT[dialect]

        stmt = insert(SessionModel).values(
            user_id=user_id,
            access_token=access_token,
            refresh_token=refresh_token
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[SessionModel.user_id],
            set_={
                "access_token": stmt.excluded.access_token,
                "refresh_token": stmt.excluded.refresh_token,
                "updated_at": func.now(),
            }
        )
        await self._db.execute(stmt)

    async def get_session_by_refresh_token(
        self, refresh_token: str
    ) -> Optional[SessionModel]:
        result = await self._db.execute(
            select(SessionModel).where(
                SessionModel.refresh_token == refresh_token
            )
        )
        return result.scalars().first()

    async def update_session_access_token(
        self, session_id: str, access_token: str
    ) -> None:
        await self._db.execute(
            update(SessionModel)
            .where(SessionModel.id == session_id)
            .values(access_token=access_token)
        )

    async def delete_session_by_access_token(self, access_token: str) -> int:
        result = await self._db.execute(
            delete(SessionModel).where(
                SessionModel.access_token == access_token
            )
        )
        return result.rowcount

    async def delete_sessions_by_refresh_token(self, refresh_token: str) -> int:
        result = await self._db.execute(
            delete(SessionModel).where(
                SessionModel.refresh_token == refresh_token
            )
        )
        return result.rowcount

    async def delete_sessions_by_tokens(
        self, access_token: str, refresh_token: str
    ) -> int:
        result = await self._db.execute(
            delete(SessionModel).where(
                or_(
                    SessionModel.access_token == access_token,
                    SessionModel.refresh_token == refresh_token
                )
            )
        )
        return result.rowcount

    async def delete_user(self, user_id: str) -> int:
        result = await self._db.execute(
            delete(UserModel).where(UserModel.id == user_id)
        )
        return result.rowcount

    async def commit(self) -> None:
        await self._db.commit()

    async def rollback(self) -> None:
        await self._db.rollback()
