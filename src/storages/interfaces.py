from abc import ABC, abstractmethod
from typing import Optional

from database.models.accounts import UserModel, SessionModel


class CredentialStoreInterface(ABC):
    """Abstract interface for user and session persistence.

    This interface defines the operations the session manager needs:
    lookups by filter, inserts, the session upsert and the deletions
    performed by logout and account removal. Nothing is committed until
    ``commit`` is called.
    """

    @abstractmethod
    async def ensure_collections(self, *names: str) -> None:
        """Fail with CollectionNotFoundError if a collection is missing."""
        pass

    @abstractmethod
    async def get_user_by_email(self, email: str) -> Optional[UserModel]:
        pass

    @abstractmethod
    async def get_user_by_id(self, user_id: str) -> Optional[UserModel]:
        pass

    @abstractmethod
    async def add_user(self, user: UserModel) -> UserModel:
        """Insert a user and flush it so its id is assigned.

        Raises:
            IntegrityError: If a user with the same email already exists.
        """
        pass

    @abstractmethod
    async def add_session(
        self, user_id: str, access_token: str, refresh_token: str
    ) -> SessionModel:
        pass

    @abstractmethod
    async def upsert_session(
        self, user_id: str, access_token: str, refresh_token: str
    ) -> None:
        """Insert the session of a user or replace both of its tokens.

        The operation is a single atomic statement keyed by ``user_id`` so
        concurrent logins leave exactly one row, holding the last pair written.
        """
        pass

    @abstractmethod
    async def get_session_by_refresh_token(
        self, refresh_token: str
    ) -> Optional[SessionModel]:
        pass

    @abstractmethod
    async def update_session_access_token(
        self, session_id: str, access_token: str
    ) -> None:
        pass

    @abstractmethod
    async def delete_session_by_access_token(self, access_token: str) -> int:
        """Delete the session holding the access token.

        Returns:
            int: Number of deleted rows.
        """
        pass

    @abstractmethod
    async def delete_sessions_by_refresh_token(self, refresh_token: str) -> int:
        pass

    @abstractmethod
    async def delete_sessions_by_tokens(
        self, access_token: str, refresh_token: str
    ) -> int:
        """Delete every session holding either token value."""
        pass

    @abstractmethod
    async def delete_user(self, user_id: str) -> int:
        pass

    @abstractmethod
    async def commit(self) -> None:
        pass

    @abstractmethod
    async def rollback(self) -> None:
        pass
