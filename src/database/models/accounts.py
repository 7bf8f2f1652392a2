from datetime import datetime
from typing import Optional

from pydantic import EmailStr
from sqlalchemy import String, DateTime, func, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from database.models.base import Base, generate_object_id, OBJECT_ID_LENGTH
from database.validators.accounts import (
    validate_email,
    validate_password_strength
)
from security.utils import verify_password, hash_password


class UserModel(Base):
    """User model representing registered users in the system.

    Users are created on registration, never modified afterwards and removed
    by the delete-account operation.
    """
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(
        String(OBJECT_ID_LENGTH), primary_key=True, default=generate_object_id
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[EmailStr] = mapped_column(
        String(255), unique=True, nullable=False, index=True
    )
    _hashed_password: Mapped[str] = mapped_column(
        "hashed_password", String(255), nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    session: Mapped[Optional["SessionModel"]] = relationship(
        "SessionModel",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True
    )

    def __repr__(self) -> str:
        return f"<UserModel(id={self.id}, name={self.name}, email={self.email})>"

    @classmethod
    def create(
        cls, name: str, email: EmailStr, raw_password: str
    ) -> "UserModel":
        """Create a new user instance with hashed password.

        Args:
            name (str): Display name used in greetings.
            email (EmailStr): User's email address.
            raw_password (str): Plain text password to be hashed.

        Returns:
            UserModel: New user instance with hashed password.
        """
        user = cls(name=name, email=email)
        user.password = raw_password
        return user

    @property
    def password(self) -> None:
        raise AttributeError(
            "Password is write-only. Use the setter to set the password."
        )

    @password.setter
    def password(self, raw_password: str) -> None:
        validate_password_strength(raw_password)
        self._hashed_password = hash_password(raw_password)

    def verify_password(self, raw_password: str) -> bool:
        """Verify a plain text password against the stored hash.

        Args:
            raw_password (str): Plain text password to verify.

        Returns:
            bool: True if password matches, False otherwise.
        """
        return verify_password(raw_password, self._hashed_password)

    @validates("email")
    def validate_email_field(self, field_name: str, email: str) -> str:
        return validate_email(email)


class SessionModel(Base):
    """Model holding the current token pair of a user.

    There is at most one session per user. The stored access token is
    always the most recently issued one; the refresh token is the lookup
    key when minting a new access token.
    """
    __tablename__ = "sessions"

    id: Mapped[str] = mapped_column(
        String(OBJECT_ID_LENGTH), primary_key=True, default=generate_object_id
    )
    user_id: Mapped[str] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        unique=True
    )
    access_token: Mapped[str] = mapped_column(
        String(1024), nullable=False, index=True
    )
    refresh_token: Mapped[str] = mapped_column(
        String(1024), nullable=False, index=True
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False
    )

    user: Mapped[UserModel] = relationship(
        UserModel,
        back_populates="session"
    )

    def __repr__(self) -> str:
        return f"<SessionModel(id={self.id}, user_id={self.user_id})>"
