from datetime import datetime, timezone
from typing import List, Optional, Any

from sqlalchemy import (
    Integer,
    String,
    Text,
    DateTime,
    JSON,
    ForeignKey,
    UniqueConstraint
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from database.models.base import Base, generate_object_id, OBJECT_ID_LENGTH


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class MovieModel(Base):
    """Model representing a movie of the catalog.

    Only ``title`` and ``year`` are required. List-valued and nested
    attributes (genres, cast, awards, imdb ratings, ...) are stored as JSON
    documents. A movie is identified for duplicate detection by its title
    and year.
    """
    __tablename__ = "movies"

    id: Mapped[str] = mapped_column(
        String(OBJECT_ID_LENGTH), primary_key=True, default=generate_object_id
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    year: Mapped[int] = mapped_column(Integer, nullable=False)
    plot: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    fullplot: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    genres: Mapped[Optional[List[str]]] = mapped_column(JSON, nullable=True)
    runtime: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    cast: Mapped[Optional[List[str]]] = mapped_column(JSON, nullable=True)
    languages: Mapped[Optional[List[str]]] = mapped_column(JSON, nullable=True)
    released: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    directors: Mapped[Optional[List[str]]] = mapped_column(JSON, nullable=True)
    writers: Mapped[Optional[List[str]]] = mapped_column(JSON, nullable=True)
    rated: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)
    awards: Mapped[Optional[dict[str, Any]]] = mapped_column(
        JSON, nullable=True
    )
    imdb: Mapped[Optional[dict[str, Any]]] = mapped_column(JSON, nullable=True)
    countries: Mapped[Optional[List[str]]] = mapped_column(JSON, nullable=True)
    type: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)
    poster: Mapped[Optional[str]] = mapped_column(String(512), nullable=True)
    num_mflix_comments: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0
    )
    lastupdated: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        onupdate=_utcnow
    )

    comments: Mapped[List["CommentModel"]] = relationship(
        "CommentModel",
        back_populates="movie",
        cascade="all, delete-orphan",
        passive_deletes=True
    )

    __table_args__ = (
        UniqueConstraint("title", "year", name="uq_movie_title_year"),
    )

    def __repr__(self) -> str:
        return f"<MovieModel(id={self.id}, title={self.title}, year={self.year})>"


class CommentModel(Base):
    """Model representing a comment left on a movie."""
    __tablename__ = "comments"

    id: Mapped[str] = mapped_column(
        String(OBJECT_ID_LENGTH), primary_key=True, default=generate_object_id
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    text: Mapped[str] = mapped_column(Text, nullable=False)
    date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow
    )

    movie_id: Mapped[str] = mapped_column(
        ForeignKey("movies.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    movie: Mapped[MovieModel] = relationship(
        MovieModel,
        back_populates="comments"
    )

    def __repr__(self) -> str:
        return f"<CommentModel(id={self.id}, movie_id={self.movie_id})>"


class TheaterModel(Base):
    """Model representing a theater and its location.

    ``theater_id`` is the public sequential number of the theater, allocated
    as one more than the highest existing number. ``location`` holds the
    postal address and the GeoJSON point of the theater.
    """
    __tablename__ = "theaters"

    id: Mapped[str] = mapped_column(
        String(OBJECT_ID_LENGTH), primary_key=True, default=generate_object_id
    )
    theater_id: Mapped[int] = mapped_column(
        "theaterId", Integer, nullable=False, unique=True
    )
    location: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False)

    def __repr__(self) -> str:
        return f"<TheaterModel(id={self.id}, theater_id={self.theater_id})>"
