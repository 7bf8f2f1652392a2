import pytest
from pydantic import ValidationError

from schemas.movies import (
    CommentCreateRequestSchema,
    CommentUpdateRequestSchema,
    MovieCreateRequestSchema,
    MovieSchema,
    MovieUpdateSchema
)


@pytest.mark.validation
def test_movie_create_requires_title_and_year():
    with pytest.raises(ValidationError) as exc_info:
        MovieCreateRequestSchema()
    missing = {error["loc"][0] for error in exc_info.value.errors()}
    assert missing == {"title", "year"}


@pytest.mark.validation
def test_movie_create_accepts_nested_documents():
    schema = MovieCreateRequestSchema(
        title="The Matrix",
        year=1999,
        genres=["Action", "Sci-Fi"],
        awards={"wins": 42, "nominations": 51, "text": "Won 4 Oscars."},
        imdb={"rating": 8.7, "votes": 1500000, "id": 133093}
    )
    dumped = schema.model_dump()
    assert dumped["awards"]["wins"] == 42
    assert dumped["imdb"]["rating"] == 8.7


@pytest.mark.validation
def test_movie_create_rejects_empty_title():
    with pytest.raises(ValidationError):
        MovieCreateRequestSchema(title="", year=1999)


@pytest.mark.validation
def test_movie_create_rejects_non_integer_year():
    with pytest.raises(ValidationError):
        MovieCreateRequestSchema(title="The Matrix", year="nineteen")


@pytest.mark.validation
def test_movie_update_keeps_only_sent_fields():
    schema = MovieUpdateSchema(runtime=140)
    assert schema.model_dump(exclude_unset=True) == {"runtime": 140}


@pytest.mark.validation
def test_movie_update_rejects_null_title():
    with pytest.raises(ValidationError):
        MovieUpdateSchema(title=None)


@pytest.mark.validation
def test_movie_schema_serializes_underscore_id():
    schema = MovieSchema(id="65f1c0a2b3d4e5f6a7b8c9d0", title="The Matrix", year=1999)
    dumped = schema.model_dump(by_alias=True, exclude_unset=True)
    assert dumped["_id"] == "65f1c0a2b3d4e5f6a7b8c9d0"
    assert "id" not in dumped


@pytest.mark.validation
def test_movie_schema_accepts_underscore_id():
    schema = MovieSchema.model_validate(
        {"_id": "65f1c0a2b3d4e5f6a7b8c9d0", "title": "The Matrix", "year": 1999}
    )
    assert schema.id == "65f1c0a2b3d4e5f6a7b8c9d0"


@pytest.mark.validation
def test_comment_create_requires_valid_email():
    with pytest.raises(ValidationError):
        CommentCreateRequestSchema(name="Neo", email="neo", text="Whoa.")


@pytest.mark.validation
def test_comment_update_requires_a_field():
    with pytest.raises(ValidationError):
        CommentUpdateRequestSchema()


@pytest.mark.validation
def test_comment_update_accepts_single_field():
    schema = CommentUpdateRequestSchema(text="I know kung fu.")
    assert schema.model_dump(exclude_none=True) == {"text": "I know kung fu."}
