from datetime import datetime
from typing import List, Optional

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    EmailStr,
    Field,
    field_validator,
    model_validator
)

from .exapmles.movies import (
    movie_schema_example,
    movie_create_request_schema_example,
    movie_update_request_schema_example,
    movie_response_schema_example,
    movie_list_response_schema_example,
    comment_schema_example,
    comment_create_request_schema_example,
    comment_response_schema_example,
    comment_list_response_schema_example
)


class AwardsSchema(BaseModel):
    wins: Optional[int] = None
    nominations: Optional[int] = None
    text: Optional[str] = None


class ImdbSchema(BaseModel):
    rating: Optional[float] = None
    votes: Optional[int] = None
    id: Optional[int] = None


class MovieFieldsSchema(BaseModel):
    """Optional descriptive attributes shared by create and update requests."""
    plot: Optional[str] = None
    fullplot: Optional[str] = None
    genres: Optional[List[str]] = None
    runtime: Optional[int] = Field(None, ge=0)
    cast: Optional[List[str]] = None
    languages: Optional[List[str]] = None
    released: Optional[datetime] = None
    directors: Optional[List[str]] = None
    writers: Optional[List[str]] = None
    rated: Optional[str] = None
    awards: Optional[AwardsSchema] = None
    imdb: Optional[ImdbSchema] = None
    countries: Optional[List[str]] = None
    type: Optional[str] = None
    poster: Optional[str] = None


class MovieCreateRequestSchema(MovieFieldsSchema):
    title: str = Field(..., min_length=1, max_length=255)
    year: int

    model_config = ConfigDict(
        json_schema_extra={
            "example": movie_create_request_schema_example
        }
    )


class MovieUpdateSchema(MovieFieldsSchema):
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    year: Optional[int] = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": movie_update_request_schema_example
        }
    )

    @field_validator("title", "year")
    @classmethod
    def reject_null(cls, value):
        if value is None:
            raise ValueError("Value must not be null.")
        return value


class MovieSchema(MovieFieldsSchema):
    id: str = Field(
        ...,
        validation_alias=AliasChoices("id", "_id"),
        serialization_alias="_id"
    )
    title: str
    year: int
    num_mflix_comments: int = 0
    lastupdated: Optional[datetime] = None

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": movie_schema_example
        }
    )


class MovieResponseSchema(BaseModel):
    status: int
    message: Optional[str] = None
    data: Optional[MovieSchema] = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": movie_response_schema_example
        }
    )


class MovieListResponseSchema(BaseModel):
    status: int
    message: Optional[str] = None
    data: List[MovieSchema]

    model_config = ConfigDict(
        json_schema_extra={
            "example": movie_list_response_schema_example
        }
    )


class CommentCreateRequestSchema(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    text: str = Field(..., min_length=1)

    model_config = ConfigDict(
        json_schema_extra={
            "example": comment_create_request_schema_example
        }
    )


class CommentUpdateRequestSchema(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    email: Optional[EmailStr] = None
    text: Optional[str] = Field(None, min_length=1)

    @model_validator(mode="after")
    def check_not_empty(self) -> "CommentUpdateRequestSchema":
        if not self.model_dump(exclude_none=True):
            raise ValueError("At least one of name, email or text is required.")
        return self


class CommentSchema(BaseModel):
    id: str = Field(
        ...,
        validation_alias=AliasChoices("id", "_id"),
        serialization_alias="_id"
    )
    name: str
    email: str
    text: str
    movie_id: str
    date: datetime

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": comment_schema_example
        }
    )


class CommentResponseSchema(BaseModel):
    status: int
    message: Optional[str] = None
    data: Optional[CommentSchema] = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": comment_response_schema_example
        }
    )


class CommentListResponseSchema(BaseModel):
    status: int
    message: Optional[str] = None
    data: List[CommentSchema]

    model_config = ConfigDict(
        json_schema_extra={
            "example": comment_list_response_schema_example
        }
    )
