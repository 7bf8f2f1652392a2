from typing import List, Literal, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from .exapmles.theaters import (
    theater_schema_example,
    theater_request_schema_example,
    theater_response_schema_example,
    theater_list_response_schema_example
)


class AddressSchema(BaseModel):
    street1: str = Field(..., min_length=1)
    street2: Optional[str] = None
    city: str = Field(..., min_length=1)
    state: str = Field(..., min_length=1)
    zipcode: str = Field(..., min_length=1)


class GeoSchema(BaseModel):
    type: Literal["Point"] = "Point"
    coordinates: List[float] = Field(..., min_length=2, max_length=2)


class LocationSchema(BaseModel):
    address: AddressSchema
    geo: Optional[GeoSchema] = None


class TheaterRequestSchema(BaseModel):
    location: LocationSchema

    model_config = ConfigDict(
        json_schema_extra={
            "example": theater_request_schema_example
        }
    )


class TheaterSchema(BaseModel):
    id: str = Field(
        ...,
        validation_alias=AliasChoices("id", "_id"),
        serialization_alias="_id"
    )
    theater_id: int = Field(
        ...,
        validation_alias=AliasChoices("theater_id", "theaterId"),
        serialization_alias="theaterId"
    )
    location: LocationSchema

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": theater_schema_example
        }
    )


class TheaterResponseSchema(BaseModel):
    status: int
    message: Optional[str] = None
    data: Optional[TheaterSchema] = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": theater_response_schema_example
        }
    )


class TheaterListResponseSchema(BaseModel):
    status: int
    message: Optional[str] = None
    data: List[TheaterSchema]

    model_config = ConfigDict(
        json_schema_extra={
            "example": theater_list_response_schema_example
        }
    )
