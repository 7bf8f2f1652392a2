from pydantic import BaseModel, EmailStr, ConfigDict, field_validator

from database.validators.accounts import validate_password_strength, validate_name

from .exapmles.accounts import (
    user_registration_request_schema_example,
    user_registration_response_schema_example,
    user_login_request_schema_example,
    user_login_response_schema_example,
    message_response_schema_example
)


class UserLoginRequestSchema(BaseModel):
    email: EmailStr
    password: str

    model_config = ConfigDict(
        json_schema_extra={
            "example": user_login_request_schema_example
        }
    )

    @field_validator("email")
    @classmethod
    def validate_email(cls, value: str) -> str:
        return value.lower()

    @field_validator("password")
    @classmethod
    def validate_password_present(cls, value: str) -> str:
        if not value:
            raise ValueError("Password is required.")
        return value


class UserRegistrationRequestSchema(UserLoginRequestSchema):
    name: str

    model_config = ConfigDict(
        json_schema_extra={
            "example": user_registration_request_schema_example
        }
    )

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str) -> str:
        return validate_name(value)

    @field_validator("password")
    @classmethod
    def validate_password(cls, value: str) -> str:
        return validate_password_strength(value)


class MessageResponseSchema(BaseModel):
    status: int
    message: str

    model_config = ConfigDict(
        json_schema_extra={
            "example": message_response_schema_example
        }
    )


class UserRegistrationResponseSchema(MessageResponseSchema):
    model_config = ConfigDict(
        json_schema_extra={
            "example": user_registration_response_schema_example
        }
    )


class UserLoginResponseSchema(MessageResponseSchema):
    model_config = ConfigDict(
        json_schema_extra={
            "example": user_login_response_schema_example
        }
    )
