"""Authentication schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from src.schemas.validators import require_value, validate_email_address


class UserRegister(BaseModel):
    """User registration request."""

    email: str = Field(..., max_length=255)
    password: str
    name: str = Field(..., max_length=255)

    @field_validator("email")
    @classmethod
    def check_email(cls, v: str) -> str:
        return validate_email_address(v)

    @field_validator("password", "name")
    @classmethod
    def check_present(cls, v: str) -> str:
        return require_value(v)


class UserLogin(BaseModel):
    """User login request."""

    email: str
    password: str

    @field_validator("email", "password")
    @classmethod
    def check_present(cls, v: str) -> str:
        return require_value(v)


class SessionIdentity(BaseModel):
    """Identity carried inside a session token."""

    id: int
    email: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)


class UserResponse(BaseModel):
    """User information response. Never includes the password hash."""

    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)

    id: int
    email: str
    name: str
    created_at: datetime
    updated_at: datetime


class AuthResponse(BaseModel):
    """Authentication response; the token itself travels in the session cookie."""

    user: UserResponse


class MessageResponse(BaseModel):
    """Plain acknowledgement."""

    message: str
