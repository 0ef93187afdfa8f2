from __future__ import annotations

from pydantic import BaseModel, EmailStr, Field, field_validator
from pydantic_core import PydanticCustomError


class _CredentialsDTO(BaseModel):
    email: EmailStr
    password: str = Field(min_length=8, max_length=128)

    @field_validator("email", mode="before")
    @classmethod
    def strip_email(cls, value: object) -> object:
        return value.strip() if isinstance(value, str) else value

    @field_validator("email", mode="after")
    @classmethod
    def normalize_email(cls, value: str) -> str:
        # Stored emails are unique identities; keep them plain ASCII
        if not value.isascii():
            raise PydanticCustomError("email_invalid", "Email must be a valid address", {})
        return value.lower()


class SignupRequestDTO(_CredentialsDTO):
    pass


class LoginRequestDTO(_CredentialsDTO):
    pass


class UserProfileDTO(BaseModel):
    id: int
    email: str


class AccessTokenDTO(BaseModel):
    accessToken: str


class LogoutDTO(BaseModel):
    ok: bool = True
