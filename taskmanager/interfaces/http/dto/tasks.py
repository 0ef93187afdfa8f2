from __future__ import annotations

from pydantic import BaseModel, Field, field_validator
from pydantic_core import PydanticCustomError


def _require_title(value: str | None) -> str | None:
    if value is None:
        return value
    if not value.strip():
        raise PydanticCustomError(
            "title_blank",
            "Title must be a non-empty string",
            {},
        )
    return value


class CreateListDTO(BaseModel):
    title: str = Field(max_length=256)

    @field_validator("title")
    @classmethod
    def validate_title(cls, value: str) -> str:
        return _require_title(value)


class UpdateListDTO(BaseModel):
    title: str | None = Field(default=None, max_length=256)

    @field_validator("title")
    @classmethod
    def validate_title(cls, value: str | None) -> str | None:
        return _require_title(value)


class CreateTaskDTO(BaseModel):
    title: str = Field(max_length=256)

    @field_validator("title")
    @classmethod
    def validate_title(cls, value: str) -> str:
        return _require_title(value)


class UpdateTaskDTO(BaseModel):
    title: str | None = Field(default=None, max_length=256)
    completed: bool | None = None

    @field_validator("title")
    @classmethod
    def validate_title(cls, value: str | None) -> str | None:
        return _require_title(value)


class MessageDTO(BaseModel):
    message: str
