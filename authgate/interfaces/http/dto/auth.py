from __future__ import annotations

from pydantic import BaseModel, Field


class JoinRequestDTO(BaseModel):
    username: str = Field(min_length=1, max_length=64)
    password: str = Field(min_length=1, max_length=128)


class LoginRequestDTO(BaseModel):
    # Missing fields read as empty strings and fail authentication.
    username: str = ""
    password: str = ""
