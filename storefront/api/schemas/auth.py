from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class SignupRequest(BaseModel):
    email: str | None = Field(default=None, max_length=255)
    password: str | None = Field(default=None, max_length=256)
    name: str | None = Field(default=None, max_length=120)


class SignupResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_id: int = Field(..., alias="userId")
    message: str = "User created successfully"


class LoginRequest(BaseModel):
    email: str | None = Field(default=None, max_length=255)
    password: str | None = Field(default=None, max_length=256)


class LoginResponse(BaseModel):
    token: str
