"""Pydantic schemas for authentication payloads."""

from __future__ import annotations

from pydantic import BaseModel, EmailStr, Field

from tradelog.domain import Role, UserAccount
from tradelog.services.auth import MIN_PASSWORD_LENGTH


class RegisterRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=MIN_PASSWORD_LENGTH, max_length=128)


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1, max_length=128)


class PromoteRequest(BaseModel):
    secret: str = Field(..., min_length=1)


class TokenResponse(BaseModel):
    access_token: str = Field(..., description="Short-lived bearer token")
    token_type: str = Field(default="bearer")


class MessageResponse(BaseModel):
    message: str


class UserOut(BaseModel):
    id: int
    email: str
    role: Role

    @classmethod
    def from_account(cls, user: UserAccount) -> "UserOut":
        return cls(id=user.id, email=user.email, role=user.role)


__all__ = [
    "LoginRequest",
    "MessageResponse",
    "PromoteRequest",
    "RegisterRequest",
    "TokenResponse",
    "UserOut",
]
