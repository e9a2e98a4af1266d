from pydantic import BaseModel, EmailStr, ConfigDict, Field, field_validator
from typing import Optional
from datetime import datetime

from resume_scanner.models.user import UserRole


class UserBase(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    role: UserRole

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, v):
        # Runs before the length check so whitespace-only names are rejected
        return v.strip() if isinstance(v, str) else v


class UserCreate(UserBase):
    email: EmailStr
    password: str = Field(min_length=6, max_length=72)


class UserResponse(UserBase):
    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    created_at: datetime


class RegisterResponse(BaseModel):
    id: str
    user: UserResponse


class LoginRequest(BaseModel):
    email: EmailStr
    password: str
    # Optional portal hint; a mismatch with the stored role fails the login
    role: Optional[UserRole] = None


class Token(BaseModel):
    token: str
    token_type: str = "bearer"
    expires_at: datetime
    user: UserResponse


class TokenRequest(BaseModel):
    token: Optional[str] = None


class VerifyResponse(BaseModel):
    valid: bool = True
    user: UserResponse
