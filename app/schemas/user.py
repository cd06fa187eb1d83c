from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, EmailStr, Field


class RegisterRequest(BaseModel):
    username: str = Field(min_length=3, max_length=30)
    password: str = Field(min_length=6)
    email: Optional[EmailStr] = None
    display_name: Optional[str] = Field(default=None, max_length=100)


class LoginRequest(BaseModel):
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)


class CurrentUser(BaseModel):
    id: int
    username: str
    display_name: Optional[str] = None
    is_admin: bool = False

    model_config = ConfigDict(from_attributes=True)


class UserResponse(CurrentUser):
    email: Optional[str] = None
    created_at: datetime


class TokenResponse(BaseModel):
    message: str
    token: str
    token_type: str = "bearer"
    user: CurrentUser


class VerifyResponse(BaseModel):
    valid: bool
    user: CurrentUser
