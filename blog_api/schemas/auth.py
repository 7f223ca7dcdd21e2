# schemas/auth.py
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, EmailStr, Field
from blog_api.models import UserRole


class UserCreate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1, max_length=50, description="Display name")
    email: EmailStr
    password: str = Field(..., min_length=6, description="Plain text password, stored hashed")


class UserLogin(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class UserResponse(BaseModel):
    id: int
    name: str
    email: str
    role: UserRole
    avatar: str
    bio: Optional[str] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class AuthorSummary(BaseModel):
    """User fields embedded in a post"""
    id: int
    name: str
    email: str
    avatar: str
    bio: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class CommenterSummary(BaseModel):
    """User fields embedded in a comment"""
    id: int
    name: str
    avatar: str

    model_config = ConfigDict(from_attributes=True)


class AuthResponse(BaseModel):
    token: str
    user: UserResponse
