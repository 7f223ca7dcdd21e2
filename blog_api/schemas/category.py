"""
Pydantic schemas for category endpoints
"""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

COLOR_PATTERN = r"^#(?:[0-9a-fA-F]{3}){1,2}$"


class CategoryCreate(BaseModel):
    """Schema for creating a category"""
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1, max_length=50, description="Unique category name")
    description: Optional[str] = Field(None, max_length=200)
    color: str = Field("#007bff", pattern=COLOR_PATTERN, description="Display color as hex")


class CategoryUpdate(BaseModel):
    """Schema for updating a category (all fields optional)"""
    model_config = ConfigDict(str_strip_whitespace=True)

    name: Optional[str] = Field(None, min_length=1, max_length=50)
    description: Optional[str] = Field(None, max_length=200)
    color: Optional[str] = Field(None, pattern=COLOR_PATTERN)


class CategorySummary(BaseModel):
    """Category fields embedded in a post"""
    id: int
    name: str
    slug: str
    color: str

    model_config = ConfigDict(from_attributes=True)


class CategoryResponse(CategorySummary):
    description: Optional[str] = None
    created_at: datetime
    updated_at: datetime
