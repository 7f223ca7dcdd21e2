# schemas/post.py
from typing import Annotated, Optional, List
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field, StringConstraints, field_validator

from blog_api.schemas.auth import AuthorSummary, CommenterSummary
from blog_api.schemas.category import CategorySummary
from blog_api.schemas.common import RecordId
from blog_api.utils.text import clean_tags

TagName = Annotated[str, StringConstraints(strip_whitespace=True, max_length=50)]


def _split_tags(v):
    # Accept "react, python" as well as ["react", "python"]
    if isinstance(v, str):
        v = v.split(",")
    return v


class PostBase(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(..., min_length=1, max_length=100, description="Post title")
    content: str = Field(..., min_length=1, description="Post content")


class PostCreate(PostBase):
    excerpt: Optional[str] = Field(None, max_length=200)
    category: RecordId = Field(..., description="Category ID")
    tags: List[TagName] = Field(default_factory=list)
    is_published: bool = False
    featured_image: Optional[str] = None

    @field_validator("tags", mode="before")
    @classmethod
    def split_tags(cls, v):
        return _split_tags(v)

    @field_validator("tags")
    @classmethod
    def normalize_tags(cls, v):
        return clean_tags(v)


class PostUpdate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    title: Optional[str] = Field(None, min_length=1, max_length=100)
    content: Optional[str] = Field(None, min_length=1)
    excerpt: Optional[str] = Field(None, max_length=200)
    category: Optional[RecordId] = None
    tags: Optional[List[TagName]] = None
    is_published: Optional[bool] = None
    featured_image: Optional[str] = None

    @field_validator("tags", mode="before")
    @classmethod
    def split_tags(cls, v):
        return _split_tags(v)

    @field_validator("tags")
    @classmethod
    def normalize_tags(cls, v):
        return clean_tags(v) if v is not None else v


class CommentCreate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    content: str = Field(..., min_length=1, max_length=1000, description="Comment text")


class CommentResponse(BaseModel):
    id: int
    content: str
    user: CommenterSummary
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class PostResponse(PostBase):
    id: int
    slug: str
    excerpt: Optional[str] = None
    featured_image: str
    tags: List[str]
    is_published: bool
    view_count: int
    author: AuthorSummary
    category: Optional[CategorySummary] = None
    comments: List[CommentResponse] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @field_validator("tags", mode="before")
    @classmethod
    def tags_as_list(cls, v):
        # Association proxies are iterable but not lists
        return list(v) if v is not None else []


class UploadResponse(BaseModel):
    filename: str
    path: str
