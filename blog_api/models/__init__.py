# Import all models to ensure they're registered with SQLAlchemy
from .user import User, UserRole
from .category import Category
from .post import Post, Comment, PostTag

# Make models available for import
__all__ = [
    "User",
    "UserRole",
    "Category",
    "Post",
    "Comment",
    "PostTag",
]
