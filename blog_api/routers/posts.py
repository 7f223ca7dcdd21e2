# routers/posts.py
import logging
import math
from typing import Annotated, Optional
from fastapi import APIRouter, Depends, File, HTTPException, Path, Query, UploadFile, status
from sqlalchemy import or_
from sqlalchemy.orm import Session, selectinload
from blog_api.config import DEFAULT_PAGE_SIZE, MAX_ID, MAX_PAGE, MAX_PAGE_SIZE, SEARCH_RESULT_LIMIT
from blog_api.database import get_db
from blog_api.models import Category, Comment, Post, PostTag
from blog_api.schemas.common import EmptyEnvelope, Envelope, ListEnvelope, PaginatedEnvelope
from blog_api.schemas.post import (
    PostCreate, PostUpdate, PostResponse, CommentCreate, UploadResponse
)
from blog_api.utils.auth import CurrentUser, ensure_owner_or_admin
from blog_api.utils.text import escape_like, slugify, unique_slug
from blog_api.utils.uploads import save_image

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/posts", tags=["posts"])

PostId = Annotated[int, Path(ge=1, le=MAX_ID, description="Post ID")]

# Columns that cannot be cleared through an update
NON_NULLABLE_FIELDS = ("title", "content", "tags", "is_published", "featured_image")


def with_relations(query):
    """Eager-load author, category and commenters for serialization"""
    return query.options(
        selectinload(Post.author),
        selectinload(Post.category),
        selectinload(Post.tag_rows),
        selectinload(Post.comments).selectinload(Comment.user),
    )


def newest_first(query):
    return query.order_by(Post.created_at.desc(), Post.id.desc())


def get_post_or_404(db: Session, post_id: int) -> Post:
    post = db.query(Post).filter(Post.id == post_id).first()
    if not post:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Post not found"
        )
    return post


def require_category(db: Session, category_id: int) -> Category:
    category = db.query(Category).filter(Category.id == category_id).first()
    if not category:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Category not found"
        )
    return category


def generate_post_slug(db: Session, title: str) -> str:
    return unique_slug(
        slugify(title),
        lambda candidate: db.query(Post.id).filter(Post.slug == candidate).first() is not None,
        fallback="post",
    )


def serialize(post: Post) -> PostResponse:
    return PostResponse.model_validate(post)


@router.get("/", response_model=PaginatedEnvelope[PostResponse])
async def get_posts(
    db: Session = Depends(get_db),
    page: int = Query(1, ge=1, le=MAX_PAGE, description="Page number, starting at 1"),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE, description="Posts per page"),
    category: Optional[int] = Query(None, ge=1, le=MAX_ID, description="Filter by category ID"),
    author: Optional[int] = Query(None, ge=1, le=MAX_ID, description="Filter by author ID")
):
    """
    Get published posts, newest first, with pagination and filtering
    """
    query = db.query(Post).filter(Post.is_published.is_(True))

    if category is not None:
        query = query.filter(Post.category_id == category)

    if author is not None:
        query = query.filter(Post.author_id == author)

    total = query.count()
    skip = (page - 1) * limit
    posts = newest_first(with_relations(query)).offset(skip).limit(limit).all()

    return {
        "success": True,
        "count": len(posts),
        "total": total,
        "page": page,
        "pages": math.ceil(total / limit),
        "data": [serialize(post) for post in posts]
    }


@router.get("/search", response_model=ListEnvelope[PostResponse])
async def search_posts(
    db: Session = Depends(get_db),
    q: Optional[str] = Query(None, description="Text to look for in title, content or tags")
):
    """Case-insensitive search over published posts"""
    if not q or not q.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Search query is required"
        )

    pattern = f"%{escape_like(q.strip())}%"
    query = db.query(Post).filter(
        Post.is_published.is_(True),
        or_(
            Post.title.ilike(pattern, escape="\\"),
            Post.content.ilike(pattern, escape="\\"),
            Post.tag_rows.any(PostTag.name.ilike(pattern, escape="\\")),
        )
    )
    posts = newest_first(with_relations(query)).limit(SEARCH_RESULT_LIMIT).all()

    return {
        "success": True,
        "count": len(posts),
        "data": [serialize(post) for post in posts]
    }


@router.post("/upload", response_model=Envelope[UploadResponse])
async def upload_image(
    current_user: CurrentUser,
    image: Optional[UploadFile] = File(None, description="Featured image file")
):
    """Upload a featured image for a post"""
    if image is None or not image.filename:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Please upload an image file"
        )

    filename = await save_image(image)
    return {
        "success": True,
        "data": UploadResponse(filename=filename, path=f"/uploads/{filename}")
    }


@router.get("/{post_ref}", response_model=Envelope[PostResponse])
async def get_post(post_ref: str, db: Session = Depends(get_db)):
    """
    Get a single post by numeric ID or by slug, counting the view
    """
    query = with_relations(db.query(Post))
    if post_ref.isascii() and post_ref.isdigit():
        post_id = int(post_ref)
        post = query.filter(Post.id == post_id).first() if post_id <= MAX_ID else None
    else:
        post = query.filter(Post.slug == post_ref).first()

    if not post:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Post not found"
        )

    # Increment in the database so concurrent readers never lose a view
    db.query(Post).filter(Post.id == post.id).update(
        {Post.view_count: Post.view_count + 1}, synchronize_session=False
    )
    db.commit()
    db.refresh(post)

    return {"success": True, "data": serialize(post)}


@router.post("/", response_model=Envelope[PostResponse], status_code=status.HTTP_201_CREATED)
async def create_post(
    post_data: PostCreate,
    current_user: CurrentUser,
    db: Session = Depends(get_db)
):
    """Create a new post authored by the current user"""
    require_category(db, post_data.category)

    db_post = Post(
        title=post_data.title,
        slug=generate_post_slug(db, post_data.title),
        content=post_data.content,
        excerpt=post_data.excerpt,
        category_id=post_data.category,
        tags=post_data.tags,
        is_published=post_data.is_published,
        author_id=current_user.id
    )
    if post_data.featured_image:
        db_post.featured_image = post_data.featured_image

    db.add(db_post)
    db.commit()
    db.refresh(db_post)

    logger.info(f"User {current_user.id} created post {db_post.id} ({db_post.slug})")
    return {"success": True, "data": serialize(db_post)}


@router.put("/{post_id}", response_model=Envelope[PostResponse])
async def update_post(
    post_id: PostId,
    post_data: PostUpdate,
    current_user: CurrentUser,
    db: Session = Depends(get_db)
):
    """Update a post; only its author or an admin may do so"""
    post = get_post_or_404(db, post_id)
    ensure_owner_or_admin(current_user, post.author_id, "update this post")

    # Get update data
    update_data = post_data.model_dump(exclude_unset=True)
    for field in NON_NULLABLE_FIELDS:
        if field in update_data and update_data[field] is None:
            del update_data[field]

    if "category" in update_data:
        category_id = update_data.pop("category")
        if category_id is not None:
            require_category(db, category_id)
            post.category_id = category_id

    # Apply remaining updates
    for field, value in update_data.items():
        setattr(post, field, value)

    db.commit()
    db.refresh(post)

    logger.info(f"User {current_user.id} updated post {post.id}")
    return {"success": True, "data": serialize(post)}


@router.delete("/{post_id}", response_model=EmptyEnvelope)
async def delete_post(
    post_id: PostId,
    current_user: CurrentUser,
    db: Session = Depends(get_db)
):
    """Delete a post; only its author or an admin may do so"""
    post = get_post_or_404(db, post_id)
    ensure_owner_or_admin(current_user, post.author_id, "delete this post")

    db.delete(post)
    db.commit()

    logger.info(f"User {current_user.id} deleted post {post_id}")
    return {"success": True, "data": {}}


@router.post("/{post_id}/comments", response_model=Envelope[PostResponse], status_code=status.HTTP_201_CREATED)
async def add_comment(
    post_id: PostId,
    comment_data: CommentCreate,
    current_user: CurrentUser,
    db: Session = Depends(get_db)
):
    """Append a comment by the current user to a post"""
    post = get_post_or_404(db, post_id)

    db.add(Comment(post_id=post.id, user_id=current_user.id, content=comment_data.content))
    db.commit()
    db.refresh(post)

    logger.info(f"User {current_user.id} commented on post {post.id}")
    return {"success": True, "data": serialize(post)}
