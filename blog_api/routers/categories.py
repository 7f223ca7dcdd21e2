"""
Category router: public reads, admin-only writes
"""
import logging
from typing import Annotated
from fastapi import APIRouter, Depends, HTTPException, Path, status
from sqlalchemy.orm import Session
from blog_api.config import MAX_ID
from blog_api.database import get_db
from blog_api.models import Category, Post
from blog_api.schemas.category import CategoryCreate, CategoryUpdate, CategoryResponse
from blog_api.schemas.common import EmptyEnvelope, Envelope, ListEnvelope
from blog_api.utils.auth import CurrentAdmin
from blog_api.utils.text import slugify, unique_slug

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/categories", tags=["categories"])

CategoryId = Annotated[int, Path(ge=1, le=MAX_ID, description="Category ID")]


def get_category_or_404(db: Session, category_id: int) -> Category:
    category = db.query(Category).filter(Category.id == category_id).first()
    if not category:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Category not found"
        )
    return category


def _name_taken(db: Session, name: str, exclude_id: int = None) -> bool:
    query = db.query(Category).filter(Category.name == name)
    if exclude_id is not None:
        query = query.filter(Category.id != exclude_id)
    return query.first() is not None


def _category_slug(db: Session, name: str, exclude_id: int = None) -> str:
    def exists(candidate):
        query = db.query(Category).filter(Category.slug == candidate)
        if exclude_id is not None:
            query = query.filter(Category.id != exclude_id)
        return query.first() is not None

    return unique_slug(slugify(name, max_length=50), exists, fallback="category")


@router.get("/", response_model=ListEnvelope[CategoryResponse])
async def get_categories(db: Session = Depends(get_db)):
    """Get all categories sorted by name"""
    categories = db.query(Category).order_by(Category.name.asc()).all()
    return {
        "success": True,
        "count": len(categories),
        "data": [CategoryResponse.model_validate(c) for c in categories]
    }


@router.get("/{category_id}", response_model=Envelope[CategoryResponse])
async def get_category(category_id: CategoryId, db: Session = Depends(get_db)):
    category = get_category_or_404(db, category_id)
    return {"success": True, "data": CategoryResponse.model_validate(category)}


@router.post("/", response_model=Envelope[CategoryResponse], status_code=status.HTTP_201_CREATED)
async def create_category(
    category_data: CategoryCreate,
    current_admin: CurrentAdmin,
    db: Session = Depends(get_db)
):
    """Admin only: create a category"""
    if _name_taken(db, category_data.name):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Category already exists"
        )

    category = Category(
        name=category_data.name,
        slug=_category_slug(db, category_data.name),
        description=category_data.description,
        color=category_data.color
    )
    db.add(category)
    db.commit()
    db.refresh(category)

    logger.info(f"Admin {current_admin.id} created category {category.id} ({category.name})")
    return {"success": True, "data": CategoryResponse.model_validate(category)}


@router.put("/{category_id}", response_model=Envelope[CategoryResponse])
async def update_category(
    category_id: CategoryId,
    category_data: CategoryUpdate,
    current_admin: CurrentAdmin,
    db: Session = Depends(get_db)
):
    """Admin only: update a category"""
    category = get_category_or_404(db, category_id)

    # Update only provided fields
    update_data = category_data.model_dump(exclude_unset=True)
    if update_data.get("name") is None:
        update_data.pop("name", None)
    if update_data.get("color") is None:
        update_data.pop("color", None)

    if "name" in update_data and update_data["name"] != category.name:
        if _name_taken(db, update_data["name"], exclude_id=category.id):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Category already exists"
            )
        category.slug = _category_slug(db, update_data["name"], exclude_id=category.id)

    for field, value in update_data.items():
        setattr(category, field, value)

    db.commit()
    db.refresh(category)

    logger.info(f"Admin {current_admin.id} updated category {category.id}")
    return {"success": True, "data": CategoryResponse.model_validate(category)}


@router.delete("/{category_id}", response_model=EmptyEnvelope)
async def delete_category(
    category_id: CategoryId,
    current_admin: CurrentAdmin,
    db: Session = Depends(get_db)
):
    """Admin only: delete a category; its posts are left uncategorized"""
    category = get_category_or_404(db, category_id)

    db.query(Post).filter(Post.category_id == category.id).update(
        {Post.category_id: None}, synchronize_session=False
    )
    db.delete(category)
    db.commit()

    logger.info(f"Admin {current_admin.id} deleted category {category_id}")
    return {"success": True, "data": {}}
