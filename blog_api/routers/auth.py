# routers/auth.py
import logging
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from blog_api.database import get_db
from blog_api.models import User
from blog_api.schemas.auth import UserCreate, UserLogin, UserResponse, AuthResponse
from blog_api.schemas.common import Envelope, ListEnvelope
from blog_api.utils.auth import (
    create_user, authenticate_user, create_token_for_user,
    CurrentUser, CurrentAdmin
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"])


def _auth_payload(user: User) -> dict:
    return AuthResponse(
        token=create_token_for_user(user),
        user=UserResponse.model_validate(user)
    ).model_dump()


# Router endpoints
@router.post("/register", response_model=Envelope[AuthResponse], status_code=status.HTTP_201_CREATED)
async def register(user_data: UserCreate, db: Session = Depends(get_db)):
    user = create_user(db, user_data)
    return {"success": True, "data": _auth_payload(user)}


@router.post("/login", response_model=Envelope[AuthResponse])
async def login(credentials: UserLogin, db: Session = Depends(get_db)):
    user = authenticate_user(db, credentials.email, credentials.password)
    if not user:
        logger.info(f"Failed login for {credentials.email}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return {"success": True, "data": _auth_payload(user)}


@router.get("/me", response_model=Envelope[UserResponse])
async def get_current_user_info(current_user: CurrentUser):
    return {"success": True, "data": UserResponse.model_validate(current_user)}


@router.get("/users", response_model=ListEnvelope[UserResponse])
async def get_all_users(
    current_admin: CurrentAdmin,
    db: Session = Depends(get_db)
):
    """Admin only: list every registered user"""
    users = db.query(User).order_by(User.id.asc()).all()
    return {
        "success": True,
        "count": len(users),
        "data": [UserResponse.model_validate(user) for user in users]
    }
