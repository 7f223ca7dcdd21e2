"""Create an admin account, or promote an existing user to admin"""
import logging
import os

from blog_api.database import SessionLocal, create_tables
from blog_api.models import User, UserRole
from blog_api.utils.auth import hash_password

logger = logging.getLogger(__name__)


def create_admin(name: str, email: str, password: str) -> User:
    db = SessionLocal()
    try:
        existing = db.query(User).filter(User.email == email.lower()).first()
        if existing:
            if existing.role != UserRole.ADMIN:
                existing.role = UserRole.ADMIN
                db.commit()
                db.refresh(existing)
                logger.info(f"Promoted {existing.email} to admin")
            else:
                logger.info(f"Admin {existing.email} already exists")
            return existing

        admin = User(
            name=name,
            email=email.lower(),
            hashed_password=hash_password(password),
            role=UserRole.ADMIN
        )
        db.add(admin)
        db.commit()
        db.refresh(admin)
        logger.info(f"Admin created: {admin.email}")
        return admin
    finally:
        db.close()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    password = os.getenv("ADMIN_PASSWORD")
    if not password:
        raise SystemExit("ADMIN_PASSWORD environment variable is not set")
    create_tables()
    create_admin(
        name=os.getenv("ADMIN_NAME", "Admin"),
        email=os.getenv("ADMIN_EMAIL", "admin@example.com"),
        password=password
    )
