"""
Shared fixtures: an in-memory SQLite database rebuilt for every test and a
TestClient bound to the application.
"""
import os
import tempfile

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["UPLOAD_DIR"] = tempfile.mkdtemp(prefix="blog-uploads-")

import pytest
from fastapi.testclient import TestClient

from blog_api.database import SessionLocal, create_tables, drop_tables
from blog_api.main import app
from blog_api.models import Category, Post, User, UserRole
from blog_api.utils.auth import create_token_for_user, hash_password

PASSWORD = "secret123"


@pytest.fixture(autouse=True)
def reset_db():
    """Start every test from empty tables."""
    drop_tables()
    create_tables()
    yield


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def make_user(db):
    """Factory creating users directly in the database."""
    counter = {"n": 0}

    def _make_user(name=None, email=None, role=UserRole.USER):
        counter["n"] += 1
        user = User(
            name=name or f"User {counter['n']}",
            email=email or f"user{counter['n']}@example.com",
            hashed_password=hash_password(PASSWORD),
            role=role,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make_user


@pytest.fixture
def user(make_user):
    return make_user(name="Alice", email="alice@example.com")


@pytest.fixture
def other_user(make_user):
    return make_user(name="Bob", email="bob@example.com")


@pytest.fixture
def admin(make_user):
    return make_user(name="Admin", email="admin@example.com", role=UserRole.ADMIN)


def auth_headers(user):
    return {"Authorization": f"Bearer {create_token_for_user(user)}"}


@pytest.fixture
def headers_for():
    return auth_headers


@pytest.fixture
def user_headers(user):
    return auth_headers(user)


@pytest.fixture
def other_headers(other_user):
    return auth_headers(other_user)


@pytest.fixture
def admin_headers(admin):
    return auth_headers(admin)


@pytest.fixture
def make_category(db):
    def _make_category(name="Tech", slug=None, color="#007bff", description=None):
        category = Category(
            name=name,
            slug=slug or name.lower().replace(" ", "-"),
            color=color,
            description=description,
        )
        db.add(category)
        db.commit()
        db.refresh(category)
        return category

    return _make_category


@pytest.fixture
def category(make_category):
    return make_category(name="Tech", color="#ff0000")


@pytest.fixture
def make_post(db, user, category):
    """Factory creating posts directly in the database."""
    counter = {"n": 0}

    def _make_post(title=None, content="Some content", author=None, category_id=None,
                   tags=None, is_published=True, slug=None):
        counter["n"] += 1
        title = title or f"Post {counter['n']}"
        post = Post(
            title=title,
            slug=slug or f"{title.lower().replace(' ', '-')}-{counter['n']}",
            content=content,
            author_id=(author or user).id,
            category_id=category_id if category_id is not None else category.id,
            tags=tags or [],
            is_published=is_published,
        )
        db.add(post)
        db.commit()
        db.refresh(post)
        return post

    return _make_post


@pytest.fixture
def post(make_post):
    return make_post(title="Hello World", content="First post body", tags=["intro"])
