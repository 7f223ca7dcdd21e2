"""
Tests for the admin bootstrap script.
"""
from blog_api.create_admin import create_admin
from blog_api.models import User, UserRole


class TestCreateAdmin:

    def test_creates_admin(self, db):
        admin = create_admin("Root", "Root@Example.com", "secret123")
        assert admin.email == "root@example.com"
        assert admin.role == UserRole.ADMIN

        db.expire_all()
        assert db.query(User).filter(User.role == UserRole.ADMIN).count() == 1

    def test_promotes_existing_user(self, db, user):
        promoted = create_admin("Ignored", "alice@example.com", "whatever")
        assert promoted.id == user.id
        assert promoted.role == UserRole.ADMIN
        assert promoted.name == "Alice"

    def test_idempotent(self, db):
        create_admin("Root", "root@example.com", "secret123")
        create_admin("Root", "root@example.com", "secret123")

        db.expire_all()
        assert db.query(User).count() == 1

    def test_admin_can_log_in(self, client):
        create_admin("Root", "root@example.com", "secret123")
        response = client.post("/api/auth/login", json={
            "email": "root@example.com",
            "password": "secret123",
        })
        assert response.status_code == 200
        assert response.json()["data"]["user"]["role"] == "admin"
