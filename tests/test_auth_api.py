"""Tests for signup, login and the current-user endpoints."""

import uuid

from bloghub.core.security import create_access_token, decode_token


class TestSignup:
    def test_signup_returns_user_and_token(self, client, test_settings):
        """New accounts get the user role and a token for their id"""
        response = client.post(
            "/api/auth/signup",
            json={"name": "  Carol  ", "email": "Carol@Blog.IO", "password": "hunter22"},
        )
        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["message"] == "User registered successfully"
        user = body["data"]["user"]
        assert user["name"] == "Carol"
        assert user["email"] == "carol@blog.io"
        assert user["role"] == "user"
        assert "createdAt" in user
        assert "password" not in user and "passwordHash" not in user
        assert decode_token(body["data"]["token"], test_settings)["sub"] == user["id"]

    def test_duplicate_email_is_rejected(self, client, alice):
        response = client.post(
            "/api/auth/signup",
            json={"name": "Alice Again", "email": "ALICE@blog.io", "password": "secret123"},
        )
        assert response.status_code == 400
        assert response.json() == {"success": False, "message": "email already exists"}

    def test_invalid_fields_list_every_problem(self, client):
        response = client.post(
            "/api/auth/signup",
            json={"name": "A", "email": "not-an-email", "password": "123"},
        )
        assert response.status_code == 400
        body = response.json()
        assert body["message"] == "Validation Error"
        fields = {error.split(":")[0] for error in body["errors"]}
        assert fields == {"name", "email", "password"}


class TestLogin:
    def test_login_with_correct_password(self, client, alice):
        response = client.post(
            "/api/auth/login",
            json={"email": "alice@blog.io", "password": "secret123"},
        )
        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Login successful"
        assert body["data"]["user"]["id"] == alice["user"]["id"]
        assert body["data"]["token"]

    def test_wrong_password(self, client, alice):
        response = client.post("/api/auth/login", json={"email": "alice@blog.io", "password": "wrong-one"})
        assert response.status_code == 401
        assert response.json()["message"] == "Invalid credentials"

    def test_unknown_email_looks_the_same(self, client):
        response = client.post("/api/auth/login", json={"email": "ghost@blog.io", "password": "whatever"})
        assert response.status_code == 401
        assert response.json()["message"] == "Invalid credentials"


class TestCurrentUser:
    """Bearer token handling on /me"""

    def test_me(self, client, alice):
        response = client.get("/api/auth/me", headers=alice["headers"])
        assert response.status_code == 200
        assert response.json()["data"]["user"]["email"] == "alice@blog.io"

    def test_missing_token(self, client):
        response = client.get("/api/auth/me")
        assert response.status_code == 401
        assert response.json() == {"success": False, "message": "Not authorized, no token"}

    def test_malformed_token(self, client):
        response = client.get("/api/auth/me", headers={"Authorization": "Bearer not.a.jwt"})
        assert response.status_code == 401
        assert response.json()["message"] == "Invalid token"

    def test_token_signed_with_other_secret(self, client, alice, test_settings):
        other = test_settings.model_copy(update={"JWT_SECRET_KEY": "another-secret"})
        token = create_access_token(alice["user"]["id"], other)
        response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 401
        assert response.json()["message"] == "Invalid token"

    def test_expired_token(self, client, alice, test_settings):
        expired = test_settings.model_copy(update={"ACCESS_TOKEN_EXPIRE_MINUTES": -5})
        token = create_access_token(alice["user"]["id"], expired)
        response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 401
        assert response.json()["message"] == "Token expired"

    def test_token_for_unknown_user(self, client, test_settings):
        token = create_access_token(uuid.uuid4(), test_settings)
        response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 401
        assert response.json()["message"] == "User not found"

    def test_update_profile(self, client, alice):
        response = client.put("/api/auth/me", json={"name": "Alice Editor"}, headers=alice["headers"])
        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Profile updated successfully"
        assert body["data"]["user"]["name"] == "Alice Editor"
        assert body["data"]["user"]["email"] == "alice@blog.io"

    def test_update_profile_to_taken_email(self, client, alice, bob):
        response = client.put("/api/auth/me", json={"email": "bob@blog.io"}, headers=alice["headers"])
        assert response.status_code == 400
        assert response.json()["message"] == "email already exists"
