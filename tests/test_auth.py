"""Tests for sessions, password hashing and auth dependencies"""
from datetime import datetime, timedelta, timezone

import pytest
from fastapi import HTTPException

from storefront.auth import (
    create_web_session,
    hash_password,
    revoke_user_sessions,
    revoke_web_session,
    verify_admin,
    verify_password,
    verify_session,
    verify_web_session_token,
)
from storefront.auth import session as session_module


class TestPasswords:
    def test_hash_and_verify(self):
        encoded = hash_password("s3cret!")

        assert encoded.startswith("$2b$")
        assert verify_password("s3cret!", encoded)
        assert not verify_password("wrong", encoded)

    def test_salted(self):
        assert hash_password("same") != hash_password("same")

    @pytest.mark.parametrize("encoded", [None, "", "plain", "pbkdf2_sha256$1$salt$abc"])
    def test_malformed_hash(self, encoded):
        assert not verify_password("anything", encoded)


class TestSessions:
    def test_create_and_verify(self):
        token = create_web_session("user-123", "test@example.com", "user")

        session = verify_web_session_token(token)

        assert session["user_id"] == "user-123"
        assert session["role"] == "user"

    def test_unknown_token(self):
        assert verify_web_session_token("nope") is None

    def test_expired_session_removed(self):
        token = create_web_session("user-123", "test@example.com", "user")
        past = datetime.now(timezone.utc) - timedelta(seconds=1)
        session_module._web_sessions[token]["expires_at"] = past.isoformat()

        assert verify_web_session_token(token) is None
        assert token not in session_module._web_sessions

    def test_revoke(self):
        token = create_web_session("user-123", "test@example.com", "user")
        assert revoke_web_session(token) is True
        assert revoke_web_session(token) is False

    def test_revoke_user_sessions(self):
        create_web_session("user-123", "a@example.com", "user")
        create_web_session("user-123", "a@example.com", "user")
        other = create_web_session("user-456", "b@example.com", "user")

        assert revoke_user_sessions("user-123") == 2
        assert verify_web_session_token(other) is not None


class TestDependencies:
    @pytest.mark.asyncio
    async def test_verify_session(self, user_token):
        user = await verify_session(authorization=f"Bearer {user_token}")

        assert user.id == "user-123"
        assert user.token == user_token
        assert not user.is_admin

    @pytest.mark.asyncio
    @pytest.mark.parametrize("header", [None, "", "Bearer", "Basic abc", "tma xyz"])
    async def test_missing_or_foreign_scheme(self, header):
        with pytest.raises(HTTPException) as exc:
            await verify_session(authorization=header)
        assert exc.value.status_code == 401

    @pytest.mark.asyncio
    async def test_invalid_token(self):
        with pytest.raises(HTTPException) as exc:
            await verify_session(authorization="Bearer forged")
        assert exc.value.detail == "Invalid session token"

    @pytest.mark.asyncio
    async def test_verify_admin(self, admin_token, user_token):
        admin = await verify_session(authorization=f"Bearer {admin_token}")
        assert (await verify_admin(admin)).id == "admin-1"

        user = await verify_session(authorization=f"Bearer {user_token}")
        with pytest.raises(HTTPException) as exc:
            await verify_admin(user)
        assert exc.value.status_code == 403
